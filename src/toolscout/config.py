"""Configuration module for toolscout using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ToolScoutSettings(BaseSettings):
    """Main configuration settings for toolscout.

    All settings can be overridden via environment variables with the
    TOOLSCOUT_ prefix. For example, TOOLSCOUT_PORT will override the port
    setting. List settings take JSON arrays (TOOLSCOUT_TOOL_MODULES='["a.b"]').
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Discovery
    tool_modules: list[str] = Field(default_factory=list)
    tool_packages: list[str] = Field(default_factory=list)

    # Abort discovery when a tool-owning class cannot be resolved
    fail_on_resolution_error: bool = False

    # Memoize the discovered tool list between requests
    cache_tools: bool = True

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="TOOLSCOUT_")

    @property
    def scans_explicit_modules(self) -> bool:
        """Whether discovery is restricted to configured modules."""
        return bool(self.tool_modules or self.tool_packages)
