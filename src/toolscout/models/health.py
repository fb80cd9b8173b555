"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of toolscout.
        tools_discovered: Number of cached tools, None when the tool list is
            not cached or not yet discovered.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of toolscout")
    tools_discovered: int | None = Field(
        default=None,
        description="Number of tools in the cache, if cached",
    )
