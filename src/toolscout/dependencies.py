"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
routers to inject settings and the tool provider built at startup.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from toolscout.config import ToolScoutSettings
from toolscout.tools import ServiceProvider, ToolProvider


@lru_cache
def get_settings() -> ToolScoutSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the TOOLSCOUT_ prefix.

    Returns:
        ToolScoutSettings: The application configuration settings.
    """
    return ToolScoutSettings()


def get_services(request: Request) -> ServiceProvider:
    """Get the ServiceProvider built at the composition root.

    Args:
        request: The FastAPI request object.

    Returns:
        ServiceProvider: The application's service provider.

    Raises:
        HTTPException: If the service provider is not initialized (503).
    """
    if not hasattr(request.app.state, "services"):
        raise HTTPException(
            status_code=503,
            detail="Service provider not initialized",
        )
    return request.app.state.services


def get_tool_provider(request: Request) -> ToolProvider:
    """Get the tool provider registered during application startup.

    Args:
        request: The FastAPI request object.

    Returns:
        ToolProvider: The provider serving tool descriptors.

    Raises:
        HTTPException: If no tool provider is registered (503).
    """
    provider = get_services(request).lookup(ToolProvider)
    if provider is None:
        raise HTTPException(
            status_code=503,
            detail="Tool provider not initialized",
        )
    return provider
