"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration. It is also the composition root where the tool provider
is assembled from settings and the service provider.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from toolscout.config import ToolScoutSettings
from toolscout.routers import health, tools
from toolscout.tools import (
    CachedToolProvider,
    DeclaredToolProvider,
    InstanceResolutionError,
    ServiceProvider,
    ToolProvider,
    import_tool_modules,
)

logger = logging.getLogger(__name__)


def build_tool_provider(
    settings: ToolScoutSettings, services: ServiceProvider
) -> ToolProvider:
    """Assemble the tool provider described by the settings.

    Configured modules and packages are imported and scanned explicitly;
    without any configuration every loaded module is scanned. The provider is
    wrapped in a cache when cache_tools is enabled and registered with the
    service provider under ToolProvider.

    Args:
        settings: Application settings.
        services: Service provider used to resolve tool instances.

    Returns:
        ToolProvider: The provider serving tool descriptors.
    """
    modules = []
    if settings.scans_explicit_modules:
        modules = import_tool_modules(settings.tool_modules, settings.tool_packages)
        if not modules:
            logger.warning(
                "None of the configured tool modules could be imported, "
                "falling back to scanning all loaded modules"
            )

    provider: ToolProvider = DeclaredToolProvider(
        services,
        modules=modules,
        fail_on_resolution_error=settings.fail_on_resolution_error,
    )
    if settings.cache_tools:
        provider = CachedToolProvider(provider)

    services.register_instance(ToolScoutSettings, settings)
    services.register_instance(ToolProvider, provider)
    logger.info(f"Tool provider ready: {type(provider).__name__}")
    return provider


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    The tool provider is built once at startup. With caching enabled the tool
    list is discovered immediately, so instance construction side effects
    happen once per process instead of once per request.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: ToolScoutSettings = app.state.settings
    services: ServiceProvider = app.state.services

    provider = build_tool_provider(settings, services)
    if isinstance(provider, CachedToolProvider):
        try:
            discovered = provider.get_tools()
            logger.info(f"Discovered {len(discovered)} tools at startup")
        except InstanceResolutionError as e:
            # Requests retry discovery and report the failure as HTTP 500
            logger.error(f"Tool discovery failed at startup: {e}")

    yield

    if isinstance(provider, CachedToolProvider):
        provider.invalidate()
    logger.info("Tool provider released")


def create_app(
    settings: ToolScoutSettings | None = None,
    services: ServiceProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a FastAPI instance with all routers,
    middleware, and configuration applied.

    Args:
        settings: Optional ToolScoutSettings instance. If not provided,
                  settings will be loaded from environment variables.
        services: Optional ServiceProvider holding instances and factories for
                  tool-owning classes. A new, empty provider is used if omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from toolscout.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="toolscout",
        description="Discovers @tool-declared callables and describes them for LLM orchestrators",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings and services in app.state for lifespan access
    app.state.settings = settings
    app.state.services = services or ServiceProvider()

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(tools.router)

    return app
