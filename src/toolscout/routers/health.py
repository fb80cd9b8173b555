"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from toolscout.models.health import HealthResponse
from toolscout.tools import CachedToolProvider, ToolProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of toolscout. The number
    of discovered tools is reported only when the tool list is cached, so a
    health check never triggers a discovery pass.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    tools_discovered = None

    services = getattr(request.app.state, "services", None)
    provider = services.lookup(ToolProvider) if services is not None else None
    if isinstance(provider, CachedToolProvider) and provider.is_loaded:
        tools_discovered = len(provider.get_tools())
        logger.debug(f"Health check: {tools_discovered} tools cached")

    return HealthResponse(
        status="ok",
        version="0.1.0",
        tools_discovered=tools_discovered,
    )
