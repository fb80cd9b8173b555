"""Tools router exposing the discovered tool registry.

This module provides REST API endpoints for:
- Listing all discovered tools
- Getting Ollama function-calling schemas for all tools
- Getting the details of a single tool
- Refreshing the cached tool list
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from toolscout.dependencies import get_tool_provider
from toolscout.models.tools import ToolDetailResponse, ToolListResponse
from toolscout.tools import (
    CachedToolProvider,
    InstanceResolutionError,
    ToolDescriptor,
    ToolProvider,
    to_ollama_tools,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


def _load_tools(provider: ToolProvider) -> list[ToolDescriptor]:
    """Run the provider, translating resolution failures into HTTP 500."""
    try:
        return provider.get_tools()
    except InstanceResolutionError as e:
        logger.error(f"Tool discovery failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Tool discovery failed: {str(e)}",
        )


@router.get(
    "",
    response_model=ToolListResponse,
    summary="List all discovered tools",
)
async def list_tools(
    provider: Annotated[ToolProvider, Depends(get_tool_provider)],
) -> ToolListResponse:
    """List every discovered tool with its name and description.

    Tools appear in discovery order. Names are not deduplicated.

    Args:
        provider: Injected tool provider

    Returns:
        List of tool summaries
    """
    return ToolListResponse.from_descriptors(_load_tools(provider))


@router.get(
    "/ollama",
    summary="Get Ollama tool schemas",
)
async def list_ollama_tools(
    provider: Annotated[ToolProvider, Depends(get_tool_provider)],
) -> list[dict[str, Any]]:
    """Return every tool as an Ollama function-calling schema.

    The payload can be passed directly as the `tools` argument of an Ollama
    chat request.

    Args:
        provider: Injected tool provider

    Returns:
        List of Ollama tool definitions
    """
    tools = to_ollama_tools(_load_tools(provider))
    return [t.model_dump(exclude_none=True, by_alias=True) for t in tools]


@router.post(
    "/refresh",
    response_model=ToolListResponse,
    summary="Rediscover tools",
)
async def refresh_tools(
    provider: Annotated[ToolProvider, Depends(get_tool_provider)],
) -> ToolListResponse:
    """Drop the cached tool list and run discovery again.

    Without caching every request already runs discovery, so this only
    returns the current list.

    Args:
        provider: Injected tool provider

    Returns:
        The freshly discovered tools
    """
    if isinstance(provider, CachedToolProvider):
        provider.invalidate()
        logger.info("Refreshing cached tool list")
    return ToolListResponse.from_descriptors(_load_tools(provider))


@router.get(
    "/{name}",
    response_model=ToolDetailResponse,
    summary="Get a tool",
)
async def get_tool(
    name: str,
    provider: Annotated[ToolProvider, Depends(get_tool_provider)],
) -> ToolDetailResponse:
    """Get the details of a tool by name.

    Args:
        name: Tool name
        provider: Injected tool provider

    Returns:
        Tool details including parameters and argument schema

    Raises:
        HTTPException: 404 if no tool has this name
        HTTPException: 409 if several tools share this name
    """
    matches = [t for t in _load_tools(provider) if t.name == name]

    if not matches:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tool '{name}' not found",
        )

    if len(matches) > 1:
        sources = ", ".join(t.source for t in matches)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Tool name '{name}' is ambiguous: {sources}",
        )

    return ToolDetailResponse.from_descriptor(matches[0])
