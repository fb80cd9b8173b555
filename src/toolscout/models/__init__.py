"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API responses across all endpoints.
"""

from toolscout.models.health import HealthResponse
from toolscout.models.tools import (
    ToolDetailResponse,
    ToolListResponse,
    ToolParameter,
    ToolSummary,
)

__all__ = [
    "HealthResponse",
    "ToolDetailResponse",
    "ToolListResponse",
    "ToolParameter",
    "ToolSummary",
]
