"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
Each router module defines endpoints for a specific domain (health, tools).
"""

from toolscout.routers import health, tools

__all__ = [
    "health",
    "tools",
]
