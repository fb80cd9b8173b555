"""Pytest configuration and shared fixtures for toolscout tests.

This module provides common fixtures used across all test modules,
including test app creation, async client setup, and in-memory tool modules.
"""

import textwrap
from types import ModuleType

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from toolscout import create_app
from toolscout.config import ToolScoutSettings


@pytest.fixture
def test_settings():
    """Create test settings that scan only the sample tool module.

    Returns:
        ToolScoutSettings: Settings instance configured for testing.
    """
    return ToolScoutSettings(
        host="127.0.0.1",
        port=8000,
        tool_modules=["sample_tools"],
        tool_packages=[],
        fail_on_resolution_error=False,
        cache_tools=True,
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def make_module():
    """Build a module object from source code.

    Classes and functions defined in the source report the given module
    name as their __module__, exactly like an imported module.

    Returns:
        Callable taking (name, source) and returning the populated module.
    """

    def _make(name: str, source: str) -> ModuleType:
        module = ModuleType(name)
        exec(textwrap.dedent(source), module.__dict__)
        return module

    return _make
