"""CLI entry point for toolscout.

This module provides the command-line interface for starting the toolscout
server or printing the discovered tools. It can be invoked as `toolscout`
(via the script entry point) or `python -m toolscout`.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any

import uvicorn

from toolscout import __version__, create_app
from toolscout.app import build_tool_provider
from toolscout.config import ToolScoutSettings
from toolscout.tools import InstanceResolutionError, ServiceProvider, get_registered_tools


def list_tools(settings: ToolScoutSettings) -> int:
    """Print every discovered tool and return a process exit code."""
    logging.basicConfig(level=settings.log_level.upper())

    services = ServiceProvider()
    build_tool_provider(settings, services)

    try:
        tools = get_registered_tools(services)
    except InstanceResolutionError as e:
        print(f"Tool discovery failed: {e}", file=sys.stderr)
        return 1

    for descriptor in tools:
        print(f"{descriptor.name}: {descriptor.description}")
    print(f"{len(tools)} tools discovered")
    return 0


def settings_to_env(overrides: dict[str, Any]) -> dict[str, str]:
    """Render settings overrides as TOOLSCOUT_ environment variables."""
    env = {}
    for name, value in overrides.items():
        if isinstance(value, (list, bool)):
            value = json.dumps(value)
        env[f"TOOLSCOUT_{name.upper()}"] = str(value)
    return env


def main() -> int:
    """Main entry point for the toolscout CLI.

    Parses command-line arguments and either lists the discovered tools or
    starts the uvicorn server with the FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="toolscout",
        description="Discover @tool-declared callables and serve their descriptors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"toolscout {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via TOOLSCOUT_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via TOOLSCOUT_PORT)",
    )

    parser.add_argument(
        "--tool-module",
        action="append",
        default=None,
        help="Module to scan for tools; repeatable (can be set via TOOLSCOUT_TOOL_MODULES)",
    )

    parser.add_argument(
        "--tool-package",
        action="append",
        default=None,
        help="Package whose submodules are scanned; repeatable (can be set via TOOLSCOUT_TOOL_PACKAGES)",
    )

    parser.add_argument(
        "--fail-on-resolution-error",
        action="store_true",
        default=None,
        help="Abort discovery when a tool instance cannot be resolved",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via TOOLSCOUT_LOG_LEVEL)",
    )

    parser.add_argument(
        "--list-tools",
        action="store_true",
        help="Print the discovered tools and exit",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (uvicorn --reload)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.tool_module is not None:
        settings_kwargs["tool_modules"] = args.tool_module
    if args.tool_package is not None:
        settings_kwargs["tool_packages"] = args.tool_package
    if args.fail_on_resolution_error is not None:
        settings_kwargs["fail_on_resolution_error"] = args.fail_on_resolution_error
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = ToolScoutSettings(**settings_kwargs)

    if args.list_tools:
        return list_tools(settings)

    if args.reload:
        # The reloader imports the app factory in a fresh process, which reads
        # its settings from the environment
        os.environ.update(settings_to_env(settings_kwargs))
        uvicorn.run(
            "toolscout.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
            reload=True,
        )
        return 0

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
