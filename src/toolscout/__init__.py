"""toolscout: discover @tool-declared callables and describe them for LLMs.

This package scans Python modules for callables declared with the @tool
decorator, builds uniform descriptors for them, and serves the aggregated
list to function-calling orchestrators over a small FastAPI application.
"""

from toolscout.app import create_app
from toolscout.tools import tool

__version__ = "0.1.0"

__all__ = ["create_app", "tool", "__version__"]
