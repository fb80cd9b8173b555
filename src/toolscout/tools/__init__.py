"""Tool discovery, description, and schema conversion.

This package discovers callables declared with @tool across Python modules,
builds self-describing ToolDescriptor objects for them, and converts those
descriptors to Ollama-compatible schemas.
"""

from toolscout.tools.builder import (
    NO_DESCRIPTION,
    ToolDescriptor,
    ToolInvoker,
    build_descriptor,
    compose_description,
    format_parameter_doc,
    format_return_doc,
    resolve_tool_name,
)
from toolscout.tools.cancellation import CancellationToken
from toolscout.tools.declaration import ToolDeclaration, get_tool_declaration, is_tool, tool
from toolscout.tools.exceptions import (
    InstanceResolutionError,
    ToolArgumentError,
    ToolCancelledError,
    ToolDeclarationError,
    ToolScoutError,
)
from toolscout.tools.modules import enumerate_modules, import_tool_modules
from toolscout.tools.provider import (
    CachedToolProvider,
    DeclaredToolProvider,
    ToolCatalog,
    ToolProvider,
    get_registered_tools,
)
from toolscout.tools.resolver import InstanceResolver
from toolscout.tools.scanner import scan_module
from toolscout.tools.schema import to_ollama_tool, to_ollama_tools
from toolscout.tools.services import ServiceProvider
from toolscout.tools.types import (
    MethodCandidate,
    MethodKind,
    ParameterSpec,
    ReturnKind,
    ReturnSpec,
    TypeDescription,
    TypeKind,
    describe_return,
    describe_type,
    pretty_type,
)

__all__ = [
    "NO_DESCRIPTION",
    "CachedToolProvider",
    "CancellationToken",
    "DeclaredToolProvider",
    "InstanceResolutionError",
    "InstanceResolver",
    "MethodCandidate",
    "MethodKind",
    "ParameterSpec",
    "ReturnKind",
    "ReturnSpec",
    "ServiceProvider",
    "ToolArgumentError",
    "ToolCancelledError",
    "ToolCatalog",
    "ToolDeclaration",
    "ToolDeclarationError",
    "ToolDescriptor",
    "ToolInvoker",
    "ToolProvider",
    "ToolScoutError",
    "TypeDescription",
    "TypeKind",
    "build_descriptor",
    "compose_description",
    "describe_return",
    "describe_type",
    "enumerate_modules",
    "format_parameter_doc",
    "format_return_doc",
    "get_registered_tools",
    "get_tool_declaration",
    "import_tool_modules",
    "is_tool",
    "pretty_type",
    "resolve_tool_name",
    "scan_module",
    "to_ollama_tool",
    "to_ollama_tools",
    "tool",
]
