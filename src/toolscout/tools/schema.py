"""Convert tool descriptors into Ollama function-calling schemas."""

from collections.abc import Iterable
from typing import Any

from ollama import Tool

from toolscout.tools.builder import ToolDescriptor


def _property_type(schema: dict[str, Any]) -> str | None:
    if "type" in schema:
        return schema["type"]
    # Optional[X] renders as anyOf [X, null]; Ollama expects a single type
    for option in schema.get("anyOf", []):
        option_type = option.get("type")
        if option_type and option_type != "null":
            return option_type
    return None


def _to_property(schema: dict[str, Any]) -> Tool.Function.Parameters.Property:
    return Tool.Function.Parameters.Property(
        type=_property_type(schema),
        items=schema.get("items"),
        description=schema.get("description"),
        enum=schema.get("enum"),
    )


def to_ollama_tool(descriptor: ToolDescriptor) -> Tool:
    """Build the Ollama tool definition for a descriptor.

    Args:
        descriptor: The tool to convert.

    Returns:
        Tool: A schema accepted by ollama's chat(tools=...) argument.
    """
    schema = descriptor.parameters_schema
    properties = {
        name: _to_property(prop) for name, prop in schema.get("properties", {}).items()
    }

    return Tool(
        type="function",
        function=Tool.Function(
            name=descriptor.name,
            description=descriptor.description,
            parameters=Tool.Function.Parameters(
                type="object",
                properties=properties,
                required=list(schema.get("required", [])),
                defs=schema.get("$defs"),
            ),
        ),
    )


def to_ollama_tools(descriptors: Iterable[ToolDescriptor]) -> list[Tool]:
    """Convert a list of descriptors, preserving order."""
    return [to_ollama_tool(descriptor) for descriptor in descriptors]
