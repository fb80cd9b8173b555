"""Unit tests for Ollama schema conversion."""

from ollama import Tool

import sample_tools
from toolscout.tools import (
    DeclaredToolProvider,
    ReturnKind,
    ReturnSpec,
    ToolCatalog,
    to_ollama_tool,
    to_ollama_tools,
)


def _tools_by_name():
    return {t.name: t for t in DeclaredToolProvider(modules=[sample_tools]).get_tools()}


def test_converts_name_description_and_parameters():
    descriptor = _tools_by_name()["GetWeatherInCity"]

    ollama_tool = to_ollama_tool(descriptor)

    assert isinstance(ollama_tool, Tool)
    assert ollama_tool.type == "function"
    assert ollama_tool.function.name == "GetWeatherInCity"
    assert ollama_tool.function.description == descriptor.description
    assert ollama_tool.function.parameters.type == "object"
    assert list(ollama_tool.function.parameters.properties) == ["city"]
    assert ollama_tool.function.parameters.properties["city"].type == "string"
    assert ollama_tool.function.parameters.required == ["city"]


def test_optional_parameter_uses_non_null_type():
    ollama_tool = to_ollama_tool(_tools_by_name()["SendEmail"])

    properties = ollama_tool.function.parameters.properties
    assert properties["clothes_to_wear"].type == "string"
    assert ollama_tool.function.parameters.required == ["person", "weather_description"]


def test_tool_without_parameters():
    catalog = ToolCatalog()
    descriptor = catalog.register(
        name="Ping",
        description="Check connectivity",
        parameters=[],
        returns=ReturnSpec(ReturnKind.VOID),
        invoker=lambda: None,
    )

    ollama_tool = to_ollama_tool(descriptor)

    assert ollama_tool.function.parameters.properties == {}
    assert ollama_tool.function.parameters.required == []


def test_to_ollama_tools_preserves_order():
    tools = DeclaredToolProvider(modules=[sample_tools]).get_tools()

    converted = to_ollama_tools(tools)

    assert [t.function.name for t in converted] == [t.name for t in tools]


def test_dump_is_json_ready():
    ollama_tool = to_ollama_tool(_tools_by_name()["GetOutfitSuggestion"])

    payload = ollama_tool.model_dump(exclude_none=True, by_alias=True)

    assert payload["type"] == "function"
    assert payload["function"]["parameters"]["properties"] == {
        "weather_description": {"type": "string"}
    }
