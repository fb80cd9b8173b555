"""Unit tests for the @tool decorator and ToolDeclaration."""

import dataclasses

import pytest

from toolscout.tools import (
    ToolDeclaration,
    ToolDeclarationError,
    get_tool_declaration,
    is_tool,
    tool,
)


def test_tool_attaches_declaration():
    """Test that @tool attaches all declaration fields."""

    @tool(
        name="GetWeather",
        description="Get weather",
        input_params="str city",
        output_params="str[]",
        on_failure="Return an error message",
    )
    def get_weather(city: str) -> list[str]:
        return [city]

    declaration = get_tool_declaration(get_weather)

    assert declaration == ToolDeclaration(
        name="GetWeather",
        description="Get weather",
        input_params="str city",
        output_params="str[]",
        on_failure="Return an error message",
    )


def test_tool_without_arguments():
    """Test that bare @tool declares a tool with empty metadata."""

    @tool
    def ping() -> str:
        return "pong"

    assert is_tool(ping)
    assert get_tool_declaration(ping) == ToolDeclaration()
    # The function itself is returned unchanged
    assert ping() == "pong"


def test_declaration_is_immutable():
    """Test that declarations cannot be modified after creation."""
    declaration = ToolDeclaration(name="Fixed")

    with pytest.raises(dataclasses.FrozenInstanceError):
        declaration.name = "Changed"  # type: ignore[misc]


def test_tool_on_staticmethod_either_order():
    """Test that @tool works above and below @staticmethod."""

    class Tools:
        @tool(description="above")
        @staticmethod
        def above() -> None:
            pass

        @staticmethod
        @tool(description="below")
        def below() -> None:
            pass

    assert get_tool_declaration(Tools.__dict__["above"]).description == "above"
    assert get_tool_declaration(Tools.__dict__["below"]).description == "below"


def test_tool_on_classmethod():
    """Test that @tool works on classmethod objects."""

    class Tools:
        @tool(description="cls tool")
        @classmethod
        def make(cls) -> str:
            return cls.__name__

    assert is_tool(Tools.__dict__["make"])
    assert Tools.make() == "Tools"


def test_tool_cannot_be_declared_twice():
    """Test that repeating @tool on the same function raises."""
    with pytest.raises(ToolDeclarationError, match="already declared"):

        @tool(name="Second")
        @tool(name="First")
        def twice() -> None:
            pass


def test_tool_rejects_non_functions():
    """Test that @tool refuses objects that are not functions."""
    with pytest.raises(ToolDeclarationError, match="can only decorate functions"):
        tool(description="not a function")(len)

    with pytest.raises(ToolDeclarationError):

        @tool
        class NotAFunction:
            pass


def test_undecorated_function_has_no_declaration():
    """Test that plain functions and other objects are not tools."""

    def plain() -> None:
        pass

    assert get_tool_declaration(plain) is None
    assert get_tool_declaration(42) is None
    assert is_tool(plain) is False


def test_declaration_not_visible_on_override():
    """Test that an undecorated override does not inherit the declaration."""

    class Base:
        @tool(description="base")
        def run(self) -> None:
            pass

    class Child(Base):
        def run(self) -> None:
            pass

    assert is_tool(Base.run)
    assert not is_tool(Child.run)
