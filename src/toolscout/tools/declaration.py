"""The @tool decorator and the declaration record it attaches.

A declaration is stored on the underlying function object, so it follows the
function wherever it is looked up but is never picked up by an undecorated
override in a subclass.
"""

from collections.abc import Callable
from dataclasses import dataclass
from types import FunctionType
from typing import Any, TypeVar, overload

from toolscout.tools.exceptions import ToolDeclarationError

F = TypeVar("F")

TOOL_DECLARATION_ATTR = "__tool_declaration__"


@dataclass(frozen=True)
class ToolDeclaration:
    """Metadata identifying a callable as a tool.

    Attributes:
        name: Optional tool name (defaults to the function name).
        description: Short description shown to the model.
        input_params: Optional parameter documentation override
            (e.g., "str city, CancellationToken (optional)").
        output_params: Optional return documentation override (e.g., "str[]").
        on_failure: Hint describing how the tool reports failures. Not enforced.
    """

    name: str | None = None
    description: str | None = None
    input_params: str | None = None
    output_params: str | None = None
    on_failure: str | None = None


def _underlying_function(obj: Any) -> Any:
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


@overload
def tool(fn: F) -> F: ...


@overload
def tool(
    fn: None = None,
    *,
    name: str | None = None,
    description: str | None = None,
    input_params: str | None = None,
    output_params: str | None = None,
    on_failure: str | None = None,
) -> Callable[[F], F]: ...


def tool(
    fn: Any = None,
    *,
    name: str | None = None,
    description: str | None = None,
    input_params: str | None = None,
    output_params: str | None = None,
    on_failure: str | None = None,
) -> Any:
    """Mark a function or method as a tool.

    Works with and without arguments, and on staticmethod/classmethod objects
    regardless of decorator order.

    Example:
        class WardrobeTool:
            @tool(name="GetOutfitSuggestion", description="Suggest an outfit")
            def get_outfit_suggestion(self, weather_description: str) -> str:
                ...

    Raises:
        ToolDeclarationError: If the target is not a function or already
            carries a declaration.
    """
    declaration = ToolDeclaration(
        name=name,
        description=description,
        input_params=input_params,
        output_params=output_params,
        on_failure=on_failure,
    )

    def decorator(target: F) -> F:
        func = _underlying_function(target)
        if not isinstance(func, FunctionType):
            raise ToolDeclarationError(
                f"@tool can only decorate functions, got {type(target).__name__}"
            )
        if TOOL_DECLARATION_ATTR in vars(func):
            raise ToolDeclarationError(
                f"{func.__qualname__} is already declared as a tool"
            )
        setattr(func, TOOL_DECLARATION_ATTR, declaration)
        return target

    if fn is not None:
        return decorator(fn)
    return decorator


def get_tool_declaration(obj: Any) -> ToolDeclaration | None:
    """Return the declaration attached to a function, if any.

    Only the function's own namespace is consulted, so arbitrary objects with
    custom attribute hooks are never triggered.
    """
    func = _underlying_function(obj)
    if not isinstance(func, FunctionType):
        return None
    declaration = vars(func).get(TOOL_DECLARATION_ATTR)
    return declaration if isinstance(declaration, ToolDeclaration) else None


def is_tool(obj: Any) -> bool:
    """Check whether an object is a function declared with @tool."""
    return get_tool_declaration(obj) is not None
