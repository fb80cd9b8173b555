"""Structural type descriptions and the records produced by scanning.

Annotations are converted once into TypeDescription values. Everything that
renders documentation works on those values, never on live annotations.
"""

import asyncio
import collections.abc
import inspect
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ForwardRef, TypeVar

from toolscout.tools.declaration import ToolDeclaration


class TypeKind(str, Enum):
    """Shape of a described type."""

    PRIMITIVE = "primitive"
    ARRAY = "array"
    GENERIC = "generic"


@dataclass(frozen=True)
class TypeDescription:
    """A pure, structural description of an annotation.

    Attributes:
        kind: primitive, array or generic.
        name: Bare name of the type (or of the generic origin).
        args: Element type for arrays, type arguments for generics.
    """

    kind: TypeKind
    name: str
    args: tuple["TypeDescription", ...] = ()

    @classmethod
    def primitive(cls, name: str) -> "TypeDescription":
        return cls(TypeKind.PRIMITIVE, name)

    @classmethod
    def array(cls, element: "TypeDescription") -> "TypeDescription":
        return cls(TypeKind.ARRAY, "array", (element,))

    @classmethod
    def generic(cls, name: str, *args: "TypeDescription") -> "TypeDescription":
        return cls(TypeKind.GENERIC, name, tuple(args))


ANY_TYPE = TypeDescription.primitive("Any")

_UNION_ORIGINS = (typing.Union, types.UnionType)
_NONE_TYPES = (None, type(None))

# Return annotations treated as asynchronous wrappers around a result.
_ASYNC_WRAPPERS = (
    collections.abc.Awaitable,
    collections.abc.Coroutine,
    asyncio.Future,
    asyncio.Task,
)


def _bare_name(obj: Any) -> str:
    name = getattr(obj, "__name__", None) or getattr(obj, "_name", None)
    if not isinstance(name, str) or not name:
        name = repr(obj)
    return name.split("[", 1)[0].rsplit(".", 1)[-1]


def _is_type_like(arg: Any) -> bool:
    return (
        isinstance(arg, (type, TypeVar, ForwardRef, str))
        or arg in _NONE_TYPES
        or arg is Any
        or typing.get_origin(arg) is not None
    )


def describe_type(annotation: Any) -> TypeDescription:
    """Convert a Python annotation into a TypeDescription.

    Unusual generic shapes whose arguments are not types (``Literal[...]``,
    ``Callable[[...], R]``) degrade to their bare name.
    """
    if annotation is inspect.Parameter.empty:
        return ANY_TYPE
    if annotation in _NONE_TYPES:
        return TypeDescription.primitive("None")
    if isinstance(annotation, str):
        return TypeDescription.primitive(annotation)
    if isinstance(annotation, ForwardRef):
        return TypeDescription.primitive(annotation.__forward_arg__)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return describe_type(args[0])

    if origin in _UNION_ORIGINS:
        members = [arg for arg in args if arg not in _NONE_TYPES]
        if len(members) == 1 and len(members) < len(args):
            return TypeDescription.generic("Optional", describe_type(members[0]))
        return TypeDescription.generic("Union", *(describe_type(a) for a in args))

    if origin is None or not args:
        return TypeDescription.primitive(_bare_name(origin or annotation))

    if origin is list and len(args) == 1:
        return TypeDescription.array(describe_type(args[0]))
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return TypeDescription.array(describe_type(args[0]))

    if origin is typing.Literal or not all(_is_type_like(arg) for arg in args):
        return TypeDescription.primitive(_bare_name(origin))

    return TypeDescription.generic(
        _bare_name(origin), *(describe_type(arg) for arg in args)
    )


def pretty_type(description: TypeDescription) -> str:
    """Render a TypeDescription for humans and models.

    Examples:
        list[str] -> "str[]"
        Mapping[str, int] -> "Mapping<str, int>"
    """
    if description.kind is TypeKind.ARRAY and description.args:
        return f"{pretty_type(description.args[0])}[]"
    if description.kind is TypeKind.GENERIC and description.args:
        rendered = ", ".join(pretty_type(arg) for arg in description.args)
        return f"{description.name}<{rendered}>"
    return description.name


class ReturnKind(str, Enum):
    """How a callable delivers its result."""

    VOID = "void"
    VALUE = "value"
    ASYNC_WRAPPED = "async_wrapped"


@dataclass(frozen=True)
class ReturnSpec:
    """Declared return shape of a tool.

    Attributes:
        kind: void, value, or async_wrapped.
        type: The value type, or the inner type of an asynchronous wrapper.
            None for void results and non-generic wrappers.
    """

    kind: ReturnKind
    type: TypeDescription | None = None

    @property
    def effective_type(self) -> TypeDescription | None:
        """The type the caller eventually receives, None meaning void."""
        if self.kind is ReturnKind.VOID:
            return None
        return self.type


def describe_return(annotation: Any, is_coroutine: bool = False) -> ReturnSpec:
    """Build a ReturnSpec from a return annotation.

    Args:
        annotation: The resolved return annotation.
        is_coroutine: True for ``async def`` functions, whose annotation is the
            type produced once awaited.
    """
    if is_coroutine:
        if annotation in _NONE_TYPES:
            return ReturnSpec(ReturnKind.ASYNC_WRAPPED)
        return ReturnSpec(ReturnKind.ASYNC_WRAPPED, describe_type(annotation))

    if annotation in _NONE_TYPES:
        return ReturnSpec(ReturnKind.VOID)

    if annotation in _ASYNC_WRAPPERS:
        return ReturnSpec(ReturnKind.ASYNC_WRAPPED)

    origin = typing.get_origin(annotation)
    if origin in _ASYNC_WRAPPERS:
        args = typing.get_args(annotation)
        # Coroutine[Yield, Send, Return] carries the result last
        inner = args[-1] if args else None
        if inner in _NONE_TYPES:
            return ReturnSpec(ReturnKind.ASYNC_WRAPPED)
        return ReturnSpec(ReturnKind.ASYNC_WRAPPED, describe_type(inner))

    return ReturnSpec(ReturnKind.VALUE, describe_type(annotation))


@dataclass(frozen=True)
class ParameterSpec:
    """A single documented tool parameter.

    Attributes:
        name: Parameter name.
        type: Structural description of the annotation.
        is_optional: True when the parameter has a default value.
        default: The default value, or inspect.Parameter.empty.
        annotation: Resolved annotation used for argument validation.
        is_cancellation: True for the pass-through cancellation parameter.
    """

    name: str
    type: TypeDescription
    is_optional: bool = False
    default: Any = field(default=inspect.Parameter.empty, compare=False)
    annotation: Any = field(default=Any, compare=False)
    is_cancellation: bool = False


class MethodKind(str, Enum):
    """How a discovered callable is bound."""

    INSTANCE = "instance"
    STATIC = "static"
    CLASS = "class"
    FUNCTION = "function"


@dataclass(frozen=True)
class MethodCandidate:
    """A declared callable found while scanning a module.

    Attributes:
        module_name: Name of the module the callable was found in.
        owner: The owning class, or None for module-level functions.
        attribute_name: Raw identifier of the callable.
        function: The underlying function object.
        kind: How the callable is bound at invocation time.
        declaration: The attached tool declaration.
        parameters: Ordered parameters, excluding self/cls.
        returns: Declared return shape.
    """

    module_name: str
    owner: type | None
    attribute_name: str
    function: types.FunctionType
    kind: MethodKind
    declaration: ToolDeclaration
    parameters: tuple[ParameterSpec, ...]
    returns: ReturnSpec

    @property
    def is_static(self) -> bool:
        """True when no instance is needed to invoke the callable."""
        return self.kind is not MethodKind.INSTANCE

    @property
    def qualified_name(self) -> str:
        if self.owner is None:
            return f"{self.module_name}.{self.attribute_name}"
        return f"{self.module_name}.{self.owner.__qualname__}.{self.attribute_name}"
