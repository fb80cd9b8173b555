"""Scan modules for callables declared with @tool.

Each module member is introspected in isolation. A member that cannot be
introspected is logged and skipped; it never aborts the rest of the module or
any other module.
"""

import inspect
import logging
import types
import typing
from types import FunctionType, ModuleType
from typing import Any

from toolscout.tools.cancellation import CancellationToken
from toolscout.tools.declaration import get_tool_declaration
from toolscout.tools.types import (
    MethodCandidate,
    MethodKind,
    ParameterSpec,
    describe_return,
    describe_type,
)

logger = logging.getLogger(__name__)

_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def is_concrete_class(cls: type) -> bool:
    """Check whether a class can own tools.

    Abstract classes, protocols and open generic definitions are excluded.
    """
    if inspect.isabstract(cls):
        return False
    if getattr(cls, "_is_protocol", False):
        return False
    if getattr(cls, "__parameters__", ()):
        return False
    return True


def is_cancellation_annotation(annotation: Any) -> bool:
    """Check whether an annotation is the pass-through cancellation type."""
    if annotation is CancellationToken:
        return True
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        members = [a for a in typing.get_args(annotation) if a is not type(None)]
        return members == [CancellationToken]
    return False


def _resolve_hints(func: FunctionType) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func, include_extras=True)
    except Exception as e:
        logger.debug(f"Could not resolve all type hints for {func.__qualname__}: {e}")

    # Resolve one annotation at a time so a single unresolvable forward
    # reference keeps its raw string without flattening the others
    hints: dict[str, Any] = {}
    for name, annotation in getattr(func, "__annotations__", {}).items():
        holder = types.SimpleNamespace(__annotations__={name: annotation})
        try:
            hints.update(
                typing.get_type_hints(
                    holder, globalns=func.__globals__, include_extras=True
                )
            )
        except Exception:
            hints[name] = annotation
    return hints


def build_candidate(
    module_name: str,
    owner: type | None,
    attribute_name: str,
    function: FunctionType,
    kind: MethodKind,
) -> MethodCandidate:
    """Build a MethodCandidate from a declared function.

    Raises:
        ValueError: If the function has no declaration attached.
    """
    declaration = get_tool_declaration(function)
    if declaration is None:
        raise ValueError(f"{function.__qualname__} is not declared as a tool")

    signature = inspect.signature(function)
    hints = _resolve_hints(function)

    parameters = list(signature.parameters.values())
    if kind in (MethodKind.INSTANCE, MethodKind.CLASS):
        parameters = parameters[1:]

    specs: list[ParameterSpec] = []
    for param in parameters:
        if param.kind in _VARIADIC_KINDS:
            continue
        annotation = hints.get(param.name, param.annotation)
        has_default = param.default is not inspect.Parameter.empty
        specs.append(
            ParameterSpec(
                name=param.name,
                type=describe_type(annotation),
                is_optional=has_default,
                default=param.default,
                annotation=annotation,
                is_cancellation=is_cancellation_annotation(annotation),
            )
        )

    return_annotation = hints.get("return", signature.return_annotation)
    returns = describe_return(
        return_annotation, is_coroutine=inspect.iscoroutinefunction(function)
    )

    return MethodCandidate(
        module_name=module_name,
        owner=owner,
        attribute_name=attribute_name,
        function=function,
        kind=kind,
        declaration=declaration,
        parameters=tuple(specs),
        returns=returns,
    )


def _classify(raw: Any) -> tuple[FunctionType, MethodKind] | None:
    if isinstance(raw, staticmethod):
        func, kind = raw.__func__, MethodKind.STATIC
    elif isinstance(raw, classmethod):
        func, kind = raw.__func__, MethodKind.CLASS
    else:
        func, kind = raw, MethodKind.INSTANCE
    if not isinstance(func, FunctionType):
        return None
    return func, kind


def scan_class(cls: type, module_name: str) -> list[MethodCandidate]:
    """Collect declared public methods of a concrete class.

    The MRO is walked most-derived first, so an undecorated override hides a
    declared base method.
    """
    candidates: list[MethodCandidate] = []
    seen: set[str] = set()

    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, raw in vars(klass).items():
            if name.startswith("_") or name in seen:
                continue
            seen.add(name)

            classified = _classify(raw)
            if classified is None:
                continue
            func, kind = classified
            if get_tool_declaration(func) is None:
                continue

            candidates.append(build_candidate(module_name, cls, name, func, kind))

    return candidates


def _scan_member(module_name: str, attr_name: str, obj: Any) -> list[MethodCandidate]:
    if isinstance(obj, type):
        if obj.__module__ != module_name or not is_concrete_class(obj):
            return []
        return scan_class(obj, module_name)

    if isinstance(obj, FunctionType):
        if obj.__module__ != module_name or get_tool_declaration(obj) is None:
            return []
        return [build_candidate(module_name, None, attr_name, obj, MethodKind.FUNCTION)]

    return []


def scan_module(module: ModuleType) -> list[MethodCandidate]:
    """Find every declared tool in a module.

    Args:
        module: The module to scan.

    Returns:
        Candidates in encounter order: module members in definition order,
        then methods in class definition order.
    """
    module_name = getattr(module, "__name__", "<unknown>")
    try:
        members = list(vars(module).items())
    except TypeError as e:
        logger.warning(f"Cannot read namespace of module {module_name}: {e}")
        return []

    candidates: list[MethodCandidate] = []
    for attr_name, obj in members:
        if attr_name.startswith("_"):
            continue
        try:
            candidates.extend(_scan_member(module_name, attr_name, obj))
        except Exception as e:
            logger.warning(f"Skipping {module_name}.{attr_name} during tool scan: {e}")
            continue

    if candidates:
        logger.debug(f"Found {len(candidates)} tools in module {module_name}")
    return candidates
