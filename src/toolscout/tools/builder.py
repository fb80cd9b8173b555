"""Build self-describing tool descriptors from scanned candidates.

The documentation helpers in this module are pure functions of declarations
and TypeDescription values. Descriptors combine that documentation with a
JSON argument schema and an async invoker bound to the target callable.
"""

import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MethodType
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, create_model
from pydantic.errors import PydanticUserError

from toolscout.tools.cancellation import CancellationToken
from toolscout.tools.declaration import ToolDeclaration
from toolscout.tools.exceptions import ToolArgumentError
from toolscout.tools.types import (
    MethodCandidate,
    MethodKind,
    ParameterSpec,
    ReturnSpec,
    pretty_type,
)

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description provided."

EMPTY_PARAMETERS_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


def resolve_tool_name(declared_name: str | None, fallback: str) -> str:
    """Use the declared name when it is non-blank, otherwise the raw identifier."""
    if declared_name is None or not declared_name.strip():
        return fallback
    return declared_name.strip()


def format_parameter_doc(
    parameters: Sequence[ParameterSpec], override: str | None = None
) -> str:
    """Render parameter documentation such as "str city, int days (optional)".

    The cancellation parameter is never documented. An override is returned
    verbatim.
    """
    if override is not None:
        return override

    entries = []
    for param in parameters:
        if param.is_cancellation:
            continue
        suffix = " (optional)" if param.is_optional else ""
        entries.append(f"{pretty_type(param.type)} {param.name}{suffix}")
    return ", ".join(entries)


def format_return_doc(returns: ReturnSpec, override: str | None = None) -> str:
    """Render return documentation after unwrapping asynchronous wrappers."""
    if override is not None:
        return override

    effective = returns.effective_type
    if effective is None:
        return "void"
    return pretty_type(effective)


def compose_description(description: str | None, parameter_doc: str, return_doc: str) -> str:
    """Combine a description with its parameter and return documentation."""
    if description is None or not description.strip():
        text = NO_DESCRIPTION
    else:
        text = description.strip()
    return f"{text} Parameters: {parameter_doc}. Returns: {return_doc}."


def build_arguments_model(
    tool_name: str, parameters: Sequence[ParameterSpec]
) -> type[BaseModel] | None:
    """Create a pydantic model validating a tool's arguments by name.

    Returns:
        The model, or None when pydantic cannot build one for the annotations.
    """
    fields: dict[str, Any] = {}
    for param in parameters:
        if param.is_cancellation:
            continue
        annotation = param.annotation
        if annotation is inspect.Parameter.empty or isinstance(annotation, str):
            annotation = Any
        default = ... if param.default is inspect.Parameter.empty else param.default
        fields[param.name] = (annotation, default)

    try:
        return create_model(
            f"{tool_name}Arguments",
            __config__=ConfigDict(arbitrary_types_allowed=True, extra="forbid"),
            **fields,
        )
    except (PydanticUserError, NameError, TypeError) as e:
        logger.warning(f"Cannot build argument model for tool {tool_name}: {e}")
        return None


def build_parameters_schema(arguments_model: type[BaseModel] | None) -> dict[str, Any]:
    """Return the JSON schema of an argument model.

    Falls back to an empty object schema when a parameter type has no JSON
    schema representation.
    """
    if arguments_model is None:
        return dict(EMPTY_PARAMETERS_SCHEMA)
    try:
        schema = arguments_model.model_json_schema()
    except PydanticUserError as e:
        logger.warning(f"Cannot build JSON schema for {arguments_model.__name__}: {e}")
        return dict(EMPTY_PARAMETERS_SCHEMA)
    schema.pop("title", None)
    schema.pop("additionalProperties", None)
    return schema


class ToolInvoker:
    """Async adapter that invokes a tool with named arguments.

    Arguments are validated against the tool's argument model, the
    cancellation token is passed through to the cancellation parameter, and
    awaitable results are awaited.
    """

    def __init__(
        self,
        target: Callable[..., Any],
        parameters: Sequence[ParameterSpec],
        arguments_model: type[BaseModel] | None = None,
        tool_name: str = "",
    ) -> None:
        self.target = target
        self.parameters = tuple(parameters)
        self.arguments_model = arguments_model
        self.tool_name = tool_name or getattr(target, "__name__", "tool")

    def bind_arguments(
        self,
        arguments: Mapping[str, Any] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> dict[str, Any]:
        """Validate arguments and map them to keyword arguments.

        Raises:
            ToolArgumentError: If validation fails.
        """
        supplied = dict(arguments or {})

        if self.arguments_model is not None:
            try:
                validated = self.arguments_model.model_validate(supplied)
            except ValidationError as e:
                raise ToolArgumentError(
                    f"Invalid arguments for tool '{self.tool_name}': {e}"
                ) from e
            kwargs = {name: getattr(validated, name) for name in type(validated).model_fields}
        else:
            self._check_names(supplied)
            kwargs = supplied

        for param in self.parameters:
            if not param.is_cancellation:
                continue
            if cancellation is not None:
                kwargs[param.name] = cancellation
            elif not param.is_optional:
                kwargs[param.name] = CancellationToken()

        return kwargs

    def _check_names(self, supplied: Mapping[str, Any]) -> None:
        # Without an argument model only names and required flags are checked
        accepted = {p.name for p in self.parameters if not p.is_cancellation}
        unknown = sorted(set(supplied) - accepted)
        missing = [
            p.name
            for p in self.parameters
            if not p.is_cancellation and not p.is_optional and p.name not in supplied
        ]
        if unknown or missing:
            raise ToolArgumentError(
                f"Invalid arguments for tool '{self.tool_name}': "
                f"missing {missing}, unexpected {unknown}"
            )

    async def __call__(
        self,
        arguments: Mapping[str, Any] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Any:
        if cancellation is not None:
            cancellation.raise_if_cancelled()

        kwargs = self.bind_arguments(arguments, cancellation)
        result = self.target(**kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result


@dataclass
class ToolDescriptor:
    """A discovered tool, ready to hand to an orchestrator.

    Attributes:
        name: Tool name shown to the model. Never empty.
        description: Combined description with parameter and return docs.
        invoker: Async adapter bound to the callable and its target.
        bound_target: The instance for instance methods, None otherwise.
        parameters: Documented parameters, including the cancellation one.
        returns: Declared return shape.
        parameters_schema: JSON schema of the tool's arguments.
        on_failure: Failure hint from the declaration, if any.
        source: Qualified name of the underlying callable.
    """

    name: str
    description: str
    invoker: ToolInvoker
    bound_target: Any = None
    parameters: tuple[ParameterSpec, ...] = ()
    returns: ReturnSpec | None = None
    parameters_schema: dict[str, Any] = field(
        default_factory=lambda: dict(EMPTY_PARAMETERS_SCHEMA)
    )
    on_failure: str | None = None
    source: str = ""

    async def invoke(
        self,
        arguments: Mapping[str, Any] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Any:
        """Invoke the tool with arguments given by name.

        Raises:
            ToolArgumentError: If the arguments fail validation.
            ToolCancelledError: If the token is already cancelled.
        """
        return await self.invoker(arguments, cancellation)


def _bind_callable(candidate: MethodCandidate, target: Any) -> Callable[..., Any]:
    if candidate.kind is MethodKind.INSTANCE:
        if target is None:
            raise ValueError(
                f"Instance method {candidate.qualified_name} requires a target instance"
            )
        return MethodType(candidate.function, target)
    if candidate.kind is MethodKind.CLASS:
        return MethodType(candidate.function, candidate.owner)
    return candidate.function


def create_descriptor(
    name: str,
    declaration: ToolDeclaration,
    parameters: Sequence[ParameterSpec],
    returns: ReturnSpec,
    target: Callable[..., Any],
    bound_target: Any = None,
    source: str = "",
) -> ToolDescriptor:
    """Assemble a descriptor from already extracted parts."""
    parameter_doc = format_parameter_doc(parameters, declaration.input_params)
    return_doc = format_return_doc(returns, declaration.output_params)
    arguments_model = build_arguments_model(name, parameters)

    return ToolDescriptor(
        name=name,
        description=compose_description(declaration.description, parameter_doc, return_doc),
        invoker=ToolInvoker(target, parameters, arguments_model, tool_name=name),
        bound_target=bound_target,
        parameters=tuple(parameters),
        returns=returns,
        parameters_schema=build_parameters_schema(arguments_model),
        on_failure=declaration.on_failure,
        source=source,
    )


def build_descriptor(candidate: MethodCandidate, target: Any = None) -> ToolDescriptor:
    """Turn a scanned candidate into a ToolDescriptor.

    Args:
        candidate: The declared callable.
        target: The resolved instance for instance methods. Ignored for
            static methods, class methods and module-level functions.

    Raises:
        ValueError: If an instance method is given no target.
    """
    bound_target = None if candidate.is_static else target
    return create_descriptor(
        name=resolve_tool_name(candidate.declaration.name, candidate.attribute_name),
        declaration=candidate.declaration,
        parameters=candidate.parameters,
        returns=candidate.returns,
        target=_bind_callable(candidate, bound_target),
        bound_target=bound_target,
        source=candidate.qualified_name,
    )
