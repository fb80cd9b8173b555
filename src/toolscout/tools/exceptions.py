"""Exceptions raised by the tool discovery engine."""


class ToolScoutError(RuntimeError):
    """Base class for all toolscout errors."""


class ToolDeclarationError(ToolScoutError):
    """Raised when the @tool decorator is applied incorrectly."""


class InstanceResolutionError(ToolScoutError):
    """Raised when an instance for a tool-owning class cannot be obtained.

    Attributes:
        service_type: The class that could not be resolved or constructed.
    """

    def __init__(self, service_type: type, message: str) -> None:
        self.service_type = service_type
        super().__init__(message)


class ToolArgumentError(ToolScoutError):
    """Raised when invocation arguments fail validation."""


class ToolCancelledError(ToolScoutError):
    """Raised when a tool is invoked with an already cancelled token."""
