"""Pydantic models for tool API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from toolscout.tools import ToolDescriptor, format_return_doc, pretty_type


class ToolParameter(BaseModel):
    """A documented tool parameter."""

    name: str = Field(..., description="Parameter name")
    type: str = Field(..., description="Rendered parameter type (e.g., 'str[]')")
    optional: bool = Field(..., description="Whether the parameter has a default")

    model_config = ConfigDict(from_attributes=True)


class ToolSummary(BaseModel):
    """Name and description of a discovered tool in list responses."""

    name: str = Field(..., description="Tool name shown to the model")
    description: str = Field(
        ..., description="Description including parameter and return docs"
    )
    source: str = Field(..., description="Qualified name of the underlying callable")
    is_static: bool = Field(..., description="Whether the tool needs no instance")
    on_failure: str | None = Field(default=None, description="Failure hint")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor) -> "ToolSummary":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            source=descriptor.source,
            is_static=descriptor.bound_target is None,
            on_failure=descriptor.on_failure,
        )


class ToolListResponse(BaseModel):
    """Response model for listing all discovered tools."""

    tools: list[ToolSummary] = Field(
        default_factory=list,
        description="Discovered tools in discovery order",
    )
    count: int = Field(..., description="Number of discovered tools")

    @classmethod
    def from_descriptors(cls, descriptors: list[ToolDescriptor]) -> "ToolListResponse":
        return cls(
            tools=[ToolSummary.from_descriptor(d) for d in descriptors],
            count=len(descriptors),
        )


class ToolDetailResponse(ToolSummary):
    """Response model for a single tool, including its argument schema."""

    parameters: list[ToolParameter] = Field(
        default_factory=list, description="Documented parameters"
    )
    returns: str = Field(..., description="Rendered return type")
    parameters_schema: dict[str, Any] = Field(
        default_factory=dict, description="JSON schema of the tool arguments"
    )

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor) -> "ToolDetailResponse":
        summary = ToolSummary.from_descriptor(descriptor)
        return cls(
            **summary.model_dump(),
            parameters=[
                ToolParameter(name=p.name, type=pretty_type(p.type), optional=p.is_optional)
                for p in descriptor.parameters
                if not p.is_cancellation
            ],
            returns=(
                format_return_doc(descriptor.returns) if descriptor.returns else "void"
            ),
            parameters_schema=descriptor.parameters_schema,
        )
