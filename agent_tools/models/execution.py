"""Per-call execution context and options."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExecutionContext(BaseModel):
    """Caller/session metadata handed to contextual and authenticated tools."""
    model_config = ConfigDict(populate_by_name=True)

    user: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Caller record; must carry an 'id' when present",
    )
    conversation_id: Optional[str] = Field(default=None, alias="conversationId")
    trace_id: Optional[str] = Field(default=None, alias="traceId")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("user")
    @classmethod
    def _user_has_id(cls, value: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if value is not None and ("id" not in value or value["id"] in (None, "")):
            raise ValueError("user record must include a non-empty 'id'")
        return value

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id") if self.user else None


ContextLike = Union[ExecutionContext, Mapping[str, Any], None]


def coerce_context(context: ContextLike) -> ExecutionContext:
    """Build an ExecutionContext from a model, a mapping, or nothing."""
    if context is None:
        return ExecutionContext()
    if isinstance(context, ExecutionContext):
        return context
    return ExecutionContext.model_validate(dict(context))


@dataclass
class ExecutionOptions:
    """Per-call configuration for the execution engine."""
    timeout: Optional[int] = None  # milliseconds; falsy means the 30s default
    context: Optional[ExecutionContext] = None
    throw_on_error: bool = False

    def __post_init__(self):
        if self.context is not None and not isinstance(self.context, ExecutionContext):
            self.context = coerce_context(self.context)


OptionsLike = Union[ExecutionOptions, Mapping[str, Any], None]


def coerce_options(options: OptionsLike) -> ExecutionOptions:
    """
    Normalize execution options.

    Accepts an ExecutionOptions, None, or a mapping using either the Python
    names or the camelCase ``throwOnError`` key.

    Raises:
        pydantic.ValidationError: If a ``context`` mapping is not a valid
            ExecutionContext (e.g. a user record without an id)
    """
    if options is None:
        return ExecutionOptions()
    if isinstance(options, ExecutionOptions):
        return options
    throw_on_error = options.get("throw_on_error", options.get("throwOnError", False))
    return ExecutionOptions(
        timeout=options.get("timeout"),
        context=options.get("context"),
        throw_on_error=bool(throw_on_error),
    )


@dataclass
class ToolInvocation:
    """One entry of a batch: which tool, with what parameters and options."""
    tool: str
    params: Any = field(default_factory=dict)
    options: OptionsLike = None


def coerce_invocation(item: Union[ToolInvocation, Mapping[str, Any]]) -> ToolInvocation:
    if isinstance(item, ToolInvocation):
        return item
    return ToolInvocation(
        tool=item["tool"],
        params=item.get("params", {}),
        options=item.get("options"),
    )
