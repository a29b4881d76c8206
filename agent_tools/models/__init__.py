from .parameter import ParameterSchema, SchemaKind, NO_DEFAULT
from .tool import (
    ToolDefinition,
    ToolCategory,
    ToolShape,
    AuthRequirement,
    BuiltInTool,
    BUILT_IN_TOOL_CATEGORIES,
)
from .execution import ExecutionContext, ExecutionOptions, ToolInvocation
from .response import ToolResponse, ToolExecutionStatus, ResponseMetadata, RateLimitInfo

__all__ = [
    "ParameterSchema",
    "SchemaKind",
    "NO_DEFAULT",
    "ToolDefinition",
    "ToolCategory",
    "ToolShape",
    "AuthRequirement",
    "BuiltInTool",
    "BUILT_IN_TOOL_CATEGORIES",
    "ExecutionContext",
    "ExecutionOptions",
    "ToolInvocation",
    "ToolResponse",
    "ToolExecutionStatus",
    "ResponseMetadata",
    "RateLimitInfo",
]
