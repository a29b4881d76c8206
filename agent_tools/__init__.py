"""
agent-tools: typed tool registry and execution engine for AI agents.

Define tools with the builders, look them up in a registry, and execute
them with validation, deadlines and a uniform response envelope.
"""

from agent_tools.infra.logging import setup_logging
from agent_tools.infra.error_handler import (
    ErrorCategory,
    ToolError,
    InvalidDefinitionError,
    MissingNameError,
    DuplicateToolNameWarning,
    ToolNotFoundError,
    ValidationFailedError,
    ToolTimeoutError,
    classify_error,
)
from agent_tools.infra.timeout import TOOL_EXECUTION_TIMEOUT_MS
from agent_tools.models import (
    ParameterSchema,
    SchemaKind,
    NO_DEFAULT,
    ToolDefinition,
    ToolCategory,
    ToolShape,
    AuthRequirement,
    BuiltInTool,
    BUILT_IN_TOOL_CATEGORIES,
    ExecutionContext,
    ExecutionOptions,
    ToolInvocation,
    ToolResponse,
    ToolExecutionStatus,
    ResponseMetadata,
    RateLimitInfo,
)
from agent_tools.services.schemas import (
    create_string_param,
    create_number_param,
    create_boolean_param,
    create_array_param,
    create_object_param,
    validate_params,
    to_json_schema,
    from_json_schema,
)
from agent_tools.services.tool_factory import (
    define_tool,
    define_contextual_tool,
    define_authenticated_tool,
)
from agent_tools.services.tool_registry import (
    ToolRegistry,
    global_registry,
    create_tool_registry,
    register_tool,
    get_tool,
    get_all_tools,
    has_tool,
    get_tools_by_category,
    get_tools_by_tag,
    to_agent_tool_list,
    clear_tools,
)
from agent_tools.services.tool_execution_engine import (
    ToolExecutor,
    execute_tool,
    execute_tool_by_name,
    stream_tool_execution,
    batch_execute_tools,
)
from agent_tools.services.agent_adapter import (
    AgentToolDefinition,
    AgentToolAdapter,
    adapt_tool_for_agent,
    adapt_tools_for_agent,
    get_agent_tool_definitions,
    get_agent_tool_definition,
    create_agent_tool_adapter,
)

__version__ = "0.1.0"
__all__ = [
    "setup_logging",
    # Errors
    "ErrorCategory",
    "ToolError",
    "InvalidDefinitionError",
    "MissingNameError",
    "DuplicateToolNameWarning",
    "ToolNotFoundError",
    "ValidationFailedError",
    "ToolTimeoutError",
    "classify_error",
    "TOOL_EXECUTION_TIMEOUT_MS",
    # Models
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
    # Schema utilities
    "create_string_param",
    "create_number_param",
    "create_boolean_param",
    "create_array_param",
    "create_object_param",
    "validate_params",
    "to_json_schema",
    "from_json_schema",
    # Builders
    "define_tool",
    "define_contextual_tool",
    "define_authenticated_tool",
    # Registry
    "ToolRegistry",
    "global_registry",
    "create_tool_registry",
    "register_tool",
    "get_tool",
    "get_all_tools",
    "has_tool",
    "get_tools_by_category",
    "get_tools_by_tag",
    "to_agent_tool_list",
    "clear_tools",
    # Execution
    "ToolExecutor",
    "execute_tool",
    "execute_tool_by_name",
    "stream_tool_execution",
    "batch_execute_tools",
    # Agent adapters
    "AgentToolDefinition",
    "AgentToolAdapter",
    "adapt_tool_for_agent",
    "adapt_tools_for_agent",
    "get_agent_tool_definitions",
    "get_agent_tool_definition",
    "create_agent_tool_adapter",
]
