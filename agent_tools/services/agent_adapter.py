"""Adapters exposing registered tools to an agent's function-calling loop."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from agent_tools.infra.error_handler import ToolNotFoundError
from agent_tools.models.execution import ContextLike, ExecutionOptions, coerce_context
from agent_tools.models.tool import ToolDefinition
from agent_tools.services.schemas import to_json_schema, validate_params
from agent_tools.services.tool_execution_engine import ToolExecutor, default_executor
from agent_tools.services.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass
class AgentToolDefinition:
    """A tool as handed to an LLM function-calling API."""
    name: str
    description: str
    parameters: Dict[str, Any]
    execute: Optional[Callable[[Dict[str, Any]], Awaitable[Any]]] = None

    def to_openai_schema(self) -> Dict[str, Any]:
        """Convert to OpenAI function calling schema."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


def adapt_tool_for_agent(
    tool: ToolDefinition,
    context: ContextLike = None,
    executor: Optional[ToolExecutor] = None,
) -> AgentToolDefinition:
    """
    Wrap a tool so an agent runtime can call it with raw arguments.

    The returned ``execute`` validates the arguments, runs the tool with the
    bound context and returns its raw result; failures are logged and raised.
    """
    bound_context = coerce_context(context)
    runner = executor or default_executor

    async def execute(args: Dict[str, Any]) -> Any:
        try:
            params = validate_params(tool.parameters, {} if args is None else args)
            response = await runner.execute_tool(
                tool,
                params,
                ExecutionOptions(context=bound_context, throw_on_error=True),
            )
            return response.data
        except Exception as e:
            logger.error(f'Error executing tool "{tool.name}": {e}')
            raise

    return AgentToolDefinition(
        name=tool.name,
        description=tool.description,
        parameters=to_json_schema(tool.parameters),
        execute=execute,
    )


def adapt_tools_for_agent(
    tools: Sequence[ToolDefinition],
    context: ContextLike = None,
    executor: Optional[ToolExecutor] = None,
) -> List[AgentToolDefinition]:
    return [adapt_tool_for_agent(tool, context, executor) for tool in tools]


def get_agent_tool_definitions(
    context: ContextLike = None,
    registry: Optional[ToolRegistry] = None,
) -> List[AgentToolDefinition]:
    """Get every registered tool in agent format, bound to ``context``."""
    executor = ToolExecutor(registry) if registry is not None else default_executor
    return adapt_tools_for_agent(executor.registry.get_all(), context, executor)


def get_agent_tool_definition(
    name: str,
    context: ContextLike = None,
    registry: Optional[ToolRegistry] = None,
) -> Optional[AgentToolDefinition]:
    """Get a single registered tool in agent format, or None if unknown."""
    executor = ToolExecutor(registry) if registry is not None else default_executor
    tool = executor.registry.get(name)
    if tool is None:
        return None
    return adapt_tool_for_agent(tool, context, executor)


class AgentToolAdapter:
    """Filtered view over a registry for one agent."""

    def __init__(
        self,
        tools: Optional[Sequence[str]] = None,
        include_execution: bool = True,
        registry: Optional[ToolRegistry] = None,
        context: ContextLike = None,
    ):
        self.tool_names = list(tools) if tools else None
        self.include_execution = include_execution
        self.executor = ToolExecutor(registry) if registry is not None else default_executor
        self.context = coerce_context(context)

    def _selected(self) -> List[ToolDefinition]:
        all_tools = self.executor.registry.get_all()
        if not self.tool_names:
            return all_tools
        return [tool for tool in all_tools if tool.name in self.tool_names]

    def get_tools(self) -> List[AgentToolDefinition]:
        """Get the selected tools, without execute functions if so configured."""
        adapted = adapt_tools_for_agent(self._selected(), self.context, self.executor)
        if not self.include_execution:
            for tool in adapted:
                tool.execute = None
        return adapted

    async def execute_tool(self, name: str, params: Dict[str, Any]) -> Any:
        """
        Execute a registered tool by name and return its raw result.

        Raises:
            ToolNotFoundError: If no tool is registered under ``name``
        """
        tool = self.executor.registry.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return await adapt_tool_for_agent(tool, self.context, self.executor).execute(params)


def create_agent_tool_adapter(
    tools: Optional[Sequence[str]] = None,
    include_execution: bool = True,
    registry: Optional[ToolRegistry] = None,
    context: ContextLike = None,
) -> AgentToolAdapter:
    """Create an adapter over the given (or global) registry."""
    return AgentToolAdapter(
        tools=tools,
        include_execution=include_execution,
        registry=registry,
        context=context,
    )
