"""Tool execution engine: validation, dispatch, deadlines and response envelopes."""

import asyncio
import inspect
import logging
import time
import traceback
from typing import Any, AsyncIterator, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from agent_tools.infra.config import config
from agent_tools.infra.error_handler import ErrorCategory, ValidationFailedError, classify_error
from agent_tools.infra.timeout import resolve_timeout, run_with_timeout
from agent_tools.logging.event_logger import record_tool_execution
from agent_tools.models.execution import (
    ExecutionContext,
    OptionsLike,
    ToolInvocation,
    coerce_invocation,
    coerce_options,
)
from agent_tools.models.response import ToolResponse
from agent_tools.models.tool import ToolDefinition
from agent_tools.services.schemas import validate_params
from agent_tools.services.tool_registry import ToolRegistry, global_registry

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error during tool execution"


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _error_message(error: BaseException) -> str:
    return str(error) or UNKNOWN_ERROR_MESSAGE


def _error_details(error: BaseException) -> Dict[str, Any]:
    """
    Build developer diagnostics for a failed execution.

    Stack traces are only included outside production-like environments.
    """
    details: Dict[str, Any] = {"error_type": classify_error(error).value}

    if not config.is_production():
        details["stack"] = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )

    cause = error.__cause__ or getattr(error, "cause", None)
    if cause:
        details["cause"] = str(cause)

    return details


async def _dispatch(tool: ToolDefinition, params: Any, context: ExecutionContext) -> Any:
    """
    Call the tool according to the shape its builder tagged it with.

    Coroutine functions are awaited on the loop; plain callables run in a
    worker thread so a blocking tool cannot stall the deadline.
    """
    args: Tuple[Any, ...] = (params, context) if tool.takes_context else (params,)
    execute = tool.execute

    if inspect.iscoroutinefunction(execute) or inspect.iscoroutinefunction(
        getattr(execute, "__call__", None)
    ):
        result = await execute(*args)
    else:
        result = await asyncio.to_thread(execute, *args)

    if inspect.isawaitable(result):
        result = await result
    return result


class ToolExecutor:
    """
    Executes tools looked up in a registry.

    Holds no per-call state, so concurrent calls (for the same or different
    tools) are independent. Identical concurrent calls are not de-duplicated.
    """

    def __init__(self, registry: Optional[ToolRegistry] = None):
        self._registry = registry

    @property
    def registry(self) -> ToolRegistry:
        return self._registry if self._registry is not None else global_registry

    async def execute_tool(
        self,
        tool: ToolDefinition,
        params: Any,
        options: OptionsLike = None,
    ) -> ToolResponse:
        """
        Execute an already-resolved tool with a deadline.

        Parameters are passed through as given; validation is the job of
        ``execute_tool_by_name``. The declared auth requirement of
        authenticated tools is expected to have been checked by the caller.

        Args:
            tool: Tool definition to run
            params: Parameters handed to the tool's execute function
            options: ExecutionOptions or equivalent mapping

        Returns:
            Success or error envelope with execution time and category

        Raises:
            Exception: The original fault, only when ``throw_on_error`` is set
            pydantic.ValidationError: If ``options`` carries an invalid context
                mapping, whatever ``throw_on_error`` says
        """
        opts = coerce_options(options)
        timeout_ms = resolve_timeout(opts.timeout)
        context = opts.context or ExecutionContext()
        start = time.monotonic()

        try:
            result = await run_with_timeout(_dispatch(tool, params, context), timeout_ms)
        except Exception as error:
            elapsed = _elapsed_ms(start)
            details = _error_details(error)
            record_tool_execution(
                tool_name=tool.name,
                category=tool.category.value,
                status="error",
                execution_time_ms=elapsed,
                error=_error_message(error),
                error_type=details["error_type"],
                context=context,
            )

            if opts.throw_on_error:
                raise

            return ToolResponse.failure(
                _error_message(error),
                execution_time=elapsed,
                category=tool.category,
                error_details=details,
            )

        elapsed = _elapsed_ms(start)
        record_tool_execution(
            tool_name=tool.name,
            category=tool.category.value,
            status="success",
            execution_time_ms=elapsed,
            context=context,
        )
        return ToolResponse.success(result, execution_time=elapsed, category=tool.category)

    def _resolve(
        self, name: str, raw_params: Any
    ) -> Tuple[Optional[ToolDefinition], Any, Optional[ToolResponse]]:
        """Look up and validate; returns (tool, validated_params, error_response)."""
        tool = self.registry.get(name)
        if tool is None:
            record_tool_execution(
                tool_name=name,
                category=None,
                status="error",
                execution_time_ms=0,
                error=f'Tool "{name}" not found',
                error_type=ErrorCategory.NOT_FOUND.value,
                registered=False,
            )
            return None, None, ToolResponse.failure(f'Tool "{name}" not found', execution_time=0)

        try:
            validated = validate_params(tool.parameters, {} if raw_params is None else raw_params)
        except ValidationFailedError as error:
            record_tool_execution(
                tool_name=name,
                category=tool.category.value,
                status="error",
                execution_time_ms=0,
                error=error.message,
                error_type=ErrorCategory.VALIDATION.value,
            )
            return tool, None, ToolResponse.failure(
                error.message,
                execution_time=0,
                error_details={
                    "tool_name": name,
                    "category": tool.category.value,
                    "validation_error": True,
                    "issues": list(error.issues),
                },
            )

        return tool, validated, None

    async def execute_tool_by_name(
        self,
        name: str,
        raw_params: Any = None,
        options: OptionsLike = None,
    ) -> ToolResponse:
        """
        Look up a tool, validate its parameters, then execute it.

        Unknown tools and validation failures are always returned as error
        envelopes, even with ``throw_on_error``; the tool's execute function
        is never called for invalid parameters.

        Options are normalized before any lookup, so an invalid context
        mapping raises ``pydantic.ValidationError`` instead of producing an
        envelope; it is a caller bug, like an invalid tool definition.
        """
        opts = coerce_options(options)
        tool, validated, failure = self._resolve(name, raw_params)
        if failure is not None:
            return failure
        return await self.execute_tool(tool, validated, opts)

    async def stream_tool_execution(
        self,
        name: str,
        params: Any = None,
        options: OptionsLike = None,
    ) -> AsyncIterator[ToolResponse]:
        """
        Stream the outcome of a tool call.

        Yields exactly one envelope: lookup and validation failures end the
        stream early, otherwise the execution envelope is yielded. With
        ``throw_on_error`` an execution fault propagates out of the iteration.
        """
        opts = coerce_options(options)
        tool, validated, failure = self._resolve(name, params)
        if failure is not None:
            yield failure
            return

        yield await self.execute_tool(tool, validated, opts)

    async def _execute_isolated(self, invocation: ToolInvocation) -> ToolResponse:
        start = time.monotonic()
        try:
            return await self.execute_tool_by_name(
                invocation.tool, invocation.params, invocation.options
            )
        except Exception as error:
            # Raised only when the item asked for throw_on_error
            logger.error(f"Batch item {invocation.tool} raised: {error}", exc_info=True)
            tool = self.registry.get(invocation.tool)
            details = _error_details(error)
            details["tool_name"] = invocation.tool
            return ToolResponse.failure(
                _error_message(error),
                execution_time=_elapsed_ms(start),
                category=tool.category if tool is not None else None,
                error_details=details,
            )

    async def batch_execute_tools(
        self,
        executions: Iterable[Union[ToolInvocation, Mapping[str, Any]]],
    ) -> List[ToolResponse]:
        """
        Execute several named tool calls concurrently.

        Results are positional (same order and length as the input). A fault
        in one item, including one it re-raises via its own
        ``throw_on_error``, is reported as that item's error envelope and
        never cancels its siblings.
        """
        invocations = [coerce_invocation(item) for item in executions]
        return list(
            await asyncio.gather(*(self._execute_isolated(item) for item in invocations))
        )


# Default executor bound to the global registry
default_executor = ToolExecutor()


def _executor_for(registry: Optional[ToolRegistry]) -> ToolExecutor:
    return ToolExecutor(registry) if registry is not None else default_executor


async def execute_tool(
    tool: ToolDefinition,
    params: Any,
    options: OptionsLike = None,
) -> ToolResponse:
    """Execute a tool definition directly; see ``ToolExecutor.execute_tool``."""
    return await default_executor.execute_tool(tool, params, options)


async def execute_tool_by_name(
    name: str,
    params: Any = None,
    options: OptionsLike = None,
    registry: Optional[ToolRegistry] = None,
) -> ToolResponse:
    """Execute a registered tool by name (global registry unless given)."""
    return await _executor_for(registry).execute_tool_by_name(name, params, options)


def stream_tool_execution(
    name: str,
    params: Any = None,
    options: OptionsLike = None,
    registry: Optional[ToolRegistry] = None,
) -> AsyncIterator[ToolResponse]:
    """Stream a registered tool's outcome; use with ``async for``."""
    return _executor_for(registry).stream_tool_execution(name, params, options)


async def batch_execute_tools(
    executions: Iterable[Union[ToolInvocation, Mapping[str, Any]]],
    registry: Optional[ToolRegistry] = None,
) -> List[ToolResponse]:
    """Execute named tool calls concurrently with positional, isolated results."""
    return await _executor_for(registry).batch_execute_tools(executions)
