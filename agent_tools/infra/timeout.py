"""Tool execution deadlines."""

import asyncio
import logging
from typing import Any, Awaitable, Optional

from agent_tools.infra.error_handler import ToolTimeoutError

logger = logging.getLogger(__name__)

# Timeout configurations
TOOL_EXECUTION_TIMEOUT_MS = 30000  # 30 seconds for tool execution


def resolve_timeout(timeout_ms: Optional[int]) -> int:
    """Return the effective timeout in milliseconds (falsy values use the default)."""
    return timeout_ms or TOOL_EXECUTION_TIMEOUT_MS


def _drain_abandoned(task: asyncio.Task) -> None:
    """Retrieve the outcome of a task nobody waits on anymore."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(f"Abandoned tool call finished with error: {error!r}")


async def run_with_timeout(awaitable: Awaitable[Any], timeout_ms: int) -> Any:
    """
    Race an awaitable against a deadline.

    On expiry the underlying task is cancelled and ToolTimeoutError is raised
    without waiting for the cancellation to land. Work that ignores
    cancellation (e.g. a function running in a worker thread) keeps running
    in the background; only the caller stops waiting. Errors raised by the
    awaitable itself propagate unchanged, including its own TimeoutErrors.

    Args:
        awaitable: Tool invocation to wait on
        timeout_ms: Deadline in milliseconds

    Raises:
        ToolTimeoutError: If the deadline fires first
    """
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task not in done:
        task.cancel()
        task.add_done_callback(_drain_abandoned)
        raise ToolTimeoutError(timeout_ms)

    return task.result()
