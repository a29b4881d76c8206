"""Tool execution event logging."""

import logging
from typing import Optional

from agent_tools.infra.metrics import (
    tool_call_duration,
    tool_calls_total,
    tool_timeouts_total,
    tool_validation_failures_total,
)
from agent_tools.models.execution import ExecutionContext

logger = logging.getLogger(__name__)

# Metric label for names with no registered tool
UNKNOWN_TOOL_LABEL = "unknown"


def record_tool_execution(
    tool_name: str,
    category: Optional[str],
    status: str,
    execution_time_ms: int,
    error: Optional[str] = None,
    error_type: Optional[str] = None,
    context: Optional[ExecutionContext] = None,
    registered: bool = True,
) -> None:
    """
    Record one tool execution as a structured log line and Prometheus samples.

    Args:
        tool_name: Name of the executed tool
        category: Tool category value (e.g. 'search'); None when unknown
        status: 'success' | 'error' | 'partial'
        execution_time_ms: Wall-clock duration in milliseconds
        error: Human-readable error message for failed executions
        error_type: ErrorCategory value for failed executions (e.g. 'timeout')
        context: Execution context, for trace/conversation correlation
        registered: False when no tool is registered under ``tool_name``; the
            metrics then use a fixed label and only the log line keeps the name
    """
    category_label = category or "unknown"
    tool_label = tool_name if registered else UNKNOWN_TOOL_LABEL

    tool_calls_total.labels(tool_name=tool_label, category=category_label, status=status).inc()
    tool_call_duration.labels(tool_name=tool_label, category=category_label).observe(
        execution_time_ms / 1000
    )
    if error_type == "timeout":
        tool_timeouts_total.labels(tool_name=tool_label).inc()
    elif error_type == "validation":
        tool_validation_failures_total.labels(tool_name=tool_label).inc()

    extra = {
        "tool_name": tool_name,
        "tool_category": category_label,
        "status": status,
        "latency_ms": execution_time_ms,
    }
    if context is not None:
        extra["trace_id"] = context.trace_id
        extra["conversation_id"] = context.conversation_id
        extra["user_id"] = context.user_id
    if error:
        extra["error"] = error
        extra["error_type"] = error_type

    if status == "success":
        logger.info(f"Tool {tool_name} completed in {execution_time_ms}ms", extra=extra)
    else:
        logger.warning(f"Tool {tool_name} failed after {execution_time_ms}ms: {error}", extra=extra)
