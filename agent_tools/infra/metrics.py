"""Prometheus metrics for tool registration and execution."""

from prometheus_client import Counter, Histogram, Gauge, generate_latest

# Tool metrics
tool_calls_total = Counter(
    "tool_calls_total",
    "Total tool calls",
    ["tool_name", "category", "status"],
)

tool_call_duration = Histogram(
    "tool_call_duration_seconds",
    "Tool call duration in seconds",
    ["tool_name", "category"],
)

tool_timeouts_total = Counter(
    "tool_timeouts_total",
    "Tool calls abandoned after exceeding their deadline",
    ["tool_name"],
)

tool_validation_failures_total = Counter(
    "tool_validation_failures_total",
    "Tool calls rejected by parameter validation",
    ["tool_name"],
)

# Registry metrics
registered_tools = Gauge(
    "registered_tools",
    "Number of tools in the global registry",
)


def get_metrics_text() -> bytes:
    """Get Prometheus metrics in exposition format."""
    return generate_latest()
