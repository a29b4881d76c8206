"""Pytest configuration and fixtures."""

import pytest
import os
from dotenv import load_dotenv

# Load test environment variables
load_dotenv()

# Set test environment
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")

from agent_tools.models.execution import ExecutionContext
from agent_tools.services.schemas import create_string_param, create_object_param
from agent_tools.services.tool_registry import ToolRegistry, global_registry


@pytest.fixture(autouse=True)
def reset_global_registry():
    """Keep the process-wide registry empty between tests."""
    global_registry.clear()
    yield
    global_registry.clear()


@pytest.fixture
def registry():
    """Create an isolated tool registry."""
    return ToolRegistry()


@pytest.fixture
def text_schema():
    """Object schema with a single required 'text' field."""
    return create_object_param(
        "Echo parameters",
        {"text": create_string_param("Text to echo back")},
    )


@pytest.fixture
def execution_context():
    """Create test execution context."""
    return ExecutionContext(
        user={"id": "user-123", "email": "user@example.com"},
        conversation_id="conv-456",
        trace_id="trace-789",
        metadata={"channel": "web"},
    )
