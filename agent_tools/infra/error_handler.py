"""Error taxonomy for tool definition, lookup, validation and execution."""

import asyncio
from enum import Enum
from typing import List, Optional


class ErrorCategory(str, Enum):
    """Categories of errors, by the stage that produced them."""
    DEFINITION = "definition"  # Tool could not be constructed
    REGISTRY = "registry"  # Registry rejected a definition
    NOT_FOUND = "not_found"  # No tool registered under the requested name
    VALIDATION = "validation"  # Parameters did not match the tool's schema
    TIMEOUT = "timeout"  # Tool exceeded its deadline
    EXECUTION = "execution"  # Tool's own logic raised


class ToolError(Exception):
    """Base exception for the tool subsystem."""
    category: ErrorCategory = ErrorCategory.EXECUTION

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidDefinitionError(ToolError):
    """A tool definition is missing a required field."""
    category = ErrorCategory.DEFINITION


class MissingNameError(ToolError):
    """A definition without a name was handed to a registry."""
    category = ErrorCategory.REGISTRY


class DuplicateToolNameWarning(UserWarning):
    """A registry entry was overwritten by a definition with the same name."""


class ToolNotFoundError(ToolError):
    """No tool is registered under the requested name."""
    category = ErrorCategory.NOT_FOUND

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f'Tool "{tool_name}" not found')


class ValidationFailedError(ToolError):
    """Parameters failed schema validation."""
    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, issues: Optional[List[str]] = None):
        self.issues = issues or [message]
        super().__init__(message)


class ToolTimeoutError(ToolError, TimeoutError):
    """Tool execution exceeded its deadline."""
    category = ErrorCategory.TIMEOUT

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Tool execution timed out after {timeout_ms}ms")


def classify_error(error: BaseException) -> ErrorCategory:
    """
    Classify an error into a category.

    Args:
        error: The exception to classify

    Returns:
        ErrorCategory for the error; anything raised by tool code that is not
        part of this taxonomy counts as an execution failure.
    """
    if isinstance(error, ToolError):
        return error.category

    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return ErrorCategory.TIMEOUT

    return ErrorCategory.EXECUTION
