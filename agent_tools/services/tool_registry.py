"""In-process registry of tool definitions."""

import logging
import threading
import warnings
from typing import Any, Dict, List, Optional, Union

from agent_tools.infra.error_handler import DuplicateToolNameWarning, MissingNameError
from agent_tools.infra.metrics import registered_tools
from agent_tools.models.tool import ToolCategory, ToolDefinition
from agent_tools.services.schemas import to_json_schema

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Catalogue of tool definitions keyed by unique name.

    Safe to share between threads and tasks: every operation takes the
    registry lock, and ``register`` is the only write besides ``clear``.
    Listings follow registration order; re-registering a name replaces the
    definition in place.
    """

    def __init__(self, track_metrics: bool = False):
        self._tools: Dict[str, ToolDefinition] = {}
        self._lock = threading.RLock()
        self._track_metrics = track_metrics

    def register(self, tool: ToolDefinition) -> None:
        """
        Register a tool, overwriting any previous tool with the same name.

        Raises:
            MissingNameError: If the tool has no name
        """
        name = getattr(tool, "name", None)
        if not name:
            raise MissingNameError("Tool name is required for registration")

        with self._lock:
            if name in self._tools:
                logger.warning(f'Tool with name "{name}" already exists and will be overridden.')
                warnings.warn(
                    f'Tool with name "{name}" already exists and will be overridden.',
                    DuplicateToolNameWarning,
                    stacklevel=2,
                )
            self._tools[name] = tool
            self._update_gauge()

        logger.debug(f"Registered tool: {name}")

    def get(self, name: str) -> Optional[ToolDefinition]:
        """Get a tool by name."""
        with self._lock:
            return self._tools.get(name)

    def get_all(self) -> List[ToolDefinition]:
        """Get all registered tools in registration order."""
        with self._lock:
            return list(self._tools.values())

    def has(self, name: str) -> bool:
        """Check if a tool exists in the registry."""
        with self._lock:
            return name in self._tools

    def names(self) -> List[str]:
        """Get list of all tool names."""
        with self._lock:
            return list(self._tools.keys())

    def get_by_category(self, category: Union[ToolCategory, str]) -> List[ToolDefinition]:
        """Get tools in a category."""
        category = ToolCategory(category)
        return [tool for tool in self.get_all() if tool.category == category]

    def get_by_tag(self, tag: str) -> List[ToolDefinition]:
        """Get tools carrying the exact tag."""
        return [tool for tool in self.get_all() if tool.has_tag(tag)]

    def to_agent_tool_list(self) -> List[Dict[str, Any]]:
        """
        Project every tool into the shape exposed to an LLM's function calling.

        Only name, description, JSON Schema parameters, category and tags are
        included; execute functions and auth requirements never leave the
        registry.
        """
        agent_tools = []
        for tool in self.get_all():
            entry: Dict[str, Any] = {
                "name": tool.name,
                "description": tool.description,
                "parameters": to_json_schema(tool.parameters),
                "category": tool.category.value,
            }
            if tool.tags:
                entry["tags"] = list(tool.tags)
            agent_tools.append(entry)
        return agent_tools

    def clear(self) -> None:
        """Remove every tool. Intended for test isolation."""
        with self._lock:
            self._tools.clear()
            self._update_gauge()
        logger.debug("Cleared tool registry")

    def _update_gauge(self) -> None:
        if self._track_metrics:
            registered_tools.set(len(self._tools))

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools


# Process-wide default registry
global_registry = ToolRegistry(track_metrics=True)


def create_tool_registry() -> ToolRegistry:
    """Create an isolated registry (tests, multi-tenant setups)."""
    return ToolRegistry()


def register_tool(tool: ToolDefinition) -> None:
    """Register a tool in the global registry."""
    global_registry.register(tool)


def get_tool(name: str) -> Optional[ToolDefinition]:
    """Get a tool from the global registry."""
    return global_registry.get(name)


def get_all_tools() -> List[ToolDefinition]:
    """Get all tools from the global registry."""
    return global_registry.get_all()


def has_tool(name: str) -> bool:
    """Check if a tool exists in the global registry."""
    return global_registry.has(name)


def get_tools_by_category(category: Union[ToolCategory, str]) -> List[ToolDefinition]:
    return global_registry.get_by_category(category)


def get_tools_by_tag(tag: str) -> List[ToolDefinition]:
    return global_registry.get_by_tag(tag)


def to_agent_tool_list() -> List[Dict[str, Any]]:
    return global_registry.to_agent_tool_list()


def clear_tools() -> None:
    """Clear all tools from the global registry (primarily for tests)."""
    global_registry.clear()
