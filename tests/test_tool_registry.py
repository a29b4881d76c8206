"""Tests for the tool registry."""

import pytest
from unittest.mock import AsyncMock

from agent_tools.infra.error_handler import DuplicateToolNameWarning, MissingNameError
from agent_tools.models.tool import ToolCategory, ToolDefinition
from agent_tools.services.schemas import create_object_param, create_string_param
from agent_tools.services.tool_factory import define_authenticated_tool, define_tool
from agent_tools.services.tool_registry import (
    ToolRegistry,
    clear_tools,
    create_tool_registry,
    get_all_tools,
    get_tool,
    get_tools_by_category,
    get_tools_by_tag,
    global_registry,
    has_tool,
    register_tool,
    to_agent_tool_list,
)


def _tool(name, category=None, tags=None, description="A tool"):
    return define_tool(
        name,
        description,
        create_object_param("Args", {"q": create_string_param("Query")}),
        AsyncMock(return_value="ok"),
        category=category,
        tags=tags,
        auto_register=False,
    )


class TestToolRegistry:
    """Test ToolRegistry instances."""

    def test_register_and_get(self, registry):
        tool = _tool("search")
        registry.register(tool)

        assert registry.get("search") is tool
        assert registry.has("search")
        assert "search" in registry
        assert len(registry) == 1

    def test_get_unknown_returns_none(self, registry):
        assert registry.get("missing") is None
        assert registry.has("missing") is False

    def test_registration_order_preserved(self, registry):
        for name in ("b", "a", "c"):
            registry.register(_tool(name))

        assert registry.names() == ["b", "a", "c"]
        assert [tool.name for tool in registry.get_all()] == ["b", "a", "c"]

    def test_duplicate_name_overwrites_with_warning(self, registry, caplog):
        first = _tool("search", description="First")
        second = _tool("search", description="Second")
        registry.register(first)
        registry.register(_tool("other"))

        with pytest.warns(DuplicateToolNameWarning, match='Tool with name "search" already exists'):
            registry.register(second)

        assert registry.get("search") is second
        assert len(registry) == 2
        # Overwrite keeps the original slot
        assert registry.names() == ["search", "other"]
        assert "will be overridden" in caplog.text

    def test_missing_name_rejected(self, registry):
        nameless = ToolDefinition(
            name="",
            description="No name",
            parameters=create_object_param("Args", {}),
            execute=AsyncMock(),
        )

        with pytest.raises(MissingNameError, match="Tool name is required for registration"):
            registry.register(nameless)

        assert len(registry) == 0

    def test_get_by_category(self, registry):
        registry.register(_tool("web", category=ToolCategory.SEARCH))
        registry.register(_tool("news", category="search"))
        registry.register(_tool("mail", category=ToolCategory.EMAIL))

        assert [t.name for t in registry.get_by_category(ToolCategory.SEARCH)] == ["web", "news"]
        assert [t.name for t in registry.get_by_category("email")] == ["mail"]
        assert registry.get_by_category(ToolCategory.CRM) == []

    def test_get_by_tag_is_exact(self, registry):
        registry.register(_tool("a", tags=["finance", "daily"]))
        registry.register(_tool("b", tags=["Finance"]))
        registry.register(_tool("c"))

        assert [t.name for t in registry.get_by_tag("finance")] == ["a"]
        assert registry.get_by_tag("weekly") == []

    def test_to_agent_tool_list(self, registry):
        registry.register(_tool("search", category=ToolCategory.SEARCH, tags=["web"]))
        define_authenticated_tool(
            "send",
            "Send an email",
            create_object_param("Args", {"to": create_string_param("Recipient")}),
            AsyncMock(),
            {"provider": "google"},
            category=ToolCategory.EMAIL,
            registry=registry,
        )

        entries = registry.to_agent_tool_list()

        assert entries == [
            {
                "name": "search",
                "description": "A tool",
                "parameters": {
                    "type": "object",
                    "properties": {"q": {"type": "string", "description": "Query"}},
                    "required": ["q"],
                    "description": "Args",
                },
                "category": "search",
                "tags": ["web"],
            },
            {
                "name": "send",
                "description": "Send an email",
                "parameters": {
                    "type": "object",
                    "properties": {"to": {"type": "string", "description": "Recipient"}},
                    "required": ["to"],
                    "description": "Args",
                },
                "category": "email",
            },
        ]
        for entry in entries:
            assert "execute" not in entry
            assert "auth" not in entry

    def test_clear(self, registry):
        registry.register(_tool("a"))
        registry.register(_tool("b"))

        registry.clear()

        assert len(registry) == 0
        assert registry.get_all() == []

    def test_registries_are_isolated(self):
        first = create_tool_registry()
        second = create_tool_registry()
        first.register(_tool("a"))

        assert isinstance(first, ToolRegistry)
        assert first.has("a")
        assert not second.has("a")
        assert not global_registry.has("a")


class TestGlobalRegistryFunctions:
    """Test module-level functions bound to the global registry."""

    def test_register_and_lookup(self):
        tool = _tool("calc", category=ToolCategory.UTILITY, tags=["math"])
        register_tool(tool)

        assert get_tool("calc") is tool
        assert has_tool("calc")
        assert get_all_tools() == [tool]
        assert get_tools_by_category("utility") == [tool]
        assert get_tools_by_tag("math") == [tool]
        assert to_agent_tool_list()[0]["name"] == "calc"

    def test_clear_tools(self):
        register_tool(_tool("calc"))

        clear_tools()

        assert get_all_tools() == []
        assert not has_tool("calc")
