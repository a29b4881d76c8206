"""Tests for tool definition builders."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from agent_tools.infra.error_handler import InvalidDefinitionError
from agent_tools.models.tool import AuthRequirement, ToolCategory, ToolShape
from agent_tools.services.schemas import create_object_param, create_string_param
from agent_tools.services.tool_factory import (
    define_authenticated_tool,
    define_contextual_tool,
    define_tool,
)
from agent_tools.services.tool_registry import global_registry


class TestDefineTool:
    """Test plain tool definitions."""

    def test_defaults(self, text_schema):
        tool = define_tool("echo", "Echo text", text_schema, AsyncMock())

        assert tool.shape == ToolShape.PLAIN
        assert tool.category == ToolCategory.CUSTOM
        assert tool.version is None
        assert tool.tags is None
        assert tool.auth is None
        assert tool.takes_context is False

    def test_auto_registers_in_global_registry(self, text_schema):
        tool = define_tool("echo", "Echo text", text_schema, AsyncMock())

        assert global_registry.get("echo") is tool

    def test_auto_register_disabled(self, text_schema):
        define_tool("echo", "Echo text", text_schema, AsyncMock(), auto_register=False)

        assert not global_registry.has("echo")

    def test_registers_in_injected_registry(self, registry, text_schema):
        tool = define_tool("echo", "Echo text", text_schema, AsyncMock(), registry=registry)

        assert registry.get("echo") is tool
        assert not global_registry.has("echo")

    def test_category_string_and_tags(self, text_schema):
        tool = define_tool(
            "search",
            "Search the web",
            text_schema,
            AsyncMock(),
            category="search",
            version="1.2.0",
            tags=["web", "lookup", "web"],
            auto_register=False,
        )

        assert tool.category == ToolCategory.SEARCH
        assert tool.version == "1.2.0"
        assert tool.tags == ("web", "lookup")
        assert tool.has_tag("web")
        assert not tool.has_tag("Web")

    def test_unknown_category_rejected(self, text_schema):
        with pytest.raises(InvalidDefinitionError, match="Unknown tool category"):
            define_tool("x", "X", text_schema, AsyncMock(), category="nonsense")

    @pytest.mark.parametrize("name,description,message", [
        ("", "Echo", "Tool name is required"),
        ("echo", "", "Tool description is required"),
    ])
    def test_missing_name_or_description(self, text_schema, name, description, message):
        with pytest.raises(InvalidDefinitionError) as exc_info:
            define_tool(name, description, text_schema, AsyncMock())

        assert exc_info.value.message == message
        assert len(global_registry) == 0

    def test_missing_parameters(self):
        with pytest.raises(InvalidDefinitionError, match="Tool parameters schema is required"):
            define_tool("echo", "Echo", None, AsyncMock())

    def test_parameters_must_be_schema(self):
        with pytest.raises(InvalidDefinitionError, match="must be a ParameterSchema"):
            define_tool("echo", "Echo", {"type": "object"}, AsyncMock())

    def test_missing_execute(self, text_schema):
        with pytest.raises(InvalidDefinitionError, match="Tool execute function is required"):
            define_tool("echo", "Echo", text_schema, None)

    def test_execute_must_be_callable(self, text_schema):
        with pytest.raises(InvalidDefinitionError, match="Tool execute must be callable"):
            define_tool("echo", "Echo", text_schema, "not callable")

    def test_definition_is_frozen(self, text_schema):
        tool = define_tool("echo", "Echo", text_schema, AsyncMock(), auto_register=False)

        with pytest.raises(AttributeError):
            tool.name = "other"


class TestDefineContextualTool:
    """Test contextual tool definitions."""

    def test_shape_is_contextual(self, registry, text_schema):
        tool = define_contextual_tool(
            "whoami", "Current user", text_schema, MagicMock(), registry=registry,
        )

        assert tool.shape == ToolShape.CONTEXTUAL
        assert tool.takes_context is True
        assert tool.auth is None
        assert registry.has("whoami")


class TestDefineAuthenticatedTool:
    """Test authenticated tool definitions."""

    def test_auth_from_mapping(self, registry):
        schema = create_object_param("Args", {"to": create_string_param("Recipient")})

        tool = define_authenticated_tool(
            "send_email",
            "Send an email",
            schema,
            AsyncMock(),
            {"provider": "google", "scopes": ["gmail.send"]},
            category=ToolCategory.EMAIL,
            registry=registry,
        )

        assert tool.shape == ToolShape.AUTHENTICATED
        assert tool.takes_context is True
        assert tool.auth == AuthRequirement(provider="google", scopes=("gmail.send",))
        assert tool.auth.to_dict() == {"provider": "google", "scopes": ["gmail.send"]}

    def test_auth_requirement_instance(self, text_schema):
        auth = AuthRequirement(provider="slack")

        tool = define_authenticated_tool(
            "post", "Post message", text_schema, AsyncMock(), auth, auto_register=False,
        )

        assert tool.auth.provider == "slack"
        assert tool.auth.scopes is None

    @pytest.mark.parametrize("auth", [None, {}, {"scopes": ["read"]}, {"provider": ""}])
    def test_provider_required(self, text_schema, auth):
        with pytest.raises(InvalidDefinitionError, match="Authentication provider is required"):
            define_authenticated_tool("post", "Post", text_schema, AsyncMock(), auth)

        assert not global_registry.has("post")
