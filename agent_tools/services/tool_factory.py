"""Builders for tool definitions."""

from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from agent_tools.infra.error_handler import InvalidDefinitionError
from agent_tools.models.parameter import ParameterSchema
from agent_tools.models.tool import AuthRequirement, ToolCategory, ToolDefinition, ToolShape
from agent_tools.services.tool_registry import ToolRegistry, global_registry


AuthLike = Union[AuthRequirement, Mapping[str, Any]]


def _validate_common(
    name: str,
    description: str,
    parameters: Optional[ParameterSchema],
    execute: Optional[Callable[..., Any]],
) -> None:
    """Validation shared by every builder."""
    if not name:
        raise InvalidDefinitionError("Tool name is required")

    if not description:
        raise InvalidDefinitionError("Tool description is required")

    if parameters is None:
        raise InvalidDefinitionError("Tool parameters schema is required")

    if not isinstance(parameters, ParameterSchema):
        raise InvalidDefinitionError(
            f"Tool parameters must be a ParameterSchema, got {type(parameters).__name__}"
        )

    if execute is None:
        raise InvalidDefinitionError("Tool execute function is required")

    if not callable(execute):
        raise InvalidDefinitionError("Tool execute must be callable")


def _resolve_category(category: Union[ToolCategory, str, None]) -> ToolCategory:
    if not category:
        return ToolCategory.CUSTOM
    try:
        return ToolCategory(category)
    except ValueError:
        raise InvalidDefinitionError(f"Unknown tool category: {category}")


def _normalize_tags(tags: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    if tags is None:
        return None
    # Deduplicate, keeping first occurrence order
    return tuple(dict.fromkeys(tags))


def _resolve_auth(auth: Optional[AuthLike]) -> AuthRequirement:
    if isinstance(auth, AuthRequirement):
        provider, scopes = auth.provider, auth.scopes
    elif auth:
        provider, scopes = auth.get("provider"), auth.get("scopes")
    else:
        provider, scopes = None, None

    if not provider:
        raise InvalidDefinitionError("Authentication provider is required for authenticated tools")

    return AuthRequirement(
        provider=provider,
        scopes=tuple(scopes) if scopes is not None else None,
    )


def _build(
    shape: ToolShape,
    name: str,
    description: str,
    parameters: ParameterSchema,
    execute: Callable[..., Any],
    category: Union[ToolCategory, str, None],
    version: Optional[str],
    tags: Optional[Iterable[str]],
    auth: Optional[AuthRequirement],
    auto_register: bool,
    registry: Optional[ToolRegistry],
) -> ToolDefinition:
    tool = ToolDefinition(
        name=name,
        description=description,
        parameters=parameters,
        execute=execute,
        shape=shape,
        category=_resolve_category(category),
        version=version or None,
        tags=_normalize_tags(tags),
        auth=auth,
    )

    if auto_register:
        (registry if registry is not None else global_registry).register(tool)

    return tool


def define_tool(
    name: str,
    description: str,
    parameters: ParameterSchema,
    execute: Callable[[Any], Any],
    *,
    category: Union[ToolCategory, str, None] = None,
    version: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    auto_register: bool = True,
    registry: Optional[ToolRegistry] = None,
) -> ToolDefinition:
    """
    Define a plain tool, called as ``execute(params)``.

    Args:
        name: Unique tool name
        description: Description shown to the agent
        parameters: Schema the raw parameters are validated against
        execute: Sync or async callable implementing the tool
        category: Category for filtering (default: custom)
        version: Optional version string
        tags: Optional tags
        auto_register: Register into ``registry`` (default: global registry)
        registry: Target registry for auto-registration

    Raises:
        InvalidDefinitionError: If a required field is missing
    """
    _validate_common(name, description, parameters, execute)
    return _build(
        ToolShape.PLAIN, name, description, parameters, execute,
        category, version, tags, None, auto_register, registry,
    )


def define_contextual_tool(
    name: str,
    description: str,
    parameters: ParameterSchema,
    execute: Callable[[Any, Any], Any],
    *,
    category: Union[ToolCategory, str, None] = None,
    version: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    auto_register: bool = True,
    registry: Optional[ToolRegistry] = None,
) -> ToolDefinition:
    """Define a tool called as ``execute(params, context)``."""
    _validate_common(name, description, parameters, execute)
    return _build(
        ToolShape.CONTEXTUAL, name, description, parameters, execute,
        category, version, tags, None, auto_register, registry,
    )


def define_authenticated_tool(
    name: str,
    description: str,
    parameters: ParameterSchema,
    execute: Callable[[Any, Any], Any],
    auth: AuthLike,
    *,
    category: Union[ToolCategory, str, None] = None,
    version: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    auto_register: bool = True,
    registry: Optional[ToolRegistry] = None,
) -> ToolDefinition:
    """
    Define a contextual tool that declares an auth requirement.

    The requirement (provider and optional scopes) is carried on the
    definition for the caller's auth layer; it is not checked here.

    Raises:
        InvalidDefinitionError: If a required field or ``auth.provider`` is missing
    """
    _validate_common(name, description, parameters, execute)
    requirement = _resolve_auth(auth)
    return _build(
        ToolShape.AUTHENTICATED, name, description, parameters, execute,
        category, version, tags, requirement, auto_register, registry,
    )
