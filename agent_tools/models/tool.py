"""Tool definition model."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from agent_tools.models.parameter import ParameterSchema


class ToolCategory(str, Enum):
    """Tool categories for organization and filtering."""
    # Information retrieval
    SEARCH = "search"
    KNOWLEDGE_BASE = "knowledge-base"
    DATA_RETRIEVAL = "data-retrieval"

    # Content processing
    TEXT_PROCESSING = "text-processing"
    ANALYSIS = "analysis"
    TRANSLATION = "translation"

    # Generation
    CONTENT_GENERATION = "content-generation"
    CODE_GENERATION = "code-generation"
    IMAGE_GENERATION = "image-generation"

    # Integrations
    EMAIL = "email"
    CALENDAR = "calendar"
    MESSAGING = "messaging"
    CRM = "crm"
    DOCUMENT = "document"

    # System
    SYSTEM = "system"
    UTILITY = "utility"

    CUSTOM = "custom"


class ToolShape(str, Enum):
    """How a tool's execute function is called. Set once by the builder."""
    PLAIN = "plain"  # execute(params)
    CONTEXTUAL = "contextual"  # execute(params, context)
    AUTHENTICATED = "authenticated"  # execute(params, context) + declared auth requirement


@dataclass(frozen=True)
class AuthRequirement:
    """Declarative auth requirement checked by the caller's auth layer."""
    provider: str
    scopes: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "scopes": list(self.scopes) if self.scopes is not None else None,
        }


@dataclass(frozen=True)
class ToolDefinition:
    """A named, schema-described callable unit an agent may invoke."""
    name: str
    description: str
    parameters: ParameterSchema
    execute: Callable[..., Any]
    shape: ToolShape = ToolShape.PLAIN
    category: ToolCategory = ToolCategory.CUSTOM
    version: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None
    auth: Optional[AuthRequirement] = None

    @property
    def takes_context(self) -> bool:
        return self.shape in (ToolShape.CONTEXTUAL, ToolShape.AUTHENTICATED)

    def has_tag(self, tag: str) -> bool:
        return bool(self.tags) and tag in self.tags


class BuiltInTool(str, Enum):
    """Identifiers of the well-known tools agents are built with."""
    # Information retrieval
    SEARCH = "search"
    DOCUMENT_QUERY = "document-query"
    NEWS_SEARCH = "news-search"

    # Content processing
    SUMMARIZE = "summarize"
    CONTENT_ANALYZE = "content-analyze"
    TRANSLATE = "translate"

    # Content generation
    EMAIL_COMPOSER = "email-composer"
    SOCIAL_MEDIA_POST = "social-media-post"
    BLOG_POST_GENERATOR = "blog-post-generator"
    IMAGE_GENERATOR = "image-generator"

    # Integrations
    EMAIL_SENDER = "email-sender"
    CALENDAR_MANAGER = "calendar-manager"
    SMS_SENDER = "sms-sender"
    SLACK_MESSENGER = "slack-messenger"


BUILT_IN_TOOL_CATEGORIES: Dict[BuiltInTool, ToolCategory] = {
    BuiltInTool.SEARCH: ToolCategory.SEARCH,
    BuiltInTool.DOCUMENT_QUERY: ToolCategory.KNOWLEDGE_BASE,
    BuiltInTool.NEWS_SEARCH: ToolCategory.SEARCH,
    BuiltInTool.SUMMARIZE: ToolCategory.TEXT_PROCESSING,
    BuiltInTool.CONTENT_ANALYZE: ToolCategory.ANALYSIS,
    BuiltInTool.TRANSLATE: ToolCategory.TRANSLATION,
    BuiltInTool.EMAIL_COMPOSER: ToolCategory.CONTENT_GENERATION,
    BuiltInTool.SOCIAL_MEDIA_POST: ToolCategory.CONTENT_GENERATION,
    BuiltInTool.BLOG_POST_GENERATOR: ToolCategory.CONTENT_GENERATION,
    BuiltInTool.IMAGE_GENERATOR: ToolCategory.IMAGE_GENERATION,
    BuiltInTool.EMAIL_SENDER: ToolCategory.EMAIL,
    BuiltInTool.CALENDAR_MANAGER: ToolCategory.CALENDAR,
    BuiltInTool.SMS_SENDER: ToolCategory.MESSAGING,
    BuiltInTool.SLACK_MESSENGER: ToolCategory.MESSAGING,
}
