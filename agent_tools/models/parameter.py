"""Parameter schema model: a small tagged-variant AST describing tool inputs."""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


class SchemaKind(str, Enum):
    """Discriminator for ParameterSchema nodes."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ENUM = "enum"
    ANY = "any"


class _NoDefault:
    """Sentinel type for schemas without a default value."""

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class ParameterSchema:
    """
    Immutable descriptor of an input shape.

    Built by the factory functions in ``agent_tools.services.schemas`` and
    never mutated afterwards; use ``with_options`` to derive a changed copy.
    An OBJECT schema whose ``properties`` is None accepts any mapping as-is.
    """
    kind: SchemaKind
    description: str = ""
    required: bool = True
    default: Any = NO_DEFAULT
    min_length: Optional[int] = None  # string / array
    max_length: Optional[int] = None  # string / array
    minimum: Optional[float] = None  # number
    maximum: Optional[float] = None  # number
    pattern: Optional[str] = None  # string
    integer: bool = False  # number
    enum_values: Optional[Tuple[str, ...]] = None  # enum
    items: Optional["ParameterSchema"] = None  # array
    properties: Optional[Mapping[str, "ParameterSchema"]] = None  # object

    def __post_init__(self):
        if self.properties is not None and not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        if self.enum_values is not None and not isinstance(self.enum_values, tuple):
            object.__setattr__(self, "enum_values", tuple(self.enum_values))

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def with_options(self, **changes: Any) -> "ParameterSchema":
        """Return a copy of this schema with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def validate(self, value: Any) -> Any:
        """Validate ``value`` against this schema; see ``validate_params``."""
        from agent_tools.services.schemas import validate_params
        return validate_params(self, value)
