"""Parameter schema builders, validation, and JSON Schema conversion."""

import copy
import logging
import math
import re
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Pattern, Sequence, Union

from agent_tools.infra.error_handler import ValidationFailedError
from agent_tools.models.parameter import NO_DEFAULT, ParameterSchema, SchemaKind

logger = logging.getLogger(__name__)

# Marks a value that was not supplied (absent key or None)
_MISSING = object()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def create_string_param(
    description: str,
    *,
    required: bool = True,
    default: Any = NO_DEFAULT,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Union[str, Pattern, None] = None,
    enum: Optional[Sequence[str]] = None,
) -> ParameterSchema:
    """
    Create a string parameter.

    Supplying ``enum`` produces an ENUM schema and the length/pattern options
    are ignored.

    Raises:
        ValueError: If ``enum`` is given but empty
    """
    if enum is not None:
        values = tuple(enum)
        if not values:
            raise ValueError("enum must contain at least one value")
        return ParameterSchema(
            kind=SchemaKind.ENUM,
            description=description,
            required=required,
            default=default,
            enum_values=values,
        )

    if isinstance(pattern, re.Pattern):
        pattern = pattern.pattern

    return ParameterSchema(
        kind=SchemaKind.STRING,
        description=description,
        required=required,
        default=default,
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
    )


def create_number_param(
    description: str,
    *,
    required: bool = True,
    default: Any = NO_DEFAULT,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    integer: bool = False,
) -> ParameterSchema:
    """Create a number parameter; ``integer=True`` rejects fractional values."""
    return ParameterSchema(
        kind=SchemaKind.NUMBER,
        description=description,
        required=required,
        default=default,
        minimum=minimum,
        maximum=maximum,
        integer=integer,
    )


def create_boolean_param(
    description: str,
    *,
    required: bool = True,
    default: Any = NO_DEFAULT,
) -> ParameterSchema:
    """Create a boolean parameter."""
    return ParameterSchema(
        kind=SchemaKind.BOOLEAN,
        description=description,
        required=required,
        default=default,
    )


def create_array_param(
    description: str,
    item_schema: ParameterSchema,
    *,
    required: bool = True,
    default: Any = NO_DEFAULT,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> ParameterSchema:
    """Create an array parameter whose items all match ``item_schema``."""
    return ParameterSchema(
        kind=SchemaKind.ARRAY,
        description=description,
        required=required,
        default=default,
        min_length=min_length,
        max_length=max_length,
        items=item_schema,
    )


def create_object_param(
    description: str,
    properties: Mapping[str, ParameterSchema],
    *,
    required: bool = True,
    default: Any = NO_DEFAULT,
) -> ParameterSchema:
    """Create an object parameter with the given field schemas."""
    return ParameterSchema(
        kind=SchemaKind.OBJECT,
        description=description,
        required=required,
        default=default,
        properties=dict(properties),
    )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@lru_cache(maxsize=256)
def _compile(pattern: str) -> Pattern:
    return re.compile(pattern)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _join(path: str, key: Union[str, int]) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


def _validate(schema: ParameterSchema, value: Any, path: str, issues: List[str]) -> Any:
    where = path or "value"

    if value is None or value is _MISSING:
        if schema.has_default:
            return copy.deepcopy(schema.default)
        if schema.required:
            issues.append(f"{where}: Required")
        return _MISSING

    kind = schema.kind

    if kind == SchemaKind.ANY:
        return value

    if kind == SchemaKind.STRING:
        if not isinstance(value, str):
            issues.append(f"{where}: Expected string, received {_type_name(value)}")
            return value
        if schema.min_length is not None and len(value) < schema.min_length:
            issues.append(f"{where}: String must contain at least {schema.min_length} character(s)")
        if schema.max_length is not None and len(value) > schema.max_length:
            issues.append(f"{where}: String must contain at most {schema.max_length} character(s)")
        if schema.pattern is not None and not _compile(schema.pattern).search(value):
            issues.append(f"{where}: Invalid string, does not match pattern {schema.pattern}")
        return value

    if kind == SchemaKind.ENUM:
        if not isinstance(value, str) or value not in schema.enum_values:
            expected = " | ".join(f"'{v}'" for v in schema.enum_values)
            issues.append(f"{where}: Invalid enum value. Expected {expected}, received {value!r}")
        return value

    if kind == SchemaKind.NUMBER:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(f"{where}: Expected number, received {_type_name(value)}")
            return value
        if isinstance(value, float) and math.isnan(value):
            issues.append(f"{where}: Expected number, received nan")
            return value
        if schema.integer and not (isinstance(value, int) or value.is_integer()):
            issues.append(f"{where}: Expected integer, received float")
        if schema.minimum is not None and value < schema.minimum:
            issues.append(f"{where}: Number must be greater than or equal to {schema.minimum}")
        if schema.maximum is not None and value > schema.maximum:
            issues.append(f"{where}: Number must be less than or equal to {schema.maximum}")
        return value

    if kind == SchemaKind.BOOLEAN:
        if not isinstance(value, bool):
            issues.append(f"{where}: Expected boolean, received {_type_name(value)}")
        return value

    if kind == SchemaKind.ARRAY:
        if not isinstance(value, (list, tuple)):
            issues.append(f"{where}: Expected array, received {_type_name(value)}")
            return value
        if schema.min_length is not None and len(value) < schema.min_length:
            issues.append(f"{where}: Array must contain at least {schema.min_length} element(s)")
        if schema.max_length is not None and len(value) > schema.max_length:
            issues.append(f"{where}: Array must contain at most {schema.max_length} element(s)")
        if schema.items is None:
            return list(value)
        validated = []
        for index, item in enumerate(value):
            result = _validate(schema.items, item, _join(path, index), issues)
            validated.append(None if result is _MISSING else result)
        return validated

    if kind == SchemaKind.OBJECT:
        if not isinstance(value, Mapping):
            issues.append(f"{where}: Expected object, received {_type_name(value)}")
            return value
        if schema.properties is None:
            return dict(value)
        # Keys not declared in the schema are dropped
        validated: Dict[str, Any] = {}
        for name, field_schema in schema.properties.items():
            result = _validate(field_schema, value.get(name, _MISSING), _join(path, name), issues)
            if result is not _MISSING:
                validated[name] = result
        return validated

    issues.append(f"{where}: Unsupported schema kind {kind!r}")
    return value


def validate_params(schema: ParameterSchema, value: Any) -> Any:
    """
    Validate a value against a parameter schema.

    Every problem found is collected. A missing (absent or None) value takes
    the schema default when one is set, whether or not the field is required;
    without a default it is an issue for required fields and omitted otherwise.

    Returns:
        The validated value, with defaults filled in and undeclared object
        keys removed

    Raises:
        ValidationFailedError: If any issue was found; ``issues`` lists them
    """
    issues: List[str] = []
    result = _validate(schema, value, "", issues)
    if issues:
        raise ValidationFailedError("; ".join(issues), issues)
    return None if result is _MISSING else result


# ---------------------------------------------------------------------------
# JSON Schema conversion
# ---------------------------------------------------------------------------

def _to_json(schema: ParameterSchema) -> Dict[str, Any]:
    if not isinstance(schema, ParameterSchema):
        raise TypeError(f"Expected ParameterSchema, got {type(schema).__name__}")

    json_schema: Dict[str, Any] = {}
    kind = schema.kind

    if kind == SchemaKind.STRING:
        json_schema["type"] = "string"
        if schema.min_length is not None:
            json_schema["minLength"] = schema.min_length
        if schema.max_length is not None:
            json_schema["maxLength"] = schema.max_length
        if schema.pattern is not None:
            json_schema["pattern"] = schema.pattern
    elif kind == SchemaKind.ENUM:
        json_schema["type"] = "string"
        json_schema["enum"] = list(schema.enum_values)
    elif kind == SchemaKind.NUMBER:
        json_schema["type"] = "integer" if schema.integer else "number"
        if schema.minimum is not None:
            json_schema["minimum"] = schema.minimum
        if schema.maximum is not None:
            json_schema["maximum"] = schema.maximum
    elif kind == SchemaKind.BOOLEAN:
        json_schema["type"] = "boolean"
    elif kind == SchemaKind.ARRAY:
        json_schema["type"] = "array"
        if schema.items is not None:
            json_schema["items"] = _to_json(schema.items)
        if schema.min_length is not None:
            json_schema["minItems"] = schema.min_length
        if schema.max_length is not None:
            json_schema["maxItems"] = schema.max_length
    elif kind == SchemaKind.OBJECT:
        json_schema["type"] = "object"
        if schema.properties is None:
            json_schema["additionalProperties"] = True
        else:
            json_schema["properties"] = {
                name: _to_json(field_schema)
                for name, field_schema in schema.properties.items()
            }
            required = [
                name for name, field_schema in schema.properties.items()
                if field_schema.required and not field_schema.has_default
            ]
            if required:
                json_schema["required"] = required
    # SchemaKind.ANY carries no type

    if schema.description:
        json_schema["description"] = schema.description
    if schema.has_default:
        json_schema["default"] = schema.default

    return json_schema


def to_json_schema(schema: ParameterSchema) -> Dict[str, Any]:
    """
    Convert a ParameterSchema to a JSON Schema mapping.

    Never raises: on failure a warning is logged and ``{"type": "object"}``
    is returned.
    """
    try:
        return _to_json(schema)
    except Exception as e:
        logger.warning(f"Failed to convert parameter schema to JSON Schema: {e}")
        return {"type": "object"}


def _first_type(raw_type: Any) -> Optional[str]:
    if isinstance(raw_type, (list, tuple)):
        for candidate in raw_type:
            if candidate != "null":
                return candidate
        return None
    return raw_type


def _from_json(json_schema: Mapping[str, Any], required: bool = True) -> ParameterSchema:
    if not isinstance(json_schema, Mapping):
        raise TypeError(f"Expected a mapping, got {type(json_schema).__name__}")

    schema_type = _first_type(json_schema.get("type"))
    description = json_schema.get("description") or ""
    default = json_schema["default"] if "default" in json_schema else NO_DEFAULT
    common = {"description": description, "required": required, "default": default}

    if schema_type == "string":
        enum_values = json_schema.get("enum")
        if enum_values:
            return ParameterSchema(kind=SchemaKind.ENUM, enum_values=tuple(str(v) for v in enum_values), **common)
        return ParameterSchema(
            kind=SchemaKind.STRING,
            min_length=json_schema.get("minLength"),
            max_length=json_schema.get("maxLength"),
            pattern=json_schema.get("pattern"),
            **common,
        )

    if schema_type in ("number", "integer"):
        return ParameterSchema(
            kind=SchemaKind.NUMBER,
            minimum=json_schema.get("minimum"),
            maximum=json_schema.get("maximum"),
            integer=schema_type == "integer",
            **common,
        )

    if schema_type == "boolean":
        return ParameterSchema(kind=SchemaKind.BOOLEAN, **common)

    if schema_type == "array":
        items = json_schema.get("items")
        item_schema = _from_json(items) if isinstance(items, Mapping) else ParameterSchema(kind=SchemaKind.ANY)
        return ParameterSchema(
            kind=SchemaKind.ARRAY,
            items=item_schema,
            min_length=json_schema.get("minItems"),
            max_length=json_schema.get("maxItems"),
            **common,
        )

    if schema_type == "object":
        properties = json_schema.get("properties")
        if not isinstance(properties, Mapping):
            return ParameterSchema(kind=SchemaKind.OBJECT, properties=None, **common)
        required_fields = set(json_schema.get("required") or [])
        return ParameterSchema(
            kind=SchemaKind.OBJECT,
            properties={
                name: _from_json(field_schema, required=name in required_fields)
                for name, field_schema in properties.items()
            },
            **common,
        )

    return ParameterSchema(kind=SchemaKind.ANY, **common)


def from_json_schema(json_schema: Mapping[str, Any]) -> ParameterSchema:
    """
    Convert a JSON Schema mapping into a ParameterSchema.

    Unknown types become the ANY kind. Never raises: on failure a warning is
    logged and an ANY schema is returned.
    """
    try:
        return _from_json(json_schema)
    except Exception as e:
        logger.warning(f"Failed to convert JSON Schema to parameter schema: {e}")
        return ParameterSchema(kind=SchemaKind.ANY)
