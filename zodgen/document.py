"""Typed model of the parts of an OpenAPI document the generator consumes.

``parse_document`` normalizes the raw mapping returned by the loader into
frozen pydantic models. Schema nodes form a discriminated union on
``kind``, so later stages can dispatch on the node class without guessing
at dict shapes.

Handles:
- Kind detection ($ref, enum, type, untyped objects/arrays)
- Parent ``required`` lists, plus the deprecated per-property boolean
- Path-item level parameters merged into each operation
- $ref parameters and request bodies
- header/cookie parameters (skipped)
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import SchemaParseError, ValidationError
from .loader import get_paths, get_schemas, get_servers, resolve_ref

logger = logging.getLogger(__name__)

COMPONENT_REF_PREFIX = "#/components/schemas/"

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

JSON_CONTENT_TYPE = "application/json"

_MISSING = object()


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SchemaBase(_Frozen):
    nullable: bool = False
    default: Any = None
    has_default: bool = False
    description: Optional[str] = None


class StringSchema(SchemaBase):
    kind: Literal["string"] = "string"
    format: Optional[str] = None
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None


class EnumSchema(SchemaBase):
    kind: Literal["enum"] = "enum"
    values: tuple[str, ...] = ()


class NumberSchema(SchemaBase):
    kind: Literal["number"] = "number"
    integer: bool = False
    minimum: Union[int, float, None] = None
    maximum: Union[int, float, None] = None


class BooleanSchema(SchemaBase):
    kind: Literal["boolean"] = "boolean"


class AnySchema(SchemaBase):
    kind: Literal["any"] = "any"


class ArraySchema(SchemaBase):
    kind: Literal["array"] = "array"
    items: SchemaNode = Field(default_factory=AnySchema)
    min_items: Optional[int] = None
    max_items: Optional[int] = None


class ObjectSchema(SchemaBase):
    kind: Literal["object"] = "object"
    properties: tuple[tuple[str, SchemaNode], ...] = ()
    required: frozenset[str] = frozenset()


class RefSchema(SchemaBase):
    kind: Literal["ref"] = "ref"
    target: str


SchemaNode = Annotated[
    Union[
        StringSchema,
        EnumSchema,
        NumberSchema,
        BooleanSchema,
        ArraySchema,
        ObjectSchema,
        RefSchema,
        AnySchema,
    ],
    Field(discriminator="kind"),
]

ArraySchema.model_rebuild()
ObjectSchema.model_rebuild()


class Parameter(_Frozen):
    name: str
    location: Literal["path", "query"]
    schema_node: SchemaNode
    required: bool = False
    nullable: bool = False
    default: Any = None
    has_default: bool = False
    description: Optional[str] = None


class RequestBody(_Frozen):
    schema_node: SchemaNode
    required: bool = False


class Operation(_Frozen):
    method: str
    path: str
    request_body: Optional[RequestBody] = None
    response_schema: Optional[SchemaNode] = None
    parameters: tuple[Parameter, ...] = ()
    summary: Optional[str] = None
    description: Optional[str] = None

    def params_in(self, location: str) -> tuple[Parameter, ...]:
        return tuple(p for p in self.parameters if p.location == location)


class Document(_Frozen):
    servers: tuple[str, ...] = ()
    schemas: tuple[tuple[str, SchemaNode], ...] = ()
    operations: tuple[Operation, ...] = ()

    @property
    def has_paths(self) -> bool:
        return bool(self.operations)


def _build(model: type[BaseModel], where: str, error: type[Exception], **fields: Any) -> Any:
    """Construct a model, reporting field errors against the document location."""
    try:
        return model(**fields)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise error(f"{where}: invalid {field}: {first['msg']}") from exc


def _common(raw: dict[str, Any]) -> dict[str, Any]:
    """Attributes shared by every schema kind."""
    default = raw.get("default", _MISSING)
    return {
        "nullable": bool(raw.get("nullable", False)),
        "default": None if default is _MISSING else default,
        "has_default": default is not _MISSING,
        "description": raw.get("description"),
    }


def _enum_value(value: Any) -> str:
    """Spell an enum value the way it appears in JSON."""
    return value if isinstance(value, str) else json.dumps(value)


def _parse_object(raw: dict[str, Any], where: str) -> ObjectSchema:
    properties = raw.get("properties") or {}
    if not isinstance(properties, dict):
        raise SchemaParseError(f"{where}: 'properties' must be a mapping")

    required_list = raw.get("required") or []
    if isinstance(required_list, bool):
        # Boolean marker on a nested object; the parent consumes it.
        required_list = []
    if not isinstance(required_list, list):
        raise SchemaParseError(f"{where}: 'required' must be a list of property names")
    required = set(required_list)

    parsed: list[tuple[str, SchemaNode]] = []
    for prop_name, prop_raw in properties.items():
        prop_where = f"{where}.{prop_name}"
        if isinstance(prop_raw, dict) and isinstance(prop_raw.get("required"), bool):
            # Deprecated convention: required flag on the property itself.
            if prop_raw["required"] and prop_name not in required:
                logger.warning(
                    "%s: boolean 'required' on a property is deprecated; "
                    "list the name in the parent's 'required' instead",
                    prop_where,
                )
                required.add(prop_name)
        parsed.append((prop_name, parse_schema(prop_raw, prop_where)))

    return _build(
        ObjectSchema,
        where,
        SchemaParseError,
        properties=tuple(parsed),
        required=frozenset(required),
        **_common(raw),
    )


def parse_schema(raw: Any, where: str = "schema") -> SchemaNode:
    """Normalize one raw schema mapping into a SchemaNode."""
    if raw is None or raw == {}:
        return AnySchema()
    if not isinstance(raw, dict):
        raise SchemaParseError(f"{where}: schema must be a mapping, got {type(raw).__name__}")

    if "$ref" in raw:
        ref = raw["$ref"]
        if not isinstance(ref, str) or not ref.startswith(COMPONENT_REF_PREFIX):
            raise SchemaParseError(f"{where}: unsupported reference {ref!r}")
        return _build(
            RefSchema,
            where,
            SchemaParseError,
            target=ref[len(COMPONENT_REF_PREFIX):],
            **_common(raw),
        )

    schema_type = raw.get("type")

    if "enum" in raw and schema_type in (None, "string"):
        values = raw["enum"]
        if not isinstance(values, list) or not values:
            raise SchemaParseError(f"{where}: enum must declare at least one value")
        return _build(
            EnumSchema,
            where,
            SchemaParseError,
            values=tuple(_enum_value(v) for v in values),
            **_common(raw),
        )

    if schema_type == "string":
        return _build(
            StringSchema,
            where,
            SchemaParseError,
            format=raw.get("format"),
            pattern=raw.get("pattern"),
            min_length=raw.get("minLength"),
            max_length=raw.get("maxLength"),
            **_common(raw),
        )
    if schema_type in ("number", "integer"):
        return _build(
            NumberSchema,
            where,
            SchemaParseError,
            integer=schema_type == "integer",
            minimum=raw.get("minimum"),
            maximum=raw.get("maximum"),
            **_common(raw),
        )
    if schema_type == "boolean":
        return _build(BooleanSchema, where, SchemaParseError, **_common(raw))
    if schema_type == "array" or (schema_type is None and "items" in raw):
        return _build(
            ArraySchema,
            where,
            SchemaParseError,
            items=parse_schema(raw.get("items"), f"{where}[]"),
            min_items=raw.get("minItems"),
            max_items=raw.get("maxItems"),
            **_common(raw),
        )
    if schema_type == "object" or (schema_type is None and "properties" in raw):
        return _parse_object(raw, where)

    return _build(AnySchema, where, SchemaParseError, **_common(raw))


def _parse_parameter(spec: dict[str, Any], raw: dict[str, Any], where: str) -> Parameter | None:
    if "$ref" in raw:
        raw = resolve_ref(spec, raw["$ref"])

    name = raw.get("name")
    location = raw.get("in")
    if not name or not location:
        raise ValidationError(f"{where}: parameter requires 'name' and 'in'")
    if location not in ("path", "query"):
        logger.debug("%s: skipping %s parameter %r", where, location, name)
        return None

    schema = parse_schema(raw.get("schema"), f"{where}.{name}")
    default = raw.get("default", _MISSING)
    if default is _MISSING and schema.has_default:
        default = schema.default

    return _build(
        Parameter,
        f"{where}.{name}",
        ValidationError,
        name=name,
        location=location,
        schema_node=schema,
        required=bool(raw.get("required", False)),
        nullable=bool(raw.get("nullable", schema.nullable)),
        default=None if default is _MISSING else default,
        has_default=default is not _MISSING,
        description=raw.get("description", schema.description),
    )


def _merge_parameters(
    spec: dict[str, Any],
    shared: list[Any],
    own: list[Any],
    where: str,
) -> tuple[Parameter, ...]:
    """Path-level parameters first; an operation parameter replaces a shared one in place."""
    merged: dict[tuple[str, str], Parameter] = {}
    for index, raw in enumerate(list(shared) + list(own)):
        if not isinstance(raw, dict):
            raise ValidationError(f"{where}: parameter #{index} must be a mapping")
        param = _parse_parameter(spec, raw, where)
        if param is not None:
            merged[(param.name, param.location)] = param
    return tuple(merged.values())


def _json_schema(spec: dict[str, Any], holder: Any) -> Any:
    """Return the raw application/json schema of a body or response, or _MISSING."""
    if not isinstance(holder, dict):
        return _MISSING
    if "$ref" in holder:
        holder = resolve_ref(spec, holder["$ref"])
    content = holder.get("content") or {}
    media = content.get(JSON_CONTENT_TYPE)
    if not isinstance(media, dict) or "schema" not in media:
        return _MISSING
    return media["schema"]


def _parse_operation(
    spec: dict[str, Any],
    method: str,
    path: str,
    raw: dict[str, Any],
    shared_params: list[Any],
) -> Operation:
    where = f"{method.upper()} {path}"

    request_body = None
    body_schema = _json_schema(spec, raw.get("requestBody"))
    if body_schema is not _MISSING:
        body_raw = raw["requestBody"]
        if "$ref" in body_raw:
            body_raw = resolve_ref(spec, body_raw["$ref"])
        request_body = RequestBody(
            schema_node=parse_schema(body_schema, f"{where} requestBody"),
            required=bool(body_raw.get("required", False)),
        )

    response_schema = None
    responses = raw.get("responses") or {}
    # YAML may load an unquoted 200 as an int key.
    success = responses.get("200", responses.get(200))
    raw_response = _json_schema(spec, success)
    if raw_response is not _MISSING:
        response_schema = parse_schema(raw_response, f"{where} response")

    return _build(
        Operation,
        where,
        ValidationError,
        method=method,
        path=path,
        request_body=request_body,
        response_schema=response_schema,
        parameters=_merge_parameters(spec, shared_params, raw.get("parameters") or [], where),
        summary=raw.get("summary"),
        description=raw.get("description"),
    )


def parse_document(spec: dict[str, Any]) -> Document:
    """Normalize a raw OpenAPI mapping into a Document."""
    if not isinstance(spec, dict):
        raise ValidationError("OpenAPI document must be a mapping")

    raw_schemas = get_schemas(spec)
    if not isinstance(raw_schemas, dict):
        raise ValidationError("components.schemas must be a mapping")
    schemas = tuple(
        (name, parse_schema(raw, name)) for name, raw in raw_schemas.items()
    )

    paths = get_paths(spec)
    if not isinstance(paths, dict):
        raise ValidationError("paths must be a mapping")

    operations: list[Operation] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            raise ValidationError(f"{path}: path item must be a mapping")
        shared_params = path_item.get("parameters") or []
        for method, raw_operation in path_item.items():
            if method.lower() not in HTTP_METHODS:
                continue
            if not isinstance(raw_operation, dict):
                raise ValidationError(f"{method.upper()} {path}: operation must be a mapping")
            operations.append(
                _parse_operation(spec, method.lower(), path, raw_operation, shared_params)
            )

    return _build(
        Document,
        "document",
        ValidationError,
        servers=tuple(get_servers(spec)),
        schemas=schemas,
        operations=tuple(operations),
    )
