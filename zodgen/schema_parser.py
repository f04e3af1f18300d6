"""Translate schema nodes into validator expressions.

Handles:
- Object properties in declared order, wrapped nullable -> optional -> default -> describe
- Strict objects (undeclared keys rejected)
- Array item schemas and item-count bounds
- Enums as ordered literal alternations
- String formats (email, uuid, date-time, date, uri), patterns, length bounds
- Integer/number bounds
- $ref as a lazy reference, so recursive components compile
- Parameters wrapped into a strict object, using their own required flag
"""

from __future__ import annotations

import math
from typing import Any, Callable

from .document import (
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    NumberSchema,
    ObjectSchema,
    Parameter,
    RefSchema,
    SchemaNode,
    StringSchema,
)
from .errors import SchemaParseError
from .ir import Check, Expr, Literal

ANY = Expr(kind="any")

_STRING_FORMATS: dict[str, str] = {
    "email": "email",
    "uuid": "uuid",
    "date-time": "datetime",
    "date": "date",
    "uri": "url",
}


def to_literal(value: Any, where: str) -> Literal:
    """Copy a default value into a Literal, rejecting unsupported kinds."""
    if value is None:
        return Literal(kind="null")
    if isinstance(value, bool):
        return Literal(kind="boolean", value=value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise SchemaParseError(f"{where}: default value {value!r} is not a finite number")
        return Literal(kind="number", value=value)
    if isinstance(value, str):
        return Literal(kind="string", value=value)
    if isinstance(value, (list, tuple)):
        return Literal(
            kind="array",
            value=tuple(to_literal(item, f"{where}[{i}]") for i, item in enumerate(value)),
        )
    if isinstance(value, dict):
        return Literal(
            kind="object",
            value=tuple((str(k), to_literal(v, f"{where}.{k}")) for k, v in value.items()),
        )
    raise SchemaParseError(
        f"{where}: unsupported default value type: {type(value).__name__}"
    )


def _bounds(low: Any, high: Any) -> tuple[Check, ...]:
    checks = []
    if low is not None:
        checks.append(Check(name="min", arg=low))
    if high is not None:
        checks.append(Check(name="max", arg=high))
    return tuple(checks)


def apply_modifiers(
    expr: Expr,
    *,
    nullable: bool,
    optional: bool,
    has_default: bool,
    default: Any,
    description: str | None,
    where: str,
) -> Expr:
    """Wrap a property or parameter expression in the fixed modifier order."""
    checks = []
    if nullable:
        checks.append(Check(name="nullable"))
    if optional:
        checks.append(Check(name="optional"))
    if has_default:
        checks.append(Check(name="default", arg=to_literal(default, where)))
    if description is not None:
        checks.append(Check(name="describe", arg=str(description)))
    return expr.with_checks(*checks)


def _translate_object(node: ObjectSchema, where: str) -> Expr:
    properties = []
    for name, prop in node.properties:
        prop_where = f"{where}.{name}"
        expr = apply_modifiers(
            translate(prop, prop_where),
            nullable=prop.nullable,
            optional=name not in node.required,
            has_default=prop.has_default,
            default=prop.default,
            description=prop.description,
            where=prop_where,
        )
        properties.append((name, expr))
    return Expr(kind="object", properties=tuple(properties))


def _translate_array(node: ArraySchema, where: str) -> Expr:
    item = translate(node.items, f"{where}[]")
    return Expr(kind="array", item=item, checks=_bounds(node.min_items, node.max_items))


def _translate_enum(node: EnumSchema, where: str) -> Expr:
    return Expr(kind="enum", values=node.values)


def _translate_string(node: StringSchema, where: str) -> Expr:
    checks = []
    if node.format in _STRING_FORMATS:
        checks.append(Check(name=_STRING_FORMATS[node.format]))
    if node.pattern is not None:
        checks.append(Check(name="regex", arg=node.pattern))
    checks.extend(_bounds(node.min_length, node.max_length))
    return Expr(kind="string", checks=tuple(checks))


def _translate_number(node: NumberSchema, where: str) -> Expr:
    checks = [Check(name="int")] if node.integer else []
    for bound in (node.minimum, node.maximum):
        if isinstance(bound, float) and not math.isfinite(bound):
            raise SchemaParseError(f"{where}: bound {bound!r} is not a finite number")
    checks.extend(_bounds(node.minimum, node.maximum))
    return Expr(kind="number", checks=tuple(checks))


def _translate_boolean(node: BooleanSchema, where: str) -> Expr:
    return Expr(kind="boolean")


def _translate_ref(node: RefSchema, where: str) -> Expr:
    return Expr(kind="lazy", ref=node.target)


def _translate_any(node: SchemaNode, where: str) -> Expr:
    return ANY


_TRANSLATORS: dict[str, Callable[[Any, str], Expr]] = {
    "object": _translate_object,
    "array": _translate_array,
    "enum": _translate_enum,
    "string": _translate_string,
    "number": _translate_number,
    "boolean": _translate_boolean,
    "ref": _translate_ref,
    "any": _translate_any,
}


def translate(node: SchemaNode, where: str = "schema") -> Expr:
    """Translate a schema node; unknown kinds accept any value."""
    return _TRANSLATORS.get(node.kind, _translate_any)(node, where)


def build_parameter_schema(params: tuple[Parameter, ...], where: str) -> Expr:
    """Wrap parameters into a strict object keyed by parameter name."""
    properties = []
    for param in params:
        param_where = f"{where}.{param.name}"
        expr = apply_modifiers(
            translate(param.schema_node, param_where),
            nullable=param.nullable,
            optional=not param.required,
            has_default=param.has_default,
            default=param.default,
            description=param.description,
            where=param_where,
        )
        properties.append((param.name, expr))
    return Expr(kind="object", properties=tuple(properties))
