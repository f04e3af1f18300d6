"""Render IR expressions as zod source text."""

from __future__ import annotations

import json

from .ir import Check, Expr, Literal
from .naming import schema_const_name

_INDENT = "  "

DATE_REGEX = r"/^\d{4}-\d{2}-\d{2}$/"

_BASES: dict[str, str] = {
    "string": "z.string()",
    "number": "z.number()",
    "boolean": "z.boolean()",
    "any": "z.any()",
}

_NO_ARG_CHECKS: dict[str, str] = {
    "email": ".email()",
    "uuid": ".uuid()",
    "datetime": ".datetime({ offset: true })",
    "url": ".url()",
    "int": ".int()",
    "nullable": ".nullable()",
    "optional": ".optional()",
    "date": f".regex({DATE_REGEX})",
}


def quote_string(text: str, quote: str = '"') -> str:
    """Quote text as a JS string literal using the given quote mark."""
    body = json.dumps(text, ensure_ascii=False)[1:-1]
    if quote == "'":
        body = body.replace('\\"', '"').replace("'", "\\'")
    return f"{quote}{body}{quote}"


def _number(value: int | float) -> str:
    return str(value) if isinstance(value, int) else repr(value)


def render_literal(literal: Literal, quote: str = '"') -> str:
    if literal.kind == "null":
        return "null"
    if literal.kind == "boolean":
        return "true" if literal.value else "false"
    if literal.kind == "number":
        return _number(literal.value)
    if literal.kind == "string":
        return quote_string(literal.value, quote)
    if literal.kind == "array":
        return "[" + ", ".join(render_literal(item, quote) for item in literal.value) + "]"
    if literal.kind == "object":
        pairs = ", ".join(
            f"{quote_string(key, quote)}: {render_literal(item, quote)}"
            for key, item in literal.value
        )
        return "{" + pairs + "}"
    raise ValueError(f"Unknown literal kind: {literal.kind}")


def render_check(check: Check, quote: str = '"') -> str:
    if check.name in _NO_ARG_CHECKS:
        return _NO_ARG_CHECKS[check.name]
    if check.name in ("min", "max"):
        return f".{check.name}({_number(check.arg)})"
    if check.name == "regex":
        return f".regex(new RegExp({quote_string(check.arg, quote)}))"
    if check.name == "default":
        return f".default({render_literal(check.arg, quote)})"
    if check.name == "describe":
        return f".describe({quote_string(check.arg, quote)})"
    raise ValueError(f"Unknown check: {check.name}")


def _render_base(expr: Expr, quote: str, depth: int) -> str:
    if expr.kind in _BASES:
        return _BASES[expr.kind]
    if expr.kind == "enum":
        values = ", ".join(quote_string(v, quote) for v in expr.values)
        return f"z.enum([{values}])"
    if expr.kind == "array":
        return f"z.array({render_expr(expr.item, quote, depth)})"
    if expr.kind == "lazy":
        return f"z.lazy(() => {schema_const_name(expr.ref)})"
    if expr.kind == "object":
        if not expr.properties:
            return "z.object({}).strict()"
        inner = _INDENT * (depth + 1)
        lines = ",\n".join(
            f"{inner}{quote_string(name, quote)}: {render_expr(prop, quote, depth + 1)}"
            for name, prop in expr.properties
        )
        return f"z.object({{\n{lines}\n{_INDENT * depth}}}).strict()"
    return _BASES["any"]


def render_expr(expr: Expr, quote: str = '"', depth: int = 0) -> str:
    """Render an expression; nested objects indent two spaces per level."""
    return _render_base(expr, quote, depth) + "".join(
        render_check(check, quote) for check in expr.checks
    )


def _property_type(expr: Expr, quote: str, depth: int) -> tuple[str, bool]:
    """Return the output type of a property and whether its key is optional.

    A default removes ``undefined`` from the output, so the key is required.
    """
    names = expr.check_names()
    text = _type_base(expr, quote, depth)
    if "nullable" in names:
        text += " | null"
    optional = "optional" in names and "default" not in names
    if optional:
        text += " | undefined"
    return text, optional


def _type_base(expr: Expr, quote: str, depth: int) -> str:
    if expr.kind in _BASES:
        return expr.kind
    if expr.kind == "enum":
        return " | ".join(quote_string(v, quote) for v in expr.values)
    if expr.kind == "array":
        return f"Array<{_type_base(expr.item, quote, depth)}>"
    if expr.kind == "lazy":
        return expr.ref
    if expr.kind == "object":
        if not expr.properties:
            return "{}"
        inner = _INDENT * (depth + 1)
        lines = []
        for name, prop in expr.properties:
            text, optional = _property_type(prop, quote, depth + 1)
            lines.append(f"{inner}{quote_string(name, quote)}{'?' if optional else ''}: {text};")
        return "{\n" + "\n".join(lines) + f"\n{_INDENT * depth}}}"
    return "any"


def render_type(expr: Expr, quote: str = '"', depth: int = 0) -> str:
    """Render the TypeScript type a parsed value of this expression has.

    Used for components on a reference cycle, whose type cannot be inferred
    from their own initializer.
    """
    return _type_base(expr, quote, depth)


def schema_annotation(name: str) -> str:
    """Explicit const annotation for a recursive schema."""
    return f"z.ZodType<{name}, z.ZodTypeDef, unknown>"
