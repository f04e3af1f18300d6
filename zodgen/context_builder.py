"""Build the jinja2 template context for one compilation.

Runs the pipeline stages in fixed order: normalize the document,
synthesize named schemas, emit handler and client declarations, then
render each schema expression to zod text.
"""

from __future__ import annotations

from typing import Any

from .config import DEFAULT_CONFIG, GeneratorConfig
from .document import Document, parse_document
from .emitter import emit_clients, emit_handlers
from .logger import log_stage
from .naming import schema_const_name
from .render import render_expr, render_type, schema_annotation
from .synthesizer import recursive_components, synthesize


def build_context(
    spec: dict[str, Any] | Document,
    config: GeneratorConfig = DEFAULT_CONFIG,
    *,
    handlers: bool = True,
    clients: bool = True,
) -> dict[str, Any]:
    """Build the full template context from an OpenAPI document.

    ``spec`` may be the raw mapping from the loader or an already
    normalized Document.
    """
    with log_stage("normalize"):
        document = spec if isinstance(spec, Document) else parse_document(spec)

    with log_stage("synthesize"):
        named = synthesize(document)

    with log_stage("emit"):
        handler_decls = emit_handlers(document, named) if handlers else []
        client_decls = (
            emit_clients(document, named, reserved=[h.name for h in handler_decls])
            if clients
            else []
        )

    with log_stage("render schemas"):
        recursive = recursive_components(named)
        schemas = []
        for schema in named:
            entry = {
                "name": schema.name,
                "const": schema_const_name(schema.name),
                "code": render_expr(schema.expr, config.quote),
                "annotation": None,
                "type_code": None,
            }
            if schema.name in recursive:
                # A const on a reference cycle cannot infer its own type.
                entry["annotation"] = schema_annotation(schema.name)
                entry["type_code"] = render_type(schema.expr, config.quote)
            schemas.append(entry)

    return {
        "schemas": schemas,
        "handlers": handler_decls,
        "clients": client_decls,
        "include_handlers": handlers and bool(handler_decls),
        "include_clients": clients and bool(client_decls),
        "schema_count": len(schemas),
        "handler_count": len(handler_decls),
        "client_count": len(client_decls),
    }
