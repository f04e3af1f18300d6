"""Build handler-type and client-function declarations.

Declarations only name synthesized schemas; they never carry schema
content. Every name referenced must exist in the synthesized set, and
every declared name must be distinct from the other exported identifiers.
"""

from __future__ import annotations

from typing import Iterable

from .document import Document, Operation
from .errors import CodeGenerationError, ValidationError
from .ir import ClientDeclaration, HandlerDeclaration, NamedSchema
from .naming import (
    client_args_name,
    client_function_name,
    handler_name,
    schema_const_name,
    schema_name,
)


def exported_schema_names(schemas: list[NamedSchema]) -> set[str]:
    """The type and const identifiers the schema section exports."""
    return {s.name for s in schemas} | {schema_const_name(s.name) for s in schemas}


def _ensure_unique(names: Iterable[str], taken: Iterable[str]) -> None:
    seen = set(taken)
    for name in names:
        if name in seen:
            raise CodeGenerationError(f"Duplicate declaration name: {name}")
        seen.add(name)


def _slot_types(
    op: Operation, known: set[str]
) -> tuple[str | None, str | None, str | None, str | None]:
    """Return (request, path params, query params, response) schema names."""
    slots = (
        ("RequestBody", op.request_body is not None),
        ("PathParams", bool(op.params_in("path"))),
        ("QueryParams", bool(op.params_in("query"))),
        ("ResponseBody", op.response_schema is not None),
    )
    names: list[str | None] = []
    for suffix, present in slots:
        if not present:
            names.append(None)
            continue
        name = schema_name(op.method, op.path, suffix)
        if name not in known:
            raise CodeGenerationError(
                f"{op.method.upper()} {op.path} references schema {name} which was never synthesized"
            )
        names.append(name)
    request, path_params, query_params, response = names
    return request, path_params, query_params, response


def emit_handlers(document: Document, schemas: list[NamedSchema]) -> list[HandlerDeclaration]:
    """One handler type per operation. A document without paths yields none."""
    known = {s.name for s in schemas}
    handlers = []
    for op in document.operations:
        request, path_params, query_params, response = _slot_types(op, known)
        handlers.append(HandlerDeclaration(
            name=handler_name(op.method, op.path),
            request_type=request,
            path_params_type=path_params,
            query_params_type=query_params,
            response_type=response,
        ))
    _ensure_unique((h.name for h in handlers), exported_schema_names(schemas))
    return handlers


def emit_clients(
    document: Document,
    schemas: list[NamedSchema],
    reserved: Iterable[str] = (),
) -> list[ClientDeclaration]:
    """One client function per operation, defaulting to the first server URL.

    ``reserved`` holds names already declared elsewhere in the module, such
    as the handler types. Raises ValidationError when the document has paths
    but no servers, and CodeGenerationError when a client or args name
    collides with another declaration.
    """
    if not document.has_paths:
        return []
    if not document.servers:
        raise ValidationError("No servers found in OpenAPI document")

    base_url = document.servers[0]
    known = {s.name for s in schemas}
    clients = []
    for op in document.operations:
        request, path_params, query_params, response = _slot_types(op, known)
        clients.append(ClientDeclaration(
            name=client_function_name(op.method, op.path),
            args_name=client_args_name(op.method, op.path),
            method=op.method.upper(),
            path=op.path,
            base_url=base_url,
            request_type=request,
            path_params_type=path_params,
            query_params_type=query_params,
            response_type=response,
            body_required=op.request_body is not None and op.request_body.required,
            summary=op.summary,
        ))
    _ensure_unique(
        [name for c in clients for name in (c.name, c.args_name)],
        exported_schema_names(schemas) | set(reserved),
    )
    return clients
