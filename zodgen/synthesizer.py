"""Decide which schemas a document implies and build them.

Component schemas come first, unsuffixed. Every operation then adds, in
order, its RequestBody, ResponseBody, PathParams and QueryParams schemas
when the operation has something to put in them.
"""

from __future__ import annotations

import logging

from .document import Document, Operation
from .errors import CodeGenerationError
from .ir import NamedSchema
from .naming import schema_name
from .schema_parser import build_parameter_schema, translate

logger = logging.getLogger(__name__)


def _operation_schemas(op: Operation) -> list[NamedSchema]:
    where = f"{op.method.upper()} {op.path}"
    named: list[NamedSchema] = []

    if op.request_body is not None:
        named.append(NamedSchema(
            name=schema_name(op.method, op.path, "RequestBody"),
            expr=translate(op.request_body.schema_node, f"{where} requestBody"),
            provenance="requestBody",
        ))

    if op.response_schema is not None:
        named.append(NamedSchema(
            name=schema_name(op.method, op.path, "ResponseBody"),
            expr=translate(op.response_schema, f"{where} response"),
            provenance="responseBody",
        ))

    path_params = op.params_in("path")
    if path_params:
        named.append(NamedSchema(
            name=schema_name(op.method, op.path, "PathParams"),
            expr=build_parameter_schema(path_params, f"{where} path"),
            provenance="pathParams",
        ))

    query_params = op.params_in("query")
    if query_params:
        named.append(NamedSchema(
            name=schema_name(op.method, op.path, "QueryParams"),
            expr=build_parameter_schema(query_params, f"{where} query"),
            provenance="queryParams",
        ))

    return named


def synthesize(document: Document) -> list[NamedSchema]:
    """Build every named schema of the document, in output order.

    Raises CodeGenerationError on duplicate names or on a reference to a
    component the document does not declare.
    """
    named = [
        NamedSchema(name=name, expr=translate(node, name), provenance="component")
        for name, node in document.schemas
    ]
    for op in document.operations:
        named.extend(_operation_schemas(op))

    seen: set[str] = set()
    for schema in named:
        if schema.name in seen:
            raise CodeGenerationError(f"Duplicate schema name: {schema.name}")
        seen.add(schema.name)

    components = {name for name, _ in document.schemas}
    for schema in named:
        for target in schema.expr.refs():
            if target not in components:
                raise CodeGenerationError(
                    f"{schema.name} references undeclared component schema {target!r}"
                )

    logger.debug(
        "synthesized %d schemas (%d components)", len(named), len(document.schemas)
    )
    return named


def recursive_components(named: list[NamedSchema]) -> set[str]:
    """Names of component schemas that reach themselves through references.

    Only components can be reference targets, so only they can sit on a
    cycle. Their consts need an explicit type annotation in the output.
    """
    graph = {s.name: set(s.expr.refs()) for s in named if s.provenance == "component"}
    recursive: set[str] = set()
    for start in graph:
        stack = list(graph[start])
        visited: set[str] = set()
        while stack:
            current = stack.pop()
            if current == start:
                recursive.add(start)
                break
            if current in visited:
                continue
            visited.add(current)
            stack.extend(graph.get(current, ()))
    return recursive
