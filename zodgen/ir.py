"""Intermediate representation between translation and rendering.

The translator builds ``Expr`` trees; ``render`` turns them into zod
source text. Nothing here knows about TypeScript syntax.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Literal(_Node):
    """A default value as immutable data.

    kind is one of string, number, boolean, null, array, object. Arrays hold
    a tuple of Literals; objects hold a tuple of (key, Literal) pairs.
    """

    kind: str
    value: Any = None


class Check(_Node):
    """One chained refinement or modifier, e.g. ``.min(1)`` or ``.optional()``."""

    name: str
    arg: Union[Literal, int, float, str, None] = None


class Expr(_Node):
    kind: str
    values: tuple[str, ...] = ()
    item: Optional[Expr] = None
    properties: tuple[tuple[str, Expr], ...] = ()
    ref: Optional[str] = None
    checks: tuple[Check, ...] = ()

    def with_checks(self, *checks: Check) -> Expr:
        return self.model_copy(update={"checks": self.checks + checks})

    def check_names(self) -> list[str]:
        return [c.name for c in self.checks]

    def refs(self) -> list[str]:
        """Every lazy reference target in this tree, in traversal order."""
        found: list[str] = []
        if self.ref is not None:
            found.append(self.ref)
        if self.item is not None:
            found.extend(self.item.refs())
        for _, prop in self.properties:
            found.extend(prop.refs())
        return found


Expr.model_rebuild()


class NamedSchema(_Node):
    name: str
    expr: Expr
    provenance: str


class HandlerDeclaration(_Node):
    name: str
    request_type: Optional[str]
    path_params_type: Optional[str]
    query_params_type: Optional[str]
    response_type: Optional[str]


class ClientDeclaration(_Node):
    name: str
    args_name: str
    method: str
    path: str
    base_url: str
    request_type: Optional[str]
    path_params_type: Optional[str]
    query_params_type: Optional[str]
    response_type: Optional[str]
    body_required: bool = False
    summary: Optional[str] = None
