"""Load an OpenAPI document from disk.

YAML and JSON documents are both accepted; ``.json`` files are read with
the json module, everything else with PyYAML.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .config import SPEC_PATH
from .errors import ValidationError


def load_spec(path: Path | None = None) -> dict[str, Any]:
    """Load the OpenAPI document from disk."""
    spec_file = Path(path or SPEC_PATH)
    with open(spec_file, encoding="utf-8") as f:
        if spec_file.suffix.lower() == ".json":
            spec = json.load(f)
        else:
            spec = yaml.safe_load(f)

    if not isinstance(spec, dict):
        raise ValidationError(f"{spec_file} does not contain an OpenAPI document")
    return spec


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    return (spec.get("components") or {}).get("schemas") or {}


def get_servers(spec: dict[str, Any]) -> list[str]:
    """Extract server base URLs in declared order."""
    return [
        server["url"]
        for server in spec.get("servers") or []
        if isinstance(server, dict) and "url" in server
    ]


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer in the spec."""
    if not ref.startswith("#/"):
        raise ValidationError(f"Only local references are supported: {ref}")
    node: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise ValidationError(f"Unresolvable reference: {ref}")
        node = node[part]
    return node
