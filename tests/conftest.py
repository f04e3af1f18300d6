"""Shared fixtures: the bundled sample document and a minimal pet document."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from zodgen.loader import load_spec


@pytest.fixture(scope="session")
def sample_spec() -> dict[str, Any]:
    """The bundled spec/openapi.yaml, loaded once per session."""
    return load_spec()


@pytest.fixture
def pet_spec() -> dict[str, Any]:
    """Species enum + Pet object, one server, one path."""
    return {
        "openapi": "3.0.0",
        "servers": [{"url": "http://api.example.com/v1"}],
        "components": {
            "schemas": {
                "Species": {"type": "string", "enum": ["cat", "dog"]},
                "Pet": {
                    "type": "object",
                    "required": ["id", "species"],
                    "properties": {
                        "id": {"type": "integer"},
                        "name": {"type": "string", "nullable": True, "default": "Fluffy"},
                        "species": {"$ref": "#/components/schemas/Species"},
                    },
                },
            }
        },
        "paths": {
            "/pets/{id}": {
                "get": {
                    "parameters": [
                        {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
                    ],
                    "responses": {
                        "200": {
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Pet"},
                                }
                            }
                        },
                        "404": {"description": "Not found"},
                    },
                },
            },
        },
    }


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo setup_logging() so caplog keeps seeing zodgen records."""
    yield
    logger = logging.getLogger("zodgen")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
