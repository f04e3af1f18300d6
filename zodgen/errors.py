"""Error taxonomy for zodgen.

Every error is terminal for the compilation run. Each carries a stable
``code`` so callers can tell the kinds apart without isinstance checks.
"""

from __future__ import annotations


class ZodgenError(Exception):
    """Base class for all generator errors."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(ZodgenError):
    """The OpenAPI document violates a structural precondition."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "VALIDATION_ERROR")


class SchemaParseError(ZodgenError):
    """A schema node cannot be translated."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "SCHEMA_PARSE_ERROR")


class ConfigurationError(ZodgenError):
    """Formatting configuration is outside the recognised options."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIGURATION_ERROR")


class CodeGenerationError(ZodgenError):
    """Generated declarations are internally inconsistent."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CODE_GENERATION_ERROR")
