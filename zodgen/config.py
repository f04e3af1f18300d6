"""Generator configuration.

Formatting options for the emitted TypeScript, plus the default locations
of the input document, templates and output file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError

SPEC_PATH = Path(__file__).parent.parent / "spec" / "openapi.yaml"
TEMPLATE_DIR = Path(__file__).parent / "templates"
OUTPUT_PATH = Path("api.ts")

LINE_ENDINGS: dict[str, str] = {"LF": "\n", "CRLF": "\r\n"}
QUOTE_MARKS: dict[str, str] = {"single": "'", "double": '"'}

_MESSAGES: dict[str, str] = {
    "indentation": "Indentation must be a non-negative number",
    "line_ending": 'Line ending must be either "LF" or "CRLF"',
    "quote_mark": 'Quote mark must be either "single" or "double"',
}


class GeneratorConfig(BaseModel):
    """Formatting options applied after rendering."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    indentation: StrictInt = Field(default=2, ge=0)
    line_ending: Literal["LF", "CRLF"] = "LF"
    quote_mark: Literal["single", "double"] = "double"

    @property
    def newline(self) -> str:
        return LINE_ENDINGS[self.line_ending]

    @property
    def quote(self) -> str:
        return QUOTE_MARKS[self.quote_mark]


DEFAULT_CONFIG = GeneratorConfig()


def create_config(**overrides: Any) -> GeneratorConfig:
    """Merge overrides over the defaults and validate the result.

    Raises ConfigurationError for unknown option names or invalid values.
    """
    try:
        return GeneratorConfig(**overrides)
    except PydanticValidationError as exc:
        messages = []
        for error in exc.errors():
            field = str(error["loc"][0])
            if error["type"] == "extra_forbidden":
                messages.append(f"Unknown configuration option: {field}")
            else:
                messages.append(_MESSAGES.get(field, error["msg"]))
        raise ConfigurationError("; ".join(messages)) from exc
