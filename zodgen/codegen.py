"""Render templates and write generated output.

Takes the context from context_builder and produces a single TypeScript
module.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .config import DEFAULT_CONFIG, OUTPUT_PATH, TEMPLATE_DIR, GeneratorConfig
from .formatting import format_code
from .logger import log_stage
from .render import quote_string


def _environment(config: GeneratorConfig) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["q"] = lambda text: quote_string(str(text), config.quote)
    return env


def render_module(context: dict[str, Any], config: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """Render and format the TypeScript module for a built context."""
    with log_stage("render module"):
        template = _environment(config).get_template("api.ts.j2")
        return format_code(template.render(**context), config)


def generate(
    context: dict[str, Any],
    config: GeneratorConfig = DEFAULT_CONFIG,
    output_path: Path | None = None,
) -> Path:
    """Render the module and write it, replacing any existing file."""
    output = render_module(context, config)

    path = Path(output_path or OUTPUT_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps CRLF endings exactly as formatted.
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(output)
    return path
