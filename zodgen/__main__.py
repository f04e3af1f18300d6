"""Entry point: python -m zodgen

Reads an OpenAPI document (spec/openapi.yaml by default) and writes a
TypeScript module with zod schemas, handler types and client functions.
"""

from __future__ import annotations

from pathlib import Path

import click

from .codegen import generate
from .config import OUTPUT_PATH, SPEC_PATH, create_config
from .context_builder import build_context
from .errors import ZodgenError
from .loader import load_spec
from .logger import log_stage, setup_logging


@click.command()
@click.argument("schema", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=str(OUTPUT_PATH), show_default=True, type=click.Path(dir_okay=False, path_type=Path), help="Output path for the generated TypeScript file.")
@click.option("--handlers/--no-handlers", default=True, show_default=True, help="Emit server handler types.")
@click.option("--clients/--no-clients", default=True, show_default=True, help="Emit HTTP client functions.")
@click.option("--indentation", default=2, show_default=True, type=int, help="Spaces per indentation level.")
@click.option("--line-ending", default="LF", show_default=True, type=click.Choice(["LF", "CRLF"]), help="Line ending style.")
@click.option("--quote-mark", default="double", show_default=True, type=click.Choice(["single", "double"]), help="Quote style for generated strings.")
@click.option("-v", "--verbose", is_flag=True, help="Log each pipeline stage.")
def main(
    schema: Path | None,
    output: Path,
    handlers: bool,
    clients: bool,
    indentation: int,
    line_ending: str,
    quote_mark: str,
    verbose: bool,
) -> None:
    """Generate zod schemas and TypeScript types from an OpenAPI document."""
    setup_logging(verbose)
    try:
        config = create_config(
            indentation=indentation, line_ending=line_ending, quote_mark=quote_mark
        )
        with log_stage("load"):
            spec = load_spec(schema or SPEC_PATH)
        context = build_context(spec, config, handlers=handlers, clients=clients)
        path = generate(context, config, output)
    except ZodgenError as exc:
        raise click.ClickException(f"{type(exc).__name__}: {exc.message}") from exc

    click.echo(
        f"Generated {path} ({context['schema_count']} schemas, "
        f"{context['handler_count']} handlers, {context['client_count']} clients)"
    )


if __name__ == "__main__":
    main()
