"""Post-render formatting of generated TypeScript."""

from __future__ import annotations

import re

from .config import GeneratorConfig

_LEADING_WS = re.compile(r"^[ \t]*")
_LINE_SPLIT = re.compile(r"\r?\n")


def format_indentation(code: str, config: GeneratorConfig) -> str:
    """Re-indent two-space levels to the configured width."""
    unit = " " * config.indentation
    lines = []
    for line in _LINE_SPLIT.split(code):
        level = len(_LEADING_WS.match(line).group(0)) // 2
        lines.append(unit * level + line.lstrip(" \t"))
    return "\n".join(lines)


def format_imports(code: str) -> str:
    """Hoist import lines below the leading comments, sorted, then one blank line."""
    lines = _LINE_SPLIT.split(code)
    header = []
    while lines and lines[0].lstrip().startswith(("/*", "//")):
        header.append(lines.pop(0))

    imports = []
    rest = []
    for line in lines:
        if line.strip().startswith("import "):
            imports.append(line.strip())
        else:
            rest.append(line)
    if not imports:
        return code
    while rest and not rest[0].strip():
        rest.pop(0)
    return "\n".join(header + sorted(set(imports)) + [""] + rest)


def format_code(code: str, config: GeneratorConfig) -> str:
    """Apply import ordering, indentation and line endings, in that order."""
    formatted = format_indentation(format_imports(code.strip()), config)
    return formatted.replace("\n", config.newline) + config.newline
