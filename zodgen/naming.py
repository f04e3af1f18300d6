"""Convert HTTP method + path to TypeScript identifiers.

Pattern: {method}{PathTokens}{suffix}
  - each non-empty path segment loses its {braces}
  - the segment is split on "_" and every piece is capitalized
  - schema names capitalize the method, everything else keeps it lower-case

Examples:
  GET  /pets/{id}  + "Handler"      -> getPetsIdHandler
  POST /pets                        -> postPets
  POST /pets       + "RequestBody"  -> PostPetsRequestBody
  GET  /grooming_tools              -> getGroomingTools

No collision detection happens here; the synthesizer rejects duplicates.
"""

from __future__ import annotations

SCHEMA_SUFFIXES = ("RequestBody", "ResponseBody", "PathParams", "QueryParams")


def capitalize(word: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return word[:1].upper() + word[1:]


def _path_token(path: str) -> str:
    """Concatenate the capitalized pieces of every path segment."""
    tokens = []
    for segment in path.split("/"):
        if not segment:
            continue
        clean = segment.replace("{", "").replace("}", "")
        tokens.append("".join(capitalize(piece) for piece in clean.split("_")))
    return "".join(tokens)


def derive_name(method: str, path: str, suffix: str = "") -> str:
    """Build a lower-case-method identifier, e.g. 'getPetsIdHandler'."""
    return f"{method.lower()}{_path_token(path)}{suffix}"


def schema_name(method: str, path: str, suffix: str) -> str:
    """Build a synthesized schema name, e.g. 'PostPetsRequestBody'."""
    if suffix not in SCHEMA_SUFFIXES:
        raise ValueError(f"Unknown schema suffix: {suffix!r}")
    return f"{capitalize(method.lower())}{_path_token(path)}{suffix}"


def handler_name(method: str, path: str) -> str:
    return derive_name(method, path, "Handler")


def client_function_name(method: str, path: str) -> str:
    return derive_name(method, path)


def client_args_name(method: str, path: str) -> str:
    """Name of the arguments interface of a client function."""
    return f"{capitalize(client_function_name(method, path))}Args"


def schema_const_name(name: str) -> str:
    """Name of the exported zod constant for a named schema."""
    return f"{name}Schema"
