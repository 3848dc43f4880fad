"""
treecutter.context - Render Context Builder
===========================================

Reads a template's configuration document and turns it, together with the
user's answers, into the frozen :class:`~treecutter.models.RenderContext`.

Pipeline
--------
    1. Read and parse cookiecutter.json in full (fail fast on bad JSON)
    2. For each top-level key, ask the input source for an answer
    3. Coerce the answer against the type of the key's default
    4. Freeze the result under the namespace key

The input source is any callable ``(name, default) -> str``. The CLI passes
a questionary-backed prompter; tests pass a dict lookup. With no input
source at all, every default is kept unchanged.

Usage Example
-------------
>>> from treecutter.context import build_context
>>> ctx = build_context(Path("template/cookiecutter.json"),
...                     lambda name, default: "")
>>> ctx.template_vars()["cookiecutter"]["project_name"]
'Demo'
"""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from treecutter.errors import ConfigParseError, ConfigReadError, InvalidInputError
from treecutter.models import (
    DEFAULT_NAMESPACE,
    FALSE_TOKENS,
    TRUE_TOKENS,
    RenderContext,
    TemplateVariable,
    VariableKind,
)


InputSource = Callable[[str, Any], str]


# =============================================================================
# Configuration Document
# =============================================================================

def load_config_document(path: Path) -> Any:
    """
    Read and decode the configuration document.

    Parameters
    ----------
    path : Path
        Path to cookiecutter.json.

    Returns
    -------
    Any
        The decoded JSON root. Usually a dict, but arrays and scalars are
        returned as-is.

    Raises
    ------
    ConfigReadError
        If the file doesn't exist or can't be read.
    ConfigParseError
        If the contents are not valid JSON.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Error reading JSON file: {e}", path) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Error decoding JSON file: {e}", path) from e


def list_variables(document: Any) -> list[TemplateVariable]:
    """
    List the prompted variables of a configuration document.

    Only the top-level keys of an object root are variables; any other
    root shape has none.
    """
    if not isinstance(document, dict):
        return []
    return [
        TemplateVariable(name=name, default=default)
        for name, default in document.items()
    ]


# =============================================================================
# Type Coercion
# =============================================================================

def _parse_bool(raw: str) -> bool:
    raw = raw.strip()
    if raw in TRUE_TOKENS:
        return True
    if raw in FALSE_TOKENS:
        return False
    msg = f"invalid boolean {raw!r}"
    raise ValueError(msg)


def _parse_number(raw: str) -> int | float:
    # JSON has a single number type, so an integer default accepts a fraction.
    try:
        return int(raw)
    except ValueError:
        return float(raw)


# STRING and OTHER answers are stored verbatim.
_PARSERS: dict[VariableKind, Callable[[str], Any]] = {
    VariableKind.INTEGER: _parse_number,
    VariableKind.FLOAT: float,
    VariableKind.BOOLEAN: _parse_bool,
}


def coerce_value(default: Any, raw: str, *, strict: bool = False) -> Any:
    """
    Convert a raw answer to the type of its default value.

    Parameters
    ----------
    default : Any
        The variable's default from the configuration document.

    raw : str
        The text the user typed.

    strict : bool, default=False
        If True, an answer that doesn't parse raises instead of falling
        back to the kind's zero value.

    Returns
    -------
    Any
        ``default`` unchanged if ``raw`` is empty; otherwise the parsed
        value (or the zero value of the kind on a lenient parse failure).

    Raises
    ------
    InvalidInputError
        In strict mode, if ``raw`` doesn't parse as the default's type.

    Examples
    --------
    >>> coerce_value(False, "")
    False
    >>> coerce_value(5, "7")
    7
    >>> coerce_value(5, "7.5")
    7.5
    >>> coerce_value(5, "seven")
    0
    >>> coerce_value({"a": 1}, "text")
    'text'
    """
    if raw == "":
        return default

    kind = VariableKind.from_default(default)
    parser = _PARSERS.get(kind)
    if parser is None:
        return raw

    try:
        return parser(raw)
    except ValueError as e:
        if strict:
            raise InvalidInputError(
                f"Expected a {kind.value} value, got {raw!r}"
            ) from e
        return kind.zero_value


# =============================================================================
# Context Construction
# =============================================================================

def build_context(
    config_path: Path,
    input_source: InputSource | None = None,
    *,
    namespace: str = DEFAULT_NAMESPACE,
    strict: bool = False,
) -> RenderContext:
    """
    Build the frozen render context for a template.

    Parameters
    ----------
    config_path : Path
        Path to the template's cookiecutter.json.

    input_source : InputSource | None
        Called once per top-level key, in document order, with the key and
        its default; returns the raw answer. ``None`` keeps all defaults.

    namespace : str, default="cookiecutter"
        Key under which the document root is exposed to templates.

    strict : bool, default=False
        Passed to :func:`coerce_value`.

    Returns
    -------
    RenderContext
        Immutable context for every render in the run.

    Raises
    ------
    ConfigReadError, ConfigParseError
        If the document can't be read or decoded. Raised before any
        prompting happens.
    InvalidInputError
        In strict mode, for an answer that doesn't parse.
    """
    document = load_config_document(config_path)

    if isinstance(document, dict) and input_source is not None:
        answers = {}
        for variable in list_variables(document):
            raw = input_source(variable.name, variable.default)
            answers[variable.name] = coerce_value(
                variable.default, raw, strict=strict
            )
        document = answers

    return RenderContext(namespace=namespace, values=copy.deepcopy(document))
