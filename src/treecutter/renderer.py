"""
treecutter.renderer - Jinja2 Template Rendering
===============================================

Every file name and every file body in a template tree goes through this
module. There are two render modes on purpose:

``render_strict``
    Used for file contents. Parse and execution errors are raised as
    :class:`~treecutter.errors.TemplateSyntaxError` /
    :class:`~treecutter.errors.TemplateExecutionError` so a broken template
    stops the run instead of producing a half-rendered file.

``render_lenient``
    Used for paths. Any error returns the input unchanged, so one bad
    directory name does not block its siblings from being generated.

Environment
-----------
Templates share one Jinja2 configuration:

- ``StrictUndefined``: referencing a missing variable is an error
- autoescaping disabled (we generate code, not HTML)
- ``keep_trailing_newline`` and no block trimming, so text outside the
  placeholders is reproduced exactly
- line endings follow the template: CRLF sources render with CRLF
"""

from __future__ import annotations

import jinja2
from jinja2 import Environment, StrictUndefined

from treecutter.errors import TemplateExecutionError, TemplateSyntaxError
from treecutter.models import RenderContext


_envs: dict[str, Environment] = {}


def create_jinja_env(newline_sequence: str = "\n") -> Environment:
    """
    Create the Jinja2 environment used for all rendering.

    Parameters
    ----------
    newline_sequence : str, default="\\n"
        Line ending Jinja2 writes for every newline in the template.

    Returns
    -------
    Environment
        Environment configured for verbatim code generation.
    """
    return Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        newline_sequence=newline_sequence,
    )


def get_jinja_env(newline_sequence: str = "\n") -> Environment:
    """Return the shared environment for a line ending, creating it on first use."""
    if newline_sequence not in _envs:
        _envs[newline_sequence] = create_jinja_env(newline_sequence)
    return _envs[newline_sequence]


def detect_newline(text: str) -> str:
    """
    Line ending a template is written with.

    Jinja2 rewrites every line ending to one sequence, so a template using
    CRLF is rendered with CRLF throughout.
    """
    return "\r\n" if "\r\n" in text else "\n"


def render_strict(text: str, context: RenderContext) -> str:
    """
    Render ``text`` against ``context``, raising on any template error.

    Parameters
    ----------
    text : str
        Template source.

    context : RenderContext
        Values to substitute.

    Returns
    -------
    str
        The fully rendered text.

    Raises
    ------
    TemplateSyntaxError
        If ``text`` does not parse.
    TemplateExecutionError
        If rendering fails, e.g. an undefined variable or an operation
        on a value of the wrong type.
    """
    env = get_jinja_env(detect_newline(text))
    try:
        template = env.from_string(text)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateSyntaxError(
            f"Error parsing template: {e.message}", lineno=e.lineno
        ) from e

    try:
        return template.render(**context.template_vars())
    except Exception as e:
        raise TemplateExecutionError(f"Error rendering template: {e}") from e


def render_lenient(
    text: str,
    context: RenderContext,
    warnings: list[str] | None = None,
) -> str:
    """
    Render ``text``, falling back to it unchanged on any template error.

    Parameters
    ----------
    text : str
        Template source (a relative or absolute path string).

    context : RenderContext
        Values to substitute.

    warnings : list[str] | None
        If given, a diagnostic is appended for each fallback.

    Returns
    -------
    str
        The rendered text, or ``text`` itself if rendering failed.
    """
    try:
        return render_strict(text, context)
    except (TemplateSyntaxError, TemplateExecutionError) as e:
        if warnings is not None:
            warnings.append(f"Could not render '{text}': {e}")
        return text
