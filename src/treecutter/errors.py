"""
treecutter.errors - Exception Hierarchy
=======================================

Every failure the generator can report is a subclass of
:class:`TreecutterError`. Library functions raise these; only the CLI turns
them into an exit code and a printed diagnostic.

Hierarchy
---------
::

    TreecutterError
    ├── ConfigReadError        cookiecutter.json missing or unreadable
    ├── ConfigParseError       cookiecutter.json (or settings) malformed
    ├── InvalidInputError      answer rejected in strict input mode
    ├── WalkAccessError        template tree entry cannot be listed/read
    ├── TemplateError
    │   ├── TemplateSyntaxError      template text does not parse
    │   └── TemplateExecutionError   undefined or mistyped reference
    ├── WriteError             output entry cannot be created or written
    ├── HookExecutionError     post_gen script failed
    └── SourceFetchError       remote template could not be cloned

The underlying exception (``OSError``, ``json.JSONDecodeError``,
``jinja2.TemplateError`` ...) is always chained via ``raise ... from``.
"""

from __future__ import annotations

from pathlib import Path


class TreecutterError(Exception):
    """
    Base class for all treecutter errors.

    Parameters
    ----------
    message : str
        Human-readable description of what went wrong.

    path : Path | None
        The file or directory the error relates to, if any.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class ConfigReadError(TreecutterError):
    """The configuration document is missing or cannot be read."""


class ConfigParseError(TreecutterError):
    """The configuration document is not valid JSON (or TOML for settings)."""


class InvalidInputError(TreecutterError):
    """A prompted value could not be coerced to its default's type."""


class WalkAccessError(TreecutterError):
    """A template tree entry could not be stat'ed, listed or read."""


class TemplateError(TreecutterError):
    """Base class for template rendering failures."""


class TemplateSyntaxError(TemplateError):
    """Template text failed to parse."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        lineno: int | None = None,
    ) -> None:
        super().__init__(message, path)
        self.lineno = lineno

    def __str__(self) -> str:
        text = super().__str__()
        if self.lineno is not None:
            return f"{text}, line {self.lineno}"
        return text


class TemplateExecutionError(TemplateError):
    """A template referenced an undefined or mistyped value while rendering."""


class WriteError(TreecutterError):
    """An output directory or file could not be created or written."""


class HookExecutionError(TreecutterError):
    """A post-generation script could not be run or exited with failure."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(message, path)
        self.returncode = returncode


class SourceFetchError(TreecutterError):
    """A remote template repository could not be cloned."""
