"""
treecutter.models - Pydantic Models for Templates and Settings
==============================================================

This module defines the data models shared by the generator pipeline.
We use Pydantic for the same reasons throughout treecutter:

1. **Validation**: settings files are checked with clear error messages
2. **Immutability**: the render context is frozen once it is built
3. **Type Safety**: full type hints that work with basedpyright/pyright

Architecture Notes
------------------
::

    VariableKind (enum)          closed set of prompt value types
    TemplateVariable             one top-level key of cookiecutter.json
    RenderContext (frozen)       namespace key -> document root value
    GeneratorSettings            knobs for a generation run

Usage Example
-------------
>>> from treecutter.models import RenderContext, VariableKind
>>> VariableKind.from_default(True)
<VariableKind.BOOLEAN: 'boolean'>
>>> ctx = RenderContext(values={"project_name": "Demo"})
>>> ctx.template_vars()
{'cookiecutter': {'project_name': 'Demo'}}
"""

from __future__ import annotations

import copy
import sys
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from treecutter.errors import ConfigParseError, ConfigReadError


# =============================================================================
# Constants
# =============================================================================

DEFAULT_CONFIG_FILENAME = "cookiecutter.json"
DEFAULT_NAMESPACE = "cookiecutter"
DEFAULT_HOOKS_DIR = "post_gen"
DEFAULT_HOOK_GLOB = "*.py"
DEFAULT_SKIP_DIRS = (".git",)

# Tokens accepted for boolean answers (same set as Go's strconv.ParseBool).
TRUE_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_TOKENS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


# =============================================================================
# Enumerations
# =============================================================================

class VariableKind(str, Enum):
    """
    The type of a template variable, inferred from its default value.

    Each kind has exactly one coercion rule (see
    :func:`treecutter.context.coerce_value`). JSON ``null``, objects and
    arrays all map to ``OTHER``, whose answers are stored as raw strings.

    Examples
    --------
    >>> VariableKind.from_default("x")
    <VariableKind.STRING: 'string'>
    >>> VariableKind.from_default(5)
    <VariableKind.INTEGER: 'integer'>
    >>> VariableKind.from_default([1, 2])
    <VariableKind.OTHER: 'other'>
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    OTHER = "other"

    @classmethod
    def from_default(cls, value: Any) -> VariableKind:
        """
        Infer the kind of a default value.

        ``bool`` is tested before ``int`` because ``True`` is an ``int``
        in Python.
        """
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str):
            return cls.STRING
        return cls.OTHER

    @property
    def zero_value(self) -> Any:
        """
        Value stored when a lenient parse of an answer fails.

        Returns
        -------
        Any
            ``0``, ``0.0`` or ``False`` for the numeric and boolean kinds,
            an empty string otherwise.
        """
        zeros: dict[VariableKind, Any] = {
            VariableKind.INTEGER: 0,
            VariableKind.FLOAT: 0.0,
            VariableKind.BOOLEAN: False,
        }
        return zeros.get(self, "")


# =============================================================================
# Template Models
# =============================================================================

class TemplateVariable(BaseModel):
    """
    A single variable declared in the configuration document.

    Attributes
    ----------
    name : str
        Top-level key in cookiecutter.json.

    default : Any
        The value from the document, used when the answer is empty.
    """

    name: str
    default: Any = None

    @property
    def kind(self) -> VariableKind:
        """Kind inferred from the default value."""
        return VariableKind.from_default(self.default)

    @property
    def prompt(self) -> str:
        """Prompt label shown to the user, e.g. ``project_name (Demo):``."""
        return f"{self.name} ({self.default}):"


class RenderContext(BaseModel):
    """
    The frozen variable mapping every render call reads from.

    The whole root of the configuration document is stored under a single
    namespace key so that templates write ``{{ cookiecutter.name }}``
    rather than a bare ``{{ name }}``. The root may be any JSON value.

    Attributes
    ----------
    namespace : str
        Name templates use to reach the values (default ``cookiecutter``).

    values : Any
        Root value of the configuration document after coercion.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = DEFAULT_NAMESPACE
    values: Any = None

    def template_vars(self) -> dict[str, Any]:
        """
        Build the variable mapping handed to Jinja2.

        A deep copy is returned on every call so nothing a template does
        can change what later renders see.

        Returns
        -------
        dict[str, Any]
            ``{namespace: values}``.
        """
        return {self.namespace: copy.deepcopy(self.values)}


# =============================================================================
# Settings
# =============================================================================

def _default_hook_command() -> list[str]:
    return [sys.executable]


class GeneratorSettings(BaseModel):
    """
    Configuration for a generation run.

    Defaults reproduce the conventional cookiecutter layout, so most users
    never need a settings file. When they do, it is a TOML file whose keys
    are these field names, either at the top level or under a
    ``[treecutter]`` table.

    Attributes
    ----------
    config_filename : str
        Basename of the configuration document. Files with this name are
        never copied to the output.

    namespace : str
        Top-level name under which templates address the context.

    skip_dirs : list[str]
        Directory names whose whole subtree is skipped during the walk.

    hooks_dir : str
        Directory inside the *output* tree holding post-generation scripts.

    hook_glob : str
        Glob selecting the scripts to run inside ``hooks_dir``.

    hook_command : list[str]
        Command prefix used to run each script; the script path is appended.

    strict_input : bool
        Reject (and re-ask for) answers that do not parse as their default's
        type instead of storing the zero value.

    Examples
    --------
    >>> settings = GeneratorSettings()
    >>> settings.config_filename
    'cookiecutter.json'
    >>> GeneratorSettings(hooks_dir="scripts").hooks_dir
    'scripts'
    """

    config_filename: str = Field(
        default=DEFAULT_CONFIG_FILENAME,
        description="Basename of the template configuration document",
    )
    namespace: str = Field(
        default=DEFAULT_NAMESPACE,
        description="Name templates use to reference the context",
    )
    skip_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_DIRS),
        description="Directory names skipped entirely during the walk",
    )
    hooks_dir: str = Field(
        default=DEFAULT_HOOKS_DIR,
        description="Output subdirectory holding post-generation scripts",
    )
    hook_glob: str = Field(
        default=DEFAULT_HOOK_GLOB,
        description="Glob pattern of scripts to run in hooks_dir",
    )
    hook_command: list[str] = Field(
        default_factory=_default_hook_command,
        min_length=1,
        description="Command prefix used to run each script",
    )
    strict_input: bool = Field(
        default=False,
        description="Reject malformed numeric/boolean answers",
    )

    @field_validator("config_filename", "hooks_dir")
    @classmethod
    def validate_basename(cls, v: str) -> str:
        """
        Ensure the value is a bare file or directory name.

        Both are compared against entry names, so a path separator could
        never match anything.
        """
        v = v.strip()
        if not v:
            msg = "Name must not be empty."
            raise ValueError(msg)
        if "/" in v or "\\" in v:
            msg = f"'{v}' must be a plain name, not a path."
            raise ValueError(msg)
        return v

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """The namespace must be usable as a Jinja2 variable name."""
        if not v.isidentifier():
            msg = f"Namespace '{v}' is not a valid identifier."
            raise ValueError(msg)
        return v

    @classmethod
    def from_toml(cls, path: Path) -> GeneratorSettings:
        """
        Load settings from a TOML file.

        Parameters
        ----------
        path : Path
            Path to the settings file.

        Returns
        -------
        GeneratorSettings
            Validated settings.

        Raises
        ------
        ConfigReadError
            If the file doesn't exist or can't be read.
        ConfigParseError
            If the file is not valid TOML or holds invalid values.
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigReadError(f"Cannot read settings file: {e}", path) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Invalid settings file: {e}", path) from e

        section = data.get("treecutter", data)
        try:
            return cls(**section)
        except ValidationError as e:
            raise ConfigParseError(f"Invalid settings: {e}", path) from e
