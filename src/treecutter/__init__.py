"""
treecutter - Template-Driven Project Generator
==============================================

Generate a project from a template directory whose paths and file contents
are Jinja2 templates, driven by the variables declared in the template's
``cookiecutter.json``.

Features
--------
- **Path templating**: directory and file names may reference variables
- **Typed answers**: each answer is coerced to its default's JSON type
- **Remote templates**: ``https://`` git repositories are cloned on the fly
- **Hooks**: scripts in the generated ``post_gen/`` directory run last

Quick Start
-----------
```bash
treecutter generate ./my-template
treecutter generate https://github.com/acme/my-template.git --no-input
```

Example
-------
>>> from pathlib import Path
>>> from treecutter import create_project
>>> result = create_project(Path("my-template"), Path("out/my-template"))
>>> result.success
True

Architecture
------------
- ``cli``: Typer-based command line interface
- ``context``: reads cookiecutter.json and builds the render context
- ``renderer``: strict and lenient Jinja2 rendering
- ``generator``: walks the template tree and writes the output
- ``hooks``: runs post-generation scripts
- ``source``: resolves local and remote template sources
- ``prompts``: questionary-based answer collection
- ``models``: Pydantic models for variables, context and settings
- ``errors``: exception hierarchy

License
-------
MIT License - see LICENSE file for details.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "Technical-1"
__email__ = "jacobkanfer8@gmail.com"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from treecutter.context import build_context, coerce_value
from treecutter.errors import TreecutterError
from treecutter.generator import GenerationResult, create_project, generate_files
from treecutter.models import GeneratorSettings, RenderContext, VariableKind
from treecutter.renderer import render_lenient, render_strict


__all__ = [
    "GenerationResult",
    "GeneratorSettings",
    "RenderContext",
    "TreecutterError",
    "VariableKind",
    "__author__",
    "__version__",
    "build_context",
    "coerce_value",
    "create_project",
    "generate_files",
    "render_lenient",
    "render_strict",
]
