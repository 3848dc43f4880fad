"""
pytest configuration and shared fixtures for treecutter tests.

Fixtures defined here are automatically available to all tests.

Fixtures
--------
make_template : Callable
    Factory writing a template tree from a ``{relative_path: content}`` dict.

demo_template : Path
    A small template whose project directory is named after a variable.

output_dir : Path
    Empty directory for generated output.
"""

import json
from collections.abc import Callable
from pathlib import Path

import pytest


TreeSpec = dict[str, "str | bytes | dict"]


def write_tree(root: Path, files: TreeSpec) -> Path:
    """
    Write files under ``root``.

    Keys are relative paths. ``str`` values are written as UTF-8 text,
    ``bytes`` verbatim, and ``dict`` values as JSON. A key ending in ``/``
    creates an empty directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        path = root / relative
        if relative.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        elif isinstance(content, dict):
            path.write_text(json.dumps(content), encoding="utf-8")
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_template(tmp_path: Path) -> Callable[..., Path]:
    """
    Provide a factory for template directories.

    Returns
    -------
    Callable[..., Path]
        ``make_template(files, name="template")`` writes the tree under
        ``tmp_path / name`` and returns its root.
    """

    def factory(files: TreeSpec, name: str = "template") -> Path:
        return write_tree(tmp_path / name, files)

    return factory


@pytest.fixture
def demo_template(make_template: Callable[..., Path]) -> Path:
    """A template with one templated directory and README."""
    return make_template({
        "cookiecutter.json": {"project_name": "Demo"},
        "{{cookiecutter.project_name}}/README.md": "# {{cookiecutter.project_name}}",
    }, name="demo")


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Directory to generate into (not created)."""
    return tmp_path / "output"


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in our test suite."""
    config.addinivalue_line(
        "markers", "integration: marks tests that spawn subprocesses"
    )
