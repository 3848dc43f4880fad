"""
treecutter.source - Template Source Resolution
==============================================

A template source is either a local directory or an ``https://`` URL of a
git repository. Remote templates are cloned into a temporary directory
that is removed once generation is finished.

>>> with resolve_template("https://github.com/acme/py-template.git") as tpl:
...     tpl.name
'py-template'
"""

from __future__ import annotations

import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from treecutter.errors import ConfigReadError, SourceFetchError


REMOTE_PREFIX = "https://"


@dataclass(frozen=True)
class TemplateSource:
    """
    A template ready to be read from disk.

    Attributes
    ----------
    path : Path
        Local template root.

    name : str
        Name of the template, used as the output directory name.

    remote : bool
        Whether the template was cloned.
    """

    path: Path
    name: str
    remote: bool = False


def is_remote(source: str) -> bool:
    """Whether ``source`` must be cloned rather than read locally."""
    return source.startswith(REMOTE_PREFIX)


def repository_name(source: str) -> str:
    """
    Derive the template name from a path or URL.

    Examples
    --------
    >>> repository_name("https://github.com/acme/py-template.git/")
    'py-template'
    >>> repository_name("templates/demo")
    'demo'
    """
    if is_remote(source):
        name = source.rstrip("/").rsplit("/", 1)[-1]
        return name.removesuffix(".git")
    return Path(source).expanduser().resolve().name


def clone_repository(url: str, dest: Path) -> Path:
    """
    Clone ``url`` into ``dest`` with git.

    Raises
    ------
    SourceFetchError
        If git isn't installed or the clone fails.
    """
    try:
        subprocess.run(
            ["git", "clone", "--depth", "1", url, str(dest)],
            capture_output=True,
            check=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise SourceFetchError("git is not installed", dest) from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
        raise SourceFetchError(f"Error cloning repo {url}: {detail}") from e
    return dest


@contextmanager
def resolve_template(source: str) -> Iterator[TemplateSource]:
    """
    Make a template source available as a local directory.

    Parameters
    ----------
    source : str
        Local path or ``https://`` repository URL.

    Yields
    ------
    TemplateSource
        The local template. A cloned template is deleted on exit.

    Raises
    ------
    SourceFetchError
        If cloning fails.
    ConfigReadError
        If a local source is not an existing directory.
    """
    name = repository_name(source)

    if is_remote(source):
        with tempfile.TemporaryDirectory(prefix="treecutter-") as tmp:
            path = clone_repository(source, Path(tmp) / name)
            yield TemplateSource(path=path, name=name, remote=True)
        return

    path = Path(source).expanduser()
    if not path.is_dir():
        raise ConfigReadError("Template directory does not exist", path)
    yield TemplateSource(path=path, name=name)
