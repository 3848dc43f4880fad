"""
treecutter.generator - Template Tree Materialization
====================================================

This module walks a template directory and writes the rendered copy of it
to an output directory. It is the core of treecutter.

Architecture
------------
The generator follows a pipeline pattern:

    1. Build the render context from cookiecutter.json (context.py)
    2. Create the output root
    3. Walk the template tree depth-first, directories before their children
    4. Render each entry's relative path (lenient) and, for files, contents
       (strict)
    5. Write the results into the mirrored output tree
    6. Run post-generation hooks (hooks.py)

The walk is designed to be:
- **Deterministic**: siblings are visited in name order
- **Fail-fast**: the first fatal error stops the walk
- **Non-destructive**: nothing already written is removed on failure

Entry Dispatch
--------------
For every entry under the template root:

    directory named in skip_dirs (.git)  -> skipped with its subtree
    directory                            -> created in the output
    file named config_filename           -> skipped
    file that is not UTF-8 text          -> copied byte-for-byte
    any other file                       -> rendered and written

Usage Example
-------------
>>> from treecutter.context import build_context
>>> from treecutter.generator import generate_files
>>> ctx = build_context(Path("template/cookiecutter.json"))
>>> result = generate_files(ctx, Path("template"), Path("out/template"))
>>> result.files_created
[PosixPath('out/template/Demo/README.md')]

See Also
--------
- renderer.py: strict and lenient rendering
- hooks.py: post_gen script execution
"""

from __future__ import annotations

import shutil
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel

from treecutter.context import build_context
from treecutter.errors import TemplateError, WalkAccessError, WriteError
from treecutter.hooks import run_post_gen_hooks
from treecutter.models import GeneratorSettings, RenderContext
from treecutter.renderer import render_lenient, render_strict


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from treecutter.context import InputSource


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Console for rich output
console = Console()


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class GenerationResult:
    """
    Result of materializing a template tree.

    Attributes
    ----------
    success : bool
        Whether the whole tree was written.

    output_path : Path
        Root directory of the generated project.

    directories_created : list[Path]
        Output directories, in the order they were created.

    files_created : list[Path]
        Output files that were rendered, in write order.

    files_copied : list[Path]
        Output files copied verbatim because they were not UTF-8 text.

    hooks_run : list[Path]
        Post-generation scripts that ran successfully.

    warnings : list[str]
        Path templates that could not be rendered and were used literally.
    """

    success: bool
    output_path: Path
    directories_created: list[Path] = field(default_factory=list)
    files_created: list[Path] = field(default_factory=list)
    files_copied: list[Path] = field(default_factory=list)
    hooks_run: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# =============================================================================
# Tree Walking
# =============================================================================


def _is_directory(path: Path, *, follow_symlinks: bool = False) -> bool:
    # Symlinks are never directories here; only the root is followed.
    try:
        mode = path.stat().st_mode if follow_symlinks else path.lstat().st_mode
    except OSError as e:
        raise WalkAccessError(f"Error accessing file or directory: {e}", path) from e
    return stat.S_ISDIR(mode)


def iter_template_entries(
    root: Path,
    *,
    skip_dirs: Iterable[str] = (".git",),
    exclude: Path | None = None,
) -> Iterator[tuple[Path, bool]]:
    """
    Walk a template tree depth-first, parents before children.

    Each directory is yielded before it is listed, so a consumer that
    creates the directory on receipt always does so before any of its
    children arrive.

    Parameters
    ----------
    root : Path
        Template root. The root itself is not yielded.

    skip_dirs : Iterable[str]
        Names of directories to skip together with their subtree.

    exclude : Path | None
        A directory (compared after resolving) that is skipped as well,
        used to keep an output tree nested in the template out of the walk.

    Yields
    ------
    tuple[Path, bool]
        The entry path and whether it is a directory.

    Raises
    ------
    WalkAccessError
        If the root is missing or not a directory, or any entry can't be
        stat'ed or listed.
    """
    if not _is_directory(root, follow_symlinks=True):
        raise WalkAccessError("Template path is not a directory", root)

    skipped = set(skip_dirs)
    excluded = exclude.resolve() if exclude is not None else None

    def walk(directory: Path) -> Iterator[tuple[Path, bool]]:
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise WalkAccessError(f"Error listing directory: {e}", directory) from e

        for child in children:
            if not _is_directory(child):
                yield child, False
                continue
            if child.name in skipped:
                continue
            if excluded is not None and child.resolve() == excluded:
                continue
            yield child, True
            yield from walk(child)

    yield from walk(root)


# =============================================================================
# File Writing
# =============================================================================


def ensure_directory(path: Path) -> None:
    """
    Create ``path`` and any missing parents; existing directories are fine.

    Raises
    ------
    WriteError
        If the directory can't be created (permissions, a file in the way).
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(f"Error creating directory: {e}", path) from e


def write_output_file(path: Path, content: str | bytes) -> None:
    """
    Write ``content`` to ``path``, replacing any existing file.

    Text is written as UTF-8 without newline translation.

    Raises
    ------
    WriteError
        If the file (or its parent directory) can't be written.
    """
    ensure_directory(path.parent)
    try:
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8", newline="")
    except OSError as e:
        raise WriteError(f"Error writing output file: {e}", path) from e


def process_file(
    input_path: Path,
    output_path: Path,
    context: RenderContext,
) -> tuple[Path, bool]:
    """
    Render one template file and write it to the output tree.

    Parameters
    ----------
    input_path : Path
        Template file to read.

    output_path : Path
        Destination computed from the rendered relative path. It is
        rendered once more here, since the full path may itself reference
        context values.

    context : RenderContext
        Values to substitute.

    Returns
    -------
    tuple[Path, bool]
        The path written and whether the contents were rendered (False
        means the file was not UTF-8 and was copied verbatim).

    Raises
    ------
    WalkAccessError
        If the template file can't be read.
    TemplateSyntaxError, TemplateExecutionError
        If the contents fail to render. ``path`` is set to ``input_path``.
    WriteError
        If the output can't be written.
    """
    try:
        data = input_path.read_bytes()
    except OSError as e:
        raise WalkAccessError(f"Error reading input file: {e}", input_path) from e

    content: str | bytes
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        content = data
    else:
        try:
            content = render_strict(text, context)
        except TemplateError as e:
            e.path = input_path
            raise

    output_path = Path(render_lenient(str(output_path), context))
    write_output_file(output_path, content)

    try:
        shutil.copymode(input_path, output_path)
    except OSError as e:
        raise WriteError(f"Error copying file permissions: {e}", output_path) from e

    return output_path, isinstance(content, str)


def check_output_dir(input_dir: Path, output_dir: Path) -> None:
    """
    Refuse to generate a project on top of its own template.

    Raises
    ------
    WriteError
        If both paths resolve to the same directory.
    """
    if Path(output_dir).resolve() == Path(input_dir).resolve():
        raise WriteError(
            "Output directory is the template directory; choose another output",
            Path(output_dir),
        )


def generate_files(
    context: RenderContext,
    input_dir: Path,
    output_dir: Path,
    *,
    settings: GeneratorSettings | None = None,
    verbose: bool = False,
) -> GenerationResult:
    """
    Materialize a template tree into ``output_dir``.

    Parameters
    ----------
    context : RenderContext
        Frozen values for every render in the run.

    input_dir : Path
        Template root (the directory holding cookiecutter.json).

    output_dir : Path
        Root of the generated project. Created first, even when the
        template tree is empty.

    settings : GeneratorSettings | None
        Run configuration; defaults if omitted.

    verbose : bool, default=False
        If True, print each created entry to the console.

    Returns
    -------
    GenerationResult
        Details of what was written, with ``success=True``.

    Raises
    ------
    WalkAccessError
        If the template tree can't be traversed or a file can't be read.
    TemplateSyntaxError, TemplateExecutionError
        If a file's contents fail to render.
    WriteError
        If an output entry can't be created or written, or the output
        directory is the template directory itself.

    Notes
    -----
    The first error aborts the walk. Entries already written stay on
    disk; entries not yet visited are never processed.
    """
    settings = settings or GeneratorSettings()
    input_dir = Path(input_dir)
    output_dir = Path(output_dir)
    result = GenerationResult(success=False, output_path=output_dir)

    check_output_dir(input_dir, output_dir)

    ensure_directory(output_dir)

    entries = iter_template_entries(
        input_dir,
        skip_dirs=settings.skip_dirs,
        exclude=output_dir,
    )
    for entry, is_dir in entries:
        if not is_dir and entry.name == settings.config_filename:
            continue

        relative = entry.relative_to(input_dir)
        seen = len(result.warnings)
        output_path = output_dir / render_lenient(
            str(relative), context, result.warnings
        )
        if verbose:
            for warning in result.warnings[seen:]:
                console.print(f"  [yellow]⚠[/] {warning}")

        if is_dir:
            ensure_directory(output_path)
            result.directories_created.append(output_path)
            if verbose:
                console.print(f"  Created {output_path.relative_to(output_dir)}/")
            continue

        written, rendered = process_file(entry, output_path, context)
        if rendered:
            result.files_created.append(written)
        else:
            result.files_copied.append(written)
        if verbose:
            console.print(f"  Created {written.relative_to(output_dir)}")

    result.success = True

    if verbose:
        console.print("[green]Done![/]")

    return result


# =============================================================================
# Main Generation Function
# =============================================================================


def create_project(
    template_dir: Path,
    output_dir: Path,
    *,
    input_source: InputSource | None = None,
    settings: GeneratorSettings | None = None,
    run_hooks: bool = True,
    verbose: bool = True,
) -> GenerationResult:
    """
    Generate a project from a local template directory.

    This is the main entry point. It reads the template's configuration
    document, collects answers, materializes the tree and runs any
    post-generation hooks found in the output.

    Parameters
    ----------
    template_dir : Path
        Local template root.

    output_dir : Path
        Directory to generate into (usually ``<cwd>/<template name>``).

    input_source : InputSource | None
        Answer provider, ``(name, default) -> str``. ``None`` keeps every
        default.

    settings : GeneratorSettings | None
        Run configuration; defaults if omitted.

    run_hooks : bool, default=True
        If True, run the scripts in ``<output_dir>/post_gen``.

    verbose : bool, default=True
        If True, display progress information to the console.

    Returns
    -------
    GenerationResult
        Result with ``success=True``.

    Raises
    ------
    TreecutterError
        Any subclass, at the first fatal error. Nothing is cleaned up.

    Examples
    --------
    >>> result = create_project(Path("template"), Path.cwd() / "template")
    >>> result.output_path
    PosixPath('/current/dir/template')
    """
    settings = settings or GeneratorSettings()
    template_dir = Path(template_dir)
    check_output_dir(template_dir, output_dir)

    context = build_context(
        template_dir / settings.config_filename,
        input_source,
        namespace=settings.namespace,
        strict=settings.strict_input,
    )

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold blue]Generating project from:[/] [green]{template_dir}[/]\n"
                f"[dim]Output: {output_dir}[/]",
                title="[bold]treecutter[/]",
                border_style="blue",
            )
        )
        console.print()
        console.print("[bold]📝 Rendering template tree...[/]")

    result = generate_files(
        context,
        template_dir,
        output_dir,
        settings=settings,
        verbose=verbose,
    )

    if run_hooks:
        result.hooks_run = run_post_gen_hooks(
            output_dir, settings=settings, verbose=verbose
        )

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold green]✨ Project generated successfully![/]\n\n"
                f"[dim]Location:[/] {output_dir}\n"
                f"[dim]Files:[/] {len(result.files_created) + len(result.files_copied)}",
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

    return result
