"""
treecutter.hooks - Post-Generation Scripts
==========================================

After the tree is written, scripts found in ``<output>/post_gen`` are run
one after another, in name order. Each script is run as
``[*settings.hook_command, script]`` (by default, with the running Python
interpreter) from the output directory, with stdout/stderr passed through.

The first script that can't be started or exits non-zero raises
:class:`~treecutter.errors.HookExecutionError`; later scripts do not run.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from rich.console import Console

from treecutter.errors import HookExecutionError
from treecutter.models import GeneratorSettings


console = Console()


def find_hook_scripts(
    output_dir: Path,
    settings: GeneratorSettings | None = None,
) -> list[Path]:
    """
    List the post-generation scripts of a generated project.

    Parameters
    ----------
    output_dir : Path
        Root of the generated project.

    settings : GeneratorSettings | None
        Supplies ``hooks_dir`` and ``hook_glob``.

    Returns
    -------
    list[Path]
        Matching files, sorted by name. Empty if the hooks directory
        doesn't exist.

    Raises
    ------
    HookExecutionError
        If the hooks directory exists but can't be inspected.
    """
    settings = settings or GeneratorSettings()
    hooks_dir = Path(output_dir) / settings.hooks_dir

    try:
        hooks_dir.stat()
    except FileNotFoundError:
        return []
    except OSError as e:
        raise HookExecutionError(
            f"Error checking {settings.hooks_dir} directory: {e}", hooks_dir
        ) from e

    return sorted(p for p in hooks_dir.glob(settings.hook_glob) if p.is_file())


def run_post_gen_hooks(
    output_dir: Path,
    *,
    settings: GeneratorSettings | None = None,
    verbose: bool = False,
) -> list[Path]:
    """
    Run every post-generation script, stopping at the first failure.

    Returns
    -------
    list[Path]
        Scripts that ran, in order.

    Raises
    ------
    HookExecutionError
        If a script can't be started or exits with a non-zero status.
    """
    settings = settings or GeneratorSettings()
    scripts = find_hook_scripts(output_dir, settings)

    if scripts and verbose:
        console.print()
        console.print("[bold]🔧 Running post-generation scripts...[/]")

    ran: list[Path] = []
    for script in scripts:
        command = [*settings.hook_command, str(script)]
        try:
            completed = subprocess.run(command, cwd=output_dir, check=False)
        except OSError as e:
            raise HookExecutionError(
                f"Error running post-gen script: {e}", script
            ) from e

        if completed.returncode != 0:
            raise HookExecutionError(
                f"Post-gen script exited with status {completed.returncode}",
                script,
                returncode=completed.returncode,
            )

        ran.append(script)
        if verbose:
            console.print(f"  [green]✓[/] {script.name}")

    return ran
