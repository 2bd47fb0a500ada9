"""Shared utility functions for the example tools.

Provides command execution, name helpers, and Rich-based console
reporting.  Library modules report progress through these helpers; only the
CLI decides how failures end the process.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from fhevm_tools.errors import MalformedSourceError, SourceMissingError

console = Console()
error_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 60,
) -> tuple[int, str, str]:
    """Run a command and capture its output.

    Args:
        cmd: List of arguments; no shell is involved.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A missing executable
        yields return code ``127`` and a timeout yields ``-1``.
    """
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return (127, "", f"Command not found: {cmd[0]}")
    except subprocess.TimeoutExpired:
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    return (completed.returncode, completed.stdout.strip(), completed.stderr.strip())


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    """Convert an arbitrary name to a safe package/directory name.

    * Lowercases the input.
    * Replaces spaces and non-alphanumeric characters (except hyphens and
      underscores) with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens.

    Examples::

        slugify("fhe-counter") -> "fhe-counter"
        slugify("Private Forex Trading") -> "private-forex-trading"
    """
    result = re.sub(r"[^a-zA-Z0-9_-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-")


def read_source(path: Path, kind: str = "source") -> str:
    """Read a UTF-8 text source, mapping read failures onto ``ScaffoldError``.

    Raises:
        SourceMissingError: if the file cannot be opened or read.
        MalformedSourceError: if the bytes are not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise MalformedSourceError(path, "Source is not valid UTF-8") from None
    except OSError:
        raise SourceMissingError(kind, path) from None


def display_path(path: Path) -> str:
    """Return *path* relative to the working directory when possible."""
    try:
        return str(path.resolve().relative_to(Path.cwd().resolve()))
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(number: int, name: str) -> None:
    """Print a step header as a full-width rule."""
    console.print()
    console.print(Rule(f"[bold cyan] Step {number}: {name} [/bold cyan]", style="cyan"))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[blue]→ {escape(message)}[/blue]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]✓ {escape(message)}[/bold green]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]Warning: {escape(message)}[/bold yellow]")


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
