"""Rich terminal reporter for installer progress.

Progress and warnings go to stdout, fatal errors to stderr. Rich drops the
colour codes automatically when the stream is not a terminal, so piping the
installer output stays clean. The reporter never influences control flow.

Markers
-------
- ``==>`` blue    : stage boundary
- ``✓``   green   : success
- ``⚠``   yellow  : warning, run continues
- ``✗``   red     : fatal error
"""

from __future__ import annotations

import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape


def is_on_path(directory: Path, path_env: str | None = None) -> bool:
    """Whether *directory* is one of the entries of ``PATH``."""
    if path_env is None:
        path_env = os.environ.get("PATH", "")
    target = os.path.normcase(os.path.normpath(str(directory)))
    for entry in path_env.split(os.pathsep):
        if not entry:
            continue
        candidate = os.path.normcase(os.path.normpath(os.path.expanduser(entry)))
        if candidate == target:
            return True
    return False


def shell_path_expression(directory: Path, home: Path | None = None) -> str:
    """Render *directory* for a shell rc file, using ``$HOME`` where possible."""
    home = home or Path.home()
    try:
        relative = directory.relative_to(home)
    except ValueError:
        return str(directory)
    return "$HOME" if relative == Path(".") else f"$HOME/{relative.as_posix()}"


class Reporter:
    """Prints installer progress lines.

    Parameters
    ----------
    console:
        Console for progress output. A stdout console is created if not
        provided.
    err_console:
        Console for fatal errors. A stderr console is created if not
        provided.
    """

    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    # ------------------------------------------------------------------
    # Progress lines
    # ------------------------------------------------------------------

    def banner(self, title: str = "Assay Installer") -> None:
        self.console.print()
        self.console.print(f"[bold green]📦 {escape(title)}[/bold green]")
        self.console.print()

    def blank(self) -> None:
        self.console.print()

    def info(self, message: str) -> None:
        self.console.print(f"[bold blue]==>[/bold blue] {message}")

    def detail(self, message: str) -> None:
        self.console.print(f"    {escape(message)}", soft_wrap=True)

    def success(self, message: str) -> None:
        self.console.print(f"[bold green]✓[/bold green] {message}")

    def warn(self, message: str) -> None:
        self.console.print(f"[bold yellow]⚠[/bold yellow] {message}")

    def error(self, message: str, hint: str | None = None) -> None:
        self.err_console.print(f"[bold red]✗[/bold red] {escape(message)}", soft_wrap=True)
        if hint:
            self.err_console.print(f"  {escape(hint)}", soft_wrap=True)

    # ------------------------------------------------------------------
    # Closing sections
    # ------------------------------------------------------------------

    def path_hint(self, install_dir: Path) -> None:
        """Explain how to put *install_dir* on ``PATH``."""
        expr = shell_path_expression(install_dir)
        line = f"export PATH=\"{expr}:$PATH\""
        self.console.print(
            f"[bold yellow]Note:[/bold yellow] {escape(str(install_dir))} is not in your PATH."
        )
        self.console.print()
        self.console.print("Add it by running:")
        self.console.print()
        self.console.print(f"  [blue]echo '{escape(line)}' >> ~/.bashrc[/blue]", soft_wrap=True)
        self.console.print()
        self.console.print("Or for zsh:")
        self.console.print()
        self.console.print(f"  [blue]echo '{escape(line)}' >> ~/.zshrc[/blue]", soft_wrap=True)
        self.console.print()
        self.console.print("Then restart your shell or run: source ~/.bashrc")
        self.console.print()

    def next_steps(self, binary_name: str = "assay") -> None:
        name = escape(binary_name)
        self.console.print("[bold green]Next steps:[/bold green]")
        self.console.print()
        self.console.print("  1. Setup for Claude Desktop:")
        self.console.print(f"     [blue]{name} init claude[/blue]")
        self.console.print()
        self.console.print("  2. Or manually wrap an MCP server:")
        self.console.print(
            f"     [blue]{name} mcp wrap --policy policy.yaml -- "
            "npx @modelcontextprotocol/server-filesystem ~/[/blue]",
            soft_wrap=True,
        )
        self.console.print()
        self.console.print("  3. Verify installation:")
        self.console.print(f"     [blue]{name} --version[/blue]")
        self.console.print()
