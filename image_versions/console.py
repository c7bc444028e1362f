"""Rich console utilities for image-versions-action.

This module provides a shared Rich Console instance and helper functions for
CLI output. Everything is written to stderr: stdout is reserved for the JSON
payload that workflows parse. GitHub Actions reads workflow commands
(``::error::``, ``::group::`` ...) from both streams.
"""

import os
import sys
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
    }
)

# Shared console instance
# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    stderr=True,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def _workflow_command(command: str, message: str, title: Optional[str] = None) -> None:
    if title:
        print(f"::{command} title={title}::{message}", file=sys.stderr)
    else:
        print(f"::{command}::{message}", file=sys.stderr)


@contextmanager
def gha_group(title: str) -> Generator[None, None, None]:
    """
    Context manager for GitHub Actions collapsible groups.

    Args:
        title: Group title

    Usage:
        with gha_group("Fetching versions"):
            ...
    """
    if IS_GITHUB_ACTIONS:
        print(f"::group::{title}", file=sys.stderr)
    try:
        yield
    finally:
        if IS_GITHUB_ACTIONS:
            print("::endgroup::", file=sys.stderr)


def gha_warning(message: str, title: Optional[str] = None) -> None:
    """
    Emit a warning that appears in GitHub Actions job summary.

    Args:
        message: Warning message
        title: Optional title for the warning
    """
    if IS_GITHUB_ACTIONS:
        _workflow_command("warning", message, title)
    elif title:
        console.print(f"[warning]Warning ({escape(title)}):[/warning] {escape(message)}", soft_wrap=True)
    else:
        console.print(f"[warning]Warning:[/warning] {escape(message)}", soft_wrap=True)


def gha_error(message: str, title: Optional[str] = None) -> None:
    """
    Emit an error that appears in GitHub Actions job summary.

    Args:
        message: Error message
        title: Optional title for the error
    """
    if IS_GITHUB_ACTIONS:
        _workflow_command("error", message, title)
    elif title:
        console.print(f"[error]Error ({escape(title)}):[/error] {escape(message)}", soft_wrap=True)
    else:
        console.print(f"[error]Error:[/error] {escape(message)}", soft_wrap=True)


def print_versions_table(title: str, versions: List[Dict[str, Any]]) -> None:
    """
    Print a table of formatted versions.

    Args:
        title: Table title
        versions: Serialized version entries, sentinel included
    """
    if not versions:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Version", style="cyan")
    table.add_column("Image version")
    table.add_column("Image name")
    table.add_column("Latest", justify="center")

    for entry in versions:
        table.add_row(
            str(entry.get("version", "")),
            str(entry.get("image-version", "")),
            str(entry.get("image-name", "")),
            "[success]✓[/success]" if entry.get("is-latest") else "",
        )

    console.print(table)


def print_flavors_table(flavors: List[Dict[str, Any]]) -> None:
    """Print the registered flavors."""
    table = Table(title="Flavors", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Title")
    table.add_column("Images", justify="center")

    for flavor in flavors:
        table.add_row(flavor["name"], flavor["title"], "✓" if flavor["images"] else "")

    console.print(table)
