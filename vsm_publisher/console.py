"""Rich console utilities for vsm-publisher.

This module provides a shared Rich Console instance and helper functions
for CLI output, with GitHub Actions annotations when running there.
"""

import os
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"
IS_GITLAB_CI = os.getenv("GITLAB_CI") == "true"
IS_CI = os.getenv("CI") == "true" or IS_GITHUB_ACTIONS or IS_GITLAB_CI

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "step": "bold blue",
        "highlight": "magenta",
    }
)

# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def print_banner(version: str = "unknown") -> None:
    """Print the vsm-publisher banner."""
    banner = Text()
    banner.append("LX-VSM PUBLISHER", style="bold blue")
    # Only prefix with 'v' if version looks like semver (starts with digit)
    version_display = f"v{version}" if version and version[0:1].isdigit() else version
    banner.append(f" {version_display}", style="yellow")
    banner.append(" - relay build data to LeanIX VSM", style="magenta")
    console.print(banner)


def print_step_header(step_num: int, title: str) -> None:
    """
    Print a styled step header.

    In GitHub Actions, uses ::group:: for collapsible sections.

    Args:
        step_num: Step number
        title: Step title
    """
    step_title = f"STEP {step_num}: {title}"

    if IS_GITHUB_ACTIONS:
        print(f"::group::{step_title}")
        console.print(f"[bold blue]{step_title}[/bold blue]")
    else:
        console.print()
        console.rule(f"[bold blue]{step_title}[/bold blue]", style="blue")


def print_step_end(step_num: int, success: bool = True) -> None:
    """
    Print step completion status and close GitHub Actions group.

    Args:
        step_num: Step number
        success: Whether the step completed successfully
    """
    if success:
        console.print(f"[success]✓ Step {step_num} completed successfully[/success]")
    else:
        console.print(f"[warning]! Step {step_num} did not complete[/warning]")

    if IS_GITHUB_ACTIONS:
        print("::endgroup::")
    else:
        console.print()


def gha_warning(message: str, title: Optional[str] = None) -> None:
    """
    Emit a warning that appears in GitHub Actions job summary.

    Args:
        message: Warning message
        title: Optional title for the warning
    """
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::warning title={title}::{message}")
        else:
            print(f"::warning::{message}")
    else:
        if title:
            console.print(f"[warning]Warning ({escape(title)}):[/warning] {escape(message)}")
        else:
            console.print(f"[warning]Warning:[/warning] {escape(message)}")


def print_summary_table(title: str, data: List[Tuple[str, Any]]) -> None:
    """
    Print a two-column summary table, leaving out empty values.

    Args:
        title: Table title
        data: List of (label, value) tuples
    """
    data = [(label, value) for label, value in data if value not in (None, "")]
    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_publish_summary(
    success: bool,
    skipped: bool = False,
    http_status: Optional[int] = None,
    message: Optional[str] = None,
    response: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Print the publish outcome.

    Failures are shown as warnings; publishing never fails the build.

    Args:
        success: Whether VSM accepted the registration
        skipped: Whether the build was held back by the snapshot gate
        http_status: Status from the discovery endpoint
        message: Failure or skip message
        response: Parsed discovery response; its scalar fields are listed on success
    """
    if skipped:
        console.print(f"[info]- Skipped: {escape(message or '')}[/info]")
    elif success:
        status = f" [{http_status}]" if http_status is not None else ""
        console.print(f"[success]✓ Relayed to VSM{escape(status)}[/success]")
        if response:
            print_summary_table(
                "VSM response",
                [(key, value) for key, value in response.items() if isinstance(value, (str, int, float, bool))],
            )
    else:
        gha_warning(message or "Publishing to VSM failed", title="VSM publish")
