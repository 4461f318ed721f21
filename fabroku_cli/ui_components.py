"""
Fabroku CLI - UI Components & Branding
Standardized headers, progress bars and status colors
"""

from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from fabroku_cli.constants import PROGRESS_BAR_WIDTH
from fabroku_cli.models.app import AppStatus

BRAND = "fabroku"

# Color scheme
BRAND_COLOR = "color(214)"
SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"

STATUS_COLORS = {
    AppStatus.RUNNING: SUCCESS_COLOR,
    AppStatus.STOPPED: ERROR_COLOR,
    AppStatus.ERROR: ERROR_COLOR,
    AppStatus.STARTING: WARNING_COLOR,
    AppStatus.DEPLOYING: "cyan",
    AppStatus.DELETING: "magenta",
    AppStatus.STOPPING: WARNING_COLOR,
    AppStatus.RESTARTING: "blue",
}


def show_header(
    title: str,
    app: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized Fabroku command header.

    Args:
        title: Main title (e.g., "Deploy", "Webhook Diagnosis")
        app: App name (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)
    """
    if console is None:
        console = Console()

    prefix = f" [bold {BRAND_COLOR}]{BRAND}[/bold {BRAND_COLOR}] [dim]›[/dim]"
    console.print(f"{prefix} [bold white]{escape(title)}[/bold white]")

    if app:
        console.print(f"{prefix} App: [cyan]{escape(app)}[/cyan]")
    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [cyan]{escape(str(value))}[/cyan]")

    console.print()


def progress_bar(percent: int, width: int = PROGRESS_BAR_WIDTH) -> Text:
    """Fixed-width bar like [██████░░░░]  42%"""
    percent = max(0, min(100, percent))
    filled = round(percent / 100 * width)
    return Text.assemble(
        "[",
        ("█" * filled, SUCCESS_COLOR),
        ("░" * (width - filled), "dim"),
        f"] {percent:>3}%",
    )


def progress_line(percent: int, message: str) -> Text:
    line = Text("   ")
    line.append_text(progress_bar(percent))
    if message:
        line.append(f" {message}")
    return line


def status_text(status: Optional[str]) -> Text:
    """Colored, capitalized app status (Running, Stopped, ...)."""
    status = status or AppStatus.STOPPED.value
    try:
        color = STATUS_COLORS[AppStatus(status)]
    except ValueError:
        color = "white"
    return Text(status.capitalize(), style=color)


def check_line(label: str, ok: bool, message: str = "") -> str:
    """Checklist line with ✓/✗ icon (markup)."""
    icon = "[green]✓[/green]" if ok else "[red]✗[/red]"
    return f"  {icon} [bold]{escape(label)}[/bold]: {escape(message)}"
