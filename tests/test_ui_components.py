"""Tests for progress rendering and status colors."""

from io import StringIO

import pytest
from rich.console import Console

from fabroku_cli.ui_components import check_line, progress_bar, progress_line, show_header, status_text


@pytest.mark.parametrize(
    "percent, filled",
    [(0, 0), (50, 10), (100, 20), (150, 20), (-5, 0)],
)
def test_progress_bar_is_fixed_width(percent, filled):
    bar = progress_bar(percent).plain

    assert bar.count("█") == filled
    assert bar.count("█") + bar.count("░") == 20
    assert bar.endswith(f"{max(0, min(100, percent)):>3}%")


def test_progress_line_with_message():
    assert progress_line(42, "Building image").plain.endswith(" 42% Building image")


def test_unknown_status_is_plain():
    text = status_text("HIBERNATING")

    assert text.plain == "Hibernating"
    assert str(text.style) == "white"


def test_missing_status_shows_stopped():
    assert status_text(None).plain == "Stopped"


def test_check_line_escapes_markup():
    line = check_line("Webhook", False, "[bold]not found")

    assert "\\[bold]" in line
    assert "[red]✗[/red]" in line


def test_header_lists_app_and_details():
    console = Console(file=StringIO(), width=120)

    show_header("Deploy", app="my-api", details={"Directory": "."}, console=console)

    output = console.file.getvalue()
    assert "fabroku › Deploy" in output
    assert "App: my-api" in output
    assert "Directory: ." in output
