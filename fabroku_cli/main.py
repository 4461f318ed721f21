#!/usr/bin/env python3
"""Fabroku CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

# Rich-Click: CLI help with colors
import rich_click as click

from fabroku_cli import __version__
from fabroku_cli.commands.apps import apps
from fabroku_cli.commands.deploy import deploy
from fabroku_cli.commands.login import login, logout
from fabroku_cli.commands.status import status
from fabroku_cli.commands.verify import verify
from fabroku_cli.commands.webhook import webhook
from fabroku_cli.commands.whoami import whoami

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

# COMMANDS: Bold cyan
click.rich_click.STYLE_COMMAND = "bold cyan"

# OPTIONS: Bold magenta
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"

# HEADERS: Bold cyan
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"

# METAVARS: Yellow
click.rich_click.STYLE_METAVAR = "bold yellow"

# DEFAULTS: Dim cyan
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_EPILOG_TEXT = "dim"

# PANEL BORDERS: Cyan
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            # Click's built-in exceptions (already formatted)
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            # Unexpected errors
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")
            console.print("[dim]If this persists, please report this issue.[/dim]\n")

            # Show traceback in verbose mode or if DEBUG env var is set
            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="fabroku")
def cli() -> None:
    """
    🚀 Fabroku CLI - Deploy tool for the Fabroku platform

    \b
    Quick Start:
      fabroku login          # Authenticate through GitHub
      fabroku verify --fix   # Generate missing deploy files
      fabroku deploy         # Redeploy the app linked to this repo
    """


cli.add_command(login)
cli.add_command(logout)
cli.add_command(verify)
cli.add_command(apps)
cli.add_command(deploy)
cli.add_command(status)
cli.add_command(whoami)
cli.add_command(webhook)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
