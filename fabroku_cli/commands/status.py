"""Status command - Show (or follow) an app's deploy status"""

from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from fabroku_cli.base import AuthenticatedCommand
from fabroku_cli.commands.deploy import follow_deploy, report_outcome
from fabroku_cli.services.app_resolver import AppResolver
from fabroku_cli.ui_components import progress_line, status_text


class StatusCommand(AuthenticatedCommand):
    """Show the current deploy status of an app."""

    def __init__(
        self,
        app_ref: Optional[str] = None,
        directory: str = ".",
        watch: bool = False,
        verbose: bool = False,
        json_output: bool = False,
    ):
        super().__init__(verbose=verbose, json_output=json_output)
        self.app_ref = app_ref
        self.directory = Path(directory)
        self.watch = watch

    def execute(self) -> None:
        self.require_authentication()
        api = self.ensure_api()
        app = AppResolver(api).resolve(self.app_ref, self.directory)
        snapshot = api.get_app_status(app.id)

        if self.json_output:
            self.output_json(
                {
                    "app": app.to_dict(),
                    "state": snapshot.state,
                    "current": snapshot.current,
                    "status": snapshot.status,
                }
            )
            return

        self.console.print(f"\n🚀 App: [bold]{escape(app.name)}[/bold] ", status_text(app.status))
        self.console.print(f"   Deploy state: [cyan]{escape(snapshot.state or 'unknown')}[/cyan]")
        self.console.print(progress_line(snapshot.current, snapshot.status))

        if not self.watch or snapshot.is_terminal:
            self.console.print()
            return

        logger = self.init_logger("status")
        self.console.print("[dim]   Following progress...[/dim]\n")
        outcome = follow_deploy(api, app, self.console, logger)
        report_outcome(self.console, app, outcome)


@click.command(name="status")
@click.option("-a", "--app", "app_ref", help="App name or ID (detected from git remote if omitted)")
@click.option("-d", "--dir", "directory", default=".", show_default=True, help="Project directory")
@click.option("--watch", "-w", is_flag=True, help="Follow the deploy until it finishes")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def status(app_ref, directory, watch, verbose, json_output):
    """
    Show the deploy status of an app

    \b
    Examples:
      fabroku status --app my-api
      fabroku status --watch
    """
    cmd = StatusCommand(
        app_ref=app_ref,
        directory=directory,
        watch=watch,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run()
