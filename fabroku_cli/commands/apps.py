"""Apps command - List your apps on the platform"""

from typing import Optional

import click
from rich.markup import escape
from rich.table import Table

from fabroku_cli.base import AuthenticatedCommand
from fabroku_cli.ui_components import status_text


class AppsCommand(AuthenticatedCommand):
    """List apps, optionally filtered by project."""

    def __init__(self, project: Optional[str] = None, json_output: bool = False):
        super().__init__(json_output=json_output)
        self.project = project

    def execute(self) -> None:
        self.require_authentication()
        apps = self.ensure_api().list_apps()

        if self.project:
            apps = [a for a in apps if str(a.project) == str(self.project)]

        if self.json_output:
            self.output_json([a.to_dict() for a in apps])
            return

        if not apps:
            self.console.print("\nNo apps found.")
            if self.project:
                self.console.print(f"   [dim](filtered by project: {escape(self.project)})[/dim]")
            self.console.print()
            return

        table = Table(title_justify="left", padding=(0, 1))
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Name", style="bold")
        table.add_column("Status")
        table.add_column("Domain")
        table.add_column("Project", style="dim")

        for app in apps:
            table.add_row(
                str(app.id),
                app.name,
                status_text(app.status),
                app.domain or "-",
                "" if app.project is None else str(app.project),
            )

        self.console.print()
        self.console.print(table)
        self.console.print(f"\n📦 Total: {len(apps)} app(s)\n")


@click.command(name="apps")
@click.option("-p", "--project", help="Filter by project ID")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def apps(project, json_output):
    """List your apps on the Fabroku platform"""
    cmd = AppsCommand(project=project, json_output=json_output)
    cmd.run()
