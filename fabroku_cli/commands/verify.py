"""Verify command - Check the files a project needs to be deployed"""

import click
from rich.console import Console
from rich.markup import escape

from fabroku_cli.base import BaseCommand
from fabroku_cli.models.results import VerificationReport
from fabroku_cli.services.verify_service import ProjectVerifier


def render_verification_report(
    console: Console, report: VerificationReport, show_hints: bool = True
) -> None:
    """Print the file checklist and a summary of the report."""
    console.print(f"\n📂 Verifying: [bold]{escape(str(report.directory))}[/bold]\n")

    if not report.type_detected:
        console.print("[yellow]⚠️  Could not detect the application type.[/yellow]")
        console.print("   Use [bold]--type frontend[/bold] or [bold]--type backend[/bold]\n")
        return

    console.print(f"🔍 Detected type: [bold cyan]{report.app_type.label}[/bold cyan]")
    console.print(f"   {report.app_type.description}\n")

    for check in report.checks:
        if check.present:
            console.print(f"  [green]✅[/green] {escape(check.name)}")
            continue
        console.print(f"  [red]❌[/red] {escape(check.name)} [dim]- missing[/dim]")
        if check.generated:
            console.print("     [yellow]→[/yellow] Generated with default content")

    console.print()

    if not report.missing:
        console.print("[green]🚀 Project ready to deploy![/green]\n")
    elif report.generated:
        console.print(f"[yellow]🔧 {len(report.generated)} file(s) generated.[/yellow]")
        if report.remaining:
            console.print(
                f"[red]   {len(report.remaining)} file(s) must be created manually.[/red]\n"
            )
        else:
            console.print("[green]🚀 Project ready to deploy![/green]\n")
    else:
        console.print(f"[yellow]⚠️  {len(report.missing)} file(s) missing for deploy.[/yellow]")
        if show_hints:
            console.print("   Use [bold]fabroku verify --fix[/bold] to generate them.\n")


class VerifyCommand(BaseCommand):
    """Check (and optionally generate) deployment files."""

    def __init__(self, directory: str = ".", app_type=None, fix: bool = False):
        super().__init__()
        self.verifier = ProjectVerifier(directory, app_type=app_type, fix=fix)

    def execute(self) -> None:
        report = self.verifier.verify()
        render_verification_report(self.console, report)
        if report.exit_code != 0:
            raise SystemExit(report.exit_code)


@click.command(name="verify")
@click.option("-d", "--dir", "directory", default=".", show_default=True, help="Project directory")
@click.option(
    "-t",
    "--type",
    "app_type",
    type=click.Choice(["frontend", "backend"]),
    help="Application type (detected if omitted)",
)
@click.option("--fix", is_flag=True, help="Generate missing files with default content")
def verify(directory, app_type, fix):
    """
    Check that the project has the files needed to deploy

    \b
    Frontend: .buildpacks, .static, static.json
    Backend:  Procfile, requirements.txt, runtime.txt
    """
    cmd = VerifyCommand(directory=directory, app_type=app_type, fix=fix)
    cmd.run()
