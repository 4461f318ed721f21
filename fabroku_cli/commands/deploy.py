"""
Deploy command - Trigger a redeploy of an app

Flow:
  1. Resolve the app (--app, or match the local git remote)
  2. Verify deployment files (unless --skip-verify)
  3. Trigger the redeploy through the API
  4. Follow progress until it finishes (unless --no-wait)
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.text import Text

from fabroku_cli.base import AuthenticatedCommand
from fabroku_cli.commands.verify import render_verification_report
from fabroku_cli.exceptions import APIError, DeployFailure, PollTimeout, VerificationFailure
from fabroku_cli.logger import CommandLogger
from fabroku_cli.models.app import App
from fabroku_cli.models.deployment import DeployOutcome, DeployTask
from fabroku_cli.services.api_client import FabrokuAPI
from fabroku_cli.services.app_resolver import AppResolver
from fabroku_cli.services.deploy_poller import DeployPoller, PollPolicy
from fabroku_cli.services.verify_service import ProjectVerifier
from fabroku_cli.ui_components import progress_line


def follow_deploy(
    api: FabrokuAPI,
    app: App,
    console: Console,
    logger: Optional[CommandLogger] = None,
    policy: Optional[PollPolicy] = None,
) -> DeployOutcome:
    """Poll the app's deploy status, redrawing the progress line on change."""
    with Live(Text(""), console=console, refresh_per_second=4) as live:
        poller = DeployPoller(
            lambda: api.get_app_status(app.id),
            policy=policy,
            on_progress=lambda snapshot: live.update(
                progress_line(snapshot.current, snapshot.status)
            ),
            logger=logger,
        )
        return poller.poll()


def report_outcome(console: Console, app: App, outcome: DeployOutcome) -> None:
    """
    Print a successful outcome, raise for the others.

    Raises:
        PollTimeout: If polling ran out of ticks
        DeployFailure: If the remote task failed
    """
    if outcome.is_success:
        console.print("\n[bold green]✅ Deploy completed successfully![/bold green]")
        if app.public_url:
            console.print(f"   🌐 [cyan]{app.public_url}[/cyan]")
        console.print()
        return

    if outcome.is_timeout:
        raise PollTimeout(f"Deploy failed: {outcome.error}")
    raise DeployFailure(f"Deploy failed: {outcome.error or 'unknown error'}")


class DeployCommand(AuthenticatedCommand):
    """Resolve, verify, trigger and follow a redeploy."""

    def __init__(
        self,
        app_ref: Optional[str] = None,
        directory: str = ".",
        skip_verify: bool = False,
        wait: bool = True,
        verbose: bool = False,
        poll_policy: Optional[PollPolicy] = None,
    ):
        super().__init__(verbose=verbose)
        self.app_ref = app_ref
        self.directory = Path(directory)
        self.skip_verify = skip_verify
        self.wait = wait
        self.poll_policy = poll_policy

    def execute(self) -> None:
        """Execute deploy command."""
        self.require_authentication()
        logger = self.init_logger("deploy")
        self.show_header("Deploy", app=self.app_ref, details={"Directory": self.directory})
        api = self.ensure_api()

        app = self._resolve_app(AppResolver(api))
        self.console.print(
            f"\n🚀 App: [bold]{escape(app.name)}[/bold] [dim]({escape(app.status or 'unknown')})[/dim]"
        )

        if not self.skip_verify:
            self._verify_files()

        task = self._trigger(api, app)
        self.console.print(f"   Deploy started! [dim](task: {escape(task.short_id)}...)[/dim]")

        if not self.wait:
            self.console.print(
                f"\n   Follow progress on the dashboard or with: "
                f"[bold]fabroku status --app {escape(app.name)}[/bold]\n"
            )
            return

        self.console.print("[dim]   Following progress...[/dim]\n")
        outcome = follow_deploy(api, app, self.console, logger, self.poll_policy)
        report_outcome(self.console, app, outcome)
        logger.success("Deploy finished")

    def _resolve_app(self, resolver: AppResolver) -> App:
        self.logger.step("Resolving app")

        if self.app_ref:
            app = resolver.find_by_reference(self.app_ref)
        else:
            identity = resolver.detect_identity(self.directory)
            self.console.print(f"📦 Repository detected: [cyan]{escape(identity.remote_url)}[/cyan]")
            if identity.branch:
                self.console.print(f"   Branch: [cyan]{escape(identity.branch)}[/cyan]")
            app = resolver.find_by_git_url(identity.remote_url)

        self.logger.log(f"Resolved app {app.name} (id={app.id})")
        return app

    def _verify_files(self) -> None:
        """
        Run the required-files gate.

        Raises:
            VerificationFailure: Before anything is sent to the platform
        """
        self.logger.step("Checking deployment files")
        report = ProjectVerifier(self.directory).verify()
        render_verification_report(self.console, report, show_hints=False)

        if report.exit_code != 0:
            raise VerificationFailure()
        self.logger.success("Deployment files OK")

    def _trigger(self, api: FabrokuAPI, app: App) -> DeployTask:
        self.logger.step("Deploy")
        self.console.print(f"   Triggering redeploy of [bold]{escape(app.name)}[/bold]...")

        try:
            task = api.redeploy_app(app.id)
        except APIError as e:
            if e.is_conflict:
                self.logger.log_error(e.detail, context="409 Conflict")
                self.console.print(f"\n[yellow]⚠️  {escape(e.detail)}[/yellow]\n")
                self.show_log_path()
                raise SystemExit(1)
            if e.is_validation_error:
                self.logger.log_error(e.detail, context="400 Bad Request")
                self.console.print(f"\n[red]❌ {escape(e.detail)}[/red]\n")
                self.show_log_path()
                raise SystemExit(1)
            raise

        self.logger.log(f"Redeploy task {task.task_id}")
        return task


@click.command(name="deploy")
@click.option("-a", "--app", "app_ref", help="App name or ID (detected from git remote if omitted)")
@click.option("-d", "--dir", "directory", default=".", show_default=True, help="Project directory")
@click.option("--skip-verify", is_flag=True, help="Skip the deployment files check")
@click.option("--wait/--no-wait", default=True, help="Wait for the deploy to finish")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def deploy(app_ref, directory, skip_verify, wait, verbose):
    """
    Trigger a deploy/redeploy of an app

    \b
    Examples:
      fabroku deploy                     # App detected from git remote
      fabroku deploy --app my-api        # By name or ID
      fabroku deploy --skip-verify       # Skip files check
      fabroku deploy --no-wait           # Don't follow progress
    """
    cmd = DeployCommand(
        app_ref=app_ref,
        directory=directory,
        skip_verify=skip_verify,
        wait=wait,
        verbose=verbose,
    )
    cmd.run()
