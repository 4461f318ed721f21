"""
Webhook command - Diagnose and set up the GitHub webhook of an app

The platform uses the webhook to report commit statuses (fabroku/deploy)
on GitHub. This command renders the API's diagnosis verbatim and repairs
a missing webhook automatically.
"""

from typing import Any, Dict, Optional

import click
from rich.markup import escape

from fabroku_cli.base import AuthenticatedCommand
from fabroku_cli.exceptions import APIError
from fabroku_cli.ui_components import check_line

CHECK_LABELS = (
    ("backend_url_public", "Public BACKEND_URL"),
    ("user_git_token", "Your git_token"),
    ("project_git_token", "Project token"),
    ("git_url_parseable", "Parseable git URL"),
)

STATE_COLORS = {"success": "green", "pending": "yellow"}


class WebhookCommand(AuthenticatedCommand):
    """Diagnose, set up and test the commit status webhook."""

    def __init__(
        self,
        app_id: Optional[str] = None,
        setup: bool = False,
        test: bool = False,
        verbose: bool = False,
    ):
        super().__init__(verbose=verbose)
        self.app_id = app_id
        self.setup = setup
        self.test = test

    def execute(self) -> None:
        self.require_authentication()
        api = self.ensure_api()

        if not self.app_id:
            self._list_apps()
            return

        logger = self.init_logger("webhook")
        logger.log(f"Diagnosing webhook for app {self.app_id}")
        self.show_header("Webhook Diagnosis", app=f"#{self.app_id}")

        diagnosis = api.diagnose_webhook(self.app_id)
        self._render_diagnosis(diagnosis)

        if self.setup:
            self.console.print()
            self.setup_webhook()

        if self.test:
            self.console.print()
            self.test_commit_status()

    def _list_apps(self) -> None:
        self.console.print("[cyan]Fetching apps...[/cyan]")
        apps = self.ensure_api().list_apps()
        if not apps:
            self.console.print("[yellow]No apps found.[/yellow]")
            return

        self.console.print("\n[bold]Your apps:[/bold]")
        for app in apps:
            self.console.print(
                f"  [cyan]{escape(str(app.id))}[/cyan] - {escape(app.name)} ({escape(app.git or 'no git')})"
            )
        self.console.print("\n[dim]Use: fabroku webhook <app_id>  to diagnose[/dim]")

    def render_check(self, label: str, result: Dict[str, Any]) -> None:
        """Checklist line plus whatever extra detail the API sent."""
        self.console.print(check_line(label, bool(result.get("ok")), str(result.get("message") or "")))

        if not result.get("ok") and result.get("value"):
            self.console.print(f"    [dim]Current value:[/dim] {escape(str(result['value']))}")
        if result.get("expected_url"):
            self.console.print(f"    [dim]Expected URL:[/dim] {escape(str(result['expected_url']))}")

        hooks = result.get("all_hooks") or []
        if hooks:
            self.console.print("    [dim]Webhooks on the repo:[/dim]")
            for hook in hooks:
                active = "[green]active[/green]" if hook.get("active") else "[red]inactive[/red]"
                self.console.print(
                    f"      - ID {escape(str(hook.get('id')))}: {escape(str(hook.get('url')))} \\[{active}]"
                )

        statuses = result.get("fabroku_statuses") or []
        if statuses:
            self.console.print("    [dim]Latest fabroku/deploy statuses:[/dim]")
            for status in statuses:
                state = str(status.get("state"))
                color = STATE_COLORS.get(state, "red")
                self.console.print(
                    f"      - [{color}]{escape(state)}[/{color}] "
                    f"{escape(str(status.get('description')))} ({escape(str(status.get('created_at')))})"
                )

    def _render_diagnosis(self, diagnosis: Dict[str, Any]) -> None:
        app = diagnosis.get("app") or {}
        self.console.print(f"[bold]App:[/bold] {escape(str(app.get('name')))} ({escape(str(app.get('git') or 'N/A'))})")
        self.console.print(f"[bold]Branch:[/bold] {escape(str(app.get('branch')))}")
        self.console.print(f"[bold]Webhook URL:[/bold] {escape(str(diagnosis.get('webhook_url')))}")
        self.console.print()

        checks = diagnosis.get("checks") or {}
        for key, label in CHECK_LABELS:
            self.render_check(label, checks.get(key) or {})

        webhook = checks.get("webhook_exists")
        if webhook:
            self.render_check("Webhook on GitHub", webhook)

        last_commit = checks.get("last_commit")
        if last_commit:
            self.render_check("Last commit", last_commit)
            if last_commit.get("sha"):
                self.console.print(f"    [dim]SHA:[/dim] {escape(str(last_commit['sha']))}")

        self.console.print()

        if all(check.get("ok") for check in checks.values()):
            self.console.print(
                "[bold green]✓ Everything looks OK![/bold green] "
                "If the status still doesn't show up, check the Celery logs on the server."
            )
            return

        self.console.print("[bold yellow]⚠ Problems found:[/bold yellow]")
        if not (checks.get("backend_url_public") or {}).get("ok"):
            self.console.print(
                "[yellow]  → BACKEND_URL is set to localhost. Set the BACKEND_URL environment "
                "variable to the backend's public URL.[/yellow]"
            )
        if not (checks.get("user_git_token") or {}).get("ok"):
            self.console.print("[yellow]  → Log in to Fabroku again to get a valid GitHub token.[/yellow]")
        if not (checks.get("project_git_token") or {}).get("ok"):
            self.console.print(
                "[yellow]  → No project member has a GitHub token. At least 1 member must log in.[/yellow]"
            )
        if webhook and not webhook.get("ok"):
            self.console.print("[yellow]  → Webhook not found. Creating it automatically...[/yellow]")
            self.setup_webhook()
        if last_commit and not last_commit.get("ok") and last_commit.get("message"):
            self.console.print(f"[yellow]  → {escape(str(last_commit['message']))}[/yellow]")

    def setup_webhook(self) -> None:
        """Create the webhook. Errors are reported, not raised."""
        self.console.print("[cyan]Setting up webhook...[/cyan]")
        try:
            result = self.ensure_api().setup_webhook(self.app_id) or {}
        except APIError as e:
            if self.logger:
                self.logger.log(f"Webhook setup failed: {e.message}", "ERROR")
            self.console.print(f"[red]Error creating webhook: {escape(e.message)}[/red]")
            return

        status = result.get("status")
        if self.logger:
            self.logger.log(f"Webhook setup: {status}")
        # The API answers in Portuguese
        if status == "webhook criado":
            self.console.print("[bold green]✓ Webhook created successfully![/bold green]")
            self.console.print(f"[dim]  URL: {escape(str(result.get('webhook_url')))}[/dim]")
            self.console.print(f"[dim]  Hook ID: {escape(str(result.get('hook_id')))}[/dim]")
        elif status == "webhook já existe":
            self.console.print("[green]✓ Webhook is already configured.[/green]")
            self.console.print(f"[dim]  Hook ID: {escape(str(result.get('hook_id')))}[/dim]")
        else:
            self.console.print(f"[yellow]Status: {escape(str(status))}[/yellow]")

    def test_commit_status(self) -> None:
        """Create and clean up a test commit status. Errors are reported, not raised."""
        self.console.print("[bold cyan]🧪 Testing commit status...[/bold cyan]\n")
        try:
            result = self.ensure_api().test_commit_status(self.app_id) or {}
        except APIError as e:
            self.console.print(f"[red]Error: {escape(e.message)}[/red]")
            return

        self.console.print(f"[dim]  Repo: {escape(str(result.get('repo_name')))}[/dim]")
        self.console.print(f"[dim]  Token: {escape(str(result.get('token_preview')))}[/dim]")
        self.console.print()

        repo_access = result.get("repo_access")
        if repo_access:
            self.render_check("Repo access", repo_access)
            if not repo_access.get("ok"):
                self.console.print(f"[red]\n  Error: {escape(str(repo_access.get('error')))}[/red]")
                return

        branch_access = result.get("branch_access")
        if branch_access:
            self.render_check("Branch access", branch_access)
            if branch_access.get("sha"):
                self.console.print(f"[dim]    SHA: {escape(str(branch_access['sha']))}[/dim]")
            if not branch_access.get("ok"):
                self.console.print(f"[red]\n  Error: {escape(str(branch_access.get('error')))}[/red]")
                return

        create_status = result.get("create_status")
        if create_status:
            self.render_check("Create commit status", create_status)
            if create_status.get("ok"):
                self.console.print(
                    "[bold green]\n  ✓ Commit status works! The dot showed up on GitHub.[/bold green]"
                )
                self.console.print("[dim]  (Test status was created as 'success' to clean up)[/dim]")
            else:
                self.console.print(f"[red]\n  Error: {escape(str(create_status.get('error')))}[/red]")
                if create_status.get("message"):
                    self.console.print(f"[yellow]  {escape(str(create_status['message']))}[/yellow]")

        if result.get("unexpected_error"):
            self.console.print(f"[red]\n  Unexpected error: {escape(str(result['unexpected_error']))}[/red]")


@click.command(name="webhook")
@click.argument("app_id", required=False)
@click.option("--setup", is_flag=True, help="Create/recreate the webhook")
@click.option("--test", is_flag=True, help="Check that commit statuses work (creates and clears one)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def webhook(app_id, setup, test, verbose):
    """
    Diagnose and configure the GitHub webhook of an app

    \b
    Examples:
      fabroku webhook              # List apps
      fabroku webhook 12           # Diagnose app 12
      fabroku webhook 12 --setup   # Diagnose and (re)create the webhook
      fabroku webhook 12 --test    # Diagnose and test commit status
    """
    cmd = WebhookCommand(app_id=app_id, setup=setup, test=test, verbose=verbose)
    cmd.run()
