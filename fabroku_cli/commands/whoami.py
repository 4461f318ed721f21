"""Whoami command - Show the authenticated user"""

import click
from rich.markup import escape

from fabroku_cli.base import AuthenticatedCommand
from fabroku_cli.exceptions import APIError, AuthenticationRequired


class WhoamiCommand(AuthenticatedCommand):
    """Show stored user and check the token against the API."""

    def execute(self) -> None:
        if not self.session.is_authenticated:
            raise AuthenticationRequired("Not authenticated")

        info = {"user": self.session.user, "api_url": self.session.api_url, "token_valid": False}

        if not self.json_output:
            self.console.print(
                f"\n👤 Logged in as: [bold green]{escape(self.session.user or '?')}[/bold green]"
            )
            self.console.print(f"   API: [dim]{escape(self.session.api_url)}[/dim]")

        try:
            user = self.ensure_api().get_user_me()
        except APIError as e:
            if self.json_output:
                info["error"] = e.message
                self.output_json(info)
            elif e.is_unauthorized:
                self.console.print("[red]   ❌ Token expired or invalid[/red]\n")
            else:
                self.console.print(f"[yellow]   ⚠️  Could not verify: {escape(e.message)}[/yellow]\n")
            return

        info.update(
            email=user.get("email"),
            is_fabric=bool(user.get("is_fabric")),
            is_superuser=bool(user.get("is_superuser")),
            token_valid=True,
        )
        if self.json_output:
            self.output_json(info)
            return

        self.console.print(f"   Email: {escape(str(info['email']))}")
        if info["is_fabric"]:
            self.console.print("   🏭 Fábrica member")
        if info["is_superuser"]:
            self.console.print("   🔑 Administrator")
        self.console.print("[green]   ✅ Token valid[/green]\n")


@click.command(name="whoami")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def whoami(json_output):
    """Show the authenticated user"""
    cmd = WhoamiCommand(json_output=json_output)
    cmd.run()
