"""Login/logout commands - Authenticate through GitHub in the browser"""

from typing import Optional
from urllib.parse import urlencode

import click
from rich.markup import escape

from fabroku_cli.base import BaseCommand
from fabroku_cli.constants import LOGIN_PATH, LOGIN_TIMEOUT_SECONDS
from fabroku_cli.exceptions import LoginError
from fabroku_cli.services.auth_callback import CallbackServer, find_free_port


class LoginCommand(BaseCommand):
    """Browser login with a local callback listener."""

    def __init__(self, api_url: Optional[str] = None, timeout: float = LOGIN_TIMEOUT_SECONDS):
        super().__init__()
        self.api_url = api_url
        self.timeout = timeout

    def execute(self) -> None:
        session = self.config_service.load_session()
        if session.is_authenticated and not self.confirm(
            "You are already authenticated. Log in again?"
        ):
            return

        base_url = (self.api_url or session.api_url).rstrip("/")
        port = find_free_port()
        login_url = f"{base_url}{LOGIN_PATH}?{urlencode({'port': port})}"

        self.console.print("\n🔐 Opening browser to authenticate...")
        self.console.print(f"   URL: [dim]{escape(login_url)}[/dim]")
        self.console.print(f"   Waiting for callback on port {port}...\n")

        server = CallbackServer(port)
        click.launch(login_url)
        result = server.wait_for_callback(self.timeout)

        if result is None:
            raise LoginError(
                f"Timeout: authentication was not completed in {round(self.timeout / 60)} minutes"
            )
        if not result.is_success:
            raise LoginError(f"Error: {result.error}: {result.message or 'Unknown error'}")

        user = result.user or "unknown"
        self.config_service.set_credentials(result.token, user, base_url)
        self.console.print(f"✅ Authenticated as [bold green]{escape(user)}[/bold green]")
        self.console.print(f"   Token saved to {self.config_service.config_path}\n")


class LogoutCommand(BaseCommand):
    """Clear stored credentials."""

    def execute(self) -> None:
        if not self.config_service.load_session().is_authenticated:
            self.console.print("You are not authenticated.")
            return
        self.config_service.clear_credentials()
        self.console.print("👋 Session ended.")


@click.command(name="login")
@click.option("--api-url", help="Base URL of the Fabroku API")
def login(api_url):
    """Log in to the Fabroku platform through GitHub"""
    cmd = LoginCommand(api_url=api_url)
    cmd.run()


@click.command(name="logout")
def logout():
    """End the CLI session"""
    cmd = LogoutCommand()
    cmd.run()
