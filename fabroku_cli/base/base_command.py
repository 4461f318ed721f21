"""
Base Command Class

Abstract base for all Fabroku CLI commands.
Provides common functionality and structure.
"""

import json
from abc import ABC, abstractmethod
from typing import Optional, Any, Dict

from rich.console import Console
from rich.markup import escape

from fabroku_cli.exceptions import APIError, AuthenticationRequired, FabrokuError
from fabroku_cli.logger import CommandLogger
from fabroku_cli.services.config_service import ConfigService
from fabroku_cli.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Config and session loading
    - Logger initialization
    - Header display
    - Error handling (FabrokuError -> message + exit 1)
    - JSON output support
    """

    def __init__(self, verbose: bool = False, json_output: bool = False):
        self.verbose = verbose
        self.json_output = json_output
        self.console = Console()
        self.config_service = ConfigService()
        self.logger: Optional[CommandLogger] = None

    def init_logger(self, operation: str) -> Optional[CommandLogger]:
        """
        Initialize command logger (skip in JSON mode).

        Args:
            operation: Command name, used in the log file name

        Returns:
            CommandLogger instance or None if JSON mode
        """
        if self.json_output:
            return None
        self.logger = CommandLogger(operation, verbose=self.verbose)
        return self.logger

    def output_json(self, data: Any, exit_code: int = 0) -> None:
        """
        Output data as JSON and exit.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def show_header(
        self,
        title: str,
        app: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON mode)."""
        if not self.json_output:
            show_header(
                title=title,
                app=app,
                details=details,
                console=self.console,
            )

    def confirm(self, question: str, default: bool = False) -> bool:
        """
        Ask for user confirmation.

        Args:
            question: Question to ask
            default: Default answer

        Returns:
            True if confirmed
        """
        default_str = "y" if default else "n"
        self.console.print(
            f"{question} [bold bright_white]\\[y/n][/bold bright_white] [dim]({default_str})[/dim]: ",
            end="",
        )
        answer = input().strip().lower()

        if not answer:
            return default

        return answer in ["y", "yes"]

    def show_log_path(self) -> None:
        """Point at the log file of this command, if one was opened."""
        if self.logger and not self.json_output:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    def report_error(self, error: FabrokuError) -> None:
        """
        Print a FabrokuError the way users should see it.

        401s always mean the stored token is no good anymore.
        """
        if self.logger:
            self.logger.log_error(error.message, context=error.context)

        if self.json_output:
            error_data: Dict[str, Any] = {"error": error.message}
            if isinstance(error, APIError):
                error_data["status_code"] = error.status_code
            print(json.dumps(error_data, indent=2))
            return

        if isinstance(error, APIError) and error.is_unauthorized:
            self.console.print("\n[bold red]✗ Token expired or invalid. Log in again.[/bold red]")
            self.console.print("  [dim]Run:[/dim] [cyan]fabroku login[/cyan]\n")
            return

        if isinstance(error, AuthenticationRequired):
            self.console.print(f"\n[bold red]✗ {escape(error.message)}[/bold red]")
            self.console.print("  [dim]Run:[/dim] [cyan]fabroku login[/cyan]\n")
            return

        if isinstance(error, APIError):
            self.console.print(f"\n[bold red]✗ API error:[/bold red] {escape(error.message)}\n")
            return

        self.console.print(f"\n[bold red]✗ {escape(error.message)}[/bold red]")
        if error.context:
            self.console.print(f"  [color(208)]{escape(error.context)}[/color(208)]")
        self.console.print()

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")
            raise SystemExit(130)
        except SystemExit:
            raise
        except FabrokuError as e:
            self.report_error(e)
            self.show_log_path()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self.show_log_path()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
