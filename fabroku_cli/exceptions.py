"""
Fabroku CLI Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional


class FabrokuError(Exception):
    """Base exception for all Fabroku CLI errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class AuthenticationRequired(FabrokuError):
    """Raised when a command needs a stored token and there is none."""

    def __init__(self, message: str = "You need to log in first"):
        super().__init__(message, "Run: fabroku login")


class LoginError(FabrokuError):
    """Raised when the browser login handshake fails or times out."""

    pass


class APIError(FabrokuError):
    """Raised when the Fabroku API answers with a non-success status."""

    def __init__(self, status_code: Optional[int], detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")

    @property
    def is_unauthorized(self) -> bool:
        """Token missing, expired or revoked."""
        return self.status_code == 401

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409

    @property
    def is_validation_error(self) -> bool:
        return self.status_code == 400


class APIConnectionError(APIError):
    """Raised when the API could not be reached at all."""

    def __init__(self, detail: str):
        self.status_code = None
        self.detail = detail
        FabrokuError.__init__(self, detail)


class ResolutionFailure(FabrokuError):
    """Raised when no app could be selected for the command."""

    pass


class AppNotFoundError(ResolutionFailure):
    """Raised when no app matches the name or id given with --app."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(
            f"App '{reference}' not found", "Run: fabroku apps to list your apps"
        )


class GitRepositoryNotFoundError(ResolutionFailure):
    """Raised when the directory has no git remote to match apps against."""

    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(
            f"No git repository detected in {directory}",
            "Run from the root of a git repository, or use: fabroku deploy --app <name>",
        )


class NoMatchingAppError(ResolutionFailure):
    """Raised when no app is linked to the local git remote."""

    def __init__(self, remote_url: str, dashboard_url: str):
        self.remote_url = remote_url
        super().__init__(
            f"No app matches this repository ({remote_url})",
            f"Run: fabroku apps, or create a new app at {dashboard_url}",
        )


class VerificationFailure(FabrokuError):
    """Raised when the pre-deploy file check fails."""

    def __init__(self, message: str = "Verification failed. Fix the problems before deploying"):
        super().__init__(message, "Run: fabroku verify --fix to generate the missing files")


class DeployFailure(FabrokuError):
    """Raised when the remote deploy task ends in FAILURE."""

    pass


class PollTimeout(DeployFailure):
    """Raised when polling runs out of ticks before a terminal state."""

    pass


class ConfigurationError(FabrokuError):
    """Raised when the stored CLI config cannot be read."""

    pass
