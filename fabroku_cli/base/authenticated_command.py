"""
Authenticated Command Base Class

Base class for commands that talk to the Fabroku API.
Provides the session and a lazily created API client.
"""

from typing import Optional

from .base_command import BaseCommand
from fabroku_cli.exceptions import AuthenticationRequired
from fabroku_cli.models.session import Session
from fabroku_cli.services.api_client import FabrokuAPI


class AuthenticatedCommand(BaseCommand):
    """
    Base class for API-backed commands.

    Provides:
    - Session loaded once per command
    - Authentication precondition check
    - Pre-configured API client
    """

    def __init__(self, verbose: bool = False, json_output: bool = False):
        super().__init__(verbose=verbose, json_output=json_output)
        self._session: Optional[Session] = None
        self.api: Optional[FabrokuAPI] = None

    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = self.config_service.load_session()
        return self._session

    def require_authentication(self) -> None:
        """
        Ensure a token is stored before any API call.

        Raises:
            AuthenticationRequired: If not logged in
        """
        if not self.session.is_authenticated:
            raise AuthenticationRequired()

    def ensure_api(self) -> FabrokuAPI:
        """
        Ensure API client is initialized.

        Returns:
            FabrokuAPI instance
        """
        if self.api is None:
            self.api = FabrokuAPI(self.session)
        return self.api
