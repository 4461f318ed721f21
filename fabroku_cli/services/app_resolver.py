"""
App Resolution Service

Selects exactly one remote app for a command, either from an explicit
name/id or from the local git remote.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from fabroku_cli.constants import DASHBOARD_URL
from fabroku_cli.exceptions import (
    AppNotFoundError,
    GitRepositoryNotFoundError,
    NoMatchingAppError,
)
from fabroku_cli.models.app import App, GitIdentity
from fabroku_cli.services.git_service import GitService, normalize_git_url


def find_app_by_git_url(apps: Iterable[App], remote_url: str) -> Optional[App]:
    """First app whose normalized git URL equals the normalized remote."""
    wanted = normalize_git_url(remote_url)
    for app in apps:
        if app.git and normalize_git_url(app.git) == wanted:
            return app
    return None


class AppResolver:
    """
    Resolves the target app.

    Resolution fails closed: when nothing matches, a ResolutionFailure
    subclass is raised. API errors propagate unchanged.
    """

    def __init__(self, api, git: Optional[GitService] = None):
        self.api = api
        self.git = git or GitService()

    def find_by_reference(self, reference: str) -> App:
        """
        Find an app by exact name or id.

        Raises:
            AppNotFoundError: If no app matches
        """
        for app in self.api.list_apps():
            if app.matches_reference(reference):
                return app
        raise AppNotFoundError(reference)

    def detect_identity(self, directory: Union[str, Path]) -> GitIdentity:
        """
        Read the git remote of directory (no API calls).

        Raises:
            GitRepositoryNotFoundError: If there is no origin remote
        """
        identity = self.git.identity(directory)
        if identity is None:
            raise GitRepositoryNotFoundError(str(directory))
        return identity

    def find_by_git_url(self, remote_url: str) -> App:
        """
        Find the app linked to remote_url.

        Raises:
            NoMatchingAppError: If no app's git URL matches
        """
        app = find_app_by_git_url(self.api.list_apps(), remote_url)
        if app is None:
            raise NoMatchingAppError(remote_url, DASHBOARD_URL)
        return app

    def resolve(self, reference: Optional[str], directory: Union[str, Path]) -> App:
        if reference:
            return self.find_by_reference(reference)
        identity = self.detect_identity(directory)
        return self.find_by_git_url(identity.remote_url)
