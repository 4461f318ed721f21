"""
Fabroku CLI Services Layer

API access, git context, app resolution, verification and polling.
"""

from .config_service import ConfigService
from .api_client import FabrokuAPI
from .git_service import GitService, normalize_git_url
from .app_resolver import AppResolver
from .verify_service import ProjectVerifier
from .deploy_poller import DeployPoller, PollPolicy

__all__ = [
    "ConfigService",
    "FabrokuAPI",
    "GitService",
    "normalize_git_url",
    "AppResolver",
    "ProjectVerifier",
    "DeployPoller",
    "PollPolicy",
]
