"""
Fabroku CLI Data Models

Type-safe dataclass models for sessions, apps, deploys and results.
"""

from .session import Session
from .app import App, AppStatus, GitIdentity
from .deployment import DeployTask, StatusSnapshot, PollState, DeployOutcome
from .results import AppType, RequiredFile, FileCheck, VerificationReport

__all__ = [
    "Session",
    "App",
    "AppStatus",
    "GitIdentity",
    "DeployTask",
    "StatusSnapshot",
    "PollState",
    "DeployOutcome",
    "AppType",
    "RequiredFile",
    "FileCheck",
    "VerificationReport",
]
