"""
App Models

Remote application records and the local git identity used to find them.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any, Union
from enum import Enum


class AppStatus(Enum):
    """Status of an app on the platform."""

    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
    ERROR = "ERROR"
    STARTING = "STARTING"
    DEPLOYING = "DEPLOYING"
    DELETING = "DELETING"
    STOPPING = "STOPPING"
    RESTARTING = "RESTARTING"


@dataclass
class App:
    """Application record as returned by the API."""

    id: Union[int, str]
    name: str
    status: Optional[str] = None
    domain: Optional[str] = None
    git: Optional[str] = None
    project: Optional[Union[int, str]] = None

    @property
    def public_url(self) -> Optional[str]:
        if not self.domain:
            return None
        return f"https://{self.domain}"

    def matches_reference(self, reference: str) -> bool:
        """Match by exact name or by id (compared as strings)."""
        return self.name == reference or str(self.id) == str(reference)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "domain": self.domain,
            "git": self.git,
            "project": self.project,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "App":
        """Create from API payload, ignoring unknown fields."""
        return cls(
            id=data.get("id", ""),
            name=data.get("name") or "",
            status=data.get("status"),
            domain=data.get("domain") or None,
            git=data.get("git") or None,
            project=data.get("project"),
        )


@dataclass
class GitIdentity:
    """Remote URL and branch of the local repository."""

    remote_url: str
    branch: Optional[str] = None

    def __repr__(self) -> str:
        return f"GitIdentity(remote={self.remote_url}, branch={self.branch})"
