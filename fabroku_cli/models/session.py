"""
Session Model

Credentials loaded once at process start and passed to the API client.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from fabroku_cli.constants import DEFAULT_API_URL


@dataclass
class Session:
    """Stored CLI credentials."""

    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    user: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        """Check if a token is stored."""
        return bool(self.token)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "api_url": self.api_url,
            "token": self.token,
            "user": self.user,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        """Create from dictionary."""
        return cls(
            api_url=data.get("api_url") or DEFAULT_API_URL,
            token=data.get("token"),
            user=data.get("user"),
        )

    def __repr__(self) -> str:
        # Never print the token
        return f"Session(user={self.user}, api_url={self.api_url}, authenticated={self.is_authenticated})"
