"""
Deployment Models

Deploy task handle, status snapshots and polling outcomes.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum


@dataclass
class DeployTask:
    """Handle returned by the redeploy endpoint."""

    task_id: str

    @property
    def short_id(self) -> str:
        return self.task_id[:8]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DeployTask":
        return cls(task_id=str((data or {}).get("task_id") or ""))


@dataclass
class StatusSnapshot:
    """One reading of the app's deploy status."""

    state: Optional[str]
    current: int = 0
    status: str = ""

    @property
    def is_success(self) -> bool:
        return self.state == "SUCCESS"

    @property
    def is_failure(self) -> bool:
        return self.state == "FAILURE"

    @property
    def is_terminal(self) -> bool:
        return self.is_success or self.is_failure

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatusSnapshot":
        """
        Create from API payload.

        Raises:
            ValueError: If the payload is not an object or percent is not numeric
        """
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected status payload: {data!r}")
        try:
            current = int(data.get("current") or 0)
        except (TypeError, ValueError):
            raise ValueError(f"Unexpected progress value: {data.get('current')!r}")
        return cls(
            state=data.get("state"),
            current=current,
            status=data.get("status") or "",
        )


class PollState(Enum):
    """States of the deploy polling loop."""

    POLLING = "polling"
    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"


@dataclass
class DeployOutcome:
    """Terminal result of polling a deploy."""

    state: PollState
    attempts: int
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.state == PollState.SUCCESS

    @property
    def is_timeout(self) -> bool:
        return self.state == PollState.TIMEOUT

    def __repr__(self) -> str:
        return f"DeployOutcome(state={self.state.value}, attempts={self.attempts})"
