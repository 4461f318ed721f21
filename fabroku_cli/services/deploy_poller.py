"""
Deploy Status Poller

Bounded, strictly sequential polling of a deploy until it reaches a
terminal state. Rendering and sleeping are injected so the loop can run
without real delays.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from fabroku_cli.constants import POLL_INTERVAL_SECONDS, POLL_MAX_TICKS
from fabroku_cli.exceptions import APIError
from fabroku_cli.models.deployment import DeployOutcome, PollState, StatusSnapshot

# Errors a single tick recovers from
TRANSIENT_ERRORS = (APIError, requests.exceptions.RequestException, ValueError)


@dataclass(frozen=True)
class PollPolicy:
    """Fixed-interval polling budget."""

    interval: float = POLL_INTERVAL_SECONDS
    max_ticks: int = POLL_MAX_TICKS

    @property
    def ceiling_minutes(self) -> int:
        return round(self.interval * self.max_ticks / 60)


class DeployPoller:
    """
    Poll a status source until SUCCESS, FAILURE or the tick budget runs out.

    Each tick sleeps one interval, then fetches a snapshot. A failed fetch
    still uses up its tick; it never ends the loop on its own.
    """

    def __init__(
        self,
        fetch_status: Callable[[], StatusSnapshot],
        policy: Optional[PollPolicy] = None,
        sleep: Optional[Callable[[float], None]] = None,
        on_progress: Optional[Callable[[StatusSnapshot], None]] = None,
        logger=None,
    ):
        self.fetch_status = fetch_status
        self.policy = policy or PollPolicy()
        self.sleep = sleep or time.sleep
        self.on_progress = on_progress
        self.logger = logger
        self.state = PollState.POLLING

    def _log(self, message: str, level: str = "DEBUG") -> None:
        if self.logger:
            self.logger.log(message, level)

    def poll(self) -> DeployOutcome:
        last_progress = 0
        last_status = ""

        for tick in range(1, self.policy.max_ticks + 1):
            self.sleep(self.policy.interval)

            try:
                snapshot = self.fetch_status()
            except TRANSIENT_ERRORS as e:
                self._log(f"Tick {tick}: status fetch failed ({e}), retrying")
                continue

            self._log(
                f"Tick {tick}: state={snapshot.state} current={snapshot.current} status={snapshot.status}"
            )

            if snapshot.current != last_progress or snapshot.status != last_status:
                if self.on_progress:
                    self.on_progress(snapshot)
                last_progress = snapshot.current
                last_status = snapshot.status

            if snapshot.is_success:
                return self._finish(PollState.SUCCESS, tick)

            if snapshot.is_failure:
                return self._finish(PollState.FAILURE, tick, snapshot.status or None)

        return self._finish(
            PollState.TIMEOUT,
            self.policy.max_ticks,
            f"Timeout: deploy took longer than {self.policy.ceiling_minutes} minutes",
        )

    def _finish(self, state: PollState, attempts: int, error: Optional[str] = None) -> DeployOutcome:
        self.state = state
        self._log(f"Polling finished: {state.value} after {attempts} attempt(s)", "INFO")
        return DeployOutcome(state=state, attempts=attempts, error=error)
