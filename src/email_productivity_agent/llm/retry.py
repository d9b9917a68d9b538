"""Retry state machine for Gemini requests.

A request moves through ``ATTEMPTING(n) -> BACKOFF(n) -> ATTEMPTING(n + 1)``
until it reaches ``SUCCEEDED`` or ``FAILED(kind)``. Only timeouts and
transport-level network failures are retryable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    """Where a request currently is in its lifecycle."""

    ATTEMPTING = "attempting"
    BACKOFF = "backoff"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why an attempt failed."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    PERMANENT = "permanent"

    @property
    def retryable(self) -> bool:
        return self is not FailureKind.PERMANENT


@dataclass(frozen=True)
class RetryState:
    """Immutable snapshot of a request's progress."""

    phase: Phase
    attempt: int
    failure: FailureKind | None = None


@dataclass(frozen=True)
class RetryPolicy:
    """Linear backoff policy: the n-th retry waits ``n * base_delay`` seconds."""

    max_attempts: int = 3
    base_delay: float = 1.0

    def start(self) -> RetryState:
        return RetryState(Phase.ATTEMPTING, attempt=1)

    def succeed(self, state: RetryState) -> RetryState:
        return RetryState(Phase.SUCCEEDED, attempt=state.attempt)

    def fail(self, state: RetryState, kind: FailureKind) -> RetryState:
        """Transition after a failed attempt.

        Returns BACKOFF when the failure is retryable and attempts remain,
        otherwise FAILED.
        """
        if kind.retryable and state.attempt < self.max_attempts:
            return RetryState(Phase.BACKOFF, attempt=state.attempt, failure=kind)
        return RetryState(Phase.FAILED, attempt=state.attempt, failure=kind)

    def backoff_delay(self, state: RetryState) -> float:
        return state.attempt * self.base_delay

    def resume(self, state: RetryState) -> RetryState:
        if state.phase is not Phase.BACKOFF:
            raise ValueError(f"cannot resume from phase {state.phase.value}")
        return RetryState(Phase.ATTEMPTING, attempt=state.attempt + 1)
