"""Core types for the backend transport."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from adminapi.core.config import ClientConfig

UNKNOWN_ERROR = "unknown error"


# ---------------------------------------------------------------------------
# Retry state: one immutable value per attempt
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RetryState:
    """Retry counters carried by a request through the retry loop."""

    attempt: int = 0  # Retries made so far (0 on the first dispatch)
    max_retries: int = 2
    delay_ms: int = 1000

    @classmethod
    def from_config(cls, config: ClientConfig) -> RetryState:
        return cls(attempt=0, max_retries=config.max_retries, delay_ms=config.retry_delay_ms)

    @property
    def can_retry(self) -> bool:
        return self.attempt < self.max_retries

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000

    def advance(self) -> RetryState:
        return replace(self, attempt=self.attempt + 1)


# ---------------------------------------------------------------------------
# Request descriptor: input to the transport
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RequestDescriptor:
    """A single backend call.

    ``body`` only holds defined fields; callers drop ``None`` values before
    building the descriptor. ``files`` is used by multipart uploads only.
    """

    method: str
    path: str
    body: Mapping[str, Any] | None = None
    files: Mapping[str, Any] | None = None
    retry: RetryState | None = None

    def with_retry(self, retry: RetryState) -> RequestDescriptor:
        return replace(self, retry=retry)


# ---------------------------------------------------------------------------
# Result envelope: the contract every operation returns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResultEnvelope:
    """Uniform ``{success, data|error}`` result.

    On success ``error`` is always ``None``; on failure ``error`` is a
    non-empty message and ``data`` is ``None``.
    """

    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any = None) -> ResultEnvelope:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str | None) -> ResultEnvelope:
        return cls(success=False, error=error or UNKNOWN_ERROR)

    def to_dict(self) -> dict:
        """Serialize to the JSON-compatible envelope shape."""
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}

