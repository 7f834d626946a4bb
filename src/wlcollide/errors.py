"""Error taxonomy shared by every stage of a run."""
from __future__ import annotations

from typing import Any, Optional


class WLCollideError(Exception):
    """Base class for all wlcollide errors."""


class InvalidParameter(WLCollideError, ValueError):
    """Malformed input: bad vertex count, dimension, or edge set."""


class ResourceExhausted(WLCollideError, RuntimeError):
    """A configured ceiling (tuple states, isomorphism attempts) was hit.

    Recovered locally by the classifier; never aborts a run.
    """

    def __init__(self, message: str, *, required: Optional[int] = None, limit: Optional[int] = None):
        super().__init__(message)
        self.required = required
        self.limit = limit


class InternalInvariantViolation(WLCollideError, RuntimeError):
    """A correctness invariant failed. Fatal for the whole run.

    Carries whatever context was available when the check failed so the
    report can show the offending graph, round and partition snapshot.
    """

    def __init__(
        self,
        message: str,
        *,
        graph: Any = None,
        round: Optional[int] = None,
        snapshot: Any = None,
    ):
        super().__init__(message)
        self.graph = graph
        self.round = round
        self.snapshot = snapshot

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.graph is not None:
            parts.append(f"graph={self.graph!r}")
        if self.round is not None:
            parts.append(f"round={self.round}")
        if self.snapshot is not None:
            parts.append(f"snapshot={self.snapshot!r}")
        return " | ".join(parts)
