"""Latency → row level policy.

Diagnostic tables colour each row by how long the logged operation took.
Pages derive the row class from this module instead of hard-coding cut-offs
locally, so every table agrees on what "slow" means.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from logz.config import Settings


class RowLevel(str, Enum):
    """Row classes styled by the gridtable CSS."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class LatencyThresholds:
    """Tunable thresholds (seconds) for duration → level mapping."""

    medium_min: float = 0.01
    high_min: float = 0.1

    def __post_init__(self) -> None:
        if self.medium_min < 0 or self.high_min < 0:
            raise ValueError("latency thresholds must be non-negative")
        if self.medium_min > self.high_min:
            raise ValueError(
                f"medium_min ({self.medium_min}) must not exceed "
                f"high_min ({self.high_min})"
            )


DEFAULT_THRESHOLDS = LatencyThresholds()


def level_for_duration(
    duration: Union[float, timedelta],
    *,
    error: bool = False,
    thresholds: LatencyThresholds = DEFAULT_THRESHOLDS,
) -> RowLevel:
    """Map an operation's duration to a ``RowLevel``.

    Policy: failed → error; otherwise <medium_min low, <high_min medium,
    anything slower high.
    """
    if error:
        return RowLevel.ERROR
    seconds = duration.total_seconds() if isinstance(duration, timedelta) else duration
    if seconds < thresholds.medium_min:
        return RowLevel.LOW
    if seconds < thresholds.high_min:
        return RowLevel.MEDIUM
    return RowLevel.HIGH


def thresholds_from_settings(settings: "Settings") -> LatencyThresholds:
    return LatencyThresholds(
        medium_min=settings.MEDIUM_LATENCY,
        high_min=settings.HIGH_LATENCY,
    )
