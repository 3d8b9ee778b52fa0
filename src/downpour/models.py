from dataclasses import dataclass, field
from collections.abc import Callable

from .errors import FailureKind


@dataclass(frozen=True)
class Result:
    """Outcome of one executed job.

    Durations are in seconds. ``started_at`` is relative to the start of the run.
    A result with ``error`` set carries no usable timing; ``ttfb`` may still be
    filled in for a body-read failure but is informational only.
    """

    index: int
    url: str
    worker_id: int
    started_at: float
    status: int | None = None
    ttfb: float | None = None
    ttlb: float | None = None
    error: FailureKind | None = None
    detail: str = ""

    @property
    def is_success(self) -> bool:
        return self.error is None and self.status is not None and 200 <= self.status < 300

    @property
    def has_timing(self) -> bool:
        return self.error is None and self.ttfb is not None and self.ttlb is not None


@dataclass(frozen=True)
class DurationStats:
    # milliseconds
    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0


@dataclass(frozen=True)
class RunSummary:
    total: int
    success: int
    failures: int
    requests_per_second: float
    wall_clock_s: float
    total_time: DurationStats
    ttfb: DurationStats
    ttlb: DurationStats
    status_counts: dict[int, int] = field(default_factory=dict)
    failure_counts: dict[str, int] = field(default_factory=dict)


# Timeline: worker_id -> list of (start, end, url, status)
TimelineType = dict[int, list[tuple[float, float, str, int | None]]]

# Invoked once per Result as it arrives
ResultCallback = Callable[[Result], None]
