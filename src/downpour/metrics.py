import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from .models import DurationStats, Result, RunSummary
from .utils import to_ms

logger = logging.getLogger(__name__)


def summarize_durations(durations: Iterable[float]) -> DurationStats:
    """Min, max and mean of durations given in seconds, reported in milliseconds.

    An empty input yields all zeros.
    """
    values = [to_ms(d) for d in durations]
    if not values:
        return DurationStats()
    return DurationStats(min=min(values), max=max(values), mean=sum(values) / len(values))


def aggregate(results: Sequence[Result], wall_clock_s: float) -> RunSummary:
    total = len(results)
    success = sum(1 for r in results if r.is_success)
    timed = [r for r in results if r.has_timing]
    logger.debug(f"Aggregating {total} results ({len(timed)} timed) over {wall_clock_s:.3f}s")

    status_counts = Counter(r.status for r in results if r.status is not None and r.error is None)
    failure_counts = Counter(r.error.value for r in results if r.error is not None)

    total_time = summarize_durations(r.ttlb for r in timed)
    summary = RunSummary(
        total=total,
        success=success,
        failures=total - success,
        requests_per_second=total / wall_clock_s if wall_clock_s > 0 else 0.0,
        wall_clock_s=wall_clock_s,
        total_time=total_time,
        ttfb=summarize_durations(r.ttfb for r in timed),
        # last byte is the end of the request, so TTLB and total time coincide
        ttlb=total_time,
        status_counts=dict(sorted(status_counts.items())),
        failure_counts=dict(sorted(failure_counts.items())),
    )

    if timed:
        logger.info(
            f"Stats computed: success={summary.success}, failures={summary.failures}, "
            f"rps={summary.requests_per_second:.2f}, mean={summary.total_time.mean:.2f}ms"
        )
    else:
        logger.warning("No timed responses recorded.")
    return summary
