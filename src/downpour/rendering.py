import json
from collections.abc import Sequence
from dataclasses import asdict

from .models import DurationStats, Result, RunSummary, TimelineType


def _triple(stats: DurationStats) -> str:
    return f"{stats.min:.2f}, {stats.max:.2f}, {stats.mean:.2f} ms"


def render_report(summary: RunSummary) -> str:
    lines = [
        "Results:",
        f" Total Requests (2XX)..........................: {summary.success}",
        f" Failed Requests (non-2XX or network error)....: {summary.failures}",
        f" Total Requests Per Second.....................: {summary.requests_per_second:.2f}",
        f"Total Request Time (s) (Min, Max, Mean).......: {_triple(summary.total_time)}",
        f"Time to First Byte (s) (Min, Max, Mean).......: {_triple(summary.ttfb)}",
        f"Time to Last Byte (s) (Min, Max, Mean)........: {_triple(summary.ttlb)}",
    ]
    return "\n".join(lines)


def render_breakdown(summary: RunSummary) -> str:
    lines = ["Status Codes:"]
    if summary.status_counts:
        lines += [f" {code}: {count}" for code, count in summary.status_counts.items()]
    else:
        lines.append(" (none)")
    lines.append("Failures:")
    if summary.failure_counts:
        lines += [f" {kind}: {count}" for kind, count in summary.failure_counts.items()]
    else:
        lines.append(" (none)")
    return "\n".join(lines)


def render_json(summary: RunSummary) -> str:
    data = asdict(summary)
    # JSON object keys must be strings
    data["status_counts"] = {str(k): v for k, v in summary.status_counts.items()}
    return json.dumps(data, indent=2)


def render_latency_histogram(latencies_ms: Sequence[float], bins: int = 20) -> str:
    if not latencies_ms:
        return "No latency data."
    lo, hi = min(latencies_ms), max(latencies_ms)
    if hi <= lo:
        return f"Histogram: single value {lo:.2f}ms"

    width = 40
    counts = [0] * bins
    for x in latencies_ms:
        j = min(bins - 1, int((x - lo) / (hi - lo) * bins))
        counts[j] += 1

    peak = max(counts)
    lines = []
    for i, c in enumerate(counts):
        left = lo + (hi - lo) * (i / bins)
        right = lo + (hi - lo) * ((i + 1) / bins)
        bar = "#" * max(1, int((c / peak) * width)) if c else ""
        lines.append(f"{left:9.2f}ms - {right:9.2f}ms | {bar} ({c})")
    return "Latency Histogram\n" + "\n".join(lines)


def build_timeline(results: Sequence[Result]) -> TimelineType:
    timeline: TimelineType = {}
    for r in results:
        duration = r.ttlb if r.ttlb is not None else (r.ttfb or 0.0)
        timeline.setdefault(r.worker_id, []).append(
            (r.started_at, r.started_at + duration, r.url, r.status)
        )
    return timeline


def render_timeline(timeline: TimelineType, width: int = 80) -> str:
    if not timeline:
        return "No timeline data."

    max_t = max((end for segs in timeline.values() for _, end, _, _ in segs), default=0.0)
    if max_t <= 0:
        max_t = 1.0

    lines = ["Request Timeline (relative seconds)"]
    for worker_id in sorted(timeline):
        buf = [" "] * width
        for start_rel, end_rel, _url, status in timeline[worker_id]:
            a = max(0, int(start_rel / max_t * (width - 1)))
            b = max(a, int(end_rel / max_t * (width - 1)))
            mark = "=" if status is not None and 200 <= status < 300 else "x"
            for k in range(a, min(b, width - 1) + 1):
                buf[k] = mark
        lines.append(f"W{worker_id:02d} |{''.join(buf)}|")
    lines.append(f"0s{' ' * (width - 6)}~ {max_t:.2f}s")
    return "\n".join(lines)
