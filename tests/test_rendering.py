import json

from downpour.models import DurationStats, Result, RunSummary
from downpour.rendering import (
    build_timeline,
    render_breakdown,
    render_json,
    render_latency_histogram,
    render_report,
    render_timeline,
)


def make_summary(**overrides):
    fields = dict(
        total=10,
        success=8,
        failures=2,
        requests_per_second=123.456,
        wall_clock_s=0.081,
        total_time=DurationStats(1.234, 9.876, 4.5),
        ttfb=DurationStats(0.5, 2.0, 1.0),
        ttlb=DurationStats(1.234, 9.876, 4.5),
        status_counts={200: 8, 503: 1},
        failure_counts={"connection": 1},
    )
    fields.update(overrides)
    return RunSummary(**fields)


def test_report_layout():
    assert render_report(make_summary()).splitlines() == [
        "Results:",
        " Total Requests (2XX)..........................: 8",
        " Failed Requests (non-2XX or network error)....: 2",
        " Total Requests Per Second.....................: 123.46",
        "Total Request Time (s) (Min, Max, Mean).......: 1.23, 9.88, 4.50 ms",
        "Time to First Byte (s) (Min, Max, Mean).......: 0.50, 2.00, 1.00 ms",
        "Time to Last Byte (s) (Min, Max, Mean)........: 1.23, 9.88, 4.50 ms",
    ]


def test_breakdown_lists_codes_and_failures():
    text = render_breakdown(make_summary())
    assert " 503: 1" in text
    assert " connection: 1" in text


def test_breakdown_without_data():
    text = render_breakdown(make_summary(status_counts={}, failure_counts={}))
    assert text.count("(none)") == 2


def test_json_output():
    data = json.loads(render_json(make_summary()))
    assert data["success"] == 8
    assert data["status_counts"] == {"200": 8, "503": 1}
    assert data["ttfb"] == {"min": 0.5, "max": 2.0, "mean": 1.0}


def test_histogram_empty():
    assert "No latency data" in render_latency_histogram([])


def test_histogram_single_value():
    assert "single value" in render_latency_histogram([3.0, 3.0])


def test_histogram_counts_every_sample():
    text = render_latency_histogram([1.0, 2.0, 3.0, 10.0], bins=4)
    lines = text.splitlines()[1:]
    assert len(lines) == 4
    assert sum(int(line.rsplit("(", 1)[1].rstrip(")")) for line in lines) == 4


def test_timeline_empty():
    assert "No timeline data" in render_timeline({})


def test_timeline_one_row_per_worker():
    results = [
        Result(index=0, url="http://x/", worker_id=0, started_at=0.0, status=200, ttfb=0.1, ttlb=0.2),
        Result(index=1, url="http://x/", worker_id=1, started_at=0.1, status=500, ttfb=0.1, ttlb=0.3),
    ]
    text = render_timeline(build_timeline(results), width=40)
    rows = [line for line in text.splitlines() if line.startswith("W")]
    assert [row[:3] for row in rows] == ["W00", "W01"]
    assert "=" in rows[0]
    assert "x" in rows[1]
