#!/usr/bin/env python3
# cli.py — command-line entry point for downpour

import argparse
import asyncio
import logging
import sys

from downpour.config import DEFAULT_TIMEOUT_S, SEQUENTIAL_ECHO_LIMIT, LoadTestConfig, build_config
from downpour.core import LoadRunner
from downpour.errors import DownpourError
from downpour.logging_config import setup_logging
from downpour.models import Result
from downpour.rendering import (
    build_timeline,
    render_breakdown,
    render_json,
    render_latency_histogram,
    render_report,
    render_timeline,
)
from downpour.targets import resolve_targets
from downpour.utils import to_ms

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="downpour",
        description="🌧️ Downpour: HTTP load generator reporting latency and throughput",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "url",
        nargs="*",
        help="Target URL, used when neither -u nor -f is given",
    )

    # Targets
    parser.add_argument("-u", dest="target_url", default=None, help="URL to test")
    parser.add_argument(
        "-f",
        dest="url_file",
        default=None,
        help="File containing URLs to test, one per line",
    )

    # Load shape
    parser.add_argument(
        "-n",
        dest="requests",
        type=int,
        default=None,
        help="Total number of requests (a bare URL without -n/-c sends one)",
    )
    parser.add_argument(
        "-c",
        dest="concurrency",
        type=int,
        default=None,
        help="Number of concurrent workers (defaults to 1, capped at -n)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_S,
        help="Per-request timeout in seconds",
    )

    # Output
    parser.add_argument("--breakdown", action="store_true", help="Show status code and failure counts")
    parser.add_argument("--histogram", action="store_true", help="Show a latency histogram")
    parser.add_argument("--timeline", action="store_true", help="Show a per-worker request timeline")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")

    # Logging & Debugging
    parser.add_argument("--debug", action="store_true", help="Enable debug-level logging")
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional file to write logs to (e.g., downpour.log)",
    )

    return parser.parse_args(argv)


def load_config(args) -> LoadTestConfig:
    targets = resolve_targets(args.url_file, args.target_url, args.url)

    requests, concurrency = args.requests, args.concurrency
    # a bare URL on its own is a single request
    single_shot = (
        requests is None and concurrency is None and not args.url_file and not args.target_url
    )
    if single_shot:
        requests, concurrency = 1, 1

    return build_config(targets, requests, concurrency, args.timeout)


def echo_result(result: Result) -> None:
    if result.error is None:
        print(f"Response code: {result.status}")
    else:
        print(f"Request error: {result.detail}")


async def run(args) -> int:
    try:
        config = load_config(args)
    except DownpourError as e:
        logger.error(f"Error: {e}")
        return EXIT_CONFIG_ERROR

    echo = config.sequential and config.requests <= SEQUENTIAL_ECHO_LIMIT and not args.json
    runner = LoadRunner(
        config,
        result_callback=echo_result if echo else None,
        use_progress_bar=not args.no_progress and not echo and sys.stderr.isatty(),
    )
    summary = await runner.run()

    if args.json:
        print(render_json(summary))
        return EXIT_OK

    print()
    print(render_report(summary))
    if args.breakdown:
        print()
        print(render_breakdown(summary))
    if args.histogram:
        print()
        print(render_latency_histogram([to_ms(r.ttlb) for r in runner.results if r.has_timing]))
    if args.timeline:
        print()
        print(render_timeline(build_timeline(runner.results)))
    return EXIT_OK


def main(argv=None):
    args = parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    setup_logging(level=log_level, log_file=args.log_file)

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
