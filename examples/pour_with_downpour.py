"""
Quick sanity test: a small concurrent load run against a set of URLs.
Run: uv run examples/pour_with_downpour.py
"""
import asyncio
import os

from downpour import LoadRunner, LoadTestConfig, render_report

URLS = [
    "https://example.com/",
    "https://httpbin.org/get",
]

async def main():
    config = LoadTestConfig(
        targets=URLS,
        requests=20,
        concurrency=4,
        timeout_s=float(os.getenv("HTTP_REQUEST_TIMEOUT_S", "10")),
    )
    summary = await LoadRunner(config).run()
    print(render_report(summary))

if __name__ == "__main__":
    asyncio.run(main())
