import asyncio
import logging
from collections.abc import AsyncIterator, Sequence

import aiohttp
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .config import LoadTestConfig
from .executor import RequestExecutor
from .metrics import aggregate
from .models import Result, ResultCallback, RunSummary
from .utils import now

logger = logging.getLogger(__name__)

_DONE = object()


def job_urls(targets: Sequence[str], n: int) -> list[str]:
    """URL of every job in assignment order, cycling through the targets."""
    return [targets[i % len(targets)] for i in range(n)]


class LoadRunner:
    def __init__(
        self,
        config: LoadTestConfig,
        result_callback: ResultCallback | None = None,
        use_progress_bar: bool = False,
    ) -> None:
        self.config = config
        self.result_callback = result_callback
        self.use_progress_bar = use_progress_bar
        self.results: list[Result] = []
        self._t0: float | None = None

        logger.info(
            f"Initialized runner with {len(config.targets)} target(s), "
            f"requests={config.requests}, concurrency={config.effective_concurrency}, "
            f"timeout={config.timeout_s}s"
        )

    # ────────────────────────────────
    # HTTP client
    # ────────────────────────────────

    def _session(self) -> aiohttp.ClientSession:
        # one in-flight connection per worker
        workers = self.config.effective_concurrency
        connector = aiohttp.TCPConnector(limit=workers, limit_per_host=workers)
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_s)
        return aiohttp.ClientSession(connector=connector, timeout=timeout)

    # ────────────────────────────────
    # Scheduling
    # ────────────────────────────────

    async def _run_sequential(self, executor: RequestExecutor) -> AsyncIterator[Result]:
        for idx, u in enumerate(job_urls(self.config.targets, self.config.requests)):
            yield await executor.execute(u, idx, 0)

    async def _run_pool(self, executor: RequestExecutor) -> AsyncIterator[Result]:
        jobs: asyncio.Queue[tuple[int, str]] = asyncio.Queue()
        for idx, u in enumerate(job_urls(self.config.targets, self.config.requests)):
            jobs.put_nowait((idx, u))
        results: asyncio.Queue = asyncio.Queue()

        async def worker(worker_id: int):
            handled = 0
            while True:
                try:
                    idx, u = jobs.get_nowait()
                except asyncio.QueueEmpty:
                    break
                results.put_nowait(await executor.execute(u, idx, worker_id))
                handled += 1
            logger.debug(f"Worker {worker_id} stopped after {handled} request(s)")

        async def close_when_done():
            try:
                await asyncio.gather(*workers)
            finally:
                results.put_nowait(_DONE)

        workers = [
            asyncio.create_task(worker(i)) for i in range(self.config.effective_concurrency)
        ]
        closer = asyncio.create_task(close_when_done())
        try:
            while True:
                item = await results.get()
                if item is _DONE:
                    break
                yield item
            # surfaces anything a worker raised
            await closer
        finally:
            for t in (*workers, closer):
                if not t.done():
                    t.cancel()

    async def stream(self) -> AsyncIterator[Result]:
        """Yield one Result per job, in arrival order."""
        async with self._session() as session:
            self._t0 = now()
            executor = RequestExecutor(session, t0=self._t0)
            if self.config.sequential:
                logger.info(f"Running {self.config.requests} request(s) sequentially")
                source = self._run_sequential(executor)
            else:
                logger.info(
                    f"Starting {self.config.requests} requests with "
                    f"{self.config.effective_concurrency} workers"
                )
                source = self._run_pool(executor)
            try:
                async for result in source:
                    yield result
            finally:
                await source.aclose()

    async def run(self) -> RunSummary:
        self.results = []

        progress = None
        task_id = None
        if self.use_progress_bar:
            progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=Console(stderr=True),
                transient=True,
            )
            progress.start()
            task_id = progress.add_task("[cyan]Pouring...", total=self.config.requests)

        try:
            async for result in self.stream():
                self.results.append(result)
                if self.result_callback:
                    self.result_callback(result)
                if progress and task_id is not None:
                    progress.advance(task_id)
            elapsed = now() - self._t0
        finally:
            if progress:
                progress.stop()

        if len(self.results) != self.config.requests:
            logger.error(
                f"Expected {self.config.requests} results, collected {len(self.results)}"
            )

        summary = aggregate(self.results, elapsed)
        logger.info(
            f"Run completed: {summary.success} succeeded, {summary.failures} failed "
            f"in {elapsed:.2f}s"
        )
        return summary
