import asyncio
import logging

import aiohttp

from .errors import FailureKind
from .models import Result
from .utils import now

logger = logging.getLogger(__name__)


class RequestExecutor:
    """Performs single timed GET requests on a shared session."""

    def __init__(self, session: aiohttp.ClientSession, t0: float | None = None) -> None:
        self.session = session
        self.t0 = now() if t0 is None else t0

    async def execute(self, url: str, index: int = 0, worker_id: int = 0) -> Result:
        start = now()
        started_at = start - self.t0
        ttfb: float | None = None
        try:
            async with self.session.get(url) as resp:
                ttfb = now() - start
                status = resp.status
                try:
                    # drain so the connection goes back to the pool clean
                    content = await resp.read()
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.warning(f"[W{worker_id}] Body read failed for {url}: {e!r}")
                    return Result(
                        index=index,
                        url=url,
                        worker_id=worker_id,
                        started_at=started_at,
                        status=status,
                        ttfb=ttfb,
                        error=FailureKind.BODY_READ,
                        detail=repr(e),
                    )
                ttlb = now() - start
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            if ttfb is not None:
                # raised while releasing the response, after the body was read
                logger.warning(f"[W{worker_id}] Connection dropped after response from {url}: {e!r}")
                return Result(
                    index=index,
                    url=url,
                    worker_id=worker_id,
                    started_at=started_at,
                    ttfb=ttfb,
                    error=FailureKind.BODY_READ,
                    detail=repr(e),
                )
            logger.warning(f"[W{worker_id}] Request to {url!r} failed: {e!r}")
            return Result(
                index=index,
                url=url,
                worker_id=worker_id,
                started_at=started_at,
                error=FailureKind.CONNECTION,
                detail=str(e) or type(e).__name__,
            )

        logger.debug(
            f"[W{worker_id}] #{index} {url}: status={status}, size={len(content)} bytes, "
            f"ttfb={ttfb * 1000:.2f}ms, ttlb={ttlb * 1000:.2f}ms"
        )
        return Result(
            index=index,
            url=url,
            worker_id=worker_id,
            started_at=started_at,
            status=status,
            ttfb=ttfb,
            ttlb=ttlb,
        )
