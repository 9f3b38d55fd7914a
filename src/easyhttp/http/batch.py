"""
Concurrent batch execution with a join barrier.
"""

import asyncio
import time
from collections.abc import Sequence

from ..types import OutboundRequest
from ..types import RequestResult
from .executor import RequestExecutor
from .logger import HTTPLogger


class BatchExecutor:
    """
    Runs independent requests concurrently and waits for all of them.

    Every request is started immediately unless ``max_concurrency`` caps the
    number in flight. One request's failure never cancels its siblings, and
    results are returned in input order whatever the completion order.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        logger: HTTPLogger,
        max_concurrency: int | None = None,
    ):
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._executor = executor
        self._logger = logger
        self.max_concurrency = max_concurrency

    async def run(self, requests: Sequence[OutboundRequest]) -> list[RequestResult]:
        """
        Run every request and collect the outcomes.

        Args:
            requests: Resolved requests, in caller order

        Returns:
            One RequestResult per request, index-aligned with ``requests``
        """
        start = time.monotonic()

        if self.max_concurrency is None:
            results = await asyncio.gather(*(self._executor.perform(r) for r in requests))
        else:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def bounded(request: OutboundRequest) -> RequestResult:
                async with semaphore:
                    return await self._executor.perform(request)

            results = await asyncio.gather(*(bounded(r) for r in requests))

        for i, result in enumerate(results):
            if result.status >= 400:
                self._logger.log(f"Request {i} failed with status code: {result.status}", "ERROR")
            if result.error is not None:
                self._logger.log(f"Request {i} failed with transport error: {result.error}", "ERROR")

        duration = time.monotonic() - start
        self._logger.log(f"Total duration for batch requests: {duration:.3f} seconds", "DEBUG")

        return list(results)
