import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DatabaseExecutor:
    """
    Runs blocking database calls on one worker thread so the event loop never waits on SQLite.
    With a single worker, calls complete in submission order.
    """

    def __init__(self, thread_name_prefix: str = "sleep-db"):
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix=thread_name_prefix)
        self._closed = False

    async def run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run fn(*args, **kwargs) on the worker and hand the result back to the calling loop."""
        loop = asyncio.get_running_loop()
        call = functools.partial(fn, *args, **kwargs)
        return await loop.run_in_executor(self._pool, call)

    def shutdown(self, wait: bool = True) -> None:
        if self._closed:
            return
        self._closed = True
        # queued calls that never started are dropped; the running one is allowed to finish
        self._pool.shutdown(wait=wait, cancel_futures=True)
        logger.debug("Database executor shut down")
