"""Background task runner for detached persona turns."""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Set

from ..utils.logger import get_app_logger

ErrorCallback = Callable[[BaseException], Optional[Awaitable[None]]]


class BackgroundTaskRunner:
    """
    Owns fire-and-forget tasks scheduled after a response is sent.

    Each task keeps a strong reference until it finishes. A failure is
    logged and handed to the task's ``on_error`` callback.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()
        self.logger = get_app_logger()

    @property
    def pending(self) -> int:
        """Number of tasks that have not finished yet."""
        return len(self._tasks)

    def schedule(
        self,
        name: str,
        work: Callable[[], Awaitable[Any]],
        on_error: Optional[ErrorCallback] = None,
        delay: float = 0.0
    ) -> asyncio.Task:
        """
        Start ``work`` as a detached task.

        Args:
            name: Task name for logs
            work: Zero-argument coroutine function
            on_error: Called with the exception if ``work`` fails
            delay: Seconds to wait before starting

        Returns:
            The created task
        """
        task = asyncio.create_task(self._run(name, work, on_error, delay), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self.logger.debug(f"[Background] scheduled {name} (delay={delay}s)")
        return task

    async def _run(self, name: str, work: Callable[[], Awaitable[Any]],
                   on_error: Optional[ErrorCallback], delay: float) -> None:
        try:
            if delay > 0:
                await asyncio.sleep(delay)
            await work()
            self.logger.info(f"[Background] {name} completed")
        except asyncio.CancelledError:
            self.logger.info(f"[Background] {name} cancelled")
            raise
        except Exception as e:
            self.logger.exception(f"[Background] {name} failed")
            if on_error is None:
                return
            try:
                result = on_error(e)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                self.logger.exception(f"[Background] error handler for {name} failed")

    async def join(self) -> None:
        """Wait for every task scheduled so far, including ones they schedule."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self, wait: bool = False) -> None:
        """
        Stop the runner.

        Args:
            wait: Let pending tasks finish instead of cancelling them
        """
        if wait:
            await self.join()
            return

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            self.logger.info(f"[Background] cancelled {len(tasks)} pending task(s)")
