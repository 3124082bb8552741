"""
Screen scope: the cancellation token for a screen's in-flight requests.

A screen launches its request coroutines through its scope. Closing the
scope cancels whatever is still running; completion handlers consult
`scope.active` before touching any UI callback or local state.
"""

import asyncio
import logging
from typing import Coroutine, Optional

logger = logging.getLogger(__name__)


class ScopeClosedError(RuntimeError):
    """Raised when launching work in a scope that has already been closed."""


class ScreenScope:
    def __init__(self, name: str = "screen"):
        self.name = name
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def active(self) -> bool:
        return not self._closed

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def launch(self, coro: Coroutine, name: Optional[str] = None) -> asyncio.Task:
        """Schedule a coroutine on the running loop, tied to this scope."""
        if self._closed:
            coro.close()
            raise ScopeClosedError(f"Scope {self.name} is closed")

        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def close(self) -> None:
        """Cancel all pending work. Idempotent."""
        if self._closed:
            return
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            logger.debug("Scope %s closed, cancelled %d task(s)", self.name, len(self._tasks))

    async def __aenter__(self) -> "ScreenScope":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()
