# src/progress/ticker.py - v1
"""Background progress ticks while an editorial agent is in flight."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Awaitable, Callable

from manuscriptai.core.errors import StorageError
from manuscriptai.progress.models import EditorialProgress, ProgressStatus
from manuscriptai.progress.store import ProgressStore

logger = logging.getLogger(__name__)


class ProgressTicker:
    """Advance the editorial record by ``step`` points every ``interval`` seconds.

    Progress starts at ``start`` and never passes ``ceiling``; once the
    ceiling is reached the ticker keeps sleeping without writing.
    """

    def __init__(
        self,
        store: ProgressStore,
        report_id: str,
        *,
        start: int,
        ceiling: int,
        step: int = 2,
        interval: float = 2.0,
        message: str = "",
        current_step: str = "",
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._store = store
        self._report_id = report_id
        self._current = start
        self._ceiling = ceiling
        self._step = step
        self._interval = interval
        self._message = message
        self._current_step = current_step
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self.ticks_written = 0

    @property
    def current(self) -> int:
        return self._current

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the tick loop and wait for it, so no tick lands afterwards."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def __aenter__(self) -> ProgressTicker:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def _run(self) -> None:
        while True:
            await self._sleep(self._interval)
            nxt = min(self._current + self._step, self._ceiling)
            if nxt <= self._current:
                continue
            self._current = nxt
            try:
                await self._store.write_editorial(
                    self._report_id,
                    EditorialProgress(
                        status=ProgressStatus.PROCESSING,
                        progress=nxt,
                        message=self._message,
                        current_step=self._current_step,
                    ),
                )
            except StorageError as e:
                logger.warning("Progress tick to %d%% not written: %s", nxt, e)
                continue
            self.ticks_written += 1
