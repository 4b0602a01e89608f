"""
One-shot, cancellable customer replacement.

When a customer leaves or runs out of patience, the replacement happens
after a fixed delay so the farewell can be read. The pending replacement
remembers the session generation it was scheduled for; the callback
receives that generation and must ignore it if the session has moved on.
Cancelling (for example on a new game) guarantees the callback never runs.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from customer_sim.logging_context import get_session_logger

logger = get_session_logger(__name__)

DEFAULT_REPLACEMENT_DELAY_SEC = 5.0


class ReplacementScheduler:
    """Holds at most one pending replacement at a time."""

    def __init__(self, delay_sec: float = DEFAULT_REPLACEMENT_DELAY_SEC) -> None:
        if delay_sec < 0:
            raise ValueError(f"delay_sec must be >= 0, got {delay_sec}")
        self.delay_sec = delay_sec
        self._task: Optional[asyncio.Task[None]] = None
        self._generation: Optional[int] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending_generation(self) -> Optional[int]:
        return self._generation if self.pending else None

    def schedule(self, generation: int, callback: Callable[[int], None]) -> bool:
        """Schedule ``callback(generation)`` after the delay.

        Returns False without scheduling when a replacement for the same
        generation is already pending. A pending replacement for another
        generation is cancelled first.

        Must be called from a running event loop.
        """
        if self.pending:
            if self._generation == generation:
                logger.debug("Replacement already pending for generation %d", generation)
                return False
            self.cancel()

        loop = asyncio.get_running_loop()
        self._generation = generation
        self._task = loop.create_task(self._run(generation, callback))
        logger.info(
            "Customer replacement scheduled in %.1fs (generation %d)",
            self.delay_sec, generation,
        )
        return True

    def cancel(self) -> bool:
        """Cancel the pending replacement. Returns True if one was pending."""
        if not self.pending:
            self._task = None
            self._generation = None
            return False
        assert self._task is not None
        self._task.cancel()
        logger.info("Pending replacement cancelled (generation %s)", self._generation)
        self._task = None
        self._generation = None
        return True

    async def wait(self) -> None:
        """Wait for the pending replacement, if any, to finish or be cancelled."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self, generation: int, callback: Callable[[int], None]) -> None:
        await asyncio.sleep(self.delay_sec)
        # Cleared before the callback so it may schedule again.
        self._task = None
        self._generation = None
        callback(generation)
