import asyncio
import logging
import time
from typing import Awaitable, Callable

from card_order_qa.exceptions import WaitTimeout


class WaitPredicate:
    """A condition over live DOM state, polled until true or until the timeout elapses.

    Created per read operation and discarded once it resolves.
    """

    def __init__(
        self,
        description: str,
        condition: Callable[[], Awaitable[bool]],
        timeout_ms: int,
        poll_interval_ms: int,
    ):
        if poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")
        self.description = description
        self.condition = condition
        self.timeout_ms = timeout_ms
        self.poll_interval_ms = poll_interval_ms

    async def wait(self) -> int:
        """Poll the condition. Returns the number of evaluations it took.

        Raises:
            WaitTimeout: the condition was still false when the timeout expired.
        """
        logging.debug(f"Waiting up to {self.timeout_ms}ms for: {self.description}")
        started = time.monotonic()
        deadline = started + self.timeout_ms / 1000
        attempts = 0

        while True:
            attempts += 1
            if await self.condition():
                elapsed = int((time.monotonic() - started) * 1000)
                logging.info(f"Condition met after {elapsed}ms ({attempts} polls): {self.description}")
                return attempts

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logging.error(f"Timed out after {self.timeout_ms}ms ({attempts} polls): {self.description}")
                raise WaitTimeout(self.description, self.timeout_ms)

            await asyncio.sleep(min(self.poll_interval_ms / 1000, remaining))
