"""Block Poller: BlockEventSource that polls eth_blockNumber and notifies listeners.

Invariants:
    - Listeners are notified once per newly observed block number, in subscription order
    - The first successful poll notifies (the current head counts as new)
    - A listener raising never stops the poller or other listeners
    - RPC failures are logged and retried on the next interval
"""

import asyncio
import contextlib
import logging
from typing import Any, Callable

from web3.exceptions import Web3Exception

from minter.core.contract_protocols import BlockListener

logger = logging.getLogger(__name__)


class BlockPoller:

    def __init__(self, w3: Any, interval_seconds: float = 4.0):
        self._w3 = w3
        self._interval = interval_seconds
        self._listeners: list[BlockListener] = []
        self._task: asyncio.Task | None = None
        self.last_block: int | None = None

    def subscribe(self, listener: BlockListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def poll_once(self) -> int | None:
        """Fetch the head block. Returns it if new (listeners notified), else None."""
        number = int(await self._w3.eth.block_number)
        if self.last_block is not None and number <= self.last_block:
            return None
        self.last_block = number
        for listener in list(self._listeners):
            try:
                listener(number)
            except Exception as e:
                logger.error(
                    f"Block listener failed: {e}",
                    exc_info=True, extra={"block_number": number},
                )
        return number

    async def _run(self) -> None:
        while True:
            try:
                await self.poll_once()
            except (Web3Exception, OSError, asyncio.TimeoutError) as e:
                logger.warning(f"Block poll failed: {e}")
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())
            logger.info(f"Block polling every {self._interval}s")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
