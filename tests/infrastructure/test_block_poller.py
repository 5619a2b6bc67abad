"""Block Poller: tests for new-block detection and listener isolation."""

import asyncio
from itertools import count
from types import SimpleNamespace

from minter.infrastructure.block_poller import BlockPoller


class _Eth:
    """eth namespace whose block_number is awaitable, like AsyncWeb3."""

    def __init__(self, numbers):
        self._numbers = iter(numbers)

    @property
    def block_number(self):
        async def fetch():
            return next(self._numbers)
        return fetch()


def _poller(numbers):
    return BlockPoller(SimpleNamespace(eth=_Eth(numbers)), interval_seconds=0.01)


async def test_first_poll_notifies_current_head():
    poller = _poller([10])
    seen = []
    poller.subscribe(seen.append)
    assert await poller.poll_once() == 10
    assert seen == [10]


async def test_same_or_older_block_is_not_renotified():
    poller = _poller([10, 10, 9, 12])
    seen = []
    poller.subscribe(seen.append)
    for _ in range(4):
        await poller.poll_once()
    assert seen == [10, 12]
    assert poller.last_block == 12


async def test_failing_listener_does_not_block_others():
    poller = _poller([1])
    seen = []

    def broken(number):
        raise RuntimeError("listener bug")

    poller.subscribe(broken)
    poller.subscribe(seen.append)
    await poller.poll_once()
    assert seen == [1]


async def test_unsubscribe_stops_notifications():
    poller = _poller([1, 2])
    seen = []
    unsubscribe = poller.subscribe(seen.append)
    await poller.poll_once()
    unsubscribe()
    unsubscribe()
    await poller.poll_once()
    assert seen == [1]


async def test_start_and_stop_background_polling():
    poller = _poller(count(1))
    seen = []
    poller.subscribe(seen.append)
    poller.start()
    await asyncio.sleep(0.05)
    await poller.stop()
    assert seen
    assert seen == sorted(seen)
    stopped_at = len(seen)
    await asyncio.sleep(0.03)
    assert len(seen) == stopped_at
