"""API fixtures: FastAPI app with a runtime built from boundary fakes.

Invariants:
    - The lifespan never runs (ASGITransport), so no web3 or DB is created
    - app.state.runtime is replaced per test and restored afterwards
"""

import pytest
from httpx import ASGITransport, AsyncClient

from minter.core.balance_board import BalanceBoard
from minter.infrastructure.wallet import WalletAddressProvider
from minter.main import app
from minter.runtime import MinterRuntime
from minter.services.balance_sync import BalanceSynchronizer
from minter.services.call_dispatch import CallDispatcher

from tests.fakes import AsyncOperation, FakeHandle, FakeHandles, RecordingOperation

WALLET = "0x" + "ab" * 20


@pytest.fixture
def operations():
    """Per-test operation fakes, keyed by collection then operation name."""
    return {
        0: {
            "balanceOf": AsyncOperation(2),
            "totalSupply": RecordingOperation(100),
            "tokenURI": AsyncOperation("ipfs://token/1"),
            "mint": AsyncOperation(b"\xaa\xbb"),
        },
        1: {"balanceOf": AsyncOperation(7)},
    }


@pytest.fixture
def runtime(operations):
    handles = FakeHandles({
        cid: FakeHandle("NFTCollection" if cid == 0 else f"NFTCollection{cid}", ops)
        for cid, ops in operations.items()
    })
    wallet = WalletAddressProvider(WALLET)
    board = BalanceBoard()
    dispatcher = CallDispatcher()
    return MinterRuntime(
        board=board,
        dispatcher=dispatcher,
        handles=handles,
        wallet=wallet,
        synchronizer=BalanceSynchronizer(board, dispatcher, handles, wallet),
    )


@pytest.fixture
async def client(runtime):
    original = getattr(app.state, "runtime", None)
    app.state.runtime = runtime
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    await runtime.synchronizer.drain()
    app.state.runtime = original
