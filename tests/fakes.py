"""Fakes for the contract boundary protocols.

Invariants:
    - FakeHandle exposes an explicit operations dict, same shape as Web3ContractHandle
    - PendingOperation returns an unresolved future per call so tests decide
      completion order
    - No fake touches the network or a database
"""

import asyncio
from typing import Any

WALLET = "0x00000000000000000000000000000000000000A1"
OTHER_WALLET = "0x00000000000000000000000000000000000000B2"


class FakeHandle:
    def __init__(self, name: str = "NFTCollection", operations: dict | None = None):
        self.name = name
        self.operations = operations or {}


class RecordingOperation:
    """Synchronous operation that records its arguments."""

    def __init__(self, result: Any = None, error: Exception | None = None):
        self.calls: list[tuple] = []
        self._result = result
        self._error = error

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        if self._error is not None:
            raise self._error
        return self._result


class AsyncOperation(RecordingOperation):
    """Coroutine operation, like a web3 .call()."""

    async def __call__(self, *args: Any) -> Any:
        return super().__call__(*args)


class PendingOperation:
    """Each call returns a fresh future; resolve/fail them in any order."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.pending: list[asyncio.Future] = []

    def __call__(self, *args: Any) -> asyncio.Future:
        self.calls.append(args)
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return future


class FakeHandles:
    def __init__(self, handles: dict[int, FakeHandle] | None = None):
        self.handles = handles or {}

    def handle_for(self, collection_id: int) -> FakeHandle | None:
        return self.handles.get(collection_id)

    def collection_ids(self) -> list[int]:
        return sorted(self.handles)


class FakeAddresses:
    def __init__(self, address: str | None = WALLET):
        self.address = address

    def current_address(self) -> str | None:
        return self.address


class FakeBlockSource:
    def __init__(self):
        self.listeners: list = []

    def subscribe(self, listener):
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def emit(self, block_number: int) -> list:
        return [listener(block_number) for listener in list(self.listeners)]


class FakeSnapshotStore:
    def __init__(self, rows: list[dict] | None = None):
        self.saved: list[dict] = []
        self.rows = rows or []

    async def save(self, collection_id, address, balance, block_number, updated_at):
        self.saved.append({
            "collection_id": collection_id,
            "address": address,
            "balance": balance,
            "block_number": block_number,
        })

    async def load(self, address):
        return list(self.rows)
