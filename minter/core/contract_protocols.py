"""Boundary Protocols: contracts between the core and the chain-facing shell.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - Contract handles expose an explicit operation registry, never attribute probing
    - Implementations are provided by the shell (web3 adapters, DB store) via injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Callable, Protocol

from minter.core.domain_types import Address, CollectionId, Operation


class ContractHandle(Protocol):
    """Capability surface of one deployed contract.

    `operations` maps operation name to callable. An operation accepts
    positional arguments, optionally followed by a call metadata dict,
    and returns a value or an awaitable.
    """
    name: str
    operations: Mapping[str, Operation]


class ContractHandleProvider(Protocol):
    """Supplies contract handles keyed by collection id."""
    def handle_for(self, collection_id: CollectionId) -> ContractHandle | None: ...
    def collection_ids(self) -> list[CollectionId]: ...


BlockListener = Callable[[int], None]


class BlockEventSource(Protocol):
    """Emits one notification per new chain block."""
    def subscribe(self, listener: BlockListener) -> Callable[[], None]: ...


class AddressProvider(Protocol):
    """Supplies the caller's wallet address used as the balance read argument."""
    def current_address(self) -> Address | None: ...


class BalanceSnapshotStore(Protocol):
    """Persistence for last-known-good balances, implemented by the shell."""
    async def save(
        self,
        collection_id: CollectionId,
        address: Address,
        balance: int,
        block_number: int | None,
        updated_at: datetime,
    ) -> None: ...

    async def load(self, address: Address) -> list[dict]: ...
