"""Balance Synchronizer: keeps the displayed balance consistent with the selected collection.

Invariants:
    - Triggers: selection change, block arrival, wallet change
    - No selection, no wallet address, or no contract handle -> no-op, no contract call
    - Each read is tagged with a ReadTicket at issue time and checked against the
      CURRENT board state at completion time; stale completions are dropped
    - Transport failures are caught here, logged, and recorded on the board as a
      stale marker; the previous balance is never reset
    - An unsupported balance operation (dispatcher returned None) is a failed read
    - The only suspension point before a completion is applied is the contract call

Design Decisions:
    - schedule_* issue the ticket synchronously and run the call as a tracked asyncio
      task, so block listeners stay synchronous; drain() awaits outstanding tasks
    - Snapshot persistence happens after the board is updated and cannot undo it
    - Snapshot writes are serialized per collection; a write whose value has
      already been superseded on the board is skipped
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable

from minter.core.balance_board import BalanceBoard, BalanceEntry, ReadTicket
from minter.core.contract_protocols import (
    AddressProvider, BalanceSnapshotStore, BlockEventSource, ContractHandle,
    ContractHandleProvider,
)
from minter.core.domain_types import CollectionId, RefreshTrigger
from minter.core.errors import DatabaseError, MinterError
from minter.services.call_dispatch import CallDispatcher

logger = logging.getLogger(__name__)


def coerce_balance(raw: Any) -> int:
    """BigNumber-like result -> int. Raises ValueError/TypeError when not numeric.

    Strings are decimal unless 0x-prefixed; leading zeros are allowed.
    """
    if isinstance(raw, bool):
        raise TypeError("boolean is not a balance")
    if isinstance(raw, str):
        text = raw.strip()
        if text.lower().startswith(("0x", "-0x")):
            return int(text, 16)
        return int(text, 10)
    return int(raw)


class BalanceSynchronizer:
    """Re-reads the wallet balance of the selected collection on every trigger."""

    def __init__(
        self,
        board: BalanceBoard,
        dispatcher: CallDispatcher,
        handles: ContractHandleProvider,
        addresses: AddressProvider,
        operation_name: str = "balanceOf",
        store: BalanceSnapshotStore | None = None,
    ):
        self._board = board
        self._dispatcher = dispatcher
        self._handles = handles
        self._addresses = addresses
        self._operation = operation_name
        self._store = store
        self._tasks: set[asyncio.Task] = set()
        self._persist_locks: dict[CollectionId, asyncio.Lock] = {}
        self._unsubscribe: Callable[[], None] | None = None
        self.last_block: int | None = None

    @property
    def board(self) -> BalanceBoard:
        return self._board

    # ─── Triggers ───────────────────────────────────────────────

    async def select(self, collection_id: CollectionId | None) -> bool:
        self._board.select(collection_id)
        return await self.refresh(RefreshTrigger.SELECTION)

    async def on_block(self, block_number: int) -> bool:
        self.last_block = block_number
        return await self.refresh(RefreshTrigger.BLOCK)

    async def wallet_changed(self) -> bool:
        self._board.set_owner(self._addresses.current_address())
        return await self.refresh(RefreshTrigger.WALLET)

    async def refresh(self, trigger: RefreshTrigger) -> bool:
        """Issue one balance read and await it. Returns True if its result was applied."""
        started = self._begin(trigger)
        if started is None:
            return False
        return await self._complete(*started)

    # ─── Task scheduling ────────────────────────────────────────
    # The ticket is issued synchronously, at trigger time; only the contract
    # call and its completion run in the background task.

    def schedule_selection(
        self, collection_id: CollectionId | None,
    ) -> asyncio.Task | None:
        self._board.select(collection_id)
        return self._schedule(RefreshTrigger.SELECTION)

    def schedule_block(self, block_number: int) -> asyncio.Task | None:
        """BlockEventSource listener."""
        self.last_block = block_number
        return self._schedule(RefreshTrigger.BLOCK)

    def schedule_wallet(self) -> asyncio.Task | None:
        self._board.set_owner(self._addresses.current_address())
        return self._schedule(RefreshTrigger.WALLET)

    def _schedule(self, trigger: RefreshTrigger) -> asyncio.Task | None:
        started = self._begin(trigger)
        if started is None:
            return None
        task = asyncio.create_task(self._complete(*started))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every outstanding refresh task."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def attach(self, source: BlockEventSource) -> None:
        self.detach()
        self._unsubscribe = source.subscribe(self.schedule_block)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ─── Refresh ────────────────────────────────────────────────

    def _begin(
        self, trigger: RefreshTrigger,
    ) -> tuple[ReadTicket, ContractHandle] | None:
        """Tag a read for the current selection, or None when there is nothing to read."""
        collection_id = self._board.selected
        if collection_id is None:
            return None
        address = self._addresses.current_address()
        if not address:
            return None
        handle = self._handles.handle_for(collection_id)
        if handle is None:
            logger.warning(
                f"No contract handle for collection {collection_id}",
                extra={"collection_id": collection_id},
            )
            return None

        self._board.set_owner(address)
        ticket = self._board.issue(
            collection_id, address, trigger, block_number=self.last_block,
        )
        return ticket, handle

    async def _complete(self, ticket: ReadTicket, handle: ContractHandle) -> bool:
        try:
            raw = await self._dispatcher.invoke(
                self._operation, handle, [ticket.owner],
            )
        except MinterError as e:
            return self._record_failure(ticket, e.message)
        except Exception as e:
            logger.warning(
                f"Unexpected error reading balance: {e}",
                exc_info=True, extra={"collection_id": ticket.collection_id},
            )
            return self._record_failure(ticket, str(e))

        if raw is None:
            return self._record_failure(
                ticket, f"operation '{self._operation}' not supported",
            )
        try:
            value = coerce_balance(raw)
        except (TypeError, ValueError):
            return self._record_failure(ticket, f"non-numeric balance: {raw!r}")

        now = datetime.now(timezone.utc)
        if not self._board.apply(ticket, value, now):
            logger.debug(
                "Discarded stale balance read",
                extra={
                    "collection_id": ticket.collection_id,
                    "sequence": ticket.sequence,
                },
            )
            return False

        logger.info(
            f"Balance for collection {ticket.collection_id}: {value}",
            extra={
                "collection_id": ticket.collection_id,
                "block_number": ticket.block_number,
                "sequence": ticket.sequence,
            },
        )
        await self._persist(ticket, value, now)
        return True

    def _record_failure(self, ticket: ReadTicket, error: str) -> bool:
        applied = self._board.fail(ticket, error)
        logger.warning(
            f"Balance read failed ({'kept last known good' if applied else 'stale, ignored'}): {error}",
            extra={
                "collection_id": ticket.collection_id,
                "operation": self._operation,
                "sequence": ticket.sequence,
            },
        )
        return False

    # ─── Snapshots ──────────────────────────────────────────────

    async def _persist(self, ticket: ReadTicket, value: int, now: datetime) -> None:
        if self._store is None:
            return
        lock = self._persist_locks.setdefault(ticket.collection_id, asyncio.Lock())
        async with lock:
            if (
                self._board.value_sequence(ticket.collection_id) != ticket.sequence
                or self._board.owner != ticket.owner
            ):
                logger.debug(
                    "Skipped superseded balance snapshot",
                    extra={
                        "collection_id": ticket.collection_id,
                        "sequence": ticket.sequence,
                    },
                )
                return
            try:
                await self._store.save(
                    ticket.collection_id, ticket.owner, value,
                    ticket.block_number, now,
                )
            except DatabaseError as e:
                logger.warning(
                    f"Failed to persist balance snapshot: {e.message}",
                    extra={"collection_id": ticket.collection_id, "error_code": e.code},
                )

    async def restore(self) -> int:
        """Prime the board with persisted last-known-good balances for the wallet."""
        address = self._addresses.current_address()
        if self._store is None or not address:
            return 0
        self._board.set_owner(address)
        rows = await self._store.load(address)
        for row in rows:
            self._board.prime(
                CollectionId(row["collection_id"]),
                BalanceEntry(
                    value=row["balance"],
                    block_number=row.get("block_number"),
                    updated_at=row.get("updated_at"),
                    restored=True,
                ),
            )
        return len(rows)
