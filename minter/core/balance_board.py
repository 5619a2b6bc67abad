"""Balance Board: explicit state container for the active selection and per-collection balances.

Invariants:
    - Every balance read is tagged with a ReadTicket (collection, owner, sequence)
    - A completion is applied only if, at completion time, its collection is still
      selected, its owner is still the wallet, and no newer ticket for that
      collection has been applied
    - Entries are replaced, never mutated in place (BalanceEntry is frozen)
    - A failed read keeps the prior value and marks it stale (last known good)
    - status is REFRESHING while the most recently issued ticket is in flight

Design Decisions:
    - Sequence numbers are board-wide and monotonic so that stale completions can
      be detected without cancelling the underlying call
    - Pure dataclass, no IO and no asyncio: the synchronizer owns the awaiting
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from minter.core.domain_types import (
    Address, CollectionId, RefreshTrigger, SyncStatus,
)


@dataclass(frozen=True)
class ReadTicket:
    """Identity of one in-flight balance read."""
    collection_id: CollectionId
    owner: Address
    sequence: int
    trigger: RefreshTrigger
    block_number: int | None = None


@dataclass(frozen=True)
class BalanceEntry:
    """One computed balance. stale=True means the latest read failed;
    restored=True means the value was loaded from a snapshot, not read live."""
    value: int | None
    block_number: int | None = None
    updated_at: datetime | None = None
    stale: bool = False
    last_error: str | None = None
    restored: bool = False

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "block_number": self.block_number,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "stale": self.stale,
            "last_error": self.last_error,
            "restored": self.restored,
        }


@dataclass
class BalanceBoard:
    """Process-wide selection + balance map. Mutated only through its methods."""

    selected: CollectionId | None = None
    owner: Address | None = None
    balances: dict[CollectionId, BalanceEntry] = field(default_factory=dict)

    _sequence: int = 0
    _latest_issued: int | None = None
    _in_flight: set[int] = field(default_factory=set)
    _applied: dict[CollectionId, int] = field(default_factory=dict)
    _valued: dict[CollectionId, int] = field(default_factory=dict)

    # ─── Selection / owner ──────────────────────────────────────

    def select(self, collection_id: CollectionId | None) -> None:
        self.selected = collection_id

    def set_owner(self, owner: Address | None) -> None:
        """Switch wallet. Balances computed for the previous owner are dropped."""
        if owner == self.owner:
            return
        self.owner = owner
        self.balances.clear()
        self._applied.clear()
        self._valued.clear()

    # ─── Ticket lifecycle ───────────────────────────────────────

    def issue(
        self,
        collection_id: CollectionId,
        owner: Address,
        trigger: RefreshTrigger,
        block_number: int | None = None,
    ) -> ReadTicket:
        self._sequence += 1
        ticket = ReadTicket(
            collection_id=collection_id,
            owner=owner,
            sequence=self._sequence,
            trigger=trigger,
            block_number=block_number,
        )
        self._in_flight.add(ticket.sequence)
        self._latest_issued = ticket.sequence
        return ticket

    def is_current(self, ticket: ReadTicket) -> bool:
        return (
            ticket.collection_id == self.selected
            and ticket.owner == self.owner
            and ticket.sequence > self._applied.get(ticket.collection_id, 0)
        )

    def apply(
        self, ticket: ReadTicket, value: int, now: datetime | None = None,
    ) -> bool:
        """Store a successful read. Returns False when the ticket is stale."""
        self._in_flight.discard(ticket.sequence)
        if not self.is_current(ticket):
            return False
        self.balances[ticket.collection_id] = BalanceEntry(
            value=value,
            block_number=ticket.block_number,
            updated_at=now or datetime.now(timezone.utc),
        )
        self._applied[ticket.collection_id] = ticket.sequence
        self._valued[ticket.collection_id] = ticket.sequence
        return True

    def fail(self, ticket: ReadTicket, error: str) -> bool:
        """Record a failed read. Prior value retained, marked stale."""
        self._in_flight.discard(ticket.sequence)
        if not self.is_current(ticket):
            return False
        prior = self.balances.get(ticket.collection_id)
        if prior is None:
            prior = BalanceEntry(value=None)
        self.balances[ticket.collection_id] = replace(
            prior, stale=True, last_error=error,
        )
        self._applied[ticket.collection_id] = ticket.sequence
        return True

    def value_sequence(self, collection_id: CollectionId) -> int | None:
        """Sequence of the ticket whose value is currently shown for the collection."""
        return self._valued.get(collection_id)

    def prime(self, collection_id: CollectionId, entry: BalanceEntry) -> None:
        """Seed a restored snapshot. Never overwrites a live read."""
        self.balances.setdefault(collection_id, entry)

    # ─── Views ──────────────────────────────────────────────────

    @property
    def status(self) -> SyncStatus:
        if self._latest_issued is not None and self._latest_issued in self._in_flight:
            return SyncStatus.REFRESHING
        return SyncStatus.IDLE

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    @property
    def current_balance(self) -> BalanceEntry | None:
        if self.selected is None:
            return None
        return self.balances.get(self.selected)

    def to_dict(self) -> dict:
        return {
            "selected_collection": self.selected,
            "owner": self.owner,
            "status": self.status.value,
            "balances": {
                str(cid): entry.to_dict()
                for cid, entry in sorted(self.balances.items())
            },
        }
