"""BalanceSnapshot ORM: last-known-good balance per (collection, wallet).

Invariants:
    - One row per (collection_id, address); successful reads upsert it
    - balance stored as a decimal string (uint256 does not fit BIGINT)
    - address stored lowercase
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from minter.db.base import Base


class BalanceSnapshot(Base):
    __tablename__ = "balance_snapshots"
    __table_args__ = (
        UniqueConstraint("collection_id", "address", name="uq_balance_snapshot_owner"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    collection_id: Mapped[int] = mapped_column(Integer, nullable=False)
    address: Mapped[str] = mapped_column(String(42), nullable=False)
    balance: Mapped[str] = mapped_column(String(78), nullable=False)
    block_number: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
