"""SQL Balance Snapshot Store: BalanceSnapshotStore backed by SQLAlchemy.

Invariants:
    - save() upserts by (collection_id, lowercase address) and commits
    - save() never moves a snapshot back to an older block than the stored one
    - load() returns plain dicts, never ORM objects, to the service layer
    - Failures surface as DatabaseError (via DatabaseSessionManager)
"""

from datetime import datetime

from sqlalchemy import select

from minter.infrastructure.database import DatabaseSessionManager
from minter.models.balance_snapshot import BalanceSnapshot


def _is_older(incoming: int | None, stored: int | None) -> bool:
    return incoming is not None and stored is not None and incoming < stored


class SqlBalanceSnapshotStore:

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def save(
        self,
        collection_id: int,
        address: str,
        balance: int,
        block_number: int | None,
        updated_at: datetime,
    ) -> None:
        owner = address.lower()
        async with self._manager.session() as db:
            result = await db.execute(
                select(BalanceSnapshot).where(
                    BalanceSnapshot.collection_id == collection_id,
                    BalanceSnapshot.address == owner,
                ),
            )
            row = result.scalar_one_or_none()
            if row is not None and _is_older(block_number, row.block_number):
                return
            if row is None:
                row = BalanceSnapshot(collection_id=collection_id, address=owner)
                db.add(row)
            row.balance = str(balance)
            row.block_number = block_number
            row.updated_at = updated_at
            await db.commit()

    async def load(self, address: str) -> list[dict]:
        async with self._manager.session() as db:
            result = await db.execute(
                select(BalanceSnapshot)
                .where(BalanceSnapshot.address == address.lower())
                .order_by(BalanceSnapshot.collection_id),
            )
            return [
                {
                    "collection_id": row.collection_id,
                    "balance": int(row.balance),
                    "block_number": row.block_number,
                    "updated_at": row.updated_at,
                }
                for row in result.scalars().all()
            ]
