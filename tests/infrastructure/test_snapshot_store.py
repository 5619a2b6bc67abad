"""Snapshot Store: tests for last-known-good persistence on SQLite."""

from datetime import datetime, timezone

import pytest

from minter.core.errors import DatabaseError
from minter.infrastructure.database import DatabaseSessionManager
from minter.infrastructure.snapshot_store import SqlBalanceSnapshotStore

WALLET = "0x00000000000000000000000000000000000000A1"
NOW = datetime(2026, 10, 18, tzinfo=timezone.utc)


@pytest.fixture
async def manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'snapshots.db'}")
    await manager.create_all()
    yield manager
    await manager.dispose()


async def test_save_then_load(manager):
    store = SqlBalanceSnapshotStore(manager)
    await store.save(0, WALLET, 3, 100, NOW)
    rows = await store.load(WALLET)
    assert len(rows) == 1
    assert rows[0]["collection_id"] == 0
    assert rows[0]["balance"] == 3
    assert rows[0]["block_number"] == 100


async def test_save_upserts_per_collection(manager):
    store = SqlBalanceSnapshotStore(manager)
    await store.save(1, WALLET, 3, 100, NOW)
    await store.save(1, WALLET.lower(), 5, 101, NOW)
    await store.save(0, WALLET, 2**200, None, NOW)
    rows = await store.load(WALLET)
    assert [(r["collection_id"], r["balance"]) for r in rows] == [(0, 2**200), (1, 5)]


async def test_save_never_moves_back_to_older_block(manager):
    store = SqlBalanceSnapshotStore(manager)
    await store.save(0, WALLET, 6, 11, NOW)
    await store.save(0, WALLET, 5, 10, NOW)
    rows = await store.load(WALLET)
    assert (rows[0]["balance"], rows[0]["block_number"]) == (6, 11)

    await store.save(0, WALLET, 7, 11, NOW)
    rows = await store.load(WALLET)
    assert rows[0]["balance"] == 7


async def test_load_other_wallet_is_empty(manager):
    store = SqlBalanceSnapshotStore(manager)
    await store.save(0, WALLET, 3, 100, NOW)
    assert await store.load("0x" + "00" * 19 + "ff") == []


async def test_health_check(manager):
    assert await manager.health_check()


async def test_missing_table_maps_to_database_error(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    store = SqlBalanceSnapshotStore(manager)
    with pytest.raises(DatabaseError):
        await store.load(WALLET)
    await manager.dispose()
