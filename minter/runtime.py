"""Runtime: the application shell that owns the board, providers and synchronizer.

Invariants:
    - One MinterRuntime per process, stored on app.state.runtime by the lifespan
    - Routes reach shared state only through get_runtime(), never module globals
    - The synchronizer is the only writer of balances; routes only trigger it
"""

import logging
from dataclasses import dataclass

from fastapi import Request

from minter.config import Settings
from minter.core.balance_board import BalanceBoard
from minter.core.contract_protocols import ContractHandleProvider
from minter.core.errors import DatabaseError
from minter.infrastructure.block_poller import BlockPoller
from minter.infrastructure.database import DatabaseSessionManager
from minter.infrastructure.snapshot_store import SqlBalanceSnapshotStore
from minter.infrastructure.wallet import WalletAddressProvider
from minter.infrastructure.web3_contracts import (
    Web3HandleProvider, build_web3, load_abi,
)
from minter.services.balance_sync import BalanceSynchronizer
from minter.services.call_dispatch import CallDispatcher

logger = logging.getLogger(__name__)


@dataclass
class MinterRuntime:
    board: BalanceBoard
    dispatcher: CallDispatcher
    handles: ContractHandleProvider
    wallet: WalletAddressProvider
    synchronizer: BalanceSynchronizer
    poller: BlockPoller | None = None

    async def start(self) -> None:
        await self._restore()
        if self.poller is not None:
            self.synchronizer.attach(self.poller)
            self.poller.start()

    async def stop(self) -> None:
        if self.poller is not None:
            await self.poller.stop()
        self.synchronizer.detach()
        await self.synchronizer.drain()

    async def _restore(self) -> None:
        try:
            restored = await self.synchronizer.restore()
        except DatabaseError as e:
            logger.warning(f"Could not restore balance snapshots: {e.message}")
            return
        if restored:
            logger.info(f"Restored {restored} balance snapshot(s)")


def build_runtime(
    settings: Settings, db: DatabaseSessionManager | None = None,
) -> MinterRuntime:
    """Wire web3 handles, wallet, snapshot store and synchronizer from settings."""
    w3 = build_web3(settings.rpc_url)
    handles = Web3HandleProvider(
        w3, settings.collection_addresses, load_abi(settings.contract_abi_path),
    )
    wallet = WalletAddressProvider(settings.wallet_address)
    board = BalanceBoard()
    dispatcher = CallDispatcher()
    synchronizer = BalanceSynchronizer(
        board, dispatcher, handles, wallet,
        operation_name=settings.balance_operation,
        store=SqlBalanceSnapshotStore(db) if db is not None else None,
    )
    poller = None
    if settings.enable_block_polling:
        poller = BlockPoller(w3, settings.block_poll_interval_seconds)
    return MinterRuntime(
        board=board,
        dispatcher=dispatcher,
        handles=handles,
        wallet=wallet,
        synchronizer=synchronizer,
        poller=poller,
    )


def get_runtime(request: Request) -> MinterRuntime:
    """FastAPI dependency for the process runtime."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise RuntimeError("Runtime not initialized")
    return runtime
