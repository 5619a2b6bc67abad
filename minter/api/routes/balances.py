"""Balances: read the board, change the selected collection, change the wallet.

Invariants:
    - Selection and wallet changes update the board immediately; the balance
      read runs in the background unless ?wait=true
    - Selecting an unconfigured collection is a 404, the board is left untouched
    - Routes never write balances themselves
"""

import logging

from fastapi import APIRouter, Depends, Query

from minter.core.domain_types import CollectionId
from minter.core.errors import CollectionNotFoundError
from minter.runtime import MinterRuntime, get_runtime
from minter.schemas.contracts import (
    BalanceBoardResponse, SelectionRequest, WalletRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["balances"])


@router.get("/balances", response_model=BalanceBoardResponse)
async def get_balances(runtime: MinterRuntime = Depends(get_runtime)):
    return runtime.board.to_dict()


@router.put("/selection", response_model=BalanceBoardResponse)
async def select_collection(
    body: SelectionRequest,
    wait: bool = Query(False),
    runtime: MinterRuntime = Depends(get_runtime),
):
    """Select the active collection (null deselects) and refresh its balance."""
    collection_id = body.collection_id
    if collection_id is not None:
        collection_id = CollectionId(collection_id)
        if runtime.handles.handle_for(collection_id) is None:
            raise CollectionNotFoundError(collection_id)
    task = runtime.synchronizer.schedule_selection(collection_id)
    logger.info(
        f"Selected collection {collection_id}",
        extra={"collection_id": collection_id},
    )
    if wait and task is not None:
        await task
    return runtime.board.to_dict()


@router.put("/wallet", response_model=BalanceBoardResponse)
async def set_wallet(
    body: WalletRequest,
    wait: bool = Query(False),
    runtime: MinterRuntime = Depends(get_runtime),
):
    """Replace the caller address; balances for the previous wallet are dropped."""
    runtime.wallet.set(body.address)
    task = runtime.synchronizer.schedule_wallet()
    if wait and task is not None:
        await task
    return runtime.board.to_dict()
