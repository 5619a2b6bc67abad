"""Contract Calls: generic dispatch of a named operation on a collection contract.

Invariants:
    - Unknown collection -> 404 COLLECTION_NOT_FOUND
    - Operation absent from the handle -> 404 UNSUPPORTED_OPERATION (the dispatcher
      itself returns None; the route turns that into an HTTP error)
    - Transport failures propagate as ContractTransportError -> 502
    - bytes in results are rendered as 0x-prefixed hex
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from minter.core.contract_protocols import ContractHandle
from minter.core.domain_types import CollectionId
from minter.core.errors import CollectionNotFoundError, UnsupportedOperationError
from minter.runtime import MinterRuntime, get_runtime
from minter.schemas.contracts import (
    CollectionResponse, ContractCallRequest, ContractCallResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/collections", tags=["contracts"])


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return value


def _handle_or_404(runtime: MinterRuntime, collection_id: int) -> ContractHandle:
    handle = runtime.handles.handle_for(CollectionId(collection_id))
    if handle is None:
        raise CollectionNotFoundError(collection_id)
    return handle


@router.get("", response_model=list[CollectionResponse])
async def list_collections(runtime: MinterRuntime = Depends(get_runtime)):
    collections = []
    for collection_id in runtime.handles.collection_ids():
        handle = runtime.handles.handle_for(collection_id)
        collections.append(CollectionResponse(
            collection_id=collection_id,
            contract=handle.name,
            operations=sorted(handle.operations),
        ))
    return collections


@router.post(
    "/{collection_id}/calls/{operation}", response_model=ContractCallResponse,
)
async def call_operation(
    collection_id: int,
    operation: str,
    body: ContractCallRequest,
    runtime: MinterRuntime = Depends(get_runtime),
):
    handle = _handle_or_404(runtime, collection_id)
    if not runtime.dispatcher.supports(operation, handle):
        raise UnsupportedOperationError(operation)
    result = await runtime.dispatcher.invoke(
        operation, handle, body.args, body.metadata,
    )
    logger.info(
        f"Called {handle.name}.{operation}",
        extra={"collection_id": collection_id, "operation": operation},
    )
    return ContractCallResponse(
        collection_id=collection_id,
        contract=handle.name,
        operation=operation,
        result=_jsonable(result),
    )
