"""Web3 Contracts: ContractHandle / ContractHandleProvider over web3.py AsyncWeb3.

Invariants:
    - A handle's operations are built once from its ABI; overloaded names keep
      the first ABI entry
    - view/pure functions run as eth_call (.call), everything else is submitted
      as a transaction (.transact)
    - A trailing Mapping argument is the call metadata (value, gas, from, ...),
      the same convention as ethers overrides
    - Arguments that do not match the ABI raise InvalidCallArgumentsError before
      any RPC; web3 / network failures of the call itself map to ContractTransportError
    - Collection 0 is "NFTCollection", collection n is "NFTCollection{n}"
"""

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from minter.core.domain_types import (
    CollectionId, Operation, collection_contract_name, is_address,
)
from minter.core.errors import (
    ContractTransportError, ErrorContext, InvalidAddressError,
    InvalidCallArgumentsError,
)
from minter.infrastructure.erc721_abi import ERC721_ABI

logger = logging.getLogger(__name__)

_READ_ONLY = frozenset({"view", "pure"})
# Building the function object is local ABI matching, no RPC is made.
_ARGUMENT_ERRORS = (Web3Exception, TypeError, ValueError)
_TRANSPORT_ERRORS = (Web3Exception, ValueError, OSError, asyncio.TimeoutError)


def build_web3(rpc_url: str) -> AsyncWeb3:
    return AsyncWeb3(AsyncHTTPProvider(rpc_url))


def load_abi(path: str | None) -> list[dict]:
    """Read an ABI file (bare list or a build artifact with an "abi" key)."""
    if not path:
        return ERC721_ABI
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data["abi"]
    return data


def split_metadata(params: tuple) -> tuple[tuple, dict | None]:
    if params and isinstance(params[-1], Mapping):
        return params[:-1], dict(params[-1])
    return params, None


def _is_read_only(entry: dict) -> bool:
    if "stateMutability" in entry:
        return entry["stateMutability"] in _READ_ONLY
    return bool(entry.get("constant", False))


class Web3ContractHandle:
    """One deployed contract; operations keyed by ABI function name."""

    def __init__(
        self, name: str, contract: Any, abi: list[dict],
        collection_id: CollectionId | None = None,
    ):
        self.name = name
        self.collection_id = collection_id
        self._contract = contract
        self.operations: dict[str, Operation] = {}
        for entry in abi:
            if entry.get("type") != "function":
                continue
            self.operations.setdefault(
                entry["name"], self._bind(entry["name"], _is_read_only(entry)),
            )

    def _bind(self, fn_name: str, read_only: bool) -> Operation:
        async def operation(*params: Any) -> Any:
            args, tx = split_metadata(params)
            try:
                fn = self._contract.functions[fn_name](*args)
            except _ARGUMENT_ERRORS as e:
                raise InvalidCallArgumentsError(
                    str(e), fn_name,
                    ErrorContext(collection_id=self.collection_id, operation=fn_name),
                ) from e
            try:
                if read_only:
                    return await fn.call(tx)
                return await fn.transact(tx)
            except _TRANSPORT_ERRORS as e:
                logger.warning(
                    f"{self.name}.{fn_name} failed: {e}",
                    extra={"collection_id": self.collection_id, "operation": fn_name},
                )
                raise ContractTransportError(
                    str(e), fn_name,
                    ErrorContext(
                        collection_id=self.collection_id,
                        operation=fn_name,
                        user_message=f"Contract call '{fn_name}' failed",
                    ),
                ) from e

        operation.__name__ = fn_name
        return operation


class Web3HandleProvider:
    """Handles for every configured collection, built eagerly at startup."""

    def __init__(self, w3: AsyncWeb3, addresses: list[str], abi: list[dict]):
        self._handles: dict[CollectionId, Web3ContractHandle] = {}
        for index, address in enumerate(addresses):
            if not is_address(address):
                raise InvalidAddressError(address)
            collection_id = CollectionId(index)
            contract = w3.eth.contract(
                address=AsyncWeb3.to_checksum_address(address), abi=abi,
            )
            self._handles[collection_id] = Web3ContractHandle(
                collection_contract_name(index), contract, abi, collection_id,
            )
        logger.info(f"Loaded {len(self._handles)} collection contract(s)")

    def handle_for(self, collection_id: CollectionId) -> Web3ContractHandle | None:
        return self._handles.get(collection_id)

    def collection_ids(self) -> list[CollectionId]:
        return sorted(self._handles)
