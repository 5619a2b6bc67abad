"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - CollectionId is the positional index of a configured collection (0-based)
    - BalanceValue is a non-negative int (token count held by the wallet)
    - Sync states and refresh triggers are Enums, no raw string matching
"""

import re
from enum import Enum
from typing import Any, Callable, NewType


# ─── Identity Types ──────────────────────────────────────────────

CollectionId = NewType("CollectionId", int)
Address = NewType("Address", str)


# ─── Value Types ─────────────────────────────────────────────────

BalanceValue = NewType("BalanceValue", int)
BlockNumber = NewType("BlockNumber", int)

# Options record appended to contract calls (value, gas, from, ...)
CallMetadata = dict[str, Any]

# One callable entry of a contract handle; may return a value or an awaitable
Operation = Callable[..., Any]

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address(value: str) -> bool:
    return bool(_ADDRESS_RE.match(value or ""))


def collection_contract_name(collection_id: int) -> str:
    """Deployment name of a collection contract: NFTCollection, NFTCollection1, ..."""
    if collection_id == 0:
        return "NFTCollection"
    return f"NFTCollection{collection_id}"


# ─── Enums ───────────────────────────────────────────────────────

class SyncStatus(str, Enum):
    """BalanceSynchronizer lifecycle for the current selection."""
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshTrigger(str, Enum):
    """What caused a balance refresh."""
    SELECTION = "selection"
    BLOCK = "block"
    WALLET = "wallet"
