"""Contract Schemas: Pydantic models for the selection, wallet, call and token endpoints.

Invariants:
    - collection_id is a non-negative index or null (deselect)
    - Wallet addresses are 0x-prefixed 40-hex strings (checksum applied later)
    - ContractCallRequest.args = null means "call without arguments", where
      metadata is NOT forwarded; an explicit [] forwards metadata
"""

from typing import Any

from pydantic import BaseModel, Field


class SelectionRequest(BaseModel):
    collection_id: int | None = Field(None, ge=0)


class WalletRequest(BaseModel):
    address: str | None = Field(None, pattern=r"^0x[0-9a-fA-F]{40}$")


class BalanceEntryResponse(BaseModel):
    value: int | None
    block_number: int | None = None
    updated_at: str | None = None
    stale: bool = False
    last_error: str | None = None
    restored: bool = False


class BalanceBoardResponse(BaseModel):
    selected_collection: int | None
    owner: str | None
    status: str
    balances: dict[str, BalanceEntryResponse]


class ContractCallRequest(BaseModel):
    args: list[Any] | None = None
    metadata: dict[str, Any] | None = None


class ContractCallResponse(BaseModel):
    collection_id: int
    contract: str
    operation: str
    result: Any = None


class CollectionResponse(BaseModel):
    collection_id: int
    contract: str
    operations: list[str]


class TokenDescribeRequest(BaseModel):
    metadata: dict[str, Any] | list[Any] | None = None


class TokenView(BaseModel):
    name: str
    description: Any = ""
    image: Any = None
    attributes: list[Any] = Field(default_factory=list)


class MembershipQuoteResponse(BaseModel):
    committed_wei: str
    tier: str | None
    perks: list[str]
    treasury_wei: str
    dm_credit_wei: str
