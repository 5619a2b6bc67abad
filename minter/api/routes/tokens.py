"""Tokens and Membership: metadata views and membership class quotes."""

from fastapi import APIRouter, Query

from minter.core.membership_tiers import membership_quote
from minter.core.token_view import describe_token
from minter.schemas.contracts import (
    MembershipQuoteResponse, TokenDescribeRequest, TokenView,
)

router = APIRouter(prefix="/api/v1", tags=["tokens"])


@router.post("/tokens/describe", response_model=TokenView)
async def describe(body: TokenDescribeRequest):
    return describe_token(body.metadata)


@router.get("/membership/quote", response_model=MembershipQuoteResponse)
async def quote(committed_wei: int = Query(..., ge=0)):
    """Membership class, treasury share and DM credit for a commitment in wei."""
    return membership_quote(committed_wei).to_dict()
