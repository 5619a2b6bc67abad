"""Membership Tiers: tests for commitment classification and quotes."""

import pytest

from minter.core.membership_tiers import (
    WEI_PER_ETH, MembershipTier, membership_quote, tier_for,
)


@pytest.mark.parametrize("committed, expected", [
    (0, None),
    (WEI_PER_ETH // 2, None),
    (WEI_PER_ETH // 2 + 1, MembershipTier.PATRON),
    (WEI_PER_ETH, MembershipTier.PATRON),
    (WEI_PER_ETH + 1, MembershipTier.MECENE),
    (5 * WEI_PER_ETH, MembershipTier.MECENE),
    (5 * WEI_PER_ETH + 1, MembershipTier.CURATOR),
    (100 * WEI_PER_ETH, MembershipTier.CURATOR),
])
def test_thresholds_are_strict(committed, expected):
    assert tier_for(committed) == expected


def test_quote_splits_treasury_share():
    quote = membership_quote(2 * WEI_PER_ETH)
    assert quote.tier == MembershipTier.MECENE
    assert quote.treasury_wei == 2 * WEI_PER_ETH * 5 // 10_000
    assert quote.treasury_wei + quote.dm_credit_wei == 2 * WEI_PER_ETH


def test_quote_to_dict_lists_only_highest_tier_perks():
    data = membership_quote(6 * WEI_PER_ETH).to_dict()
    assert data["tier"] == "curator"
    assert "Curation access" in data["perks"]
    assert data["committed_wei"] == str(6 * WEI_PER_ETH)


def test_quote_without_tier():
    data = membership_quote(1).to_dict()
    assert data["tier"] is None
    assert data["perks"] == []


def test_negative_commitment_rejected():
    with pytest.raises(ValueError):
        membership_quote(-1)
