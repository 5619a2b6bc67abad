"""Membership Tiers: classify an ETH commitment into a Society membership class.

Invariants:
    - Thresholds are strict: exactly 0.5 ETH does not qualify for Patron
    - Only the highest qualifying tier is granted (classes do not accumulate)
    - Treasury share is 0.05% of the commitment (integer wei, floor); the rest is DM credit
"""

from dataclasses import dataclass
from enum import Enum

WEI_PER_ETH = 10**18
TREASURY_SHARE_BPS = 5  # 0.05%
BPS_DENOMINATOR = 10_000


class MembershipTier(str, Enum):
    PATRON = "patron"
    MECENE = "mecene"
    CURATOR = "curator"


# Highest threshold first
_THRESHOLDS_WEI: tuple[tuple[MembershipTier, int], ...] = (
    (MembershipTier.CURATOR, 5 * WEI_PER_ETH),
    (MembershipTier.MECENE, 1 * WEI_PER_ETH),
    (MembershipTier.PATRON, WEI_PER_ETH // 2),
)

TIER_PERKS: dict[MembershipTier, list[str]] = {
    MembershipTier.PATRON: [
        "Access private metaverse",
        "Some events free",
    ],
    MembershipTier.MECENE: [
        "Access VIP metaverse",
        "Private sales access",
        "Many events free",
    ],
    MembershipTier.CURATOR: [
        "Access all metaverse",
        "All events free",
        "Private sales access",
        "Curation access",
    ],
}


@dataclass(frozen=True)
class MembershipQuote:
    committed_wei: int
    tier: MembershipTier | None
    treasury_wei: int
    dm_credit_wei: int

    def to_dict(self) -> dict:
        return {
            "committed_wei": str(self.committed_wei),
            "tier": self.tier.value if self.tier else None,
            "perks": TIER_PERKS[self.tier] if self.tier else [],
            "treasury_wei": str(self.treasury_wei),
            "dm_credit_wei": str(self.dm_credit_wei),
        }


def tier_for(committed_wei: int) -> MembershipTier | None:
    for tier, threshold in _THRESHOLDS_WEI:
        if committed_wei > threshold:
            return tier
    return None


def membership_quote(committed_wei: int) -> MembershipQuote:
    if committed_wei < 0:
        raise ValueError("committed_wei must be non-negative")
    treasury = committed_wei * TREASURY_SHARE_BPS // BPS_DENOMINATOR
    return MembershipQuote(
        committed_wei=committed_wei,
        tier=tier_for(committed_wei),
        treasury_wei=treasury,
        dm_credit_wei=committed_wei - treasury,
    )
