"""Membership Minter: contract interaction backend for the Society membership NFT collections.

Invariants:
    - Package root contains no executable code (no import side-effects)
"""
