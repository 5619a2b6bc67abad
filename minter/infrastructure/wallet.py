"""Wallet Address Provider: holds the caller's address for balance reads.

Invariants:
    - Stored addresses are EIP-55 checksummed (web3 rejects non-checksummed args)
    - Invalid input raises InvalidAddressError and leaves the current address unchanged
"""

from web3 import AsyncWeb3

from minter.core.domain_types import Address, is_address
from minter.core.errors import InvalidAddressError


class WalletAddressProvider:

    def __init__(self, address: str | None = None):
        self._address: Address | None = None
        if address:
            self.set(address)

    def current_address(self) -> Address | None:
        return self._address

    def set(self, address: str | None) -> Address | None:
        if address is None:
            self._address = None
            return None
        if not is_address(address):
            raise InvalidAddressError(address)
        self._address = Address(AsyncWeb3.to_checksum_address(address))
        return self._address
