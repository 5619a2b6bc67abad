"""Wallet provider and JSON log formatting."""

import json
import logging

import pytest

from minter.core.errors import InvalidAddressError
from minter.infrastructure.observability import JSONFormatter
from minter.infrastructure.wallet import WalletAddressProvider


def test_wallet_checksums_address():
    wallet = WalletAddressProvider("0x" + "ab" * 20)
    assert wallet.current_address().lower() == "0x" + "ab" * 20
    assert wallet.current_address() != "0x" + "ab" * 20


def test_wallet_rejects_invalid_and_keeps_previous():
    wallet = WalletAddressProvider("0x" + "ab" * 20)
    before = wallet.current_address()
    with pytest.raises(InvalidAddressError):
        wallet.set("not-an-address")
    assert wallet.current_address() == before


def test_wallet_can_be_cleared():
    wallet = WalletAddressProvider("0x" + "ab" * 20)
    assert wallet.set(None) is None
    assert wallet.current_address() is None
    assert WalletAddressProvider().current_address() is None


def test_json_formatter_surfaces_contract_extras():
    record = logging.LogRecord(
        "minter.services.balance_sync", logging.WARNING, __file__, 1,
        "Balance read failed", None, None,
    )
    record.collection_id = 2
    record.operation = "balanceOf"
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Balance read failed"
    assert payload["collection_id"] == 2
    assert payload["operation"] == "balanceOf"
    assert "block_number" not in payload
