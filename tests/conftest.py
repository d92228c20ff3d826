"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock

import pytest

# Keep a local .env from leaking into settings under test
os.environ["THORPLUGIN_HTTP_TIMEOUT"] = "5"

from thorplugin.chains import Chain
from thorplugin.client import InboundAddress, MimirFlags, ProtocolApiClient
from thorplugin.plugin import ProtocolAdapter
from thorplugin.wallets import WalletHandle

ETH_ROUTER = "0xD37BbE5744D730a1d98d8DC97c42F0Ca46aD7146"
ETH_VAULT = "0x1b3d1a1b8e1d42f6c4a1b0e2b6c1d6e3f8a9b0c1"
BTC_VAULT = "bc1qvaultaddressxyz"
THOR_ADDRESS = "thor1walletaddress"
ETH_ADDRESS = "0xWalletAddress"


def inbound_table() -> list[InboundAddress]:
    """Inbound addresses as returned by a healthy node."""
    return [
        InboundAddress(chain="BTC", address=BTC_VAULT, gas_rate="7", halted=False),
        InboundAddress(
            chain="ETH", address=ETH_VAULT, router=ETH_ROUTER, gas_rate="12", halted=False
        ),
        InboundAddress(chain="DOGE", address="DDogeVault", gas_rate="500000", halted=True),
    ]


@pytest.fixture
def deposit() -> AsyncMock:
    """Host deposit coroutine returning a fixed tx id."""
    return AsyncMock(return_value="tx-hash")


@pytest.fixture
def api_client() -> AsyncMock:
    """Node API client with a healthy inbound table and no halts."""
    client = AsyncMock(spec=ProtocolApiClient)
    client.get_inbound_addresses.return_value = inbound_table()
    client.get_mimir.return_value = MimirFlags()
    return client


@pytest.fixture
def wallets() -> dict:
    return {
        Chain.THORCHAIN: WalletHandle(address=THOR_ADDRESS),
        Chain.ETHEREUM: WalletHandle(
            address=ETH_ADDRESS,
            approve=AsyncMock(return_value="0xapprovetx"),
            is_approved=AsyncMock(return_value=False),
        ),
        Chain.BITCOIN: WalletHandle(address="bc1qwallet"),
    }


@pytest.fixture
def adapter(deposit, api_client, wallets) -> ProtocolAdapter:
    """THORChain adapter wired to mocks."""
    return ProtocolAdapter(
        deposit=deposit,
        plugin_chain=Chain.THORCHAIN,
        stagenet=False,
        wallets=wallets,
        api_client=api_client,
    )
