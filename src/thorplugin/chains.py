"""Chain identifiers and per-chain configuration.

Chain keys follow the protocol's own naming (THOR, MAYA, GAIA, BSC, ...), the
same strings the inbound-addresses endpoint reports.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Chain(str, Enum):
    """Chains reachable through THORChain or Maya."""
    ARBITRUM = "ARB"
    AVALANCHE = "AVAX"
    BASE = "BASE"
    BITCOIN_CASH = "BCH"
    BINANCE_SMART_CHAIN = "BSC"
    BITCOIN = "BTC"
    DASH = "DASH"
    DOGECOIN = "DOGE"
    ETHEREUM = "ETH"
    COSMOS = "GAIA"
    KUJIRA = "KUJI"
    LITECOIN = "LTC"
    MAYA = "MAYA"
    OPTIMISM = "OP"
    POLYGON = "MATIC"
    THORCHAIN = "THOR"


class ProtocolType(str, Enum):
    """Protocol family served by a node API."""
    THORCHAIN = "thorchain"
    MAYACHAIN = "mayachain"


@dataclass(frozen=True)
class ChainConfig:
    """Static configuration for a chain."""

    name: str
    gas_asset: str  # symbol of the native fee asset
    decimals: int
    chain_id: Optional[int] = None  # EVM chains only


# ======================
# Chain Configurations
# ======================

CHAINS: dict[Chain, ChainConfig] = {
    # EVM
    Chain.ARBITRUM: ChainConfig(name="Arbitrum", gas_asset="ETH", decimals=18, chain_id=42161),
    Chain.AVALANCHE: ChainConfig(name="Avalanche", gas_asset="AVAX", decimals=18, chain_id=43114),
    Chain.BASE: ChainConfig(name="Base", gas_asset="ETH", decimals=18, chain_id=8453),
    Chain.BINANCE_SMART_CHAIN: ChainConfig(
        name="BNB Smart Chain", gas_asset="BNB", decimals=18, chain_id=56
    ),
    Chain.ETHEREUM: ChainConfig(name="Ethereum", gas_asset="ETH", decimals=18, chain_id=1),
    Chain.OPTIMISM: ChainConfig(name="Optimism", gas_asset="ETH", decimals=18, chain_id=10),
    Chain.POLYGON: ChainConfig(name="Polygon", gas_asset="MATIC", decimals=18, chain_id=137),

    # UTXO
    Chain.BITCOIN: ChainConfig(name="Bitcoin", gas_asset="BTC", decimals=8),
    Chain.BITCOIN_CASH: ChainConfig(name="Bitcoin Cash", gas_asset="BCH", decimals=8),
    Chain.DASH: ChainConfig(name="Dash", gas_asset="DASH", decimals=8),
    Chain.DOGECOIN: ChainConfig(name="Dogecoin", gas_asset="DOGE", decimals=8),
    Chain.LITECOIN: ChainConfig(name="Litecoin", gas_asset="LTC", decimals=8),

    # Cosmos SDK
    Chain.COSMOS: ChainConfig(name="Cosmos Hub", gas_asset="ATOM", decimals=6),
    Chain.KUJIRA: ChainConfig(name="Kujira", gas_asset="KUJI", decimals=6),
    Chain.MAYA: ChainConfig(name="Maya", gas_asset="CACAO", decimals=10),
    Chain.THORCHAIN: ChainConfig(name="THORChain", gas_asset="RUNE", decimals=8),
}

EVM_CHAINS: frozenset[Chain] = frozenset(
    chain for chain, config in CHAINS.items() if config.chain_id is not None
)

PROTOCOL_CHAINS: dict[Chain, ProtocolType] = {
    Chain.THORCHAIN: ProtocolType.THORCHAIN,
    Chain.MAYA: ProtocolType.MAYACHAIN,
}


# ======================
# Helper Functions
# ======================

def get_chain_config(chain: Chain) -> ChainConfig:
    """Get chain configuration."""
    return CHAINS[Chain(chain)]


def is_evm_chain(chain: Chain) -> bool:
    return chain in EVM_CHAINS


def get_protocol_type(chain: Chain) -> ProtocolType:
    """Get the protocol hosted on a protocol chain (THOR or MAYA)."""
    try:
        return PROTOCOL_CHAINS[Chain(chain)]
    except (KeyError, ValueError):
        raise ValueError(f"{chain} is not a protocol chain") from None
