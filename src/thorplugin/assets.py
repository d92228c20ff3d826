"""Asset amounts tied to a chain and symbol.

Identifiers use the protocol format:
- CHAIN.SYMBOL for native assets (BTC.BTC, THOR.RUNE)
- CHAIN.TICKER-CONTRACT for tokens (ETH.USDT-0XDAC17F958D2EE523A2206206994597C13D831EC7)
- CHAIN/SYMBOL style symbols for synthetics (BTC/BTC), held on the protocol chain
"""

from dataclasses import dataclass, replace
from decimal import ROUND_DOWN, Decimal
from typing import Optional, Union

from thorplugin.chains import Chain, get_chain_config

Number = Union[int, float, str, Decimal]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class AssetValue:
    """An immutable amount of an asset.

    Attributes:
        chain: Chain the asset lives on
        symbol: Full symbol, including contract suffix for tokens
        value: Amount in human-readable units
        decimal: Decimal places of the base unit
        address: Token contract address (None for native and synthetic assets)
    """

    chain: Chain
    symbol: str
    value: Decimal = Decimal("0")
    decimal: int = 8
    address: Optional[str] = None

    @classmethod
    def from_chain(cls, chain: Chain, value: Number = 0) -> "AssetValue":
        """Gas asset of a chain."""
        chain = Chain(chain)
        config = get_chain_config(chain)
        return cls(
            chain=chain,
            symbol=config.gas_asset,
            value=_to_decimal(value),
            decimal=config.decimals,
        )

    @classmethod
    def from_string(
        cls,
        identifier: str,
        value: Number = 0,
        decimal: Optional[int] = None,
        synth_chain: Chain = Chain.THORCHAIN,
    ) -> "AssetValue":
        """Parse an asset identifier such as "ETH.USDT-0x..." or "BTC/BTC"."""
        head, sep, tail = identifier.partition(".")
        if "/" in head or not sep:
            if "/" not in identifier:
                raise ValueError(f"Invalid asset identifier: {identifier}")
            # Synthetics are held on the protocol chain, 8 decimals
            return cls(
                chain=Chain(synth_chain),
                symbol=identifier.upper(),
                value=_to_decimal(value),
                decimal=8 if decimal is None else decimal,
            )

        chain = Chain(head.upper())
        ticker, dash, contract = tail.partition("-")
        return cls(
            chain=chain,
            symbol=f"{ticker.upper()}{dash}{contract}",
            value=_to_decimal(value),
            decimal=get_chain_config(chain).decimals if decimal is None else decimal,
            address=contract or None,
        )

    @property
    def ticker(self) -> str:
        """Symbol without the contract suffix (USDT for USDT-0x...)."""
        symbol = self.symbol.split("/")[-1]
        return symbol.split("-")[0]

    @property
    def is_synthetic(self) -> bool:
        return "/" in self.symbol

    @property
    def is_gas_asset(self) -> bool:
        """Check if this is the chain's native fee asset."""
        if self.is_synthetic or self.address:
            return False
        return self.symbol == get_chain_config(self.chain).gas_asset

    @property
    def base_value(self) -> int:
        """Amount in base units, rounded down."""
        scaled = self.value * (Decimal(10) ** self.decimal)
        return int(scaled.quantize(Decimal("1"), rounding=ROUND_DOWN))

    def set(self, value: Number) -> "AssetValue":
        """Copy of this asset with a new amount."""
        return replace(self, value=_to_decimal(value))

    def gt(self, other: Number) -> bool:
        return self.value > _to_decimal(other)

    def lte(self, other: Number) -> bool:
        return self.value <= _to_decimal(other)

    def __str__(self) -> str:
        if self.is_synthetic:
            return self.symbol
        return f"{self.chain.value}.{self.symbol}"


# Dust amounts accepted as memo carriers by the protocol
MIN_AMOUNT_BY_CHAIN: dict[Chain, Decimal] = {
    Chain.BITCOIN: Decimal("0.00010001"),
    Chain.LITECOIN: Decimal("0.00010001"),
    Chain.BITCOIN_CASH: Decimal("0.00010001"),
    Chain.DASH: Decimal("0.00010001"),
    Chain.DOGECOIN: Decimal("0.01"),
    Chain.ARBITRUM: Decimal("0.00000001"),
    Chain.AVALANCHE: Decimal("0.00000001"),
    Chain.BASE: Decimal("0.00000001"),
    Chain.BINANCE_SMART_CHAIN: Decimal("0.00000001"),
    Chain.ETHEREUM: Decimal("0.00000001"),
    Chain.OPTIMISM: Decimal("0.00000001"),
    Chain.POLYGON: Decimal("0.00000001"),
    Chain.THORCHAIN: Decimal("0"),
    Chain.MAYA: Decimal("0"),
    Chain.COSMOS: Decimal("0.000001"),
    Chain.KUJIRA: Decimal("0.000001"),
}

DEFAULT_MIN_AMOUNT = Decimal("0.00000001")


def get_min_amount_by_chain(chain: Chain) -> AssetValue:
    """Smallest transferable amount of a chain's gas asset."""
    chain = Chain(chain)
    return AssetValue.from_chain(chain, MIN_AMOUNT_BY_CHAIN.get(chain, DEFAULT_MIN_AMOUNT))
