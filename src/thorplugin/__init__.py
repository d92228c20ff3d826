"""THORChain / Maya protocol adapter.

Builds protocol memos (liquidity, savers, node actions, names) and hands them
to a host-supplied deposit coroutine with the right vault, router and fee rate.
"""

from thorplugin.assets import AssetValue, get_min_amount_by_chain
from thorplugin.chains import Chain, ProtocolType
from thorplugin.client import InboundAddress, MimirFlags, ProtocolApiClient
from thorplugin.errors import (
    AddLiquidityAssetError,
    AddLiquidityBaseError,
    AddLiquidityInvalidParamsError,
    AddressMissingError,
    BaseAddressMissingError,
    ChainHaltedError,
    CreateLiquidityAssetError,
    CreateLiquidityBaseError,
    CreateLiquidityInvalidParamsError,
    InvalidParamsError,
    LiquidityLegError,
    ProtocolApiError,
    RouteNotFoundError,
    ThorPluginError,
    WalletNotFoundError,
)
from thorplugin.memo import MemoType
from thorplugin.plugin import (
    FeeOption,
    LiquidityMode,
    LiquidityResult,
    ProtocolAdapter,
    SavingsType,
)
from thorplugin.wallets import ApproveMode, ApproveRequest, WalletHandle

__all__ = [
    # Adapter
    "ProtocolAdapter",
    "FeeOption",
    "LiquidityMode",
    "LiquidityResult",
    "SavingsType",
    # Values and chains
    "AssetValue",
    "Chain",
    "ProtocolType",
    "MemoType",
    "get_min_amount_by_chain",
    # Collaborators
    "ApproveMode",
    "ApproveRequest",
    "WalletHandle",
    "InboundAddress",
    "MimirFlags",
    "ProtocolApiClient",
    # Errors
    "ThorPluginError",
    "ProtocolApiError",
    "RouteNotFoundError",
    "ChainHaltedError",
    "WalletNotFoundError",
    "AddressMissingError",
    "InvalidParamsError",
    "BaseAddressMissingError",
    "LiquidityLegError",
    "CreateLiquidityBaseError",
    "CreateLiquidityAssetError",
    "AddLiquidityBaseError",
    "AddLiquidityAssetError",
    "CreateLiquidityInvalidParamsError",
    "AddLiquidityInvalidParamsError",
]
