"""Exceptions raised by the protocol adapter.

Every error carries a stable ``code`` string that callers can match on
without importing the class.
"""

import logging
from typing import Awaitable, Callable, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ThorPluginError(Exception):
    """Base exception for the adapter."""

    code: str = "core_error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.code)


class ProtocolApiError(ThorPluginError):
    """Raised when the node API request fails."""
    code = "api_request_failed"


# Routing

class RouteNotFoundError(ThorPluginError):
    """Raised when the inbound addresses hold no entry for a chain."""
    code = "core_inbound_data_not_found"


class ChainHaltedError(ThorPluginError):
    """Raised when a chain or the whole protocol is halted."""
    code = "core_chain_halted"


# Approval

class WalletNotFoundError(ThorPluginError):
    """Raised when no wallet (or no approval capability) exists for a chain."""
    code = "core_wallet_connection_not_found"


class AddressMissingError(ThorPluginError):
    """Raised when the token contract or wallet address is unset."""
    code = "core_approve_asset_address_or_from_not_found"


# Liquidity parameters

class InvalidParamsError(ThorPluginError):
    """Raised when operation parameters are invalid."""
    code = "core_transaction_invalid_params"


class CreateLiquidityInvalidParamsError(InvalidParamsError):
    code = "core_transaction_create_liquidity_invalid_params"


class AddLiquidityInvalidParamsError(InvalidParamsError):
    code = "core_transaction_add_liquidity_invalid_params"


class BaseAddressMissingError(ThorPluginError):
    """Raised when a base asset address is required but none resolves."""
    code = "core_transaction_add_liquidity_base_address"


# Two-leg operations

class LiquidityLegError(ThorPluginError):
    """Failure of one leg of a two-deposit liquidity operation.

    The original exception is kept on ``cause`` and chained as ``__cause__``.
    A failed second leg does not undo the first one.
    """

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"{self.code}: {cause}")


class CreateLiquidityBaseError(LiquidityLegError):
    code = "core_transaction_create_liquidity_base_error"


class CreateLiquidityAssetError(LiquidityLegError):
    code = "core_transaction_create_liquidity_asset_error"


class AddLiquidityBaseError(LiquidityLegError):
    code = "core_transaction_add_liquidity_base_error"


class AddLiquidityAssetError(LiquidityLegError):
    code = "core_transaction_add_liquidity_asset_error"


async def wrap_with_throw(
    func: Callable[[], Awaitable[T]],
    error_class: Type[LiquidityLegError],
) -> T:
    """Await ``func`` and re-raise any failure as ``error_class``."""
    try:
        return await func()
    except Exception as e:
        logger.error(f"{error_class.code}: {type(e).__name__}: {e}")
        raise error_class(e) from e
