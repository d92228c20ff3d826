"""Wallet handles supplied by the host application.

A handle exposes the connected address and, for EVM chains, optional token
allowance capabilities. Missing capabilities are plain ``None`` slots.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

from thorplugin.chains import Chain


class ApproveMode(str, Enum):
    """Whether to only check an allowance or to set it."""
    CHECK_ONLY = "checkOnly"
    APPROVE = "approve"


@dataclass(frozen=True)
class ApproveRequest:
    """Allowance request passed to a wallet capability.

    Attributes:
        amount: Amount in base units
        asset_address: Token contract address
        from_address: Owner (wallet) address
        spender_address: Router contract allowed to spend
    """
    amount: int
    asset_address: str
    from_address: str
    spender_address: str


ApproveCallable = Callable[[ApproveRequest], Awaitable[Any]]


@dataclass
class WalletHandle:
    """Per-chain wallet capabilities."""

    address: Optional[str] = None
    approve: Optional[ApproveCallable] = None
    is_approved: Optional[ApproveCallable] = None

    def capability(self, mode: ApproveMode) -> Optional[ApproveCallable]:
        """Capability used for an approval mode, if the wallet has it."""
        if ApproveMode(mode) is ApproveMode.CHECK_ONLY:
            return self.is_approved
        return self.approve


ChainWallets = Mapping[Chain, WalletHandle]


def get_address(wallets: ChainWallets, chain: Chain) -> str:
    """Connected address for a chain, or "" when no wallet is connected."""
    wallet = wallets.get(Chain(chain))
    return (wallet.address if wallet else None) or ""
