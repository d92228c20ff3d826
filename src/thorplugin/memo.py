"""Memo builders for THORChain and Maya transactions.

Memo formats are fixed by the protocols:
- Liquidity add:    +:CHAIN.SYMBOL[:PAIRED_ADDRESS]
- Liquidity remove: -:CHAIN.SYMBOL:BASIS_POINTS[:TARGET_ASSET]
- Savers add:       +:CHAIN/SYMBOL
- Savers remove:    -:CHAIN/SYMBOL:BASIS_POINTS
- Bond / leave:     BOND:NODE_ADDRESS, LEAVE:NODE_ADDRESS
- Unbond:           UNBOND:NODE_ADDRESS:AMOUNT
- Name register:    ~:NAME:CHAIN:ADDRESS[:OWNER]
"""

from enum import Enum
from typing import Optional, Union

from thorplugin.chains import Chain


class MemoType(str, Enum):
    """Protocol memo actions."""
    BOND = "BOND"
    DEPOSIT = "+"
    LEAVE = "LEAVE"
    NAME_REGISTER = "~"
    UNBOND = "UNBOND"
    WITHDRAW = "-"


def _chain_key(chain: Union[Chain, str]) -> str:
    return chain.value if isinstance(chain, Chain) else str(chain).upper()


def _pool(chain: Union[Chain, str], symbol: str) -> str:
    # Synthetic symbols (BTC/BTC) refer to the underlying layer-1 pool
    if "/" in symbol:
        return symbol.replace("/", ".", 1)
    return f"{_chain_key(chain)}.{symbol}"


def get_memo_for_deposit(chain: Union[Chain, str], symbol: str, address: Optional[str] = None) -> str:
    memo = f"{MemoType.DEPOSIT.value}:{_pool(chain, symbol)}"
    if address:
        memo += f":{address}"
    return memo


def get_memo_for_withdraw(
    chain: Union[Chain, str],
    symbol: str,
    basis_points: int,
    target_asset: Optional[str] = None,
) -> str:
    """Build a liquidity withdrawal memo.

    Args:
        chain: Pool chain
        symbol: Pool asset symbol
        basis_points: Share of the position to withdraw (10000 = 100%)
        target_asset: Asset to receive for asymmetric withdrawals
    """
    memo = f"{MemoType.WITHDRAW.value}:{_pool(chain, symbol)}:{basis_points}"
    if target_asset:
        memo += f":{target_asset}"
    return memo


def get_memo_for_saver_deposit(chain: Union[Chain, str], symbol: str) -> str:
    return f"{MemoType.DEPOSIT.value}:{_chain_key(chain)}/{symbol}"


def get_memo_for_saver_withdraw(chain: Union[Chain, str], symbol: str, basis_points: int) -> str:
    return f"{MemoType.WITHDRAW.value}:{_chain_key(chain)}/{symbol}:{basis_points}"


def get_memo_for_unbond(address: str, unbond_amount: int) -> str:
    return f"{MemoType.UNBOND.value}:{address}:{unbond_amount}"


def get_memo_for_leave_and_bond(type: MemoType, address: str) -> str:
    """Memo for BOND or LEAVE node actions."""
    memo_type = MemoType(type)
    if memo_type not in (MemoType.BOND, MemoType.LEAVE):
        raise ValueError(f"Expected BOND or LEAVE, got {memo_type.value}")
    return f"{memo_type.value}:{address}"


def get_memo_for_name_register(
    name: str,
    chain: Union[Chain, str],
    address: str,
    owner: Optional[str] = None,
) -> str:
    memo = f"{MemoType.NAME_REGISTER.value}:{name}:{_chain_key(chain)}:{address}"
    if owner:
        memo += f":{owner}"
    return memo
