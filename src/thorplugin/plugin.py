"""Protocol adapter for THORChain and Maya.

Builds memos for pool deposits, liquidity, savers, node actions and name
registration, and hands them to the deposit coroutine supplied by the host
application together with the pool address, router and fee rate.

Every call fetches fresh routing data. Nothing is cached between calls and
two-leg liquidity operations send their legs one after the other without
rollback: if the second leg fails the first one has already been sent.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from thorplugin.assets import AssetValue, get_min_amount_by_chain
from thorplugin.chains import Chain, get_protocol_type, is_evm_chain
from thorplugin.client import InboundAddress, ProtocolApiClient
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
    RouteNotFoundError,
    WalletNotFoundError,
    wrap_with_throw,
)
from thorplugin.memo import (
    MemoType,
    get_memo_for_deposit,
    get_memo_for_leave_and_bond,
    get_memo_for_name_register,
    get_memo_for_saver_deposit,
    get_memo_for_saver_withdraw,
    get_memo_for_unbond,
    get_memo_for_withdraw,
)
from thorplugin.wallets import ApproveMode, ApproveRequest, ChainWallets, get_address

logger = logging.getLogger(__name__)

DepositCallable = Callable[..., Awaitable[str]]


class FeeOption(str, Enum):
    """Gas rate tiers."""
    AVERAGE = "average"
    FAST = "fast"
    FASTEST = "fastest"


class LiquidityMode(str, Enum):
    """Which side(s) of a pool a liquidity operation touches."""
    SYM = "sym"
    BASE_ASSET = "baseAsset"
    ASSET = "asset"


class SavingsType(str, Enum):
    ADD = "add"
    WITHDRAW = "withdraw"


GAS_FEE_MULTIPLIER: dict[FeeOption, float] = {
    FeeOption.AVERAGE: 1.2,
    FeeOption.FAST: 1.5,
    FeeOption.FASTEST: 2.0,
}

MAX_BASIS_POINTS = 10000


@dataclass(frozen=True)
class LiquidityResult:
    """Transaction ids of a two-leg liquidity operation (None for legs not sent)."""
    base_asset_tx: Optional[str] = None
    asset_tx: Optional[str] = None


def to_basis_points(percent: Union[int, float, Decimal]) -> int:
    """Convert a percentage to basis points clamped to [0, 10000]."""
    scaled = (Decimal(str(percent)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, min(MAX_BASIS_POINTS, int(scaled)))


class ProtocolAdapter:
    """Deposit façade for a THORChain or Maya protocol chain."""

    def __init__(
        self,
        deposit: DepositCallable,
        plugin_chain: Chain = Chain.THORCHAIN,
        stagenet: bool = False,
        wallets: Optional[ChainWallets] = None,
        api_client: Optional[ProtocolApiClient] = None,
    ):
        """Initialize the adapter.

        Args:
            deposit: Coroutine sending a transaction; called with keyword
                arguments asset_value, recipient, memo and, for pool deposits,
                router and fee_rate. Returns the transaction id.
            plugin_chain: Protocol chain (Chain.THORCHAIN or Chain.MAYA)
            stagenet: Use stagenet instead of mainnet
            wallets: Connected wallets by chain
            api_client: Node API client override
        """
        self.plugin_chain = Chain(plugin_chain)
        self.protocol = get_protocol_type(self.plugin_chain)
        self.stagenet = stagenet
        self.wallets: ChainWallets = wallets or {}
        self.api_client = api_client or ProtocolApiClient(self.protocol, stagenet=stagenet)
        self._deposit = deposit

    # ======================
    # Routing
    # ======================

    async def get_inbound_data_by_chain(self, chain: Chain) -> InboundAddress:
        """Get inbound routing data for a chain.

        The protocol chain itself never halts and needs no vault, so it is
        answered without an API call.

        Raises:
            RouteNotFoundError: No inbound entry for the chain
            ChainHaltedError: The chain is halted
        """
        chain = Chain(chain)
        if chain == self.plugin_chain:
            return InboundAddress(chain=chain.value, gas_rate="0", router="", address="", halted=False)

        inbound_addresses = await self.api_client.get_inbound_addresses()
        inbound = next((item for item in inbound_addresses if item.chain == chain.value), None)

        if inbound is None:
            logger.warning(f"No inbound address for {chain.value} on {self.protocol.value}")
            raise RouteNotFoundError(f"No inbound data for chain {chain.value}")
        if inbound.halted:
            logger.warning(f"{chain.value} is halted on {self.protocol.value}")
            raise ChainHaltedError(f"Chain {chain.value} is halted")

        logger.debug(f"Inbound {chain.value}: vault={inbound.address} router={inbound.router} gas_rate={inbound.gas_rate}")
        return inbound

    # ======================
    # Approval
    # ======================

    async def approve(self, asset_value: AssetValue, mode: ApproveMode = ApproveMode.CHECK_ONLY) -> Any:
        """Check or set the router allowance for a token.

        Native EVM assets, non-EVM chains and synthetics need no allowance and
        return True (check) or "approved" (approve) without touching a wallet.
        Otherwise the wallet capability result is returned unchanged.
        """
        mode = ApproveMode(mode)
        router = (await self.get_inbound_data_by_chain(asset_value.chain)).router or ""

        is_evm = is_evm_chain(asset_value.chain)
        if (is_evm and asset_value.is_gas_asset) or not is_evm or asset_value.is_synthetic:
            return True if mode is ApproveMode.CHECK_ONLY else "approved"

        wallet = self.wallets.get(asset_value.chain)
        wallet_action = wallet.capability(mode) if wallet else None
        if wallet_action is None:
            raise WalletNotFoundError(f"No wallet able to {mode.value} on {asset_value.chain.value}")

        from_address = wallet.address
        if not (asset_value.address and from_address):
            raise AddressMissingError(f"Missing asset or wallet address for {asset_value}")

        return await wallet_action(
            ApproveRequest(
                amount=asset_value.base_value,
                asset_address=asset_value.address,
                from_address=from_address,
                spender_address=router,
            )
        )

    async def approve_asset_value(self, asset_value: AssetValue) -> Any:
        return await self.approve(asset_value, ApproveMode.APPROVE)

    async def is_asset_value_approved(self, asset_value: AssetValue) -> Any:
        return await self.approve(asset_value, ApproveMode.CHECK_ONLY)

    # ======================
    # Deposits
    # ======================

    async def deposit_to_protocol(self, asset_value: AssetValue, memo: str) -> str:
        """Send a memo-only protocol action (no vault recipient).

        Raises:
            ChainHaltedError: Global or protocol chain halt is set in mimir
        """
        mimir = await self.api_client.get_mimir()

        if mimir.is_halted(self.protocol):
            logger.warning(f"{self.protocol.value} is halted, refusing deposit: {memo}")
            raise ChainHaltedError(f"{self.protocol.value} is halted")

        logger.info(f"Protocol deposit {asset_value.value} {asset_value}: {memo}")
        return await self._deposit(asset_value=asset_value, recipient="", memo=memo)

    async def deposit_to_pool(
        self,
        asset_value: AssetValue,
        memo: str,
        fee_option: FeeOption = FeeOption.FAST,
    ) -> str:
        """Send funds to the pool vault of the asset's chain."""
        inbound = await self.get_inbound_data_by_chain(asset_value.chain)
        fee_rate = int(Decimal(inbound.gas_rate or "0")) * GAS_FEE_MULTIPLIER[FeeOption(fee_option)]

        logger.info(
            f"Pool deposit {asset_value.value} {asset_value} -> {inbound.address or '(protocol)'} "
            f"(fee_rate: {fee_rate}): {memo}"
        )
        return await self._deposit(
            asset_value=asset_value,
            recipient=inbound.address,
            memo=memo,
            router=inbound.router,
            fee_rate=fee_rate,
        )

    # ======================
    # Names and nodes
    # ======================

    async def register(
        self,
        asset_value: AssetValue,
        name: str,
        chain: Chain,
        address: str,
        owner: Optional[str] = None,
    ) -> str:
        """Register (or update) a protocol name."""
        memo = get_memo_for_name_register(name=name, chain=chain, address=address, owner=owner)
        return await self.deposit_to_protocol(asset_value=asset_value, memo=memo)

    async def node_action(self, type: MemoType, asset_value: AssetValue, address: str) -> str:
        """Bond to, unbond from or leave a node.

        Only BOND transfers the given value; UNBOND and LEAVE send the protocol
        chain's minimum amount and carry the action in the memo.
        """
        type = MemoType(type)
        if type is MemoType.UNBOND:
            memo = get_memo_for_unbond(address=address, unbond_amount=asset_value.base_value)
        elif type in (MemoType.BOND, MemoType.LEAVE):
            memo = get_memo_for_leave_and_bond(type=type, address=address)
        else:
            raise InvalidParamsError(f"Unsupported node action: {type.value}")

        asset_to_transfer = asset_value if type is MemoType.BOND else get_min_amount_by_chain(self.plugin_chain)
        return await self.deposit_to_protocol(asset_value=asset_to_transfer, memo=memo)

    # ======================
    # Liquidity
    # ======================

    async def create_liquidity(self, base_asset_value: AssetValue, asset_value: AssetValue) -> LiquidityResult:
        """Create a new symmetric position with one deposit per side.

        Raises:
            CreateLiquidityInvalidParamsError: Either value is not positive
            CreateLiquidityBaseError: Base leg failed (asset leg not sent)
            CreateLiquidityAssetError: Asset leg failed (base leg already sent)
        """
        if base_asset_value.lte(0) or asset_value.lte(0):
            raise CreateLiquidityInvalidParamsError("Both liquidity values must be positive")

        asset_address = get_address(self.wallets, asset_value.chain)
        base_asset_address = get_address(self.wallets, self.plugin_chain)

        base_asset_tx = await wrap_with_throw(
            lambda: self.deposit_to_pool(
                asset_value=base_asset_value,
                memo=get_memo_for_deposit(asset_value.chain, asset_value.symbol, asset_address),
            ),
            CreateLiquidityBaseError,
        )
        logger.info(f"Create liquidity base leg sent: {base_asset_tx}")

        asset_tx = await wrap_with_throw(
            lambda: self.deposit_to_pool(
                asset_value=asset_value,
                memo=get_memo_for_deposit(asset_value.chain, asset_value.symbol, base_asset_address),
            ),
            CreateLiquidityAssetError,
        )
        logger.info(f"Create liquidity asset leg sent: {asset_tx}")

        return LiquidityResult(base_asset_tx=base_asset_tx, asset_tx=asset_tx)

    async def add_liquidity_part(
        self,
        asset_value: AssetValue,
        pool_address: str,
        address: Optional[str] = None,
        symmetric: bool = False,
    ) -> str:
        """Add one side of a position to the pool "CHAIN.SYMBOL".

        For symmetric adds the paired address is required and carried in the memo.
        """
        if symmetric and not address:
            raise AddLiquidityInvalidParamsError("Symmetric liquidity requires the paired address")

        chain, _, symbol = pool_address.partition(".")
        memo = get_memo_for_deposit(chain, symbol, address if symmetric else "")

        return await self.deposit_to_pool(asset_value=asset_value, memo=memo)

    async def add_liquidity(
        self,
        base_asset_value: Optional[AssetValue],
        asset_value: Optional[AssetValue],
        base_asset_addr: Optional[str] = None,
        asset_addr: Optional[str] = None,
        is_pending_symm_asset: bool = False,
        mode: LiquidityMode = LiquidityMode.SYM,
    ) -> LiquidityResult:
        """Add liquidity to an existing pool.

        Args:
            base_asset_value: Protocol asset amount (RUNE or CACAO)
            asset_value: Pool asset amount; also selects the pool
            base_asset_addr: Base side address override
            asset_addr: Asset side address override
            is_pending_symm_asset: Asset leg completes a pending symmetric add,
                so the base address must be carried in its memo
            mode: Which sides to send

        Raises:
            AddLiquidityInvalidParamsError: Nothing to transfer
            BaseAddressMissingError: Base address needed but unresolved
            AddLiquidityBaseError / AddLiquidityAssetError: Leg failures
        """
        mode = LiquidityMode(mode)
        if asset_value is None:
            raise AddLiquidityInvalidParamsError("Pool asset is required")

        chain, symbol = asset_value.chain, asset_value.symbol
        is_sym = mode is LiquidityMode.SYM
        base_transfer = (
            base_asset_value is not None
            and base_asset_value.gt(0)
            and (is_sym or mode is LiquidityMode.BASE_ASSET)
        )
        asset_transfer = asset_value.gt(0) and (is_sym or mode is LiquidityMode.ASSET)
        include_base_address = is_pending_symm_asset or base_transfer

        base_address = (
            (base_asset_addr or get_address(self.wallets, self.plugin_chain)) if include_base_address else ""
        )
        asset_address = (
            (asset_addr or get_address(self.wallets, chain)) if is_sym or mode is LiquidityMode.ASSET else ""
        )

        if not (base_transfer or asset_transfer):
            raise AddLiquidityInvalidParamsError("No liquidity to transfer")
        if include_base_address and not base_address:
            raise BaseAddressMissingError("Base asset address is required")

        base_asset_tx = None
        if base_transfer:
            base_asset_tx = await wrap_with_throw(
                lambda: self.deposit_to_pool(
                    asset_value=base_asset_value,
                    memo=get_memo_for_deposit(chain, symbol, asset_address),
                ),
                AddLiquidityBaseError,
            )
            logger.info(f"Add liquidity base leg sent: {base_asset_tx}")

        asset_tx = None
        if asset_transfer:
            asset_tx = await wrap_with_throw(
                lambda: self.deposit_to_pool(
                    asset_value=asset_value,
                    memo=get_memo_for_deposit(chain, symbol, base_address),
                ),
                AddLiquidityAssetError,
            )
            logger.info(f"Add liquidity asset leg sent: {asset_tx}")

        return LiquidityResult(base_asset_tx=base_asset_tx, asset_tx=asset_tx)

    # ======================
    # Savers and withdrawals
    # ======================

    async def savings(
        self,
        asset_value: AssetValue,
        type: SavingsType,
        percent: Union[int, float, Decimal] = 0,
        memo: Optional[str] = None,
    ) -> str:
        """Add to or withdraw from a savers vault."""
        type = SavingsType(type)
        chain, symbol = asset_value.chain, asset_value.symbol
        is_deposit = type is SavingsType.ADD

        if is_deposit:
            memo_string = get_memo_for_saver_deposit(chain=chain, symbol=symbol)
        else:
            memo_string = get_memo_for_saver_withdraw(
                chain=chain, symbol=symbol, basis_points=to_basis_points(percent)
            )

        return await self.deposit_to_pool(
            asset_value=asset_value if is_deposit else get_min_amount_by_chain(chain),
            memo=memo or memo_string,
        )

    async def withdraw(
        self,
        asset_value: AssetValue,
        percent: Union[int, float, Decimal],
        from_: LiquidityMode,
        to: LiquidityMode,
        memo: Optional[str] = None,
    ) -> str:
        """Withdraw a share of a liquidity position.

        Args:
            asset_value: Pool asset of the position
            percent: Share to withdraw (100 = everything)
            from_: Side the position was added from
            to: Side to receive
            memo: Memo override
        """
        from_, to = LiquidityMode(from_), LiquidityMode(to)

        if to is LiquidityMode.BASE_ASSET and from_ is not LiquidityMode.BASE_ASSET:
            target_asset = AssetValue.from_chain(self.plugin_chain)
        elif (from_ is LiquidityMode.SYM and to is LiquidityMode.SYM) or from_ in (
            LiquidityMode.BASE_ASSET,
            LiquidityMode.ASSET,
        ):
            target_asset = None
        else:
            target_asset = asset_value

        value = get_min_amount_by_chain(
            asset_value.chain if from_ is LiquidityMode.ASSET else self.plugin_chain
        )
        memo_string = memo or get_memo_for_withdraw(
            chain=asset_value.chain,
            symbol=asset_value.symbol,
            basis_points=to_basis_points(percent),
            target_asset=str(target_asset) if target_asset else None,
        )

        return await self.deposit_to_pool(asset_value=value, memo=memo_string)
