"""Component tests for assets, chains, memos, wallets and errors."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from thorplugin.assets import AssetValue, get_min_amount_by_chain
from thorplugin.chains import EVM_CHAINS, Chain, ProtocolType, get_protocol_type, is_evm_chain
from thorplugin.errors import (
    AddLiquidityBaseError,
    AddLiquidityInvalidParamsError,
    CreateLiquidityBaseError,
    CreateLiquidityInvalidParamsError,
    InvalidParamsError,
    LiquidityLegError,
    ThorPluginError,
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
from thorplugin.wallets import ApproveMode, WalletHandle, get_address


class TestAssetValue:
    """Tests for the AssetValue value type."""

    def test_from_chain_uses_gas_asset(self):
        """Test that from_chain builds the chain's gas asset."""
        rune = AssetValue.from_chain(Chain.THORCHAIN, 5)

        assert rune.symbol == "RUNE"
        assert rune.decimal == 8
        assert rune.is_gas_asset is True
        assert str(rune) == "THOR.RUNE"

    def test_arbitrum_gas_asset_is_eth(self):
        """Test that Arbitrum pays gas in ETH."""
        assert str(AssetValue.from_chain(Chain.ARBITRUM)) == "ARB.ETH"

    def test_from_string_token(self):
        """Test parsing a token identifier with a contract address."""
        usdt = AssetValue.from_string("ETH.USDT-0xdAC17F958D2ee523a2206206994597C13D831ec7", 3)

        assert usdt.chain == Chain.ETHEREUM
        assert usdt.ticker == "USDT"
        assert usdt.address == "0xdAC17F958D2ee523a2206206994597C13D831ec7"
        assert usdt.is_gas_asset is False
        assert usdt.is_synthetic is False
        assert usdt.decimal == 18

    def test_from_string_synthetic(self):
        """Test parsing a synthetic identifier."""
        synth = AssetValue.from_string("BTC/BTC", "0.1")

        assert synth.chain == Chain.THORCHAIN
        assert synth.is_synthetic is True
        assert synth.is_gas_asset is False
        assert synth.ticker == "BTC"
        assert str(synth) == "BTC/BTC"

    def test_from_string_maya_synthetic(self):
        """Test that synthetics can live on MAYA."""
        synth = AssetValue.from_string("ETH/ETH", 1, synth_chain=Chain.MAYA)
        assert synth.chain == Chain.MAYA

    def test_from_string_invalid(self):
        """Test that identifiers without a separator are rejected."""
        with pytest.raises(ValueError):
            AssetValue.from_string("NOTANASSET")

    def test_base_value_rounds_down(self):
        """Test that base units truncate extra precision."""
        btc = AssetValue.from_chain(Chain.BITCOIN, "0.123456789")
        assert btc.base_value == 12345678

    def test_comparisons(self):
        """Test gt and lte against plain numbers."""
        zero = AssetValue.from_chain(Chain.BITCOIN, 0)
        one = AssetValue.from_chain(Chain.BITCOIN, 1)

        assert one.gt(0)
        assert not zero.gt(0)
        assert zero.lte(0)
        assert not one.lte("0.5")

    def test_set_returns_copy(self):
        """Test that set leaves the original value untouched."""
        btc = AssetValue.from_chain(Chain.BITCOIN, 1)
        changed = btc.set("2.5")

        assert changed.value == Decimal("2.5")
        assert btc.value == Decimal("1")

    def test_immutable(self):
        """Test that asset values cannot be mutated."""
        btc = AssetValue.from_chain(Chain.BITCOIN, 1)
        with pytest.raises(AttributeError):
            btc.value = Decimal("3")


class TestMinAmounts:
    """Tests for per-chain minimum amounts."""

    @pytest.mark.parametrize("chain, expected", [
        (Chain.BITCOIN, Decimal("0.00010001")),
        (Chain.DOGECOIN, Decimal("0.01")),
        (Chain.ETHEREUM, Decimal("0.00000001")),
        (Chain.THORCHAIN, Decimal("0")),
        (Chain.MAYA, Decimal("0")),
        (Chain.COSMOS, Decimal("0.000001")),
    ])
    def test_min_amount(self, chain, expected):
        """Test the minimum gas asset amount for each chain."""
        min_amount = get_min_amount_by_chain(chain)

        assert min_amount.chain == chain
        assert min_amount.is_gas_asset
        assert min_amount.value == expected


class TestChains:
    """Tests for chain helpers."""

    def test_evm_chains(self):
        """Test EVM chain membership."""
        assert Chain.ETHEREUM in EVM_CHAINS
        assert Chain.BINANCE_SMART_CHAIN in EVM_CHAINS
        assert not is_evm_chain(Chain.BITCOIN)
        assert not is_evm_chain(Chain.THORCHAIN)

    def test_protocol_type(self):
        """Test protocol lookup for protocol chains."""
        assert get_protocol_type(Chain.THORCHAIN) == ProtocolType.THORCHAIN
        assert get_protocol_type("MAYA") == ProtocolType.MAYACHAIN
        with pytest.raises(ValueError):
            get_protocol_type(Chain.BITCOIN)


class TestMemos:
    """Tests for memo builders."""

    def test_deposit(self):
        """Test liquidity add memos with and without a paired address."""
        assert get_memo_for_deposit(Chain.BITCOIN, "BTC") == "+:BTC.BTC"
        assert get_memo_for_deposit("BTC", "BTC", "thor1abc") == "+:BTC.BTC:thor1abc"

    def test_deposit_synthetic_symbol_uses_pool(self):
        """Test that synthetic symbols map to their layer-1 pool."""
        assert get_memo_for_deposit(Chain.THORCHAIN, "BTC/BTC") == "+:BTC.BTC"

    def test_withdraw(self):
        """Test liquidity withdrawal memos with and without a target asset."""
        assert get_memo_for_withdraw(Chain.ETHEREUM, "ETH", 5000) == "-:ETH.ETH:5000"
        assert (
            get_memo_for_withdraw(Chain.ETHEREUM, "ETH", 10000, target_asset="THOR.RUNE")
            == "-:ETH.ETH:10000:THOR.RUNE"
        )

    def test_withdraw_token_keeps_full_symbol(self):
        """Test that token pools keep their contract suffix."""
        symbol = "USDT-0xdAC17F958D2ee523a2206206994597C13D831ec7"

        assert get_memo_for_withdraw(Chain.ETHEREUM, symbol, 2500) == f"-:ETH.{symbol}:2500"

    def test_savers(self):
        """Test savers add and withdrawal memos."""
        assert get_memo_for_saver_deposit(Chain.BITCOIN, "BTC") == "+:BTC/BTC"
        assert get_memo_for_saver_withdraw(Chain.BITCOIN, "BTC", 2500) == "-:BTC/BTC:2500"

    def test_node_actions(self):
        """Test bond, leave and unbond memos."""
        assert get_memo_for_unbond("thor1node", 100) == "UNBOND:thor1node:100"
        assert get_memo_for_leave_and_bond(MemoType.BOND, "thor1node") == "BOND:thor1node"
        assert get_memo_for_leave_and_bond("LEAVE", "thor1node") == "LEAVE:thor1node"
        with pytest.raises(ValueError):
            get_memo_for_leave_and_bond(MemoType.UNBOND, "thor1node")

    def test_name_register(self):
        """Test name registration memos with and without owner."""
        assert get_memo_for_name_register("bob", Chain.ETHEREUM, "0xabc") == "~:bob:ETH:0xabc"
        assert (
            get_memo_for_name_register("bob", "ETH", "0xabc", owner="thor1owner")
            == "~:bob:ETH:0xabc:thor1owner"
        )


class TestWallets:
    """Tests for wallet handles."""

    def test_capability_by_mode(self):
        """Test that each approve mode selects its wallet function."""
        approve, is_approved = AsyncMock(), AsyncMock()
        wallet = WalletHandle(address="0xabc", approve=approve, is_approved=is_approved)

        assert wallet.capability(ApproveMode.APPROVE) is approve
        assert wallet.capability("checkOnly") is is_approved
        assert WalletHandle().capability(ApproveMode.APPROVE) is None

    def test_get_address(self):
        """Test that missing wallets or addresses resolve to an empty string."""
        wallets = {Chain.BITCOIN: WalletHandle(address="bc1qabc"), Chain.ETHEREUM: WalletHandle()}

        assert get_address(wallets, Chain.BITCOIN) == "bc1qabc"
        assert get_address(wallets, Chain.ETHEREUM) == ""
        assert get_address(wallets, Chain.LITECOIN) == ""


class TestErrors:
    """Tests for error codes and wrapping."""

    def test_codes(self):
        """Test leg error codes and hierarchy."""
        assert CreateLiquidityBaseError.code == "core_transaction_create_liquidity_base_error"
        assert issubclass(AddLiquidityBaseError, LiquidityLegError)
        assert issubclass(LiquidityLegError, ThorPluginError)

    def test_invalid_params_codes_per_operation(self):
        """Test that create and add liquidity report distinct parameter codes."""
        assert CreateLiquidityInvalidParamsError.code == "core_transaction_create_liquidity_invalid_params"
        assert AddLiquidityInvalidParamsError.code == "core_transaction_add_liquidity_invalid_params"
        assert issubclass(CreateLiquidityInvalidParamsError, InvalidParamsError)
        assert issubclass(AddLiquidityInvalidParamsError, InvalidParamsError)
        assert str(AddLiquidityInvalidParamsError()) == "core_transaction_add_liquidity_invalid_params"

    @pytest.mark.asyncio
    async def test_wrap_with_throw_passes_result(self):
        """Test that a successful call returns its result."""
        result = await wrap_with_throw(AsyncMock(return_value="tx"), CreateLiquidityBaseError)
        assert result == "tx"

    @pytest.mark.asyncio
    async def test_wrap_with_throw_keeps_cause(self):
        """Test that a failure is wrapped with the original kept as cause."""
        original = ConnectionError("node down")

        with pytest.raises(AddLiquidityBaseError) as exc_info:
            await wrap_with_throw(AsyncMock(side_effect=original), AddLiquidityBaseError)

        assert exc_info.value.cause is original
        assert exc_info.value.__cause__ is original
        assert "node down" in str(exc_info.value)
