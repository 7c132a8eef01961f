"""Tests for the cross-chain swap flow."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from solana.rpc.core import RPCException

from conftest import INSTRUCTION, make_mock_sdk as make_sdk, make_quote
from fusionswap.chains import LIMIT_ORDER_PROTOCOL, NetworkEnum
from fusionswap.sdk.errors import FusionAPIError, FusionSDKError, InvalidPresetError
from fusionswap.sdk.hashlock import HashLock
from fusionswap.swap.executor import CrossChainSwapper, OrderCreationError
from fusionswap.swap.monitor import SwapError


class TestPrepareSecrets:
    """Tests for preset selection and secret generation."""

    def test_recommended_preset(self):
        quote = make_quote(secrets_count=3)
        swapper = CrossChainSwapper(make_sdk(quote))

        preset, secret_data = swapper.prepare_secrets(quote)

        assert preset.name == "fast"
        assert len(secret_data.secrets) == 3
        assert secret_data.hash_lock.get_parts_count() == 2

    def test_explicit_preset(self):
        quote = make_quote(secrets_count=3)
        swapper = CrossChainSwapper(make_sdk(quote))

        preset, secret_data = swapper.prepare_secrets(quote, "slow")

        assert preset.name == "slow"
        assert secret_data.hash_lock == HashLock.for_single_fill(secret_data.secrets[0])

    def test_unknown_preset(self):
        quote = make_quote()
        swapper = CrossChainSwapper(make_sdk(quote))

        with pytest.raises(InvalidPresetError):
            swapper.prepare_secrets(quote, "turbo")


class TestEvmSource:
    """Tests for EVM-source orders."""

    @pytest.mark.asyncio
    async def test_swap_end_to_end(self):
        quote = make_quote()
        sdk = make_sdk(quote)
        swapper = CrossChainSwapper(sdk, poll_interval=0, timeout=5)

        result = await swapper.swap(quote.params, receiver="9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM")

        assert result.completed
        assert result.order_hash == "0xorder"
        assert result.final_status == "executed"
        assert result.tx_signature is None
        sdk.submit_order.assert_awaited_once()
        sdk.announce_order.assert_not_awaited()
        sdk.submit_secret.assert_awaited_once_with("0xorder", result.secrets[0])

    @pytest.mark.asyncio
    async def test_submission_failure_keeps_secrets(self):
        quote = make_quote(secrets_count=2)
        sdk = make_sdk(quote)
        sdk.submit_order = AsyncMock(side_effect=FusionAPIError("rejected", status_code=400))
        swapper = CrossChainSwapper(sdk)

        with pytest.raises(OrderCreationError) as exc_info:
            await swapper.submit(quote, receiver="receiver")

        details = exc_info.value.order_details()
        assert details["preset"] == "fast"
        assert details["secretsCount"] == 2
        assert len(details["secrets"]) == 2
        assert len(details["secretHashes"]) == 2
        assert details["hashLock"].startswith("0x")

    @pytest.mark.asyncio
    async def test_low_allowance_only_warns(self, caplog):
        quote = make_quote()
        web3_provider = MagicMock()
        web3_provider.get_allowance = AsyncMock(return_value=1)
        swapper = CrossChainSwapper(make_sdk(quote), web3_provider=web3_provider)

        allowance = await swapper.check_allowance(quote)

        assert allowance == 1
        web3_provider.get_allowance.assert_awaited_once_with(
            quote.params.src_token_address, quote.params.wallet_address, LIMIT_ORDER_PROTOCOL
        )
        assert "below swap amount" in caplog.text

    @pytest.mark.asyncio
    async def test_allowance_rpc_failure_is_ignored(self):
        quote = make_quote()
        web3_provider = MagicMock()
        web3_provider.get_allowance = AsyncMock(side_effect=FusionSDKError("rpc down"))
        swapper = CrossChainSwapper(make_sdk(quote), web3_provider=web3_provider)

        assert await swapper.check_allowance(quote) is None


class TestSolanaSource:
    """Tests for Solana-source orders."""

    @pytest.mark.asyncio
    async def test_announce_then_send_instruction(self):
        quote = make_quote(src_chain_id=NetworkEnum.SOLANA, dst_chain_id=NetworkEnum.ETHEREUM)
        sdk = make_sdk(quote, instruction=INSTRUCTION)
        sender = MagicMock()
        sender.send_instruction = AsyncMock(return_value="5sig")
        swapper = CrossChainSwapper(sdk, poll_interval=0, timeout=5, solana_sender=sender)

        result = await swapper.swap(quote.params, receiver="0x2c7536E3605D9C16a7a3D7b1898e529396a65c23")

        assert result.completed
        assert result.tx_signature == "5sig"
        sdk.announce_order.assert_awaited_once()
        sdk.submit_order.assert_not_awaited()
        sender.send_instruction.assert_awaited_once_with(INSTRUCTION)

    @pytest.mark.asyncio
    async def test_requires_sender(self):
        quote = make_quote(src_chain_id=NetworkEnum.SOLANA, dst_chain_id=NetworkEnum.ETHEREUM)
        swapper = CrossChainSwapper(make_sdk(quote, instruction=INSTRUCTION))

        with pytest.raises(SwapError, match="Solana transaction sender"):
            await swapper.submit(quote, receiver="0x2c7536E3605D9C16a7a3D7b1898e529396a65c23")

    @pytest.mark.asyncio
    async def test_missing_instruction(self):
        quote = make_quote(src_chain_id=NetworkEnum.SOLANA, dst_chain_id=NetworkEnum.ETHEREUM)
        sender = MagicMock()
        sender.send_instruction = AsyncMock()
        swapper = CrossChainSwapper(make_sdk(quote), solana_sender=sender)

        with pytest.raises(SwapError, match="escrow instruction"):
            await swapper.submit(quote, receiver="0x2c7536E3605D9C16a7a3D7b1898e529396a65c23")
        sender.send_instruction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_escrow_send_failure_keeps_order_hash(self):
        quote = make_quote(src_chain_id=NetworkEnum.SOLANA, dst_chain_id=NetworkEnum.ETHEREUM)
        sdk = make_sdk(quote, instruction=INSTRUCTION)
        sender = MagicMock()
        sender.send_instruction = AsyncMock(side_effect=RPCException("Transaction simulation failed"))
        swapper = CrossChainSwapper(sdk, poll_interval=0, timeout=5, solana_sender=sender)

        with pytest.raises(OrderCreationError, match="Escrow transaction failed") as exc_info:
            await swapper.swap(quote.params, receiver="0x2c7536E3605D9C16a7a3D7b1898e529396a65c23")

        assert exc_info.value.order_hash == "0xorder"
        details = exc_info.value.order_details()
        assert details["orderHash"] == "0xorder"
        assert len(details["secrets"]) == 1
        sdk.get_order_status.assert_not_awaited()
