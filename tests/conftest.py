"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["INCH_API_KEY"] = "test-api-key"
os.environ["TEST_PRIVATE_KEY"] = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
os.environ["TEST_MAKER_ADDRESS"] = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
os.environ["TEST_RECEIVER_ADDRESS"] = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

from fusionswap.chains import USDT_EVM, USDT_SOLANA, NetworkEnum
from fusionswap.config import get_settings
from fusionswap.sdk.models import (
    OrderStatusInfo,
    PreparedOrder,
    Quote,
    QuoteParams,
    ReadyFill,
    ReadyToAcceptSecretFills,
    SolanaInstruction,
)

TEST_PRIVATE_KEY = os.environ["TEST_PRIVATE_KEY"]
MAKER = os.environ["TEST_MAKER_ADDRESS"]
SOLANA_RECEIVER = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_quote_response(recommended: str = "fast", secrets_count: int = 1) -> dict:
    """Quoter response shaped like /quote/receive."""
    return {
        "quoteId": "quote-123",
        "srcTokenAmount": "5000000",
        "dstTokenAmount": "4987000",
        "recommendedPreset": recommended,
        "presets": {
            "fast": {
                "secretsCount": secrets_count,
                "auctionDuration": 180,
                "startAmount": "4990000",
                "allowPartialFills": secrets_count > 1,
                "allowMultipleFills": secrets_count > 1,
            },
            "slow": {
                "secretsCount": 1,
                "auctionDuration": 600,
                "startAmount": "4995000",
            },
            "medium": None,
        },
        "srcEscrowFactory": "0xa7bcb4eac8964306f9e3764f67db6a7af6ddf99a",
    }


def make_params(src_chain_id: int = NetworkEnum.ETHEREUM, dst_chain_id: int = NetworkEnum.SOLANA) -> QuoteParams:
    evm_to_sol = src_chain_id != NetworkEnum.SOLANA
    return QuoteParams(
        src_chain_id=src_chain_id,
        dst_chain_id=dst_chain_id,
        src_token_address=USDT_EVM if evm_to_sol else USDT_SOLANA,
        dst_token_address=USDT_SOLANA if evm_to_sol else USDT_EVM,
        amount="5000000",
        wallet_address=MAKER if evm_to_sol else SOLANA_RECEIVER,
    )


def make_quote(secrets_count: int = 1, **kwargs) -> Quote:
    return Quote.from_response(make_params(**kwargs), make_quote_response(secrets_count=secrets_count))


def make_typed_data(maker: str = MAKER) -> dict:
    """Minimal EIP-712 payload shaped like the order the quoter builds."""
    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "version", "type": "string"},
                {"name": "chainId", "type": "uint256"},
                {"name": "verifyingContract", "type": "address"},
            ],
            "Order": [
                {"name": "salt", "type": "uint256"},
                {"name": "maker", "type": "address"},
                {"name": "makingAmount", "type": "uint256"},
            ],
        },
        "primaryType": "Order",
        "domain": {
            "name": "1inch Limit Order Protocol",
            "version": "4",
            "chainId": 1,
            "verifyingContract": "0x111111125421cA6dc452d289314280a0f8842A65",
        },
        "message": {"salt": 42, "maker": maker, "makingAmount": 5000000},
    }


@pytest.fixture
def quote() -> Quote:
    return make_quote()


INSTRUCTION = SolanaInstruction.from_dict(
    {"programId": "11111111111111111111111111111111", "accounts": [], "data": "AQID"}
)

def prepared_order(quote, hash_lock, secret_hashes, preset, receiver=None, instruction=None):
    return PreparedOrder(
        order_hash="0xorder",
        order={"maker": quote.params.wallet_address},
        quote_id=quote.quote_id,
        hash_lock=hash_lock,
        secret_hashes=secret_hashes,
        preset=preset or quote.recommended_preset,
        src_chain_id=int(quote.src_chain_id),
        typed_data={"message": {}},
        instruction=instruction,
    )


def make_mock_sdk(quote, instruction=None):
    """Relayer stand-in: builds "0xorder", reports it pending then executed."""
    sdk = MagicMock()
    sdk.get_quote = AsyncMock(return_value=quote)

    async def build(quote, hash_lock, secret_hashes, preset=None, receiver=None, **kwargs):
        return prepared_order(quote, hash_lock, secret_hashes, preset, receiver, instruction)

    async def create(quote, wallet_address, **kwargs):
        return await build(quote, **kwargs)

    sdk.build_order = AsyncMock(side_effect=build)
    sdk.create_order = AsyncMock(side_effect=create)
    sdk.submit_order = AsyncMock(return_value={"orderHash": "0xorder"})
    sdk.announce_order = AsyncMock(return_value="0xorder")
    sdk.get_order_status = AsyncMock(
        side_effect=[
            OrderStatusInfo(order_hash="0xorder", status="pending"),
            OrderStatusInfo(order_hash="0xorder", status="executed"),
        ]
    )
    sdk.get_ready_to_accept_secret_fills = AsyncMock(
        return_value=ReadyToAcceptSecretFills(fills=[ReadyFill(idx=0)])
    )
    sdk.submit_secret = AsyncMock()
    return sdk
