"""Tests for the EVM JSON-RPC and Solana connectors."""

import json

import httpx
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from conftest import MAKER
from fusionswap.chains import LIMIT_ORDER_PROTOCOL, USDT_EVM
from fusionswap.sdk.connectors import SolanaTransactionSender, Web3ProviderConnector
from fusionswap.sdk.errors import FusionSDKError
from fusionswap.sdk.models import SolanaInstruction

RPC_URL = "https://node.test/eth"


def make_provider(handler, api_key=None) -> tuple[Web3ProviderConnector, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    provider = Web3ProviderConnector(RPC_URL, api_key=api_key, transport=httpx.MockTransport(record))
    return provider, requests


class TestWeb3ProviderConnector:
    """Tests for the allowance call over JSON-RPC."""

    @pytest.mark.asyncio
    async def test_allowance_calldata_and_result(self):
        provider, requests = make_provider(
            lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x" + hex(5_000_000)[2:].zfill(64)}),
            api_key="test-api-key",
        )

        allowance = await provider.get_allowance(USDT_EVM, MAKER, LIMIT_ORDER_PROTOCOL)

        assert allowance == 5_000_000
        body = json.loads(requests[0].content)
        assert body["method"] == "eth_call"
        call, block = body["params"]
        assert block == "latest"
        assert call["to"] == USDT_EVM
        data = call["data"]
        assert data.startswith("0xdd62ed3e")
        assert len(data) == 10 + 64 + 64
        assert data[10:74] == MAKER[2:].lower().zfill(64)
        assert data[74:] == LIMIT_ORDER_PROTOCOL[2:].lower().zfill(64)
        assert requests[0].headers["Authorization"] == "Bearer test-api-key"

    @pytest.mark.asyncio
    async def test_public_node_has_no_auth(self):
        provider, requests = make_provider(
            lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x01"})
        )

        assert await provider.get_allowance(USDT_EVM, MAKER, LIMIT_ORDER_PROTOCOL) == 1
        assert "Authorization" not in requests[0].headers

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", ["0x", ""])
    async def test_empty_result_is_zero(self, result):
        provider, _ = make_provider(
            lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})
        )

        assert await provider.get_allowance(USDT_EVM, MAKER, LIMIT_ORDER_PROTOCOL) == 0

    @pytest.mark.asyncio
    async def test_rpc_error(self):
        provider, _ = make_provider(
            lambda request: httpx.Response(
                200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "execution reverted"}}
            )
        )

        with pytest.raises(FusionSDKError, match="execution reverted"):
            await provider.get_allowance(USDT_EVM, MAKER, LIMIT_ORDER_PROTOCOL)

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        provider, _ = make_provider(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(FusionSDKError, match="HTTP 503"):
            await provider.eth_call({"to": USDT_EVM, "data": "0x"})

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        provider, _ = make_provider(lambda request: httpx.Response(200, text="<html>Bad Gateway</html>"))

        with pytest.raises(FusionSDKError, match="invalid JSON"):
            await provider.get_allowance(USDT_EVM, MAKER, LIMIT_ORDER_PROTOCOL)

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider, _ = make_provider(fail)

        with pytest.raises(FusionSDKError, match="ConnectError"):
            await provider.eth_call({"to": USDT_EVM, "data": "0x"})


class TestSolanaTransactionSender:
    """Tests for signing relayer instructions."""

    def test_build_transaction(self):
        maker = Keypair()
        escrow = Pubkey.new_unique()
        mint = Pubkey.new_unique()
        program = Pubkey.new_unique()
        instruction = SolanaInstruction.from_dict(
            {
                "programId": str(program),
                "accounts": [
                    {"pubkey": str(maker.pubkey()), "isSigner": True, "isWritable": True},
                    {"pubkey": str(escrow), "isSigner": False, "isWritable": True},
                    {"pubkey": str(mint), "isSigner": False, "isWritable": False},
                ],
                "data": "AQID",
            }
        )
        blockhash = Hash.new_unique()
        sender = SolanaTransactionSender("https://solana.test", str(maker))

        tx = sender.build_transaction(instruction, blockhash)

        message = tx.message
        keys = message.account_keys
        assert keys[0] == maker.pubkey()
        assert set(keys) == {maker.pubkey(), escrow, mint, program}
        assert message.header.num_required_signatures == 1
        assert message.header.num_readonly_signed_accounts == 0
        assert message.header.num_readonly_unsigned_accounts == 2
        assert message.recent_blockhash == blockhash

        assert len(message.instructions) == 1
        compiled = message.instructions[0]
        assert keys[compiled.program_id_index] == program
        assert [keys[i] for i in compiled.accounts] == [maker.pubkey(), escrow, mint]
        assert compiled.data == b"\x01\x02\x03"

        assert len(tx.signatures) == 1
        assert tx.signatures[0].verify(maker.pubkey(), bytes(message))
        tx.verify()

    def test_address_from_secret_key(self):
        maker = Keypair()

        sender = SolanaTransactionSender("https://solana.test", str(maker))

        assert sender.address == str(maker.pubkey())
