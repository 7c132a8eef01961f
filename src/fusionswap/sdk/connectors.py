"""Blockchain connectors used by the SDK gateway.

- PrivateKeyProviderConnector: signs EIP-712 order data with a local EVM key
- Web3ProviderConnector: read-only JSON-RPC calls (allowance checks)
- SolanaTransactionSender: signs and sends escrow-factory instructions
"""

import base64
import logging
from typing import Optional

import httpx
from eth_account import Account
from web3 import Web3

from fusionswap.sdk.errors import FusionSDKError, SignerNotConfiguredError
from fusionswap.sdk.models import SolanaInstruction

logger = logging.getLogger(__name__)


class Web3ProviderConnector:
    """Minimal JSON-RPC client for an EVM node.

    The 1inch Web3 node requires the developer-portal key as a Bearer token;
    public nodes are called without auth.
    """

    def __init__(
        self,
        rpc_url: str,
        api_key: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rpc_url = rpc_url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _rpc(self, method: str, params: list) -> str:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.rpc_url,
                    headers=self._get_headers(),
                    json={"jsonrpc": "2.0", "method": method, "params": params, "id": 1},
                )
        except httpx.HTTPError as e:
            raise FusionSDKError(f"RPC {method} failed: {type(e).__name__}: {e}") from e
        if response.status_code != 200:
            raise FusionSDKError(f"RPC {method} failed: HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise FusionSDKError(f"RPC {method} returned invalid JSON: {response.text[:200]}") from e
        if "error" in data:
            raise FusionSDKError(f"RPC {method} error: {data['error']}")
        return data.get("result", "0x")

    async def eth_call(self, tx: dict) -> str:
        return await self._rpc("eth_call", [tx, "latest"])

    async def get_allowance(self, token_address: str, owner: str, spender: str) -> int:
        """ERC20 allowance(owner, spender)."""
        data = (
            "0xdd62ed3e"  # allowance(address,address)
            + owner[2:].lower().zfill(64)
            + spender[2:].lower().zfill(64)
        )
        result = await self.eth_call({"to": token_address, "data": data})
        if not result or result == "0x":
            return 0
        return int(result, 16)


class PrivateKeyProviderConnector:
    """EVM signer backed by a raw private key."""

    def __init__(self, private_key: str, web3_provider: Optional[Web3ProviderConnector] = None):
        if not private_key:
            raise SignerNotConfiguredError("EVM private key is required")
        self._account = Account.from_key(private_key)
        self.web3_provider = web3_provider

    @property
    def address(self) -> str:
        return self._account.address

    def sign_typed_data(self, typed_data: dict) -> str:
        """Sign EIP-712 typed data, returning a 0x hex signature."""
        signed = self._account.sign_typed_data(full_message=typed_data)
        return Web3.to_hex(signed.signature)

    async def eth_call(self, tx: dict) -> str:
        if self.web3_provider is None:
            raise SignerNotConfiguredError("No web3 provider configured for eth_call")
        return await self.web3_provider.eth_call(tx)

    def __repr__(self) -> str:
        return f"PrivateKeyProviderConnector(address={self.address})"


class SolanaTransactionSender:
    """Signs relayer-provided instructions with the maker keypair and submits them."""

    def __init__(self, rpc_url: str, secret_key: str):
        from solders.keypair import Keypair

        if not secret_key:
            raise SignerNotConfiguredError("Solana secret key is required")
        self.rpc_url = rpc_url
        self.keypair = Keypair.from_base58_string(secret_key)

    @property
    def address(self) -> str:
        return str(self.keypair.pubkey())

    def build_transaction(self, instruction: SolanaInstruction, recent_blockhash):
        """Build a signed legacy transaction paying fees from the maker."""
        from solders.instruction import AccountMeta, Instruction
        from solders.message import Message
        from solders.pubkey import Pubkey
        from solders.transaction import Transaction

        ix = Instruction(
            Pubkey.from_string(instruction.program_id),
            base64.b64decode(instruction.data),
            [
                AccountMeta(Pubkey.from_string(a.pubkey), a.is_signer, a.is_writable)
                for a in instruction.accounts
            ],
        )
        message = Message.new_with_blockhash([ix], self.keypair.pubkey(), recent_blockhash)
        return Transaction([self.keypair], message, recent_blockhash)

    async def send_instruction(self, instruction: SolanaInstruction) -> str:
        """Send the instruction and return the transaction signature."""
        from solana.rpc.async_api import AsyncClient

        async with AsyncClient(self.rpc_url) as rpc:
            blockhash_resp = await rpc.get_latest_blockhash()
            tx = self.build_transaction(instruction, blockhash_resp.value.blockhash)
            logger.info("Submitting Solana transaction...")
            result = await rpc.send_transaction(tx)
            signature = str(result.value)

        logger.info(f"Transaction submitted with signature: {signature}")
        return signature

    def __repr__(self) -> str:
        return f"SolanaTransactionSender(address={self.address}, rpc={self.rpc_url})"
