"""Fusion+ relayer client.

Async gateway to the 1inch Fusion+ REST API (quoter, relayer and orders
services). Escrow contracts, resolvers and the relayer itself stay remote;
this client only requests quotes, asks the quoter to build orders, submits
or announces them, and reveals secrets.

API docs: https://portal.1inch.dev/documentation/apis/cross-chain/introduction
"""

import logging
from typing import Any, Optional

import httpx

from fusionswap.sdk.connectors import PrivateKeyProviderConnector
from fusionswap.sdk.errors import FusionAPIError, SignerNotConfiguredError, WalletMismatchError
from fusionswap.sdk.hashlock import HashLock
from fusionswap.sdk.models import (
    OrderStatusInfo,
    PreparedOrder,
    Quote,
    QuoteParams,
    ReadyToAcceptSecretFills,
)

logger = logging.getLogger(__name__)

FUSION_PLUS_API = "https://api.1inch.dev/fusion-plus"

QUOTER_VERSION = "v1.0"
RELAYER_VERSION = "v1.0"
ORDERS_VERSION = "v1.0"


class FusionPlusSDK:
    """Client for the Fusion+ cross-chain API.

    Read-only calls (quotes, status, active orders) need only ``auth_key``.
    ``submit_order`` additionally needs ``blockchain_provider`` to sign the
    order's EIP-712 payload.
    """

    def __init__(
        self,
        url: str = FUSION_PLUS_API,
        auth_key: Optional[str] = None,
        blockchain_provider: Optional[PrivateKeyProviderConnector] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            url: Fusion+ base URL
            auth_key: 1inch Developer Portal API key
            blockchain_provider: EVM signer for order submission
            timeout: HTTP timeout in seconds
            transport: Custom httpx transport (mocking, proxies)
        """
        self.base_url = url.rstrip("/")
        self.auth_key = auth_key
        self.blockchain_provider = blockchain_provider
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self) -> dict:
        """Get API headers with authorization."""
        headers = {"Accept": "application/json"}
        if self.auth_key:
            headers["Authorization"] = f"Bearer {self.auth_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[Any] = None,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method, url, headers=self._get_headers(), params=params, json=json
                )
        except httpx.HTTPError as e:
            raise FusionAPIError(f"{method} {path} failed: {type(e).__name__}: {e}") from e

        if response.status_code >= 400:
            payload = _safe_json(response)
            message = None
            if isinstance(payload, dict):
                message = payload.get("description") or payload.get("message")
            raise FusionAPIError(
                f"Fusion+ API error {response.status_code} on {path}: {message or response.text}",
                status_code=response.status_code,
                payload=payload,
            )

        return _safe_json(response)

    # ------------------------------------------------------------------
    # Quoter
    # ------------------------------------------------------------------

    async def get_quote(self, params: QuoteParams) -> Quote:
        """Get a cross-chain quote with auction presets."""
        data = await self._request(
            "GET", f"quoter/{QUOTER_VERSION}/quote/receive", params=params.to_query()
        )
        quote = Quote.from_response(params, data)
        logger.debug(
            f"Quote {quote.quote_id}: {quote.src_token_amount} -> {quote.dst_token_amount} "
            f"(presets: {', '.join(quote.presets)}, recommended: {quote.recommended_preset})"
        )
        return quote

    async def build_order(
        self,
        quote: Quote,
        hash_lock: HashLock,
        secret_hashes: list[str],
        preset: Optional[str] = None,
        receiver: Optional[str] = None,
    ) -> PreparedOrder:
        """Ask the quoter to build an order locked by ``hash_lock``.

        The response carries EIP-712 typed data for EVM sources, or the
        escrow-factory instruction for Solana sources.
        """
        preset_name = quote.get_preset(preset).name
        query = quote.params.to_query()
        query.pop("enableEstimate", None)
        query["preset"] = preset_name
        if receiver:
            query["receiver"] = receiver

        data = await self._request(
            "POST",
            f"quoter/{QUOTER_VERSION}/quote/build",
            params=query,
            json={
                "quote": quote.raw,
                "secretsHashList": secret_hashes,
                "hashLock": str(hash_lock),
            },
        )
        return PreparedOrder.from_build_response(
            data, quote=quote, hash_lock=hash_lock, secret_hashes=secret_hashes, preset=preset_name
        )

    async def create_order(
        self,
        quote: Quote,
        wallet_address: str,
        hash_lock: HashLock,
        secret_hashes: list[str],
        preset: Optional[str] = None,
        receiver: Optional[str] = None,
    ) -> PreparedOrder:
        """Build an order for ``wallet_address`` (maker) ready for signing."""
        if wallet_address.lower() != quote.params.wallet_address.lower():
            raise WalletMismatchError(
                f"Quote was requested for {quote.params.wallet_address}, not {wallet_address}"
            )
        return await self.build_order(
            quote, hash_lock=hash_lock, secret_hashes=secret_hashes, preset=preset, receiver=receiver
        )

    # ------------------------------------------------------------------
    # Relayer
    # ------------------------------------------------------------------

    async def submit_order(
        self,
        src_chain_id: int,
        order: PreparedOrder,
        quote_id: Optional[str],
        secret_hashes: list[str],
    ) -> dict:
        """Sign an EVM-source order and submit it to the relayer."""
        if self.blockchain_provider is None:
            raise SignerNotConfiguredError("blockchain_provider is required to submit orders")
        if not order.typed_data:
            raise FusionAPIError("Order has no typed data to sign", payload=order.raw)

        signature = self.blockchain_provider.sign_typed_data(order.typed_data)
        body = {
            "order": order.order,
            "srcChainId": int(src_chain_id),
            "signature": signature,
            "extension": order.extension,
            "quoteId": quote_id,
        }
        # Single-fill orders are identified by the hash lock alone
        if len(secret_hashes) > 1:
            body["secretHashes"] = secret_hashes

        result = await self._request("POST", f"relayer/{RELAYER_VERSION}/submit", json=body)
        logger.debug(f"Relayer accepted order {order.order_hash}")

        info = {"orderHash": order.order_hash, "signature": signature, "quoteId": quote_id}
        if isinstance(result, dict):
            info.update(result)
        return info

    async def announce_order(
        self,
        order: PreparedOrder,
        quote_id: Optional[str],
        secret_hashes: list[str],
    ) -> str:
        """Announce a Solana-source order; its escrow is created on-chain by the maker."""
        body = {
            "order": order.order,
            "srcChainId": order.src_chain_id,
            "extension": order.extension,
            "quoteId": quote_id,
        }
        if len(secret_hashes) > 1:
            body["secretHashes"] = secret_hashes

        await self._request("POST", f"relayer/{RELAYER_VERSION}/submit", json=body)
        return order.order_hash

    async def submit_secret(self, order_hash: str, secret: str) -> None:
        """Reveal the secret for one fill of ``order_hash``."""
        await self._request(
            "POST",
            f"relayer/{RELAYER_VERSION}/submit/secret",
            json={"secret": secret, "orderHash": order_hash},
        )

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    async def get_order_status(self, order_hash: str) -> OrderStatusInfo:
        data = await self._request("GET", f"orders/{ORDERS_VERSION}/order/status/{order_hash}")
        return OrderStatusInfo.from_response(order_hash, data or {})

    async def get_ready_to_accept_secret_fills(self, order_hash: str) -> ReadyToAcceptSecretFills:
        data = await self._request(
            "GET", f"orders/{ORDERS_VERSION}/order/ready-to-accept-secret-fills/{order_hash}"
        )
        return ReadyToAcceptSecretFills.from_response(data)

    async def get_active_orders(self, page: int = 1, limit: int = 10) -> dict:
        return await self._request(
            "GET", f"orders/{ORDERS_VERSION}/order/active", params={"page": page, "limit": limit}
        )


def _safe_json(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {"message": response.text}
