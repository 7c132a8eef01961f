"""Fusion+ service backing the HTTP API.

Quotes and order lookups use a read-only SDK client. Swap execution signs
with the backend's configured EVM key (TEST_PRIVATE_KEY) and blocks until the
order is terminal or the monitor times out.
"""

import logging
from typing import Optional

from fusionswap.chains import (
    SUPPORTED_CHAINS,
    SUPPORTED_ROUTES,
    WORKING_TOKENS,
    is_solana,
    parse_address,
)
from fusionswap.config import ConfigurationError, Settings, get_settings
from fusionswap.sdk.client import FusionPlusSDK
from fusionswap.sdk.connectors import (
    PrivateKeyProviderConnector,
    SolanaTransactionSender,
    Web3ProviderConnector,
)
from fusionswap.sdk.errors import SignerNotConfiguredError
from fusionswap.sdk.models import Quote, QuoteParams
from fusionswap.swap.executor import CrossChainSwapper, OrderCreationError
from fusionswap.web.contracts.fusion import (
    QuoteRequest,
    QuoteResponse,
    SwapExecuteRequest,
    SwapExecuteResponse,
)

logger = logging.getLogger(__name__)


class FusionServiceError(Exception):
    """Raised when a Fusion+ operation fails; the message is shown to clients."""
    pass


class FusionService:
    """Service for cross-chain quotes, swaps and order lookups."""

    def __init__(self, settings: Optional[Settings] = None, sdk: Optional[FusionPlusSDK] = None):
        self.settings = settings or get_settings()
        if not self.settings.inch_api_key:
            raise ConfigurationError(["INCH_API_KEY"])

        self.sdk = sdk or FusionPlusSDK(
            url=self.settings.fusion_api_url,
            auth_key=self.settings.inch_api_key,
            timeout=self.settings.http_timeout,
        )
        self._sdk_with_signer: Optional[FusionPlusSDK] = None

    def get_sdk_with_signer(self) -> FusionPlusSDK:
        """SDK client able to sign orders, created on first use."""
        if self._sdk_with_signer is not None:
            return self._sdk_with_signer

        if not self.settings.test_private_key or not self.settings.inch_api_key:
            raise SignerNotConfiguredError(
                "TEST_PRIVATE_KEY and INCH_API_KEY required for order submission"
            )

        connector = PrivateKeyProviderConnector(
            self.settings.test_private_key,
            Web3ProviderConnector(self.settings.eth_rpc_url),
        )
        self._sdk_with_signer = FusionPlusSDK(
            url=self.settings.fusion_api_url,
            auth_key=self.settings.inch_api_key,
            blockchain_provider=connector,
            timeout=self.settings.http_timeout,
        )
        return self._sdk_with_signer

    def create_swapper(self, src_chain_id: int) -> CrossChainSwapper:
        sdk = self.get_sdk_with_signer()

        solana_sender = None
        web3_provider = None
        if is_solana(src_chain_id):
            if self.settings.solana_private_key:
                solana_sender = SolanaTransactionSender(
                    self.settings.sol_rpc_url, self.settings.solana_private_key
                )
        else:
            web3_provider = Web3ProviderConnector(
                self.settings.web3_node_for(src_chain_id),
                api_key=self.settings.inch_api_key,
            )

        return CrossChainSwapper(
            sdk,
            poll_interval=self.settings.poll_interval,
            timeout=self.settings.monitor_timeout,
            solana_sender=solana_sender,
            web3_provider=web3_provider,
        )

    # ------------------------------------------------------------------
    # Static metadata
    # ------------------------------------------------------------------

    def get_supported_chains(self) -> dict:
        return {int(chain_id): info for chain_id, info in SUPPORTED_CHAINS.items()}

    def get_working_tokens(self) -> dict:
        return {int(chain_id): tokens for chain_id, tokens in WORKING_TOKENS.items()}

    def get_supported_routes(self) -> list[dict]:
        return [route.to_dict() for route in SUPPORTED_ROUTES]

    # ------------------------------------------------------------------
    # Relayer operations
    # ------------------------------------------------------------------

    @staticmethod
    def _to_params(request: QuoteRequest) -> QuoteParams:
        return QuoteParams(
            src_chain_id=request.src_chain_id,
            dst_chain_id=request.dst_chain_id,
            src_token_address=request.src_token_address,
            dst_token_address=request.dst_token_address,
            amount=request.amount,
            wallet_address=request.wallet_address,
        )

    @staticmethod
    def _quote_response(quote: Quote) -> QuoteResponse:
        return QuoteResponse(
            success=True,
            quote=quote.to_dict(),
            estimated_output=quote.dst_token_amount or "0",
        )

    async def get_quote(self, request: QuoteRequest) -> QuoteResponse:
        """Get a quote for a cross-chain swap."""
        try:
            quote = await self.sdk.get_quote(self._to_params(request))
        except Exception as e:
            logger.error(f"Failed to get quote: {e}")
            raise FusionServiceError(f"Quote failed: {e}") from e
        return self._quote_response(quote)

    async def execute_swap(self, request: SwapExecuteRequest) -> SwapExecuteResponse:
        """Run a complete swap: quote, secrets, order, submission, secret reveal.

        If the order cannot be built or submitted, the response carries the
        generated secrets and hash lock so the order can be handled manually.
        """
        logger.info(
            f"Executing swap: Chain {request.src_chain_id} -> Chain {request.dst_chain_id}, "
            f"Amount: {request.amount}"
        )
        try:
            receiver = str(parse_address(request.dst_chain_id, request.receiver_address))
        except ValueError as e:
            raise FusionServiceError(f"Invalid receiverAddress for chain {request.dst_chain_id}: {e}") from e

        try:
            swapper = self.create_swapper(request.src_chain_id)
            signer = swapper.sdk.blockchain_provider
            if signer is not None and signer.address.lower() != request.wallet_address.lower():
                logger.warning(
                    f"Backend signer {signer.address} differs from walletAddress {request.wallet_address}"
                )

            quote = await swapper.get_quote(self._to_params(request))

            try:
                submitted = await swapper.submit(quote, receiver, request.preset)
            except OrderCreationError as e:
                logger.error(f"SDK order creation failed: {e}")
                return SwapExecuteResponse(
                    success=False,
                    order_hash=e.order_hash,
                    error=str(e),
                    quote=self._quote_response(quote),
                    order_details=e.order_details(),
                    message="Quote successful but order creation failed - check order details for manual processing",
                )

            result = await swapper.monitor(
                submitted.order_hash,
                submitted.secret_data.secrets,
                initial_delay=self.settings.poll_interval if is_solana(quote.src_chain_id) else 0.0,
            )
        except Exception as e:
            logger.error(f"Swap execution failed: {e}")
            raise FusionServiceError(f"Swap failed: {e}") from e

        return SwapExecuteResponse(
            success=result.completed,
            order_hash=submitted.order_hash,
            quote=self._quote_response(quote),
            final_status=result.to_dict(),
            message=(
                "Cross-chain swap executed successfully"
                if result.completed
                else f"Cross-chain swap ended with status '{result.status}'"
            ),
        )

    async def get_order_status(self, order_hash: str) -> dict:
        status = await self.sdk.get_order_status(order_hash)
        return status.raw

    async def get_active_orders(self, page: int = 1, limit: int = 10) -> dict:
        return await self.sdk.get_active_orders(page=page, limit=limit)


_fusion_service: Optional[FusionService] = None


def get_fusion_service() -> FusionService:
    """Shared service instance, created on first request."""
    global _fusion_service
    if _fusion_service is None:
        _fusion_service = FusionService()
    return _fusion_service
