"""Cross-chain swap execution.

One flow for both directions:

1. Fetch a quote and pick the auction preset.
2. Generate one secret per fill the preset allows and build the hash lock.
3. Build the order; EVM sources are signed and submitted, Solana sources are
   announced and their escrow is created with a maker-signed transaction.
4. Monitor the order and reveal secrets fill by fill.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fusionswap.chains import LIMIT_ORDER_PROTOCOL, NATIVE_TOKEN, is_solana
from fusionswap.sdk.client import FusionPlusSDK
from fusionswap.sdk.connectors import SolanaTransactionSender, Web3ProviderConnector
from fusionswap.sdk.errors import FusionSDKError
from fusionswap.sdk.models import PreparedOrder, Preset, Quote, QuoteParams
from fusionswap.sdk.secret_manager import SecretData, create_secret_data
from fusionswap.swap.monitor import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
    MonitorResult,
    SecretRevealCoordinator,
    SwapError,
)

logger = logging.getLogger(__name__)


class OrderCreationError(SwapError):
    """Building, signing or submitting an order failed after secrets were generated.

    Carries everything needed to inspect or retry the order by hand.
    """

    def __init__(
        self,
        message: str,
        quote: Quote,
        preset: Preset,
        secret_data: SecretData,
        order_hash: Optional[str] = None,
    ):
        self.quote = quote
        self.preset = preset
        self.secret_data = secret_data
        self.order_hash = order_hash
        super().__init__(message)

    def order_details(self) -> dict:
        return {
            "orderHash": self.order_hash,
            "preset": self.preset.name,
            "secretsCount": self.preset.secrets_count,
            "secrets": self.secret_data.secrets,
            "hashLock": str(self.secret_data.hash_lock),
            "secretHashes": self.secret_data.secret_hashes,
        }


@dataclass
class SubmittedOrder:
    """An order accepted by the relayer, plus the secrets that unlock it."""

    order: PreparedOrder
    secret_data: SecretData
    preset: Preset
    submission: Optional[dict] = None
    tx_signature: Optional[str] = None

    @property
    def order_hash(self) -> str:
        return self.order.order_hash


@dataclass
class SwapResult:
    """Final outcome of a swap."""

    quote: Quote
    submitted: SubmittedOrder
    monitor: MonitorResult

    @property
    def order_hash(self) -> str:
        return self.submitted.order_hash

    @property
    def secrets(self) -> list[str]:
        return self.submitted.secret_data.secrets

    @property
    def tx_signature(self) -> Optional[str]:
        return self.submitted.tx_signature

    @property
    def final_status(self) -> str:
        return self.monitor.status

    @property
    def completed(self) -> bool:
        return self.monitor.completed


class CrossChainSwapper:
    """Runs quote -> order -> secret reveal against the Fusion+ relayer."""

    def __init__(
        self,
        sdk: FusionPlusSDK,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
        solana_sender: Optional[SolanaTransactionSender] = None,
        web3_provider: Optional[Web3ProviderConnector] = None,
    ):
        self.sdk = sdk
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.solana_sender = solana_sender
        self.web3_provider = web3_provider

    async def get_quote(self, params: QuoteParams) -> Quote:
        logger.info("Fetching quote...")
        quote = await self.sdk.get_quote(params)
        logger.info("Quote received successfully")
        return quote

    def prepare_secrets(self, quote: Quote, preset: Optional[str] = None) -> tuple[Preset, SecretData]:
        """Pick the preset and generate its secrets and hash lock."""
        selected = quote.get_preset(preset)
        logger.info(f"Using preset: {selected.name}")
        logger.info(f"Secrets count: {selected.secrets_count}")

        secret_data = create_secret_data(selected.secrets_count)
        logger.info(f"Generated {selected.secrets_count} secret(s) for {selected.name} preset")
        return selected, secret_data

    async def check_allowance(self, quote: Quote) -> Optional[int]:
        """Warn if the maker has not approved the limit order protocol.

        Returns the allowance, or None when it was not checked.
        """
        token = quote.params.src_token_address
        if self.web3_provider is None or token.lower() == NATIVE_TOKEN.lower():
            return None
        try:
            allowance = await self.web3_provider.get_allowance(
                token, quote.params.wallet_address, LIMIT_ORDER_PROTOCOL
            )
        except FusionSDKError as e:
            logger.warning(f"Could not check token allowance: {e}")
            return None

        if allowance < int(quote.params.amount):
            logger.warning(
                f"Allowance {allowance} for {token} is below swap amount {quote.params.amount}; "
                f"approve {LIMIT_ORDER_PROTOCOL} before resolvers can fill the order"
            )
        return allowance

    async def create_and_submit_evm_order(
        self,
        quote: Quote,
        receiver: str,
        preset: Optional[str] = None,
    ) -> SubmittedOrder:
        """Build, sign and submit an order whose source is an EVM chain."""
        logger.info("Creating order...")
        selected, secret_data = self.prepare_secrets(quote, preset)
        await self.check_allowance(quote)

        try:
            order = await self.sdk.create_order(
                quote,
                wallet_address=quote.params.wallet_address,
                hash_lock=secret_data.hash_lock,
                secret_hashes=secret_data.secret_hashes,
                preset=selected.name,
                receiver=receiver,
            )
            logger.info("Submitting order to relayer...")
            submission = await self.sdk.submit_order(
                quote.src_chain_id,
                order,
                quote.quote_id,
                secret_data.secret_hashes,
            )
        except FusionSDKError as e:
            raise OrderCreationError(
                f"Order creation failed: {e}", quote, selected, secret_data
            ) from e

        logger.info(f"Order submitted with hash: {order.order_hash}")
        return SubmittedOrder(order=order, secret_data=secret_data, preset=selected, submission=submission)

    async def create_and_announce_solana_order(
        self,
        quote: Quote,
        receiver: str,
        preset: Optional[str] = None,
    ) -> SubmittedOrder:
        """Announce a Solana-source order and create its escrow on-chain."""
        if self.solana_sender is None:
            raise SwapError("A Solana transaction sender is required for Solana-source orders")

        logger.info("Creating order...")
        selected, secret_data = self.prepare_secrets(quote, preset)

        try:
            order = await self.sdk.build_order(
                quote,
                hash_lock=secret_data.hash_lock,
                secret_hashes=secret_data.secret_hashes,
                preset=selected.name,
                receiver=receiver,
            )
            if order.instruction is None:
                raise SwapError("Relayer did not return an escrow instruction for the Solana order")

            logger.info("Announcing order to relayer...")
            order_hash = await self.sdk.announce_order(order, quote.quote_id, secret_data.secret_hashes)
        except FusionSDKError as e:
            raise OrderCreationError(
                f"Order creation failed: {e}", quote, selected, secret_data
            ) from e
        logger.info(f"Order announced with hash: {order_hash}")

        logger.info("Creating Solana transaction...")
        try:
            signature = await self.solana_sender.send_instruction(order.instruction)
        except Exception as e:
            # Order is live on the relayer but has no escrow
            raise OrderCreationError(
                f"Escrow transaction failed for announced order {order_hash}: {type(e).__name__}: {e}",
                quote,
                selected,
                secret_data,
                order_hash=order_hash,
            ) from e

        return SubmittedOrder(order=order, secret_data=secret_data, preset=selected, tx_signature=signature)

    async def submit(self, quote: Quote, receiver: str, preset: Optional[str] = None) -> SubmittedOrder:
        if is_solana(quote.src_chain_id):
            return await self.create_and_announce_solana_order(quote, receiver, preset)
        return await self.create_and_submit_evm_order(quote, receiver, preset)

    async def monitor(
        self,
        order_hash: str,
        secrets: list[str],
        initial_delay: float = 0.0,
    ) -> MonitorResult:
        coordinator = SecretRevealCoordinator(
            self.sdk,
            poll_interval=self.poll_interval,
            timeout=self.timeout,
            initial_delay=initial_delay,
        )
        return await coordinator.run(order_hash, secrets)

    async def swap(
        self,
        params: QuoteParams,
        receiver: str,
        preset: Optional[str] = None,
        initial_delay: float = 0.0,
    ) -> SwapResult:
        """Execute a full swap and wait for it to finish.

        Raises:
            OrderCreationError: order could not be built or submitted
            SwapTimeoutError: order was not terminal before the timeout
        """
        quote = await self.get_quote(params)
        submitted = await self.submit(quote, receiver, preset)
        result = await self.monitor(
            submitted.order_hash,
            submitted.secret_data.secrets,
            initial_delay=initial_delay,
        )
        return SwapResult(quote=quote, submitted=submitted, monitor=result)
