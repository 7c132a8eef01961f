"""Swap Solana USDT to Ethereum USDT.

The relayer builds the escrow instruction; this script announces the order,
signs and sends the instruction with SOLANA_PRIVATE_KEY, then reveals secrets
as fills become ready.

Required environment: SOLANA_PRIVATE_KEY, SOLANA_MAKER_ADDRESS,
ETH_RECEIVER_ADDRESS, DEV_PORTAL_API_KEY.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from fusionswap.chains import (
    USDT_DECIMALS,
    USDT_EVM,
    USDT_SOLANA,
    EvmAddress,
    NetworkEnum,
    SolanaAddress,
)
from fusionswap.cli.common import EXIT_ERROR, build_parser, check_env, run_swap
from fusionswap.config import Settings
from fusionswap.sdk.client import FusionPlusSDK
from fusionswap.sdk.connectors import SolanaTransactionSender
from fusionswap.sdk.models import QuoteParams
from fusionswap.swap.executor import CrossChainSwapper
from fusionswap.utils.log import configure_logging
from fusionswap.utils.units import parse_units

logger = logging.getLogger(__name__)

REQUIRED = ("solana_private_key", "solana_maker_address", "eth_receiver_address", "inch_api_key")


def create_swapper(settings: Settings, poll_interval: float, timeout: float) -> CrossChainSwapper:
    sender = SolanaTransactionSender(settings.sol_rpc_url, settings.solana_private_key)
    if sender.address != settings.solana_maker_address:
        logger.warning(
            f"SOLANA_PRIVATE_KEY belongs to {sender.address}, not SOLANA_MAKER_ADDRESS {settings.solana_maker_address}"
        )

    sdk = FusionPlusSDK(
        url=settings.fusion_api_url,
        auth_key=settings.inch_api_key,
        timeout=settings.http_timeout,
    )
    return CrossChainSwapper(
        sdk,
        poll_interval=poll_interval,
        timeout=timeout,
        solana_sender=sender,
    )


async def run(argv=None) -> int:
    args = build_parser("Swap Solana USDT to Ethereum USDT via 1inch Fusion+").parse_args(argv)

    settings = Settings()
    configure_logging(settings.debug)

    if not check_env(settings, *REQUIRED):
        return EXIT_ERROR

    try:
        maker = SolanaAddress(settings.solana_maker_address)
        receiver = EvmAddress(settings.eth_receiver_address)
        amount = parse_units(args.amount, USDT_DECIMALS)
    except ValueError as e:
        logger.error(str(e))
        return EXIT_ERROR

    poll_interval = args.poll_interval or settings.poll_interval
    try:
        swapper = create_swapper(
            settings,
            poll_interval=poll_interval,
            timeout=args.timeout or settings.monitor_timeout,
        )
    except ValueError as e:
        logger.error(f"Invalid SOLANA_PRIVATE_KEY: {e}")
        return EXIT_ERROR

    params = QuoteParams(
        src_chain_id=NetworkEnum.SOLANA,
        dst_chain_id=NetworkEnum.ETHEREUM,
        src_token_address=USDT_SOLANA,
        dst_token_address=USDT_EVM,
        amount=str(amount),
        wallet_address=str(maker),
    )
    # Give the escrow transaction time to land before the first poll
    return await run_swap(
        swapper,
        params,
        str(receiver),
        preset=args.preset,
        initial_delay=poll_interval,
    )


def main():
    load_dotenv()
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
