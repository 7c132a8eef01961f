"""Swap Ethereum USDT to Solana USDT.

The maker signs the order with PRIVATE_KEY; the relayer hands out fills and
this script reveals one secret per ready fill until the order is final.

Required environment: PRIVATE_KEY, MAKER_ADDRESS, RECEIVER_ADDRESS,
DEV_PORTAL_API_KEY.
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
from fusionswap.sdk.connectors import PrivateKeyProviderConnector, Web3ProviderConnector
from fusionswap.sdk.models import QuoteParams
from fusionswap.swap.executor import CrossChainSwapper
from fusionswap.utils.log import configure_logging
from fusionswap.utils.units import parse_units

logger = logging.getLogger(__name__)

REQUIRED = ("private_key", "maker_address", "receiver_address", "inch_api_key")


def create_swapper(settings: Settings, poll_interval: float, timeout: float) -> CrossChainSwapper:
    web3_provider = Web3ProviderConnector(
        settings.web3_node_for(NetworkEnum.ETHEREUM),
        api_key=settings.inch_api_key,
    )
    signer = PrivateKeyProviderConnector(settings.private_key, web3_provider)
    if signer.address.lower() != settings.maker_address.lower():
        logger.warning(f"PRIVATE_KEY belongs to {signer.address}, not MAKER_ADDRESS {settings.maker_address}")

    sdk = FusionPlusSDK(
        url=settings.fusion_api_url,
        auth_key=settings.inch_api_key,
        blockchain_provider=signer,
        timeout=settings.http_timeout,
    )
    return CrossChainSwapper(
        sdk,
        poll_interval=poll_interval,
        timeout=timeout,
        web3_provider=web3_provider,
    )


async def run(argv=None) -> int:
    args = build_parser("Swap Ethereum USDT to Solana USDT via 1inch Fusion+").parse_args(argv)

    settings = Settings()
    configure_logging(settings.debug)

    if not check_env(settings, *REQUIRED):
        return EXIT_ERROR

    try:
        maker = EvmAddress(settings.maker_address)
        receiver = SolanaAddress(settings.receiver_address)
        amount = parse_units(args.amount, USDT_DECIMALS)
    except ValueError as e:
        logger.error(str(e))
        return EXIT_ERROR

    try:
        swapper = create_swapper(
            settings,
            poll_interval=args.poll_interval or settings.poll_interval,
            timeout=args.timeout or settings.monitor_timeout,
        )
    except ValueError as e:
        logger.error(f"Invalid PRIVATE_KEY: {e}")
        return EXIT_ERROR

    params = QuoteParams(
        src_chain_id=NetworkEnum.ETHEREUM,
        dst_chain_id=NetworkEnum.SOLANA,
        src_token_address=USDT_EVM,
        dst_token_address=USDT_SOLANA,
        amount=str(amount),
        wallet_address=str(maker),
    )
    return await run_swap(swapper, params, str(receiver), preset=args.preset)


def main():
    load_dotenv()
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
