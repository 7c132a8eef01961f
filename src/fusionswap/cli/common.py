"""Shared plumbing for the swap scripts."""

import argparse
import logging
from typing import Optional

from fusionswap.chains import USDT_DECIMALS
from fusionswap.config import Settings
from fusionswap.sdk.errors import FusionSDKError
from fusionswap.sdk.models import Quote, QuoteParams
from fusionswap.swap.executor import CrossChainSwapper, OrderCreationError
from fusionswap.swap.monitor import SwapError, SwapTimeoutError
from fusionswap.utils.units import format_units

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_EXECUTED = 2


def build_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--amount", type=str, default="5", help="USDT amount to swap (default: 5)")
    parser.add_argument("--preset", type=str, default=None, help="Auction preset (default: recommended)")
    parser.add_argument("--poll-interval", type=float, default=None, help="Seconds between status polls")
    parser.add_argument("--timeout", type=float, default=None, help="Give up monitoring after N seconds")
    return parser


def check_env(settings: Settings, *fields: str) -> bool:
    """Log every missing variable; return True when all are set."""
    missing = settings.missing(*fields)
    for name in missing:
        logger.error(f"Missing required environment variable: {name}")
    return not missing


def log_quote(quote: Quote) -> None:
    logger.info(f"Source amount: {format_units(quote.src_token_amount, USDT_DECIMALS)} USDT")
    logger.info(f"Destination amount: ~{format_units(quote.dst_token_amount, USDT_DECIMALS)} USDT")


async def run_swap(
    swapper: CrossChainSwapper,
    params: QuoteParams,
    receiver: str,
    preset: Optional[str] = None,
    initial_delay: float = 0.0,
) -> int:
    """Run one swap end to end and map the outcome to an exit code."""
    try:
        quote = await swapper.get_quote(params)
        log_quote(quote)

        submitted = await swapper.submit(quote, receiver, preset)
        logger.info(f"Order hash: {submitted.order_hash}")
        if submitted.tx_signature:
            logger.info(f"Escrow transaction: {submitted.tx_signature}")

        logger.info("Starting to monitor order status...")
        result = await swapper.monitor(
            submitted.order_hash,
            submitted.secret_data.secrets,
            initial_delay=initial_delay,
        )
    except OrderCreationError as e:
        logger.error(f"Swap failed: {e}")
        if e.order_hash:
            logger.error(f"Order hash: {e.order_hash}")
        logger.error(f"Hash lock: {e.secret_data.hash_lock}")
        return EXIT_ERROR
    except SwapTimeoutError as e:
        logger.error(str(e))
        logger.error("Timeout reached. Check order status manually.")
        return EXIT_ERROR
    except (FusionSDKError, SwapError, ValueError) as e:
        logger.error(f"Swap failed: {e}")
        return EXIT_ERROR

    if result.completed:
        logger.info("Swap completed successfully!")
        return EXIT_OK

    logger.warning(f"Order {result.order_hash} finished with status '{result.status}'")
    return EXIT_NOT_EXECUTED
