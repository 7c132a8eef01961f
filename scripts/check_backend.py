#!/usr/bin/env python3
"""Smoke check a running fusionswap backend.

Read-only: hits health, API key, Fusion+ health, one quote and the route
list. Never executes a swap.

Usage:
    python scripts/check_backend.py [--base-url http://localhost:3001] [--wallet 0x...]
"""

import argparse
import asyncio
import os
import sys

import httpx
from dotenv import load_dotenv

# Colors for output
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
RESET = "\033[0m"
CHECK = "✓"
CROSS = "✗"
WARN = "⚠"

NATIVE_TOKEN = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
POLYGON_USDC = "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"


def print_status(name: str, success: bool, message: str = ""):
    """Print status with color."""
    if success:
        print(f"  {GREEN}{CHECK}{RESET} {name}" + (f" - {message}" if message else ""))
    else:
        print(f"  {RED}{CROSS}{RESET} {name}" + (f" - {message}" if message else ""))


def print_warning(name: str, message: str = ""):
    """Print warning."""
    print(f"  {YELLOW}{WARN}{RESET} {name}" + (f" - {message}" if message else ""))


async def run_check(name: str, check) -> bool:
    """Run one check; network failures and bad bodies count as failed checks."""
    try:
        return await check
    except httpx.HTTPError as e:
        print_status(name, False, f"{type(e).__name__}: {e}")
    except ValueError as e:
        print_status(name, False, f"invalid response: {e}")
    return False


async def check_get(client: httpx.AsyncClient, name: str, path: str) -> bool:
    response = await client.get(path)
    ok = response.status_code == 200
    print_status(name, ok, response.text[:120])
    return ok


async def check_quote(client: httpx.AsyncClient, wallet: str) -> bool:
    """Base ETH -> Polygon USDC, ~0.000125 ETH."""
    name = "Quote Base ETH -> Polygon USDC"
    response = await client.post(
        "/api/fusion/quote",
        json={
            "srcChainId": 8453,
            "dstChainId": 137,
            "srcTokenAddress": NATIVE_TOKEN,
            "dstTokenAddress": POLYGON_USDC,
            "amount": "125000000000000",
            "walletAddress": wallet,
        },
    )
    try:
        data = response.json()
    except ValueError:
        print_status(name, False, f"HTTP {response.status_code}: {response.text[:120]}")
        return False
    if not isinstance(data, dict):
        print_status(name, False, response.text[:120])
        return False

    ok = response.status_code == 200 and data.get("success") is True
    if ok:
        print_status(name, True, f"estimated output {data.get('estimatedOutput')}")
    else:
        print_status(name, False, data.get("error", response.text[:120]))
    return ok


async def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Fusion+ backend smoke check")
    parser.add_argument("--base-url", type=str, default="http://localhost:3001", help="Backend URL")
    parser.add_argument(
        "--wallet",
        type=str,
        default=os.getenv("TEST_MAKER_ADDRESS"),
        help="Wallet address for the quote (default: TEST_MAKER_ADDRESS)",
    )
    args = parser.parse_args()

    print(f"Testing 1inch Fusion+ backend at {args.base_url}...")

    async with httpx.AsyncClient(base_url=args.base_url, timeout=30.0) as client:
        print("\n1. Server")
        try:
            results = [await check_get(client, "Server is running", "/health")]
        except httpx.HTTPError as e:
            print_status("Server is running", False, f"{e}. Start it with: fusionswap-api")
            return 1

        print("\n2. Configuration")
        results.append(await run_check("API key", check_get(client, "API key", "/test-api")))
        results.append(
            await run_check("Fusion service", check_get(client, "Fusion service", "/api/fusion/health"))
        )

        print("\n3. Quotes")
        if args.wallet:
            results.append(await run_check("Quote", check_quote(client, args.wallet)))
        else:
            print_warning("Quote skipped", "set TEST_MAKER_ADDRESS or pass --wallet")

        print("\n4. Routes")
        results.append(
            await run_check(
                "Supported routes", check_get(client, "Supported routes", "/api/fusion/supported-routes")
            )
        )

    passed = sum(results)
    print(f"\n{passed}/{len(results)} checks passed")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
