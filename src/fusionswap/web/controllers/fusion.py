"""Fusion+ API endpoints.

Mounted under ``/api/fusion``. Failures are reported as
``{"success": false, "error": "..."}`` with HTTP 500; missing or invalid
parameters yield HTTP 400 (see ``fusionswap.api.app``).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from fusionswap.chains import (
    BASE_TO_POLYGON_ROUTE,
    ETH_TO_SOLANA_ROUTE,
    SUPPORTED_CHAINS,
)
from fusionswap.config import get_settings
from fusionswap.web.contracts.fusion import (
    EthToSolanaSwapRequest,
    QuoteRequest,
    QuoteResponse,
    RouteAmountRequest,
    SwapExecuteRequest,
    SwapExecuteResponse,
)
from fusionswap.web.services.fusion_service import FusionService, get_fusion_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/fusion", tags=["Fusion+"])


def _error(e: Exception, default: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": str(e) or default},
    )


@router.get("/health")
async def fusion_health() -> dict:
    """Report relayer configuration without exposing secrets."""
    settings = get_settings()
    return {
        "success": True,
        "message": "Mainnet Fusion+ API Ready",
        "supportedChains": {int(k): v for k, v in SUPPORTED_CHAINS.items()},
        "env": {
            "hasApiKey": settings.has_api_key,
            "hasPrivateKey": bool(settings.test_private_key),
            "walletAddress": settings.test_maker_address,
        },
    }


@router.get("/chains")
async def get_chains(service: FusionService = Depends(get_fusion_service)):
    try:
        return {"success": True, "data": service.get_supported_chains()}
    except Exception as e:
        return _error(e, "Unknown error")


@router.get("/tokens")
async def get_tokens(service: FusionService = Depends(get_fusion_service)):
    try:
        return {"success": True, "data": service.get_working_tokens()}
    except Exception as e:
        return _error(e, "Unknown error")


@router.post("/quote", response_model=QuoteResponse)
async def get_quote(request: QuoteRequest, service: FusionService = Depends(get_fusion_service)):
    """Get a quote for a cross-chain swap. Read-only."""
    try:
        return await service.get_quote(request)
    except Exception as e:
        return _error(e, "Quote failed")


@router.post("/swap/execute", response_model=SwapExecuteResponse, response_model_exclude_none=True)
async def execute_swap(request: SwapExecuteRequest, service: FusionService = Depends(get_fusion_service)):
    """Execute a complete cross-chain swap with the backend signer.

    Blocks until the order is executed, reaches another terminal status,
    or monitoring times out.
    """
    try:
        return await service.execute_swap(request)
    except Exception as e:
        logger.error(f"Swap execution error: {e}")
        return _error(e, "Swap execution failed")


@router.post("/swap/test-eth-to-solana")
async def swap_eth_to_solana(
    request: EthToSolanaSwapRequest,
    service: FusionService = Depends(get_fusion_service),
):
    """Ethereum USDT -> Solana USDT, the officially documented route."""
    if not request.solana_receiver:
        return _error(
            ValueError("solanaReceiver (Solana wallet address) is required"),
            "solanaReceiver is required",
            status_code=400,
        )

    route = ETH_TO_SOLANA_ROUTE
    try:
        result = await service.execute_swap(
            SwapExecuteRequest(
                src_chain_id=route.src_chain_id,
                dst_chain_id=route.dst_chain_id,
                src_token_address=route.src_token,
                dst_token_address=route.dst_token,
                amount=request.amount or route.minimum_amount,
                wallet_address=service.settings.test_maker_address or "",
                receiver_address=request.solana_receiver,
                preset="fast",
            )
        )
    except Exception as e:
        return _error(e, "Official route test failed")

    return {
        "success": True,
        "data": result.model_dump(by_alias=True, exclude_none=True),
        "message": "Ethereum USDT to Solana USDT swap executed (official documented route)",
    }


@router.post("/quote/test-eth-to-solana")
async def quote_eth_to_solana(
    request: Optional[RouteAmountRequest] = None,
    service: FusionService = Depends(get_fusion_service),
):
    """Quote for the officially documented Ethereum -> Solana route."""
    route = ETH_TO_SOLANA_ROUTE
    amount = request.amount if request else None
    try:
        quote = await service.get_quote(
            QuoteRequest(
                src_chain_id=route.src_chain_id,
                dst_chain_id=route.dst_chain_id,
                src_token_address=route.src_token,
                dst_token_address=route.dst_token,
                amount=amount or route.minimum_amount,
                wallet_address=service.settings.test_maker_address or "",
            )
        )
    except Exception as e:
        return _error(e, "Official route quote failed")

    return {
        "success": True,
        "data": quote.model_dump(by_alias=True),
        "message": "Official documented route quote successful",
        "route": "Ethereum USDT -> Solana USDT",
    }


@router.post("/swap/test-base-eth-to-polygon")
async def swap_base_to_polygon(
    request: Optional[RouteAmountRequest] = None,
    service: FusionService = Depends(get_fusion_service),
):
    """Legacy Base ETH -> Polygon USDC route."""
    route = BASE_TO_POLYGON_ROUTE
    amount = request.amount if request else None
    settings = service.settings
    try:
        result = await service.execute_swap(
            SwapExecuteRequest(
                src_chain_id=route.src_chain_id,
                dst_chain_id=route.dst_chain_id,
                src_token_address=route.src_token,
                dst_token_address=route.dst_token,
                amount=amount or route.minimum_amount,
                wallet_address=settings.test_maker_address or "",
                receiver_address=settings.test_receiver_address or "",
                preset="fast",
            )
        )
    except Exception as e:
        return _error(e, "Legacy route test failed")

    return {
        "success": True,
        "data": result.model_dump(by_alias=True, exclude_none=True),
        "message": "Base ETH to Polygon USDC swap executed",
    }


@router.get("/order/{order_hash}/status")
async def get_order_status(order_hash: str, service: FusionService = Depends(get_fusion_service)):
    try:
        status = await service.get_order_status(order_hash)
        return {"success": True, "data": status}
    except Exception as e:
        return _error(e, "Failed to get order status")


@router.get("/orders/active")
async def get_active_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=500),
    service: FusionService = Depends(get_fusion_service),
):
    try:
        orders = await service.get_active_orders(page, limit)
        return {"success": True, "data": orders}
    except Exception as e:
        return _error(e, "Failed to get active orders")


@router.get("/supported-routes")
async def get_supported_routes(service: FusionService = Depends(get_fusion_service)):
    try:
        return {
            "success": True,
            "data": service.get_supported_routes(),
            "message": "Supported cross-chain routes",
            "recommendation": "Use the official documented route (Ethereum -> Solana) for best results",
        }
    except Exception as e:
        return _error(e, "Failed to get supported routes")
