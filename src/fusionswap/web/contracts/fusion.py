"""Fusion+ request and response contracts.

Bodies use camelCase on the wire (``srcChainId``) to stay compatible with
existing clients; Python code uses the snake_case field names.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _validate_base_units(value) -> str:
    """Amounts are integer strings in the token's smallest unit."""
    value = str(value).strip()
    if not value.isdigit() or int(value) <= 0:
        raise ValueError("amount must be a positive integer in base units")
    return value


class QuoteRequest(CamelModel):
    """Request for a cross-chain quote."""

    src_chain_id: int = Field(..., gt=0, description="Source chain id")
    dst_chain_id: int = Field(..., gt=0, description="Destination chain id")
    src_token_address: str = Field(..., min_length=1, description="Source token address")
    dst_token_address: str = Field(..., min_length=1, description="Destination token address")
    amount: str = Field(..., description="Amount in source token base units")
    wallet_address: str = Field(..., min_length=1, description="Maker wallet address")

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, v):
        return _validate_base_units(v)


class SwapExecuteRequest(QuoteRequest):
    """Request to run a full swap with the backend signer."""

    receiver_address: str = Field(..., min_length=1, description="Receiver on the destination chain")
    preset: Optional[str] = Field(default="fast", description="Auction preset (fast, medium, slow)")


class RouteAmountRequest(CamelModel):
    """Optional amount override for the fixed test routes."""

    amount: Optional[str] = Field(default=None, description="Amount in base units")

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, v):
        if v is None or v == "":
            return None
        return _validate_base_units(v)


class EthToSolanaSwapRequest(RouteAmountRequest):
    """Swap request for the Ethereum USDT -> Solana USDT route."""

    solana_receiver: Optional[str] = Field(default=None, description="Solana wallet address")


class QuoteResponse(CamelModel):
    """Quote as returned to API clients."""

    success: bool = True
    quote: dict[str, Any] = Field(default_factory=dict, description="Relayer quote payload")
    estimated_output: str = Field(default="0", description="Destination amount in base units")


class SwapExecuteResponse(CamelModel):
    """Outcome of a swap execution."""

    success: bool
    order_hash: Optional[str] = None
    quote: Optional[QuoteResponse] = None
    final_status: Optional[dict[str, Any]] = None
    order_details: Optional[dict[str, Any]] = Field(
        default=None, description="Secrets and hash lock, returned when the order could not be submitted"
    )
    error: Optional[str] = None
    message: Optional[str] = None
