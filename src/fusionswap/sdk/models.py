"""Typed views over Fusion+ relayer payloads.

Each model keeps the raw JSON it was parsed from in ``raw`` so API responses
can echo the relayer's data without loss.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from fusionswap.sdk.errors import FusionAPIError, InvalidPresetError
from fusionswap.sdk.hashlock import HashLock


class PresetEnum(str, Enum):
    """Auction speed presets offered by the quoter."""

    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"
    CUSTOM = "custom"


class OrderStatus(str, Enum):
    """Lifecycle states reported by the orders API."""

    PENDING = "pending"
    EXECUTED = "executed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    REFUNDING = "refunding"
    REFUNDED = "refunded"


TERMINAL_STATUSES = frozenset(
    {OrderStatus.EXECUTED, OrderStatus.EXPIRED, OrderStatus.CANCELLED, OrderStatus.REFUNDED}
)


@dataclass
class QuoteParams:
    """Parameters of a cross-chain quote request."""

    src_chain_id: int
    dst_chain_id: int
    src_token_address: str
    dst_token_address: str
    amount: str
    wallet_address: str
    enable_estimate: bool = True

    def to_query(self) -> dict:
        return {
            "srcChain": int(self.src_chain_id),
            "dstChain": int(self.dst_chain_id),
            "srcTokenAddress": self.src_token_address,
            "dstTokenAddress": self.dst_token_address,
            "amount": str(self.amount),
            "walletAddress": self.wallet_address,
            "enableEstimate": "true" if self.enable_estimate else "false",
        }


@dataclass
class Preset:
    """One auction preset of a quote."""

    name: str
    secrets_count: int
    auction_duration: int = 0
    start_amount: Optional[str] = None
    cost_in_dst_token: Optional[str] = None
    allow_partial_fills: bool = False
    allow_multiple_fills: bool = False
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "Preset":
        return cls(
            name=name,
            secrets_count=int(data.get("secretsCount", 1)),
            auction_duration=int(data.get("auctionDuration", 0)),
            start_amount=data.get("startAmount"),
            cost_in_dst_token=data.get("costInDstToken"),
            allow_partial_fills=bool(data.get("allowPartialFills", False)),
            allow_multiple_fills=bool(data.get("allowMultipleFills", False)),
            raw=data,
        )


@dataclass
class Quote:
    """Cross-chain quote returned by the quoter."""

    params: QuoteParams
    quote_id: Optional[str]
    src_token_amount: str
    dst_token_amount: str
    presets: dict[str, Preset]
    recommended_preset: str
    raw: dict = field(default_factory=dict)

    @property
    def src_chain_id(self) -> int:
        return self.params.src_chain_id

    @property
    def dst_chain_id(self) -> int:
        return self.params.dst_chain_id

    @classmethod
    def from_response(cls, params: QuoteParams, data: dict) -> "Quote":
        if not isinstance(data, dict) or "presets" not in data:
            raise FusionAPIError("Malformed quote response", payload=data)

        presets = {
            name: Preset.from_dict(name, preset)
            for name, preset in (data.get("presets") or {}).items()
            if preset
        }
        return cls(
            params=params,
            quote_id=data.get("quoteId"),
            src_token_amount=str(data.get("srcTokenAmount", params.amount)),
            dst_token_amount=str(data.get("dstTokenAmount", "0")),
            presets=presets,
            recommended_preset=data.get("recommendedPreset") or PresetEnum.FAST.value,
            raw=data,
        )

    def get_preset(self, name: Optional[str] = None) -> Preset:
        """Return the named preset, or the recommended one when ``name`` is empty."""
        name = name or self.recommended_preset
        preset = self.presets.get(name)
        if preset is None:
            raise InvalidPresetError(name, list(self.presets.keys()))
        return preset

    def to_dict(self) -> dict:
        """JSON-safe representation with big integers as strings."""
        return _stringify_ints(self.raw)


@dataclass
class ReadyFill:
    """A fill whose escrows are deployed and which awaits its secret."""

    idx: int
    src_escrow_deploy_tx_hash: Optional[str] = None
    dst_escrow_deploy_tx_hash: Optional[str] = None


@dataclass
class ReadyToAcceptSecretFills:
    fills: list[ReadyFill] = field(default_factory=list)

    @property
    def indexes(self) -> list[int]:
        return [f.idx for f in self.fills]

    @classmethod
    def from_response(cls, data: Optional[dict]) -> "ReadyToAcceptSecretFills":
        fills = []
        for item in (data or {}).get("fills") or []:
            fills.append(
                ReadyFill(
                    idx=int(item["idx"]),
                    src_escrow_deploy_tx_hash=item.get("srcEscrowDeployTxHash"),
                    dst_escrow_deploy_tx_hash=item.get("dstEscrowDeployTxHash"),
                )
            )
        return cls(fills=fills)


@dataclass
class OrderStatusInfo:
    """Status of a submitted order."""

    order_hash: str
    status: str
    fills: list[dict] = field(default_factory=list)
    raw: dict = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.status in {s.value for s in TERMINAL_STATUSES}

    @property
    def is_executed(self) -> bool:
        return self.status == OrderStatus.EXECUTED.value

    @classmethod
    def from_response(cls, order_hash: str, data: dict) -> "OrderStatusInfo":
        return cls(
            order_hash=data.get("orderHash", order_hash),
            status=str(data.get("status", "")),
            fills=list(data.get("fills") or []),
            raw=data,
        )


@dataclass
class SolanaAccountMeta:
    pubkey: str
    is_signer: bool
    is_writable: bool


@dataclass
class SolanaInstruction:
    """Escrow-factory instruction as delivered by the relayer (data is base64)."""

    program_id: str
    accounts: list[SolanaAccountMeta]
    data: str

    @classmethod
    def from_dict(cls, data: dict) -> "SolanaInstruction":
        return cls(
            program_id=data["programId"],
            accounts=[
                SolanaAccountMeta(
                    pubkey=a["pubkey"],
                    is_signer=bool(a.get("isSigner", False)),
                    is_writable=bool(a.get("isWritable", False)),
                )
                for a in data.get("accounts", [])
            ],
            data=data["data"],
        )


@dataclass
class PreparedOrder:
    """Order built by the quoter, ready to be signed or announced."""

    order_hash: str
    order: dict
    quote_id: Optional[str]
    hash_lock: HashLock
    secret_hashes: list[str]
    preset: str
    src_chain_id: int = 0
    extension: Optional[str] = None
    typed_data: Optional[dict] = None
    instruction: Optional[SolanaInstruction] = None
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_build_response(
        cls,
        data: dict,
        quote: Quote,
        hash_lock: HashLock,
        secret_hashes: list[str],
        preset: str,
    ) -> "PreparedOrder":
        typed_data = data.get("typedData")
        order = data.get("order") or (typed_data or {}).get("message")
        order_hash = data.get("orderHash")
        if not order or not order_hash:
            raise FusionAPIError("Malformed order build response", payload=data)

        instruction = None
        if data.get("svmInstruction"):
            instruction = SolanaInstruction.from_dict(data["svmInstruction"])

        return cls(
            order_hash=order_hash,
            order=order,
            quote_id=data.get("quoteId") or quote.quote_id,
            hash_lock=hash_lock,
            secret_hashes=secret_hashes,
            preset=preset,
            src_chain_id=int(quote.src_chain_id),
            extension=data.get("extension"),
            typed_data=typed_data,
            instruction=instruction,
            raw=data,
        )


def _stringify_ints(value: Any) -> Any:
    """Convert integers beyond JS safe range to strings, recursively."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and abs(value) > 2**53 - 1:
        return str(value)
    if isinstance(value, dict):
        return {k: _stringify_ints(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_ints(v) for v in value]
    return value
