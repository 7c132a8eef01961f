"""Network and token metadata for Fusion+ cross-chain swaps.

Chain ids follow the relayer's network numbering: EVM chains use their
EIP-155 ids, Solana uses 501.
"""

from dataclasses import dataclass
from enum import IntEnum

from solders.pubkey import Pubkey
from web3 import Web3


class NetworkEnum(IntEnum):
    """Networks understood by the Fusion+ relayer."""

    ETHEREUM = 1
    OPTIMISM = 10
    BINANCE = 56
    POLYGON = 137
    BASE = 8453
    ARBITRUM = 42161
    AVALANCHE = 43114
    SOLANA = 501


def is_solana(chain_id: int) -> bool:
    return int(chain_id) == NetworkEnum.SOLANA


NATIVE_TOKEN = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

# 1inch Limit Order Protocol v4 (spender for maker approvals on every EVM chain)
LIMIT_ORDER_PROTOCOL = "0x111111125421cA6dc452d289314280a0f8842A65"

# USDT on both legs of the documented route
USDT_EVM = "0xdac17f958d2ee523a2206206994597c13d831ec7"
USDT_SOLANA = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"
USDT_DECIMALS = 6

# Polygon USDC (bridged)
POLYGON_USDC = "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"

SUPPORTED_CHAINS = {
    NetworkEnum.ETHEREUM: {"name": "Ethereum", "symbol": "ETH"},
    NetworkEnum.POLYGON: {"name": "Polygon", "symbol": "MATIC"},
    NetworkEnum.ARBITRUM: {"name": "Arbitrum", "symbol": "ARB"},
    NetworkEnum.BASE: {"name": "Base", "symbol": "BASE"},
    NetworkEnum.OPTIMISM: {"name": "Optimism", "symbol": "OP"},
    NetworkEnum.BINANCE: {"name": "BSC", "symbol": "BNB"},
}

WORKING_TOKENS = {
    NetworkEnum.BASE: {
        "WETH": "0x4200000000000000000000000000000000000006",
        "USDC": "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
    },
    NetworkEnum.POLYGON: {
        "USDT": "0xc2132D05D31c914a87C6611C10748AEb04B58e8F",
        "USDC": POLYGON_USDC,
    },
}


@dataclass(frozen=True)
class SupportedRoute:
    """A cross-chain route known to work with the relayer."""

    name: str
    description: str
    src_chain_id: int
    src_chain_name: str
    dst_chain_id: int
    dst_chain_name: str
    src_token: str
    dst_token: str
    status: str
    minimum_amount: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "srcChain": {"id": self.src_chain_id, "name": self.src_chain_name},
            "dstChain": {"id": self.dst_chain_id, "name": self.dst_chain_name},
            "srcToken": self.src_token,
            "dstToken": self.dst_token,
            "status": self.status,
            "minimumAmount": self.minimum_amount,
        }


ETH_TO_SOLANA_ROUTE = SupportedRoute(
    name="Official Documented Route",
    description="Ethereum USDT to Solana USDT",
    src_chain_id=NetworkEnum.ETHEREUM,
    src_chain_name="Ethereum",
    dst_chain_id=NetworkEnum.SOLANA,
    dst_chain_name="Solana",
    src_token=USDT_EVM,
    dst_token=USDT_SOLANA,
    status="Fully Supported",
    minimum_amount="5000000",  # 5 USDT
)

BASE_TO_POLYGON_ROUTE = SupportedRoute(
    name="Base to Polygon",
    description="Base ETH to Polygon USDC",
    src_chain_id=NetworkEnum.BASE,
    src_chain_name="Base",
    dst_chain_id=NetworkEnum.POLYGON,
    dst_chain_name="Polygon",
    src_token=NATIVE_TOKEN,
    dst_token=POLYGON_USDC,
    status="Experimental",
    minimum_amount="5000000000000000",  # ~$5 of ETH
)

SUPPORTED_ROUTES = [ETH_TO_SOLANA_ROUTE, BASE_TO_POLYGON_ROUTE]


class EvmAddress:
    """Validated EVM address."""

    def __init__(self, value: str):
        if not Web3.is_address(value):
            raise ValueError(f"Invalid EVM address: {value}")
        self.value = Web3.to_checksum_address(value)

    @classmethod
    def from_string(cls, value: str) -> "EvmAddress":
        return cls(value)

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other) -> bool:
        return isinstance(other, EvmAddress) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)


class SolanaAddress:
    """Validated base58 Solana address."""

    def __init__(self, value: str):
        try:
            self.pubkey = Pubkey.from_string(value)
        except ValueError as e:
            raise ValueError(f"Invalid Solana address: {value}") from e
        self.value = str(self.pubkey)

    @classmethod
    def from_string(cls, value: str) -> "SolanaAddress":
        return cls(value)

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other) -> bool:
        return isinstance(other, SolanaAddress) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)


def parse_address(chain_id: int, value: str):
    """Parse an address for the given chain."""
    if is_solana(chain_id):
        return SolanaAddress.from_string(value)
    return EvmAddress.from_string(value)
