"""Swap orchestration on top of the Fusion+ SDK gateway."""

from fusionswap.swap.executor import (
    CrossChainSwapper,
    OrderCreationError,
    SubmittedOrder,
    SwapResult,
)
from fusionswap.swap.monitor import (
    MonitorResult,
    SecretRevealCoordinator,
    SwapError,
    SwapTimeoutError,
)

__all__ = [
    "CrossChainSwapper",
    "OrderCreationError",
    "SubmittedOrder",
    "SwapResult",
    "MonitorResult",
    "SecretRevealCoordinator",
    "SwapError",
    "SwapTimeoutError",
]
