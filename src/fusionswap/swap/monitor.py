"""Secret-reveal coordinator.

After an order is live, resolvers deploy source and destination escrows fill
by fill. The relayer lists fills whose escrows are ready; the maker answers
each with the matching secret. Each fill index is revealed at most once.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from fusionswap.sdk.models import OrderStatus, OrderStatusInfo

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_TIMEOUT = 10 * 60.0


class SwapError(Exception):
    """Base exception for swap flow failures."""
    pass


class SwapTimeoutError(SwapError):
    """Order did not reach a terminal status before the monitor gave up."""

    def __init__(self, order_hash: str, revealed: list[int], timeout: float):
        self.order_hash = order_hash
        self.revealed = revealed
        self.timeout = timeout
        super().__init__(
            f"Swap monitoring timed out after {timeout:.0f}s for order {order_hash} "
            f"(secrets revealed for fills: {revealed or 'none'})"
        )


@dataclass
class MonitorResult:
    """Outcome of monitoring one order."""

    order_hash: str
    status: str
    revealed: list[int] = field(default_factory=list)
    attempts: int = 0
    last_status: Optional[OrderStatusInfo] = None

    @property
    def completed(self) -> bool:
        return self.status == OrderStatus.EXECUTED.value

    def to_dict(self) -> dict:
        if self.completed:
            message = "Swap completed successfully"
        else:
            message = f"Order finished with status '{self.status}'"
        return {
            "status": "completed" if self.completed else self.status,
            "orderStatus": self.status,
            "revealedFills": self.revealed,
            "attempts": self.attempts,
            "message": message,
        }


class SecretRevealCoordinator:
    """Polls an order and reveals secrets as fills become claimable."""

    def __init__(
        self,
        sdk,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
        initial_delay: float = 0.0,
    ):
        """Initialize the coordinator.

        Args:
            sdk: Client exposing get_order_status, get_ready_to_accept_secret_fills
                and submit_secret
            poll_interval: Seconds between polls
            timeout: Seconds before giving up with SwapTimeoutError
            initial_delay: Seconds to wait before the first poll
        """
        self.sdk = sdk
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.initial_delay = initial_delay

    async def run(self, order_hash: str, secrets: list[str]) -> MonitorResult:
        """Monitor ``order_hash`` until it is terminal.

        Returns:
            MonitorResult for executed, expired, cancelled or refunded orders

        Raises:
            SwapTimeoutError: timeout elapsed first
        """
        logger.info(f"Monitoring order {order_hash} for fills ({len(secrets)} secret(s))")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        revealed: set[int] = set()
        attempts = 0

        if self.initial_delay > 0:
            await asyncio.sleep(self.initial_delay)

        while loop.time() < deadline:
            attempts += 1

            status = await self._poll_status(order_hash, attempts)
            if status is not None and status.is_terminal:
                if status.is_executed:
                    logger.info(f"Order {order_hash} is complete!")
                else:
                    logger.warning(f"Order {order_hash} {status.status}, stopping monitor")
                return MonitorResult(
                    order_hash=order_hash,
                    status=status.status,
                    revealed=sorted(revealed),
                    attempts=attempts,
                    last_status=status,
                )

            await self._reveal_ready_fills(order_hash, secrets, revealed)

            await asyncio.sleep(self.poll_interval)
            logger.debug("polling for fills...")

        raise SwapTimeoutError(order_hash, sorted(revealed), self.timeout)

    async def _poll_status(self, order_hash: str, attempt: int) -> Optional[OrderStatusInfo]:
        try:
            status = await self.sdk.get_order_status(order_hash)
        except Exception as e:
            logger.error(f"Error while getting order status: {type(e).__name__}: {e}")
            return None

        logger.info(f"Order status: {status.status} (attempt {attempt})")
        return status

    async def _reveal_ready_fills(
        self,
        order_hash: str,
        secrets: list[str],
        revealed: set[int],
    ) -> None:
        try:
            ready = await self.sdk.get_ready_to_accept_secret_fills(order_hash)
        except Exception as e:
            logger.error(f"Error while monitoring fills: {type(e).__name__}: {e}")
            return

        pending = [idx for idx in ready.indexes if idx not in revealed]
        if pending:
            logger.info(f"Found {len(pending)} fill(s) ready for secrets")

        for idx in pending:
            if idx in revealed:
                continue
            if not 0 <= idx < len(secrets):
                logger.error(f"Relayer reported fill {idx} but only {len(secrets)} secret(s) exist")
                continue
            try:
                await self.sdk.submit_secret(order_hash, secrets[idx])
            except Exception as e:
                # Not marked as revealed, so the next poll retries it
                logger.error(f"Failed to submit secret for index {idx}: {e}")
                continue
            revealed.add(idx)
            logger.info(f"Submitted secret for index: {idx}")
