"""
Post-checkout payment status polling.

After the buyer returns from hosted checkout the order status is polled on
a fixed backoff schedule (2, 4, 8, 12, 16 seconds, then every 16 seconds)
until a terminal status arrives or 90 seconds have passed.
"""
import asyncio
import enum
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from chefdhundo.client.api import ApiError, NetworkError

logger = logging.getLogger(__name__)

BACKOFF_SCHEDULE = (2, 4, 8, 12, 16)
POLL_CEILING_SECONDS = 90
NETWORK_ERROR_MESSAGE = "Network issue, manual refresh required"


class PollState(str, enum.Enum):
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"


TERMINAL_STATES = {
    "SUCCESS": PollState.SUCCESS,
    "FAILED": PollState.FAILED,
    "CANCELLED": PollState.CANCELLED,
}

CALL_TO_ACTION = {
    PollState.SUCCESS: "continue_to_dashboard",
    PollState.FAILED: "view_failure_detail",
    PollState.CANCELLED: "view_failure_detail",
    PollState.TIMEOUT: "retry",
}


@dataclass
class PollResult:
    state: PollState
    attempts: int
    elapsed: float
    payment: Optional[dict] = None
    error: Optional[str] = None
    stopped: bool = False

    @property
    def call_to_action(self) -> Optional[str]:
        return CALL_TO_ACTION.get(self.state)


def _is_transient(error: ApiError) -> bool:
    return isinstance(error, NetworkError) or (error.status_code or 0) >= 500


class PaymentStatusPoller:
    """
    Args:
        client: Object with an async ``get_payment_status(order_id)`` (and
            ``verify_payment`` when ``reconcile`` is set)
        order_id: Internal order id from order creation
        reconcile: Ask the API to check the gateway on every attempt instead
            of only reading the stored status
        clock: Monotonic seconds source
        sleep: Awaitable sleep
    """

    def __init__(
        self,
        client,
        order_id: str,
        schedule: Sequence[float] = BACKOFF_SCHEDULE,
        ceiling: float = POLL_CEILING_SECONDS,
        reconcile: bool = False,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if not schedule:
            raise ValueError("schedule must not be empty")
        self.client = client
        self.order_id = order_id
        self.schedule = tuple(schedule)
        self.ceiling = ceiling
        self.reconcile = reconcile
        self.clock = clock
        self.sleep = sleep
        self._reset()

    def _reset(self) -> None:
        self.state = PollState.PROCESSING
        self.attempts = 0
        self.payment: Optional[dict] = None
        self.error: Optional[str] = None
        self._stopped = False
        self._started_at: Optional[float] = None

    def cancel(self) -> None:
        """Stop polling after the in-flight attempt."""
        self._stopped = True

    def _elapsed(self) -> float:
        return self.clock() - self._started_at

    def _result(self) -> PollResult:
        return PollResult(
            state=self.state,
            attempts=self.attempts,
            elapsed=self._elapsed(),
            payment=self.payment,
            error=self.error,
            stopped=self._stopped,
        )

    def _delay(self) -> float:
        index = min(self.attempts - 1, len(self.schedule) - 1)
        return self.schedule[index]

    async def _fetch(self) -> dict:
        if self.reconcile:
            return await self.client.verify_payment(self.order_id)
        return await self.client.get_payment_status(self.order_id)

    async def run(self) -> PollResult:
        self._started_at = self.clock()

        while not self._stopped:
            self.attempts += 1
            network_failure = False

            try:
                response = await self._fetch()
            except ApiError as e:
                if not _is_transient(e):
                    logger.warning(f"Payment status check failed for order_id={self.order_id}: {e.detail}")
                    self.state = PollState.FAILED
                    self.error = e.detail
                    return self._result()
                logger.info(f"Payment status check attempt {self.attempts} failed: {e.detail}")
                network_failure = True
                self.error = e.detail
            else:
                self.error = None
                self.payment = response.get("payment")
                terminal = TERMINAL_STATES.get(response.get("status"))
                if terminal is not None:
                    self.state = terminal
                    logger.info(f"Payment order_id={self.order_id} finished as {terminal.value}")
                    return self._result()

            elapsed = self._elapsed()
            if elapsed >= self.ceiling:
                self.state = PollState.TIMEOUT
                if network_failure:
                    self.error = NETWORK_ERROR_MESSAGE
                logger.warning(f"Payment status polling timed out for order_id={self.order_id}")
                return self._result()

            if self._stopped:
                break
            await self.sleep(min(self._delay(), self.ceiling - elapsed))

        return self._result()

    async def retry(self) -> PollResult:
        """Start over with a fresh schedule and clock after a timeout."""
        if self.state != PollState.TIMEOUT:
            raise RuntimeError("Only a timed-out poll can be retried")
        self._reset()
        return await self.run()
