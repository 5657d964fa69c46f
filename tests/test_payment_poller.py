"""
Tests for the post-checkout payment status poller, driven by a fake clock.
"""
import asyncio

import pytest

from chefdhundo.client.api import ApiError, NetworkError
from chefdhundo.client.payment import (
    PaymentStatusPoller,
    PollState,
    NETWORK_ERROR_MESSAGE,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedClient:
    """Answers status calls from a script; the last entry repeats forever."""

    def __init__(self, clock, script):
        self.clock = clock
        self.script = list(script)
        self.calls = []
        self.verify_calls = 0

    async def _next(self):
        self.calls.append(self.clock.now)
        step = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(step, Exception):
            raise step
        if callable(step):
            return step()
        return {"success": True, "status": step, "payment": {"order_id": "order_1", "status": step}}

    async def get_payment_status(self, order_id):
        return await self._next()

    async def verify_payment(self, order_id):
        self.verify_calls += 1
        return await self._next()


def _poller(script, **kwargs):
    clock = FakeClock()
    client = ScriptedClient(clock, script)
    poller = PaymentStatusPoller(client, "order_1", clock=clock, sleep=clock.sleep, **kwargs)
    return poller, client, clock


def test_pending_forever_times_out_at_ceiling():
    poller, client, clock = _poller(["PENDING"])

    result = asyncio.run(poller.run())

    assert result.state == PollState.TIMEOUT
    assert result.call_to_action == "retry"
    assert result.attempts == 9
    assert result.elapsed == 90
    assert client.calls == [0, 2, 6, 14, 26, 42, 58, 74, 90]
    assert clock.sleeps == [2, 4, 8, 12, 16, 16, 16, 16]
    assert result.error is None


def test_never_times_out_before_ceiling():
    poller, client, clock = _poller(["PENDING"])

    asyncio.run(poller.run())

    assert all(t < 90 for t in client.calls[:-1])
    assert sum(clock.sleeps) == 90


def test_immediate_success():
    poller, client, clock = _poller(["SUCCESS"])

    result = asyncio.run(poller.run())

    assert result.state == PollState.SUCCESS
    assert result.call_to_action == "continue_to_dashboard"
    assert result.attempts == 1
    assert result.payment["status"] == "SUCCESS"
    assert clock.sleeps == []


def test_success_after_pending():
    poller, client, _ = _poller(["PENDING", "PENDING", "SUCCESS"])

    result = asyncio.run(poller.run())

    assert result.state == PollState.SUCCESS
    assert client.calls == [0, 2, 6]


@pytest.mark.parametrize("status, state", [("FAILED", PollState.FAILED), ("CANCELLED", PollState.CANCELLED)])
def test_failed_and_cancelled(status, state):
    poller, _, _ = _poller(["PENDING", status])

    result = asyncio.run(poller.run())

    assert result.state == state
    assert result.call_to_action == "view_failure_detail"


def test_network_errors_until_ceiling():
    poller, client, _ = _poller([NetworkError("connection refused")])

    result = asyncio.run(poller.run())

    assert result.state == PollState.TIMEOUT
    assert result.error == NETWORK_ERROR_MESSAGE
    assert len(client.calls) == 9


def test_transient_errors_are_retried():
    poller, client, _ = _poller([NetworkError("reset"), ApiError(503, "Service unavailable"), "SUCCESS"])

    result = asyncio.run(poller.run())

    assert result.state == PollState.SUCCESS
    assert result.error is None
    assert result.attempts == 3


def test_recovered_network_then_timeout_has_no_network_message():
    poller, _, _ = _poller([NetworkError("reset"), "PENDING"])

    result = asyncio.run(poller.run())

    assert result.state == PollState.TIMEOUT
    assert result.error is None


def test_client_error_fails_immediately():
    poller, client, _ = _poller([ApiError(404, "Order not found")])

    result = asyncio.run(poller.run())

    assert result.state == PollState.FAILED
    assert result.error == "Order not found"
    assert result.attempts == 1


def test_cancel_stops_polling():
    clock = FakeClock()
    poller = None

    def cancel_then_pending():
        poller.cancel()
        return {"status": "PENDING"}

    client = ScriptedClient(clock, ["PENDING", "PENDING", cancel_then_pending, "PENDING"])
    poller = PaymentStatusPoller(client, "order_1", clock=clock, sleep=clock.sleep)

    result = asyncio.run(poller.run())

    assert result.stopped is True
    assert result.state == PollState.PROCESSING
    assert result.attempts == 3
    assert result.call_to_action is None


def test_retry_after_timeout():
    clock = FakeClock()
    client = ScriptedClient(clock, ["PENDING"])
    poller = PaymentStatusPoller(client, "order_1", clock=clock, sleep=clock.sleep)
    first = asyncio.run(poller.run())
    assert first.state == PollState.TIMEOUT

    client.script = ["SUCCESS"]
    second = asyncio.run(poller.retry())

    assert second.state == PollState.SUCCESS
    assert second.attempts == 1
    assert second.elapsed == 0


def test_retry_requires_timeout():
    poller, _, _ = _poller(["SUCCESS"])
    asyncio.run(poller.run())

    with pytest.raises(RuntimeError):
        asyncio.run(poller.retry())


def test_reconcile_uses_verify():
    poller, client, _ = _poller(["SUCCESS"], reconcile=True)

    asyncio.run(poller.run())

    assert client.verify_calls == 1


def test_custom_schedule_and_ceiling():
    poller, client, clock = _poller(["PENDING"], schedule=(1,), ceiling=3)

    result = asyncio.run(poller.run())

    assert client.calls == [0, 1, 2, 3]
    assert result.state == PollState.TIMEOUT


def test_empty_schedule_is_rejected():
    with pytest.raises(ValueError):
        PaymentStatusPoller(object(), "order_1", schedule=())
