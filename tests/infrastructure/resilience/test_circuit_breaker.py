"""
🧪 test_circuit_breaker.py - unit-тести для CircuitBreaker

Перевіряє:
- Відкриття після `failure_threshold` невдач (одна невдача на зовнішній виклик)
- Швидку відмову без виклику операції, поки circuit відкритий
- Рівно один пробний виклик після `reset_timeout`
- Повторне відкриття після невдалого пробного виклику
- Закриття й обнулення лічильника після успіху
- Скасування пробного виклику звільняє слот і повертає OPEN
"""

import asyncio

import pytest

from rate_service.errors.custom_errors import (
    CircuitOpenError,
    ServiceUnavailableError,
    UpstreamClientError,
    UpstreamTransientError,
)
from rate_service.infrastructure.resilience.backoff_retrier import BackoffRetrier
from rate_service.infrastructure.resilience.circuit_breaker import CircuitBreaker, CircuitState


class _CountingOperation:
    def __init__(self, fail: bool = True):
        self.fail = fail
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.fail:
            raise UpstreamTransientError("Monobank API is unreachable")
        return "snapshot"


def _breaker(clock, sleep_recorder, threshold=5, timeout=30.0, attempts=1) -> CircuitBreaker:
    retrier = BackoffRetrier(max_attempts=attempts, base_delay=1.0, sleep=sleep_recorder)
    return CircuitBreaker(retrier, failure_threshold=threshold, reset_timeout=timeout, clock=clock)


async def _fail_times(breaker, op, n):
    for _ in range(n):
        with pytest.raises(ServiceUnavailableError):
            await breaker.call(op)


@pytest.mark.asyncio
async def test_opens_after_threshold_and_fails_fast(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=5)
    op = _CountingOperation()

    await _fail_times(breaker, op, 4)
    assert breaker.state is CircuitState.CLOSED

    await _fail_times(breaker, op, 1)
    assert breaker.state is CircuitState.OPEN
    assert op.calls == 5

    with pytest.raises(CircuitOpenError) as excinfo:
        await breaker.call(op)
    assert op.calls == 5
    assert excinfo.value.status_code == 503
    assert excinfo.value.message == "Service temporarily unavailable. Please try again later."
    assert excinfo.value.retry_after_s == pytest.approx(30.0)


@pytest.mark.asyncio
async def test_failure_counted_once_per_call_despite_retries(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=2, attempts=3)
    op = _CountingOperation()

    await _fail_times(breaker, op, 1)

    assert op.calls == 3
    assert breaker.snapshot().consecutive_failures == 1
    assert breaker.state is CircuitState.CLOSED


@pytest.mark.asyncio
async def test_client_errors_count_as_failures(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=1)

    async def op():
        raise UpstreamClientError(400, "Bad Request")

    with pytest.raises(UpstreamClientError):
        await breaker.call(op)
    assert breaker.state is CircuitState.OPEN


@pytest.mark.asyncio
async def test_success_resets_failure_counter(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=3)
    op = _CountingOperation()

    await _fail_times(breaker, op, 2)
    op.fail = False
    assert await breaker.call(op) == "snapshot"
    assert breaker.snapshot().consecutive_failures == 0

    op.fail = True
    await _fail_times(breaker, op, 2)
    assert breaker.state is CircuitState.CLOSED


@pytest.mark.asyncio
async def test_trial_success_closes_circuit(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=1, timeout=30.0)
    op = _CountingOperation()
    await _fail_times(breaker, op, 1)

    clock.advance(29.9)
    with pytest.raises(CircuitOpenError):
        await breaker.call(op)

    clock.advance(0.1)
    op.fail = False
    assert await breaker.call(op) == "snapshot"

    snap = breaker.snapshot()
    assert snap.state is CircuitState.CLOSED
    assert snap.consecutive_failures == 0
    assert snap.last_failure_at is None


@pytest.mark.asyncio
async def test_trial_failure_reopens_and_restarts_timer(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=3, timeout=30.0)
    op = _CountingOperation()
    await _fail_times(breaker, op, 3)

    clock.advance(30)
    await _fail_times(breaker, op, 1)
    assert breaker.state is CircuitState.OPEN
    assert op.calls == 4

    clock.advance(10)
    with pytest.raises(CircuitOpenError):
        await breaker.call(op)
    assert op.calls == 4


@pytest.mark.asyncio
async def test_only_one_trial_call_is_admitted(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=1, timeout=1.0)
    await _fail_times(breaker, _CountingOperation(), 1)
    clock.advance(1)

    gate = asyncio.Event()
    trial_calls = 0

    async def slow_trial():
        nonlocal trial_calls
        trial_calls += 1
        await gate.wait()
        return "snapshot"

    trial = asyncio.ensure_future(breaker.call(slow_trial))
    await asyncio.sleep(0)
    assert breaker.state is CircuitState.HALF_OPEN

    with pytest.raises(CircuitOpenError):
        await breaker.call(slow_trial)

    gate.set()
    assert await trial == "snapshot"
    assert trial_calls == 1
    assert breaker.state is CircuitState.CLOSED


@pytest.mark.asyncio
async def test_reset_closes_open_circuit(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=1)
    await _fail_times(breaker, _CountingOperation(), 1)

    await breaker.reset()

    assert breaker.state is CircuitState.CLOSED


def test_invalid_parameters(sleep_recorder):
    retrier = BackoffRetrier(sleep=sleep_recorder)
    with pytest.raises(ValueError):
        CircuitBreaker(retrier, failure_threshold=0)
    with pytest.raises(ValueError):
        CircuitBreaker(retrier, reset_timeout=-1)


@pytest.mark.asyncio
async def test_cancelled_trial_releases_slot_and_reopens(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=1, timeout=30.0)
    await _fail_times(breaker, _CountingOperation(), 1)
    clock.advance(30)

    async def hanging_trial():
        await asyncio.Event().wait()

    trial = asyncio.ensure_future(breaker.call(hanging_trial))
    await asyncio.sleep(0)
    assert breaker.state is CircuitState.HALF_OPEN

    trial.cancel()
    with pytest.raises(asyncio.CancelledError):
        await trial

    snap = breaker.snapshot()
    assert snap.state is CircuitState.OPEN
    assert snap.consecutive_failures == 1
    assert snap.last_failure_at == clock()

    with pytest.raises(CircuitOpenError):
        await breaker.call(_CountingOperation(fail=False))

    clock.advance(30)
    assert await breaker.call(_CountingOperation(fail=False)) == "snapshot"
    assert breaker.state is CircuitState.CLOSED


@pytest.mark.asyncio
async def test_cancelled_call_in_closed_state_keeps_circuit_closed(clock, sleep_recorder):
    breaker = _breaker(clock, sleep_recorder, threshold=1)

    async def hanging():
        await asyncio.Event().wait()

    call = asyncio.ensure_future(breaker.call(hanging))
    await asyncio.sleep(0)
    call.cancel()
    with pytest.raises(asyncio.CancelledError):
        await call

    assert breaker.state is CircuitState.CLOSED
    assert await breaker.call(_CountingOperation(fail=False)) == "snapshot"
