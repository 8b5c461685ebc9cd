r"""Unit tests for the synchronous retry executor."""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from patience.delays import DelaySequence, DelaySequenceFactory, exponential, fixed
from patience.exceptions import PatienceError
from patience.results import Fail, Failure, Pass, Success
from patience.retry import CallbackConfig, RetryExecutor

if TYPE_CHECKING:
    from tests.conftest import FakeClock


def failing_supplier() -> Mock:
    """Create a supplier whose n-th call fails with ``failure n``."""
    counter = {"count": 0}

    def attempt() -> Failure:
        counter["count"] += 1
        return Failure(f"failure {counter['count']}")

    return Mock(side_effect=attempt)


def make_executor(
    fake_clock: FakeClock, delay_factory: DelaySequenceFactory, **kwargs: object
) -> RetryExecutor:
    return RetryExecutor(delay_factory, sleep=fake_clock.sleep, clock=fake_clock, **kwargs)


#########################################
#     Tests for RetryExecutor setup     #
#########################################


def test_retry_executor_creation() -> None:
    """Test RetryExecutor initialization."""
    factory = fixed(1)
    executor = RetryExecutor(factory)
    assert executor.delay_factory is factory
    assert executor.callbacks is not None


def test_retry_executor_none_factory() -> None:
    with pytest.raises(ValueError, match=r"delay_factory must not be None"):
        RetryExecutor(None)


###########################################
#     Tests for RetryExecutor.execute     #
###########################################


def test_execute_zero_duration_failing_attempt(fake_clock: FakeClock) -> None:
    """Test that a zero max_duration still makes exactly one attempt."""
    supplier = failing_supplier()
    result = make_executor(fake_clock, fixed(0)).execute(supplier, timedelta(0))

    assert result == Fail(["failure 1"])
    supplier.assert_called_once_with()
    assert fake_clock.non_zero_sleeps == []


def test_execute_zero_duration_successful_attempt(mock_sleep: Mock) -> None:
    """Test that a successful first attempt returns without sleeping."""
    supplier = Mock(return_value=Success("value"))
    result = RetryExecutor(fixed(1)).execute(supplier, 0)

    assert result == Pass("value")
    supplier.assert_called_once_with()
    mock_sleep.assert_not_called()


def test_execute_success_after_failures(fake_clock: FakeClock) -> None:
    """Test that a success after failures returns Pass."""
    supplier = Mock(
        side_effect=[Failure("a"), Failure("b"), Failure("c"), Success(42)],
    )
    result = make_executor(fake_clock, fixed(timedelta(seconds=1))).execute(
        supplier, timedelta(seconds=10)
    )

    assert isinstance(result, Pass)
    assert result.value == 42
    assert not hasattr(result, "failure_descriptions")
    assert supplier.call_count == 4
    assert fake_clock.non_zero_sleeps == [timedelta(seconds=1)] * 3


def test_execute_first_attempt_does_not_sleep(fake_clock: FakeClock) -> None:
    """Test that the first attempt is preceded by a zero sleep only."""
    make_executor(fake_clock, fixed(5)).execute(Mock(return_value=Success(1)), 10)
    assert fake_clock.sleeps == [timedelta(0)]


def test_execute_exhausts_max_duration(fake_clock: FakeClock) -> None:
    """Test that every failure description is kept, in attempt order."""
    supplier = failing_supplier()
    result = make_executor(fake_clock, fixed(timedelta(seconds=1))).execute(
        supplier, timedelta(seconds=3.5)
    )

    # Attempts at t=0, 1, 2, 3. Waking up at t=4 would pass the deadline.
    assert result == Fail(["failure 1", "failure 2", "failure 3", "failure 4"])
    assert supplier.call_count == 4


def test_execute_wake_time_equal_to_deadline_stops(fake_clock: FakeClock) -> None:
    """Test that a wake time equal to the deadline does not schedule an
    attempt."""
    supplier = failing_supplier()
    result = make_executor(fake_clock, fixed(timedelta(seconds=1))).execute(
        supplier, timedelta(seconds=3)
    )

    # Attempts at t=0, 1, 2. Waking up at t=3 is not before the deadline.
    assert result.failure_descriptions == ("failure 1", "failure 2", "failure 3")
    assert fake_clock.non_zero_sleeps == [timedelta(seconds=1)] * 2


def test_execute_never_sleeps_past_deadline(fake_clock: FakeClock) -> None:
    start = fake_clock.now
    make_executor(fake_clock, fixed(timedelta(milliseconds=700))).execute(
        failing_supplier(), timedelta(seconds=2)
    )
    assert fake_clock.now - start < 2


def test_execute_exponential_delays(fake_clock: FakeClock) -> None:
    """Test the executor with exponential delays."""
    supplier = failing_supplier()
    result = make_executor(fake_clock, exponential(2, timedelta(seconds=1))).execute(
        supplier, timedelta(seconds=10)
    )

    # Attempts at t=0, 1, 3, 7. The next wake time (t=15) is past the deadline.
    assert len(result.failure_descriptions) == 4
    assert fake_clock.non_zero_sleeps == [
        timedelta(seconds=1),
        timedelta(seconds=2),
        timedelta(seconds=4),
    ]


def test_execute_long_attempt_is_not_interrupted(fake_clock: FakeClock) -> None:
    """Test that an attempt running past the deadline completes and ends
    the run."""

    def slow_attempt() -> Failure:
        fake_clock.advance(5)
        return Failure("slow")

    supplier = Mock(side_effect=slow_attempt)
    result = make_executor(fake_clock, fixed(0)).execute(supplier, timedelta(seconds=2))

    assert result == Fail(["slow"])
    supplier.assert_called_once_with()


def test_execute_accepts_seconds(fake_clock: FakeClock) -> None:
    supplier = failing_supplier()
    result = make_executor(fake_clock, fixed(1)).execute(supplier, 2.5)
    assert len(result.failure_descriptions) == 3


def test_execute_creates_fresh_sequence_per_run(fake_clock: FakeClock) -> None:
    """Test that each run uses a new delay sequence."""
    executor = make_executor(fake_clock, exponential(2, timedelta(seconds=1)))
    executor.execute(failing_supplier(), timedelta(seconds=4))
    first_run = fake_clock.non_zero_sleeps
    fake_clock.sleeps.clear()
    executor.execute(failing_supplier(), timedelta(seconds=4))

    assert first_run == [timedelta(seconds=1), timedelta(seconds=2)]
    assert fake_clock.non_zero_sleeps == first_run


def test_execute_calls_create_once_per_run(fake_clock: FakeClock) -> None:
    factory = Mock(spec=DelaySequenceFactory)
    factory.create.side_effect = lambda: fixed(0).create()
    executor = make_executor(fake_clock, factory)

    executor.execute(Mock(return_value=Success(1)), 0)
    executor.execute(Mock(return_value=Success(2)), 0)

    assert factory.create.call_count == 2


def test_execute_concurrent_runs() -> None:
    """Test that concurrent runs sharing an executor do not interfere."""
    executor = RetryExecutor(fixed(0))
    results: dict[int, object] = {}

    def run(index: int) -> None:
        outcomes = iter([Failure(f"{index}-1"), Failure(f"{index}-2"), Success(index)])
        results[index] = executor.execute(lambda: next(outcomes), timedelta(seconds=5))

    threads = [threading.Thread(target=run, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == {i: Pass(i) for i in range(8)}


##############################################
#     Tests for argument validation          #
##############################################


def test_execute_negative_max_duration(fake_clock: FakeClock) -> None:
    """Test that a negative max_duration raises before any attempt."""
    supplier = Mock(return_value=Success(1))
    with pytest.raises(ValueError, match=r"max_duration must be >= 0"):
        make_executor(fake_clock, fixed(0)).execute(supplier, timedelta(seconds=-1))
    supplier.assert_not_called()


def test_execute_none_max_duration(fake_clock: FakeClock) -> None:
    with pytest.raises(TypeError, match=r"max_duration must be a timedelta"):
        make_executor(fake_clock, fixed(0)).execute(Mock(return_value=Success(1)), None)


def test_execute_none_supplier(fake_clock: FakeClock) -> None:
    """Test that a missing attempt supplier raises before any attempt."""
    with pytest.raises(TypeError, match=r"attempt_supplier must be callable"):
        make_executor(fake_clock, fixed(0)).execute(None, timedelta(seconds=1))
    assert fake_clock.sleeps == []


##########################################
#     Tests for fatal contract errors    #
##########################################


def test_execute_factory_returns_none(fake_clock: FakeClock) -> None:
    factory = Mock(spec=DelaySequenceFactory)
    factory.create.return_value = None
    supplier = Mock(return_value=Success(1))

    with pytest.raises(PatienceError, match=r"Received a None delay sequence"):
        make_executor(fake_clock, factory).execute(supplier, 1)
    supplier.assert_not_called()


@pytest.mark.parametrize("delay", [None, timedelta(seconds=-1), 1.0])
def test_execute_invalid_delay(fake_clock: FakeClock, delay: object) -> None:
    """Test that a None, negative or non-duration delay is fatal."""
    sequence = Mock(spec=DelaySequence)
    sequence.next_delay.return_value = delay
    factory = Mock(spec=DelaySequenceFactory)
    factory.create.return_value = sequence

    with pytest.raises(PatienceError, match=r"invalid delay"):
        make_executor(fake_clock, factory).execute(failing_supplier(), 10)


def test_execute_supplier_returns_none(fake_clock: FakeClock) -> None:
    with pytest.raises(PatienceError, match=r"Expected a Success or Failure"):
        make_executor(fake_clock, fixed(0)).execute(Mock(return_value=None), 10)


def test_execute_supplier_returns_wrong_type(fake_clock: FakeClock) -> None:
    with pytest.raises(PatienceError, match=r"Expected a Success or Failure"):
        make_executor(fake_clock, fixed(0)).execute(Mock(return_value="ok"), 10)


def test_execute_supplier_raises(fake_clock: FakeClock, mock_callback: Mock) -> None:
    """Test that an exception from the supplier aborts the run and is
    not recorded as a failure."""
    error = ConnectionError("unreachable")
    supplier = Mock(side_effect=[Failure("first"), error, Success(1)])
    executor = make_executor(
        fake_clock, fixed(0), callbacks=CallbackConfig(on_failure=mock_callback)
    )

    with pytest.raises(PatienceError, match=r"Unexpected exception") as exc_info:
        executor.execute(supplier, 10)

    assert exc_info.value.__cause__ is error
    assert supplier.call_count == 2
    mock_callback.assert_not_called()


def test_execute_supplier_raises_patience_error(fake_clock: FakeClock) -> None:
    """Test that a PatienceError from the supplier propagates unchanged."""
    error = PatienceError("defect")
    with pytest.raises(PatienceError) as exc_info:
        make_executor(fake_clock, fixed(0)).execute(Mock(side_effect=error), 10)
    assert exc_info.value is error


def test_execute_keyboard_interrupt_is_not_wrapped(fake_clock: FakeClock) -> None:
    with pytest.raises(KeyboardInterrupt):
        make_executor(fake_clock, fixed(0)).execute(Mock(side_effect=KeyboardInterrupt), 10)


def test_execute_on_attempt_error_propagates(fake_clock: FakeClock) -> None:
    """Test that an error raised by a callback is not wrapped."""
    error = KeyError("callback")
    supplier = Mock(return_value=Success(1))
    executor = make_executor(
        fake_clock, fixed(0), callbacks=CallbackConfig(on_attempt=Mock(side_effect=error))
    )

    with pytest.raises(KeyError) as exc_info:
        executor.execute(supplier, 10)

    assert exc_info.value is error
    assert not isinstance(exc_info.value, PatienceError)
    supplier.assert_not_called()


def test_execute_on_retry_error_propagates(fake_clock: FakeClock) -> None:
    error = KeyError("callback")
    supplier = failing_supplier()
    executor = make_executor(
        fake_clock, fixed(1), callbacks=CallbackConfig(on_retry=Mock(side_effect=error))
    )

    with pytest.raises(KeyError) as exc_info:
        executor.execute(supplier, 10)

    assert exc_info.value is error
    assert not isinstance(exc_info.value, PatienceError)
    supplier.assert_called_once_with()
    assert fake_clock.non_zero_sleeps == []


###################################################
#     Tests for RetryExecutor.execute_retries     #
###################################################


def test_execute_retries_zero_retries_single_attempt(fake_clock: FakeClock) -> None:
    supplier = failing_supplier()
    result = make_executor(fake_clock, fixed(1)).execute_retries(supplier, 0)

    assert result == Fail(("failure 1",))
    supplier.assert_called_once_with()
    assert fake_clock.non_zero_sleeps == []


def test_execute_retries_attempt_count(fake_clock: FakeClock) -> None:
    """Test that num_retries + 1 attempts are made."""
    supplier = failing_supplier()
    result = make_executor(fake_clock, fixed(1)).execute_retries(supplier, 2)

    assert result == Fail(("failure 1", "failure 2", "failure 3"))
    assert supplier.call_count == 3
    assert fake_clock.non_zero_sleeps == [timedelta(seconds=1), timedelta(seconds=1)]


def test_execute_retries_ignores_time(fake_clock: FakeClock) -> None:
    """Test that long delays do not stop a count based run."""
    supplier = failing_supplier()
    result = make_executor(fake_clock, exponential(2, 3600)).execute_retries(supplier, 3)

    assert len(result.failure_descriptions) == 4
    assert fake_clock.non_zero_sleeps == [
        timedelta(hours=1),
        timedelta(hours=2),
        timedelta(hours=4),
    ]


def test_execute_retries_success(fake_clock: FakeClock) -> None:
    supplier = Mock(side_effect=[Failure("a"), Success("done")])
    result = make_executor(fake_clock, fixed(0)).execute_retries(supplier, 5)

    assert result == Pass("done")
    assert supplier.call_count == 2


def test_execute_retries_invokes_callbacks(fake_clock: FakeClock) -> None:
    on_retry = Mock()
    on_failure = Mock()
    executor = make_executor(
        fake_clock,
        fixed(1),
        callbacks=CallbackConfig(on_retry=on_retry, on_failure=on_failure),
    )
    executor.execute_retries(failing_supplier(), 1)

    on_retry.assert_called_once()
    assert on_retry.call_args.args[0].attempt == 2
    on_failure.assert_called_once()
    assert on_failure.call_args.args[0].attempts == 2


@pytest.mark.parametrize("num_retries", [1.0, None, True])
def test_execute_retries_invalid_type(fake_clock: FakeClock, num_retries: object) -> None:
    supplier = Mock(return_value=Success(1))
    with pytest.raises(TypeError, match=r"num_retries must be an int"):
        make_executor(fake_clock, fixed(0)).execute_retries(supplier, num_retries)
    supplier.assert_not_called()


def test_execute_retries_negative(fake_clock: FakeClock) -> None:
    supplier = Mock(return_value=Success(1))
    with pytest.raises(ValueError, match=r"num_retries must be >= 0"):
        make_executor(fake_clock, fixed(0)).execute_retries(supplier, -1)
    supplier.assert_not_called()


def test_execute_retries_not_callable(fake_clock: FakeClock) -> None:
    with pytest.raises(TypeError, match=r"attempt_supplier must be callable"):
        make_executor(fake_clock, fixed(0)).execute_retries(None, 1)


def test_execute_retries_supplier_raises(fake_clock: FakeClock) -> None:
    error = OSError("disk")
    with pytest.raises(PatienceError) as exc_info:
        make_executor(fake_clock, fixed(0)).execute_retries(Mock(side_effect=error), 3)
    assert exc_info.value.__cause__ is error
