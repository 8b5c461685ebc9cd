r"""patience - Retry operations with fixed or exponential backoff.

This package repeatedly runs an operation until it succeeds or a maximum
total duration has elapsed, waiting between attempts according to a
delay policy.

Key Features:
    - Fixed and exponential delay sequences behind one factory contract
    - A retry executor that never sleeps past its deadline
    - Full history of failed attempts on final failure
    - Clear split between retryable failures and fatal usage errors
    - Execution handlers that ignore selected exception types
    - ``PatientWait`` and ``PatientRetry`` facades with ``get``/``check`` semantics
    - Callbacks for observability and an httpx adapter

Example:
    ```pycon
    >>> from datetime import timedelta
    >>> from patience import RetryExecutor, Success, Failure
    >>> from patience.delays import exponential
    >>> outcomes = iter([Failure("not ready"), Success("done")])
    >>> executor = RetryExecutor(exponential(2, timedelta(milliseconds=1)))
    >>> executor.execute(lambda: next(outcomes), max_duration=timedelta(seconds=5))
    Pass(value='done')

    ```
"""

from __future__ import annotations

__all__ = [
    "AttemptOutcome",
    "CallbackConfig",
    "ExponentialDelaySequenceFactory",
    "Fail",
    "Failure",
    "FixedDelaySequenceFactory",
    "Pass",
    "PatienceError",
    "PatienceRetryError",
    "PatienceTimeoutError",
    "PatientRetry",
    "PatientWait",
    "RetryConfig",
    "RetryExecutor",
    "RetryFuture",
    "RetryResult",
    "Success",
    "WaitConfig",
    "WaitFuture",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from patience.config import RetryConfig, WaitConfig
from patience.delays import ExponentialDelaySequenceFactory, FixedDelaySequenceFactory
from patience.exceptions import PatienceError, PatienceRetryError, PatienceTimeoutError
from patience.results import AttemptOutcome, Fail, Failure, Pass, RetryResult, Success
from patience.retry import CallbackConfig, RetryExecutor
from patience.retrying import PatientRetry, RetryFuture
from patience.wait import PatientWait, WaitFuture

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
