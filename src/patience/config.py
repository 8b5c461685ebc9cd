r"""Configuration dataclasses and defaults for the wait and retry facades.

This module provides configuration constants and dataclass-based
configuration objects for the ``PatientWait`` and ``PatientRetry``
facades.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_FAILURE_MESSAGE",
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_NUMBER_OF_RETRIES",
    "DEFAULT_RETRY_FAILURE_MESSAGE",
    "DEFAULT_TIMEOUT",
    "RetryConfig",
    "WaitConfig",
]

from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from patience.delays.base import DelaySequenceFactory
from patience.delays.fixed import FixedDelaySequenceFactory
from patience.execution import ExecutionHandler, SimpleExecutionHandler
from patience.utils.validation import validate_duration, validate_num_retries

if TYPE_CHECKING:
    from patience.retry.config import CallbackConfig

# No wait before the first attempt
DEFAULT_INITIAL_DELAY = timedelta(0)

# A zero timeout means a single attempt
DEFAULT_TIMEOUT = timedelta(0)

# Total attempts = number of retries + 1 (initial attempt)
DEFAULT_NUMBER_OF_RETRIES = 0

DEFAULT_FAILURE_MESSAGE = (
    "Didn't receive a valid result from the executable within the given timeout"
)

DEFAULT_RETRY_FAILURE_MESSAGE = (
    "Didn't receive a valid result from the executable within the given number of retries"
)


def _check_components(delay_factory: object, execution_handler: object) -> None:
    if not isinstance(delay_factory, DelaySequenceFactory):
        msg = f"delay_factory must be a DelaySequenceFactory, got {delay_factory!r}"
        raise TypeError(msg)
    if not isinstance(execution_handler, ExecutionHandler):
        msg = f"execution_handler must be an ExecutionHandler, got {execution_handler!r}"
        raise TypeError(msg)


@dataclass(frozen=True)
class WaitConfig:
    """Configuration for PatientWait behavior.

    Durations may be given as ``timedelta`` or as a number of seconds;
    they are stored as ``timedelta``.

    Args:
        initial_delay: Wait before the first attempt. Must be >= 0.
        default_timeout: Max duration used when ``get``/``check`` are
            called without a timeout. Must be >= 0.
        delay_factory: Delay factory used between attempts. Defaults to
            a zero fixed delay.
        execution_handler: Handler turning calls into attempt outcomes.
            Defaults to ``SimpleExecutionHandler``.
        callbacks: Optional lifecycle callbacks.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If a duration is negative.

    Example:
        ```pycon
        >>> from patience.config import WaitConfig
        >>> config = WaitConfig(default_timeout=5)
        >>> config.default_timeout
        datetime.timedelta(seconds=5)
        >>> config.merge(default_timeout=10).default_timeout
        datetime.timedelta(seconds=10)
        >>> config.default_timeout  # Original unchanged
        datetime.timedelta(seconds=5)

        ```
    """

    initial_delay: timedelta = DEFAULT_INITIAL_DELAY
    default_timeout: timedelta = DEFAULT_TIMEOUT
    delay_factory: DelaySequenceFactory = field(
        default_factory=lambda: FixedDelaySequenceFactory(timedelta(0))
    )
    execution_handler: ExecutionHandler = field(default_factory=SimpleExecutionHandler)
    callbacks: CallbackConfig | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "initial_delay", validate_duration(self.initial_delay, "initial_delay")
        )
        object.__setattr__(
            self, "default_timeout", validate_duration(self.default_timeout, "default_timeout")
        )
        _check_components(self.delay_factory, self.execution_handler)

    def merge(self, **overrides: Any) -> WaitConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new WaitConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for PatientRetry behavior.

    Args:
        initial_delay: Wait before the first attempt. Must be >= 0.
        default_number_of_retries: Number of retries used when
            ``get``/``check`` are called without one. Must be >= 0.
        delay_factory: Delay factory used between attempts. Defaults to
            a zero fixed delay.
        execution_handler: Handler turning calls into attempt outcomes.
            Defaults to ``SimpleExecutionHandler``.
        callbacks: Optional lifecycle callbacks.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If initial_delay or default_number_of_retries is
            negative.

    Example:
        ```pycon
        >>> from patience.config import RetryConfig
        >>> RetryConfig(default_number_of_retries=3).default_number_of_retries
        3

        ```
    """

    initial_delay: timedelta = DEFAULT_INITIAL_DELAY
    default_number_of_retries: int = DEFAULT_NUMBER_OF_RETRIES
    delay_factory: DelaySequenceFactory = field(
        default_factory=lambda: FixedDelaySequenceFactory(timedelta(0))
    )
    execution_handler: ExecutionHandler = field(default_factory=SimpleExecutionHandler)
    callbacks: CallbackConfig | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "initial_delay", validate_duration(self.initial_delay, "initial_delay")
        )
        validate_num_retries(self.default_number_of_retries, "default_number_of_retries")
        _check_components(self.delay_factory, self.execution_handler)

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
