r"""Retry package implementing the attempt/sleep/timeout loop.

Public API:
    - CallbackConfig: Configuration for callbacks
    - CallbackManager: Manager for callback invocations
    - RetryExecutor: Synchronous retry executor
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "CallbackManager", "RetryExecutor"]

from patience.retry.config import CallbackConfig
from patience.retry.executor import RetryExecutor
from patience.retry.manager import CallbackManager
