r"""Utility functions for duration handling and sleeping."""

from __future__ import annotations

__all__ = ["sleep_for", "to_timedelta", "validate_duration", "validate_num_retries"]

from patience.utils.sleep import sleep_for
from patience.utils.validation import to_timedelta, validate_duration, validate_num_retries
