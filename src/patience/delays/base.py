r"""Abstract base classes for delay sequences and their factories."""

from __future__ import annotations

__all__ = ["DelaySequence", "DelaySequenceFactory"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import timedelta


class DelaySequence(ABC):
    """Stateful generator of successive wait durations for one retry run.

    A delay sequence is created at the start of a retry run and discarded
    at its end. It must never be shared between runs.

    Sequences are also iterators, so ``next(sequence)`` is the same as
    ``sequence.next_delay()``.
    """

    @abstractmethod
    def next_delay(self) -> timedelta:
        """Return the next wait duration and advance the sequence.

        Returns:
            The non-negative duration to wait before the next attempt.
        """

    def __iter__(self) -> Iterator[timedelta]:
        return self

    def __next__(self) -> timedelta:
        return self.next_delay()


class DelaySequenceFactory(ABC):
    """Factory of independent delay sequences.

    A factory is immutable and may be shared by many concurrent retry
    runs. Every call to ``create`` must return a new sequence in its
    initial state, so advancing one sequence never affects another.
    """

    @abstractmethod
    def create(self) -> DelaySequence:
        """Create a new delay sequence in its initial state.

        Returns:
            A fresh delay sequence.
        """
