r"""Unit tests for the delay sequence base classes."""

from __future__ import annotations

from datetime import timedelta

import pytest

from patience.delays import DelaySequence, DelaySequenceFactory


class CountingSequence(DelaySequence):
    def __init__(self) -> None:
        self.count = 0

    def next_delay(self) -> timedelta:
        self.count += 1
        return timedelta(seconds=self.count)


class CountingFactory(DelaySequenceFactory):
    def create(self) -> CountingSequence:
        return CountingSequence()


def test_delay_sequence_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        DelaySequence()


def test_delay_sequence_factory_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        DelaySequenceFactory()


def test_delay_sequence_iteration_uses_next_delay() -> None:
    """Test that iterating a sequence returns next_delay values."""
    sequence = CountingFactory().create()
    assert next(sequence) == timedelta(seconds=1)
    assert sequence.next_delay() == timedelta(seconds=2)
    assert next(iter(sequence)) == timedelta(seconds=3)
