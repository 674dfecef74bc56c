"""Blocks of audio samples passed between generators, modifiers and mixers."""

from __future__ import annotations

import math
from collections.abc import Iterable

PI = math.pi
TWO_PI = 2.0 * PI

SAMPLE_SIZE = 4
"""Size in bytes of one 32-bit float sample."""


class Signal:
    """A block of mono float samples with its format description."""

    __slots__ = ("buffer", "sample_rate", "sample_count", "sample_size", "valid")

    def __init__(
        self,
        buffer: Iterable[float],
        sample_rate: int,
        sample_count: int,
        sample_size: int = SAMPLE_SIZE,
    ) -> None:
        self.buffer = [float(sample) for sample in buffer]
        self.sample_rate = sample_rate
        self.sample_count = sample_count
        self.sample_size = sample_size
        self.valid = True

    @classmethod
    def empty(cls) -> Signal:
        """Return a signal that carries no audio."""
        signal = cls([], 0, 0, 0)
        signal.valid = False
        return signal

    @property
    def buffer_length(self) -> int:
        """Size of the sample data in bytes."""
        return self.sample_size * self.sample_count

    def _check_compatible(self, other: Signal) -> None:
        if other.sample_count < self.sample_count or len(other.buffer) < self.sample_count:
            raise ValueError(
                f"signal holds {other.sample_count} samples, "
                f"at least {self.sample_count} are needed"
            )

    def combine(self, *args: Signal) -> None:
        """Add the samples of each given signal into this one."""
        for other in args:
            self._check_compatible(other)
        for other in args:
            self.buffer[: self.sample_count] = [
                mine + theirs
                for mine, theirs in zip(self.buffer[: self.sample_count], other.buffer)
            ]

    def __add__(self, other: object) -> Signal:
        if not isinstance(other, Signal):
            return NotImplemented
        self._check_compatible(other)
        summed = [mine + theirs for mine, theirs in zip(self.buffer[: self.sample_count], other.buffer)]
        return Signal(summed, self.sample_rate, self.sample_count, self.sample_size)

    def __repr__(self) -> str:
        return (
            f"Signal(sample_rate={self.sample_rate}, sample_count={self.sample_count}, "
            f"sample_size={self.sample_size}, valid={self.valid})"
        )