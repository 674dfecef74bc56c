"""Oscillators that produce blocks of samples."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from modio.signal import PI, SAMPLE_SIZE, TWO_PI, Signal


class Generator(ABC):
    """An oscillator that fills signals with successive samples.

    ``amplitude`` is the volume (0.0 - 1.0), ``frequency`` is in Hz and
    ``phase`` is an offset in radians.
    """

    def __init__(
        self,
        sample_rate: int = 48000,
        sample_count: int = 1024,
        amplitude: float = 0.05,
        frequency: float = 261.63,
        phase: float = 0.0,
    ) -> None:
        self.sample_size = SAMPLE_SIZE
        self.sample_rate = sample_rate
        self.sample_count = sample_count
        self.amplitude = amplitude
        self.frequency = frequency
        self.phase = phase
        self._phi = 0.0

    @property
    def phi(self) -> float:
        """Current phase of the oscillator in radians, in [0, 2*pi)."""
        return self._phi

    def create_signal(self) -> Signal:
        """Return a zeroed signal in this generator's format."""
        return Signal(
            [0.0] * self.sample_count,
            self.sample_rate,
            self.sample_count,
            self.sample_size,
        )

    def generate(self) -> Signal:
        """Return a signal holding the next ``sample_count`` samples."""
        signal = self.create_signal()
        signal.buffer = [self.next_sample() for _ in range(signal.sample_count)]
        return signal

    @abstractmethod
    def next_sample(self) -> float:
        """Return the next sample and advance the oscillator."""

    def _angle(self) -> float:
        return self._phi + self.phase

    def _advance(self) -> None:
        self._phi += TWO_PI * self.frequency / self.sample_rate
        if self._phi >= TWO_PI:
            self._phi -= TWO_PI
        elif self._phi < 0.0:
            self._phi += TWO_PI


class SawtoothGenerator(Generator):
    """Sawtooth wave ranging over +/- amplitude * pi / 2."""

    def next_sample(self) -> float:
        saw = 2.0 * math.atan(math.tan(self._angle() / 2.0))
        result = 0.5 * self.amplitude * saw
        self._advance()
        return result


class SinewaveGenerator(Generator):
    """Sine wave."""

    def next_sample(self) -> float:
        result = self.amplitude * math.sin(self._angle())
        self._advance()
        return result


class SquarewaveGenerator(Generator):
    """Square wave taking the sign of the matching sine wave."""

    def next_sample(self) -> float:
        sine = math.sin(self._angle())
        square = float(sine > 0) - float(sine < 0)
        result = self.amplitude * square
        self._advance()
        return result


class TrianglewaveGenerator(Generator):
    """Triangle wave."""

    def next_sample(self) -> float:
        triangle = math.asin(math.sin(self._angle()))
        result = (2.0 * self.amplitude / PI) * triangle
        self._advance()
        return result