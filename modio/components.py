"""Base classes for the processing stages of an audio chain."""

from __future__ import annotations

from abc import ABC, abstractmethod

from modio.signal import Signal


class Component(ABC):
    """A stage that transforms a signal in place."""

    @abstractmethod
    def process(self, signal: Signal) -> None:
        """Transform ``signal`` in place."""


class Modifier(Component):
    """An effect applied to the signal passing through a transport."""

    @abstractmethod
    def process(self, signal: Signal) -> None:
        """Apply the effect to ``signal`` in place."""


class Modulator(ABC):
    """Something that changes parameters of other stages over time."""

    @abstractmethod
    def process(self) -> None:
        """Advance the modulation by one step."""