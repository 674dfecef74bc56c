"""Transports route generated signals through effects and mix them together.

The signal path is: generator -> chain -> mixer -> master -> session.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

from modio.components import Component
from modio.generators import Generator
from modio.signal import Signal

ComponentT = TypeVar("ComponentT", bound=Component)
GeneratorT = TypeVar("GeneratorT", bound=Generator)


class Transport(ABC):
    """Something that produces a signal and runs it through its components."""

    def __init__(self) -> None:
        self.components: list[Component] = []

    def insert_component(self, component_type: type[ComponentT]) -> ComponentT:
        """Create a component of ``component_type``, append it and return it."""
        component = component_type()
        self.components.append(component)
        return component

    def _apply_components(self, signal: Signal) -> None:
        for component in self.components:
            component.process(signal)

    @staticmethod
    def _accumulate(main: Signal, signal: Signal) -> Signal:
        if not main.valid:
            return signal
        if signal.valid:
            main.combine(signal)
        return main

    @abstractmethod
    def process(self) -> Signal:
        """Produce the next block of audio."""


class Chain(Transport):
    """A generator followed by a series of effects."""

    def __init__(self) -> None:
        super().__init__()
        self.generator: Generator | None = None

    @property
    def ready(self) -> bool:
        """Whether the chain has a generator to draw from."""
        return self.generator is not None

    def set_generator(self, generator_type: type[GeneratorT]) -> GeneratorT:
        """Replace the chain's generator with a new ``generator_type``."""
        generator = generator_type()
        self.generator = generator
        return generator

    def process(self) -> Signal:
        """Generate a block and run it through the chain's components."""
        if self.generator is None:
            return Signal.empty()
        signal = self.generator.generate()
        self._apply_components(signal)
        return signal


class Mixer(Transport):
    """Sums the output of several chains, then applies its own components."""

    def __init__(self) -> None:
        super().__init__()
        self.chains: list[Chain] = []

    def add_chain(self) -> Chain:
        """Create a chain, add it to the mixer and return it."""
        chain = Chain()
        self.chains.append(chain)
        return chain

    def process(self) -> Signal:
        """Mix every chain's next block into one signal."""
        if not self.chains:
            return Signal.empty()
        main = self.chains[0].process()
        for chain in self.chains[1:]:
            main = self._accumulate(main, chain.process())
        self._apply_components(main)
        return main


class Master(Mixer):
    """The final mixer, whose output goes to the audio session.

    Chains added straight to the master are all run, but the output of the
    first of them is not mixed in; route audio through mixers instead.
    """

    def __init__(self) -> None:
        super().__init__()
        self.mixers: list[Mixer] = []

    def add_mixer(self) -> Mixer:
        """Create a mixer, add it to the master and return it."""
        mixer = Mixer()
        self.mixers.append(mixer)
        return mixer

    def process(self) -> Signal:
        """Mix the chains and mixers into the final signal."""
        main = Signal.empty()
        if self.chains:
            self.chains[0].process()
        for chain in self.chains[1:]:
            main = self._accumulate(main, chain.process())
        for mixer in self.mixers:
            main = self._accumulate(main, mixer.process())
        self._apply_components(main)
        return main