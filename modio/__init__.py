"""A modular audio synthesis engine: signals, oscillators, effects, mixers, sessions and a text-editing core."""

__version__ = "0.1.0"