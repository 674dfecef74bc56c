"""Demo that renders a sawtooth chord through the full signal path."""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence

from modio.generators import Generator, SawtoothGenerator
from modio.session import DEFAULT_SAMPLE_RATE, AudioSession, WaveFileSink, create_session

CHORD_FREQUENCIES = (261.63, 329.63, 392.00, 32.70)


def build_chord(session: AudioSession) -> list[Generator]:
    """Add one mixer holding four sawtooth chains to the session's master."""
    mixer = session.master().add_mixer()
    chain = mixer.add_chain()
    generators: list[Generator] = [chain.set_generator(SawtoothGenerator)]
    generators.extend(
        mixer.add_chain().set_generator(SawtoothGenerator) for _ in CHORD_FREQUENCIES[1:]
    )
    for generator, frequency in zip(generators, CHORD_FREQUENCIES):
        generator.frequency = frequency
    return generators


def main(argv: Sequence[str] | None = None) -> int:
    """Render the chord to a WAV file."""
    parser = argparse.ArgumentParser(prog="modio", description=__doc__)
    parser.add_argument("--output", default="modio.wav", help="WAV file to write")
    parser.add_argument("--seconds", type=float, default=5.0, help="length to render")
    args = parser.parse_args(argv)
    if args.seconds < 0:
        parser.error("--seconds must not be negative")

    with WaveFileSink(args.output, DEFAULT_SAMPLE_RATE) as sink:
        session = create_session(sink)
        generators = build_chord(session)
        block = generators[0].sample_count
        for _ in range(math.ceil(args.seconds * DEFAULT_SAMPLE_RATE / block)):
            session.pump()
    return 0