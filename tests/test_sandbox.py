import wave

import pytest

from modio.generators import SawtoothGenerator
from modio.sandbox import build_chord, main
from modio.session import AudioSession, MemorySink


def test_build_chord_frequencies():
    session = AudioSession(MemorySink(1))
    generators = build_chord(session)
    assert [g.frequency for g in generators] == [261.63, 329.63, 392.00, 32.70]
    assert all(isinstance(g, SawtoothGenerator) for g in generators)
    mixers = session.master().mixers
    assert len(mixers) == 1
    assert [chain.generator for chain in mixers[0].chains] == generators


def test_build_chord_output_is_sum_of_voices():
    sink = MemorySink(1)
    session = AudioSession(sink)
    build_chord(session)
    assert session.pump() is True
    references = []
    for frequency in (261.63, 329.63, 392.00, 32.70):
        generator = SawtoothGenerator()
        generator.frequency = frequency
        references.append(generator.generate())
    expected = references[0]
    for other in references[1:]:
        expected = expected + other
    assert sink.drain() == expected.buffer


def test_main_writes_wave(tmp_path):
    path = tmp_path / "chord.wav"
    assert main(["--output", str(path), "--seconds", "0.1"]) == 0
    with wave.open(str(path), "rb") as reader:
        frames = reader.getnframes()
        assert reader.getnchannels() == 2
        assert reader.getframerate() == 48000
    assert frames % 1024 == 0
    assert 4800 <= frames < 4800 + 1024


def test_main_rejects_negative_length(tmp_path):
    with pytest.raises(SystemExit):
        main(["--output", str(tmp_path / "x.wav"), "--seconds", "-1"])