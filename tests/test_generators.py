import math

import pytest

from modio.generators import (
    Generator,
    SawtoothGenerator,
    SinewaveGenerator,
    SquarewaveGenerator,
    TrianglewaveGenerator,
)
from modio.signal import SAMPLE_SIZE, TWO_PI


def test_generator_base_is_abstract():
    with pytest.raises(TypeError):
        Generator()


def test_defaults():
    gen = SinewaveGenerator()
    assert gen.sample_rate == 48000
    assert gen.sample_count == 1024
    assert gen.amplitude == pytest.approx(0.05)
    assert gen.frequency == pytest.approx(261.63)
    assert gen.phase == 0.0
    assert gen.phi == 0.0


def test_create_signal_format():
    gen = SinewaveGenerator(sample_rate=22050, sample_count=16)
    signal = gen.create_signal()
    assert signal.valid
    assert signal.sample_rate == 22050
    assert signal.sample_count == 16
    assert signal.buffer_length == 16 * SAMPLE_SIZE
    assert signal.buffer == [0.0] * 16


@pytest.mark.parametrize(
    "cls", [SawtoothGenerator, SinewaveGenerator, SquarewaveGenerator, TrianglewaveGenerator]
)
def test_generate_fills_sample_count(cls):
    gen = cls(sample_count=64)
    signal = gen.generate()
    assert signal.valid
    assert len(signal.buffer) == 64


@pytest.mark.parametrize(
    "cls", [SawtoothGenerator, SinewaveGenerator, SquarewaveGenerator, TrianglewaveGenerator]
)
def test_consecutive_blocks_continue_phase(cls):
    split = cls(sample_count=8, frequency=1000.0)
    whole = cls(sample_count=16, frequency=1000.0)
    joined = split.generate().buffer + split.generate().buffer
    assert joined == pytest.approx(whole.generate().buffer)


@pytest.mark.parametrize(
    "cls", [SawtoothGenerator, SinewaveGenerator, SquarewaveGenerator, TrianglewaveGenerator]
)
@pytest.mark.parametrize("frequency", [440.0, 12000.0, -300.0])
def test_phase_stays_in_range(cls, frequency):
    gen = cls(sample_count=500, frequency=frequency)
    for _ in range(3):
        gen.generate()
        assert 0.0 <= gen.phi < TWO_PI


def test_phase_wraps_after_full_cycle():
    gen = SinewaveGenerator(sample_rate=100, frequency=100.0)
    gen.next_sample()
    assert gen.phi == pytest.approx(0.0, abs=1e-9)


def test_sine_quarter_rate_cycle():
    amp = 0.5
    gen = SinewaveGenerator(sample_rate=400, sample_count=4, amplitude=amp, frequency=100.0)
    assert gen.generate().buffer == pytest.approx([0.0, amp, 0.0, -amp], abs=1e-9)


def test_sine_phase_offset_starts_at_peak():
    amp = 0.3
    gen = SinewaveGenerator(amplitude=amp, phase=math.pi / 2)
    assert gen.next_sample() == pytest.approx(amp)


def test_square_quarter_rate_cycle():
    amp = 0.25
    gen = SquarewaveGenerator(
        sample_rate=400, sample_count=4, amplitude=amp, frequency=100.0, phase=math.pi / 4
    )
    assert gen.generate().buffer == [amp, amp, -amp, -amp]


def test_square_values_are_sign_times_amplitude():
    amp = 0.2
    gen = SquarewaveGenerator(sample_count=256, amplitude=amp, frequency=777.0)
    assert set(gen.generate().buffer) <= {-amp, 0.0, amp}


def test_triangle_quarter_rate_cycle():
    amp = 0.4
    gen = TrianglewaveGenerator(sample_rate=400, sample_count=4, amplitude=amp, frequency=100.0)
    assert gen.generate().buffer == pytest.approx([0.0, amp, 0.0, -amp], abs=1e-9)


@pytest.mark.parametrize("cls", [SinewaveGenerator, SquarewaveGenerator, TrianglewaveGenerator])
def test_bounded_by_amplitude(cls):
    amp = 0.7
    gen = cls(sample_count=512, amplitude=amp, frequency=523.0)
    assert all(abs(s) <= amp + 1e-12 for s in gen.generate().buffer)


def test_sawtooth_bounded_and_rising():
    amp = 0.6
    gen = SawtoothGenerator(sample_rate=1000, sample_count=100, amplitude=amp, frequency=1.0)
    samples = gen.generate().buffer
    assert all(abs(s) <= 0.5 * amp * math.pi + 1e-12 for s in samples)
    assert all(b > a for a, b in zip(samples, samples[1:]))
    assert samples[0] == pytest.approx(0.0)