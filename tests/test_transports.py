import pytest

from modio.components import Modifier
from modio.generators import SawtoothGenerator, SinewaveGenerator, SquarewaveGenerator
from modio.modifiers import Lowpass
from modio.signal import Signal
from modio.transports import Chain, Master, Mixer, Transport


class Doubler(Modifier):
    def process(self, signal: Signal) -> None:
        signal.buffer = [sample * 2 for sample in signal.buffer]


def test_transport_is_abstract():
    with pytest.raises(TypeError):
        Transport()


def test_chain_without_generator_is_invalid():
    chain = Chain()
    assert chain.ready is False
    assert chain.process().valid is False


def test_set_generator_returns_new_instance():
    chain = Chain()
    first = chain.set_generator(SinewaveGenerator)
    assert isinstance(first, SinewaveGenerator)
    assert chain.generator is first
    second = chain.set_generator(SquarewaveGenerator)
    assert isinstance(second, SquarewaveGenerator)
    assert chain.generator is second
    assert chain.ready is True


def test_chain_output_matches_generator():
    chain = Chain()
    chain.set_generator(SinewaveGenerator)
    reference = SinewaveGenerator()
    for _ in range(2):
        signal = chain.process()
        expected = reference.generate()
        assert signal.valid
        assert signal.buffer == expected.buffer
        assert signal.sample_count == expected.sample_count


def test_insert_component_returns_instance_and_is_applied():
    chain = Chain()
    chain.set_generator(SawtoothGenerator)
    doubler = chain.insert_component(Doubler)
    assert isinstance(doubler, Doubler)
    assert chain.components == [doubler]
    reference = SawtoothGenerator().generate()
    assert chain.process().buffer == [sample * 2 for sample in reference.buffer]


def test_components_run_in_insertion_order():
    chain = Chain()
    chain.set_generator(SinewaveGenerator)
    chain.insert_component(Lowpass)
    chain.insert_component(Doubler)
    reference = SinewaveGenerator().generate()
    Lowpass().process(reference)
    assert chain.process().buffer == [sample * 2 for sample in reference.buffer]


def test_empty_mixer_is_invalid():
    assert Mixer().process().valid is False


def test_mixer_sums_chains():
    mixer = Mixer()
    mixer.add_chain().set_generator(SinewaveGenerator)
    mixer.add_chain().set_generator(SawtoothGenerator)
    expected = SinewaveGenerator().generate() + SawtoothGenerator().generate()
    result = mixer.process()
    assert result.valid
    assert result.buffer == expected.buffer


def test_mixer_skips_chains_without_generator():
    mixer = Mixer()
    mixer.add_chain()
    mixer.add_chain().set_generator(SquarewaveGenerator)
    mixer.add_chain()
    expected = SquarewaveGenerator().generate()
    assert mixer.process().buffer == expected.buffer


def test_mixer_applies_its_components():
    mixer = Mixer()
    mixer.add_chain().set_generator(SinewaveGenerator)
    mixer.insert_component(Doubler)
    expected = SinewaveGenerator().generate()
    assert mixer.process().buffer == [sample * 2 for sample in expected.buffer]


def test_empty_master_is_invalid():
    assert Master().process().valid is False


def test_master_sums_mixers():
    master = Master()
    first = master.add_mixer()
    second = master.add_mixer()
    assert master.mixers == [first, second]
    first.add_chain().set_generator(SinewaveGenerator)
    second.add_chain().set_generator(SquarewaveGenerator)
    expected = SinewaveGenerator().generate() + SquarewaveGenerator().generate()
    assert master.process().buffer == expected.buffer


def test_master_runs_but_drops_first_direct_chain():
    master = Master()
    generator = master.add_chain().set_generator(SinewaveGenerator)
    assert master.process().valid is False
    assert generator.phi > 0.0


def test_master_mixes_later_direct_chains():
    master = Master()
    master.add_chain().set_generator(SawtoothGenerator)
    master.add_chain().set_generator(SinewaveGenerator)
    expected = SinewaveGenerator().generate()
    assert master.process().buffer == expected.buffer


def test_master_components_apply():
    master = Master()
    master.add_mixer().add_chain().set_generator(SinewaveGenerator)
    master.insert_component(Doubler)
    expected = SinewaveGenerator().generate()
    assert master.process().buffer == [sample * 2 for sample in expected.buffer]