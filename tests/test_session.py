import time
import wave

import pytest

from modio.generators import SinewaveGenerator
from modio.session import AudioSession, MemorySink, WaveFileSink, create_session
from modio.signal import Signal
from modio.transports import Master


def _sine_session(sink=None, target=4096):
    session = AudioSession(sink, target)
    session.master().add_mixer().add_chain().set_generator(SinewaveGenerator)
    return session


def test_memory_sink_rejects_zero_channels():
    with pytest.raises(ValueError):
        MemorySink(0)


def test_pump_without_generators_sends_nothing():
    session = AudioSession(MemorySink(1))
    assert session.pump() is False
    assert session.sink.available() == 0


def test_pump_sends_master_output():
    sink = MemorySink(1)
    session = _sine_session(sink)
    assert session.pump() is True
    assert sink.drain() == SinewaveGenerator().generate().buffer


def test_pump_waits_while_sink_is_full():
    sink = MemorySink(1)
    session = _sine_session(sink, target=0)
    assert session.pump() is True
    queued = sink.available()
    assert session.pump() is False
    assert sink.available() == queued


def test_start_and_stop():
    sink = MemorySink(2)
    session = _sine_session(sink)
    assert session.is_running() is False
    session.start()
    assert session.is_running() is True
    deadline = time.monotonic() + 5.0
    while sink.available() <= session.target_buffer_length and time.monotonic() < deadline:
        time.sleep(0.01)
    session.stop()
    assert session.is_running() is False
    assert sink.available() > session.target_buffer_length


def test_context_manager_stops_session():
    with _sine_session(MemorySink()) as session:
        session.start()
        assert session.is_running() is True
    assert session.is_running() is False


def test_create_session_defaults():
    session = create_session()
    assert isinstance(session.master(), Master)
    assert isinstance(session.sink, MemorySink)
    assert session.sink.channels == 2
    assert session.target_buffer_length == 4096


def test_create_session_uses_given_sink():
    sink = MemorySink(1)
    assert create_session(sink).sink is sink


def test_wave_file_sink_writes_frames(tmp_path):
    path = tmp_path / "out.wav"
    sink = WaveFileSink(path, 48000, 2)
    assert sink.available() == 0
    sink.send(SinewaveGenerator().generate())
    sink.close()
    with wave.open(str(path), "rb") as reader:
        assert reader.getnchannels() == 2
        assert reader.getframerate() == 48000
        assert reader.getsampwidth() == 2
        assert reader.getnframes() == 1024


def test_wave_file_sink_clips(tmp_path):
    path = tmp_path / "clip.wav"
    with WaveFileSink(path, 48000, 1) as sink:
        sink.send(Signal([2.0, -2.0, 0.0], 48000, 3))
    with wave.open(str(path), "rb") as reader:
        data = reader.readframes(3)
    assert data == b"\xff\x7f\x01\x80\x00\x00"


def test_wave_file_sink_refuses_after_close(tmp_path):
    sink = WaveFileSink(tmp_path / "closed.wav")
    sink.close()
    with pytest.raises(ValueError):
        sink.send(Signal([0.0], 48000, 1))