"""Audio sessions pull blocks from the master and hand them to a sink."""

from __future__ import annotations

import logging
import struct
import threading
import time
import wave
from os import PathLike
from typing import Protocol

from modio.signal import SAMPLE_SIZE, Signal
from modio.transports import Master

logger = logging.getLogger(__name__)

DEFAULT_TARGET_BUFFER_LENGTH = 4096
DEFAULT_SAMPLE_RATE = 48000
DEFAULT_CHANNELS = 2


class _Sink(Protocol):
    def available(self) -> int: ...

    def send(self, signal: Signal) -> None: ...


class MemorySink:
    """Keeps mono signals as interleaved multi-channel float samples in memory."""

    def __init__(self, channels: int = DEFAULT_CHANNELS) -> None:
        if channels < 1:
            raise ValueError("a sink needs at least one channel")
        self.channels = channels
        self._samples: list[float] = []
        self._lock = threading.Lock()

    def available(self) -> int:
        """Number of bytes queued and not yet drained."""
        with self._lock:
            return len(self._samples) * SAMPLE_SIZE

    def send(self, signal: Signal) -> None:
        """Queue the samples of ``signal``, copied onto every channel."""
        frames = [
            value
            for sample in signal.buffer[: signal.sample_count]
            for value in (sample,) * self.channels
        ]
        with self._lock:
            self._samples.extend(frames)

    def drain(self) -> list[float]:
        """Return every queued sample and empty the queue."""
        with self._lock:
            samples, self._samples = self._samples, []
        return samples


class WaveFileSink:
    """Writes signals to a 16-bit PCM WAV file."""

    def __init__(
        self,
        path: str | PathLike[str],
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        channels: int = DEFAULT_CHANNELS,
    ) -> None:
        self.path = path
        self.sample_rate = sample_rate
        self.channels = channels
        self._file: wave.Wave_write | None = wave.open(str(path), "wb")
        self._file.setnchannels(channels)
        self._file.setsampwidth(2)
        self._file.setframerate(sample_rate)
        self._lock = threading.Lock()

    def available(self) -> int:
        """Bytes waiting to be written; the file takes data at once."""
        return 0

    def send(self, signal: Signal) -> None:
        """Append the samples of ``signal``, clipped to [-1, 1]."""
        frames = bytearray()
        for sample in signal.buffer[: signal.sample_count]:
            value = int(round(max(-1.0, min(1.0, sample)) * 32767))
            frames += struct.pack("<h", value) * self.channels
        with self._lock:
            if self._file is None:
                raise ValueError("the sink is closed")
            self._file.writeframes(bytes(frames))

    def close(self) -> None:
        """Finish the WAV file."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> WaveFileSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AudioSession:
    """Runs the master on a background thread and feeds its output to a sink."""

    def __init__(
        self,
        sink: _Sink | None = None,
        target_buffer_length: int = DEFAULT_TARGET_BUFFER_LENGTH,
    ) -> None:
        self.sink: _Sink = sink if sink is not None else MemorySink()
        self.target_buffer_length = target_buffer_length
        self._master = Master()
        self._playing = threading.Event()
        self._thread: threading.Thread | None = None

    def master(self) -> Master:
        """The master transport whose output this session plays."""
        return self._master

    def pump(self) -> bool:
        """Send one block to the sink if it is low; return whether one was sent."""
        if self.sink.available() > self.target_buffer_length:
            return False
        signal = self._master.process()
        if not signal.valid:
            return False
        self.sink.send(signal)
        return True

    def _audio_loop(self) -> None:
        logger.info("audio thread running")
        while self._playing.is_set():
            if not self.pump():
                time.sleep(0.001)
        logger.info("audio thread terminated")

    def start(self) -> None:
        """Start playing on a background thread."""
        if self._playing.is_set():
            return
        self._playing.set()
        self._thread = threading.Thread(target=self._audio_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop playing and wait for the audio thread to finish."""
        self._playing.clear()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)

    def is_running(self) -> bool:
        """Whether the session is playing."""
        return self._playing.is_set()

    def __enter__(self) -> AudioSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


def create_session(sink: _Sink | None = None) -> AudioSession:
    """Return a new session feeding ``sink`` (an in-memory sink by default)."""
    return AudioSession(sink)