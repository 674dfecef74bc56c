# modio

A small modular audio synthesis engine in pure Python, with no dependencies
outside the standard library.

Audio flows through a fixed pipeline:

    AudioSession <- Master <- Mixer <- Chain <- Generator

- **Signals** (`modio.signal.Signal`) are blocks of mono float samples, along
  with their sample rate, sample count and sample size. `Signal.empty()` is a
  signal that carries no audio (`valid` is `False`). `combine()` adds other
  signals into one in place, and `+` returns a new summed signal. Both raise
  `ValueError` if the other signal is shorter.
- **Generators** (`modio.generators`) are oscillators. `SawtoothGenerator`,
  `SinewaveGenerator`, `SquarewaveGenerator` and `TrianglewaveGenerator` each
  have `sample_rate` (default 48000), `sample_count` (default 1024), `amplitude`
  (default 0.05), `frequency` in Hz (default 261.63) and `phase` in radians.
  `generate()` returns a `Signal` that holds the next `sample_count` samples.
  `next_sample()` returns one sample at a time.
- **Modifiers** (`modio.modifiers`) process a signal in place. `Lowpass(cutoff)`
  runs a first-order all-pass section and adds its output back into the dry
  signal. The base classes `Component`, `Modifier` and `Modulator` are in
  `modio.components`.
- **Transports** (`modio.transports`) route the audio:
  - A `Chain` holds one generator, set with `set_generator(GeneratorClass)`,
    followed by components added with `insert_component(ComponentClass)`.
  - A `Mixer` sums the output of the chains created with `add_chain()`, then
    applies its own components.
  - The `Master` is a mixer that also sums the mixers created with
    `add_mixer()`. The master still runs the first chain added directly to it,
    but does not mix that chain's output in, so route audio through mixers.
- **Sessions** (`modio.session`) pull blocks from the master and send them to a
  sink:
  - `MemorySink(channels)` copies each mono block onto every channel. It keeps
    the interleaved samples until `drain()` returns them.
  - `WaveFileSink(path, sample_rate, channels)` writes 16-bit PCM WAV, with
    samples clipped to [-1, 1]. It can be used as a context manager, or closed
    with `close()`.
  - `AudioSession(sink, target_buffer_length)` calls `pump()` to render one
    block whenever the sink holds no more than `target_buffer_length` bytes
    (default 4096).
  - `start()` runs that loop on a background thread until `stop()` is called,
    and `is_running()` reports whether it is running.
  - `create_session(sink)` builds a session. Without a sink it uses a
    `MemorySink`.

## Installation

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Usage

```python
from modio.generators import SinewaveGenerator
from modio.session import MemorySink, create_session

sink = MemorySink(channels=1)
session = create_session(sink)

mixer = session.master().add_mixer()
generator = mixer.add_chain().set_generator(SinewaveGenerator)
generator.frequency = 440.0

session.pump()            # render one block into the sink
samples = sink.drain()    # 1024 float samples
```

## Sandbox

The `modio-sandbox` command builds a four-voice sawtooth chord on one mixer,
at 261.63, 329.63, 392.00 and 32.70 Hz, and renders it to a WAV file:

    modio-sandbox --output chord.wav --seconds 5

`--output` defaults to `modio.wav` and `--seconds` defaults to 5. From Python,
`modio.sandbox.build_chord(session)` adds the same chord to any session and
returns its generators.

## What it does not do

There is no sound-card output. Audio goes only to memory (`MemorySink`) or to a
WAV file (`WaveFileSink`). Any other output needs a sink of your own: an object
with `available()`, which returns the number of bytes queued, and
`send(signal)`.

## Text-editing core

The package also has a self-contained multi-line text-editing engine. It maps
key presses, clicks and drags onto the cursor, the selection and the
undo/redo history.

- `modio.textedit_buffer` defines the `TextBuffer` interface and
  `MonospaceBuffer`, a fixed-width buffer with one row per line. It also has
  the layout helpers `locate_coord`, `find_charpos`, `is_word_boundary`,
  `move_word_left` and `move_word_right`.
- `modio.textedit_undo` has `UndoState`, a bounded history. By default it holds
  99 records and 999 stored characters.
- `modio.textedit` has `TextEditState`, which provides `click`, `drag`, `cut`,
  `paste` and `key`, and the `Key` codes. Characters are sent as their code
  points. `Key.SHIFT` can be or'd into a movement key to extend the selection.

```python
from modio.textedit import Key, TextEditState
from modio.textedit_buffer import MonospaceBuffer

buffer = MonospaceBuffer("hello")
state = TextEditState()
state.key(buffer, Key.TEXTEND)
state.paste(buffer, " world")
state.key(buffer, Key.UNDO)
print(buffer.text())      # hello
```