"""Effects applied to signals."""

from __future__ import annotations

import math

from modio.components import Modifier
from modio.signal import PI, Signal


class Lowpass(Modifier):
    """First-order all-pass section mixed back into the dry signal."""

    def __init__(self, cutoff: float = 200.0) -> None:
        self.cutoff = cutoff

    def process(self, signal: Signal) -> None:
        """Filter ``signal`` in place."""
        samples = signal.buffer[: signal.sample_count]
        if not samples:
            return
        freq_tan = math.tan(PI * self.cutoff / signal.sample_rate)
        a1 = (freq_tan - 1.0) / (freq_tan + 1.0)

        filtered = []
        previous = 0.0
        for sample in samples:
            out = a1 * sample + previous
            previous = sample - a1 * out
            filtered.append(out)

        signal.buffer[: signal.sample_count] = [
            dry + wet for dry, wet in zip(samples, filtered)
        ]