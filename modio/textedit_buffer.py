"""Text buffers and the layout queries a text-editing widget runs over them.

A buffer is an indexable run of characters that can also describe how its
characters are laid out in rows.  The functions here walk that layout to map
between character positions and display coordinates, and to find word
boundaries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

NEWLINE = "\n"


@dataclass
class TextRow:
    """Layout of one displayed row of characters.

    ``x0``/``x1`` are the start and end x positions, ``baseline_y_delta`` is
    the distance from the previous row's baseline, ``ymin``/``ymax`` are the
    extents above and below the baseline and ``num_chars`` is how many
    characters the row holds.
    """

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


@dataclass
class FindState:
    """Display position of a character and of the row holding it."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


class TextBuffer(ABC):
    """A string being edited, together with its layout."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of characters in the buffer."""

    @abstractmethod
    def layout_row(self, start: int) -> TextRow:
        """Lay out the row of characters beginning at ``start``."""

    @abstractmethod
    def char_width(self, row_start: int, index: int) -> float:
        """Width of the ``index``-th character of the row starting at ``row_start``."""

    @abstractmethod
    def char_at(self, index: int) -> str:
        """Return the character at ``index``."""

    @abstractmethod
    def delete_chars(self, index: int, count: int) -> None:
        """Remove ``count`` characters starting at ``index``."""

    @abstractmethod
    def insert_chars(self, index: int, chars: Iterable[str]) -> bool:
        """Insert ``chars`` at ``index``; return whether they were inserted."""


class MonospaceBuffer(TextBuffer):
    """A buffer laid out in fixed-width cells, one row per line of text.

    Newline characters end their row and take up no width.
    """

    def __init__(self, text: str = "", char_width: float = 1.0, line_height: float = 1.0) -> None:
        if char_width <= 0:
            raise ValueError("character width must be positive")
        if line_height <= 0:
            raise ValueError("line height must be positive")
        self._chars = list(text)
        self.glyph_width = float(char_width)
        self.line_height = float(line_height)

    def text(self) -> str:
        """The buffer's contents as a string."""
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def layout_row(self, start: int) -> TextRow:
        length = len(self._chars)
        if start >= length:
            return TextRow(0.0, 0.0, self.line_height, 0.0, self.line_height, 0)
        try:
            end = self._chars.index(NEWLINE, start) + 1
            visible = end - start - 1
        except ValueError:
            end = length
            visible = end - start
        return TextRow(
            x0=0.0,
            x1=visible * self.glyph_width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=end - start,
        )

    def char_width(self, row_start: int, index: int) -> float:
        if self.char_at(row_start + index) == NEWLINE:
            return 0.0
        return self.glyph_width

    def char_at(self, index: int) -> str:
        if not 0 <= index < len(self._chars):
            raise IndexError(f"character index {index} out of range")
        return self._chars[index]

    def delete_chars(self, index: int, count: int) -> None:
        if count < 0 or index < 0 or index + count > len(self._chars):
            raise IndexError(f"cannot delete {count} characters at {index}")
        del self._chars[index : index + count]

    def insert_chars(self, index: int, chars: Iterable[str]) -> bool:
        if not 0 <= index <= len(self._chars):
            raise IndexError(f"insert position {index} out of range")
        self._chars[index:index] = list(chars)
        return True

    def __repr__(self) -> str:
        return f"MonospaceBuffer({self.text()!r}, {self.glyph_width}, {self.line_height})"


def locate_coord(buffer: TextBuffer, x: float, y: float) -> int:
    """Return the character position nearest to the display point (x, y)."""
    n = len(buffer)
    base_y = 0.0
    i = 0
    row = TextRow()

    while i < n:
        row = buffer.layout_row(i)
        if row.num_chars <= 0:
            return n
        if i == 0 and y < base_y + row.ymin:
            return 0
        if y < base_y + row.ymax:
            break
        i += row.num_chars
        base_y += row.baseline_y_delta

    if i >= n:
        return n

    if x < row.x0:
        return i

    if x < row.x1:
        prev_x = row.x0
        for k in range(row.num_chars):
            width = buffer.char_width(i, k)
            if x < prev_x + width:
                return k + i if x < prev_x + width / 2 else k + i + 1
            prev_x += width

    last = i + row.num_chars - 1
    if buffer.char_at(last) == NEWLINE:
        return last
    return i + row.num_chars


def find_charpos(buffer: TextBuffer, n: int, single_line: bool) -> FindState:
    """Find the display position of character ``n`` and the rows around it."""
    z = len(buffer)

    if n == z and single_line:
        row = buffer.layout_row(0)
        return FindState(
            x=row.x1, y=0.0, height=row.ymax - row.ymin, first_char=0, length=z, prev_first=0
        )

    find = FindState()
    prev_start = 0
    i = 0
    while True:
        row = buffer.layout_row(i)
        num_chars = row.num_chars
        if n < i + num_chars:
            break
        if i + num_chars == z and z > 0 and buffer.char_at(z - 1) != NEWLINE:
            break
        if num_chars <= 0 and i != z:
            raise ValueError(f"layout of row at {i} holds no characters")
        prev_start = i
        i += num_chars
        find.y += row.baseline_y_delta
        if i == z:
            num_chars = 0
            break

    first = i
    find.first_char = first
    find.length = num_chars
    find.height = row.ymax - row.ymin
    find.prev_first = prev_start

    find.x = row.x0
    offset = 0
    while first + offset < n:
        find.x += buffer.char_width(first, offset)
        offset += 1
    return find


def is_word_boundary(buffer: TextBuffer, idx: int) -> bool:
    """Whether a word starts at ``idx`` (whitespace before, none at it)."""
    if idx <= 0:
        return True
    return buffer.char_at(idx - 1).isspace() and not buffer.char_at(idx).isspace()


def move_word_left(buffer: TextBuffer, c: int) -> int:
    """Position of the start of the word before ``c``, moving at least one character."""
    c -= 1
    while c >= 0 and not is_word_boundary(buffer, c):
        c -= 1
    return max(c, 0)


def move_word_right(buffer: TextBuffer, c: int) -> int:
    """Position of the start of the next word after ``c``, moving at least one character."""
    length = len(buffer)
    c += 1
    while c < length and not is_word_boundary(buffer, c):
        c += 1
    return min(c, length)