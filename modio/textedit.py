"""Keyboard and mouse editing of a text buffer.

A :class:`TextEditState` holds the cursor, the selection and the undo
history of one text field.  It maps user input (key codes, clicks and drags)
onto insertions and deletions in a :class:`~modio.textedit_buffer.TextBuffer`.
"""

from __future__ import annotations

from enum import IntEnum

from modio.textedit_buffer import (
    NEWLINE,
    TextBuffer,
    find_charpos,
    locate_coord,
    move_word_left,
    move_word_right,
)
from modio.textedit_undo import UndoState

_KEY_BASE = 0x200000


class Key(IntEnum):
    """Control key codes.

    Characters are sent as their code points; control keys lie above every
    code point.  ``SHIFT`` is a bit that may be or'd into a control key to
    extend the selection.
    """

    LEFT = _KEY_BASE
    RIGHT = _KEY_BASE + 1
    UP = _KEY_BASE + 2
    DOWN = _KEY_BASE + 3
    PGUP = _KEY_BASE + 4
    PGDOWN = _KEY_BASE + 5
    LINESTART = _KEY_BASE + 6
    LINEEND = _KEY_BASE + 7
    TEXTSTART = _KEY_BASE + 8
    TEXTEND = _KEY_BASE + 9
    DELETE = _KEY_BASE + 10
    BACKSPACE = _KEY_BASE + 11
    UNDO = _KEY_BASE + 12
    REDO = _KEY_BASE + 13
    INSERT = _KEY_BASE + 14
    WORDLEFT = _KEY_BASE + 15
    WORDRIGHT = _KEY_BASE + 16
    SHIFT = 0x400000


def key_to_text(key: int) -> int:
    """Return the code point a key inserts, or -1 if it inserts nothing."""
    key = int(key)
    if key < 0 or key >= _KEY_BASE:
        return -1
    return key


class TextEditState:
    """Cursor, selection and undo history of one text field."""

    def __init__(self, single_line: bool = False) -> None:
        self.undostate = UndoState()
        self.clear(single_line)

    def clear(self, single_line: bool = False) -> None:
        """Reset the state to its defaults, forgetting the undo history."""
        self.undostate.reset()
        self.select_start = 0
        self.select_end = 0
        self.cursor = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.cursor_at_end_of_line = False
        self.initialized = True
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    def has_selection(self) -> bool:
        """Whether some text is selected."""
        return self.select_start != self.select_end

    def clamp(self, buffer: TextBuffer) -> None:
        """Keep the cursor and selection inside the buffer."""
        n = len(buffer)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    def sort_selection(self) -> None:
        """Order the selection so that its start is not after its end."""
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def delete_selection(self, buffer: TextBuffer) -> None:
        """Delete the selected text, if any."""
        self.clamp(buffer)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(buffer, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(buffer, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def click(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Move the cursor to the clicked point and drop the selection."""
        if self.single_line:
            y = buffer.layout_row(0).ymin
        self.cursor = locate_coord(buffer, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Move the cursor and the selection end to the dragged-to point."""
        if self.single_line:
            y = buffer.layout_row(0).ymin
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        position = locate_coord(buffer, x, y)
        self.cursor = self.select_end = position

    def cut(self, buffer: TextBuffer) -> bool:
        """Delete the selection; return whether there was one."""
        if self.has_selection():
            self.delete_selection(buffer)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, buffer: TextBuffer, text: str) -> bool:
        """Insert ``text`` at the cursor, replacing the selection."""
        chars = list(text)
        self.clamp(buffer)
        self.delete_selection(buffer)
        if buffer.insert_chars(self.cursor, chars):
            self.undostate.record_insert(self.cursor, len(chars))
            self.cursor += len(chars)
            self.has_preferred_x = False
            return True
        return False

    def key(self, buffer: TextBuffer, key: int) -> None:
        """Apply one keyboard input to the buffer and the state."""
        next_key: int | None = int(key)
        while next_key is not None:
            next_key = self._handle_key(buffer, next_key)

    # -- helpers -----------------------------------------------------------

    def _delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        self.undostate.record_delete(buffer, where, length)
        buffer.delete_chars(where, length)
        self.has_preferred_x = False

    def _move_to_first(self) -> None:
        if self.has_selection():
            self.sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self.sort_selection()
            self.clamp(buffer)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    def _type_char(self, buffer: TextBuffer, key: int) -> None:
        c = key_to_text(key)
        if c <= 0:
            return
        ch = chr(c)
        if ch == NEWLINE and self.single_line:
            return
        if self.insert_mode and not self.has_selection() and self.cursor < len(buffer):
            self.undostate.record_replace(buffer, self.cursor, 1, 1)
            buffer.delete_chars(self.cursor, 1)
            if buffer.insert_chars(self.cursor, [ch]):
                self.cursor += 1
                self.has_preferred_x = False
        else:
            self.delete_selection(buffer)
            if buffer.insert_chars(self.cursor, [ch]):
                self.undostate.record_insert(self.cursor, 1)
                self.cursor += 1
                self.has_preferred_x = False

    def _scan_row(self, buffer: TextBuffer, start: int, goal_x: float) -> None:
        self.cursor = start
        row = buffer.layout_row(start)
        x = row.x0
        for i in range(row.num_chars):
            # A newline ends the row: the cursor never moves past it.
            if buffer.char_at(start + i) == NEWLINE:
                break
            x += buffer.char_width(start, i)
            if x > goal_x:
                break
            self.cursor += 1
        self.clamp(buffer)
        self.has_preferred_x = True
        self.preferred_x = goal_x

    def _move_down(self, buffer: TextBuffer, key: int, shift: bool, is_page: bool) -> int | None:
        if not is_page and self.single_line:
            return Key.RIGHT | (key & Key.SHIFT)
        row_count = self.row_count_per_page if is_page else 1
        if shift:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(buffer)
        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            if buffer.char_at(find.first_char + find.length - 1) != NEWLINE:
                break
            self._scan_row(buffer, start, goal_x)
            if shift:
                self.select_end = self.cursor
            find.first_char += find.length
            find.length = buffer.layout_row(start).num_chars
        return None

    def _move_up(self, buffer: TextBuffer, key: int, shift: bool, is_page: bool) -> int | None:
        if not is_page and self.single_line:
            return Key.LEFT | (key & Key.SHIFT)
        row_count = self.row_count_per_page if is_page else 1
        if shift:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()
        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self._scan_row(buffer, find.prev_first, goal_x)
            if shift:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and buffer.char_at(prev_scan - 1) != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan
        return None

    def _line_start(self, buffer: TextBuffer) -> None:
        if self.single_line:
            self.cursor = 0
            return
        while self.cursor > 0 and buffer.char_at(self.cursor - 1) != NEWLINE:
            self.cursor -= 1

    def _line_end(self, buffer: TextBuffer) -> None:
        n = len(buffer)
        if self.single_line:
            self.cursor = n
            return
        while self.cursor < n and buffer.char_at(self.cursor) != NEWLINE:
            self.cursor += 1

    def _handle_key(self, buffer: TextBuffer, key: int) -> int | None:
        shift = bool(key & Key.SHIFT)
        base = key & ~Key.SHIFT

        if key == Key.INSERT:
            self.insert_mode = not self.insert_mode
        elif key == Key.UNDO:
            cursor = self.undostate.undo(buffer)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif key == Key.REDO:
            cursor = self.undostate.redo(buffer)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif base == Key.LEFT:
            if shift:
                self.clamp(buffer)
                self._prep_selection_at_cursor()
                if self.select_end > 0:
                    self.select_end -= 1
                self.cursor = self.select_end
            elif self.has_selection():
                self._move_to_first()
            elif self.cursor > 0:
                self.cursor -= 1
            self.has_preferred_x = False
        elif base == Key.RIGHT:
            if shift:
                self._prep_selection_at_cursor()
                self.select_end += 1
                self.clamp(buffer)
                self.cursor = self.select_end
            else:
                if self.has_selection():
                    self._move_to_last(buffer)
                else:
                    self.cursor += 1
                self.clamp(buffer)
            self.has_preferred_x = False
        elif base in (Key.WORDLEFT, Key.WORDRIGHT):
            move = move_word_left if base == Key.WORDLEFT else move_word_right
            if shift:
                if not self.has_selection():
                    self._prep_selection_at_cursor()
                self.cursor = move(buffer, self.cursor)
                self.select_end = self.cursor
                self.clamp(buffer)
            elif self.has_selection():
                if base == Key.WORDLEFT:
                    self._move_to_first()
                else:
                    self._move_to_last(buffer)
            else:
                self.cursor = move(buffer, self.cursor)
                self.clamp(buffer)
        elif base in (Key.DOWN, Key.PGDOWN):
            return self._move_down(buffer, key, shift, base == Key.PGDOWN)
        elif base in (Key.UP, Key.PGUP):
            return self._move_up(buffer, key, shift, base == Key.PGUP)
        elif base == Key.DELETE:
            if self.has_selection():
                self.delete_selection(buffer)
            elif self.cursor < len(buffer):
                self._delete(buffer, self.cursor, 1)
            self.has_preferred_x = False
        elif base == Key.BACKSPACE:
            if self.has_selection():
                self.delete_selection(buffer)
            else:
                self.clamp(buffer)
                if self.cursor > 0:
                    self._delete(buffer, self.cursor - 1, 1)
                    self.cursor -= 1
            self.has_preferred_x = False
        elif base == Key.TEXTSTART:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = 0
            else:
                self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base == Key.TEXTEND:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = len(buffer)
            else:
                self.cursor = len(buffer)
                self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base in (Key.LINESTART, Key.LINEEND):
            self.clamp(buffer)
            if shift:
                self._prep_selection_at_cursor()
            else:
                self._move_to_first()
            if base == Key.LINESTART:
                self._line_start(buffer)
            else:
                self._line_end(buffer)
            if shift:
                self.select_end = self.cursor
            self.has_preferred_x = False
        else:
            self._type_char(buffer, key)
        return None