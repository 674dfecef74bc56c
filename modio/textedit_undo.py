"""Bounded undo and redo history for a text-editing widget.

Undo records grow upwards from the start of a fixed table and redo records
grow downwards from its end; the characters they need to restore share one
fixed character store laid out the same way.  When either side runs out of
room the oldest entries on that side are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from modio.textedit_buffer import TextBuffer

UNDO_STATE_COUNT = 99
UNDO_CHAR_COUNT = 999


@dataclass
class UndoRecord:
    """One recorded edit.

    Applying the record deletes ``delete_length`` characters at ``where`` and
    inserts ``insert_length`` characters kept in the character store from
    ``char_storage`` (or ``-1`` when no characters are kept).
    """

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


class UndoState:
    """Undo and redo history with a fixed number of records and characters."""

    def __init__(self, state_count: int = UNDO_STATE_COUNT, char_count: int = UNDO_CHAR_COUNT) -> None:
        if state_count < 1:
            raise ValueError("the history needs room for at least one record")
        if char_count < 0:
            raise ValueError("the character store cannot have a negative size")
        self.state_count = state_count
        self.char_count = char_count
        self.records = [UndoRecord() for _ in range(state_count)]
        self.chars = [""] * char_count
        self.undo_point = 0
        self.redo_point = state_count
        self.undo_char_point = 0
        self.redo_char_point = char_count

    @property
    def can_undo(self) -> bool:
        """Whether there is an edit to undo."""
        return self.undo_point > 0

    @property
    def can_redo(self) -> bool:
        """Whether there is an undone edit to redo."""
        return self.redo_point < self.state_count

    def reset(self) -> None:
        """Forget every undo and redo record."""
        self.undo_point = 0
        self.undo_char_point = 0
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def flush_redo(self) -> None:
        """Forget every redo record."""
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def discard_undo(self) -> None:
        """Drop the oldest undo record and the characters it keeps."""
        if self.undo_point <= 0:
            return
        first = self.records[0]
        if first.char_storage >= 0:
            n = first.insert_length
            self.undo_char_point -= n
            self.chars[0 : self.undo_char_point] = self.chars[n : n + self.undo_char_point]
            for record in self.records[: self.undo_point]:
                if record.char_storage >= 0:
                    record.char_storage -= n
        self.undo_point -= 1
        self.records[0 : self.undo_point] = [
            replace(record) for record in self.records[1 : 1 + self.undo_point]
        ]

    def discard_redo(self) -> None:
        """Drop the oldest redo record and the characters it keeps."""
        k = self.state_count - 1
        if self.redo_point > k:
            return
        oldest = self.records[k]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.redo_char_point += n
            start = self.redo_char_point
            self.chars[start : self.char_count] = self.chars[start - n : self.char_count - n]
            for record in self.records[self.redo_point : k]:
                if record.char_storage >= 0:
                    record.char_storage += n
        move = self.state_count - self.redo_point - 1
        src = self.redo_point
        self.records[src + 1 : src + 1 + move] = [
            replace(record) for record in self.records[src : src + move]
        ]
        self.redo_point += 1

    def _create_record(self, numchars: int) -> int | None:
        self.flush_redo()
        if self.undo_point == self.state_count:
            self.discard_undo()
        if numchars > self.char_count:
            self.undo_point = 0
            self.undo_char_point = 0
            return None
        while self.undo_char_point + numchars > self.char_count:
            self.discard_undo()
        index = self.undo_point
        self.undo_point += 1
        return index

    def create_undo(self, pos: int, insert_len: int, delete_len: int) -> int | None:
        """Push a record; return where its characters go in the store, if any."""
        index = self._create_record(insert_len)
        if index is None:
            return None
        record = UndoRecord(where=pos, insert_length=insert_len, delete_length=delete_len)
        self.records[index] = record
        if insert_len == 0:
            return None
        record.char_storage = self.undo_char_point
        self.undo_char_point += insert_len
        return record.char_storage

    def record_insert(self, where: int, length: int) -> None:
        """Record that ``length`` characters were inserted at ``where``."""
        self.create_undo(where, 0, length)

    def _save_chars(self, buffer: TextBuffer, storage: int | None, where: int, length: int) -> None:
        if storage is None:
            return
        self.chars[storage : storage + length] = [
            buffer.char_at(where + offset) for offset in range(length)
        ]

    def record_delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        """Record that ``length`` characters at ``where`` are about to be deleted."""
        storage = self.create_undo(where, length, 0)
        self._save_chars(buffer, storage, where, length)

    def record_replace(self, buffer: TextBuffer, where: int, old_length: int, new_length: int) -> None:
        """Record that ``old_length`` characters at ``where`` are about to be replaced."""
        storage = self.create_undo(where, old_length, new_length)
        self._save_chars(buffer, storage, where, old_length)

    def undo(self, buffer: TextBuffer) -> int | None:
        """Undo the latest edit in ``buffer``; return the new cursor, or None."""
        if self.undo_point == 0:
            return None

        u = replace(self.records[self.undo_point - 1])
        r = UndoRecord(
            where=u.where,
            insert_length=u.delete_length,
            delete_length=u.insert_length,
            char_storage=-1,
        )
        self.records[self.redo_point - 1] = r

        if u.delete_length:
            if self.undo_char_point + u.delete_length >= self.char_count:
                r.insert_length = 0
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self.discard_redo()
                r = self.records[self.redo_point - 1]
                r.char_storage = self.redo_char_point - u.delete_length
                self.redo_char_point -= u.delete_length
                self._save_chars(buffer, r.char_storage, u.where, u.delete_length)
            buffer.delete_chars(u.where, u.delete_length)

        if u.insert_length:
            stored = self.chars[u.char_storage : u.char_storage + u.insert_length]
            buffer.insert_chars(u.where, stored)
            self.undo_char_point -= u.insert_length

        self.undo_point -= 1
        self.redo_point -= 1
        return u.where + u.insert_length

    def redo(self, buffer: TextBuffer) -> int | None:
        """Redo the latest undone edit in ``buffer``; return the new cursor, or None."""
        if self.redo_point == self.state_count:
            return None

        r = replace(self.records[self.redo_point])
        u = UndoRecord(
            where=r.where,
            insert_length=r.delete_length,
            delete_length=r.insert_length,
            char_storage=-1,
        )
        self.records[self.undo_point] = u

        if r.delete_length:
            if self.undo_char_point + u.insert_length > self.redo_char_point:
                u.insert_length = 0
                u.delete_length = 0
            else:
                u.char_storage = self.undo_char_point
                self.undo_char_point += u.insert_length
                self._save_chars(buffer, u.char_storage, u.where, u.insert_length)
            buffer.delete_chars(r.where, r.delete_length)

        if r.insert_length:
            stored = self.chars[r.char_storage : r.char_storage + r.insert_length]
            buffer.insert_chars(r.where, stored)
            self.redo_char_point += r.insert_length

        self.undo_point += 1
        self.redo_point += 1
        return r.where + r.insert_length