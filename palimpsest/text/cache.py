"""Byte offset cache for UTF-16 code unit -> UTF-8 byte offset lookups.

Scanning a token stream asks for byte offsets in roughly increasing code
unit order. Each answer is remembered together with the code point index it
corresponds to, so the next query only has to encode the text between the
nearest cached predecessor and itself. Across N increasing queries the total
work is linear in the text length instead of quadratic.

The same entries answer byte offset -> code point queries: byte offsets grow
with code unit offsets, so the entries are sorted by both keys at once.
"""

from __future__ import annotations

import bisect
import contextlib
import threading
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, ContextManager


@dataclass(frozen=True)
class TextPosition:
    """One point of a text expressed in all three offset spaces."""

    code_unit: int
    byte_offset: int
    scalar: int


def utf8_length(text: str) -> int:
    """Number of bytes ``text`` occupies when encoded as UTF-8."""
    return len(text.encode("utf-8"))


class ByteOffsetCache:
    """Memoized code unit -> byte offset mapping for a single text.

    Owned by exactly one SourceTextView. Entries are only ever added; the
    byte offset and the code point index both grow with the code unit
    offset, so any cached entry below a query is a valid starting point.

    Thread safety: population is a read-modify-write on the mapping and is
    guarded by a threading.Lock unless the owner opts out.
    """

    def __init__(self, text: str, thread_safe: bool = True):
        self._text = text
        self._entries: dict[int, TextPosition] = {}
        self._keys: list[int] = []  # sorted code unit offsets of _entries
        self._byte_keys: list[int] = []  # byte offsets of _entries, same order
        self._lock: ContextManager = threading.Lock() if thread_safe else contextlib.nullcontext()
        self._hits = 0
        self._misses = 0
        self._scan_steps = 0

    @cached_property
    def utf8(self) -> bytes:
        """The text encoded as UTF-8."""
        return self._text.encode("utf-8")

    def _insert(self, index: int, position: TextPosition) -> None:
        self._entries[position.code_unit] = position
        self._keys.insert(index, position.code_unit)
        self._byte_keys.insert(index, position.byte_offset)

    def byte_offset(self, code_unit: int, scalar: int) -> int:
        """Return the byte offset of ``code_unit``.

        Args:
            code_unit: UTF-16 code unit offset of the query.
            scalar: Code point index known to correspond to ``code_unit``.

        Returns:
            The UTF-8 byte offset of that position.
        """
        return self.position(code_unit, scalar).byte_offset

    def position(self, code_unit: int, scalar: int) -> TextPosition:
        """Return the cached position for ``code_unit``, computing it on a miss."""
        with self._lock:
            cached = self._entries.get(code_unit)
            if cached is not None:
                self._hits += 1
                return cached

            self._misses += 1
            index = bisect.bisect_left(self._keys, code_unit)
            if index > 0:
                anchor = self._entries[self._keys[index - 1]]
            else:
                anchor = TextPosition(code_unit=0, byte_offset=0, scalar=0)

            byte_offset = anchor.byte_offset + utf8_length(self._text[anchor.scalar : scalar])
            self._scan_steps += scalar - anchor.scalar

            position = TextPosition(code_unit=code_unit, byte_offset=byte_offset, scalar=scalar)
            self._insert(index, position)
            return position

    def position_for_byte(self, byte_offset: int, code_unit_for: Callable[[int], int]) -> TextPosition:
        """Return the position of ``byte_offset``, computing it on a miss.

        Args:
            byte_offset: UTF-8 byte offset known to start a character (or be
                the end of the text).
            code_unit_for: Maps a code point index to its code unit offset.

        Returns:
            The position, with the code point index decoded from the
            nearest cached entry below it.
        """
        with self._lock:
            index = bisect.bisect_right(self._byte_keys, byte_offset)
            if index > 0:
                anchor = self._entries[self._keys[index - 1]]
                if anchor.byte_offset == byte_offset:
                    self._hits += 1
                    return anchor
            else:
                anchor = TextPosition(code_unit=0, byte_offset=0, scalar=0)

            self._misses += 1
            decoded = self.utf8[anchor.byte_offset : byte_offset].decode("utf-8")
            scalar = anchor.scalar + len(decoded)
            self._scan_steps += len(decoded)

            position = TextPosition(code_unit=code_unit_for(scalar), byte_offset=byte_offset, scalar=scalar)
            self._insert(index, position)
            return position

    def __contains__(self, code_unit: object) -> bool:
        return code_unit in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Clear all cached entries."""
        with self._lock:
            self._entries.clear()
            self._keys.clear()
            self._byte_keys.clear()
            self._hits = 0
            self._misses = 0
            self._scan_steps = 0

    @property
    def scan_steps(self) -> int:
        """Total code points walked to answer cache misses."""
        return self._scan_steps

    @property
    def stats(self) -> dict[str, int | float]:
        """Cache statistics."""
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "scan_steps": self._scan_steps,
            "hit_rate": round(
                self._hits / max(self._hits + self._misses, 1) * 100, 1
            ),
        }
