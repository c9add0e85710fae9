"""Minimal streaming JSON scanner.

Pulls events from a byte buffer without building a tree. It accepts what
production frameworks emit and stops (yielding ``None``) on anything else.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

_WHITESPACE = frozenset(b" \t\n\r")
_NUMBER_BYTES = frozenset(b"-+.eE0123456789")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_SIMPLE_ESCAPES = {
    ord('"'): b'"',
    ord("\\"): b"\\",
    ord("/"): b"/",
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
    ord("b"): b"\x08",
    ord("f"): b"\x0c",
}
_KEYWORDS = ((b"true", "BOOL"), (b"false", "BOOL"), (b"null", "NULL"))


class EventKind(enum.Enum):
    BEGIN_OBJECT = enum.auto()
    END_OBJECT = enum.auto()
    BEGIN_ARRAY = enum.auto()
    END_ARRAY = enum.auto()
    KEY = enum.auto()
    STRING = enum.auto()
    NUMBER = enum.auto()
    BOOL = enum.auto()
    NULL = enum.auto()


@dataclass(frozen=True, slots=True)
class Event:
    """A scanner event; ``text`` holds the decoded key or string value."""

    kind: EventKind
    text: str | None = None


class _Container(enum.Enum):
    OBJECT = enum.auto()
    ARRAY = enum.auto()


def _hex4(data: bytes, at: int) -> int | None:
    chunk = data[at : at + 4]
    if len(chunk) != 4 or not all(b in _HEX_DIGITS for b in chunk):
        return None
    return int(chunk, 16)


class Parser:
    """Pull parser producing :class:`Event` values from JSON bytes."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._stack: list[_Container] = []
        self._expect_key = False
        self._expect_sep = False

    def __iter__(self) -> Iterator[Event]:
        while (event := self.next_event()) is not None:
            yield event

    def _skip_ws(self) -> None:
        data = self._data
        while self._pos < len(data) and data[self._pos] in _WHITESPACE:
            self._pos += 1

    def _peek(self) -> int | None:
        return self._data[self._pos] if self._pos < len(self._data) else None

    def next_event(self) -> Event | None:
        """Return the next event, or ``None`` at end of input or on bad input."""
        while True:
            self._skip_ws()
            b = self._peek()
            if b is None:
                return None
            if self._expect_sep:
                if b == ord(","):
                    self._pos += 1
                    self._expect_sep = False
                    self._expect_key = bool(self._stack) and self._stack[-1] is _Container.OBJECT
                    continue
                if b in (ord("}"), ord("]")):
                    self._expect_sep = False
                else:
                    return None
            return self._token(b)

    def _token(self, b: int) -> Event | None:
        if b == ord("}"):
            return self._close(_Container.OBJECT, EventKind.END_OBJECT)
        if b == ord("]"):
            return self._close(_Container.ARRAY, EventKind.END_ARRAY)
        if b == ord("{"):
            self._pos += 1
            self._stack.append(_Container.OBJECT)
            self._expect_key = True
            return Event(EventKind.BEGIN_OBJECT)
        if b == ord("["):
            self._pos += 1
            self._stack.append(_Container.ARRAY)
            self._expect_key = False
            return Event(EventKind.BEGIN_ARRAY)
        if b == _QUOTE:
            return self._string_token()
        for literal, kind in _KEYWORDS:
            if b == literal[0]:
                if not self._data.startswith(literal, self._pos):
                    return None
                self._pos += len(literal)
                self._expect_sep = True
                return Event(EventKind[kind])
        if b == ord("-") or ord("0") <= b <= ord("9"):
            self._skip_number()
            self._expect_sep = True
            return Event(EventKind.NUMBER)
        return None

    def _string_token(self) -> Event | None:
        text = self._read_string()
        if text is None:
            return None
        if self._expect_key:
            self._skip_ws()
            if self._peek() != ord(":"):
                return None
            self._pos += 1
            self._expect_key = False
            return Event(EventKind.KEY, text)
        self._expect_sep = True
        return Event(EventKind.STRING, text)

    def _close(self, container: _Container, kind: EventKind) -> Event | None:
        if not self._stack or self._stack.pop() is not container:
            return None
        self._pos += 1
        self._expect_sep = True
        self._expect_key = False
        return Event(kind)

    def _skip_number(self) -> None:
        data = self._data
        while self._pos < len(data) and data[self._pos] in _NUMBER_BYTES:
            self._pos += 1

    def skip_value(self) -> bool:
        """Consume the next value including any nested structure."""
        depth = len(self._stack)
        event = self.next_event()
        if event is None:
            return False
        if event.kind in (EventKind.BEGIN_OBJECT, EventKind.BEGIN_ARRAY):
            while len(self._stack) > depth:
                if self.next_event() is None:
                    return False
        return True

    def _read_string(self) -> str | None:
        data = self._data
        start = self._pos + 1
        quote = data.find(b'"', start)
        backslash = data.find(b"\\", start)
        if quote != -1 and (backslash == -1 or quote < backslash):
            self._pos = quote + 1
            try:
                return data[start:quote].decode("utf-8")
            except UnicodeDecodeError:
                return None
        if backslash == -1:
            self._pos = len(data)
            return None

        out = bytearray(data[start:backslash])
        pos = backslash
        while pos < len(data):
            c = data[pos]
            if c == _QUOTE:
                self._pos = pos + 1
                try:
                    return out.decode("utf-8")
                except UnicodeDecodeError:
                    return None
            if c != _BACKSLASH:
                out.append(c)
                pos += 1
                continue
            self._pos = pos
            if pos + 1 >= len(data):
                return None
            esc = data[pos + 1]
            simple = _SIMPLE_ESCAPES.get(esc)
            if simple is not None:
                out += simple
                pos += 2
                continue
            if esc != ord("u"):
                return None
            code = _hex4(data, pos + 2)
            if code is None:
                return None
            if 0xD800 <= code <= 0xDBFF:
                if data[pos + 6 : pos + 8] != b"\\u":
                    return None
                low = _hex4(data, pos + 8)
                if low is None or not 0xDC00 <= low <= 0xDFFF:
                    return None
                out += chr(0x10000 + (((code - 0xD800) << 10) | (low - 0xDC00))).encode("utf-8")
                pos += 12
            elif 0xDC00 <= code <= 0xDFFF:
                return None
            else:
                out += chr(code).encode("utf-8")
                pos += 6
        self._pos = pos
        return None


@dataclass(frozen=True, slots=True)
class Visit:
    """An object key (``is_key``) or a string value with its parent key."""

    is_key: bool
    text: str
    parent: str | None = None


def walk(data: bytes) -> Iterator[Visit]:
    """Yield every object key and string value, stopping at the first bad token.

    Arrays do not change the parent key: elements of ``{"routes": ["/a"]}``
    report ``routes`` as their parent.
    """
    key_stack: list[str | None] = []
    current_key: str | None = None
    for event in Parser(data):
        if event.kind is EventKind.BEGIN_OBJECT:
            key_stack.append(current_key)
            current_key = None
        elif event.kind is EventKind.END_OBJECT:
            current_key = key_stack.pop() if key_stack else None
        elif event.kind is EventKind.KEY:
            yield Visit(True, event.text)
            current_key = event.text
        elif event.kind is EventKind.STRING:
            yield Visit(False, event.text, current_key)


def object_keys(data: bytes, parent_key: str | None = None) -> list[str] | None:
    """Keys of the root object, or of the object under top-level ``parent_key``."""
    parser = Parser(data)
    event = parser.next_event()
    if event is None or event.kind is not EventKind.BEGIN_OBJECT:
        return None
    if parent_key is not None:
        while True:
            event = parser.next_event()
            if event is None or event.kind is not EventKind.KEY:
                return None
            if event.text == parent_key:
                inner = parser.next_event()
                if inner is None or inner.kind is not EventKind.BEGIN_OBJECT:
                    return None
                break
            if not parser.skip_value():
                return None
    keys: list[str] = []
    while True:
        event = parser.next_event()
        if event is None:
            return None
        if event.kind is EventKind.END_OBJECT:
            return keys
        if event.kind is not EventKind.KEY:
            return None
        keys.append(event.text)
        if not parser.skip_value():
            return None