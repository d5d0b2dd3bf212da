"""Character-level parsing primitives for the SVM-HMM training file reader.

`InputStream` wraps any text stream and carries a sticky failure flag in the
manner of a C++ iostream: a failed extraction sets the flag instead of
raising, and every later extraction is a no-op until `clear()` is called.
The reader checks `fail()` after each step and decides how to report it.

Matching a literal consumes characters one at a time. When a character does
not match, that character and everything before it stay consumed; the
stream is not rewound.
"""
from __future__ import annotations
import io
from dataclasses import dataclass
from typing import Optional, TextIO, Union

__all__ = ["StrMatcher", "match", "InputStream"]


@dataclass(frozen=True)
class StrMatcher:
    """A literal that `InputStream.extract` must find verbatim."""

    literal: str


def match(literal: str) -> StrMatcher:
    """Wraps `literal` for use with `InputStream.extract` or `>>`."""
    return StrMatcher(literal)


class InputStream:
    """
    A text stream with a failure indicator and a one-character lookahead.

    Args:
        source: A string or a readable text stream.
    """

    def __init__(self, source: Union[str, TextIO]) -> None:
        self._src: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._peeked: Optional[str] = None
        self._failed = False

    # --- state -----------------------------------------------------------
    def fail(self) -> bool:
        return self._failed

    def good(self) -> bool:
        return not self._failed

    def __bool__(self) -> bool:
        return not self._failed

    def clear(self) -> None:
        """Resets the failure flag; consumed input is not restored."""
        self._failed = False

    def set_fail(self) -> None:
        self._failed = True

    # --- raw character access ---------------------------------------------
    def _get(self) -> str:
        if self._peeked is not None:
            ch, self._peeked = self._peeked, None
            return ch
        return self._src.read(1)

    def peek(self) -> str:
        """Returns the next character without consuming it ("" at end)."""
        if self._peeked is None:
            self._peeked = self._src.read(1)
        return self._peeked

    def at_end(self) -> bool:
        return self.peek() == ""

    # --- extraction ---------------------------------------------------------
    def extract(self, matcher: StrMatcher) -> "InputStream":
        """
        Consumes exactly `matcher.literal` from the stream.

        On the first character that is missing or different, the failure
        flag is set and extraction stops. Characters read up to and
        including the offending one are not put back.

        Returns:
            The stream itself, so calls can be chained.
        """
        if self._failed:
            return self
        for expected in matcher.literal:
            if self._get() != expected:
                self._failed = True
                break
        return self

    def __rshift__(self, matcher: StrMatcher) -> "InputStream":
        return self.extract(matcher)

    def skip_whitespace(self, newlines: bool = True) -> "InputStream":
        """Consumes spaces and tabs, and also newlines unless told otherwise."""
        while True:
            ch = self.peek()
            if ch in (" ", "\t", "\r") or (newlines and ch == "\n"):
                self._get()
            else:
                return self

    def read_word(self) -> str:
        """
        Skips leading blanks and reads up to the next whitespace.

        Sets the failure flag and returns "" if no characters are available.
        """
        if self._failed:
            return ""
        self.skip_whitespace(newlines=False)
        chars = []
        while True:
            ch = self.peek()
            if ch == "" or ch.isspace():
                break
            chars.append(self._get())
        if not chars:
            self._failed = True
        return "".join(chars)

    def read_until(self, stop: str) -> str:
        """Reads characters until one of `stop`, whitespace or end of input."""
        chars = []
        while True:
            ch = self.peek()
            if ch == "" or ch.isspace() or ch in stop:
                return "".join(chars)
            chars.append(self._get())

    def read_int(self) -> int:
        """Reads a decimal integer; on failure sets the flag and returns 0."""
        if self._failed:
            return 0
        text = self.read_until(":#")
        try:
            return int(text)
        except ValueError:
            self._failed = True
            return 0

    def read_float(self) -> float:
        """Reads a floating-point number; on failure sets the flag and returns 0.0."""
        if self._failed:
            return 0.0
        text = self.read_until("#")
        try:
            return float(text)
        except ValueError:
            self._failed = True
            return 0.0

    def read_line_rest(self) -> str:
        """Consumes through the end of the current line, returning it without '\\n'."""
        chars = []
        while True:
            ch = self._get()
            if ch in ("", "\n"):
                return "".join(chars)
            chars.append(ch)
