"""Logical line reader that undoes iCalendar line folding."""

from collections.abc import Iterable
from typing import Optional, Tuple, Union

from .exceptions import ICSReadError

PhysicalLine = Union[str, bytes]

# Joins a continuation onto the logical line once its indentation is removed
FOLD_SEPARATOR = " "

BYTE_ORDER_MARK = "\ufeff"


class LineReader:
    """Iterator of logical lines over an iterable of physical lines.

    A physical line starting with whitespace continues the previous logical
    line. One line of lookahead is kept in a single-slot buffer so the reader
    can tell whether the next physical line belongs to the current logical
    line. The reader is lazy and cannot be restarted once consumed.
    """

    def __init__(self, source: Iterable[PhysicalLine], encoding: str = "utf-8") -> None:
        """Initialize line reader.

        Args:
            source: File object or any iterable of str/bytes physical lines
            encoding: Encoding used for bytes lines
        """
        self._lines = iter(source)
        self._encoding = encoding
        self._buffer: Optional[Tuple[int, str]] = None
        self._exhausted = False
        self._count = 0
        self.line_number = 0

    def __iter__(self) -> "LineReader":
        return self

    def __next__(self) -> str:
        current = self._advance()
        if current is None:
            raise StopIteration
        self.line_number, line = current

        while True:
            peek = self.peek()
            # An empty line has nothing to classify and always ends the fold
            if not peek or not peek[0].isspace():
                break
            self._advance()
            line += FOLD_SEPARATOR + peek.lstrip()

        return line

    def peek(self) -> Optional[str]:
        """Return the next physical line without consuming it, or None at end of input."""
        if self._buffer is None:
            self._buffer = self._read_physical()
        return self._buffer[1] if self._buffer is not None else None

    def _advance(self) -> Optional[Tuple[int, str]]:
        if self._buffer is not None:
            current, self._buffer = self._buffer, None
            return current
        return self._read_physical()

    def _read_physical(self) -> Optional[Tuple[int, str]]:
        if self._exhausted:
            return None

        try:
            raw = next(self._lines)
        except StopIteration:
            self._exhausted = True
            return None
        except OSError as e:
            raise ICSReadError(f"Failed to read line {self._count + 1}: {e}") from e

        self._count += 1

        if isinstance(raw, bytes):
            try:
                raw = raw.decode(self._encoding)
            except UnicodeDecodeError as e:
                raise ICSReadError(
                    f"Failed to decode line {self._count} as {self._encoding}: {e}"
                ) from e

        # Byte-order mark written by some exporters
        if self._count == 1 and raw.startswith(BYTE_ORDER_MARK):
            raw = raw[len(BYTE_ORDER_MARK) :]

        return self._count, raw.rstrip("\r\n")
