"""
Bencode decoder for untrusted input such as metainfo files and tracker
or peer messages.

``decode`` parses exactly one value. In strict mode (the default) the value
must span the whole buffer; in lenient mode the unconsumed tail is returned
alongside it so that a value can be read off the front of a longer buffer.
"""
import logging
import re
from typing import Iterator, Optional, Tuple, Union

from .errors import BencodeDecodeError, NestingDepthError, TrailingDataError
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType
from .tokens import END, LENGTH_SEP, Kind, kind_of

logger = logging.getLogger(__name__)

# Maximum number of lists/dictionaries open at once while decoding.
DEFAULT_MAX_DEPTH = 256

# leading zeros and "-0" are accepted
_INT_BODY = re.compile(rb"[+-]?[0-9]+")


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into BencodeType values.

    The decoder keeps a cursor into ``data``; each call to ``decode`` parses
    one value starting at the cursor and leaves the cursor after it.
    """
    def __init__(self, data: bytes, max_depth: int = DEFAULT_MAX_DEPTH):
        if isinstance(data, str):
            raise TypeError("BencodeDecoder requires bytes, not str.")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"BencodeDecoder requires bytes, not {type(data)}.")
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        self.data = bytes(data)
        self.i = 0  # cursor index
        self.max_depth = max_depth
        self._depth = 0

    @property
    def position(self) -> int:
        """Offset of the next unconsumed byte."""
        return self.i

    def at_end(self) -> bool:
        return self.i >= len(self.data)

    def remainder(self) -> bytes:
        """Returns the bytes not yet consumed."""
        return self.data[self.i:]

    def decode(self) -> BencodeType:
        """Decodes one value starting at the cursor."""
        self._depth = 0
        return self._parse_value()

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _error(self, reason: str, position: Optional[int] = None, error=BencodeDecodeError):
        if position is None:
            position = self.i
        logger.debug("Rejecting bencode input at byte %d: %s", position, reason)
        return error(reason, position)

    def _peek(self) -> bytes:
        if self.i >= len(self.data):
            raise self._error("Unexpected end of input")
        return self.data[self.i:self.i+1]

    def _consume(self, n=1) -> bytes:
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        if self.i + n > len(self.data):
            raise self._error("Unexpected end of input")
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _enter_container(self):
        self._depth += 1
        if self._depth > self.max_depth:
            raise self._error(
                f"Nesting deeper than {self.max_depth} levels",
                error=NestingDepthError,
            )

    def _leave_container(self):
        self._depth -= 1

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self) -> BencodeType:
        ch = self._peek()
        kind = kind_of(ch)

        if kind is Kind.INTEGER:
            return self._parse_int()

        if kind is Kind.STRING:
            return self._parse_string()

        if kind is Kind.LIST:
            return self._parse_list()

        if kind is Kind.DICT:
            return self._parse_dict()

        raise self._error(f"Invalid token {ch!r}")

    def _parse_int(self) -> BencodeInt:
        """Parses an integer from the Bencoded data."""
        start = self.i
        self._consume(1)  # skip 'i'

        end_pos = self.data.find(END, self.i)
        if end_pos == -1:
            raise self._error("Unterminated integer", start)
        number_bytes = self.data[self.i:end_pos]

        if not _INT_BODY.fullmatch(number_bytes):
            raise self._error(f"Invalid integer format {number_bytes[:32]!r}")
        try:
            num = int(number_bytes)
        except ValueError as exc:
            # digit strings past the interpreter's int conversion limit
            raise self._error("Invalid integer format") from exc

        self.i = end_pos + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self) -> BencodeString:
        """Parses a byte string from the Bencoded data."""
        start = self.i

        if self.data[self.i:self.i+2] == b"0:":
            self.i += 2
            return BencodeString(b"")

        # read length until ':'
        colon = self.data.find(LENGTH_SEP, self.i)
        if colon == -1:
            raise self._error("Missing ':' after string length", start)
        length_bytes = self.data[self.i:colon]

        if not length_bytes.isdigit():
            raise self._error(f"Invalid string length {length_bytes[:32]!r}", start)
        try:
            length = int(length_bytes)
        except ValueError as exc:
            raise self._error("Invalid string length", start) from exc

        available = len(self.data) - (colon + 1)
        if length > available:
            raise self._error(
                f"String length {length} exceeds the {available} bytes remaining", start
            )

        self.i = colon + 1
        string_bytes = self._consume(length)

        return BencodeString(string_bytes)

    def _parse_list(self) -> BencodeList:
        """Parses a list from the Bencoded data."""
        self._consume(1)  # skip 'l'
        self._enter_container()
        items = []

        while self._peek() != END:
            items.append(self._parse_value())

        self._consume(1)  # skip 'e'
        self._leave_container()
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary from the Bencoded data."""
        self._consume(1)  # skip 'd'
        self._enter_container()
        pairs = []

        while self._peek() != END:
            # keys MUST be strings
            if kind_of(self._peek()) is not Kind.STRING:
                raise self._error("Dictionary key is not a byte string")
            key = self._parse_string().value
            value = self._parse_value()
            pairs.append((key, value))

        self._consume(1)  # skip 'e'
        self._leave_container()
        return BencodeDict(pairs)


def decode(
    data: bytes, strict: bool = True, max_depth: int = DEFAULT_MAX_DEPTH
) -> Union[BencodeType, Tuple[BencodeType, bytes]]:
    """
    Decodes one Bencoded value from ``data``.

    With ``strict=True`` the value must use up the whole buffer and is
    returned on its own; leftover bytes raise ``TrailingDataError``.
    With ``strict=False`` a ``(value, remainder)`` tuple is returned, where
    ``remainder`` holds the bytes after the value (possibly empty).
    """
    decoder = BencodeDecoder(data, max_depth=max_depth)
    value = decoder.decode()

    if not strict:
        return value, decoder.remainder()

    if not decoder.at_end():
        reason = f"{len(decoder.data) - decoder.position} trailing byte(s) after value"
        logger.debug("Rejecting bencode input at byte %d: %s", decoder.position, reason)
        raise TrailingDataError(reason, decoder.position)
    return value


def iter_decode(data: bytes, max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[BencodeType]:
    """
    Yields each value of a buffer holding consecutive Bencoded values.
    An empty buffer yields nothing.
    """
    decoder = BencodeDecoder(data, max_depth=max_depth)
    while not decoder.at_end():
        yield decoder.decode()
