"""
Data structures for representing Bencoded types.

Every value is one of four immutable classes sharing the ``BencodeType`` base.
The payload is exposed as ``.value``: an ``int``, ``bytes``, a tuple of items,
or a tuple of ``(key, value)`` pairs. Containers accept plain Python children
(``int``, ``bytes``, ``str``, ``list``, ``tuple``, ``dict``) and convert them
to BencodeType instances when built, so later changes to the caller's objects
never reach the value.
"""
from typing import Optional

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "as_key_bytes",
    "wrap",
]


def as_key_bytes(key) -> Optional[bytes]:
    """
    Returns the byte string a dictionary key stands for, or None if the key
    cannot be represented in bencode (only byte strings can).
    """
    if isinstance(key, BencodeString):
        return key.value
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    if isinstance(key, str):
        return key.encode()
    return None


def wrap(obj) -> "BencodeType":
    """Converts a plain Python value into the matching BencodeType."""
    if isinstance(obj, BencodeType):
        return obj
    if isinstance(obj, bool):
        raise TypeError("Cannot bencode object of type <class 'bool'>")
    if isinstance(obj, int):
        return BencodeInt(obj)
    if isinstance(obj, str):
        return BencodeString(obj.encode())
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BencodeString(obj)
    if isinstance(obj, (list, tuple)):
        return BencodeList(obj)
    if isinstance(obj, dict):
        return BencodeDict(obj)
    raise TypeError(f"Cannot bencode object of type {type(obj)}")


def _freeze_key(key):
    key_bytes = as_key_bytes(key)
    if key_bytes is not None:
        return key_bytes
    # unrepresentable keys are kept (frozen where possible) and dropped on encode
    if isinstance(key, (int, list, tuple, dict)) and not isinstance(key, bool):
        return wrap(key)
    return key


class BencodeType:
    """Base class for all Bencode data types."""
    value = None

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def to_python(self):
        """Returns the plain Python equivalent of this value."""
        raise NotImplementedError


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        self.value = value

    def to_python(self) -> int:
        return self.value

    def __repr__(self):
        return f"BencodeInt({self.value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def to_python(self) -> bytes:
        return self.value

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    def __init__(self, value):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        self.value = tuple(wrap(x) for x in value)

    def to_python(self) -> list:
        return [x.to_python() for x in self.value]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def __repr__(self):
        return f"BencodeList({list(self.value)!r})"


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary as an ordered sequence of pairs.

    Pairs keep the order they were given in, duplicate keys included. Keys
    that are not byte strings are allowed here but are dropped when the
    dictionary is encoded. Byte-string keys (``str`` included) are stored as
    ``bytes``. Lookups match the first pair with an equal key.
    """
    def __init__(self, value):
        if isinstance(value, dict):
            pairs = list(value.items())
        elif isinstance(value, (list, tuple)):
            pairs = list(value)
            for pair in pairs:
                if not isinstance(pair, tuple) or len(pair) != 2:
                    raise TypeError("BencodeDict items must be (key, value) pairs.")
        else:
            raise TypeError("BencodeDict requires a dict or a list of pairs.")
        self.value = tuple((_freeze_key(k), wrap(v)) for k, v in pairs)

    def _find(self, key):
        wanted = as_key_bytes(key)
        if wanted is None:
            return None
        for pair in self.value:
            if as_key_bytes(pair[0]) == wanted:
                return pair
        return None

    def get(self, key, default=None):
        pair = self._find(key)
        return default if pair is None else pair[1]

    def keys(self):
        return [k for k, _ in self.value]

    def items(self):
        return list(self.value)

    def to_python(self) -> dict:
        """
        Returns a plain ``dict``. Keys that are not byte strings are skipped
        and a later duplicate key overwrites an earlier one.
        """
        result = {}
        for key, item in self.value:
            key_bytes = as_key_bytes(key)
            if key_bytes is not None:
                result[key_bytes] = item.to_python()
        return result

    def __contains__(self, key):
        return self._find(key) is not None

    def __getitem__(self, key):
        pair = self._find(key)
        if pair is None:
            raise KeyError(key)
        return pair[1]

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        return f"BencodeDict({list(self.value)!r})"
