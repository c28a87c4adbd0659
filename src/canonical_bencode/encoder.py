"""
Bencode encoder producing the canonical form of a value.

Containers are walked with an explicit stack rather than by recursion, so
nesting depth is limited only by memory.
"""
import logging
from itertools import chain

from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, as_key_bytes
from .tokens import DICT_START, END, INT_START, LENGTH_SEP, LIST_START

logger = logging.getLogger(__name__)

_DONE = object()


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""
    chunks = []
    # each frame is an iterator over a container's children and the bytes
    # written once it is exhausted
    stack = [(iter((obj,)), b"")]

    while stack:
        children, closing = stack[-1]
        item = next(children, _DONE)

        if item is _DONE:
            stack.pop()
            chunks.append(closing)
            continue

        if isinstance(item, (list, tuple, BencodeList)):
            value = item.value if isinstance(item, BencodeList) else item
            chunks.append(LIST_START)
            stack.append((iter(value), END))
            continue

        if isinstance(item, (dict, BencodeDict)):
            pairs = item.items() if isinstance(item, dict) else item.value
            chunks.append(DICT_START)
            stack.append((chain.from_iterable(canonical_pairs(pairs)), END))
            continue

        chunks.append(encode_scalar(item))

    return b"".join(chunks)


def encode_scalar(obj) -> bytes:
    """Encodes an integer or byte string, plain or wrapped."""

    # bool is an int subclass but not a bencode value
    if isinstance(obj, bool):
        raise TypeError("Cannot bencode object of type <class 'bool'>")

    if isinstance(obj, (int, BencodeInt)):
        value = obj if isinstance(obj, int) else obj.value
        return encode_int(value)

    if isinstance(obj, (str, BencodeString)):
        if isinstance(obj, str):
            return encode_str(obj)
        # BencodeString wraps bytes
        return encode_bytes(obj.value)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return encode_bytes(bytes(obj))

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


def canonical_pairs(pairs) -> list:
    """
    Returns ``(key bytes, value)`` pairs in canonical order.

    Pairs whose key is not a byte string are dropped. The rest are sorted by
    the bytes of their keys; pairs with equal keys keep their relative order.
    """
    keyed = []
    dropped = 0
    for key, value in pairs:
        key_bytes = as_key_bytes(key)
        if key_bytes is None:
            dropped += 1
            continue
        keyed.append((key_bytes, value))

    if dropped:
        logger.debug("Dropped %d dictionary pair(s) with non byte-string keys", dropped)

    keyed.sort(key=lambda pair: pair[0])
    return keyed


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return INT_START + str(int(n)).encode() + END


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + LENGTH_SEP + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    b = s.encode()
    return encode_bytes(b)


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    return encode(list(lst))


def encode_dict(pairs) -> bytes:
    """
    Encodes a dict or (key, value) pairs to bencoded bytes
    (e.g., d3:cow3:moo4:spam4:eggse).
    """
    return encode(BencodeDict(pairs if isinstance(pairs, dict) else list(pairs)))
