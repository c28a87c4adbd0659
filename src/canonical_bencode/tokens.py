"""
Single-byte markers of the bencode wire format and the value kinds they open.
"""
from enum import Enum
from typing import Optional

INT_START = b"i"
LIST_START = b"l"
DICT_START = b"d"
END = b"e"
LENGTH_SEP = b":"

DIGITS = b"0123456789"


class Kind(Enum):
    """The four kinds of bencode value."""
    INTEGER = "integer"
    STRING = "string"
    LIST = "list"
    DICT = "dict"


_LEAD_BYTES = {
    INT_START: Kind.INTEGER,
    LIST_START: Kind.LIST,
    DICT_START: Kind.DICT,
}
# byte strings open with their length prefix
_LEAD_BYTES.update({bytes([d]): Kind.STRING for d in DIGITS})


def kind_of(lead: bytes) -> Optional[Kind]:
    """Returns the kind of value opened by ``lead``, or None if no value starts with it."""
    return _LEAD_BYTES.get(lead)
