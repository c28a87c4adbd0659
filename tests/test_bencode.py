
import pytest

from canonical_bencode import decode, encode
from canonical_bencode.structure import BencodeInt, BencodeString, BencodeList, BencodeDict


def test_int():
    print("Testing integer decoding...")
    obj = decode(b"i42e")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeInt)
    assert obj.value == 42

    print("Testing integer encoding...")
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"i42e"


def test_string():
    print("Testing string decoding...")
    obj = decode(b"4:spam")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"

    print("Testing string encoding...")
    assert encode(obj) == b"4:spam"


def test_list():
    print("Testing list decoding...")
    obj = decode(b"l4:spami3ee")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeList)
    assert len(obj.value) == 2
    assert encode(obj) == b"l4:spami3ee"


def test_dict():
    print("Testing dictionary decoding & encoding...")
    obj = decode(b"d3:cow3:mooe")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeDict)
    assert obj[b"cow"].value == b"moo"
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"d3:cow3:mooe"


MIXED = [
    (
        BencodeList([
            BencodeInt(420),
            BencodeString(b"string"),
            BencodeList([]),
            BencodeDict([(b"a", BencodeList([]))]),
        ]),
        b"li420e6:stringled1:aleee",
    ),
    (
        BencodeList([BencodeString(b"hello world")]),
        b"l11:hello worlde",
    ),
    (
        BencodeDict([
            (b"another", BencodeInt(200)),
            (b"key", BencodeString(b"value")),
            (b"third", BencodeDict([(b"sub", BencodeInt(132))])),
        ]),
        b"d7:anotheri200e3:key5:value5:thirdd3:subi132eee",
    ),
]


@pytest.mark.parametrize("value, encoded", MIXED)
def test_mixed_structures(value, encoded):
    assert decode(encoded) == value
    assert decode(encoded, strict=False) == (value, b"")
    assert encode(value) == encoded


def test_canonicalization_is_idempotent():
    value = BencodeDict([
        (b"zeta", BencodeList([BencodeInt(-1), BencodeString(b"\x00\xff")])),
        (b"alpha", BencodeDict([(b"y", BencodeInt(0)), (b"x", BencodeDict([]))])),
    ])
    once = encode(value)
    twice = encode(decode(once))
    assert once == twice
    assert encode(decode(twice)) == twice
    assert once == b"d5:alphad1:xde1:yi0ee4:zetali-1e2:\x00\xffee"


def test_torrent_like_document():
    pieces = bytes(range(20)) * 2
    meta = {
        "announce": "http://tracker.example/announce",
        "info": {
            "name": "sample.txt",
            "piece length": 16384,
            "length": 20000,
            "pieces": pieces,
        },
    }
    raw = encode(meta)
    root = decode(raw)

    assert root[b"announce"].value == b"http://tracker.example/announce"
    info = root[b"info"]
    assert info.keys() == [b"length", b"name", b"piece length", b"pieces"]
    assert info[b"pieces"].value == pieces
    assert root.to_python()[b"info"][b"piece length"] == 16384
