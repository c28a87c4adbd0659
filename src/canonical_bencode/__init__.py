"""
Bencode package for encoding and decoding BitTorrent data.
"""
import logging

from .decoder import DEFAULT_MAX_DEPTH, BencodeDecoder, decode, iter_decode
from .encoder import encode
from .errors import BencodeDecodeError, BencodeError, NestingDepthError, TrailingDataError
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'decode', 'encode', 'iter_decode', 'BencodeDecoder', 'DEFAULT_MAX_DEPTH',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeError', 'BencodeDecodeError', 'TrailingDataError', 'NestingDepthError',
]
