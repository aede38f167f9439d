"""Encoder and decoder for AOF replay buffers."""

from .encoder import ReplayEncoder, EncodeResult, encode, is_complete
from .decoder import ReplayDecoder, decode

__all__ = [
    'ReplayEncoder',
    'EncodeResult',
    'encode',
    'is_complete',
    'ReplayDecoder',
    'decode',
]
