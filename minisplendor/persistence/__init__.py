"""
Persistence - Save files.

The only persistence in the system: a game can be written to a text file
and read back. See codec.py for the format.
"""

from .codec import SaveFileCodec, dumps, loads, encode_chips, decode_chips

__all__ = [
    "SaveFileCodec",
    "dumps",
    "loads",
    "encode_chips",
    "decode_chips",
]
