"""WaveFunction registry - Deterministic Identity Functions."""
from __future__ import annotations

import hashlib

from .protocol import RECORD_ID_HEX_LEN, RECORD_ID_LEN
from .records import WaveFunction, encode_record


def _hash(b: bytes) -> str:
    """Compute a 256-bit blake2b digest, hex encoded."""
    return hashlib.blake2b(b, digest_size=RECORD_ID_LEN).hexdigest()


def record_id(record: WaveFunction) -> str:
    """Derive the RecordId of a record from its full content."""
    return _hash(encode_record(record))


def is_record_id(value: str) -> bool:
    if len(value) != RECORD_ID_HEX_LEN:
        return False
    try:
        bytes.fromhex(value)
    except ValueError:
        return False
    return value == value.lower()
