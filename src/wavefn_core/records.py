"""WaveFunction record model and canonical encoding.

A record is encoded as ``compact(len(function)) || function || author``, the
SCALE layout a ledger uses for a ``{Vec<u8>, AccountId32}`` struct.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass

from .protocol import ACCOUNT_ID_LEN


@dataclass(frozen=True)
class Principal:
    """A verified caller identity: a 32-byte account id."""

    account_id: bytes

    def __post_init__(self) -> None:
        if len(self.account_id) != ACCOUNT_ID_LEN:
            raise ValueError(
                f"account id must be {ACCOUNT_ID_LEN} bytes, got {len(self.account_id)}"
            )

    def hex(self) -> str:
        return self.account_id.hex()


@dataclass(frozen=True)
class WaveFunction:
    function: bytes
    author: bytes

    def __post_init__(self) -> None:
        if len(self.author) != ACCOUNT_ID_LEN:
            raise ValueError(
                f"author must be {ACCOUNT_ID_LEN} bytes, got {len(self.author)}"
            )


def encode_compact(n: int) -> bytes:
    """SCALE compact encoding of a non-negative integer."""
    if n < 0:
        raise ValueError("compact integers are unsigned")
    if n < 1 << 6:
        return struct.pack("<B", n << 2)
    if n < 1 << 14:
        return struct.pack("<H", (n << 2) | 0b01)
    if n < 1 << 30:
        return struct.pack("<I", (n << 2) | 0b10)
    body = n.to_bytes((n.bit_length() + 7) // 8, "little")
    # Big-integer mode: upper six bits hold (byte count - 4).
    return struct.pack("<B", ((len(body) - 4) << 2) | 0b11) + body


def encode_record(record: WaveFunction) -> bytes:
    return encode_compact(len(record.function)) + record.function + record.author
