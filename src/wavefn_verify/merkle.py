from pathlib import Path
import hashlib
from typing import Iterable

from wavefn_core.records import WaveFunction, encode_record


def leaf_hash(rid: str, record: WaveFunction) -> bytes:
    h = hashlib.sha256()
    h.update(rid.encode("utf-8"))
    h.update(b"\x00")
    h.update(encode_record(record))
    return h.digest()


def compute_state_root(entries: Iterable[tuple[str, WaveFunction]]) -> str:
    acc = hashlib.sha256()
    for rid, record in sorted(entries, key=lambda e: e[0]):
        acc.update(leaf_hash(rid, record))
    return acc.hexdigest()


def looks_like_parquet(p: Path) -> bool:
    b = p.read_bytes()
    return len(b) >= 8 and b[:4] == b"PAR1" and b[-4:] == b"PAR1"
