"""Record stores backing the registry map.

Every store journals its writes so a failed call can be undone: writes made
inside ``transaction()`` are reverted if the block raises, on disk too when
they were already flushed. Writes outside a transaction commit immediately.
"""
from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable
from warnings import warn

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from wavefn_core.protocol import CANONICAL_JSON_KW, MANIFEST_FILE, RECORDS_FILE, STORE_SCHEMA
from wavefn_core.records import WaveFunction
from wavefn_verify.merkle import compute_state_root

RECORDS_SCHEMA = pa.schema(
    [
        ("record_id", pa.string()),
        ("function", pa.binary()),
        ("author", pa.string()),
    ]
)


@runtime_checkable
class RecordStore(Protocol):
    """Keyed collection RecordId -> WaveFunction."""

    def get(self, rid: str) -> WaveFunction | None:
        ...

    def insert(self, rid: str, record: WaveFunction) -> None:
        ...

    def __contains__(self, rid: object) -> bool:
        ...

    def __len__(self) -> int:
        ...

    def items(self) -> Iterator[tuple[str, WaveFunction]]:
        ...

    def flush(self) -> None:
        ...

    def transaction(self):
        ...


class MemoryRecordStore:
    """Dict-backed store."""

    def __init__(self, records: dict[str, WaveFunction] | None = None):
        self._records: dict[str, WaveFunction] = dict(records or {})
        # One journal per open transaction: (rid, previous value or None).
        self._journals: list[list[tuple[str, WaveFunction | None]]] = []
        # Writes not yet persisted by _commit.
        self._pending = False
        # Open transactions have persisted writes a rollback must undo on disk.
        self._flushed = False

    def get(self, rid: str) -> WaveFunction | None:
        return self._records.get(rid)

    def insert(self, rid: str, record: WaveFunction) -> None:
        if not self._journals:
            with self.transaction():
                self.insert(rid, record)
            return
        self._journals[-1].append((rid, self._records.get(rid)))
        self._records[rid] = record
        self._pending = True

    def __contains__(self, rid: object) -> bool:
        return rid in self._records

    def __len__(self) -> int:
        return len(self._records)

    def items(self) -> Iterator[tuple[str, WaveFunction]]:
        return iter(sorted(self._records.items()))

    def flush(self) -> None:
        """Persist the current map, including writes of open transactions."""
        self._commit()
        self._pending = False
        if self._journals:
            self._flushed = True

    @contextmanager
    def transaction(self):
        journal: list[tuple[str, WaveFunction | None]] = []
        self._journals.append(journal)
        try:
            yield self
            if len(self._journals) == 1 and self._pending:
                self.flush()
        except BaseException:
            self._journals.pop()
            for rid, prev in reversed(journal):
                if prev is None:
                    del self._records[rid]
                else:
                    self._records[rid] = prev
            if self._flushed:
                # Disk holds writes that were just undone.
                self.flush()
            if not self._journals:
                self._flushed = False
            raise
        self._journals.pop()
        if self._journals:
            self._journals[-1].extend(journal)
        else:
            self._flushed = False

    def _commit(self) -> None:
        pass


class ParquetRecordStore(MemoryRecordStore):
    """Store persisted as records.parquet plus manifest.json in one directory.

    The whole map is held in memory and rewritten on flush and when the
    outermost transaction commits. Both files are written to temporaries
    before either replaces its predecessor, so a failed write leaves the
    previous pair in place.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        super().__init__(self._load())

    @property
    def records_path(self) -> Path:
        return self.directory / RECORDS_FILE

    @property
    def manifest_path(self) -> Path:
        return self.directory / MANIFEST_FILE

    def _load(self) -> dict[str, WaveFunction]:
        if not self.records_path.exists():
            return {}

        records: dict[str, WaveFunction] = {}
        for row in pq.read_table(self.records_path).to_pylist():
            records[row["record_id"]] = WaveFunction(
                function=bytes(row["function"]),
                author=bytes.fromhex(row["author"]),
            )

        if self.manifest_path.exists():
            manifest = json.loads(self.manifest_path.read_text(encoding="utf-8"))
            if manifest.get("record_count") != len(records):
                warn(
                    f"Manifest record_count {manifest.get('record_count')} != "
                    f"{len(records)} records in {self.records_path}"
                )
        return records

    def _commit(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

        rows = [
            {"record_id": rid, "function": rec.function, "author": rec.author.hex()}
            for rid, rec in self._records.items()
        ]
        if rows:
            df = pd.DataFrame(rows).sort_values("record_id")
            table = pa.Table.from_pandas(df, schema=RECORDS_SCHEMA, preserve_index=False)
        else:
            table = RECORDS_SCHEMA.empty_table()

        manifest = {
            "schema": STORE_SCHEMA,
            "hash": "blake2b-256",
            "record_count": len(self._records),
            "state_root": compute_state_root(self.items()),
        }

        records_tmp = self.records_path.with_name(RECORDS_FILE + ".tmp")
        manifest_tmp = self.manifest_path.with_name(MANIFEST_FILE + ".tmp")
        pq.write_table(table, records_tmp)
        manifest_tmp.write_bytes(json.dumps(manifest, **CANONICAL_JSON_KW).encode("utf-8"))

        records_tmp.replace(self.records_path)
        manifest_tmp.replace(self.manifest_path)
