import json
from pathlib import Path

import pyarrow.parquet as pq

from wavefn_core.ids import is_record_id, record_id
from wavefn_core.protocol import MANIFEST_FILE, RECORDS_FILE
from wavefn_core.records import WaveFunction
from .const import ERRORS
from .merkle import compute_state_root, looks_like_parquet

REQUIRED_COLUMNS = ("record_id", "function", "author")


def _load_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def _fail(errors: list) -> dict:
    return {"status": "FAIL", "error_count": len(errors), "errors": errors}


def verify_store(store_dir: Path, max_bytes: int | None = None) -> dict:
    """Check every stored record against its key, the size bound and the manifest.

    Record-level problems are all collected; layout problems stop the check.
    """
    errors = []
    store_dir = Path(store_dir)
    records_path = store_dir / RECORDS_FILE
    manifest_path = store_dir / MANIFEST_FILE

    for p in [records_path, manifest_path]:
        if not p.exists():
            errors.append({"code": "E_LAYOUT_MISSING", "message": ERRORS["E_LAYOUT_MISSING"], "path": str(p)})
            return _fail(errors)

    try:
        manifest_obj = _load_json(manifest_path)
    except Exception as e:
        errors.append({"code": "E_MANIFEST_JSON", "message": ERRORS["E_MANIFEST_JSON"], "detail": str(e)})
        return _fail(errors)

    if not looks_like_parquet(records_path):
        errors.append({"code": "E_PARQUET_MAGIC", "message": ERRORS["E_PARQUET_MAGIC"], "path": str(records_path)})
        return _fail(errors)

    table = pq.read_table(records_path)
    missing = [c for c in REQUIRED_COLUMNS if c not in table.column_names]
    if missing:
        errors.append({"code": "E_PARQUET_SCHEMA", "message": ERRORS["E_PARQUET_SCHEMA"], "missing": missing})
        return _fail(errors)

    entries: list[tuple[str, WaveFunction]] = []
    for row in table.to_pylist():
        rid = row["record_id"]
        try:
            record = WaveFunction(function=bytes(row["function"]), author=bytes.fromhex(row["author"]))
        except (TypeError, ValueError) as e:
            errors.append({"code": "E_AUTHOR_FORMAT", "message": ERRORS["E_AUTHOR_FORMAT"],
                           "record_id": rid, "detail": str(e)})
            continue

        computed = record_id(record)
        if not is_record_id(rid) or rid != computed:
            errors.append({"code": "E_RECORD_ID_MISMATCH", "message": ERRORS["E_RECORD_ID_MISMATCH"],
                           "record_id": rid, "computed": computed})
        if max_bytes is not None and len(record.function) > max_bytes:
            errors.append({"code": "E_PAYLOAD_TOO_LARGE", "message": ERRORS["E_PAYLOAD_TOO_LARGE"],
                           "record_id": rid, "size": len(record.function), "max_bytes": max_bytes})
        entries.append((rid, record))

    expected_root = manifest_obj.get("state_root", "")
    computed_root = compute_state_root(entries)
    if expected_root != computed_root:
        errors.append({"code": "E_STATE_ROOT_MISMATCH", "message": ERRORS["E_STATE_ROOT_MISMATCH"],
                       "expected": expected_root, "computed": computed_root})

    if errors:
        return _fail(errors)
    return {"status": "PASS", "error_count": 0, "errors": [], "record_count": len(entries),
            "state_root": computed_root}
