import sys
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

def main():
    if len(sys.argv) != 2:
        print("Usage: tamper_record.py <store_dir>")
        raise SystemExit(2)

    p = Path(sys.argv[1]) / "records.parquet"
    table = pq.read_table(p)
    rows = table.to_pylist()
    target = next((r for r in rows if r["function"]), None)
    if target is None:
        print("No non-empty record to tamper with.")
        raise SystemExit(2)

    # Flip the first payload byte and keep the stored record_id, so the key
    # no longer matches the content.
    b = bytearray(target["function"])
    b[0] ^= 0x01
    target["function"] = bytes(b)
    pq.write_table(pa.Table.from_pylist(rows, schema=table.schema), p)
    print(f"Tampered record {target['record_id']} in {p}")

if __name__ == "__main__":
    main()
