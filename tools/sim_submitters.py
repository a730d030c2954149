import json
import os
import random
from pathlib import Path

from wavefn_core.protocol import EVENTS_FILE, SEED_LEN
from wavefn_registry.dispatch import dispatch, sign_call
from wavefn_registry.errors import PayloadTooLarge
from wavefn_registry.events import JsonlEventLog
from wavefn_registry.registry import Registry
from wavefn_registry.storage import ParquetRecordStore

def generate_store(out_dir: str, submitters: int = 3, per_submitter: int = 4,
                   max_bytes: int = 4096, oversize: bool = False) -> Path:
    path = Path(out_dir)
    path.mkdir(parents=True, exist_ok=True)

    registry = Registry(
        ParquetRecordStore(path),
        max_bytes=max_bytes,
        sink=JsonlEventLog(path / EVENTS_FILE),
    )

    seeds = [os.urandom(SEED_LEN) for _ in range(submitters)]
    print(f"Generating: {path} (submitters={submitters}, max_bytes={max_bytes})")

    submitted = []
    accounts = []
    for seed in seeds:
        for _ in range(per_submitter):
            payload = os.urandom(random.randint(0, max_bytes))
            call = sign_call(seed, payload)
            rid = dispatch(registry, call)
            submitted.append(rid)
            accounts.append(call.signer.hex())

    # Re-submission of identical content lands on the same id.
    if submitted:
        first = registry.store.get(submitted[0])
        again = dispatch(registry, sign_call(seeds[0], first.function))
        if again != submitted[0]:
            raise SystemExit(f"FATAL: re-submission produced {again} != {submitted[0]}")

    rejected = 0
    if oversize:
        try:
            dispatch(registry, sign_call(seeds[0], os.urandom(max_bytes + 1)))
        except PayloadTooLarge as e:
            print(f"Rejected oversize payload: {e}")
            rejected += 1

    (path / "meta.json").write_text(json.dumps({
        "submitters": sorted(set(accounts)),
        "records": len(registry.store),
        "rejected": rejected,
        "max_bytes": max_bytes,
    }))
    print(f"PASS: {len(registry.store)} records in {path}")
    return path

if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/sim_submitters.py OUT_DIR [--submitters N] [--max-bytes N] [--oversize]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    def pop_int(arg_list: list[str], opt: str, default: int) -> tuple[int, list[str]]:
        if opt not in arg_list:
            return default, arg_list
        i = arg_list.index(opt)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{opt} requires a value")
        return int(arg_list[i + 1]), arg_list[:i] + arg_list[i + 2:]

    oversize, args = pop_flag(args, "--oversize")
    submitters, args = pop_int(args, "--submitters", 3)
    max_bytes, args = pop_int(args, "--max-bytes", 4096)

    out = args[0] if len(args) > 0 else "simulated_store"
    generate_store(out, submitters=submitters, max_bytes=max_bytes, oversize=oversize)
