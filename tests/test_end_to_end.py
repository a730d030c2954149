import json
import subprocess
from pathlib import Path

def run(cmd, cwd):
    return subprocess.run(cmd, cwd=cwd, shell=True, check=False, capture_output=True, text=True)

def test_simulated_store_verifies_and_tamper_fails(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    store = tmp_path / "store"

    r = run(f"python tools/sim_submitters.py {store} --submitters 2 --max-bytes 512 --oversize", cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout

    meta = json.loads((store / "meta.json").read_text())
    assert meta["rejected"] == 1
    assert len(meta["submitters"]) == 2

    events = (store / "events.jsonl").read_bytes().splitlines()
    # Every accepted call, including the re-submission, emitted one event.
    assert len(events) == 2 * 4 + 1

    r = run(f"python -m wavefn_verify.cli store {store} --max-bytes 512", cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    assert json.loads(r.stdout)["record_count"] == meta["records"]

    r = run(f"python scripts/tamper_record.py {store}", cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout

    r = run(f"python -m wavefn_verify.cli store {store}", cwd=repo)
    assert r.returncode != 0
    codes = {e["code"] for e in json.loads(r.stdout)["errors"]}
    assert "E_RECORD_ID_MISMATCH" in codes
