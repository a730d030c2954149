import json

from click.testing import CliRunner

from wavefn_registry.cli import main as registry_main
from wavefn_registry.events import JsonlEventLog
from wavefn_verify.cli import main as verify_main

SEED = "a665a45920422f9d417e4867efdc4fb8a04a1f3fff1fa07e998e86f7f7a27ae3"


def test_keygen_emits_seed_and_account():
    r = CliRunner().invoke(registry_main, ["keygen"])
    assert r.exit_code == 0
    out = json.loads(r.output)
    assert len(bytes.fromhex(out["seed"])) == 32
    assert len(bytes.fromhex(out["account_id"])) == 32


def test_submit_then_verify(tmp_path):
    payload = tmp_path / "psi.bin"
    payload.write_bytes(bytes(500))
    store = tmp_path / "store"
    runner = CliRunner()

    r = runner.invoke(registry_main, ["submit", str(store), str(payload), "--seed", SEED, "--max-bytes", "1024"])
    assert r.exit_code == 0, r.output
    out = json.loads(r.output)
    assert out["status"] == "PASS"
    assert out["size"] == 500

    events = JsonlEventLog(store / "events.jsonl").read()
    assert [e.id for e in events] == [out["record_id"]]

    r = runner.invoke(verify_main, ["store", str(store), "--max-bytes", "1024"])
    assert r.exit_code == 0, r.output
    assert json.loads(r.output)["status"] == "PASS"


def test_submit_too_large_fails_closed(tmp_path):
    payload = tmp_path / "psi.bin"
    payload.write_bytes(bytes(2000))
    store = tmp_path / "store"

    r = CliRunner().invoke(
        registry_main, ["submit", str(store), str(payload), "--seed", SEED],
        env={"WAVEFN_MAX_BYTES": "1024"},
    )
    assert r.exit_code == 1
    assert r.output.startswith("FATAL: E_PAYLOAD_TOO_LARGE")
    assert not (store / "records.parquet").exists()
    assert not (store / "events.jsonl").exists()


def test_submit_without_seed_is_unauthenticated(tmp_path):
    payload = tmp_path / "psi.bin"
    payload.write_bytes(b"psi")

    r = CliRunner().invoke(registry_main, ["submit", str(tmp_path / "store"), str(payload)],
                           env={"WAVEFN_SEED": None})
    assert r.exit_code == 1
    assert r.output.startswith("FATAL: E_UNAUTHENTICATED")


def test_submit_bad_seed(tmp_path):
    payload = tmp_path / "psi.bin"
    payload.write_bytes(b"psi")

    r = CliRunner().invoke(registry_main, ["submit", str(tmp_path / "store"), str(payload), "--seed", "abcd"])
    assert r.exit_code == 1
    assert r.output.startswith("FATAL:")


def test_submit_corrupt_store_fails_closed(tmp_path):
    payload = tmp_path / "psi.bin"
    payload.write_bytes(b"psi")
    store = tmp_path / "store"
    store.mkdir()
    (store / "records.parquet").write_bytes(b"garbage")

    r = CliRunner().invoke(registry_main, ["submit", str(store), str(payload), "--seed", SEED])
    assert r.exit_code == 1
    assert r.output.startswith("FATAL:")
    assert r.exception is None or isinstance(r.exception, SystemExit)
