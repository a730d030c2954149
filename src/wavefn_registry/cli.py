import json
import os
from pathlib import Path

import click
from nacl.signing import SigningKey

from wavefn_core.protocol import CANONICAL_JSON_KW, DEFAULT_MAX_BYTES, EVENTS_FILE, SEED_LEN

from .dispatch import authenticate, ensure_signed, sign_call
from .errors import RegistryError
from .events import JsonlEventLog
from .registry import Registry
from .storage import ParquetRecordStore


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, **CANONICAL_JSON_KW))


@click.group()
def main():
    pass


@main.command("keygen")
def keygen_cmd():
    """Generate a signer seed and its account id."""
    seed = os.urandom(SEED_LEN)
    _echo_json({"seed": seed.hex(), "account_id": bytes(SigningKey(seed).verify_key).hex()})


@main.command("submit")
@click.argument("store", type=click.Path(file_okay=False, path_type=Path))
@click.argument("function", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--seed", envvar="WAVEFN_SEED", default=None, help="Hex ed25519 seed of the submitter")
@click.option("--max-bytes", envvar="WAVEFN_MAX_BYTES", type=click.IntRange(min=0),
              default=DEFAULT_MAX_BYTES, show_default=True)
def submit_cmd(store: Path, function: Path, seed: str | None, max_bytes: int):
    """Register the bytes of FUNCTION in STORE."""
    try:
        payload = function.read_bytes()
        registry = Registry(
            ParquetRecordStore(store),
            max_bytes=max_bytes,
            sink=JsonlEventLog(store / EVENTS_FILE),
        )
        # Without --seed no identity is attached and the call is rejected.
        origin = authenticate(sign_call(bytes.fromhex(seed), payload)) if seed else None
        author = ensure_signed(origin)
        rid = registry.submit(author, payload)
    except RegistryError as e:
        # Fail closed, with a single-line reason.
        click.echo(f"FATAL: {e.code}: {e}")
        raise SystemExit(1)
    except Exception as e:
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)

    _echo_json({"status": "PASS", "record_id": rid, "author": author.hex(), "size": len(payload)})


if __name__ == "__main__":
    main()
