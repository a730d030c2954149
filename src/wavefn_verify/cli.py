import json
from pathlib import Path
import click
from wavefn_core.protocol import CANONICAL_JSON_KW
from .logic import verify_store

@click.group()
def main():
    pass

@main.command("store")
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--max-bytes", envvar="WAVEFN_MAX_BYTES", type=click.IntRange(min=0), default=None)
def store_cmd(path: Path, max_bytes: int | None):
    result = verify_store(path, max_bytes=max_bytes)
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))
    if result["status"] != "PASS":
        raise SystemExit(1)

if __name__ == "__main__":
    main()
