"""WaveFunction registry protocol constants.

Single source of truth for record widths, hashing parameters and store layout.
Keep this file stable. Registry and verifier must remain synchronized.
"""

# Identity widths
ACCOUNT_ID_LEN = 32  # ed25519 public key
SEED_LEN = 32

# RecordId = blake2b(encode_record(record), digest_size=RECORD_ID_LEN)
RECORD_ID_LEN = 32
RECORD_ID_HEX_LEN = RECORD_ID_LEN * 2

# Default upper bound on len(function)
DEFAULT_MAX_BYTES = 1024 * 1024  # 1 MiB

# Domain tag prefixed to the payload before signing an add_wavefunction call
CALL_DOMAIN = b"wavefn/add_wavefunction\x00"

# Store directory layout
RECORDS_FILE = "records.parquet"
MANIFEST_FILE = "manifest.json"
EVENTS_FILE = "events.jsonl"

STORE_SCHEMA = "wavefn-store-v1"

# Canonical JSON for manifests, events and CLI output
CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}
