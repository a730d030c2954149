ERRORS = {
  "E_LAYOUT_MISSING": "Required file or directory missing",
  "E_MANIFEST_JSON": "Manifest JSON invalid",
  "E_PARQUET_MAGIC": "Parquet file missing PAR1 magic bytes",
  "E_PARQUET_SCHEMA": "Records table does not match the store schema",
  "E_AUTHOR_FORMAT": "Author is not a 32-byte account id",
  "E_RECORD_ID_MISMATCH": "Record id does not match record content",
  "E_PAYLOAD_TOO_LARGE": "Stored function exceeds max_bytes",
  "E_STATE_ROOT_MISMATCH": "State root does not match manifest",
}
