"""WaveFunction Registry - storage, submission and call surface."""
from .dispatch import SignedCall, add_wavefunction, authenticate, dispatch, sign_call
from .errors import PayloadTooLarge, RegistryError, Unauthenticated
from .events import EventLog, JsonlEventLog, WaveFunctionAdded
from .registry import Registry
from .storage import MemoryRecordStore, ParquetRecordStore, RecordStore

__all__ = [
    "Registry",
    "RecordStore",
    "MemoryRecordStore",
    "ParquetRecordStore",
    "WaveFunctionAdded",
    "EventLog",
    "JsonlEventLog",
    "RegistryError",
    "Unauthenticated",
    "PayloadTooLarge",
    "SignedCall",
    "sign_call",
    "authenticate",
    "add_wavefunction",
    "dispatch",
]
