"""WaveFunction Core - Shared record model and identity."""
from .ids import record_id
from .records import Principal, WaveFunction, encode_record

__all__ = ["record_id", "Principal", "WaveFunction", "encode_record"]
