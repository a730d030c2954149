"""WaveFunction Verify - offline checks of a persisted store."""
from .logic import verify_store
from .merkle import compute_state_root

__all__ = ["verify_store", "compute_state_root"]
