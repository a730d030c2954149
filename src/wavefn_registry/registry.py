"""WaveFunction Registry - content-addressed record submission."""
from __future__ import annotations

from typing import Callable

from wavefn_core.ids import record_id
from wavefn_core.protocol import DEFAULT_MAX_BYTES
from wavefn_core.records import Principal, WaveFunction

from .errors import PayloadTooLarge, Unauthenticated
from .events import EventLog, WaveFunctionAdded
from .storage import MemoryRecordStore, RecordStore

EventSink = Callable[[WaveFunctionAdded], None]


class Registry:
    """Owns the RecordId -> WaveFunction map and the single write operation.

    - ``store`` is the map; nothing else writes to it.
    - ``max_bytes`` bounds ``len(function)`` at submission time and is never
      changed after construction.
    - ``sink`` receives one ``WaveFunctionAdded`` per successful submission.
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        max_bytes: int = DEFAULT_MAX_BYTES,
        sink: EventSink | None = None,
    ):
        if max_bytes < 0:
            raise ValueError(f"max_bytes must be non-negative, got {max_bytes}")
        self.store = store if store is not None else MemoryRecordStore()
        self._max_bytes = int(max_bytes)
        self.sink = sink if sink is not None else EventLog()

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def submit(
        self,
        author: Principal | None,
        function: bytes,
        sink: EventSink | None = None,
    ) -> str:
        """Validate, hash, store and announce one WaveFunction.

        Returns the RecordId. Raises ``Unauthenticated`` or ``PayloadTooLarge``
        before touching the store. The entry is persisted before the event is
        emitted; if storing or notifying fails, the store, on disk included, is
        left as it was before the call.
        """
        if author is None:
            raise Unauthenticated()

        function = bytes(function)
        if len(function) > self._max_bytes:
            raise PayloadTooLarge(len(function), self._max_bytes)

        candidate = WaveFunction(function=function, author=author.account_id)
        rid = record_id(candidate)

        notify = sink if sink is not None else self.sink
        with self.store.transaction():
            # Store precedes notify: a consumer of the event may read the entry.
            self.store.insert(rid, candidate)
            self.store.flush()
            notify(WaveFunctionAdded(function=function, author=author.account_id, id=rid))
        return rid
