"""Registry notifications.

A sink is any callable taking one event. The registry calls it once per
successful submission, after the record is stored.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from wavefn_core.protocol import CANONICAL_JSON_KW


@dataclass(frozen=True)
class WaveFunctionAdded:
    function: bytes
    author: bytes
    id: str

    def to_dict(self) -> dict:
        return {
            "evt": "wave_function_added",
            "function": self.function.hex(),
            "author": self.author.hex(),
            "id": self.id,
        }

    @classmethod
    def from_dict(cls, obj: dict) -> WaveFunctionAdded:
        return cls(
            function=bytes.fromhex(obj["function"]),
            author=bytes.fromhex(obj["author"]),
            id=obj["id"],
        )


class EventLog:
    """In-memory event sink."""

    def __init__(self):
        self.events: list[WaveFunctionAdded] = []

    def __call__(self, event: WaveFunctionAdded) -> None:
        self.events.append(event)

    def __len__(self) -> int:
        return len(self.events)


class JsonlEventLog:
    """Appends one canonical JSON line per event."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def __call__(self, event: WaveFunctionAdded) -> None:
        line = json.dumps(event.to_dict(), **CANONICAL_JSON_KW).encode("utf-8")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "ab") as f:
            f.write(line + b"\n")

    def read(self) -> list[WaveFunctionAdded]:
        if not self.path.exists():
            return []
        events = []
        with open(self.path, "rb") as f:
            for line in f:
                if line.strip():
                    events.append(WaveFunctionAdded.from_dict(json.loads(line)))
        return events
