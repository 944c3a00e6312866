import threading
from dataclasses import dataclass, replace
from typing import Dict, Optional


@dataclass(frozen=True)
class LedgerEntry:
    key: int
    used: bool = False
    deposits: int = 1
    blinded: bool = False


class MemoryLedgerStore:
    """
    In-process backing store for the escrow ledger.

    Entries are never deleted. Every mutation happens under one lock, which
    makes mark_used and admit_unblinded compare-and-set operations: of two
    callers racing on the same key exactly one sees True.
    """

    def __init__(self):
        self._entries: Dict[int, LedgerEntry] = dict()
        self._blind_units = 0
        self._lock = threading.Lock()

    def get(self, key: int) -> Optional[LedgerEntry]:
        with self._lock:
            return self._entries.get(key)

    def record_deposit(self, key: int, blinded: bool = False) -> Optional[LedgerEntry]:
        """ Returns None, recording nothing, when key is already used. """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.used:
                return None
            if entry is None:
                entry = LedgerEntry(key=key, blinded=blinded)
            else:
                entry = replace(entry, deposits=entry.deposits + 1)
            self._entries[key] = entry
            if blinded:
                self._blind_units += 1
            return entry

    def mark_used(self, key: int) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.used:
                return False
            self._entries[key] = replace(entry, used=True)
            return True

    def admit_unblinded(self, key: int) -> bool:
        """ Create key as already used, drawing one outstanding blinded unit. """
        with self._lock:
            if key in self._entries or self._blind_units < 1:
                return False
            self._entries[key] = LedgerEntry(key=key, used=True, deposits=0)
            self._blind_units -= 1
            return True

    @property
    def blind_units(self) -> int:
        with self._lock:
            return self._blind_units

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def used_count(self) -> int:
        with self._lock:
            return sum(1 for entry in self._entries.values() if entry.used)
