"""In-memory stores, used by tests and embedders that manage their own persistence."""

import copy
from typing import Any, Dict, Optional

from boardroom.protocols import StorageError


class InMemoryTextStore:
    """A text document held in memory. ``None`` content means missing."""

    def __init__(self, content: Optional[str] = None, location: str = "<memory>"):
        self.content = content
        self._location = location
        self.fail_writes = False

    @property
    def location(self) -> str:
        return self._location

    def read(self) -> Optional[str]:
        return self.content

    def append(self, text: str) -> None:
        if self.fail_writes:
            raise StorageError(f"Read-only store: {self._location}")
        self.content = (self.content or "") + text


class InMemoryTrustStore:
    """The trust table held in memory. Saves are deep-copied."""

    def __init__(self, table: Optional[Dict[str, Any]] = None):
        self.table: Dict[str, Any] = copy.deepcopy(table) if table else {"agents": {}}
        self.fail_reads = False
        self.fail_writes = False
        self.saves = 0

    def load(self) -> Dict[str, Any]:
        if self.fail_reads:
            raise StorageError("Trust table unavailable")
        return copy.deepcopy(self.table)

    def save(self, table: Dict[str, Any]) -> None:
        if self.fail_writes:
            raise StorageError("Trust table is read-only")
        self.table = copy.deepcopy(table)
        self.saves += 1
