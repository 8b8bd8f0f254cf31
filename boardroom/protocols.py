"""
Boardroom Protocol Definitions
==============================

Interface contracts for the collaborators the engine reads from and
writes to. The engine never resolves file locations itself; it is handed
objects satisfying these protocols.

- TextStore:        a markdown document (session log, principle list, system prompt)
- TrustStore:       the reputation table, loaded and saved as a whole
- AdvisorProvider:  read-only council documents keyed by council id

Error handling philosophy:
- Reads of text documents are soft: a missing or unreadable document is None
- Appends and trust table loads/saves raise StorageError
- Invalid arguments raise ValueError
- The tool layer converts everything else into an error response
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from boardroom.types import Advisor


class BoardroomError(Exception):
    """Base exception for Boardroom."""


class StorageError(BoardroomError):
    """A store could not be read or written."""


class ToolExecutionError(BoardroomError):
    """Raised to make the MCP runtime flag a tool result as an error."""


@runtime_checkable
class TextStore(Protocol):
    """A text document that can be read and appended to."""

    @property
    def location(self) -> str:
        """Human-readable location, used in persistence notices."""
        ...

    def read(self) -> Optional[str]:
        """Return the document, or None if it is missing or unreadable."""
        ...

    def append(self, text: str) -> None:
        """Append text. Raises StorageError on failure."""
        ...


@runtime_checkable
class TrustStore(Protocol):
    """The reputation table: ``{"agents": {entity: profile-dict}}``."""

    def load(self) -> Dict[str, Any]:
        """Return the whole table. A missing table is empty.

        Raises StorageError if the table exists but cannot be read or parsed.
        """
        ...

    def save(self, table: Dict[str, Any]) -> None:
        """Replace the whole table. Raises StorageError on failure."""
        ...


@runtime_checkable
class AdvisorProvider(Protocol):
    """Council documents, full protocol files or the bundled demo council."""

    full_protocol: bool

    def load_council(self, council: str) -> List[Advisor]:
        """Return the advisors seated on a council (empty if none)."""
        ...

    def system_prompt(self) -> str:
        """Return the governance framework text, or an empty string."""
        ...
