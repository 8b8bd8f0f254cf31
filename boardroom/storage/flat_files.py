"""File-backed stores for Boardroom.

Human-readable markdown documents (LEDGER, Wisdom Codex, system prompt)
and the JSON trust table. The trust table is rewritten through a
temporary file and ``os.replace`` so a failed write never leaves a
truncated table behind.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from boardroom.protocols import StorageError

logger = logging.getLogger(__name__)


class MarkdownFileStore:
    """A markdown document on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def read(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"Document not found: {self.path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {self.path}: {e}")
            return None

    def append(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise StorageError(f"{e.strerror or e}: {self.path}") from e

    def __repr__(self) -> str:
        return f"MarkdownFileStore({str(self.path)!r})"


class JsonTrustStore:
    """The trust table as a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def load(self) -> Dict[str, Any]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {"agents": {}}
        except OSError as e:
            raise StorageError(f"Cannot read trust table {self.path}: {e}") from e

        if not content.strip():
            return {"agents": {}}

        try:
            table = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageError(f"Trust table {self.path} is not valid JSON: {e}") from e

        if not isinstance(table, dict):
            raise StorageError(f"Trust table {self.path} must be a JSON object")
        return table

    def save(self, table: Dict[str, Any]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(table, f, indent=2)
            # Secure permissions
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Cannot write trust table {self.path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug(f"Could not remove temp file {tmp_name}")

    def __repr__(self) -> str:
        return f"JsonTrustStore({str(self.path)!r})"
