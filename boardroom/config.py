"""Configuration for Boardroom, resolved from environment variables.

Resolution order for every path:
1. Explicit environment variable
2. Default under the user's home directory
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path(".ai") / "boardroom"
DEFAULT_TRUST_PATH = Path(".boardroom") / "trust-oracle.json"

LEDGER_FILENAME = "LEDGER.md"
WISDOM_FILENAME = "BOARD_WISDOM.md"
SYSTEM_PROMPT_FILENAME = "SYSTEM_PROMPT.md"


@dataclass(frozen=True)
class BoardroomConfig:
    """Resolved locations of the Boardroom data stores."""

    root: Path
    trust_path: Path
    log_level: str = "WARNING"

    @property
    def mastermind_root(self) -> Path:
        """Councils, seats, and system prompts."""
        return self.root / "mastermind"

    @property
    def ledger_path(self) -> Path:
        """Persistent decision memory (markdown)."""
        return self.root / LEDGER_FILENAME

    @property
    def wisdom_path(self) -> Path:
        """Distilled principles (markdown)."""
        return self.mastermind_root / WISDOM_FILENAME

    @property
    def system_prompt_path(self) -> Path:
        return self.mastermind_root / SYSTEM_PROMPT_FILENAME


def _home(environ: Mapping[str, str]) -> Path:
    home = environ.get("HOME") or environ.get("USERPROFILE")
    return Path(home) if home else Path("/home/user")


def load_config(environ: Optional[Mapping[str, str]] = None) -> BoardroomConfig:
    """Read Boardroom configuration from environment variables.

    - ``BOARDROOM_ROOT``: protocol root (default ``~/.ai/boardroom``)
    - ``BOARDROOM_TRUST_PATH``: trust table (default ``~/.boardroom/trust-oracle.json``)
    - ``BOARDROOM_LOG_LEVEL``: logging level name (default ``WARNING``)
    """
    env = os.environ if environ is None else environ
    home = _home(env)

    root = Path(env["BOARDROOM_ROOT"]) if env.get("BOARDROOM_ROOT") else home / DEFAULT_ROOT
    trust_path = (
        Path(env["BOARDROOM_TRUST_PATH"])
        if env.get("BOARDROOM_TRUST_PATH")
        else home / DEFAULT_TRUST_PATH
    )

    log_level = (env.get("BOARDROOM_LOG_LEVEL") or "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning(f"Unknown BOARDROOM_LOG_LEVEL {log_level!r}, using WARNING")
        log_level = "WARNING"

    return BoardroomConfig(root=root, trust_path=trust_path, log_level=log_level)
