"""Advisor seat providers.

Two implementations of :class:`~boardroom.protocols.AdvisorProvider`:

- ProtocolAdvisorProvider reads ``<mastermind>/<council>/seats.md`` from
  the installed protocol files.
- DemoAdvisorProvider serves a small bundled council for every request.

The provider is chosen once at startup by :func:`select_advisor_provider`.

Seat files list advisors as ``board_member: <name>`` lines, each optionally
followed by ``key: value`` detail lines until the next advisor.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from boardroom.storage.flat_files import MarkdownFileStore
from boardroom.types import Advisor

logger = logging.getLogger(__name__)

SEATS_FILENAME = "seats.md"
SYSTEM_PROMPT_FILENAME = "SYSTEM_PROMPT.md"

# Any of these next to SYSTEM_PROMPT.md marks a full install
PROTOCOL_MARKERS = ("seats", "COGNITIVE_DOSSIERS.md", "SIGNATURE_QUESTIONS.md")

DETAIL_FIELDS = ("philosophy", "criteria", "signature_question", "tension_area")

_MEMBER_LINE = re.compile(r"^\s*[-*]?\s*board_member:\s*(.+)$", re.IGNORECASE)
_DETAIL_LINE = re.compile(r"^\s*[-*]?\s*([a-z_ ]+):\s*(.+)$", re.IGNORECASE)

DEMO_COUNCIL_NAME = "demo"

DEMO_ADVISORS: Tuple[Tuple[str, Dict[str, str]], ...] = (
    (
        "The Strategist",
        {
            "philosophy": "Position beats effort; choose the game before playing it.",
            "criteria": "Long-term leverage, defensibility, optionality",
            "signature_question": "What does this make possible in two years?",
            "tension_area": "Speed vs. positioning",
        },
    ),
    (
        "The Operator",
        {
            "philosophy": "Execution is the strategy; systems outlast heroics.",
            "criteria": "Repeatability, cost of failure, time to first result",
            "signature_question": "Who does this every day, and what breaks first?",
            "tension_area": "Ambition vs. capacity",
        },
    ),
    (
        "The Skeptic",
        {
            "philosophy": "Every plan hides an assumption that will be tested by reality.",
            "criteria": "Evidence quality, reversibility, downside exposure",
            "signature_question": "What would have to be true for this to fail?",
            "tension_area": "Conviction vs. doubt",
        },
    ),
)


def parse_seats(content: str, council: str) -> List[Advisor]:
    """Parse advisor seats from a seats document."""
    advisors: List[Advisor] = []
    current: Optional[Advisor] = None
    for line in content.splitlines():
        member = _MEMBER_LINE.match(line)
        if member:
            current = Advisor(name=member.group(1).strip(), council=council)
            advisors.append(current)
            continue
        if current is None:
            continue
        detail = _DETAIL_LINE.match(line)
        if detail:
            key = detail.group(1).strip().lower().replace(" ", "_")
            if key in DETAIL_FIELDS:
                current.details[key] = detail.group(2).strip()
    return advisors


def has_protocol_files(mastermind_root: Path) -> bool:
    """True if the full protocol files are installed.

    Requires SYSTEM_PROMPT.md and at least one council-level file to
    avoid false positives from partial installs.
    """
    try:
        if not (mastermind_root / SYSTEM_PROMPT_FILENAME).is_file():
            return False
        return any((mastermind_root / marker).exists() for marker in PROTOCOL_MARKERS)
    except OSError as e:
        logger.debug(f"Protocol detection failed for {mastermind_root}: {e}")
        return False


class ProtocolAdvisorProvider:
    """Advisor seats from the installed protocol files."""

    full_protocol = True

    def __init__(self, mastermind_root: Path, system_prompt_path: Optional[Path] = None):
        self.mastermind_root = Path(mastermind_root)
        self.system_prompt_path = (
            Path(system_prompt_path)
            if system_prompt_path is not None
            else self.mastermind_root / SYSTEM_PROMPT_FILENAME
        )

    def load_council(self, council: str) -> List[Advisor]:
        content = MarkdownFileStore(self.mastermind_root / council / SEATS_FILENAME).read()
        if not content:
            logger.debug(f"No seats for council {council!r}")
            return []
        return parse_seats(content, council)

    def system_prompt(self) -> str:
        return MarkdownFileStore(self.system_prompt_path).read() or ""


class DemoAdvisorProvider:
    """The bundled three-advisor demo council, seated on every council."""

    full_protocol = False

    def load_council(self, council: str) -> List[Advisor]:
        return [
            Advisor(name=name, council=DEMO_COUNCIL_NAME, details=dict(details))
            for name, details in DEMO_ADVISORS
        ]

    def system_prompt(self) -> str:
        return ""


def select_advisor_provider(mastermind_root: Path, system_prompt_path: Optional[Path] = None):
    """Pick the protocol provider when installed, else the demo council."""
    if has_protocol_files(mastermind_root):
        logger.info(f"Using full protocol files at {mastermind_root}")
        return ProtocolAdvisorProvider(mastermind_root, system_prompt_path)
    logger.info("Protocol files not found, using demo council")
    return DemoAdvisorProvider()
