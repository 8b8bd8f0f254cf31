"""Institutional memory search over the LEDGER and the Wisdom Codex.

Contains the keyword-overlap retrieval logic. All functions operate on
document text already read by the caller, so they are pure and can be
tested without touching the filesystem.
"""

import logging
import re
from typing import List, Sequence

from boardroom.types import KeywordResult, SessionMatch

logger = logging.getLogger(__name__)

# Minimum keyword length to include in search (inclusive)
MIN_KEYWORD_LENGTH = 3

# Excerpt lengths for session previews
SESSION_EXCERPT_LENGTH = 400
PRECEDENT_EXCERPT_LENGTH = 300

DEFAULT_SEARCH_LIMIT = 10

# LEDGER sections start with a level-2 heading
SESSION_MARKER = re.compile(r"^## ", re.MULTILINE)

WISDOM_MIN_BULLET_LENGTH = 10


def extract_keywords(query: str) -> KeywordResult:
    """Extract search keywords from a query string.

    Words shorter than MIN_KEYWORD_LENGTH are dropped and duplicates are
    removed (first occurrence wins). ``all_filtered`` is set when the
    query had words but none survived, which callers report explicitly
    instead of returning silent empty results.
    """
    words = query.lower().split()
    keywords = list(dict.fromkeys(w for w in words if len(w) >= MIN_KEYWORD_LENGTH))
    return KeywordResult(keywords=keywords, all_filtered=bool(words) and not keywords)


def split_sessions(ledger: str) -> List[str]:
    """Split the LEDGER into session records, skipping any preamble."""
    if not ledger:
        return []
    return SESSION_MARKER.split(ledger)[1:]


def session_title(session: str) -> str:
    first_line = session.split("\n", 1)[0].strip()
    return first_line or "Untitled"


def score_session(session: str, keywords: Sequence[str]) -> int:
    """One point per distinct keyword present anywhere in the session."""
    lower = session.lower()
    return sum(1 for kw in dict.fromkeys(keywords) if kw in lower)


def search_sessions(
    ledger: str,
    keywords: Sequence[str],
    limit: int = DEFAULT_SEARCH_LIMIT,
    excerpt_length: int = SESSION_EXCERPT_LENGTH,
) -> List[SessionMatch]:
    """Rank LEDGER sessions by keyword overlap.

    Zero-score sessions are dropped. Results are sorted by descending
    score; ties keep document order.
    """
    if limit <= 0 or not keywords:
        return []

    matches = []
    for position, session in enumerate(split_sessions(ledger)):
        score = score_session(session, keywords)
        if score > 0:
            matches.append(
                SessionMatch(
                    title=session_title(session),
                    score=score,
                    excerpt=session[:excerpt_length],
                    position=position,
                )
            )

    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[:limit]


def parse_wisdom_entries(wisdom: str) -> List[str]:
    """Parse principle lines from the Wisdom Codex.

    Accepts lines starting with ``- [``, ``- *``, ``> ``, or any ``- ``
    bullet longer than 10 characters.
    """
    if not wisdom:
        return []
    return [
        line
        for line in wisdom.split("\n")
        if line.startswith("- [")
        or line.startswith("- *")
        or line.startswith("> ")
        or (line.startswith("- ") and len(line) > WISDOM_MIN_BULLET_LENGTH)
    ]


def search_wisdom(
    wisdom: str, keywords: Sequence[str], limit: int = DEFAULT_SEARCH_LIMIT
) -> List[str]:
    """Wisdom entries containing any keyword, in document order."""
    if limit <= 0 or not keywords:
        return []
    matched = [
        entry
        for entry in parse_wisdom_entries(wisdom)
        if any(kw in entry.lower() for kw in keywords)
    ]
    return matched[:limit]
