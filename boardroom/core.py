"""
Boardroom core - the decision-support engine.

Composes classification, routing, institutional memory search and the
trust ledger into the five caller-facing operations. Results are plain
dataclasses; rendering them as text is the tool layer's job.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, List, Optional, Tuple, TypeVar

from boardroom.advisors import select_advisor_provider
from boardroom.classification import (
    classify_severity,
    classify_task,
    councils_for,
    route_for,
)
from boardroom.config import BoardroomConfig, load_config
from boardroom.protocols import AdvisorProvider, StorageError, TextStore, TrustStore
from boardroom.search import (
    DEFAULT_SEARCH_LIMIT,
    PRECEDENT_EXCERPT_LENGTH,
    SESSION_EXCERPT_LENGTH,
    extract_keywords,
    search_sessions,
    search_wisdom,
)
from boardroom.storage import JsonTrustStore, MarkdownFileStore
from boardroom.trust import TrustLedger, utc_now
from boardroom.types import (
    Advisor,
    AnalysisResult,
    GovernanceCheck,
    IntelligenceResult,
    OutcomeReport,
    TrustLookup,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Negative outcome terms used to infer success/failure for trust scoring
NEGATIVE_OUTCOME_TERMS = re.compile(
    r"\b(fail|broke|error|crash|wrong|bad|lost|regress|rollback|revert)\b"
)

MAX_ADVISORS = 8
ANALYSIS_RESULT_LIMIT = 5
SYSTEM_EXCERPT_LENGTH = 500


def outcome_is_positive(outcome: str, followed_recommendation: bool) -> bool:
    """Positive only if the advice was followed and nothing went wrong."""
    return followed_recommendation and not NEGATIVE_OUTCOME_TERMS.search(outcome.lower())


def format_outcome_entry(
    task: str,
    outcome: str,
    followed_recommendation: bool,
    timestamp: str,
    entity: Optional[str] = None,
) -> str:
    """Build the LEDGER section for one outcome report."""
    emoji = "✅" if followed_recommendation else "⚠️"
    lines = [
        "",
        f"## {emoji} Outcome Report — {timestamp}",
        "",
        f"**Task:** {task}",
        f"**Outcome:** {outcome}",
        f"**Followed Recommendation:** {'Yes' if followed_recommendation else 'No'}",
    ]
    if entity:
        lines.append(f"**Entity:** {entity}")
    lines.extend([f"**Timestamp:** {timestamp}", "", "---"])
    return "\n".join(lines)


def _soft(fn: Callable[[], T], default: T, what: str) -> T:
    """Run a read-only load, degrading to ``default`` on failure."""
    try:
        return fn()
    except Exception as e:
        logger.warning(f"Failed to load {what}: {e}")
        return default


class Boardroom:
    """Decision-support engine.

    Args:
        ledger: The session log (read + append).
        wisdom: The principle list (read).
        trust_store: The reputation table.
        advisors: Council documents (protocol files or demo council).
        now_fn: Clock, injectable for tests.
    """

    def __init__(
        self,
        ledger: TextStore,
        wisdom: TextStore,
        trust_store: TrustStore,
        advisors: AdvisorProvider,
        now_fn: Callable[[], datetime] = utc_now,
    ):
        self.ledger = ledger
        self.wisdom = wisdom
        self.advisors = advisors
        self.trust = TrustLedger(trust_store, now_fn=now_fn)
        self._now = now_fn

    @classmethod
    def from_config(cls, config: Optional[BoardroomConfig] = None) -> "Boardroom":
        """Wire file-backed stores and pick the advisor provider once."""
        config = config or load_config()
        return cls(
            ledger=MarkdownFileStore(config.ledger_path),
            wisdom=MarkdownFileStore(config.wisdom_path),
            trust_store=JsonTrustStore(config.trust_path),
            advisors=select_advisor_provider(config.mastermind_root, config.system_prompt_path),
        )

    @property
    def full_protocol(self) -> bool:
        return bool(getattr(self.advisors, "full_protocol", False))

    # === Quick check ===

    def check_governance(self, task: str) -> GovernanceCheck:
        """Classify a task and pick its councils without any I/O."""
        classification = classify_task(task)
        return GovernanceCheck(
            task=task,
            classification=classification,
            severity=classify_severity(task),
            route=route_for(classification.category),
        )

    # === Institutional memory ===

    def _read_corpora(self) -> Tuple[Optional[str], Optional[str]]:
        with ThreadPoolExecutor(max_workers=2) as pool:
            ledger = pool.submit(_soft, self.ledger.read, None, "LEDGER")
            wisdom = pool.submit(_soft, self.wisdom.read, None, "Wisdom Codex")
            return ledger.result(), wisdom.result()

    def query_intelligence(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> IntelligenceResult:
        """Search the LEDGER and the Wisdom Codex for a query."""
        extracted = extract_keywords(query)
        if extracted.all_filtered:
            return IntelligenceResult(query=query, keywords=[], all_filtered=True)

        ledger, wisdom = self._read_corpora()
        return IntelligenceResult(
            query=query,
            keywords=extracted.keywords,
            sessions=search_sessions(
                ledger or "", extracted.keywords, limit, SESSION_EXCERPT_LENGTH
            ),
            wisdom=search_wisdom(wisdom or "", extracted.keywords, limit),
            ledger_available=ledger is not None,
            wisdom_available=wisdom is not None,
        )

    # === Full analysis ===

    def analyze(self, task: str) -> AnalysisResult:
        """Full consultation: route, load advisors, find precedents and wisdom.

        Council documents, the LEDGER, the Wisdom Codex and the system
        prompt are loaded concurrently; each degrades to empty on failure.
        """
        classification = classify_task(task)
        councils = councils_for(classification.category)
        keywords = extract_keywords(task).keywords

        with ThreadPoolExecutor(max_workers=len(councils) + 3) as pool:
            council_futures = [
                pool.submit(
                    _soft,
                    lambda c=council: self.advisors.load_council(c),
                    [],
                    f"council {council}",
                )
                for council in councils
            ]
            ledger_future = pool.submit(_soft, self.ledger.read, None, "LEDGER")
            wisdom_future = pool.submit(_soft, self.wisdom.read, None, "Wisdom Codex")
            prompt_future = (
                pool.submit(_soft, self.advisors.system_prompt, "", "system prompt")
                if self.full_protocol
                else None
            )

            advisor_lists = [f.result() for f in council_futures]
            ledger = ledger_future.result()
            wisdom = wisdom_future.result()
            system_prompt = prompt_future.result() if prompt_future else ""

        advisors: List[Advisor] = []
        seen = set()
        for advisor in (a for group in advisor_lists for a in group):
            if advisor.name not in seen:
                seen.add(advisor.name)
                advisors.append(advisor)

        return AnalysisResult(
            task=task,
            classification=classification,
            councils=councils,
            advisors=advisors[:MAX_ADVISORS],
            precedents=search_sessions(
                ledger or "", keywords, ANALYSIS_RESULT_LIMIT, PRECEDENT_EXCERPT_LENGTH
            ),
            wisdom=search_wisdom(wisdom or "", keywords, ANALYSIS_RESULT_LIMIT),
            full_protocol=self.full_protocol,
            system_excerpt=system_prompt[:SYSTEM_EXCERPT_LENGTH],
            ledger_available=ledger is not None,
            wisdom_available=wisdom is not None,
        )

    # === Trust ===

    def trust_lookup(self, entity: str, context: Optional[str] = None) -> TrustLookup:
        return self.trust.lookup(entity, context)

    # === Outcomes ===

    def report_outcome(
        self,
        task: str,
        outcome: str,
        followed_recommendation: bool = True,
        entity: Optional[str] = None,
    ) -> OutcomeReport:
        """Append an outcome to the LEDGER and update the entity's trust.

        A failed LEDGER write is reported on the returned record; the
        trust update still runs.
        """
        timestamp = self._now()
        entry = format_outcome_entry(
            task, outcome, followed_recommendation, timestamp.isoformat(), entity
        )
        report = OutcomeReport(
            task=task,
            outcome=outcome,
            followed_recommendation=followed_recommendation,
            timestamp=timestamp,
            entry=entry,
            entity=entity or None,
        )

        try:
            self.ledger.append(entry)
            report.persisted = True
        except (StorageError, OSError) as e:
            logger.warning(f"Outcome not persisted to {self.ledger.location}: {e}")
            report.write_error = str(e)

        if entity:
            report.outcome_positive = outcome_is_positive(outcome, followed_recommendation)
            report.trust_update = self.trust.update(entity, report.outcome_positive)

        return report
