"""Tests for the Boardroom engine operations."""

import pytest

from boardroom.advisors import DemoAdvisorProvider, ProtocolAdvisorProvider
from boardroom.config import BoardroomConfig
from boardroom.core import (
    MAX_ADVISORS,
    SYSTEM_EXCERPT_LENGTH,
    Boardroom,
    format_outcome_entry,
    outcome_is_positive,
)
from boardroom.search import PRECEDENT_EXCERPT_LENGTH
from boardroom.storage import InMemoryTextStore, InMemoryTrustStore, JsonTrustStore
from boardroom.trust import DEFAULT_TRUST
from boardroom.types import Advisor, Severity, TrustRecommendation


class StaticAdvisors:
    """Advisor provider serving fixed seats per council."""

    full_protocol = True

    def __init__(self, seats, prompt=""):
        self.seats = seats
        self.prompt = prompt

    def load_council(self, council):
        return [Advisor(name=name, council=council) for name in self.seats.get(council, [])]

    def system_prompt(self):
        return self.prompt


class BrokenAdvisors(StaticAdvisors):
    def load_council(self, council):
        raise OSError("council documents unavailable")


def _boardroom(advisors, fixed_now, ledger=None, wisdom=None):
    return Boardroom(
        ledger=ledger or InMemoryTextStore(),
        wisdom=wisdom or InMemoryTextStore(),
        trust_store=InMemoryTrustStore(),
        advisors=advisors,
        now_fn=lambda: fixed_now,
    )


class TestCheckGovernance:
    def test_security_patch(self, boardroom):
        check = boardroom.check_governance(
            "We need to deploy a security patch before the breach spreads"
        )
        assert check.classification.category == "technology"
        assert check.severity is Severity.CRITICAL
        assert check.route.councils == ("Technology",)

    def test_general_fallback(self, boardroom):
        check = boardroom.check_governance("hello there")
        assert check.classification.category == "general"
        assert check.severity is Severity.ROUTINE
        assert check.route.councils == ("Keystone", "Business")

    def test_no_io(self, boardroom, ledger_store, trust_store):
        before = ledger_store.content
        boardroom.check_governance("Pivot the roadmap")
        assert ledger_store.content == before
        assert trust_store.saves == 0


class TestQueryIntelligence:
    def test_matches_both_sources(self, boardroom):
        result = boardroom.query_intelligence("pricing strategy")
        assert result.keywords == ["pricing", "strategy"]
        assert [s.score for s in result.sessions] == [2, 1]
        assert result.wisdom == ["- [2026-01] Pricing should follow value, not cost"]
        assert result.all_filtered is False

    def test_all_words_too_short(self, boardroom):
        result = boardroom.query_intelligence("a an to")
        assert result.all_filtered is True
        assert result.sessions == []
        assert result.wisdom == []

    def test_nothing_matches_is_not_all_filtered(self, boardroom):
        result = boardroom.query_intelligence("zzzz unmatched")
        assert result.all_filtered is False
        assert result.sessions == []
        assert result.wisdom == []

    def test_limit(self, boardroom):
        result = boardroom.query_intelligence("pricing", limit=1)
        assert len(result.sessions) == 1
        assert len(result.wisdom) == 1

    def test_missing_sources(self, fixed_now):
        b = _boardroom(DemoAdvisorProvider(), fixed_now)
        result = b.query_intelligence("pricing")
        assert result.ledger_available is False
        assert result.wisdom_available is False
        assert result.sessions == []


class TestAnalyze:
    def test_demo_council(self, boardroom):
        result = boardroom.analyze("Should we pivot our revenue strategy on pricing")
        assert result.classification.category == "strategy"
        assert result.councils == ["keystone", "business"]
        # same demo seats on both councils, deduped by name
        assert [a.name for a in result.advisors] == [
            "The Strategist",
            "The Operator",
            "The Skeptic",
        ]
        assert result.full_protocol is False
        assert result.system_excerpt == ""

    def test_precedents_and_wisdom(self, boardroom):
        result = boardroom.analyze("Should we pivot our revenue strategy on pricing")
        assert result.precedents[0].title == "Session 1: Pricing strategy review"
        assert all(len(p.excerpt) <= PRECEDENT_EXCERPT_LENGTH for p in result.precedents)
        assert result.wisdom == ["- [2026-01] Pricing should follow value, not cost"]

    def test_advisors_capped_and_deduped(self, fixed_now):
        seats = {
            "keystone": [f"Advisor {i}" for i in range(6)],
            "business": [f"Advisor {i}" for i in range(3, 10)],
        }
        b = _boardroom(StaticAdvisors(seats), fixed_now)
        result = b.analyze("hello there")
        names = [a.name for a in result.advisors]
        assert len(names) == MAX_ADVISORS
        assert len(set(names)) == len(names)
        assert names[:6] == [f"Advisor {i}" for i in range(6)]

    def test_system_prompt_excerpt(self, fixed_now):
        b = _boardroom(StaticAdvisors({}, prompt="x" * 2000), fixed_now)
        result = b.analyze("hello there")
        assert result.full_protocol is True
        assert result.system_excerpt == "x" * SYSTEM_EXCERPT_LENGTH

    def test_council_failure_degrades_to_empty(self, fixed_now):
        b = _boardroom(BrokenAdvisors({}), fixed_now)
        result = b.analyze("deploy the api")
        assert result.advisors == []
        assert result.classification.category == "technology"

    def test_missing_ledger(self, fixed_now):
        b = _boardroom(DemoAdvisorProvider(), fixed_now)
        result = b.analyze("pricing")
        assert result.ledger_available is False
        assert result.precedents == []


class TestOutcomes:
    def test_outcome_is_positive(self):
        assert outcome_is_positive("Shipped on time", True) is True
        assert outcome_is_positive("It broke in production", True) is False
        assert outcome_is_positive("We had to rollback", True) is False
        assert outcome_is_positive("Shipped on time", False) is False

    def test_negative_terms_match_whole_words(self):
        assert outcome_is_positive("Zero errors reported", True) is True
        assert outcome_is_positive("An ERROR was logged", True) is False

    def test_entry_format(self, fixed_now):
        entry = format_outcome_entry(
            "Launch", "Went well", True, fixed_now.isoformat(), entity="VendorA"
        )
        assert entry.startswith(f"\n## ✅ Outcome Report — {fixed_now.isoformat()}")
        assert "**Followed Recommendation:** Yes" in entry
        assert "**Entity:** VendorA" in entry
        assert entry.endswith("\n\n---")

    def test_entry_not_followed(self, fixed_now):
        entry = format_outcome_entry("Launch", "Meh", False, fixed_now.isoformat())
        assert "## ⚠️ Outcome Report" in entry
        assert "**Followed Recommendation:** No" in entry
        assert "Entity" not in entry

    def test_report_appends_to_ledger(self, boardroom, ledger_store):
        report = boardroom.report_outcome("Raise prices", "Revenue up", True)
        assert report.persisted is True
        assert ledger_store.content.endswith(report.entry)
        assert report.trust_update is None

    def test_reported_outcome_becomes_precedent(self, boardroom):
        boardroom.report_outcome("Migrate billing provider", "Smooth cutover", True)
        result = boardroom.query_intelligence("billing provider")
        assert len(result.sessions) == 1
        assert "Outcome Report" in result.sessions[0].title

    def test_negative_outcome_lowers_trust(self, boardroom):
        report = boardroom.report_outcome(
            "Use VendorA for hosting", "it broke in production", True, entity="VendorA"
        )
        assert report.outcome_positive is False
        assert report.trust_update.updated is True
        lookup = boardroom.trust_lookup("VendorA")
        assert lookup.profile.reliability < DEFAULT_TRUST
        assert lookup.profile.interactions == 1

    def test_lookup_round_trip(self, boardroom, fixed_now):
        boardroom.report_outcome("t", "went great", True, entity="VendorB")
        boardroom.report_outcome("t", "went great", True, entity="VendorB")
        lookup = boardroom.trust_lookup("VendorB")
        assert lookup.profile.interactions == 2
        assert lookup.profile.last_updated == fixed_now.isoformat()

    def test_not_followed_counts_as_negative(self, boardroom):
        report = boardroom.report_outcome("t", "went great", False, entity="VendorC")
        assert report.outcome_positive is False

    def test_ledger_write_failure_still_updates_trust(self, boardroom, ledger_store):
        ledger_store.fail_writes = True
        report = boardroom.report_outcome("t", "fine", True, entity="VendorA")
        assert report.persisted is False
        assert "Read-only" in report.write_error
        assert "Outcome Report" in report.entry
        assert report.trust_update.updated is True

    def test_trust_failure_does_not_fail_report(self, boardroom, trust_store):
        trust_store.fail_writes = True
        report = boardroom.report_outcome("t", "fine", True, entity="VendorA")
        assert report.persisted is True
        assert report.trust_update.updated is False


class TestTrustLookup:
    def test_unknown_entity(self, boardroom):
        lookup = boardroom.trust_lookup("Nobody", context="picking a CDN")
        assert lookup.known is False
        assert lookup.composite == DEFAULT_TRUST
        assert lookup.recommendation is TrustRecommendation.CAUTION
        assert lookup.context == "picking a CDN"


class TestFromConfig:
    def test_wires_file_stores(self, tmp_path):
        config = BoardroomConfig(root=tmp_path / "boardroom", trust_path=tmp_path / "t.json")
        b = Boardroom.from_config(config)
        assert b.ledger.location == str(tmp_path / "boardroom" / "LEDGER.md")
        assert isinstance(b.trust._store, JsonTrustStore)
        assert isinstance(b.advisors, DemoAdvisorProvider)

    def test_detects_protocol_files(self, tmp_path):
        mastermind = tmp_path / "boardroom" / "mastermind"
        (mastermind / "seats").mkdir(parents=True)
        (mastermind / "SYSTEM_PROMPT.md").write_text("prompt", encoding="utf-8")
        config = BoardroomConfig(root=tmp_path / "boardroom", trust_path=tmp_path / "t.json")
        b = Boardroom.from_config(config)
        assert isinstance(b.advisors, ProtocolAdvisorProvider)
        assert b.full_protocol is True
        assert b.advisors.system_prompt_path == config.system_prompt_path
        assert b.advisors.system_prompt() == "prompt"

    def test_report_outcome_creates_files(self, tmp_path):
        config = BoardroomConfig(root=tmp_path / "boardroom", trust_path=tmp_path / "t" / "t.json")
        b = Boardroom.from_config(config)
        report = b.report_outcome("t", "fine", True, entity="VendorA")
        assert report.persisted is True
        assert config.ledger_path.exists()
        assert config.trust_path.exists()


@pytest.mark.parametrize("limit", [1, 3, 10])
def test_query_limit_bounds_results(boardroom, limit):
    result = boardroom.query_intelligence("pricing database", limit=limit)
    assert len(result.sessions) <= limit
    assert len(result.wisdom) <= limit
