"""Tests for trust scoring and the trust ledger."""

import random

import pytest

from boardroom.protocols import StorageError
from boardroom.storage import InMemoryTrustStore
from boardroom.trust import (
    DEFAULT_TRUST,
    TRUST_WEIGHTS,
    TrustLedger,
    apply_outcome,
    clamp01,
    compute_composite_score,
    recommend,
)
from boardroom.types import TrustProfile, TrustRecommendation

DIMENSIONS = list(TRUST_WEIGHTS)


@pytest.fixture
def ledger(trust_store, fixed_now):
    return TrustLedger(trust_store, now_fn=lambda: fixed_now)


class TestScoring:
    def test_weights_sum_to_one(self):
        assert sum(TRUST_WEIGHTS.values()) == pytest.approx(1.0)

    def test_neutral_profile_composite(self):
        assert compute_composite_score(TrustProfile()) == pytest.approx(0.5)

    def test_perfect_profile_composite(self):
        profile = TrustProfile(**{dim: 1.0 for dim in DIMENSIONS})
        assert compute_composite_score(profile) == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "composite,expected",
        [
            (1.0, TrustRecommendation.TRUST),
            (0.85, TrustRecommendation.TRUST),
            (0.84, TrustRecommendation.VERIFY),
            (0.65, TrustRecommendation.VERIFY),
            (0.64, TrustRecommendation.CAUTION),
            (0.45, TrustRecommendation.CAUTION),
            (0.44, TrustRecommendation.AVOID),
            (0.0, TrustRecommendation.AVOID),
        ],
    )
    def test_recommendation_thresholds(self, composite, expected):
        assert recommend(composite) is expected

    def test_clamp01(self):
        assert clamp01(-0.2) == 0.0
        assert clamp01(1.3) == 1.0
        assert clamp01(0.4) == 0.4


class TestApplyOutcome:
    def test_new_entity_success(self):
        profile = apply_outcome(None, True, "ts")
        assert profile.reliability == pytest.approx(0.6)
        assert profile.outcome_quality == pytest.approx(0.6)
        assert profile.follow_through == pytest.approx(0.55)
        assert profile.honesty == DEFAULT_TRUST
        assert profile.stability == DEFAULT_TRUST
        assert profile.risk_profile == DEFAULT_TRUST
        assert profile.interactions == 1
        assert profile.last_updated == "ts"

    def test_new_entity_failure(self):
        profile = apply_outcome(None, False, "ts")
        assert profile.reliability == pytest.approx(0.35)
        assert profile.outcome_quality == pytest.approx(0.35)
        assert profile.follow_through == pytest.approx(0.4)
        assert profile.interactions == 1

    def test_existing_entity_moves_by_scaled_delta(self):
        profile = apply_outcome(TrustProfile(reliability=0.6, interactions=1), True, "ts")
        assert profile.reliability == pytest.approx(0.62)
        assert profile.outcome_quality == pytest.approx(0.52)
        assert profile.follow_through == pytest.approx(0.51)
        assert profile.interactions == 2

    def test_existing_entity_failure(self):
        profile = apply_outcome(TrustProfile(), False, "ts")
        assert profile.reliability == pytest.approx(0.47)
        assert profile.follow_through == pytest.approx(0.48)

    def test_untouched_dimensions(self):
        start = TrustProfile(honesty=0.9, stability=0.1, risk_profile=0.3)
        profile = apply_outcome(start, False, "ts")
        assert (profile.honesty, profile.stability, profile.risk_profile) == (0.9, 0.1, 0.3)

    def test_failure_erodes_more_than_success_builds(self):
        up = apply_outcome(TrustProfile(), True, "ts")
        down = apply_outcome(TrustProfile(), False, "ts")
        assert 0.5 - down.reliability > up.reliability - 0.5

    def test_negative_composite_below_positive(self):
        base = TrustProfile(reliability=0.7, follow_through=0.6, outcome_quality=0.4)
        up = apply_outcome(TrustProfile(**vars(base)), True, "ts")
        down = apply_outcome(TrustProfile(**vars(base)), False, "ts")
        assert compute_composite_score(down) < compute_composite_score(up)

    def test_scores_stay_in_unit_interval(self):
        rng = random.Random(1234)
        for _ in range(20):
            profile = None
            for _ in range(200):
                profile = apply_outcome(profile, rng.random() < 0.5, "ts")
                for dim in DIMENSIONS:
                    assert 0.0 <= getattr(profile, dim) <= 1.0

    def test_long_success_streak_saturates_at_one(self):
        profile = None
        for _ in range(100):
            profile = apply_outcome(profile, True, "ts")
        assert profile.reliability == 1.0
        assert profile.interactions == 100

    def test_long_failure_streak_floors_at_zero(self):
        profile = None
        for _ in range(100):
            profile = apply_outcome(profile, False, "ts")
        assert profile.reliability == 0.0
        assert profile.follow_through == 0.0


class TestTrustLedgerLookup:
    def test_unknown_entity(self, ledger, trust_store):
        lookup = ledger.lookup("Nobody")
        assert lookup.known is False
        assert lookup.composite == DEFAULT_TRUST
        assert lookup.recommendation is TrustRecommendation.CAUTION
        assert trust_store.saves == 0

    def test_context_is_echoed(self, ledger):
        assert ledger.lookup("Nobody", "evaluating a vendor").context == "evaluating a vendor"
        assert ledger.lookup("Nobody", "").context is None

    def test_known_entity(self, ledger):
        ledger.update("VendorA", True)
        lookup = ledger.lookup("VendorA")
        assert lookup.known
        assert lookup.composite == pytest.approx(compute_composite_score(lookup.profile))
        assert lookup.recommendation is recommend(lookup.composite)

    def test_unreadable_table_degrades_to_unknown(self, ledger, trust_store):
        trust_store.fail_reads = True
        lookup = ledger.lookup("VendorA")
        assert lookup.known is False
        assert lookup.composite == DEFAULT_TRUST
        assert lookup.error == "Trust table unavailable"

    def test_malformed_agents_degrades_to_unknown(self):
        ledger = TrustLedger(InMemoryTrustStore({"agents": ["not", "a", "map"]}))
        lookup = ledger.lookup("VendorA")
        assert lookup.known is False
        assert lookup.error is not None

    @pytest.mark.parametrize("bad_value", ["high", None, [0.5]])
    def test_malformed_profile_degrades_to_unknown(self, bad_value):
        """A stored profile with a non-numeric score is treated as unreadable."""
        ledger = TrustLedger(InMemoryTrustStore({"agents": {"VendorA": {"reliability": bad_value}}}))
        lookup = ledger.lookup("VendorA")
        assert lookup.known is False
        assert lookup.composite == DEFAULT_TRUST
        assert "malformed trust profile for 'VendorA'" in lookup.error

    def test_malformed_profile_get_raises_storage_error(self):
        ledger = TrustLedger(InMemoryTrustStore({"agents": {"VendorA": {"reliability": "high"}}}))
        with pytest.raises(StorageError, match="malformed trust profile"):
            ledger.get("VendorA")
        with pytest.raises(StorageError, match="malformed trust profile"):
            ledger.list_profiles()

    def test_malformed_profile_not_overwritten_on_update(self, fixed_now):
        store = InMemoryTrustStore({"agents": {"VendorA": {"reliability": "high"}}})
        ledger = TrustLedger(store, now_fn=lambda: fixed_now)
        result = ledger.update("VendorA", True)
        assert result.updated is False
        assert "malformed trust profile" in result.error
        assert store.saves == 0


class TestTrustLedgerUpdate:
    def test_round_trip(self, ledger, trust_store, fixed_now):
        first = ledger.update("VendorA", True)
        second = ledger.update("VendorA", True)
        assert first.updated and second.updated
        stored = ledger.get("VendorA")
        assert stored.interactions == 2
        assert stored.last_updated == fixed_now.isoformat()
        assert trust_store.saves == 2

    def test_persisted_with_camel_case_keys(self, ledger, trust_store):
        ledger.update("VendorA", False)
        record = trust_store.table["agents"]["VendorA"]
        assert set(record) == {
            "reliability",
            "honesty",
            "followThrough",
            "outcomeQuality",
            "stability",
            "riskProfile",
            "interactions",
            "lastUpdated",
        }
        assert record["followThrough"] == pytest.approx(0.4)

    def test_other_entities_untouched(self, trust_store, fixed_now):
        trust_store.table = {"agents": {"Other": {"reliability": 0.9}}, "version": 1}
        ledger = TrustLedger(trust_store, now_fn=lambda: fixed_now)
        ledger.update("VendorA", True)
        assert trust_store.table["agents"]["Other"] == {"reliability": 0.9}
        assert trust_store.table["version"] == 1

    def test_missing_agents_key_is_created(self, fixed_now):
        store = InMemoryTrustStore({"version": 1})
        ledger = TrustLedger(store, now_fn=lambda: fixed_now)
        assert ledger.update("VendorA", True).updated
        assert "VendorA" in store.table["agents"]

    def test_no_entity(self, ledger, trust_store):
        result = ledger.update("", True)
        assert result.updated is False
        assert result.error == "No entity provided"
        assert trust_store.saves == 0

    def test_read_failure_reports_not_updated(self, ledger, trust_store):
        trust_store.fail_reads = True
        result = ledger.update("VendorA", True)
        assert result.updated is False
        assert "unavailable" in result.error
        assert trust_store.saves == 0

    def test_write_failure_reports_not_updated(self, ledger, trust_store):
        trust_store.fail_writes = True
        result = ledger.update("VendorA", True)
        assert result.updated is False
        assert "read-only" in result.error

    def test_malformed_agents_not_overwritten(self, fixed_now):
        store = InMemoryTrustStore({"agents": "garbage"})
        ledger = TrustLedger(store, now_fn=lambda: fixed_now)
        assert ledger.update("VendorA", True).updated is False
        assert store.table == {"agents": "garbage"}
        assert store.saves == 0

    def test_list_profiles_sorted(self, ledger):
        for entity in ("zeta", "Alpha", "beta"):
            ledger.update(entity, True)
        assert [name for name, _ in ledger.list_profiles()] == ["Alpha", "beta", "zeta"]
