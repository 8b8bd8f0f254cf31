"""Trust ledger for Boardroom.

Maintains a 6-dimension trust vector per entity (agent, tool, vendor,
platform), updated from reported outcomes with an exponential moving
average. Deltas are asymmetric: failures erode trust faster than
successes build it.

The whole table is read, one record mutated, and the whole table written
back on every update. There is no locking; a single writer is assumed.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from boardroom.protocols import StorageError, TrustStore
from boardroom.types import TrustLookup, TrustProfile, TrustRecommendation, TrustUpdateResult

logger = logging.getLogger(__name__)

# EMA smoothing factor for trust score updates
TRUST_EMA_ALPHA = 0.2

# Reliability / outcome quality deltas
TRUST_DELTA_SUCCESS = 0.1
TRUST_DELTA_FAILURE = -0.15

# Follow-through deltas
FOLLOW_THROUGH_DELTA_SUCCESS = 0.05
FOLLOW_THROUGH_DELTA_FAILURE = -0.1

# Neutral starting point and score shown for unknown entities
DEFAULT_TRUST = 0.5

# Weights for the composite trust score (sum to 1.0)
TRUST_WEIGHTS: Dict[str, float] = {
    "reliability": 0.25,
    "honesty": 0.20,
    "follow_through": 0.20,
    "outcome_quality": 0.15,
    "stability": 0.10,
    "risk_profile": 0.10,
}

# (minimum composite, recommendation), highest first
RECOMMENDATION_THRESHOLDS: Tuple[Tuple[float, TrustRecommendation], ...] = (
    (0.85, TrustRecommendation.TRUST),
    (0.65, TrustRecommendation.VERIFY),
    (0.45, TrustRecommendation.CAUTION),
)

RECOMMENDATION_TEXT: Dict[TrustRecommendation, str] = {
    TrustRecommendation.TRUST: "✅ TRUST — High confidence, minimal oversight needed",
    TrustRecommendation.VERIFY: "🔍 VERIFY — Good standing, periodic checks recommended",
    TrustRecommendation.CAUTION: "⚠️ CAUTION — Elevated risk, active monitoring required",
    TrustRecommendation.AVOID: "🚫 AVOID — Insufficient trust, do not delegate critical tasks",
}


def clamp01(value: float) -> float:
    """Clamp a value to the [0, 1] range."""
    return max(0.0, min(1.0, value))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def compute_composite_score(profile: TrustProfile) -> float:
    """Weighted composite of the six trust dimensions."""
    return sum(getattr(profile, dim) * weight for dim, weight in TRUST_WEIGHTS.items())


def recommend(composite: float) -> TrustRecommendation:
    for threshold, recommendation in RECOMMENDATION_THRESHOLDS:
        if composite >= threshold:
            return recommendation
    return TrustRecommendation.AVOID


def apply_outcome(
    profile: Optional[TrustProfile], success: bool, timestamp: str
) -> TrustProfile:
    """Return the profile after one outcome.

    A new profile starts at 0.5 with the unscaled delta applied to the
    affected dimensions. An existing profile moves by the delta scaled by
    TRUST_EMA_ALPHA. Honesty, stability and risk profile are untouched.
    """
    delta = TRUST_DELTA_SUCCESS if success else TRUST_DELTA_FAILURE
    ft_delta = FOLLOW_THROUGH_DELTA_SUCCESS if success else FOLLOW_THROUGH_DELTA_FAILURE

    if profile is None:
        return TrustProfile(
            reliability=clamp01(DEFAULT_TRUST + delta),
            honesty=DEFAULT_TRUST,
            follow_through=clamp01(DEFAULT_TRUST + ft_delta),
            outcome_quality=clamp01(DEFAULT_TRUST + delta),
            stability=DEFAULT_TRUST,
            risk_profile=DEFAULT_TRUST,
            interactions=1,
            last_updated=timestamp,
        )

    profile.reliability = clamp01(profile.reliability + TRUST_EMA_ALPHA * delta)
    profile.outcome_quality = clamp01(profile.outcome_quality + TRUST_EMA_ALPHA * delta)
    profile.follow_through = clamp01(profile.follow_through + TRUST_EMA_ALPHA * ft_delta)
    profile.interactions += 1
    profile.last_updated = timestamp
    return profile


class TrustLedger:
    """Read-modify-write access to the trust table through an injected store."""

    def __init__(self, store: TrustStore, now_fn: Callable[[], datetime] = utc_now):
        self._store = store
        self._now = now_fn

    def _agents(self) -> Dict[str, dict]:
        table = self._store.load()
        agents = table.get("agents") if isinstance(table, dict) else None
        if agents is None:
            return {}
        if not isinstance(agents, dict):
            raise StorageError("trust table 'agents' must be an object")
        return agents

    @staticmethod
    def _profile(entity: str, data: Dict[str, Any]) -> TrustProfile:
        try:
            return TrustProfile.from_dict(data)
        except (TypeError, ValueError) as e:
            raise StorageError(f"malformed trust profile for {entity!r}: {e}") from e

    def get(self, entity: str) -> Optional[TrustProfile]:
        """Return the stored profile for an entity, or None.

        Raises StorageError if the table cannot be read or the stored
        profile is malformed.
        """
        data = self._agents().get(entity)
        if not isinstance(data, dict):
            return None
        return self._profile(entity, data)

    def list_profiles(self) -> List[Tuple[str, TrustProfile]]:
        """All profiles, sorted by entity name."""
        agents = self._agents()
        return [
            (entity, self._profile(entity, data))
            for entity, data in sorted(agents.items())
            if isinstance(data, dict)
        ]

    def lookup(self, entity: str, context: Optional[str] = None) -> TrustLookup:
        """Look up an entity without writing anything.

        Unknown entities, and entities in an unreadable table, are shown
        with the default composite score.
        """
        error = None
        try:
            profile = self.get(entity)
        except StorageError as e:
            logger.warning(f"Trust table unreadable during lookup of {entity!r}: {e}")
            profile = None
            error = str(e)

        composite = compute_composite_score(profile) if profile else DEFAULT_TRUST
        return TrustLookup(
            entity=entity,
            profile=profile,
            composite=composite,
            recommendation=recommend(composite),
            context=context or None,
            error=error,
        )

    def update(self, entity: Optional[str], success: bool) -> TrustUpdateResult:
        """Update (or create) the profile for an entity from one outcome.

        Never raises; read and write failures come back as
        ``updated=False`` with the error message.
        """
        if not entity:
            return TrustUpdateResult(updated=False, error="No entity provided")

        try:
            table = self._store.load()
            agents = table.setdefault("agents", {})
            if not isinstance(agents, dict):
                raise StorageError("trust table 'agents' must be an object")

            existing = agents.get(entity)
            current = self._profile(entity, existing) if isinstance(existing, dict) else None
            profile = apply_outcome(current, success, self._now().isoformat())
            agents[entity] = profile.to_dict()

            self._store.save(table)
        except (StorageError, OSError, TypeError, ValueError) as e:
            logger.warning(f"Trust update for {entity!r} failed: {e}")
            return TrustUpdateResult(updated=False, error=str(e))

        logger.debug(
            f"Trust updated for {entity!r}: success={success}, "
            f"interactions={profile.interactions}"
        )
        return TrustUpdateResult(updated=True, profile=profile)
