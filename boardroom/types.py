"""Shared types for Boardroom.

Dataclasses that flow between the classifier, memory search, trust
ledger and the tool layer. Static rule tables live in
:mod:`boardroom.classification`.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# (category label, trigger words)
ClassificationRule = Tuple[str, Tuple[str, ...]]


class Severity(Enum):
    """Escalation tier, most severe first."""

    CRITICAL = "critical"
    STANDARD = "standard"
    ROUTINE = "routine"


class TrustRecommendation(Enum):
    """Four-tier recommendation derived from a composite trust score."""

    TRUST = "trust"
    VERIFY = "verify"
    CAUTION = "caution"
    AVOID = "avoid"


@dataclass
class KeywordMatch:
    """Result of running the keyword matcher over a rule set."""

    scores: Dict[str, int] = field(default_factory=dict)
    matched: List[str] = field(default_factory=list)


@dataclass
class Classification:
    """Result of score-based task classification."""

    category: str
    keywords: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CouncilRoute:
    """Routing entry for governance display."""

    councils: Tuple[str, ...]
    reason: str


@dataclass
class KeywordResult:
    """Keyword extraction result with quality signal."""

    keywords: List[str]
    all_filtered: bool = False


@dataclass
class SessionMatch:
    """A LEDGER session that matched a query."""

    title: str
    score: int
    excerpt: str
    position: int = 0


@dataclass
class Advisor:
    """An advisor seat loaded from a council document."""

    name: str
    council: str
    details: Dict[str, str] = field(default_factory=dict)


@dataclass
class TrustProfile:
    """A 6-dimension trust vector for an entity.

    All dimension scores are normalized to [0, 1].
    """

    reliability: float = 0.5
    honesty: float = 0.5
    follow_through: float = 0.5
    outcome_quality: float = 0.5
    stability: float = 0.5
    risk_profile: float = 0.5
    interactions: int = 0
    last_updated: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reliability": self.reliability,
            "honesty": self.honesty,
            "followThrough": self.follow_through,
            "outcomeQuality": self.outcome_quality,
            "stability": self.stability,
            "riskProfile": self.risk_profile,
            "interactions": self.interactions,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrustProfile":
        return cls(
            reliability=float(data.get("reliability", 0.5)),
            honesty=float(data.get("honesty", 0.5)),
            follow_through=float(data.get("followThrough", 0.5)),
            outcome_quality=float(data.get("outcomeQuality", 0.5)),
            stability=float(data.get("stability", 0.5)),
            risk_profile=float(data.get("riskProfile", 0.5)),
            interactions=int(data.get("interactions", 0)),
            last_updated=data.get("lastUpdated"),
        )


@dataclass
class TrustUpdateResult:
    """Result of a trust ledger update."""

    updated: bool
    error: Optional[str] = None
    profile: Optional[TrustProfile] = None


@dataclass
class TrustLookup:
    """Trust profile lookup for one entity."""

    entity: str
    profile: Optional[TrustProfile]
    composite: float
    recommendation: TrustRecommendation
    context: Optional[str] = None
    error: Optional[str] = None

    @property
    def known(self) -> bool:
        return self.profile is not None


@dataclass
class GovernanceCheck:
    """Quick classification + routing result."""

    task: str
    classification: Classification
    severity: Severity
    route: CouncilRoute


@dataclass
class IntelligenceResult:
    """Matches from the LEDGER and the Wisdom Codex for one query."""

    query: str
    keywords: List[str]
    all_filtered: bool = False
    sessions: List[SessionMatch] = field(default_factory=list)
    wisdom: List[str] = field(default_factory=list)
    ledger_available: bool = True
    wisdom_available: bool = True


@dataclass
class AnalysisResult:
    """Full boardroom consultation result."""

    task: str
    classification: Classification
    councils: List[str]
    advisors: List[Advisor]
    precedents: List[SessionMatch]
    wisdom: List[str]
    full_protocol: bool
    system_excerpt: str = ""
    ledger_available: bool = True
    wisdom_available: bool = True


@dataclass
class OutcomeReport:
    """A recorded decision outcome."""

    task: str
    outcome: str
    followed_recommendation: bool
    timestamp: datetime
    entry: str
    entity: Optional[str] = None
    persisted: bool = False
    write_error: Optional[str] = None
    outcome_positive: Optional[bool] = None
    trust_update: Optional[TrustUpdateResult] = None


@dataclass
class ToolResponse:
    """Text payload returned by every tool, plus an error flag."""

    text: str
    is_error: bool = False
