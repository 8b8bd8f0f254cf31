"""Task classification and council routing.

Substring keyword matching against static rule tables. A trigger word
matches anywhere in the lowercased task, including inside a larger word
("ads" matches "spreads"). Category selection is score-based; severity
is first-match in priority order so a single critical word escalates.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from boardroom.types import (
    Classification,
    ClassificationRule,
    CouncilRoute,
    KeywordMatch,
    Severity,
)

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "general"

# Ordered by specificity (most niche first). Declaration order breaks ties.
CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ("singularity", ("omega", "singularity", "agi", "superintelligence", "consciousness")),
    (
        "technology",
        (
            "code",
            "debug",
            "algorithm",
            "deploy",
            "server",
            "api",
            "database",
            "mcp",
            "architecture",
            "refactor",
            "test",
            "ci",
        ),
    ),
    (
        "marketing",
        (
            "marketing",
            "seo",
            "content strategy",
            "social media",
            "brand",
            "audience",
            "ads",
            "growth",
            "campaign",
            "funnel",
        ),
    ),
    (
        "product",
        (
            "product",
            "feature",
            "ux",
            "design",
            "pricing",
            "tier",
            "launch",
            "onboarding",
            "user experience",
        ),
    ),
    ("crisis", ("crisis", "emergency", "breach", "outage", "critical", "urgent", "incident")),
    (
        "strategy",
        (
            "strategy",
            "revenue",
            "monetize",
            "compete",
            "pivot",
            "invest",
            "roadmap",
            "moat",
            "acquisition",
        ),
    ),
    ("operations", ("process", "workflow", "automate", "optimize", "pipeline", "cron", "devops")),
    ("ethics", ("ethics", "values", "moral", "trust", "privacy", "fairness")),
)

# Checked in priority order (critical first).
SEVERITY_RULES: Tuple[Tuple[Severity, Tuple[str, ...]], ...] = (
    (
        Severity.CRITICAL,
        ("irreversible", "delete", "payment", "security", "breach", "fire", "legal"),
    ),
    (Severity.STANDARD, ("strategy", "architecture", "roadmap", "partnership", "pricing")),
    (Severity.ROUTINE, ("bug", "style", "refactor", "docs", "config")),
)

DEFAULT_SEVERITY = Severity.ROUTINE

# Title-case council names and routing rationale for governance display.
COUNCIL_ROUTING: Mapping[str, CouncilRoute] = MappingProxyType(
    {
        "technology": CouncilRoute(("Technology",), "Technical decision"),
        "strategy": CouncilRoute(("Keystone", "Business"), "Strategic decision"),
        "marketing": CouncilRoute(("Marketing", "E-commerce"), "Marketing & growth"),
        "product": CouncilRoute(("Business", "E-commerce"), "Product decision"),
        "crisis": CouncilRoute(("Keystone", "Business", "Technology"), "Crisis response"),
        "ethics": CouncilRoute(("Keystone", "Singularity"), "Ethics & values"),
        "operations": CouncilRoute(("Business", "E-commerce"), "Operations & workflow"),
        "singularity": CouncilRoute(("Singularity", "Keystone"), "Singularity & consciousness"),
        "general": CouncilRoute(("Keystone", "Business"), "General decision"),
    }
)

# Lowercase council identifiers used to load advisor seats.
ROUTING_TABLE: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "strategy": ("keystone", "business"),
        "marketing": ("marketing", "ecommerce"),
        "product": ("business", "ecommerce"),
        "technology": ("technology",),
        "operations": ("business", "ecommerce"),
        "crisis": ("keystone", "business", "technology"),
        "singularity": ("singularity",),
        "ethics": ("keystone", "singularity"),
        "general": ("keystone", "business"),
    }
)


def match_keywords(text: str, rules: Sequence[ClassificationRule]) -> KeywordMatch:
    """Score lowercase text against ordered ``(label, triggers)`` rules.

    Scores accumulate per label across rules sharing that label. Labels
    with no matches are omitted. Matched triggers are collected in rule
    order, then trigger order, duplicates preserved.
    """
    scores: Dict[str, int] = {}
    matched: List[str] = []
    for label, triggers in rules:
        score = 0
        for trigger in triggers:
            if trigger in text:
                score += 1
                matched.append(trigger)
        if score > 0:
            scores[label] = scores.get(label, 0) + score
    return KeywordMatch(scores=scores, matched=matched)


def classify_task(
    task: str, rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES
) -> Classification:
    """Return the highest-scoring category for a task.

    Ties go to the label declared first in ``rules``. A task with no
    matches is classified as :data:`FALLBACK_CATEGORY`.
    """
    result = match_keywords(task.lower(), rules)
    if not result.scores:
        return Classification(category=FALLBACK_CATEGORY, keywords=result.matched)

    declared: Dict[str, int] = {}
    for index, (label, _) in enumerate(rules):
        declared.setdefault(label, index)

    category = min(result.scores, key=lambda label: (-result.scores[label], declared[label]))
    return Classification(category=category, keywords=result.matched)


def classify_severity(task: str) -> Severity:
    """Return the first severity tier with any matching keyword."""
    lower = task.lower()
    for severity, keywords in SEVERITY_RULES:
        if any(k in lower for k in keywords):
            return severity
    return DEFAULT_SEVERITY


def route_for(category: str) -> CouncilRoute:
    """Display route for a category, falling back to the general route."""
    route = COUNCIL_ROUTING.get(category)
    if route is None:
        logger.warning(f"No council route for category {category!r}, using general")
        return COUNCIL_ROUTING[FALLBACK_CATEGORY]
    return route


def councils_for(category: str) -> List[str]:
    """Council identifiers whose seats should be loaded for a category."""
    return list(ROUTING_TABLE.get(category, ROUTING_TABLE[FALLBACK_CATEGORY]))
