"""Handlers for trust and outcome tools: trust_lookup, report_outcome."""

from typing import Any, Dict, List

from boardroom.core import Boardroom
from boardroom.mcp.sanitize import optional_string, sanitize_string, validate_boolean
from boardroom.trust import DEFAULT_TRUST, RECOMMENDATION_TEXT, TRUST_WEIGHTS, recommend

DIMENSION_LABELS = {
    "reliability": "Reliability",
    "honesty": "Honesty",
    "follow_through": "Follow-Through",
    "outcome_quality": "Outcome Quality",
    "stability": "Stability",
    "risk_profile": "Risk Profile",
}

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_trust_lookup(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["entity"] = sanitize_string(arguments.get("entity"), "entity")
    sanitized["context"] = optional_string(arguments.get("context"), "context")
    return sanitized


def validate_report_outcome(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["task"] = sanitize_string(arguments.get("task"), "task")
    sanitized["outcome"] = sanitize_string(arguments.get("outcome"), "outcome")
    sanitized["followedRecommendation"] = validate_boolean(
        arguments.get("followedRecommendation"), "followedRecommendation", True
    )
    sanitized["entity"] = optional_string(arguments.get("entity"), "entity")
    return sanitized


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def handle_trust_lookup(args: Dict[str, Any], b: Boardroom) -> str:
    entity = args["entity"]
    lookup = b.trust_lookup(entity, args.get("context"))

    lines = [f"# Trust Lookup: {entity}", ""]
    if lookup.context:
        lines.extend([f"**Context:** {lookup.context}", ""])

    if lookup.profile is None:
        lines.extend(
            [
                "**Status:** ❓ Unknown Entity",
                "",
                f'No trust profile found for "{entity}".',
                "",
            ]
        )
        if lookup.error:
            lines.extend([f"⚠️ The trust table could not be read ({lookup.error}).", ""])
        lines.extend(
            [
                "This entity has not yet been evaluated.",
                "Use `report_outcome()` after interactions to build its trust profile.",
                "",
                f"**Default Recommendation:** {RECOMMENDATION_TEXT[recommend(DEFAULT_TRUST)]}",
            ]
        )
        return "\n".join(lines)

    profile = lookup.profile
    lines.extend(
        [
            "## 6-Dimension Trust Vector",
            "| Dimension | Score | Weight |",
            "|-----------|-------|--------|",
        ]
    )
    for dim, weight in TRUST_WEIGHTS.items():
        score = getattr(profile, dim)
        lines.append(f"| {DIMENSION_LABELS[dim]} | {score * 100:.0f}% | {weight * 100:.0f}% |")

    lines.extend(
        [
            "",
            f"**Composite Score:** {lookup.composite * 100:.1f}%",
            f"**Interactions:** {profile.interactions}",
            f"**Last Updated:** {profile.last_updated or 'never'}",
            "",
            f"**Recommendation:** {RECOMMENDATION_TEXT[lookup.recommendation]}",
        ]
    )
    return "\n".join(lines)


def handle_report_outcome(args: Dict[str, Any], b: Boardroom) -> str:
    followed = args.get("followedRecommendation", True)
    report = b.report_outcome(
        task=args["task"],
        outcome=args["outcome"],
        followed_recommendation=followed,
        entity=args.get("entity"),
    )
    emoji = "✅" if followed else "⚠️"
    timestamp = report.timestamp.isoformat()

    lines: List[str] = ["# Outcome Recorded", ""]
    if report.persisted:
        lines.append(f"{emoji} Decision outcome has been logged to the Knowledge Flywheel.")
    else:
        lines.append(
            f"⚠️ Decision outcome was captured but **could not be written to disk** "
            f"({report.write_error}). The LEDGER at `{b.ledger.location}` may not exist "
            f"or is not writable. The outcome is shown below but will not persist across sessions."
        )

    lines.extend(
        [
            "",
            f"**Task:** {report.task}",
            f"**Outcome:** {report.outcome}",
            f"**Followed Recommendation:** {'Yes' if followed else 'No'}",
            f"**Logged At:** {timestamp}",
            f"**Persisted:** {'Yes ✅' if report.persisted else 'No ⚠️'}",
        ]
    )

    if report.entity:
        update = report.trust_update
        lines.extend(["", "## Trust Update"])
        if update is not None and update.updated:
            direction = "positive" if report.outcome_positive else "negative"
            lines.append(
                f"✅ Trust profile for **{report.entity}** has been updated ({direction} outcome). "
                f'Use `trust_lookup("{report.entity}")` to see the current profile.'
            )
        else:
            error = f" ({update.error})" if update is not None and update.error else ""
            lines.append(f"⚠️ Trust profile for **{report.entity}** could not be updated{error}.")

    lines.append("")
    if report.persisted:
        lines.append("This outcome will be used to improve future Boardroom recommendations.")
    else:
        lines.append("To enable persistence, make sure the LEDGER location is writable.")
        lines.append("")
        lines.append("```")
        lines.append(report.entry.strip())
        lines.append("```")
    lines.append("Use `query_intelligence()` to search past outcomes as precedents.")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Registry dicts
# ---------------------------------------------------------------------------

HANDLERS = {
    "trust_lookup": handle_trust_lookup,
    "report_outcome": handle_report_outcome,
}

VALIDATORS = {
    "trust_lookup": validate_trust_lookup,
    "report_outcome": validate_report_outcome,
}
