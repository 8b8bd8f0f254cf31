"""Handlers for governance tools: analyze, check_governance."""

from typing import Any, Dict

from boardroom.core import Boardroom
from boardroom.mcp.sanitize import sanitize_string
from boardroom.types import Severity

SEVERITY_EMOJI = {
    Severity.CRITICAL: "🔴",
    Severity.STANDARD: "🟡",
    Severity.ROUTINE: "🟢",
}

SEVERITY_RECOMMENDATION = {
    Severity.CRITICAL: "⚠️ **Full boardroom session required.** Use `analyze()` for multi-advisor debate with mandatory tension. Critical decisions require the Debate Protocol and CEO Synthesis.",
    Severity.STANDARD: "📋 **Standard review recommended.** Use `analyze()` for structured advice. Check `query_intelligence()` for precedents.",
    Severity.ROUTINE: "✅ **Routine — proceed with confidence.** Quick check complete. Use `query_intelligence()` if you want precedent matches.",
}

TENSIONS = {
    "strategy": "- **Speed vs. Quality** — Ship fast to capture market vs. build properly to retain trust",
    "technology": "- **Simplicity vs. Capability** — Minimal viable vs. fully featured",
    "marketing": "- **Reach vs. Depth** — Broad audience vs. deep engagement",
}
DEFAULT_TENSION = "- **Risk vs. Reward** — Conservative execution vs. bold experimentation"

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_analyze(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {"task": sanitize_string(arguments.get("task"), "task")}


def validate_check_governance(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {"task": sanitize_string(arguments.get("task"), "task")}


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def handle_check_governance(args: Dict[str, Any], b: Boardroom) -> str:
    check = b.check_governance(args["task"])
    severity = check.severity
    lines = [
        "# Governance Check",
        "",
        f"**Task:** {check.task}",
        f"**Classification:** {check.classification.category.upper()}",
        f"**Matched Keywords:** {', '.join(check.classification.keywords) or 'none'}",
        f"**Severity:** {SEVERITY_EMOJI[severity]} {severity.value.upper()}",
        f"**Councils:** {', '.join(check.route.councils)}",
        f"**Routing Reason:** {check.route.reason}",
        "",
        "## Recommendation",
        SEVERITY_RECOMMENDATION[severity],
    ]
    return "\n".join(lines)


def handle_analyze(args: Dict[str, Any], b: Boardroom) -> str:
    result = b.analyze(args["task"])
    category = result.classification.category

    if result.advisors:
        advisors = ", ".join(a.name for a in result.advisors)
    else:
        advisors = "Demo Council (install full protocol files for the complete councils)"

    if result.full_protocol:
        protocol_status = "✅ Full protocol files"
    else:
        protocol_status = "⚠️ Demo mode — install the full protocol files for every council"

    lines = [
        "# Boardroom Analysis",
        "",
        f"**Task:** {result.task}",
        f"**Classification:** {category.upper()}",
        f"**Councils Invoked:** {', '.join(result.councils)}",
        f"**Advisors Available:** {advisors}",
        f"**Protocol Status:** {protocol_status}",
        "",
    ]

    if result.system_excerpt:
        lines.extend(["## Governance Framework", f"{result.system_excerpt}...", ""])

    if result.advisors:
        lines.append("## Advisor Perspectives")
        for advisor in result.advisors:
            lines.append(f"### {advisor.name}")
            for key, value in advisor.details.items():
                lines.append(f"- **{key.replace('_', ' ').title()}:** {value}")
        lines.append("")

    lines.append(f"## Relevant Precedents ({len(result.precedents)} found)")
    if result.precedents:
        lines.append("\n\n".join(f"### {p.title}\n{p.excerpt}..." for p in result.precedents))
    elif not result.ledger_available:
        lines.append("_LEDGER not found — no precedents to search yet._")
    else:
        lines.append("_No directly relevant precedents in the LEDGER._")
    lines.append("")

    lines.append(f"## Relevant Wisdom ({len(result.wisdom)} entries)")
    if result.wisdom:
        lines.append("\n".join(result.wisdom))
    elif not result.wisdom_available:
        lines.append("_Wisdom Codex not found — no principles to search._")
    else:
        lines.append("_No matching wisdom codex entries._")
    lines.append("")

    lines.extend(
        [
            "## Mandatory Tension Framework",
            "The Boardroom requires identifying at least TWO conflicting truths before synthesis.",
            f'Based on classification "{category}", consider tensions between:',
            TENSIONS.get(category, DEFAULT_TENSION),
            "",
            "## Next Steps",
            "1. Consider each advisor's domain expertise",
            "2. Apply the Mandatory Tension framework",
            "3. Synthesize into a verdict",
            "4. Report the outcome with `report_outcome` to feed the learning system",
        ]
    )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Registry dicts
# ---------------------------------------------------------------------------

HANDLERS = {
    "analyze": handle_analyze,
    "check_governance": handle_check_governance,
}

VALIDATORS = {
    "analyze": validate_analyze,
    "check_governance": validate_check_governance,
}
