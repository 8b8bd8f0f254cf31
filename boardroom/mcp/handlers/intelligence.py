"""Handlers for institutional memory tools: query_intelligence."""

from typing import Any, Dict

from boardroom.core import Boardroom
from boardroom.mcp.sanitize import sanitize_string, validate_number
from boardroom.search import DEFAULT_SEARCH_LIMIT, MIN_KEYWORD_LENGTH

MAX_QUERY_LIMIT = 100

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_query_intelligence(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["query"] = sanitize_string(arguments.get("query"), "query")
    sanitized["limit"] = int(
        validate_number(
            arguments.get("limit"), "limit", 1, MAX_QUERY_LIMIT, DEFAULT_SEARCH_LIMIT
        )
    )
    return sanitized


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def handle_query_intelligence(args: Dict[str, Any], b: Boardroom) -> str:
    query = args["query"]
    result = b.query_intelligence(query, args.get("limit", DEFAULT_SEARCH_LIMIT))

    if result.all_filtered:
        return "\n".join(
            [
                "# Intelligence Query Results",
                "",
                f'**Query:** "{query}"',
                "",
                f"⚠️ **All query words were too short to search** (< {MIN_KEYWORD_LENGTH} characters).",
                "Try a more specific query with longer terms for better results.",
            ]
        )

    lines = [
        "# Intelligence Query Results",
        "",
        f'**Query:** "{query}"',
        f"**Keywords:** {', '.join(result.keywords)}",
        "",
        f"## LEDGER Matches ({len(result.sessions)})",
    ]
    if result.sessions:
        lines.append(
            "\n\n".join(f"### {s.title} (score {s.score})\n{s.excerpt}..." for s in result.sessions)
        )
    elif not result.ledger_available:
        lines.append(
            "_The LEDGER does not exist yet or could not be read. "
            "It is created by the first `report_outcome()` call._"
        )
    else:
        lines.append(
            "_No matching LEDGER entries. The LEDGER grows with every `report_outcome()` call._"
        )

    lines.extend(["", f"## Wisdom Codex Matches ({len(result.wisdom)})"])
    if result.wisdom:
        lines.append("\n".join(result.wisdom))
    elif not result.wisdom_available:
        lines.append("_The Wisdom Codex is not installed or could not be read._")
    else:
        lines.append("_No matching wisdom entries._")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Registry dicts
# ---------------------------------------------------------------------------

HANDLERS = {
    "query_intelligence": handle_query_intelligence,
}

VALIDATORS = {
    "query_intelligence": validate_query_intelligence,
}
