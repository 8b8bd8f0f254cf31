"""
Boardroom CLI - command-line interface for decision governance.

Usage:
    boardroom analyze TASK
    boardroom governance TASK
    boardroom query QUERY [--limit N]
    boardroom trust show ENTITY [--context CTX]
    boardroom trust list
    boardroom report TASK OUTCOME [--not-followed] [--entity E]
    boardroom mcp
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from boardroom import Boardroom
from boardroom.cli.commands.trust import cmd_trust_list
from boardroom.config import load_config
from boardroom.mcp.server import dispatch_tool

logger = logging.getLogger(__name__)


def _run_tool(name: str, arguments: Dict[str, Any], b: Boardroom) -> int:
    response = dispatch_tool(name, arguments, b)
    if response.is_error:
        print(response.text, file=sys.stderr)
        return 1
    print(response.text)
    return 0


def cmd_analyze(args, b: Boardroom) -> int:
    """Run a full boardroom consultation."""
    return _run_tool("analyze", {"task": args.task}, b)


def cmd_governance(args, b: Boardroom) -> int:
    """Classify a task and show its councils."""
    return _run_tool("check_governance", {"task": args.task}, b)


def cmd_query(args, b: Boardroom) -> int:
    """Search the LEDGER and the Wisdom Codex."""
    return _run_tool("query_intelligence", {"query": args.query, "limit": args.limit}, b)


def cmd_trust(args, b: Boardroom) -> int:
    """Show or list trust profiles."""
    if args.trust_action == "list":
        return cmd_trust_list(args, b)
    arguments: Dict[str, Any] = {"entity": args.entity}
    if args.context:
        arguments["context"] = args.context
    return _run_tool("trust_lookup", arguments, b)


def cmd_report(args, b: Boardroom) -> int:
    """Record a decision outcome."""
    arguments: Dict[str, Any] = {
        "task": args.task,
        "outcome": args.outcome,
        "followedRecommendation": not args.not_followed,
    }
    if args.entity:
        arguments["entity"] = args.entity
    return _run_tool("report_outcome", arguments, b)


def cmd_mcp(args) -> int:
    """Start the MCP server on stdio."""
    from boardroom.mcp.server import main as mcp_main

    mcp_main()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boardroom",
        description="Decision governance: classification, precedents, and trust",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # analyze
    p_analyze = subparsers.add_parser("analyze", help="Full boardroom consultation")
    p_analyze.add_argument("task", help="The decision, question, or task to analyze")

    # governance
    p_governance = subparsers.add_parser("governance", help="Classify and route a task")
    p_governance.add_argument("task", help="The task or decision to classify")

    # query
    p_query = subparsers.add_parser("query", help="Search precedents and wisdom")
    p_query.add_argument("query", help="Topic, keyword, or question")
    p_query.add_argument("--limit", "-l", type=int, default=10, help="Max results per source")

    # trust
    p_trust = subparsers.add_parser("trust", help="Trust profiles")
    trust_sub = p_trust.add_subparsers(dest="trust_action", required=True)
    trust_show = trust_sub.add_parser("show", help="Show the trust profile for an entity")
    trust_show.add_argument("entity", help="Agent, tool, vendor, or platform")
    trust_show.add_argument("--context", "-c", help="How you are using this entity")
    trust_sub.add_parser("list", help="List all trust profiles")

    # report
    p_report = subparsers.add_parser("report", help="Record a decision outcome")
    p_report.add_argument("task", help="The original task or decision")
    p_report.add_argument("outcome", help="What actually happened")
    p_report.add_argument(
        "--not-followed",
        dest="not_followed",
        action="store_true",
        help="The recommendation was not followed",
    )
    p_report.add_argument("--entity", "-e", help="Entity whose trust should be updated")

    # mcp
    subparsers.add_parser("mcp", help="Start MCP server (stdio transport)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    logging.basicConfig(level=logging.DEBUG if args.verbose else config.log_level)

    if args.command == "mcp":
        return cmd_mcp(args)

    try:
        b = Boardroom.from_config(config)
    except (ValueError, TypeError, OSError) as e:
        logger.error(f"Failed to initialize Boardroom: {e}")
        return 1

    # Dispatch with error handling
    try:
        if args.command == "analyze":
            return cmd_analyze(args, b)
        elif args.command == "governance":
            return cmd_governance(args, b)
        elif args.command == "query":
            return cmd_query(args, b)
        elif args.command == "trust":
            return cmd_trust(args, b)
        elif args.command == "report":
            return cmd_report(args, b)
    except Exception as e:
        logger.error(f"Command failed: {e}")
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
