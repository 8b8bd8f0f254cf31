"""
Boardroom MCP Server - decision governance for MCP clients.

Exposes the Boardroom engine as five MCP tools:
  1. analyze            — full consultation with advisors, precedents and wisdom
  2. check_governance   — classification, severity and council routing
  3. query_intelligence — search LEDGER precedents and the Wisdom Codex
  4. trust_lookup       — 6-dimension trust vector for an entity
  5. report_outcome     — log a decision outcome and update trust

Every tool call goes through dispatch_tool(), which never raises: invalid
input and unexpected failures both come back as an error ToolResponse.
call_tool() raises ToolExecutionError for those so the MCP runtime marks
the result with ``isError``.

Usage:
    boardroom mcp  # Start MCP server (stdio transport)
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from boardroom.config import load_config
from boardroom.core import Boardroom
from boardroom.mcp.handlers import HANDLERS, VALIDATORS
from boardroom.mcp.tool_definitions import TOOLS, TOOLS_BY_NAME
from boardroom.protocols import ToolExecutionError
from boardroom.types import ToolResponse

logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = Server("boardroom")

_SCHEMA_VALIDATORS: Dict[str, Draft7Validator] = {
    tool.name: Draft7Validator(tool.inputSchema) for tool in TOOLS
}

ERROR_PREFIXES = {
    "analyze": "Analysis failed",
    "check_governance": "Governance check failed",
    "query_intelligence": "Intelligence query failed",
    "trust_lookup": "Trust lookup failed",
    "report_outcome": "Outcome report failed",
}

_boardroom: Optional[Boardroom] = None


def set_boardroom(boardroom: Optional[Boardroom]) -> None:
    """Use a specific engine for this session (None resets to config)."""
    global _boardroom
    _boardroom = boardroom


def get_boardroom() -> Boardroom:
    """Get or create the Boardroom instance from environment configuration."""
    global _boardroom
    if _boardroom is None:
        _boardroom = Boardroom.from_config(load_config())
    return _boardroom


def mcp_success(text: str) -> ToolResponse:
    return ToolResponse(text=text)


def mcp_error(text: str) -> ToolResponse:
    return ToolResponse(text=f"❌ {text}", is_error=True)


# =============================================================================
# INPUT VALIDATION & SANITIZATION
# =============================================================================


def validate_tool_input(name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Validate tool inputs against the tool schema, then sanitize them."""
    try:
        if not isinstance(name, str) or not name:
            raise ValueError("tool name must be a non-empty string")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ValueError(f"arguments must be an object, got {type(arguments).__name__}")

        validator = VALIDATORS.get(name)
        if validator is None or name not in TOOLS_BY_NAME:
            raise ValueError(f"Unknown tool: {name}")

        errors = sorted(
            _SCHEMA_VALIDATORS[name].iter_errors(arguments), key=lambda err: list(err.path)
        )
        if errors:
            first = errors[0]
            path = ".".join(str(part) for part in first.path) or "(root)"
            raise ValueError(f"Schema validation failed at {path}: {first.message}")

        return validator(arguments)

    except (ValueError, TypeError) as e:
        logger.warning(f"Input validation failed for tool {name}: {e}")
        raise ValueError(str(e)) from e


def handle_tool_error(e: Exception, tool_name: str, arguments: Dict[str, Any]) -> ToolResponse:
    """Convert an exception into an error response."""
    if isinstance(e, ValueError):
        return mcp_error(f"Invalid input: {e}")

    argument_keys = list(arguments.keys()) if isinstance(arguments, dict) else []
    logger.error(
        f"Internal error in tool {tool_name}",
        extra={
            "tool_name": tool_name,
            "arguments_keys": argument_keys,
            "error_type": type(e).__name__,
            "error_message": str(e),
        },
        exc_info=True,
    )
    prefix = ERROR_PREFIXES.get(tool_name, f"Tool {tool_name} failed")
    return mcp_error(f"{prefix}: {e}")


def dispatch_tool(
    name: str, arguments: Optional[Dict[str, Any]], boardroom: Optional[Boardroom] = None
) -> ToolResponse:
    """Validate arguments and run a tool. Never raises."""
    arguments = arguments if arguments is not None else {}
    try:
        sanitized_args = validate_tool_input(name, arguments)
        b = boardroom or get_boardroom()
        return mcp_success(HANDLERS[name](sanitized_args, b))
    except Exception as e:
        return handle_tool_error(e, name, arguments)


# =============================================================================
# MCP PROTOCOL HANDLERS
# =============================================================================


@mcp.list_tools()
async def list_tools() -> list[Tool]:
    """List available Boardroom tools."""
    return list(TOOLS)


@mcp.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> List[TextContent]:
    """Run a tool off the event loop; error responses become MCP errors."""
    response = await asyncio.to_thread(dispatch_tool, name, arguments)
    if response.is_error:
        raise ToolExecutionError(response.text)
    return [TextContent(type="text", text=response.text)]


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await mcp.run(
            read_stream,
            write_stream,
            mcp.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server. Logs go to stderr; stdout carries the protocol."""
    config = load_config()
    logging.basicConfig(level=config.log_level, stream=sys.stderr)
    set_boardroom(Boardroom.from_config(config))
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
