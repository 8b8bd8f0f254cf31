"""MCP tool schema definitions for Boardroom.

Each Tool() defines the name, description, and JSON Schema for one MCP tool.
Validators and handlers live in boardroom.mcp.handlers.
"""

from mcp.types import Tool

from boardroom.validation import MAX_INPUT_LENGTH

TOOLS = [
    Tool(
        name="analyze",
        description="Run a Boardroom consultation. Routes your question to relevant advisors, loads their philosophies and decision criteria, searches institutional memory for precedents, and provides a structured analysis with mandatory tension between opposing viewpoints. Demo mode includes 3 named advisors; full protocol files unlock the complete councils.",
        inputSchema={
            "type": "object",
            "properties": {
                "task": {
                    "type": "string",
                    "description": "The decision, question, or task to analyze",
                    "maxLength": MAX_INPUT_LENGTH,
                },
            },
            "required": ["task"],
        },
    ),
    Tool(
        name="check_governance",
        description="Classify a task and determine which governance advisors should review it. Returns the decision type, selected councils, severity, and a recommendation. Fast classification without running the full session.",
        inputSchema={
            "type": "object",
            "properties": {
                "task": {
                    "type": "string",
                    "description": "The task or decision to classify",
                    "maxLength": MAX_INPUT_LENGTH,
                },
            },
            "required": ["task"],
        },
    ),
    Tool(
        name="query_intelligence",
        description="Search the Boardroom LEDGER (persistent decision memory) and Wisdom Codex for relevant precedents, past decisions, and distilled insights. Returns keyword-matched results with excerpts. The LEDGER grows each time you use report_outcome.",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The search query — topic, keyword, or question",
                    "maxLength": MAX_INPUT_LENGTH,
                },
                "limit": {
                    "type": "integer",
                    "description": "Max results to return per source (default: 10, range: 1-100)",
                    "default": 10,
                    "minimum": 1,
                    "maximum": 100,
                },
            },
            "required": ["query"],
        },
    ),
    Tool(
        name="trust_lookup",
        description="Look up the trust profile for any entity (AI agent, tool, vendor, platform). Returns a 6-dimension trust vector (reliability, honesty, follow-through, outcome quality, stability, risk profile), composite score, and recommendation (trust/verify/caution/avoid). New entities return a default 'unknown' profile — use report_outcome to build trust data over time.",
        inputSchema={
            "type": "object",
            "properties": {
                "entity": {
                    "type": "string",
                    "description": "The entity to look up — an agent name, tool, vendor, or platform",
                    "maxLength": MAX_INPUT_LENGTH,
                },
                "context": {
                    "type": "string",
                    "description": "Optional context about how you are using this entity",
                    "maxLength": MAX_INPUT_LENGTH,
                },
            },
            "required": ["entity"],
        },
    ),
    Tool(
        name="report_outcome",
        description="Report the outcome of a decision for the Boardroom learning system. Records what happened and whether the original recommendation was followed, and updates the trust profile if an entity is specified. Returns a warning if the outcome could not be persisted to disk.",
        inputSchema={
            "type": "object",
            "properties": {
                "task": {
                    "type": "string",
                    "description": "The original task or decision",
                    "maxLength": MAX_INPUT_LENGTH,
                },
                "outcome": {
                    "type": "string",
                    "description": "What actually happened — result, success/failure, learnings",
                    "maxLength": MAX_INPUT_LENGTH,
                },
                "followedRecommendation": {
                    "type": "boolean",
                    "description": "Whether the Boardroom recommendation was followed (default: true)",
                    "default": True,
                },
                "entity": {
                    "type": "string",
                    "description": "Optional entity (agent, tool, vendor) whose trust profile should be updated based on this outcome",
                    "maxLength": MAX_INPUT_LENGTH,
                },
            },
            "required": ["task", "outcome"],
        },
    ),
]

TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}
