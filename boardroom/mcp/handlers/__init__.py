"""Handler registry for MCP tools.

Merges HANDLERS and VALIDATORS from all sub-modules into unified dicts.
"""

from typing import Callable, Dict

from boardroom.mcp.handlers.governance import HANDLERS as _GOVERNANCE_H
from boardroom.mcp.handlers.governance import VALIDATORS as _GOVERNANCE_V
from boardroom.mcp.handlers.intelligence import HANDLERS as _INTELLIGENCE_H
from boardroom.mcp.handlers.intelligence import VALIDATORS as _INTELLIGENCE_V
from boardroom.mcp.handlers.trust import HANDLERS as _TRUST_H
from boardroom.mcp.handlers.trust import VALIDATORS as _TRUST_V

HANDLERS: Dict[str, Callable] = {
    **_GOVERNANCE_H,
    **_INTELLIGENCE_H,
    **_TRUST_H,
}

VALIDATORS: Dict[str, Callable] = {
    **_GOVERNANCE_V,
    **_INTELLIGENCE_V,
    **_TRUST_V,
}
