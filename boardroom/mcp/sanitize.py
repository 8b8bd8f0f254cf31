"""Shared sanitization utilities for the MCP layer.

These re-export the canonical validators so every tool handler applies
the same limits as the CLI.
"""

from typing import Any, Optional

from boardroom.validation import sanitize_bool as validate_boolean  # noqa: F401 re-exported
from boardroom.validation import sanitize_number as validate_number  # noqa: F401 re-exported
from boardroom.validation import sanitize_string


def optional_string(value: Any, field_name: str) -> Optional[str]:
    """Sanitize an optional string, mapping omitted or blank values to None."""
    sanitized = sanitize_string(value, field_name, required=False)
    return sanitized if sanitized.strip() else None
