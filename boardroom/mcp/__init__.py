"""MCP server exposing the Boardroom tools."""
