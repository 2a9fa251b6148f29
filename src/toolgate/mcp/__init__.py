"""MCP surface: response rendering and the stdio server."""
