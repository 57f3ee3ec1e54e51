"""Utility modules for the Docker CLI MCP server."""
