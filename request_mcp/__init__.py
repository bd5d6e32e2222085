"""
request-mcp - Generic HTTP request proxy exposed as MCP tools.

Callers register named API templates (url, method, default params) and then
invoke them by id with a JSON string of arguments.
"""

__version__ = "1.0.0"
