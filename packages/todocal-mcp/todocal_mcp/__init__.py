"""
Todocal MCP server package.
"""
