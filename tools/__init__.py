# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP layer for the Facebook Page manager.
#
#   schemas.py     Tool catalog: names, input models, descriptions
#   registry.py    Definitions + handlers, one dispatch branch per tool
#   mcp_server.py  FastMCP server publishing the registry over stdio
#
# Tools never hold Graph API logic: every handler validates its input and
# calls exactly one core.manager.FacebookManager method.
# =============================================================================
