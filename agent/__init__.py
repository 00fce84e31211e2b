# =============================================================================
# agent/__init__.py
# =============================================================================
# Google ADK agent that drives the Facebook Page MCP tools.
#
#   agent/  → orchestration (prompt + model + MCP connection)
#   tools/  → MCP surface (schemas, registry, server)
#   core/   → Graph API request shaping and client-side reductions
#
# The agent talks to tools/ only through the MCP protocol; it never imports
# core/ directly.
# =============================================================================
