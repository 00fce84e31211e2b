# =============================================================================
# core/__init__.py
# =============================================================================
# Graph API access for one Facebook Page.
#
# Nothing in this package imports FastMCP or Google ADK.  The manager and the
# analysis helpers can be exercised with a fake client and plain dicts.
# =============================================================================
