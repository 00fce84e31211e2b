# =============================================================================
# agent/tool_events.py  -  Read tool outcomes out of ADK event parts
# =============================================================================
#
# WHAT THIS FILE DOES:
#   When a page tool fails, tools/mcp_server.py returns an MCP error result
#   whose text is JSON:
#
#     {"tool": "...", "errors": [{"path": ..., "message": ...}]}   bad args
#     {"tool": "...", "graph_error": {"message": ..., "code": ...}} Graph API
#
#   ADK hands that back as a function_response part.  These helpers turn it
#   into one line the page admin can act on, so a failed call is not hidden
#   behind an empty model reply.
# =============================================================================

import json
from typing import Any, Optional


def _result_payload(response: Any) -> Optional[dict[str, Any]]:
    """Unwrap the CallToolResult dict (ADK may nest it under "result")."""
    if not isinstance(response, dict):
        return None
    if "content" not in response and isinstance(response.get("result"), dict):
        response = response["result"]
    return response


def _error_text(payload: dict[str, Any]) -> str:
    texts = [
        item.get("text", "")
        for item in payload.get("content") or []
        if isinstance(item, dict) and item.get("type") == "text"
    ]
    return "\n".join(text for text in texts if text)


def format_tool_error(text: str) -> str:
    """Render the server's error text; plain text passes through."""
    try:
        detail = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return text
    if not isinstance(detail, dict):
        return text

    if isinstance(detail.get("graph_error"), dict):
        graph = detail["graph_error"]
        codes = ", ".join(
            f"{key}={graph[key]}" for key in ("status_code", "code", "subcode") if graph.get(key) is not None
        )
        line = f"Graph API rejected the call: {graph.get('message') or 'unknown error'}"
        return f"{line} ({codes})" if codes else line

    if isinstance(detail.get("errors"), list):
        issues = "; ".join(
            f"{issue.get('path')}: {issue.get('message')}" for issue in detail["errors"] if isinstance(issue, dict)
        )
        return f"Invalid arguments: {issues}"

    return text


def tool_error_from_response(response: Any) -> Optional[str]:
    """Return a readable error for a failed tool response, None on success."""
    payload = _result_payload(response)
    if payload is None or not payload.get("isError"):
        return None
    return format_tool_error(_error_text(payload)) or "Tool call failed without detail"
