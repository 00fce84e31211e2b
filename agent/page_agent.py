# =============================================================================
# agent/page_agent.py  -  Google ADK agent wired to the page tool server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the ADK agent that manages a Facebook Page through our MCP tools.
#
#   ┌────────────────────────┐   stdio (MCP)   ┌──────────────────────────┐
#   │  ADK Agent             │ ──────────────▶ │  tools/mcp_server.py     │
#   │  LiteLlm model         │                 │  ToolRegistry            │
#   │  PAGE_MANAGER_PROMPT   │ ◀────────────── │  FacebookManager → Graph │
#   └────────────────────────┘                 └──────────────────────────┘
#
#   The agent holds no Graph API logic.  Everything it can do is listed by
#   the server's tools/list, with schemas generated from tools/schemas.py.
#
# MCP CONNECTION:
#   ADK spawns `python -m tools.mcp_server` as a subprocess using the current
#   interpreter, so the server sees the same environment (.env included).
#
# MODEL:
#   AGENT_MODEL picks any LiteLlm model string; the default routes GPT-4o
#   through OpenRouter and reads OPENROUTER_API_KEY from the environment.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_page_manager_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"
AGENT_NAME = "facebook_page_manager"


def mcp_server_params() -> StdioServerParameters:
    """How ADK starts the tool server: module mode, run from the project root."""
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=project_root,
        env=dict(os.environ),
    )


def create_agent(model: str | None = None) -> Agent:
    """Create the page-manager agent.

    Args:
        model: LiteLlm model string.  Falls back to AGENT_MODEL, then
               DEFAULT_MODEL.

    Returns:
        A configured ADK Agent whose only tools are the MCP page tools.
    """
    mcp_tools = MCPToolset(connection_params=mcp_server_params())

    return Agent(
        name=AGENT_NAME,
        model=LiteLlm(model=model or os.getenv("AGENT_MODEL", DEFAULT_MODEL)),
        instruction=get_page_manager_prompt(),
        tools=[mcp_tools],
    )
