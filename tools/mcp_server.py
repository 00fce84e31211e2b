# =============================================================================
# tools/mcp_server.py  -  FastMCP server for the Facebook Page tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes every ToolRegistry definition as an MCP tool.  The input
#   schema an agent sees is the JSON Schema generated from the catalog model
#   (tools/schemas.py); a call runs the registry handler, which validates
#   and then calls exactly one FacebookManager method.
#
# HOW A CALL FLOWS:
#   1. The agent lists tools (tools/list) and picks one
#   2. FastMCP routes tools/call to RegistryTool.run()
#   3. The registry validates the raw arguments against the tool schema
#   4. The manager shapes one Graph API request and awaits the reply
#   5. The decoded JSON goes back to the agent as text content
#
# ERRORS:
#   Validation, unknown-tool and Graph API failures are re-raised as
#   FastMCP ToolError so the agent receives an isError result with the
#   structured detail instead of a crashed server.
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server        (stdio, the default)
#   MCP_TRANSPORT=http python -m tools.mcp_server
# =============================================================================

import json
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import TextContent
from pydantic import Field

from core.config import load_config
from core.graph_client import GraphApiError
from core.manager import FacebookManager
from tools.registry import ToolDefinition, ToolHandler, ToolRegistry, UnknownToolError
from tools.schemas import ToolValidationError

SERVER_NAME = "facebook-page-manager"

# =============================================================================
# Logging
# =============================================================================
# Logs go to STDERR: on the stdio transport, STDOUT carries the MCP JSON
# stream and any stray line there corrupts it.
#
# Colors: CYAN for incoming calls, YELLOW for progress, GREEN for results,
# RED for failures.
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logger = logging.getLogger("mcp")


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: Any) -> str:
    """Log the result as compact JSON and return that JSON."""
    text = json.dumps(result, separators=(",", ":"), default=str)
    logger.info(f"{_GREEN}  ← {tool_name} response: {text}{_RESET}")
    return text


def _log_failure(tool_name: str, exc: Exception) -> None:
    logger.warning(f"{_RED}  ✗ {tool_name} failed: {exc}{_RESET}")


# =============================================================================
# RegistryTool  -  one MCP tool backed by a registry handler
# =============================================================================

class RegistryTool(Tool):
    """FastMCP tool whose schema and behavior both come from the registry."""

    handler: ToolHandler = Field(exclude=True)

    @classmethod
    def from_definition(cls, definition: ToolDefinition, handler: ToolHandler) -> "RegistryTool":
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema,
            handler=handler,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, arguments)
        try:
            result = await self.handler(arguments)
        except ToolValidationError as exc:
            _log_failure(self.name, exc)
            raise ToolError(json.dumps(exc.to_dict())) from exc
        except GraphApiError as exc:
            _log_failure(self.name, exc)
            raise ToolError(json.dumps({"tool": self.name, "graph_error": exc.to_dict()})) from exc
        except UnknownToolError as exc:
            _log_failure(self.name, exc)
            raise ToolError(str(exc)) from exc

        if isinstance(result, list):
            _log_status(f"{len(result)} item(s)")
        text = _log_response(self.name, result)
        return ToolResult(content=[TextContent(type="text", text=text)])


def build_server(registry: ToolRegistry, name: str = SERVER_NAME) -> FastMCP:
    """Create a FastMCP server exposing every registry definition, in order."""
    mcp = FastMCP(name)
    for definition in registry.definitions:
        mcp.add_tool(RegistryTool.from_definition(definition, registry.get_handler(definition.name)))
    return mcp


# =============================================================================
# Server entry point
# =============================================================================

def main() -> None:
    load_dotenv()
    configure_logging()

    config = load_config()
    registry = ToolRegistry(FacebookManager.from_config(config))
    _log_status(f"Serving {len(registry.definitions)} tools for page {config.page_id}")

    mcp = build_server(registry)
    mcp.run(transport=os.getenv("MCP_TRANSPORT", "stdio"))


if __name__ == "__main__":
    main()
