"""Tests for the FastMCP surface built from the registry."""

import asyncio
import json

import pytest
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from conftest import PAGE_ID, FakeGraphClient
from core.graph_client import GraphApiError
from core.manager import FacebookManager
from tools.mcp_server import RegistryTool, build_server
from tools.registry import ToolRegistry


def run(coro):
    return asyncio.run(coro)


def make_tool(registry: ToolRegistry, name: str) -> RegistryTool:
    definition = next(d for d in registry.definitions if d.name == name)
    return RegistryTool.from_definition(definition, registry.get_handler(name))


@pytest.fixture
def registry(manager):
    return ToolRegistry(manager)


def test_build_server(registry):
    assert isinstance(build_server(registry), FastMCP)


def test_tool_publishes_catalog_schema(registry):
    tool = make_tool(registry, "fb_get_posts")

    assert tool.name == "fb_get_posts"
    assert tool.parameters["properties"]["limit"]["maximum"] == 100


def test_run_returns_json_text(registry, fake_client):
    result = run(make_tool(registry, "fb_get_page_info").run({}))

    assert json.loads(result.content[0].text) == {"id": "fake"}
    assert fake_client.last["endpoint"] == PAGE_ID


def test_validation_error_becomes_tool_error(registry, fake_client):
    with pytest.raises(ToolError) as exc_info:
        run(make_tool(registry, "fb_create_post").run({"link": "https://x"}))

    detail = json.loads(str(exc_info.value))
    assert detail["tool"] == "fb_create_post"
    assert detail["errors"][0]["path"] == "<root>"
    assert fake_client.calls == []


def test_graph_error_becomes_tool_error():
    error = GraphApiError("(#10) Permission denied", status_code=403, code=10)
    registry = ToolRegistry(FacebookManager(FakeGraphClient([error]), PAGE_ID))

    with pytest.raises(ToolError) as exc_info:
        run(make_tool(registry, "fb_delete_post").run({"post_id": "p1"}))

    detail = json.loads(str(exc_info.value))
    assert detail["graph_error"]["code"] == 10
    assert detail["graph_error"]["status_code"] == 403
