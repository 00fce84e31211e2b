"""Tests for GraphApiClient using httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from core.config import GraphConfig
from core.graph_client import GraphApiClient, GraphApiError

CONFIG = GraphConfig(access_token="TOKEN", page_id="123", api_version="v24.0")


def make_client(handler):
    return GraphApiClient(CONFIG, transport=httpx.MockTransport(handler))


def run(coro):
    return asyncio.run(coro)


def test_get_builds_versioned_url_and_adds_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"id": "123", "name": "Page"})

    result = run(make_client(handler).request("GET", "123", params={"fields": "id,name", "after": None}))

    request = seen["request"]
    assert result == {"id": "123", "name": "Page"}
    assert request.method == "GET"
    assert request.url.path == "/v24.0/123"
    assert request.url.params["access_token"] == "TOKEN"
    assert request.url.params["fields"] == "id,name"
    assert "after" not in request.url.params


def test_booleans_are_sent_as_lowercase_strings():
    seen = {}

    def handler(request):
        seen["params"] = request.url.params
        return httpx.Response(200, json={"id": "1"})

    run(make_client(handler).request("POST", "123/feed", params={"message": "m", "published": False}))

    assert seen["params"]["published"] == "false"


def test_json_body_for_messages():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message_id": "m1"})

    body = {"recipient": {"id": "u1"}, "message": {"text": "hi"}, "messaging_type": "RESPONSE"}
    run(make_client(handler).request("POST", "me/messages", body=body))

    assert seen["body"] == body


def test_empty_endpoint_targets_root():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        return httpx.Response(200, json=[{"code": 200, "body": "{}"}])

    result = run(make_client(handler).request("POST", "", params={"batch": "[]"}))

    assert seen["path"] == "/v24.0/"
    assert result == [{"code": 200, "body": "{}"}]


def test_graph_error_payload_is_raised():
    def handler(request):
        return httpx.Response(400, json={
            "error": {
                "message": "Invalid OAuth access token.",
                "type": "OAuthException",
                "code": 190,
                "error_subcode": 463,
                "fbtrace_id": "TRACE",
            }
        })

    with pytest.raises(GraphApiError) as exc_info:
        run(make_client(handler).request("GET", "123"))

    error = exc_info.value
    assert error.status_code == 400
    assert error.code == 190
    assert error.subcode == 463
    assert error.error_type == "OAuthException"
    assert error.fbtrace_id == "TRACE"
    assert "Invalid OAuth access token." in str(error)


def test_non_json_error_body():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(GraphApiError) as exc_info:
        run(make_client(handler).request("GET", "123"))

    assert exc_info.value.status_code == 502
    assert exc_info.value.payload == {"raw": "Bad Gateway"}


def test_transport_failure_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(GraphApiError) as exc_info:
        run(make_client(handler).request("GET", "123"))

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_unsupported_method():
    with pytest.raises(ValueError):
        run(make_client(lambda r: httpx.Response(200)).request("PUT", "123"))


def test_empty_success_body_decodes_to_dict():
    result = run(make_client(lambda r: httpx.Response(200)).request("DELETE", "p1"))

    assert result == {}
