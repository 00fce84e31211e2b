"""Shared fixtures: a recording stand-in for the Graph API client."""

from typing import Any, Optional

import pytest

from core.manager import FacebookManager

PAGE_ID = "1234567890"


class FakeGraphClient:
    """Records every request and answers from a queue (or a default)."""

    def __init__(self, responses: Optional[list[Any]] = None, default: Any = None):
        self.calls: list[dict[str, Any]] = []
        self._responses = list(responses or [])
        self._default = {"id": "fake"} if default is None else default

    async def request(self, method, endpoint, params=None, body=None):
        self.calls.append({"method": method, "endpoint": endpoint, "params": params, "body": body})
        if self._responses:
            response = self._responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return self._default

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def fake_client():
    return FakeGraphClient()


@pytest.fixture
def manager(fake_client):
    return FacebookManager(fake_client, PAGE_ID)


def comments(*items: dict[str, Any]) -> dict[str, Any]:
    """Wrap comment dicts in a Graph collection payload."""
    return {"data": list(items), "paging": {"cursors": {"before": "B", "after": "A"}}}
