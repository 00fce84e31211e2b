# =============================================================================
# core/graph_client.py  -  Async HTTP client for the Facebook Graph API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one request to the Graph API and returns the decoded JSON body.
#   The manager (core/manager.py) decides WHAT to send; this module only
#   knows HOW: base URL, API version, access token, timeout.
#
# FAILURE CONTRACT:
#   A non-2xx status, or a 2xx body carrying an "error" object, raises
#   GraphApiError.  Network failures are wrapped in GraphApiError as well so
#   callers only ever catch one type.  Nothing is retried here.
# =============================================================================

import json
import logging
from typing import Any

import httpx

from core.config import GraphConfig

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "DELETE", "PATCH")


class GraphApiError(Exception):
    """Raised when the Graph API reports a failure or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: int | None = None,
        subcode: int | None = None,
        error_type: str | None = None,
        fbtrace_id: str | None = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.subcode = subcode
        self.error_type = error_type
        self.fbtrace_id = fbtrace_id
        self.payload = payload

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "status_code": self.status_code,
            "code": self.code,
            "subcode": self.subcode,
            "type": self.error_type,
            "fbtrace_id": self.fbtrace_id,
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.code is not None:
            parts.append(f"code={self.code}")
        if self.subcode is not None:
            parts.append(f"subcode={self.subcode}")
        return " ".join(parts)


class GraphApiClient:
    """Thin async wrapper over httpx for Graph API calls.

    A new ``httpx.AsyncClient`` is opened per request, so concurrent tool
    calls never share connection state.  ``transport`` is only for tests
    (``httpx.MockTransport``).
    """

    def __init__(self, config: GraphConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    @property
    def config(self) -> GraphConfig:
        return self._config

    def build_url(self, endpoint: str) -> str:
        return f"{self._config.api_url}/{endpoint.lstrip('/')}"

    async def request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Send one Graph API request.

        Args:
            method: GET, POST, DELETE or PATCH.
            endpoint: Path relative to the versioned root, e.g. "123/feed".
                      An empty string targets the root (used by batch calls).
            params: Query parameters.  None values are dropped.
            body: JSON body, sent as-is.

        Returns:
            The decoded JSON response (a dict, or a list for batch calls).

        Raises:
            GraphApiError: on transport failure, non-2xx status, or an
                           error payload.
        """
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        query = {key: value for key, value in (params or {}).items() if value is not None}
        query["access_token"] = self._config.access_token
        url = self.build_url(endpoint)

        logger.debug("graph request %s %s params=%s", method, url, sorted(k for k in query if k != "access_token"))

        try:
            async with httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport) as client:
                response = await client.request(method, url, params=query, json=body)
        except httpx.RequestError as exc:
            logger.warning("graph request %s %s failed: %s", method, endpoint, exc)
            raise GraphApiError(f"Graph API unreachable: {exc}") from exc

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Decode the body and raise GraphApiError on any failure."""
        try:
            payload = response.json() if response.content else {}
        except json.JSONDecodeError:
            payload = {"raw": response.text}

        error = payload.get("error") if isinstance(payload, dict) else None
        if response.is_success and not isinstance(error, dict):
            return payload

        if not isinstance(error, dict):
            error = {}
        exc = GraphApiError(
            error.get("message") or f"Graph API error: HTTP {response.status_code}",
            status_code=response.status_code,
            code=error.get("code"),
            subcode=error.get("error_subcode"),
            error_type=error.get("type"),
            fbtrace_id=error.get("fbtrace_id"),
            payload=payload,
        )
        logger.warning("graph response error: %s", exc)
        raise exc
