# =============================================================================
# core/config.py  -  Graph API Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Resolves the access token, the managed page id and the Graph API endpoint
#   settings into one immutable GraphConfig.
#
# NO GLOBAL INSTANCE:
#   Nothing here runs at import time.  Entry points (main.py and
#   tools/mcp_server.py) call load_dotenv() and then load_config() once, and
#   pass the result down explicitly.
#
# ENVIRONMENT:
#   FACEBOOK_ACCESS_TOKEN   Page access token (required)
#   FACEBOOK_PAGE_ID        Managed page id (required)
#   GRAPH_API_VERSION       Defaults to v24.0
#   GRAPH_API_BASE_URL      Defaults to https://graph.facebook.com
#   GRAPH_API_TIMEOUT       Request timeout in seconds, defaults to 30
# =============================================================================

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_API_VERSION = "v24.0"
DEFAULT_BASE_URL = "https://graph.facebook.com"
DEFAULT_TIMEOUT_SECONDS = 30.0


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


@dataclass(frozen=True)
class GraphConfig:
    """Everything the Graph API client needs to talk to one page."""

    access_token: str
    page_id: str
    api_version: str = DEFAULT_API_VERSION
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def api_url(self) -> str:
        """Versioned root URL, e.g. https://graph.facebook.com/v24.0"""
        return f"{self.base_url.rstrip('/')}/{self.api_version}"

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return (
            f"GraphConfig(page_id={self.page_id!r}, api_version={self.api_version!r}, "
            f"base_url={self.base_url!r}, timeout={self.timeout!r})"
        )


def load_config(environ: Mapping[str, str] | None = None) -> GraphConfig:
    """Build a GraphConfig from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to os.environ; tests pass a
                 plain dict.

    Raises:
        ConfigError: if the token or page id is missing, or the timeout is
                     not a positive number.
    """
    env = os.environ if environ is None else environ

    access_token = env.get("FACEBOOK_ACCESS_TOKEN", "").strip()
    page_id = env.get("FACEBOOK_PAGE_ID", "").strip()

    missing = [
        name
        for name, value in (
            ("FACEBOOK_ACCESS_TOKEN", access_token),
            ("FACEBOOK_PAGE_ID", page_id),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    raw_timeout = env.get("GRAPH_API_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(f"GRAPH_API_TIMEOUT must be a number, got {raw_timeout!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"GRAPH_API_TIMEOUT must be positive, got {timeout}")

    return GraphConfig(
        access_token=access_token,
        page_id=page_id,
        api_version=env.get("GRAPH_API_VERSION", DEFAULT_API_VERSION).strip() or DEFAULT_API_VERSION,
        base_url=env.get("GRAPH_API_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        timeout=timeout,
    )
