# =============================================================================
# core/manager.py  -  Facebook Page operations over the Graph API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One async method per page operation.  Each method shapes exactly one
#   request (HTTP method, endpoint, params or body) and hands it to the
#   Graph API client.  Batch is the only composite call, and it is still a
#   single HTTP request.
#
# WHAT IT DOES NOT DO:
#   - Validate arguments (tools/schemas.py does that before we get here)
#   - Retry, cache or reinterpret Graph errors (GraphApiError passes through)
#   - Know anything about MCP
#
# The derived operations at the bottom (counts, negative filter, top
# commenters) fetch with the methods above and reduce with core/analysis.py.
# =============================================================================

from typing import Any, Optional, Protocol, Sequence

from core import analysis
from core.config import GraphConfig
from core.graph_client import GraphApiClient
from core.models import BatchOperation, Collection, encode_batch

DEFAULT_POST_FIELDS = "id,message,created_time"
DEFAULT_COMMENT_FIELDS = "id,message,from,created_time"
DEFAULT_PAGE_FIELDS = "id,name,fan_count"
DEFAULT_PAGE_LIMIT = 25

# Metrics still served for posts as of Graph API v24.0, in request order.
DEFAULT_METRICS: tuple[str, ...] = (
    "post_impressions_unique",
    "post_clicks",
    "post_reactions_like_total",
    "post_reactions_love_total",
    "post_reactions_wow_total",
    "post_reactions_haha_total",
    "post_reactions_sorry_total",
    "post_reactions_anger_total",
)


class GraphClient(Protocol):
    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> Any: ...


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


class FacebookManager:
    """Shapes Graph API calls for one managed Facebook Page."""

    def __init__(self, client: GraphClient, page_id: str):
        self._client = client
        self._page_id = page_id

    @classmethod
    def from_config(cls, config: GraphConfig) -> "FacebookManager":
        return cls(GraphApiClient(config), config.page_id)

    @property
    def page_id(self) -> str:
        return self._page_id

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    async def post_to_facebook(
        self,
        message: str,
        link: Optional[str] = None,
        place: Optional[str] = None,
        published: Optional[bool] = None,
        scheduled_publish_time: Optional[int] = None,
    ) -> dict[str, Any]:
        return await self._client.request(
            "POST",
            f"{self._page_id}/feed",
            params=_compact({
                "message": message,
                "link": link,
                "place": place,
                "published": published,
                "scheduled_publish_time": scheduled_publish_time,
            }),
        )

    async def post_image_to_facebook(self, image_url: str, caption: str = "") -> dict[str, Any]:
        return await self._client.request(
            "POST",
            f"{self._page_id}/photos",
            params={"url": image_url, "caption": caption},
        )

    async def post_video_to_facebook(
        self,
        video_url: str,
        description: Optional[str] = None,
        title: Optional[str] = None,
    ) -> dict[str, Any]:
        """Publish a hosted video; the Graph API fetches it from ``file_url``."""
        params: dict[str, Any] = {"file_url": video_url}
        if description:
            params["description"] = description
        if title:
            params["title"] = title
        return await self._client.request("POST", f"{self._page_id}/videos", params=params)

    async def update_post(self, post_id: str, message: str) -> dict[str, Any]:
        return await self._client.request("POST", post_id, params={"message": message})

    async def delete_post(self, post_id: str) -> dict[str, Any]:
        return await self._client.request("DELETE", post_id)

    async def get_page_posts(
        self,
        limit: int = DEFAULT_PAGE_LIMIT,
        after: Optional[str] = None,
        fields: str = DEFAULT_POST_FIELDS,
    ) -> dict[str, Any]:
        return await self._client.request(
            "GET",
            f"{self._page_id}/posts",
            params=_compact({"fields": fields, "limit": limit, "after": after}),
        )

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    async def get_post_comments(
        self,
        post_id: str,
        limit: int = DEFAULT_PAGE_LIMIT,
        after: Optional[str] = None,
        include_summary: bool = False,
    ) -> dict[str, Any]:
        return await self._client.request(
            "GET",
            f"{post_id}/comments",
            params=_compact({
                "fields": DEFAULT_COMMENT_FIELDS,
                "limit": limit,
                "after": after,
                "summary": "true" if include_summary else None,
            }),
        )

    async def reply_to_comment(self, comment_id: str, message: str) -> dict[str, Any]:
        return await self._client.request("POST", f"{comment_id}/comments", params={"message": message})

    async def delete_comment(self, comment_id: str) -> dict[str, Any]:
        return await self._client.request("DELETE", comment_id)

    # -------------------------------------------------------------------------
    # Insights and page info
    # -------------------------------------------------------------------------

    async def get_insights(self, post_id: str, metrics: Optional[Sequence[str]] = None) -> dict[str, Any]:
        """Lifetime insights for a post.

        An empty or missing ``metrics`` falls back to DEFAULT_METRICS.
        """
        metrics_to_fetch = list(metrics) if metrics else list(DEFAULT_METRICS)
        return await self._client.request(
            "GET",
            f"{post_id}/insights",
            params={"metric": ",".join(metrics_to_fetch), "period": "lifetime"},
        )

    async def get_page_info(self, fields: str = DEFAULT_PAGE_FIELDS) -> dict[str, Any]:
        return await self._client.request("GET", self._page_id, params={"fields": fields})

    # -------------------------------------------------------------------------
    # Messaging
    # -------------------------------------------------------------------------

    async def send_dm_to_user(self, user_id: str, message: str) -> dict[str, Any]:
        # messaging_type RESPONSE only works inside the 24h window opened by
        # the user's last message.
        return await self._client.request(
            "POST",
            "me/messages",
            body={
                "recipient": {"id": user_id},
                "message": {"text": message},
                "messaging_type": "RESPONSE",
            },
        )

    # -------------------------------------------------------------------------
    # Batch
    # -------------------------------------------------------------------------

    async def batch_request(
        self,
        operations: Sequence[BatchOperation],
        include_headers: bool = False,
    ) -> Any:
        """Run several Graph calls in one HTTP request.

        The response is the Graph API's per-operation list, passed through
        unchanged; partial failures inside it are not raised.
        """
        return await self._client.request(
            "POST",
            "",
            params={
                "batch": encode_batch(list(operations)),
                "include_headers": include_headers,
            },
        )

    # -------------------------------------------------------------------------
    # Derived operations
    # -------------------------------------------------------------------------

    async def get_number_of_comments(self, post_id: str, limit: int = DEFAULT_PAGE_LIMIT) -> int:
        """Comments on the first page of results (not the post-wide total)."""
        return analysis.count_items(await self.get_post_comments(post_id, limit=limit))

    async def get_number_of_likes(self, post_id: str) -> int:
        payload = await self._client.request("GET", post_id, params={"fields": "likes.summary(true)"})
        return analysis.summary_total_count(payload, "likes")

    async def get_post_share_count(self, post_id: str) -> int:
        payload = await self._client.request("GET", post_id, params={"fields": "shares"})
        return analysis.edge_count(payload, "shares")

    async def get_engagement(self, post_id: str) -> dict[str, Any]:
        return {
            "post_id": post_id,
            "comments": await self.get_number_of_comments(post_id),
            "likes": await self.get_number_of_likes(post_id),
            "shares": await self.get_post_share_count(post_id),
        }

    async def filter_negative_comments(self, post_id: str, limit: int = 100) -> list[dict[str, Any]]:
        page = Collection.from_response(await self.get_post_comments(post_id, limit=limit))
        return analysis.filter_negative_comments(page.data)

    async def get_top_commenters(
        self,
        post_id: str,
        limit: int = 100,
        top: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        page = Collection.from_response(await self.get_post_comments(post_id, limit=limit))
        return [row.to_dict() for row in analysis.top_commenters(page.data, top=top)]
