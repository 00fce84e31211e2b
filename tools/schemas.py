# =============================================================================
# tools/schemas.py  -  Tool Schema Catalog
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares every tool the server exposes: its name, its input model, and
#   the description an LLM reads to decide when to call it.
#
# ONE DECLARATION, TWO USES:
#   Each pydantic model below is both
#     - the runtime validator   (ToolSchema.validate)
#     - the published schema    (ToolSchema.describe -> JSON Schema)
#   so the shape an agent sees can never drift from the shape we enforce.
#
# ORDER MATTERS:
#   TOOL_CATALOG keeps declaration order.  tools/list returns tools in this
#   order on every run.
# =============================================================================

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, ValidationError, model_validator

from core.manager import DEFAULT_PAGE_FIELDS, DEFAULT_PAGE_LIMIT, DEFAULT_POST_FIELDS


class ToolName(str, Enum):
    CREATE_POST = "fb_create_post"
    UPDATE_POST = "fb_update_post"
    DELETE_POST = "fb_delete_post"
    GET_POSTS = "fb_get_posts"
    GET_COMMENTS = "fb_get_comments"
    REPLY_COMMENT = "fb_reply_comment"
    DELETE_COMMENT = "fb_delete_comment"
    GET_INSIGHTS = "fb_get_insights"
    GET_PAGE_INFO = "fb_get_page_info"
    SEND_MESSAGE = "fb_send_message"
    BATCH = "fb_batch"
    POST_VIDEO = "fb_post_video"
    GET_ENGAGEMENT = "fb_get_engagement"
    FILTER_NEGATIVE_COMMENTS = "fb_filter_negative_comments"
    GET_TOP_COMMENTERS = "fb_get_top_commenters"


# =============================================================================
# Validation errors
# =============================================================================

ROOT_PATH = "<root>"


@dataclass(frozen=True)
class ValidationIssue:
    """One offending field: dotted path plus a reason."""

    path: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


class ToolValidationError(Exception):
    """Raw tool arguments failed the tool's schema.

    Raised before any network call is made.
    """

    def __init__(self, tool_name: str, issues: list[ValidationIssue]):
        self.tool_name = tool_name
        self.issues = issues
        super().__init__(str(self))

    @classmethod
    def from_pydantic(cls, tool_name: str, exc: ValidationError) -> "ToolValidationError":
        issues = [
            ValidationIssue(
                path=".".join(str(part) for part in error["loc"]) or ROOT_PATH,
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return cls(tool_name, issues)

    def to_dict(self) -> dict[str, Any]:
        return {"tool": self.tool_name, "errors": [issue.to_dict() for issue in self.issues]}

    def __str__(self) -> str:
        details = "; ".join(f"{issue.path}: {issue.message}" for issue in self.issues)
        return f"Invalid arguments for {self.tool_name}: {details}"


# =============================================================================
# Shared field types
# =============================================================================

PostId = Annotated[str, Field(min_length=1, description="Facebook post ID")]
CommentId = Annotated[str, Field(min_length=1, description="Facebook comment ID")]
UserId = Annotated[str, Field(min_length=1, description="Facebook user ID")]
MessageText = Annotated[str, Field(min_length=1, description="Message text")]
UrlString = Annotated[str, Field(pattern=r"^https?://\S+$", json_schema_extra={"format": "uri"})]

InsightMetric = Literal[
    "post_impressions_unique",
    "post_clicks",
    "post_reactions_like_total",
    "post_reactions_love_total",
    "post_reactions_wow_total",
    "post_reactions_haha_total",
    "post_reactions_sorry_total",
    "post_reactions_anger_total",
]

PageLimit = Annotated[StrictInt, Field(ge=1, le=100, description="Max items to return")]
AfterCursor = Annotated[Optional[str], Field(description="Pagination cursor for next page")]


class ToolArgs(BaseModel):
    # Unknown keys are dropped rather than rejected.  Booleans and integers
    # use the Strict* types: "false" or "25" is a type error, not a value.
    model_config = ConfigDict(extra="ignore")


# =============================================================================
# Tool input models
# =============================================================================

class CreatePostArgs(ToolArgs):
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"anyOf": [{"required": ["message"]}, {"required": ["image_url"]}]},
    )

    message: Optional[str] = Field(
        default=None, min_length=1, description="Post text (required unless image_url provided)"
    )
    image_url: Optional[UrlString] = Field(default=None, description="Image URL to post as photo")
    link: Optional[UrlString] = Field(default=None, description="URL to attach to the post")
    place: Optional[str] = Field(default=None, description="Page ID of location to associate")
    published: StrictBool = Field(
        default=True, description="Publish immediately (true) or draft/schedule (false)"
    )
    scheduled_publish_time: Optional[StrictInt] = Field(
        default=None, description="Unix timestamp for scheduling (requires published: false)"
    )

    @model_validator(mode="after")
    def _require_message_or_image(self) -> "CreatePostArgs":
        if not self.message and not self.image_url:
            raise ValueError("Either message or image_url is required")
        return self


class UpdatePostArgs(ToolArgs):
    post_id: PostId
    message: MessageText = Field(description="New message text")


class DeletePostArgs(ToolArgs):
    post_id: PostId


class GetPostsArgs(ToolArgs):
    limit: PageLimit = DEFAULT_PAGE_LIMIT
    after: AfterCursor = None
    fields: str = Field(default=DEFAULT_POST_FIELDS, description="Comma-separated fields to return")


class GetCommentsArgs(ToolArgs):
    post_id: PostId
    limit: PageLimit = DEFAULT_PAGE_LIMIT
    after: AfterCursor = None
    include_summary: StrictBool = Field(default=False, description="Include total count summary")


class ReplyCommentArgs(ToolArgs):
    comment_id: CommentId
    message: MessageText


class DeleteCommentArgs(ToolArgs):
    comment_id: CommentId


class GetInsightsArgs(ToolArgs):
    post_id: PostId
    metrics: Optional[list[InsightMetric]] = Field(
        default=None, description="Specific metrics to fetch (default: all)"
    )


class GetPageInfoArgs(ToolArgs):
    fields: str = Field(default=DEFAULT_PAGE_FIELDS, description="Comma-separated fields to return")


class SendMessageArgs(ToolArgs):
    user_id: UserId
    message: MessageText


class BatchOperationArgs(ToolArgs):
    method: Literal["GET", "POST", "DELETE", "PATCH"]
    relative_url: str = Field(min_length=1, description="Path relative to the API version root")
    body: Optional[dict[str, str]] = Field(default=None, description="Form fields for POST/PATCH")
    name: Optional[str] = Field(default=None, description="Name for referencing in dependent requests")
    omit_response_on_success: Optional[StrictBool] = None


class BatchArgs(ToolArgs):
    operations: list[BatchOperationArgs] = Field(
        min_length=1, max_length=50, description="Batch operations (max 50)"
    )
    include_headers: StrictBool = Field(default=False, description="Include HTTP headers in each sub-response")


class PostVideoArgs(ToolArgs):
    video_url: UrlString = Field(description="Publicly reachable video URL")
    description: Optional[str] = Field(default=None, description="Video description")
    title: Optional[str] = Field(default=None, description="Video title")


class GetEngagementArgs(ToolArgs):
    post_id: PostId


class CommentScanArgs(ToolArgs):
    post_id: PostId
    limit: StrictInt = Field(default=100, ge=1, le=100, description="Comments to scan")


class TopCommentersArgs(CommentScanArgs):
    top: Optional[StrictInt] = Field(default=None, ge=1, description="Keep only the N most active commenters")


# =============================================================================
# ToolSchema  -  validate() and describe() from one model
# =============================================================================

def _inline_refs(node: Any, defs: dict[str, Any]) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/$defs/"):
            target = copy.deepcopy(defs[ref.split("/")[-1]])
            siblings = {key: value for key, value in node.items() if key != "$ref"}
            target.update(siblings)
            return _inline_refs(target, defs)
        return {key: _inline_refs(value, defs) for key, value in node.items() if key != "$defs"}
    if isinstance(node, list):
        return [_inline_refs(item, defs) for item in node]
    return node


@dataclass(frozen=True)
class ToolSchema:
    name: ToolName
    model: type[ToolArgs]
    description: str

    def validate(self, raw: Any) -> ToolArgs:
        """Validate untyped arguments; raise ToolValidationError on failure."""
        try:
            return self.model.model_validate(raw if raw is not None else {})
        except ValidationError as exc:
            raise ToolValidationError.from_pydantic(self.name.value, exc) from exc

    def describe(self) -> dict[str, Any]:
        """JSON Schema for the tool input, with every $ref inlined."""
        schema = self.model.model_json_schema()
        return _inline_refs(schema, schema.get("$defs", {}))


TOOL_CATALOG: dict[ToolName, ToolSchema] = {
    schema.name: schema
    for schema in (
        ToolSchema(
            ToolName.CREATE_POST,
            CreatePostArgs,
            "Create a Facebook post (text, image, link, or scheduled). "
            "Supports immediate publishing or scheduling.",
        ),
        ToolSchema(ToolName.UPDATE_POST, UpdatePostArgs, "Update an existing post's message."),
        ToolSchema(ToolName.DELETE_POST, DeletePostArgs, "Delete a post from the Facebook Page."),
        ToolSchema(
            ToolName.GET_POSTS,
            GetPostsArgs,
            "Get page posts with pagination. Use 'after' cursor for next page.",
        ),
        ToolSchema(
            ToolName.GET_COMMENTS,
            GetCommentsArgs,
            "Get comments on a post. Set include_summary=true for total count.",
        ),
        ToolSchema(ToolName.REPLY_COMMENT, ReplyCommentArgs, "Reply to a specific comment."),
        ToolSchema(ToolName.DELETE_COMMENT, DeleteCommentArgs, "Delete a comment."),
        ToolSchema(
            ToolName.GET_INSIGHTS,
            GetInsightsArgs,
            "Get post insights (impressions, clicks, reactions). Specify metrics or get all.",
        ),
        ToolSchema(ToolName.GET_PAGE_INFO, GetPageInfoArgs, "Get page information including fan count."),
        ToolSchema(ToolName.SEND_MESSAGE, SendMessageArgs, "Send a direct message to a user via Messenger."),
        ToolSchema(
            ToolName.BATCH,
            BatchArgs,
            "Execute multiple Graph API requests in a single call. Max 50 operations.",
        ),
        ToolSchema(
            ToolName.POST_VIDEO,
            PostVideoArgs,
            "Publish a video to the page from a public URL, with optional title and description.",
        ),
        ToolSchema(
            ToolName.GET_ENGAGEMENT,
            GetEngagementArgs,
            "Get comment, like and share counts for a post.",
        ),
        ToolSchema(
            ToolName.FILTER_NEGATIVE_COMMENTS,
            CommentScanArgs,
            "Return comments on a post that contain negative keywords (e.g. 'bad', 'broken', 'refund').",
        ),
        ToolSchema(
            ToolName.GET_TOP_COMMENTERS,
            TopCommentersArgs,
            "Rank the users who commented most on a post, most active first.",
        ),
    )
}
