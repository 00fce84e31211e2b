# =============================================================================
# tools/registry.py  -  Tool Registry (schemas + handlers)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Binds every catalog entry (tools/schemas.py) to the FacebookManager
#   method that performs it, and produces the two artifacts a host needs:
#     - definitions: [{name, description, input_schema}] for discovery
#     - handlers:    {name: async handler(raw_args)} for dispatch
#
#   Both are built by iterating the same ToolName enum, so there can be no
#   schema without a handler and no handler without a schema.
#
# DISPATCH:
#   _dispatch() is one exhaustive `match` over ToolName ending in
#   assert_never.  Adding a member to ToolName without a branch here is
#   caught by the type checker.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, assert_never

from core.manager import FacebookManager
from core.models import BatchOperation
from tools.schemas import TOOL_CATALOG, ToolName, ToolSchema

ToolHandler = Callable[[Optional[Mapping[str, Any]]], Awaitable[Any]]


class UnknownToolError(LookupError):
    """Dispatch was asked for a tool name that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Tool not found: {name}")
        self.name = name


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "input_schema": self.input_schema}


def build_definitions(catalog: Mapping[ToolName, ToolSchema] = TOOL_CATALOG) -> list[ToolDefinition]:
    """Discovery entries in catalog order.  Never invokes a handler."""
    return [
        ToolDefinition(name=name.value, description=schema.description, input_schema=schema.describe())
        for name, schema in catalog.items()
    ]


class ToolRegistry:
    """Validated, name-addressable access to every FacebookManager operation."""

    def __init__(self, manager: FacebookManager):
        self._manager = manager
        self.definitions: list[ToolDefinition] = build_definitions()
        self.handlers: dict[str, ToolHandler] = {name.value: self._make_handler(name) for name in ToolName}

    @property
    def names(self) -> list[str]:
        return [definition.name for definition in self.definitions]

    def get_handler(self, name: str) -> ToolHandler:
        handler = self.handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)
        return handler

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Validate ``arguments`` for tool ``name`` and run it.

        Raises:
            UnknownToolError: ``name`` is not registered.
            ToolValidationError: the arguments fail the tool's schema.
            GraphApiError: the Graph API rejected the request.
        """
        return await self.get_handler(name)(arguments)

    def _make_handler(self, name: ToolName) -> ToolHandler:
        schema = TOOL_CATALOG[name]

        async def handler(raw: Optional[Mapping[str, Any]] = None) -> Any:
            args = schema.validate(raw)
            return await self._dispatch(name, args)

        handler.__name__ = name.value
        handler.__doc__ = schema.description
        return handler

    async def _dispatch(self, name: ToolName, args: Any) -> Any:
        manager = self._manager
        match name:
            case ToolName.CREATE_POST:
                if args.image_url:
                    return await manager.post_image_to_facebook(args.image_url, args.message or "")
                return await manager.post_to_facebook(
                    args.message,
                    link=args.link,
                    place=args.place,
                    published=args.published,
                    scheduled_publish_time=args.scheduled_publish_time,
                )
            case ToolName.UPDATE_POST:
                return await manager.update_post(args.post_id, args.message)
            case ToolName.DELETE_POST:
                return await manager.delete_post(args.post_id)
            case ToolName.GET_POSTS:
                return await manager.get_page_posts(args.limit, args.after, args.fields)
            case ToolName.GET_COMMENTS:
                return await manager.get_post_comments(
                    args.post_id, args.limit, args.after, args.include_summary
                )
            case ToolName.REPLY_COMMENT:
                return await manager.reply_to_comment(args.comment_id, args.message)
            case ToolName.DELETE_COMMENT:
                return await manager.delete_comment(args.comment_id)
            case ToolName.GET_INSIGHTS:
                return await manager.get_insights(args.post_id, args.metrics)
            case ToolName.GET_PAGE_INFO:
                return await manager.get_page_info(args.fields)
            case ToolName.SEND_MESSAGE:
                return await manager.send_dm_to_user(args.user_id, args.message)
            case ToolName.BATCH:
                operations = [BatchOperation(**operation.model_dump()) for operation in args.operations]
                return await manager.batch_request(operations, args.include_headers)
            case ToolName.POST_VIDEO:
                return await manager.post_video_to_facebook(args.video_url, args.description, args.title)
            case ToolName.GET_ENGAGEMENT:
                return await manager.get_engagement(args.post_id)
            case ToolName.FILTER_NEGATIVE_COMMENTS:
                return await manager.filter_negative_comments(args.post_id, limit=args.limit)
            case ToolName.GET_TOP_COMMENTERS:
                return await manager.get_top_commenters(args.post_id, limit=args.limit, top=args.top)
            case _:
                assert_never(name)
