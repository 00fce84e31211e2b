"""Tests for the tool schema catalog: validation and JSON Schema output."""

import json

import pytest

from tools.schemas import ROOT_PATH, TOOL_CATALOG, ToolName, ToolValidationError

CREATE_POST = TOOL_CATALOG[ToolName.CREATE_POST]


class TestCreatePost:
    def test_link_alone_is_rejected(self):
        with pytest.raises(ToolValidationError) as exc_info:
            CREATE_POST.validate({"link": "https://x"})

        issues = exc_info.value.issues
        assert len(issues) == 1
        assert issues[0].path == ROOT_PATH
        assert "Either message or image_url is required" in issues[0].message

    def test_message_alone_gets_defaults(self):
        args = CREATE_POST.validate({"message": "hi"})

        assert args.message == "hi"
        assert args.published is True
        assert args.image_url is None

    def test_image_alone_is_accepted(self):
        args = CREATE_POST.validate({"image_url": "https://x/y.jpg"})

        assert args.image_url == "https://x/y.jpg"
        assert args.message is None

    def test_bad_url_reports_field_path(self):
        with pytest.raises(ToolValidationError) as exc_info:
            CREATE_POST.validate({"message": "hi", "link": "not a url"})

        assert [issue.path for issue in exc_info.value.issues] == ["link"]

    def test_empty_message_is_rejected(self):
        with pytest.raises(ToolValidationError):
            CREATE_POST.validate({"message": ""})


class TestPagination:
    def test_defaults(self):
        args = TOOL_CATALOG[ToolName.GET_POSTS].validate({})

        assert args.limit == 25
        assert args.after is None
        assert args.fields == "id,message,created_time"

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_bounds(self, limit):
        with pytest.raises(ToolValidationError) as exc_info:
            TOOL_CATALOG[ToolName.GET_POSTS].validate({"limit": limit})

        assert exc_info.value.issues[0].path == "limit"

    def test_none_means_empty_arguments(self):
        assert TOOL_CATALOG[ToolName.GET_PAGE_INFO].validate(None).fields == "id,name,fan_count"


class TestRequiredAndEnums:
    def test_missing_required_field(self):
        with pytest.raises(ToolValidationError) as exc_info:
            TOOL_CATALOG[ToolName.REPLY_COMMENT].validate({"message": "thanks"})

        assert [issue.path for issue in exc_info.value.issues] == ["comment_id"]

    def test_unknown_metric_is_rejected(self):
        with pytest.raises(ToolValidationError) as exc_info:
            TOOL_CATALOG[ToolName.GET_INSIGHTS].validate({"post_id": "p1", "metrics": ["post_impressions"]})

        assert exc_info.value.issues[0].path == "metrics.0"

    def test_batch_method_outside_enum(self):
        with pytest.raises(ToolValidationError) as exc_info:
            TOOL_CATALOG[ToolName.BATCH].validate(
                {"operations": [{"method": "PUT", "relative_url": "me"}]}
            )

        assert exc_info.value.issues[0].path == "operations.0.method"

    def test_batch_bounds(self):
        schema = TOOL_CATALOG[ToolName.BATCH]
        operation = {"method": "GET", "relative_url": "me"}

        with pytest.raises(ToolValidationError):
            schema.validate({"operations": []})
        with pytest.raises(ToolValidationError):
            schema.validate({"operations": [operation] * 51})
        assert len(schema.validate({"operations": [operation] * 50}).operations) == 50

    def test_error_is_structured(self):
        with pytest.raises(ToolValidationError) as exc_info:
            TOOL_CATALOG[ToolName.SEND_MESSAGE].validate({})

        payload = exc_info.value.to_dict()
        assert payload["tool"] == "fb_send_message"
        assert {error["path"] for error in payload["errors"]} == {"user_id", "message"}
        assert all(error["message"] for error in payload["errors"])


def test_unknown_keys_are_dropped():
    args = TOOL_CATALOG[ToolName.DELETE_POST].validate({"post_id": "p1", "force": True})

    assert args.model_dump() == {"post_id": "p1"}


@pytest.mark.parametrize(
    "name, raw, path",
    [
        (ToolName.CREATE_POST, {"message": "hi", "published": "false"}, "published"),
        (ToolName.CREATE_POST, {"message": "hi", "scheduled_publish_time": "1735689600"}, "scheduled_publish_time"),
        (ToolName.CREATE_POST, {"message": "hi", "scheduled_publish_time": 1735689600.5}, "scheduled_publish_time"),
        (ToolName.GET_POSTS, {"limit": "25"}, "limit"),
        (ToolName.GET_POSTS, {"limit": "25.0"}, "limit"),
        (ToolName.GET_COMMENTS, {"post_id": "p1", "include_summary": "yes"}, "include_summary"),
        (ToolName.GET_TOP_COMMENTERS, {"post_id": "p1", "top": "3"}, "top"),
        (ToolName.BATCH, {"operations": [{"method": "GET", "relative_url": "me"}], "include_headers": 1}, "include_headers"),
        (ToolName.UPDATE_POST, {"post_id": 42, "message": "hi"}, "post_id"),
    ],
)
def test_wrong_types_are_rejected(name, raw, path):
    with pytest.raises(ToolValidationError) as exc_info:
        TOOL_CATALOG[name].validate(raw)

    assert [issue.path for issue in exc_info.value.issues] == [path]


def test_draft_flag_must_be_boolean():
    args = CREATE_POST.validate({"message": "hi", "published": False})

    assert args.published is False


@pytest.mark.parametrize(
    "name, raw",
    [
        (ToolName.CREATE_POST, {"message": "hi", "link": "https://x"}),
        (ToolName.GET_COMMENTS, {"post_id": "p1", "after": "CUR"}),
        (ToolName.GET_INSIGHTS, {"post_id": "p1", "metrics": ["post_clicks"]}),
        (ToolName.BATCH, {"operations": [{"method": "POST", "relative_url": "me/feed", "body": {"message": "x"}}]}),
        (ToolName.GET_TOP_COMMENTERS, {"post_id": "p1", "top": 3}),
    ],
)
def test_validation_is_idempotent(name, raw):
    schema = TOOL_CATALOG[name]
    first = schema.validate(raw).model_dump()

    assert schema.validate(first).model_dump() == first


class TestDescribe:
    def test_every_schema_is_an_object_without_refs(self):
        for schema in TOOL_CATALOG.values():
            described = schema.describe()
            assert described["type"] == "object"
            assert "$ref" not in json.dumps(described)
            assert "$defs" not in described

    def test_create_post_documents_cross_field_rule(self):
        described = CREATE_POST.describe()

        assert {"required": ["message"]} in described["anyOf"]
        assert {"required": ["image_url"]} in described["anyOf"]
        assert described["properties"]["published"]["default"] is True

    def test_batch_operation_is_inlined(self):
        described = TOOL_CATALOG[ToolName.BATCH].describe()
        operations = described["properties"]["operations"]

        assert operations["maxItems"] == 50
        assert operations["items"]["properties"]["method"]["enum"] == ["GET", "POST", "DELETE", "PATCH"]
        assert described["required"] == ["operations"]

    def test_describe_is_deterministic(self):
        assert [s.describe() for s in TOOL_CATALOG.values()] == [s.describe() for s in TOOL_CATALOG.values()]
