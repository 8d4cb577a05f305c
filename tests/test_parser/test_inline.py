"""Tests for specmodel.parser.inline."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from specmodel.config import ParserConfig
from specmodel.models import HTTPMethod, Operation, Schema, Specification
from specmodel.parser.extractor import parse_spec
from specmodel.parser.inline import extract_inline_schemas, schema_name


def _json_body(schema: dict[str, Any], media_type: str = "application/json") -> dict[str, Any]:
    return {"content": {media_type: {"schema": schema}}}


def _spec(path: str, method: str, operation: dict[str, Any]) -> Specification:
    return parse_spec({"paths": {path: {method: operation}}})


_USER = {"type": "object", "properties": {"id": {"type": "integer"}}}


# ---------------------------------------------------------------------------
# extract_inline_schemas
# ---------------------------------------------------------------------------


class TestExtractInlineSchemas:
    """Test discovery and naming of inline object schemas."""

    def test_petstore(self, petstore_spec: Specification) -> None:
        schemas = extract_inline_schemas(petstore_spec)

        assert list(schemas) == [
            "CreatePetResponse201",
            "CreatePetRequest",
            "ListPetsResponse",
            "ShowPetByIdResponse",
        ]
        request = schemas["CreatePetRequest"]
        assert request.required == ["name"]
        assert request.properties is not None
        assert list(request.properties) == ["tag", "name"]

    def test_response_200(self) -> None:
        spec = _spec("/users", "get", {"operationId": "listUsers", "responses": {"200": _json_body(_USER)}})

        assert list(extract_inline_schemas(spec)) == ["ListUsersResponse"]

    def test_other_2xx_gets_status_suffix(self) -> None:
        spec = _spec("/users", "post", {"operationId": "createUser", "responses": {"202": _json_body(_USER)}})

        assert list(extract_inline_schemas(spec)) == ["CreateUserResponse202"]

    def test_request_body(self) -> None:
        spec = _spec("/users", "post", {"operationId": "create_user", "requestBody": _json_body(_USER)})

        schemas = extract_inline_schemas(spec)

        assert list(schemas) == ["CreateUserRequest"]
        assert schemas["CreateUserRequest"].properties == {"id": Schema(type="integer")}

    def test_fallback_name_without_operation_id(self) -> None:
        spec = _spec("/users/{id}/posts", "get", {"responses": {"200": _json_body(_USER)}})

        assert list(extract_inline_schemas(spec)) == ["GetUsersIdPostsResponse"]

    def test_untyped_schema_with_properties(self) -> None:
        schema = {"properties": {"name": {"type": "string"}}}
        spec = _spec("/x", "get", {"operationId": "getX", "responses": {"200": _json_body(schema)}})

        assert list(extract_inline_schemas(spec)) == ["GetXResponse"]

    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "object"},
            {"type": "object", "properties": {}},
            {"type": "array", "items": _USER},
            {"type": "string"},
            {"$ref": "#/components/schemas/User"},
        ],
    )
    def test_skips_non_inline_objects(self, schema: dict[str, Any]) -> None:
        spec = _spec(
            "/x",
            "post",
            {
                "operationId": "postX",
                "requestBody": _json_body(schema),
                "responses": {"200": _json_body(schema)},
            },
        )

        assert extract_inline_schemas(spec) == {}

    @pytest.mark.parametrize("status", ["default", "400", "500", "302"])
    def test_skips_non_2xx(self, status: str) -> None:
        spec = _spec("/x", "get", {"operationId": "getX", "responses": {status: _json_body(_USER)}})

        assert extract_inline_schemas(spec) == {}

    def test_skips_other_media_types(self) -> None:
        spec = _spec(
            "/x",
            "post",
            {
                "operationId": "postX",
                "requestBody": _json_body(_USER, "application/xml"),
                "responses": {"200": _json_body(_USER, "text/plain")},
            },
        )

        assert extract_inline_schemas(spec) == {}

    def test_configured_media_type(self) -> None:
        spec = _spec(
            "/x",
            "get",
            {"operationId": "getX", "responses": {"200": _json_body(_USER, "application/vnd.api+json")}},
        )

        schemas = extract_inline_schemas(spec, ParserConfig(json_media_type="application/vnd.api+json"))

        assert list(schemas) == ["GetXResponse"]

    def test_duplicate_names_warn_and_keep_last(self, caplog: pytest.LogCaptureFixture) -> None:
        spec = parse_spec(
            {
                "paths": {
                    "/a": {"get": {"operationId": "dup", "responses": {"200": _json_body(_USER)}}},
                    "/b": {
                        "get": {
                            "operationId": "dup",
                            "responses": {
                                "200": _json_body(
                                    {"type": "object", "properties": {"b": {"type": "string"}}}
                                )
                            },
                        }
                    },
                }
            }
        )

        with caplog.at_level(logging.WARNING, logger="specmodel.parser.inline"):
            schemas = extract_inline_schemas(spec)

        assert schemas["DupResponse"].properties == {"b": Schema(type="string")}
        assert "DupResponse" in caplog.text

    def test_empty_spec(self) -> None:
        assert extract_inline_schemas(Specification()) == {}


# ---------------------------------------------------------------------------
# schema_name
# ---------------------------------------------------------------------------


class TestSchemaName:
    """Test synthesised type names."""

    def test_operation_id(self) -> None:
        op = Operation(id="listUsers", method=HTTPMethod.GET)

        assert schema_name("/users", op, "Response") == "ListUsersResponse"

    def test_snake_case_operation_id(self) -> None:
        op = Operation(id="get_user_by_id", method=HTTPMethod.GET)

        assert schema_name("/users/{id}", op, "Response") == "GetUserByIdResponse"

    def test_path_fallback(self) -> None:
        op = Operation(method=HTTPMethod.POST)

        assert schema_name("/bim-files/{file_id}", op, "Request") == "PostBimFilesFileIdRequest"

    def test_root_path_fallback(self) -> None:
        op = Operation(method=HTTPMethod.GET)

        assert schema_name("/", op, "Response") == "GetResponse"
