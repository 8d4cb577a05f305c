"""Tests for specmodel.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from specmodel.models import (
    HTTPMethod,
    MediaType,
    Operation,
    Parameter,
    ParameterLocation,
    Schema,
    SchemaKind,
)


# ---------------------------------------------------------------------------
# Schema classification
# ---------------------------------------------------------------------------


class TestSchemaKind:
    """Test the closed classification of schemas."""

    @pytest.mark.parametrize(
        ("schema", "kind"),
        [
            (Schema(type="string"), SchemaKind.PRIMITIVE),
            (Schema(type="integer", format="int64"), SchemaKind.PRIMITIVE),
            (Schema(type="object"), SchemaKind.OBJECT),
            (Schema(type="array", items=Schema(type="string")), SchemaKind.ARRAY),
            (Schema(ref="#/components/schemas/Node"), SchemaKind.REF),
            (Schema(all_of=[Schema(type="object")]), SchemaKind.ALL_OF),
            (Schema(one_of=[Schema(type="string")]), SchemaKind.UNION),
            (Schema(any_of=[Schema(type="string")]), SchemaKind.UNION),
            (Schema(properties={"a": Schema()}), SchemaKind.OBJECT),
            (Schema(), SchemaKind.UNTYPED),
        ],
    )
    def test_kind(self, schema: Schema, kind: SchemaKind) -> None:
        assert schema.kind is kind


class TestEffectiveType:
    """Test the precedence rule code generation keys off."""

    def test_explicit_type_wins(self) -> None:
        schema = Schema(
            type="string",
            ref="#/components/schemas/X",
            all_of=[Schema()],
            one_of=[Schema()],
            properties={"a": Schema()},
        )
        assert schema.effective_type() == "string"

    def test_unknown_type_returned_verbatim(self) -> None:
        assert Schema(type="file").effective_type() == "file"

    def test_ref_beats_composition(self) -> None:
        schema = Schema(ref="#/components/schemas/X", all_of=[Schema()], one_of=[Schema()])
        assert schema.effective_type() == "ref"

    def test_all_of_beats_union(self) -> None:
        assert Schema(all_of=[Schema()], any_of=[Schema()]).effective_type() == "object"

    def test_union_beats_properties(self) -> None:
        schema = Schema(one_of=[Schema()], properties={"a": Schema()})
        assert schema.effective_type() == "union"

    def test_properties_imply_object(self) -> None:
        assert Schema(properties={}).effective_type() == "object"

    def test_untyped(self) -> None:
        assert Schema(description="anything").effective_type() is None


# ---------------------------------------------------------------------------
# Aliases and immutability
# ---------------------------------------------------------------------------


class TestModelAliases:
    """Models accept both the OpenAPI spelling and the Python field name."""

    def test_schema_aliases(self) -> None:
        schema = Schema.model_validate(
            {
                "$ref": "#/components/schemas/A",
                "allOf": [{"type": "object"}],
                "additionalProperties": False,
            }
        )
        assert schema.ref == "#/components/schemas/A"
        assert schema.all_of == [Schema(type="object")]
        assert schema.additional_properties is False

    def test_parameter_aliases(self) -> None:
        param = Parameter.model_validate(
            {"name": "q", "internal_name": "q", "in": "query", "schema": {"type": "string"}}
        )
        assert param.location is ParameterLocation.QUERY
        assert param.schema_ == {"type": "string"}

    def test_media_type_alias(self) -> None:
        media = MediaType.model_validate({"schema": {"type": "string"}})
        assert media.schema_ == Schema(type="string")

    def test_dump_by_alias(self) -> None:
        schema = Schema(ref="#/components/schemas/A")
        assert schema.model_dump(by_alias=True, exclude_none=True) == {
            "$ref": "#/components/schemas/A"
        }

    def test_invalid_location(self) -> None:
        with pytest.raises(ValidationError):
            Parameter(name="x", internal_name="x", location="body")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        op = Operation(method=HTTPMethod.GET)
        with pytest.raises(ValidationError):
            op.id = "changed"  # type: ignore[misc]

    def test_enum_values(self) -> None:
        assert HTTPMethod("get") is HTTPMethod.GET
        assert ParameterLocation.PATH == "path"
