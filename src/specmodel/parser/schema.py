"""Parse OpenAPI *Schema Objects* into :class:`~specmodel.models.Schema`.

Parsing is purely structural: each keyword maps onto one field, and
``properties``, ``items``, ``additionalProperties`` and the ``allOf`` /
``oneOf`` / ``anyOf`` lists recurse.  Input is expected to come from a
resolved document; a cycle marker left by the resolver parses to a schema
whose only meaningful field is ``ref``.

OpenAPI 3.1 type arrays (``["string", "null"]``) are folded into the 3.0
shape: the first non-null type becomes ``type`` and ``nullable`` is set.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from specmodel.models import Schema, SchemaKind, Specification

_SCHEMA_REF_PREFIX = "#/components/schemas/"

_SIMPLE_TYPES = frozenset({"string", "integer", "number", "boolean"})


def parse_schema(schema: Any) -> Optional[Schema]:
    """Build a :class:`~specmodel.models.Schema` from a raw schema mapping.

    Args:
        schema: A schema dict.  Anything else (``None``, booleans, lists)
            yields ``None``.

    Returns:
        The parsed schema, or ``None``.
    """
    if not isinstance(schema, dict):
        return None

    schema_type, nullable = _split_type(schema.get("type"), schema.get("nullable"))

    return Schema(
        type=schema_type,
        format=schema.get("format"),
        title=schema.get("title"),
        description=schema.get("description"),
        properties=_parse_properties(schema.get("properties")),
        required=schema.get("required"),
        items=parse_schema(schema.get("items")),
        enum=schema.get("enum"),
        example=schema.get("example"),
        default=schema.get("default"),
        nullable=nullable,
        all_of=_parse_list(schema.get("allOf")),
        one_of=_parse_list(schema.get("oneOf")),
        any_of=_parse_list(schema.get("anyOf")),
        discriminator=schema.get("discriminator"),
        additional_properties=_parse_additional_properties(
            schema.get("additionalProperties")
        ),
        ref=schema.get("$ref"),
    )


def _split_type(type_value: Any, nullable: Any) -> tuple[Optional[str], Optional[bool]]:
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        if "null" in type_value:
            nullable = True
        return (str(non_null[0]) if non_null else None), nullable
    if type_value is None:
        return None, nullable
    return str(type_value), nullable


def _parse_properties(properties: Any) -> Optional[dict[str, Schema]]:
    if not isinstance(properties, dict):
        return None
    parsed: dict[str, Schema] = {}
    for name, value in properties.items():
        prop = parse_schema(value)
        # Boolean property schemas ("x": true) carry no structure.
        parsed[name] = prop if prop is not None else Schema()
    return parsed


def _parse_list(schemas: Any) -> Optional[list[Schema]]:
    if not isinstance(schemas, list):
        return None
    return [s for s in (parse_schema(item) for item in schemas) if s is not None]


def _parse_additional_properties(value: Any) -> Optional[Union[bool, Schema]]:
    if isinstance(value, bool):
        return value
    return parse_schema(value)


def extract_component_schemas(
    spec: Union[Specification, dict[str, Any]],
) -> dict[str, Schema]:
    """Parse every entry of ``components.schemas``.

    Args:
        spec: A :class:`~specmodel.models.Specification` or a raw/resolved
            document dict.

    Returns:
        Schema name -> parsed schema.  Empty when there are no components.
    """
    if isinstance(spec, Specification):
        components = spec.components
    else:
        components = spec.get("components")

    if not isinstance(components, dict):
        return {}
    schemas = components.get("schemas")
    if not isinstance(schemas, dict):
        return {}

    parsed: dict[str, Schema] = {}
    for name, raw in schemas.items():
        schema = parse_schema(raw)
        if schema is not None:
            parsed[name] = schema
    return parsed


def ref_name(ref: Optional[str]) -> Optional[str]:
    """Return the component name a schema pointer targets.

    Example::

        >>> ref_name("#/components/schemas/User")
        'User'
        >>> ref_name("#/components/parameters/Query") is None
        True
    """
    if ref and ref.startswith(_SCHEMA_REF_PREFIX):
        return ref[len(_SCHEMA_REF_PREFIX):]
    return None


def is_simple_type(schema: Optional[Schema]) -> bool:
    """True for ``string``, ``integer``, ``number`` and ``boolean`` schemas."""
    return schema is not None and schema.type in _SIMPLE_TYPES


def is_object_type(schema: Optional[Schema]) -> bool:
    """True for ``type: object`` and for untyped schemas with properties."""
    if schema is None:
        return False
    return schema.type == "object" or schema.properties is not None


def is_array_type(schema: Optional[Schema]) -> bool:
    """True for ``type: array`` schemas."""
    return schema is not None and schema.kind is SchemaKind.ARRAY
