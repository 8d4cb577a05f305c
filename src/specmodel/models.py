"""Canonical Pydantic models shared across all specmodel modules.

This is the single source of truth for the typed model handed to code
generation.  Every entity is frozen: the parser builds each one exactly once
per document and nothing mutates it afterwards.

**Node classification** -- :class:`NodeKind` tags a raw document node as a
reference, mapping, sequence, or scalar.

**Specification model** -- :class:`Specification`, :class:`Path`,
:class:`Operation`, :class:`Parameter`, :class:`Response`,
:class:`MediaType`, plus the :class:`HTTPMethod` and
:class:`ParameterLocation` enums.

**Schema model** -- :class:`Schema` and its closed classification
:class:`SchemaKind`.

Fields whose OpenAPI name collides with a Python keyword or a pydantic
attribute use an alias (``in`` -> ``location``, ``schema`` -> ``schema_``,
``$ref`` -> ``ref``); models accept either spelling.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


class NodeKind(str, enum.Enum):
    """Shape of a decoded document node."""

    REFERENCE = "reference"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects."""

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    OPTIONS = "options"
    HEAD = "head"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


# --- Schema model ---


class SchemaKind(str, enum.Enum):
    """Closed classification of a :class:`Schema` by composition.

    Exactly one kind applies to any schema.  See :attr:`Schema.kind` for the
    precedence that picks it.
    """

    PRIMITIVE = "primitive"
    OBJECT = "object"
    ARRAY = "array"
    REF = "ref"
    ALL_OF = "all_of"
    UNION = "union"
    UNTYPED = "untyped"


class Schema(BaseModel):
    """A parsed OpenAPI *Schema Object*.

    Each OpenAPI keyword maps onto one field.  ``properties``, ``items``,
    ``additional_properties`` and the composition lists hold nested
    :class:`Schema` instances.  ``ref`` is only set on cycle markers left by
    the resolver (or on schemas parsed from an unresolved document).
    """

    model_config = _FROZEN

    type: Optional[str] = None
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    properties: Optional[dict[str, Schema]] = None
    required: Optional[list[str]] = None
    items: Optional[Schema] = None
    enum: Optional[list[Any]] = None
    example: Any = None
    default: Any = None
    nullable: Optional[bool] = None
    all_of: Optional[list[Schema]] = Field(default=None, alias="allOf")
    one_of: Optional[list[Schema]] = Field(default=None, alias="oneOf")
    any_of: Optional[list[Schema]] = Field(default=None, alias="anyOf")
    discriminator: Optional[dict[str, Any]] = None
    additional_properties: Optional[Union[bool, Schema]] = Field(
        default=None, alias="additionalProperties"
    )
    ref: Optional[str] = Field(default=None, alias="$ref")

    @property
    def kind(self) -> SchemaKind:
        """Classify the schema.

        Precedence: explicit ``type`` wins, then ``$ref``, then ``allOf``,
        then ``oneOf``/``anyOf``, then ``properties``; anything else is
        :attr:`SchemaKind.UNTYPED`.
        """
        if self.type is not None:
            if self.type == "object":
                return SchemaKind.OBJECT
            if self.type == "array":
                return SchemaKind.ARRAY
            return SchemaKind.PRIMITIVE
        if self.ref is not None:
            return SchemaKind.REF
        if self.all_of is not None:
            return SchemaKind.ALL_OF
        if self.one_of is not None or self.any_of is not None:
            return SchemaKind.UNION
        if self.properties is not None:
            return SchemaKind.OBJECT
        return SchemaKind.UNTYPED

    def effective_type(self) -> Optional[str]:
        """Return the single type string code generation keys off.

        An explicit ``type`` is returned verbatim.  Otherwise: ``"ref"`` for
        references, ``"object"`` for ``allOf`` and property bags, ``"union"``
        for ``oneOf``/``anyOf``, and ``None`` when nothing applies.
        """
        kind = self.kind
        if self.type is not None:
            return self.type
        if kind is SchemaKind.REF:
            return "ref"
        if kind is SchemaKind.ALL_OF or kind is SchemaKind.OBJECT:
            return "object"
        if kind is SchemaKind.UNION:
            return "union"
        return None


# --- Specification model ---


class Parameter(BaseModel):
    """A single OpenAPI *Parameter Object*.

    ``internal_name`` is the normalised identifier code generation uses for
    the function argument; ``name`` is what goes on the wire.
    """

    model_config = _FROZEN

    name: str
    internal_name: str
    location: ParameterLocation = Field(alias="in")
    description: Optional[str] = None
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    content: Optional[dict[str, Any]] = None
    style: Optional[str] = None
    required: bool = False
    deprecated: bool = False
    explode: bool = False
    allow_reserved: bool = False
    allow_empty_value: bool = False
    examples: list[Any] = Field(default_factory=list)


class MediaType(BaseModel):
    """One entry of a response's ``content`` map."""

    model_config = _FROZEN

    schema_: Optional[Schema] = Field(default=None, alias="schema")
    example: Any = None
    examples: dict[str, Any] = Field(default_factory=dict)


class Response(BaseModel):
    """An OpenAPI *Response Object* for one status code."""

    model_config = _FROZEN

    description: Optional[str] = None
    headers: dict[str, Any] = Field(default_factory=dict)
    content: dict[str, MediaType] = Field(default_factory=dict)
    links: dict[str, Any] = Field(default_factory=dict)


class Operation(BaseModel):
    """A single API operation (one HTTP method under one path).

    ``request_body`` and ``security`` are kept as the raw resolved
    structures; code generation reads them directly.
    """

    model_config = _FROZEN

    id: Optional[str] = None
    method: HTTPMethod
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    responses: dict[str, Response] = Field(default_factory=dict)
    request_body: Optional[dict[str, Any]] = None
    security: Optional[list[dict[str, Any]]] = None
    deprecated: bool = False


class Path(BaseModel):
    """A path template and the operations declared under it."""

    model_config = _FROZEN

    path: str
    operations: list[Operation] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)


class Specification(BaseModel):
    """Complete typed representation of a resolved OpenAPI document.

    Only ``paths`` is parsed into entities.  The remaining top-level
    sections are carried through unparsed for code generation to inspect.

    See Also:
        :func:`specmodel.parser.extractor.parse_spec`: Builds this model.
    """

    model_config = _FROZEN

    version: Optional[str] = None
    info: dict[str, Any] = Field(default_factory=dict)
    paths: list[Path] = Field(default_factory=list)
    servers: Optional[list[Any]] = None
    components: Optional[dict[str, Any]] = None
    security: Optional[list[Any]] = None
    tags: Optional[list[Any]] = None
    external_docs: Optional[dict[str, Any]] = None


Schema.model_rebuild()
