"""Name anonymous inline schemas so code generation can emit one type each.

Schemas declared directly in a request or response body (rather than under
``components.schemas``) have no name of their own.  :func:`extract_inline_schemas`
finds the ones complex enough to deserve a generated type -- inline object
schemas with at least one property -- and gives each a deterministic name:

* base: the operation id in PascalCase, or, without one, the HTTP method
  followed by the capitalised path segments (``GET /users/{id}/posts`` ->
  ``GetUsersIdPosts``);
* suffix: ``Request`` for the request body, ``Response`` for ``200`` and
  ``Response<status>`` for any other 2xx status.

Only the JSON media type is inspected (``application/json`` unless
configured otherwise).  Names are unique per (path, method, status) as long
as operation ids are unique; colliding ids are the caller's problem and the
later schema wins.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specmodel.config import ParserConfig
from specmodel.models import Operation, Schema, Specification
from specmodel.naming import path_type_name, type_name
from specmodel.parser.schema import parse_schema

logger = logging.getLogger(__name__)


def extract_inline_schemas(
    spec: Specification, config: Optional[ParserConfig] = None
) -> dict[str, Schema]:
    """Collect and name every inline object schema in *spec*.

    Args:
        spec: A parsed specification.
        config: Parser options (for the JSON media type).

    Returns:
        Synthesised name -> schema, in path/operation order with each
        operation's responses before its request body.
    """
    media_type = (config or ParserConfig()).json_media_type
    schemas: dict[str, Schema] = {}

    for path in spec.paths:
        for operation in path.operations:
            for name, schema in _operation_schemas(path.path, operation, media_type):
                if name in schemas:
                    logger.warning("Inline schema name '%s' generated twice", name)
                schemas[name] = schema

    logger.debug("Extracted %d inline schema(s)", len(schemas))
    return schemas


def _operation_schemas(
    path: str, operation: Operation, media_type: str
) -> list[tuple[str, Schema]]:
    found: list[tuple[str, Schema]] = []

    for status_code, response in operation.responses.items():
        if not status_code.startswith("2"):
            continue
        entry = response.content.get(media_type)
        if entry is None or not _is_inline_object(entry.schema_):
            continue
        suffix = "Response" if status_code == "200" else f"Response{status_code}"
        found.append((schema_name(path, operation, suffix), entry.schema_))

    body_schema = _request_body_schema(operation.request_body, media_type)
    if _is_inline_object(body_schema):
        found.append((schema_name(path, operation, "Request"), body_schema))

    return found


def _request_body_schema(request_body: Optional[dict[str, Any]], media_type: str) -> Optional[Schema]:
    if not request_body:
        return None
    content = request_body.get("content")
    if not isinstance(content, dict):
        return None
    entry = content.get(media_type)
    if not isinstance(entry, dict):
        return None
    return parse_schema(entry.get("schema"))


def _is_inline_object(schema: Optional[Schema]) -> bool:
    if schema is None or schema.ref is not None:
        return False
    if schema.type not in (None, "object"):
        return False
    return bool(schema.properties)


def schema_name(path: str, operation: Operation, suffix: str) -> str:
    """Synthesise the type name for one inline schema.

    Example::

        >>> op = Operation(id="listUsers", method="get")
        >>> schema_name("/users", op, "Response")
        'ListUsersResponse'
    """
    if operation.id:
        base = type_name(operation.id)
    else:
        base = path_type_name(operation.method.value, path)
    return f"{base}{suffix}"
