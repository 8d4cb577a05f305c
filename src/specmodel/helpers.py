"""Queries over the parsed model that code generation templates rely on.

These helpers answer the questions a template asks while emitting one
function per operation: which arguments does the function take, which of
them go in the query string or headers, what is the function called, how is
the URL built.

A generated function sees the path-level parameters followed by the
operation's own, deduplicated by ``internal_name`` with the first
occurrence winning (see :func:`function_parameters`).
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Optional

from specmodel.models import Operation, Parameter, ParameterLocation, Path
from specmodel.naming import friendly_path

_JSON_MEDIA_TYPE = "application/json"


def function_parameters(path: Path, operation: Operation) -> list[Parameter]:
    """Return the parameters visible to the operation's generated function.

    Example::

        >>> [p.internal_name for p in function_parameters(path, operation)]
        ['company_id', 'limit']
    """
    seen: set[str] = set()
    unique: list[Parameter] = []
    for param in [*path.parameters, *operation.parameters]:
        if param.internal_name in seen:
            continue
        seen.add(param.internal_name)
        unique.append(param)
    return unique


def _by_location(path: Path, operation: Operation, location: ParameterLocation) -> list[Parameter]:
    return [p for p in function_parameters(path, operation) if p.location == location]


def path_parameters(path: Path, operation: Operation) -> list[Parameter]:
    """Function parameters with ``in: path``."""
    return _by_location(path, operation, ParameterLocation.PATH)


def query_parameters(path: Path, operation: Operation) -> list[Parameter]:
    """Function parameters with ``in: query``."""
    return _by_location(path, operation, ParameterLocation.QUERY)


def header_parameters(path: Path, operation: Operation) -> list[Parameter]:
    """Function parameters with ``in: header``."""
    return _by_location(path, operation, ParameterLocation.HEADER)


def required_parameters(path: Path, operation: Operation) -> list[Parameter]:
    """Function parameters marked ``required: true``."""
    return [p for p in function_parameters(path, operation) if p.required]


def optional_parameters(path: Path, operation: Operation) -> list[Parameter]:
    """Function parameters not marked required."""
    return [p for p in function_parameters(path, operation) if not p.required]


def has_request_body(operation: Operation) -> bool:
    return operation.request_body is not None


def request_body_properties(operation: Operation) -> list[dict[str, Any]]:
    """Describe the top-level properties of an object request body.

    Uses the first media type of the request body.  Required properties
    come first; otherwise document order is kept.

    Returns:
        One dict per property with ``name``, ``type``, ``description`` and
        ``required`` keys.  Empty when the body is absent or not an object.
    """
    body = operation.request_body or {}
    content = body.get("content")
    if not isinstance(content, dict) or not content:
        return []
    entry = next(iter(content.values()))
    schema = entry.get("schema") if isinstance(entry, dict) else None
    if not isinstance(schema, dict) or schema.get("type") != "object":
        return []
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return []

    required = set(schema.get("required") or [])
    fields = [
        {
            "name": name,
            "type": prop.get("type", "unknown") if isinstance(prop, dict) else "unknown",
            "description": prop.get("description") if isinstance(prop, dict) else None,
            "required": name in required,
        }
        for name, prop in properties.items()
    ]
    return sorted(fields, key=lambda field: not field["required"])


def interpolated_path(path: str, parameters: list[Parameter]) -> str:
    """Rewrite ``{name}`` placeholders to use each path parameter's internal name.

    Example::

        >>> interpolated_path("/assets/{assetId}", [asset_id_param])
        '/assets/{asset_id}'
    """
    result = path
    for param in parameters:
        if param.location == ParameterLocation.PATH:
            result = result.replace(f"{{{param.name}}}", f"{{{param.internal_name}}}")
    return result


def function_name(path: Path, operation: Operation) -> str:
    """Name of the generated function: ``<method>_<friendly path>``.

    Example::

        >>> function_name(Path(path="/users/{id}"), Operation(method="get"))
        'get_users_id'
    """
    return f"{operation.method.value}_{friendly_path(path.path)}"


def group_operations_by_tag(
    paths: list[Path],
) -> dict[str, list[tuple[Path, Operation]]]:
    """Group operations by tag for per-tag client modules.

    Each operation is listed once, under its first tag.  Untagged
    operations are grouped under their path template.
    """
    groups: defaultdict[str, list[tuple[Path, Operation]]] = defaultdict(list)
    for path in paths:
        for operation in path.operations:
            tag = operation.tags[0] if operation.tags else path.path
            groups[tag].append((path, operation))
    return dict(groups)


def json_response_schema(operation: Operation, status_code: Optional[str] = None) -> Optional[Any]:
    """Return the JSON schema of a success response.

    Args:
        operation: The operation to inspect.
        status_code: A specific status; by default the first 2xx response
            with a JSON body is used.
    """
    for code, response in operation.responses.items():
        if status_code is not None and code != status_code:
            continue
        if status_code is None and not code.startswith("2"):
            continue
        entry = response.content.get(_JSON_MEDIA_TYPE)
        if entry is not None and entry.schema_ is not None:
            return entry.schema_
    return None
