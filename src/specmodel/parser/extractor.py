"""Build the typed specification model from a resolved OpenAPI document.

This module walks a fully ``$ref``-resolved document and builds a
:class:`~specmodel.models.Specification` whose paths, operations,
parameters and responses are frozen entities.

The public entry point is :func:`parse_spec`.  The per-entity builders
(:func:`parse_path`, :func:`parse_operation`, :func:`parse_parameter`,
:func:`parse_response`) are public as well so code generation can build a
single entity from a fragment.

References are **not** resolved here; pass the document through
:func:`~specmodel.parser.resolver.resolve_refs` first.

Operations under a path are emitted in a fixed method order
(``trace, head, options, patch, delete, put, post, get``) regardless of the
order the document lists them in.  Keys that are not one of the eight
OpenAPI methods (``summary``, ``servers``, ``x-*`` extensions, ...) are
ignored.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from specmodel.config import ParserConfig
from specmodel.exceptions import SpecParseError
from specmodel.models import (
    HTTPMethod,
    MediaType,
    Operation,
    Parameter,
    ParameterLocation,
    Path,
    Response,
    Specification,
)
from specmodel.naming import normalize_parameter_name
from specmodel.parser.schema import parse_schema

logger = logging.getLogger(__name__)

METHOD_ORDER: tuple[HTTPMethod, ...] = (
    HTTPMethod.TRACE,
    HTTPMethod.HEAD,
    HTTPMethod.OPTIONS,
    HTTPMethod.PATCH,
    HTTPMethod.DELETE,
    HTTPMethod.PUT,
    HTTPMethod.POST,
    HTTPMethod.GET,
)


def parse_spec(
    document: dict[str, Any], config: Optional[ParserConfig] = None
) -> Specification:
    """Build a :class:`~specmodel.models.Specification` from a resolved document.

    Args:
        document: The output of
            :func:`~specmodel.parser.resolver.resolve_refs`.
        config: Parser options.  Defaults to :class:`ParserConfig` defaults.

    Returns:
        The frozen specification model.

    Raises:
        SpecParseError: If ``paths`` is missing or an entity cannot be built
            from what the document holds.

    Example::

        resolved = resolve_refs(load_document("petstore.yaml"))
        spec = parse_spec(resolved)
        for path in spec.paths:
            for op in path.operations:
                print(op.method.value.upper(), path.path)
    """
    config = config or ParserConfig()
    if not isinstance(document, dict):
        raise SpecParseError(
            f"Document must be a mapping (got {type(document).__name__})"
        )
    paths = document.get("paths")
    if not isinstance(paths, dict):
        raise SpecParseError("Missing 'paths' object. Is this an OpenAPI 3.x document?")

    try:
        spec = Specification(
            version=document.get("openapi"),
            info=document.get("info") or {},
            paths=[
                parse_path(path, item, config.extra_reserved_words)
                for path, item in paths.items()
            ],
            servers=document.get("servers"),
            components=document.get("components"),
            security=document.get("security"),
            tags=document.get("tags"),
            external_docs=document.get("externalDocs"),
        )
    except ValidationError as exc:
        raise SpecParseError(f"Invalid OpenAPI document: {exc}") from exc

    logger.debug(
        "Parsed %d path(s), %d operation(s)",
        len(spec.paths),
        sum(len(p.operations) for p in spec.paths),
    )
    return spec


def parse_path(
    path: str, item: dict[str, Any], extra_reserved: Iterable[str] = ()
) -> Path:
    """Build a :class:`~specmodel.models.Path` from a *Path Item Object*.

    The method name is injected into each operation mapping before it is
    parsed, since the operation object itself does not carry it.
    """
    if not isinstance(item, dict):
        raise SpecParseError(f"Path item for '{path}' must be a mapping")

    operations: list[Operation] = []
    for method in METHOD_ORDER:
        raw = item.get(method.value)
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise SpecParseError(
                f"Operation {method.value.upper()} {path} must be a mapping"
            )
        operations.append(parse_operation({**raw, "method": method.value}, extra_reserved))

    return Path(
        path=path,
        operations=operations,
        parameters=_parse_parameters(item.get("parameters"), extra_reserved),
    )


def parse_operation(
    operation: dict[str, Any], extra_reserved: Iterable[str] = ()
) -> Operation:
    """Build an :class:`~specmodel.models.Operation`.

    *operation* must carry a ``method`` key (see :func:`parse_path`).
    Parameter order is preserved from the document.
    """
    method = operation.get("method")
    try:
        http_method = HTTPMethod(method)
    except ValueError as exc:
        raise SpecParseError(f"Unknown HTTP method: {method!r}") from exc

    responses: dict[str, Response] = {}
    for status_code, response in (operation.get("responses") or {}).items():
        if not isinstance(response, dict):
            logger.warning(
                "Skipping response %s of operation %s: not a mapping",
                status_code,
                operation.get("operationId"),
            )
            continue
        responses[str(status_code)] = parse_response(response)

    request_body = operation.get("requestBody")

    return Operation(
        id=operation.get("operationId"),
        method=http_method,
        summary=operation.get("summary"),
        description=operation.get("description"),
        tags=operation.get("tags") or [],
        parameters=_parse_parameters(operation.get("parameters"), extra_reserved),
        responses=responses,
        request_body=request_body if isinstance(request_body, dict) else None,
        security=operation.get("security"),
        deprecated=bool(operation.get("deprecated", False)),
    )


def _parse_parameters(
    params: Optional[list[Any]], extra_reserved: Iterable[str]
) -> list[Parameter]:
    parameters: list[Parameter] = []
    for param in params or []:
        parsed = parse_parameter(param, extra_reserved)
        if parsed is not None:
            parameters.append(parsed)
    return parameters


def parse_parameter(
    parameter: dict[str, Any], extra_reserved: Iterable[str] = ()
) -> Optional[Parameter]:
    """Build a :class:`~specmodel.models.Parameter` from a *Parameter Object*.

    Returns ``None`` (and logs a warning) for parameters that are not
    mappings or whose ``in`` is not one of path/query/header/cookie.  A
    parameter left unresolved because it sits on a reference cycle is
    skipped the same way.

    Raises:
        SpecParseError: If the parameter has no ``name``.
    """
    if not isinstance(parameter, dict) or "$ref" in parameter:
        logger.warning("Skipping unusable parameter entry: %r", parameter)
        return None

    name = parameter.get("name")
    if not isinstance(name, str):
        raise SpecParseError(f"Parameter is missing a 'name': {parameter!r}")

    try:
        location = ParameterLocation(parameter.get("in"))
    except ValueError:
        logger.warning(
            "Skipping parameter '%s': unrecognised location %r", name, parameter.get("in")
        )
        return None

    return Parameter(
        name=name,
        internal_name=normalize_parameter_name(name, extra_reserved),
        location=location,
        description=parameter.get("description"),
        schema_=parameter.get("schema"),
        content=parameter.get("content"),
        style=parameter.get("style"),
        required=bool(parameter.get("required", False)),
        deprecated=bool(parameter.get("deprecated", False)),
        explode=bool(parameter.get("explode", False)),
        allow_reserved=bool(parameter.get("allowReserved", False)),
        allow_empty_value=bool(parameter.get("allowEmptyValue", False)),
        examples=_examples_list(parameter.get("examples")),
    )


def _examples_list(examples: Any) -> list[Any]:
    if examples is None:
        return []
    if isinstance(examples, dict):
        return list(examples.values())
    if isinstance(examples, list):
        return list(examples)
    return [examples]


def parse_response(response: dict[str, Any]) -> Response:
    """Build a :class:`~specmodel.models.Response` from a *Response Object*.

    Every media type entry becomes a :class:`~specmodel.models.MediaType`
    with its schema parsed.
    """
    content: dict[str, MediaType] = {}
    for media_type, entry in (response.get("content") or {}).items():
        if not isinstance(entry, dict):
            continue
        content[media_type] = MediaType(
            schema_=parse_schema(entry.get("schema")),
            example=entry.get("example"),
            examples=entry.get("examples") or {},
        )

    return Response(
        description=response.get("description"),
        headers=response.get("headers") or {},
        content=content,
        links=response.get("links") or {},
    )


def filter_paths(spec: Specification, pattern: Union[str, re.Pattern[str]]) -> Specification:
    """Return a copy of *spec* keeping only paths whose template matches.

    Args:
        spec: The specification to filter.
        pattern: Regular expression searched in each path template.

    Returns:
        A new :class:`~specmodel.models.Specification`; *spec* is unchanged.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    kept = [path for path in spec.paths if regex.search(path.path)]
    return spec.model_copy(update={"paths": kept})
