"""OpenAPI document parser -- load, resolve ``$ref`` pointers, and build the model.

This sub-package turns a raw OpenAPI 3.x document (JSON or YAML, local file
or remote URL) into a frozen :class:`~specmodel.models.Specification` that
code generation can consume.

Typical usage::

    from specmodel.parser import load_document, resolve_refs, parse_spec

    raw = load_document("https://petstore3.swagger.io/api/v3/openapi.json")
    validate_openapi_version(raw)
    spec = parse_spec(resolve_refs(raw))

Sub-modules:

* :mod:`~specmodel.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~specmodel.parser.pointer` -- Node classification and JSON Pointer
  lookup.
* :mod:`~specmodel.parser.resolver` -- Recursive ``$ref`` resolution with
  cycle detection and a per-call cache.
* :mod:`~specmodel.parser.extractor` -- Builds paths, operations, parameters
  and responses from the resolved tree.
* :mod:`~specmodel.parser.schema` -- Builds :class:`~specmodel.models.Schema`
  trees.
* :mod:`~specmodel.parser.inline` -- Names inline request/response schemas.
"""

from specmodel.parser.extractor import filter_paths, parse_spec
from specmodel.parser.inline import extract_inline_schemas
from specmodel.parser.loader import load_document, validate_openapi_version
from specmodel.parser.pointer import classify_node, resolve_pointer
from specmodel.parser.resolver import resolve_refs
from specmodel.parser.schema import extract_component_schemas, parse_schema

__all__ = [
    "classify_node",
    "extract_component_schemas",
    "extract_inline_schemas",
    "filter_paths",
    "load_document",
    "parse_schema",
    "parse_spec",
    "resolve_pointer",
    "resolve_refs",
    "validate_openapi_version",
]
