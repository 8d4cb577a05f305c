"""Load OpenAPI documents from a URL, local file, or stdin.

This module is the only place that performs I/O.  It fetches a raw document,
decodes JSON or YAML into plain Python values, and checks that it declares a
supported OpenAPI version (3.x).  Resolution and parsing never touch the
network or the filesystem.

The two public functions are:

* :func:`load_document` -- Load and decode a document from any source.
* :func:`validate_openapi_version` -- Return the ``openapi`` version string,
  rejecting Swagger 2.x and non-3.x versions.

The decoded dict is then passed to
:func:`~specmodel.parser.resolver.resolve_refs`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specmodel.exceptions import SpecLoadError

logger = logging.getLogger(__name__)

_FETCH_TIMEOUT = 30.0
_URL_SCHEMES = ("http://", "https://")

# File suffix -> decoder hint; anything else tries JSON, then YAML.
_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_document(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from URL, file path, or stdin (``-``).

    Args:
        source: An ``http(s)://`` URL, a file path, or ``-`` for stdin.

    Returns:
        The decoded document.

    Raises:
        SpecLoadError: If the source cannot be read or decoded.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(_URL_SCHEMES):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecLoadError("No input received from stdin")

    return _parse_content(content)


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document over HTTP(S), using the content type as a format hint."""
    logger.debug("Fetching document from %s", url)
    try:
        response = httpx.get(url, timeout=_FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecLoadError(f"Failed to fetch document from {url}: {exc}") from exc

    return _parse_content(
        response.text, hint=_content_type_hint(response.headers.get("content-type", ""))
    )


def _content_type_hint(content_type: str) -> str:
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type.endswith("json"):
        return "json"
    if "yaml" in media_type or "yml" in media_type:
        return "yaml"
    return ""


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a local document; ``.json`` / ``.yaml`` / ``.yml`` pick the decoder."""
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecLoadError(f"Document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecLoadError(f"Failed to read {path}: {exc}") from exc

    if not content.strip():
        raise SpecLoadError(f"Document is empty: {path}")

    return _parse_content(content, hint=_SUFFIX_HINTS.get(file_path.suffix.lower(), ""))


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Decode *content* as JSON, falling back to YAML.

    JSON is tried first unless the hint says YAML: every JSON document is
    also YAML, but the JSON decoder is stricter and faster.

    Raises:
        SpecLoadError: If neither decoder accepts the content, or the result
            is not a mapping.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecLoadError(f"Invalid JSON: {exc}") from exc

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        msg = "Failed to parse document as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise SpecLoadError(msg) from exc


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        got = type(result).__name__ if result is not None else "empty document"
        raise SpecLoadError(f"Document must be a JSON/YAML object (got {got})")
    return result


def validate_openapi_version(document: dict[str, Any]) -> str:
    """Validate and return the OpenAPI version string.

    Args:
        document: The decoded document.

    Returns:
        The version string (e.g. ``'3.0.3'``).

    Raises:
        SpecLoadError: For Swagger 2.x, a missing ``openapi`` field, or a
            version outside 3.x.
    """
    if "swagger" in document:
        raise SpecLoadError(
            f"Swagger {document['swagger']} is not supported. "
            "Only OpenAPI 3.x documents are supported."
        )

    version = document.get("openapi")
    if version is None:
        raise SpecLoadError("Missing 'openapi' field. Is this an OpenAPI 3.x document?")

    version_str = str(version)
    if not version_str.startswith("3."):
        raise SpecLoadError(
            f"Unsupported OpenAPI version: {version_str}. Only 3.x is supported."
        )
    if version_str.split(".")[:2] != ["3", "0"]:
        logger.warning("OpenAPI %s is newer than 3.0; parsing it as 3.0", version_str)
    return version_str
