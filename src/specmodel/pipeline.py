"""One-call pipeline from a document source to the typed model."""

from __future__ import annotations

import logging
from typing import Optional

from specmodel.config import Settings, load_settings
from specmodel.models import Specification
from specmodel.parser.extractor import parse_spec
from specmodel.parser.loader import load_document, validate_openapi_version
from specmodel.parser.resolver import resolve_refs

logger = logging.getLogger(__name__)


def load(source: str, settings: Optional[Settings] = None) -> Specification:
    """Load, validate, resolve and parse an OpenAPI document.

    Args:
        source: An ``http(s)://`` URL, a file path, or ``-`` for stdin.
        settings: Resolver and parser settings.  When omitted they are read
            with :func:`~specmodel.config.load_settings`.

    Returns:
        The frozen :class:`~specmodel.models.Specification`.

    Raises:
        SpecLoadError: If the document cannot be read or is not OpenAPI 3.x.
        SpecParseError: If resolution or model building fails.
        ConfigError: If the settings sources are invalid.
    """
    settings = settings or load_settings()
    document = load_document(source)
    version = validate_openapi_version(document)
    logger.info("Loaded OpenAPI %s document from %s", version, source)
    return parse_spec(resolve_refs(document, settings.resolver), settings.parser)
