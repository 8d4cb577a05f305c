"""Shared test fixtures for specmodel.

Provides the petstore document in its raw, resolved and parsed forms, and an
isolated working directory with the settings environment cleared.  These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specmodel.models import Specification
from specmodel.parser.extractor import parse_spec
from specmodel.parser.resolver import resolve_refs


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Raw document fixtures (plain dicts loaded from JSON files)
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_30_raw() -> dict[str, Any]:
    """Load raw petstore 3.0 document dict."""
    with open(FIXTURES_DIR / "petstore_3.0.json") as f:
        return json.load(f)


@pytest.fixture
def petstore_resolved(petstore_30_raw: dict[str, Any]) -> dict[str, Any]:
    """Petstore document with every ``$ref`` resolved."""
    return resolve_refs(petstore_30_raw)


# ---------------------------------------------------------------------------
# Parsed model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_spec(petstore_resolved: dict[str, Any]) -> Specification:
    """Fully parsed petstore :class:`Specification`."""
    return parse_spec(petstore_resolved)


# ---------------------------------------------------------------------------
# Settings isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory with no SPECMODEL_* variables set.

    Returns the directory, which is also the current working directory.
    """
    for var in (
        "SPECMODEL_CACHE_MAX_MAPPING_SIZE",
        "SPECMODEL_CACHE_MAX_SEQUENCE_SIZE",
        "SPECMODEL_MAX_DEPTH",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
