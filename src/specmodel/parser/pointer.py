"""JSON Pointer lookup and node classification.

:func:`classify_node` decides once what a decoded node is, so the resolver
can dispatch on a :class:`~specmodel.models.NodeKind` instead of probing
keys repeatedly.  :func:`resolve_pointer` looks up a single same-document
``$ref`` against the root.

Only fragment pointers (``#/a/b/c``) are supported.  Each segment is
unescaped per RFC 6901 (``~1`` -> ``/`` first, then ``~0`` -> ``~``) and used
as a mapping key, or as a decimal index when the current node is a list.
"""

from __future__ import annotations

from typing import Any

from specmodel.exceptions import ReferenceNotFoundError, UnsupportedReferenceFormatError
from specmodel.models import NodeKind

REF_KEY = "$ref"
_FRAGMENT_PREFIX = "#/"


def classify_node(node: Any) -> NodeKind:
    """Tag a decoded document node.

    Example::

        >>> classify_node({"$ref": "#/components/schemas/Pet"})
        <NodeKind.REFERENCE: 'reference'>
        >>> classify_node([1, 2])
        <NodeKind.SEQUENCE: 'sequence'>
    """
    if isinstance(node, dict):
        if REF_KEY in node:
            return NodeKind.REFERENCE
        return NodeKind.MAPPING
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def unescape_segment(segment: str) -> str:
    """Decode one JSON Pointer segment (``~1`` -> ``/``, ``~0`` -> ``~``)."""
    return segment.replace("~1", "/").replace("~0", "~")


def split_pointer(ref: str) -> list[str]:
    """Split a ``#/...`` pointer into unescaped segments.

    Raises:
        UnsupportedReferenceFormatError: If *ref* is not a fragment pointer.
    """
    if not isinstance(ref, str) or not ref.startswith(_FRAGMENT_PREFIX):
        raise UnsupportedReferenceFormatError(
            f"Unsupported reference format: {ref}. "
            "Only internal references starting with '#/' are supported.",
            pointer=str(ref),
        )
    return [unescape_segment(segment) for segment in ref[len(_FRAGMENT_PREFIX):].split("/")]


def resolve_pointer(ref: str, root: Any) -> Any:
    """Return the node *ref* points to inside *root*.

    The returned node is the raw target; any ``$ref`` inside it is left for
    the caller to expand.

    Args:
        ref: The ``$ref`` string (e.g. ``"#/components/parameters/Query"``).
        root: The document root.

    Returns:
        The value at the pointer.

    Raises:
        UnsupportedReferenceFormatError: If *ref* does not start with ``#/``.
        ReferenceNotFoundError: If any segment is missing, or the pointer
            tries to index into a scalar or uses a non-numeric list index.
    """
    current: Any = root
    for segment in split_pointer(ref):
        if isinstance(current, dict):
            if segment not in current:
                raise ReferenceNotFoundError(f"Reference not found: {ref}", pointer=ref)
            current = current[segment]
        elif isinstance(current, list):
            if not segment.isdigit() or int(segment) >= len(current):
                raise ReferenceNotFoundError(f"Reference not found: {ref}", pointer=ref)
            current = current[int(segment)]
        else:
            raise ReferenceNotFoundError(f"Reference not found: {ref}", pointer=ref)
    return current
