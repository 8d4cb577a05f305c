"""Resolve ``$ref`` JSON Reference pointers in OpenAPI documents.

OpenAPI documents commonly use ``$ref`` pointers (e.g.
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition.  This module
walks the whole document and returns a new tree in which every ``$ref`` has
been replaced with the content it points to.

Only **internal** references (those starting with ``#/``) are supported.
External file or URL references raise
:class:`~specmodel.exceptions.UnsupportedReferenceFormatError`.

Each call to :func:`resolve_refs` owns two pieces of state, both created at
the start of the call and dropped when it returns:

* a *visiting* set of pointers currently being expanded on the active
  branch.  Meeting one of those again means a cycle; a copy of that
  ``$ref`` dict becomes the cycle marker.
* a *cache* of pointer -> expanded result, so a pointer used many times is
  expanded once.  Very large results are not cached (see
  :class:`~specmodel.config.ResolverConfig`).

The walk follows document (insertion) order, so results are deterministic.
For a cycle of any length, every marker left behind names the pointer of
that cycle that was entered first.

The single public function is :func:`resolve_refs`.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional, Union

from specmodel.config import ResolverConfig
from specmodel.exceptions import ResolutionDepthError, UnsupportedReferenceFormatError
from specmodel.models import NodeKind
from specmodel.parser.pointer import REF_KEY, classify_node, resolve_pointer

logger = logging.getLogger(__name__)


def resolve_refs(document: Any, config: Optional[ResolverConfig] = None) -> Any:
    """Resolve all ``$ref`` pointers in *document*.

    Returns a new tree in which every ``{"$ref": "#/..."}`` dict is replaced
    with the (itself resolved) object it points to.  The input is never
    modified and no container of the input appears in the output.

    Circular references are not an error: the ``$ref`` dict that closes a
    cycle is kept (as a copy).

    A pointer used in several places is expanded once, and the same object
    is placed at every use.  Mutating one branch of the result therefore
    changes every other branch that came from the same pointer; copy the
    branch first if it must be changed independently.

    Args:
        document: The decoded OpenAPI document.
        config: Cache and depth limits.  Defaults to
            :class:`~specmodel.config.ResolverConfig` defaults.

    Returns:
        A new tree of the same shape with references replaced.

    Raises:
        ReferenceNotFoundError: If a pointer names a missing location.
        UnsupportedReferenceFormatError: If a ``$ref`` is not ``#/...``.
        ResolutionDepthError: If nesting exceeds ``config.max_depth``.

    Example::

        raw = load_document("petstore.yaml")
        resolved = resolve_refs(raw)
        # resolved["paths"]["/pets"]["get"]["responses"]["200"]["content"]
        # now contains the inlined schema instead of a $ref pointer.
    """
    context = _ResolutionContext(document, config or ResolverConfig())
    resolved = context.resolve(document)
    logger.debug(
        "Resolved document: %d pointer(s) cached, %d cycle marker(s) kept",
        len(context.cache),
        context.cycles,
    )
    return resolved


class _Visit(NamedTuple):
    """Resolve ``node`` and write the result to ``slot[key]``."""

    node: Any
    visiting: frozenset[str]
    depth: int
    pointer: Optional[str]  # innermost $ref being expanded
    slot: Union[dict[Any, Any], list[Any]]
    key: Any


class _Store(NamedTuple):
    """Cache the finished expansion of ``ref`` and write it to ``slot[key]``."""

    ref: str
    holder: list[Any]
    slot: Union[dict[Any, Any], list[Any]]
    key: Any


class _ResolutionContext:
    """State for one :func:`resolve_refs` call.

    The walk uses an explicit stack, so document depth is limited by
    ``config.max_depth`` only, never by the interpreter's recursion limit.
    Children are pushed in reverse so they are popped in document order;
    a :class:`_Store` sits below the target it waits for and runs once that
    whole subtree is done.

    Args:
        root: The document every pointer is resolved against.
        config: Limits for this call.
    """

    def __init__(self, root: Any, config: ResolverConfig) -> None:
        self.root = root
        self.config = config
        self.cache: dict[str, Any] = {}
        self.cycles = 0

    def resolve(self, node: Any) -> Any:
        """Resolve *node* and everything below it."""
        result: list[Any] = [None]
        stack: list[Union[_Visit, _Store]] = [
            _Visit(node, frozenset(), 0, None, result, 0)
        ]
        while stack:
            task = stack.pop()
            if isinstance(task, _Store):
                value = task.holder[0]
                if self._should_cache(value):
                    self.cache[task.ref] = value
                else:
                    logger.debug("Not caching %s: result exceeds cache size limits", task.ref)
                task.slot[task.key] = value
            else:
                self._visit(task, stack)
        return result[0]

    def _visit(self, task: _Visit, stack: list[Union[_Visit, _Store]]) -> None:
        if task.depth > self.config.max_depth:
            raise ResolutionDepthError(
                f"Document nesting exceeds the maximum depth of {self.config.max_depth}",
                depth=task.depth,
                pointer=task.pointer,
            )

        node = task.node
        kind = classify_node(node)
        if kind is NodeKind.SCALAR:
            task.slot[task.key] = node
        elif kind is NodeKind.SEQUENCE:
            items: list[Any] = [None] * len(node)
            task.slot[task.key] = items
            self._push_children(stack, task, items, list(enumerate(node)))
        elif kind is NodeKind.MAPPING:
            # Plain mappings are rebuilt but never cached; only $ref
            # expansions have a meaningful cache key.
            mapping = dict.fromkeys(node)
            task.slot[task.key] = mapping
            self._push_children(stack, task, mapping, list(node.items()))
        else:
            self._expand(task, stack)

    @staticmethod
    def _push_children(
        stack: list[Union[_Visit, _Store]],
        parent: _Visit,
        container: Union[dict[Any, Any], list[Any]],
        entries: list[tuple[Any, Any]],
    ) -> None:
        for key, value in reversed(entries):
            stack.append(
                _Visit(value, parent.visiting, parent.depth + 1, parent.pointer, container, key)
            )

    def _expand(self, task: _Visit, stack: list[Union[_Visit, _Store]]) -> None:
        node = task.node
        ref = node[REF_KEY]
        if not isinstance(ref, str):
            raise UnsupportedReferenceFormatError(
                f"Unsupported reference format: {ref!r}. $ref must be a string.",
                pointer=repr(ref),
            )

        if ref in task.visiting:
            self.cycles += 1
            logger.debug("Circular reference at %s, keeping $ref marker", ref)
            task.slot[task.key] = dict(node)
            return

        if ref in self.cache:
            task.slot[task.key] = self.cache[ref]
            return

        target = resolve_pointer(ref, self.root)
        holder: list[Any] = [None]
        stack.append(_Store(ref, holder, task.slot, task.key))
        stack.append(_Visit(target, task.visiting | {ref}, task.depth + 1, ref, holder, 0))

    def _should_cache(self, value: Any) -> bool:
        if isinstance(value, dict):
            return len(value) <= self.config.cache_max_mapping_size
        if isinstance(value, list):
            return len(value) <= self.config.cache_max_sequence_size
        return True
