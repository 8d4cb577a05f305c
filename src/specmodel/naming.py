"""Identifier and type-name normalisation for generated code.

Two families of names are produced here:

* **Parameter internal names** -- :func:`normalize_parameter_name` turns a
  wire name such as ``"filters[id][]"`` or ``"@odata.id"`` into the argument
  name used by a generated function.
* **Type names** -- :func:`type_name` and :func:`path_type_name` produce the
  PascalCase names given to synthesised inline schemas.

The parameter pipeline is order-sensitive; each stage works on the previous
stage's output:

1. ``@`` -> ``at_``, ``$`` -> ``dollar_``, ``.`` -> ``_``
2. snake_case (camelCase, PascalCase and acronym aware)
3. dashes removed outright, so ``user-id`` becomes ``userid``
4. ``[`` -> ``_`` and ``]`` dropped
5. reserved words get a trailing underscore

Stage 3 fuses dash-separated words without a separator.  Generated clients
already ship with names built that way, so it stays.
"""

from __future__ import annotations

import keyword
import re
from typing import Iterable

# Keywords of the generated client language, on top of Python's own.
_CLIENT_RESERVED_WORDS = frozenset(
    {
        "__CALLER__",
        "__DIR__",
        "__ENV__",
        "__FILE__",
        "__MODULE__",
        "__struct__",
        "after",
        "and",
        "catch",
        "do",
        "else",
        "end",
        "false",
        "fn",
        "in",
        "nil",
        "not",
        "or",
        "rescue",
        "true",
        "when",
    }
)

RESERVED_WORDS: frozenset[str] = _CLIENT_RESERVED_WORDS | frozenset(keyword.kwlist)

_SYMBOL_REPLACEMENTS = (("@", "at_"), ("$", "dollar_"), (".", "_"))

_WORD_SPLIT_RE = re.compile(r"[^a-zA-Z0-9]+")
_PATH_WORD_SPLIT_RE = re.compile(r"[-_\s]+")


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def snake_case(value: str) -> str:
    """Convert a camelCase / PascalCase string to snake_case.

    An underscore is inserted before an uppercase letter in two cases:

    * it starts a new word, meaning the next character is a lowercase
      letter or punctuation other than ``.`` and ``_`` (``XMLParser`` ->
      ``xml_parser``).  This applies even after an existing underscore, so
      ``foo_Bar`` becomes ``foo__bar``.
    * it follows a character that is neither uppercase nor ``_``
      (``petId`` -> ``pet_id``, ``foo_BAR`` -> ``foo_bar``).

    Dashes and other punctuation are left untouched.

    Example::

        >>> snake_case("PascalCase")
        'pascal_case'
        >>> snake_case("Mixed-Case")
        'mixed-_case'
    """
    if not value:
        return value

    out = [value[0].lower()]
    prev = value[0]
    for index in range(1, len(value)):
        ch = value[index]
        nxt = value[index + 1] if index + 1 < len(value) else ""
        starts_word = (
            nxt != ""
            and not _is_upper(nxt)
            and not _is_digit(nxt)
            and nxt not in "._"
        )
        if _is_upper(ch) and (starts_word or (not _is_upper(prev) and prev != "_")):
            out.append("_")
        out.append(ch.lower() if _is_upper(ch) else ch)
        prev = ch
    return "".join(out)


def escape_reserved_word(name: str, extra: Iterable[str] = ()) -> str:
    """Append ``_`` to *name* if it is a reserved word.

    Example::

        >>> escape_reserved_word("do")
        'do_'
        >>> escape_reserved_word("id")
        'id'
    """
    if name in RESERVED_WORDS or name in set(extra):
        return f"{name}_"
    return name


def normalize_parameter_name(name: str, extra_reserved: Iterable[str] = ()) -> str:
    """Normalise an OpenAPI parameter name into a generated-code identifier.

    Args:
        name: The parameter's ``name`` as it appears on the wire.
        extra_reserved: Additional names that must be escaped.

    Returns:
        The internal name.

    Example::

        >>> normalize_parameter_name("user-id")
        'userid'
        >>> normalize_parameter_name("$top")
        'dollar_top'
        >>> normalize_parameter_name("filters[trade_id][]")
        'filters_trade_id_'
    """
    result = name
    for symbol, replacement in _SYMBOL_REPLACEMENTS:
        result = result.replace(symbol, replacement)
    result = snake_case(result)
    result = result.replace("-", "")
    result = result.replace("[", "_").replace("]", "")
    return escape_reserved_word(result, extra_reserved)


def type_name(value: str) -> str:
    """Convert an identifier such as an operation id into PascalCase.

    Words are split on any non-alphanumeric character; each word keeps its
    inner casing and gets an uppercase first letter.

    Example::

        >>> type_name("listUsers")
        'ListUsers'
        >>> type_name("list_users")
        'ListUsers'
    """
    words = [word for word in _WORD_SPLIT_RE.split(value) if word]
    return "".join(word[0].upper() + word[1:] for word in words)


def path_type_name(method: str, path: str) -> str:
    """Build a type name from an HTTP method and a path template.

    Braces are stripped, segments are split on ``-`` and ``_``, and every
    word is capitalised.

    Example::

        >>> path_type_name("get", "/users/{id}/posts")
        'GetUsersIdPosts'
        >>> path_type_name("post", "/bim-files/{file_id}")
        'PostBimFilesFileId'
    """
    parts: list[str] = []
    for segment in path.split("/"):
        if not segment:
            continue
        segment = segment.replace("{", "").replace("}", "")
        parts.extend(
            word.capitalize() for word in _PATH_WORD_SPLIT_RE.split(segment) if word
        )
    return method.capitalize() + "".join(parts)


def friendly_path(path: str) -> str:
    """Turn a path template into a snake_case fragment for function names.

    Example::

        >>> friendly_path("/rest/v1.0/bim_files/{id}")
        'rest_v1_0_bim_files_id'
    """
    result = snake_case(path.replace(".", "_"))
    result = re.sub(r"[{}()='\",\[\]$]", "", result)
    result = re.sub(r"[/\-:]", "_", result)
    result = re.sub(r"_+", "_", result)
    return result.strip("_")
