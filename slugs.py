"""Slug normalisation for document paths and in-page anchors.

Single source of truth for turning reflection names into filesystem-safe
path segments and flavor-specific anchor tokens. Every function here is pure.
"""

from __future__ import annotations

import re

from markdown.extensions.toc import slugify

from config import Flavor
from reflections import Reflection

_ALIAS_UNSAFE = re.compile(r"[^a-z0-9]", re.IGNORECASE)
_GENERIC_SEPARATORS = re.compile(r"[_/. ]")


def get_alias(name: str) -> str:
    """Return the filesystem-safe form of a single reflection name.

    Every character outside ``[A-Za-z0-9]`` becomes an underscore and the
    result is lower-cased, so quoted external module names keep their quotes
    as underscores.

    Examples:
        >>> get_alias('"lib/utils"')
        '_lib_utils_'
        >>> get_alias("MyClass")
        'myclass'
    """
    alias = _ALIAS_UNSAFE.sub("_", name).lower()
    return alias or "reflection"


def get_url(reflection: Reflection, relative: Reflection | None = None, separator: str = ".") -> str:
    """Join aliases from the outermost ancestor down to *reflection*.

    Walking stops at *relative* (the nearest reflection with its own document)
    and at the project root, which never contributes a segment.

    Args:
        reflection: Reflection to build the slug for
        relative: Ancestor the slug is relative to, if any
        separator: String placed between segments

    Returns:
        Slug such as ``_core_.httpclient.send``
    """
    url = get_alias(reflection.name)
    parent = reflection.parent
    if parent is not None and parent is not relative and not parent.is_project:
        url = get_url(parent, relative, separator) + separator + url
    return url


def get_anchor_ref(text: str, flavor: Flavor) -> str:
    """Normalise a display string into an anchor token for *flavor*.

    Generic flavor keeps the legacy rules: ``_``, ``/``, ``.`` and spaces
    become ``-``, double quotes are dropped, everything is lower-cased.
    The strict header-slug flavor uses the markdown ``toc`` header slug,
    which is what hosts with that convention generate for headings.
    """
    if flavor is Flavor.STRICT_HEADER_SLUG:
        # ASCII-folding drops non-Latin scripts entirely, so such names slug to "".
        return slugify(text, "-")
    return _GENERIC_SEPARATORS.sub("-", text).replace('"', "").lower()


__all__ = ["get_alias", "get_url", "get_anchor_ref"]
