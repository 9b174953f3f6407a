"""Anchor resolver: in-page urls for reflections folded into another document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config import Flavor
from reflections import Reflection, ReflectionKind
from slugs import get_anchor_ref, get_url

if TYPE_CHECKING:
    from planner import PlanOptions

logger = logging.getLogger(__name__)

MODULE_SCOPE_KINDS = frozenset({ReflectionKind.GLOBAL, ReflectionKind.EXTERNAL_MODULE})


def get_anchor_reference(reflection: Reflection, base_slug: str, flavor: Flavor) -> str:
    """Return the fragment (without ``#``) that links to *reflection*.

    Module and Enum are handled as separate cases: a module is always
    ``module-<name>``, whatever scope it is declared in.
    """
    ref = get_anchor_ref(reflection.name, flavor)
    kind = reflection.kind

    if kind is ReflectionKind.EXTERNAL_MODULE:
        # Trailing separator is part of the published anchor format.
        return f"external-module-{ref}-"
    if kind is ReflectionKind.CLASS:
        return f"class-{ref}"
    if kind is ReflectionKind.INTERFACE:
        return f"interface-{ref}"
    if kind is ReflectionKind.MODULE:
        return f"module-{ref}"
    if kind is ReflectionKind.ENUM:
        parent = reflection.parent
        if parent is None or parent.kind in MODULE_SCOPE_KINDS:
            return f"module-{ref}"
        return f"enumeration-{ref}"

    if flavor is Flavor.STRICT_HEADER_SLUG:
        prefix = ""
        if kind is ReflectionKind.OBJECT_LITERAL:
            prefix += "object-literal-"
        for flag in reflection.flags:
            prefix += f"{flag.value}-"
        return f"markdown-header-{get_anchor_ref(prefix, flavor)}{ref}"
    return base_slug


def apply_anchor_url(
    reflection: Reflection,
    container: Reflection,
    options: PlanOptions,
    seen: dict[str, Reflection] | None = None,
) -> None:
    """Stamp *reflection* and its declaration subtree with anchors into *container*.

    Args:
        reflection: Reflection folded into another document
        container: Nearest reflection owning a real document (supplies the path)
        options: Planning options (flavor)
        seen: Urls already handed out in this document, used to report collisions
    """
    if seen is None:
        seen = {}

    if not reflection.has_assigned_url():
        anchor = get_url(reflection, container, ".")
        if reflection.is_static:
            anchor = "static-" + anchor

        anchor_ref = get_anchor_reference(reflection, anchor, options.flavor)
        reflection.url = (container.url if container.url is not None else "") + "#" + anchor_ref
        reflection.anchor = anchor
        reflection.has_own_document = False
        logger.debug("Anchored %s -> %s", reflection.full_name(), reflection.url)

        other = seen.get(reflection.url)
        if other is not None and other is not reflection:
            logger.warning(
                "Anchor collision in %s: %r and %r both resolve to %s",
                container.url,
                other.full_name(),
                reflection.full_name(),
                reflection.url,
            )
        else:
            seen[reflection.url] = reflection

    for child in reflection.traverse():
        apply_anchor_url(child, container, options, seen)


__all__ = ["apply_anchor_url", "get_anchor_reference"]
