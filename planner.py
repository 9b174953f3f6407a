"""URL planner: decides which reflections get their own markdown document.

Walks the reflection tree top-down. Reflections whose kind has a grouping rule
become documents at ``<directory>/<slug>.md``; everything else is handed to
the anchor resolver and folded into the nearest document above it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from anchors import apply_anchor_url
from config import Flavor, parse_flavor
from exceptions import ConfigurationError
from reflections import (
    DEFAULT_MAPPINGS,
    ProjectReflection,
    Reflection,
    TemplateMapping,
    UrlMapping,
    get_mapping,
)
from slugs import get_url

if TYPE_CHECKING:
    from config import Config

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSION = ".md"
INDEX_FILENAME = "README.md"
INDEX_TEMPLATE = "reflection.hbs"


@dataclass(frozen=True)
class PlanOptions:
    """Read-only settings for one planning run, passed explicitly to every call."""

    flavor: Flavor = Flavor.GENERIC
    project_name: str | None = None
    mappings: tuple[TemplateMapping, ...] = DEFAULT_MAPPINGS
    index_template: str = INDEX_TEMPLATE
    display_readme: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "flavor", parse_flavor(self.flavor))
        object.__setattr__(self, "mappings", tuple(self.mappings))

    @classmethod
    def from_config(cls, cfg: Config, **overrides) -> PlanOptions:
        values = {
            "flavor": cfg.MD_FLAVOUR,
            "project_name": cfg.PROJECT_NAME,
            "index_template": cfg.INDEX_TEMPLATE,
            "display_readme": cfg.display_readme,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_project_name(self, name: str) -> PlanOptions:
        return replace(self, project_name=self.project_name or name)


@dataclass
class _PlanState:
    options: PlanOptions
    index: Reflection
    urls: list[UrlMapping] = field(default_factory=list)
    anchors: dict[str, Reflection] = field(default_factory=dict)
    documents: dict[str, Reflection] = field(default_factory=dict)


def _container_for(reflection: Reflection, index: Reflection) -> Reflection:
    # Degenerate input (no documented ancestor) lands on the index document.
    return reflection.nearest_document() or index


def build_urls(reflection: Reflection, state: _PlanState) -> list[UrlMapping]:
    """Build the url for *reflection* and all of its children.

    Args:
        reflection: Reflection the url should be created for
        state: Current planning run

    Returns:
        The run's url list, with any new documents appended
    """
    mapping = get_mapping(reflection, state.options.mappings)

    if mapping is None:
        apply_anchor_url(reflection, _container_for(reflection, state.index), state.options, state.anchors)
        return state.urls

    if not reflection.has_assigned_url():
        url = "/".join([mapping.directory, get_url(reflection) + DOCUMENT_EXTENSION])
        state.urls.append(UrlMapping(url, reflection, mapping.template))
        reflection.url = url
        reflection.has_own_document = True
        logger.debug("Document %s (%s) -> %s", reflection.full_name(), mapping.template, url)
    elif reflection.has_own_document:
        # Planned by an earlier run; its path stays claimed.
        state.documents[reflection.url] = reflection

    for child in reflection.traverse():
        if mapping.is_leaf:
            apply_anchor_url(child, reflection, state.options, state.anchors)
        else:
            build_urls(child, state)

    return state.urls


def check_unique_urls(urls: Sequence[UrlMapping], existing: dict[str, Reflection] | None = None) -> None:
    """Raise ConfigurationError if two documents share an output path.

    *existing* holds documents kept from earlier runs over the same tree.
    """
    owners: dict[str, Reflection] = dict(existing or {})
    for mapping in urls:
        previous = owners.get(mapping.url)
        if previous is not None:
            raise ConfigurationError(
                f"Output path {mapping.url!r} is claimed by both "
                f"{previous.full_name()!r} and {mapping.model.full_name()!r}",
                {"url": mapping.url},
            )
        owners[mapping.url] = mapping.model


def build_index(root_nodes: Sequence[Reflection], options: PlanOptions) -> ProjectReflection:
    """Create a stand-in project model when the caller has none."""
    parents = {id(node.parent): node.parent for node in root_nodes if node.parent is not None}
    if len(parents) == 1:
        only = next(iter(parents.values()))
        if isinstance(only, ProjectReflection):
            return only
    return ProjectReflection(name=options.project_name or "", display_readme=options.display_readme)


def plan(
    root_nodes: Sequence[Reflection],
    options: PlanOptions | None = None,
    project: ProjectReflection | None = None,
) -> list[UrlMapping]:
    """Map the given top-level reflections to the documents that render them.

    The first entry is always the project index (``README.md``). Top-level
    reflections follow in declaration order, each followed by the documents
    planned beneath it.

    Args:
        root_nodes: Top-level reflections, in declaration order
        options: Planning options; defaults to generic flavor and default mappings
        project: Model of the index document; derived from the roots if omitted

    Returns:
        Ordered list of UrlMapping entries

    Raises:
        ConfigurationError: Two documents would share an output path
    """
    options = options or PlanOptions()
    index = project if project is not None else build_index(root_nodes, options)
    index.url = INDEX_FILENAME
    index.has_own_document = True

    state = _PlanState(options=options, index=index)
    state.urls.append(UrlMapping(INDEX_FILENAME, index, options.index_template))

    for node in root_nodes:
        build_urls(node, state)

    check_unique_urls(state.urls, state.documents)
    logger.info(
        "Planned %d documents and %d anchors (%s flavor)",
        len(state.urls),
        len(state.anchors),
        options.flavor.value,
    )
    return state.urls


__all__ = [
    "DOCUMENT_EXTENSION",
    "INDEX_FILENAME",
    "PlanOptions",
    "build_urls",
    "check_unique_urls",
    "plan",
]
