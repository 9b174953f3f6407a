"""Markdown theme: entry point used by the renderer to map a project to files."""

from __future__ import annotations

import logging
from pathlib import Path

from planner import DOCUMENT_EXTENSION, INDEX_FILENAME, PlanOptions, plan
from reflections import ProjectReflection, UrlMapping

logger = logging.getLogger(__name__)


class MarkdownTheme:
    """Maps a project's reflections to markdown documents and anchors."""

    def __init__(self, options: PlanOptions | None = None) -> None:
        self.options = options or PlanOptions()

    def is_output_directory(self, path: str | Path) -> bool:
        """Test whether *path* holds documentation generated by this theme.

        A heuristic for external tooling deciding whether a directory is safe
        to clean: it contains ``README.md``, or exactly one ``.md`` file.

        Args:
            path: Directory to inspect

        Returns:
            True if the directory looks like a previous output directory
        """
        out = Path(path)
        if (out / INDEX_FILENAME).is_file():
            return True
        entries = list(out.iterdir())
        return len(entries) == 1 and entries[0].is_file() and entries[0].suffix == DOCUMENT_EXTENSION

    def get_urls(self, project: ProjectReflection) -> list[UrlMapping]:
        """Map the models of the given project to the desired output files.

        The project itself becomes the index document; it is flagged so the
        renderer shows the readme (unless disabled) and hides breadcrumbs.
        """
        options = self.options.with_project_name(project.name)
        project.display_readme = options.display_readme
        project.hide_breadcrumbs = True
        project.is_index = True

        logger.info("Planning urls for project %r", options.project_name)
        return plan(list(project.traverse()), options, project=project)


__all__ = ["MarkdownTheme"]
