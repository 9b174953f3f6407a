"""
Planning API routes.

Provides POST endpoints to plan a project's documents and to test a directory
for previous output.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException

from config import Config
from exceptions import ConfigurationError
from models import PlanResult
from planner import PlanOptions
from theme import MarkdownTheme

from ..deps import get_settings
from ..models import OutputDirectoryRequest, OutputDirectoryResponse, PlanRequest

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/plan", response_model=PlanResult, summary="Plan documents and anchors")
def plan_endpoint(req: PlanRequest, cfg: Config = Depends(get_settings)) -> PlanResult:
    """
    Map the posted project to markdown documents and in-page anchors.

    Args:
        req: Project tree plus optional flavor / readme overrides
        cfg: Configuration (injected)

    Returns:
        Documents in render order and the url of every reflection

    Raises:
        HTTPException: 400 for an unknown flavor or colliding output paths
    """
    try:
        options = PlanOptions.from_config(cfg, flavor=req.flavor, display_readme=req.display_readme)
        project = req.project.to_project()
        urls = MarkdownTheme(options).get_urls(project)
    except ConfigurationError as e:
        logger.warning("Planning rejected: %s", e.message)
        raise HTTPException(status_code=400, detail=e.message) from e

    return PlanResult.from_plan(project, urls)


@router.post("/output-directory", response_model=OutputDirectoryResponse, summary="Test for previous output")
def output_directory_endpoint(req: OutputDirectoryRequest) -> OutputDirectoryResponse:
    """Report whether a server-side directory looks like previous generated output."""
    path = Path(req.path)
    if not path.is_dir():
        raise HTTPException(status_code=404, detail=f"Directory not found: {req.path}")
    return OutputDirectoryResponse(path=req.path, is_output_directory=MarkdownTheme().is_output_directory(path))
