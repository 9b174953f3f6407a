"""
Pydantic models for API contracts.

Contains request/response models for the mdmapper API endpoints.
"""

from pydantic import BaseModel, Field

from models import ProjectNode


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")


class PlanRequest(BaseModel):
    """Request model for planning a project's documents and anchors."""

    project: ProjectNode
    flavor: str | None = Field(default=None, description="generic or strict-header-slug; defaults to MD_FLAVOUR")
    display_readme: bool | None = Field(default=None, description="Overrides README=none from configuration")


class OutputDirectoryRequest(BaseModel):
    path: str = Field(..., min_length=1, description="Directory on the server to inspect")


class OutputDirectoryResponse(BaseModel):
    path: str
    is_output_directory: bool
