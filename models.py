from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from exceptions import ProjectLoadError
from reflections import ProjectReflection, Reflection, ReflectionFlag, ReflectionKind, UrlMapping


class ReflectionNode(BaseModel):
    """One reflection as handed over by the analyzer."""

    name: str = Field(..., min_length=1, description="Identifier, unique among siblings")
    kind: ReflectionKind = Field(..., description="Reflection kind, e.g. 'class', 'method'")
    flags: list[ReflectionFlag] = Field(default_factory=list, description="Modifier flags in declaration order")
    children: list[ReflectionNode] = Field(default_factory=list, description="Child reflections in declaration order")

    @field_validator("kind")
    @classmethod
    def _reject_project_kind(cls, v: ReflectionKind) -> ReflectionKind:
        if v is ReflectionKind.GLOBAL:
            raise ValueError("'global' is reserved for the project entry point")
        return v

    @field_validator("flags")
    @classmethod
    def _dedupe_flags(cls, v: list[ReflectionFlag]) -> list[ReflectionFlag]:
        seen: set[ReflectionFlag] = set()
        out: list[ReflectionFlag] = []
        for flag in v:
            if flag not in seen:
                seen.add(flag)
                out.append(flag)
        return out

    def to_reflection(self, parent: Reflection | None = None) -> Reflection:
        reflection = Reflection(name=self.name, kind=self.kind, flags=tuple(self.flags))
        if parent is not None:
            parent.add_child(reflection)
        for child in self.children:
            child.to_reflection(reflection)
        return reflection


class ProjectNode(BaseModel):
    """Analyzer entry point: project metadata plus top-level reflections."""

    name: str = Field(..., description="Project display name")
    readme: str | None = Field(default=None, description="Readme markdown shown on the index document")
    children: list[ReflectionNode] = Field(default_factory=list)

    def to_project(self) -> ProjectReflection:
        project = ProjectReflection(name=self.name, readme=self.readme)
        for child in self.children:
            child.to_reflection(project)
        return project


class UrlMappingRecord(BaseModel):
    url: str = Field(..., description="Output path relative to the output directory")
    name: str = Field(..., description="Full name of the document's root reflection")
    kind: ReflectionKind
    template: str

    @classmethod
    def from_mapping(cls, mapping: UrlMapping) -> UrlMappingRecord:
        return cls(
            url=mapping.url,
            name=mapping.model.full_name() or mapping.model.name,
            kind=mapping.model.kind,
            template=mapping.template,
        )


class ReflectionUrlRecord(BaseModel):
    path: str = Field(..., description="Dotted names from the top-level reflection")
    kind: ReflectionKind
    url: str | None = None
    anchor: str | None = None
    has_own_document: bool = False


class PlanResult(BaseModel):
    """Planning output: documents to render, and the url of every reflection."""

    documents: list[UrlMappingRecord] = Field(default_factory=list)
    reflections: list[ReflectionUrlRecord] = Field(default_factory=list)

    @classmethod
    def from_plan(cls, project: Reflection, urls: list[UrlMapping]) -> PlanResult:
        return cls(
            documents=[UrlMappingRecord.from_mapping(m) for m in urls],
            reflections=[
                ReflectionUrlRecord(
                    path=r.full_name(),
                    kind=r.kind,
                    url=r.url,
                    anchor=r.anchor,
                    has_own_document=r.has_own_document,
                )
                for r in project.walk()
            ],
        )

    def to_yaml(self) -> str:
        return yaml.safe_dump(
            self.model_dump(mode="json"),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )


def load_project(path: str | Path) -> ProjectNode:
    """Read and validate a project file (JSON, or YAML for .yml/.yaml).

    Raises:
        ProjectLoadError: The file is missing, unparsable or fails validation
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProjectLoadError(str(p), str(exc)) from exc

    try:
        if p.suffix.lower() in {".yml", ".yaml"}:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ProjectLoadError(str(p), f"not valid {p.suffix.lstrip('.') or 'json'}: {exc}") from exc

    try:
        return ProjectNode.model_validate(data)
    except ValidationError as exc:
        raise ProjectLoadError(str(p), str(exc)) from exc


__all__ = [
    "ReflectionNode",
    "ProjectNode",
    "UrlMappingRecord",
    "ReflectionUrlRecord",
    "PlanResult",
    "load_project",
    "ValidationError",
]
