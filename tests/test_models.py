import json
from pathlib import Path

import pytest
import yaml

from exceptions import ProjectLoadError
from models import PlanResult, ProjectNode, ReflectionNode, ValidationError, load_project
from reflections import ReflectionFlag, ReflectionKind
from theme import MarkdownTheme


def test_reflection_node_builds_back_references(sample_project_data) -> None:
    project = ProjectNode.model_validate(sample_project_data).to_project()

    ext = project.children[0]
    cls = ext.children[0]
    assert ext.parent is project
    assert cls.parent is ext
    assert cls.kind is ReflectionKind.CLASS
    assert [c.name for c in cls.children] == ["constructor", "baseUrl", "send", "create"]
    assert cls.children[3].flags == (ReflectionFlag.STATIC,)
    assert project.readme == "# My project"


def test_unknown_kind_rejected() -> None:
    with pytest.raises(ValidationError):
        ReflectionNode(name="x", kind="struct")


def test_global_kind_reserved_for_project() -> None:
    with pytest.raises(ValidationError):
        ReflectionNode(name="x", kind="global")


def test_unknown_flag_rejected() -> None:
    with pytest.raises(ValidationError):
        ReflectionNode(name="x", kind="method", flags=["sealed"])


def test_duplicate_flags_collapsed() -> None:
    node = ReflectionNode(name="x", kind="method", flags=["static", "private", "static"])
    assert node.flags == [ReflectionFlag.STATIC, ReflectionFlag.PRIVATE]


def test_plan_result_records(sample_project) -> None:
    urls = MarkdownTheme().get_urls(sample_project)
    result = PlanResult.from_plan(sample_project, urls)

    assert result.documents[0].url == "README.md"
    assert result.documents[0].kind is ReflectionKind.GLOBAL
    assert result.documents[1].name == '"lib/http"'
    by_path = {r.path: r for r in result.reflections}
    assert by_path['"lib/http".HttpClient'].has_own_document is True
    assert by_path['"lib/http".HttpClient.send'].url == "classes/_lib_http_.httpclient.md#send"
    assert by_path['"lib/http".HttpClient.send'].anchor == "send"
    assert '"lib/http".request.request' not in by_path


def test_plan_result_to_yaml(sample_project) -> None:
    urls = MarkdownTheme().get_urls(sample_project)
    text = PlanResult.from_plan(sample_project, urls).to_yaml()

    data = yaml.safe_load(text)
    assert data["documents"][0] == {
        "url": "README.md",
        "name": "my-project",
        "kind": "global",
        "template": "reflection.hbs",
    }


def test_load_project_json(tmp_path: Path, sample_project_data) -> None:
    path = tmp_path / "project.json"
    path.write_text(json.dumps(sample_project_data), encoding="utf-8")

    node = load_project(path)
    assert node.name == "my-project"
    assert len(node.children) == 3


def test_load_project_yaml(tmp_path: Path) -> None:
    path = tmp_path / "project.yaml"
    path.write_text(
        "name: demo\nchildren:\n  - name: Widget\n    kind: class\n    children:\n      - {name: foo, kind: method}\n",
        encoding="utf-8",
    )

    node = load_project(path)
    assert node.children[0].children[0].name == "foo"


def test_load_project_missing(tmp_path: Path) -> None:
    with pytest.raises(ProjectLoadError):
        load_project(tmp_path / "nope.json")


def test_load_project_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ProjectLoadError, match="not valid json"):
        load_project(path)


def test_load_project_schema_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.yml"
    path.write_text("name: demo\nchildren:\n  - name: Widget\n    kind: gadget\n", encoding="utf-8")
    with pytest.raises(ProjectLoadError) as excinfo:
        load_project(path)
    assert excinfo.value.path == str(path)
