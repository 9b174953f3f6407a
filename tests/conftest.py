import os
import time
from datetime import datetime

import pytest

from models import ProjectNode
from reflections import ProjectReflection, Reflection, ReflectionFlag, ReflectionKind

K = ReflectionKind
F = ReflectionFlag


class _ProgressReporter:
    """Pytest plugin that prints per-test start and end markers with timing."""

    def __init__(self):
        self._terminal = None
        self._starts: dict[str, float] = {}

    @pytest.hookimpl(tryfirst=True)
    def pytest_sessionstart(self, session: pytest.Session) -> None:
        if self._terminal is None:
            self._terminal = session.config.pluginmanager.get_plugin("terminalreporter")

    @pytest.hookimpl
    def pytest_runtest_logstart(self, nodeid: str, location) -> None:
        if self._terminal is None:
            return
        timestamp = datetime.now().strftime("%H:%M:%S")
        self._starts[nodeid] = time.monotonic()
        self._terminal.write_line(f"[{timestamp}] RUN    {nodeid}")

    @pytest.hookimpl
    def pytest_runtest_logreport(self, report: pytest.TestReport):
        if self._terminal is None or report.when != "call":
            return
        timestamp = datetime.now().strftime("%H:%M:%S")
        duration: float | None = None
        if report.nodeid in self._starts:
            duration = time.monotonic() - self._starts.pop(report.nodeid)
        duration_text = f" ({duration:.2f}s)" if duration is not None else ""
        outcome = report.outcome.upper()
        self._terminal.write_line(f"[{timestamp}] {outcome:6} {report.nodeid}{duration_text}")


def _progress_enabled(config: pytest.Config) -> bool:
    if config.getoption("progress", default=False):
        return True
    env_value = os.environ.get("PYTEST_PROGRESS", "")
    return env_value.lower() in {"1", "true", "yes", "on"}


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("mdmapper")
    group.addoption(
        "--progress",
        action="store_true",
        help="Print test start/finish timestamps and durations to aid debugging long runs.",
    )


def pytest_configure(config: pytest.Config) -> None:
    if _progress_enabled(config):
        reporter = _ProgressReporter()
        config.pluginmanager.register(reporter, "mdmapper-progress-reporter")


# --- Shared reflection trees ---

SAMPLE_PROJECT = {
    "name": "my-project",
    "readme": "# My project",
    "children": [
        {
            "name": '"lib/http"',
            "kind": "external-module",
            "flags": ["exported"],
            "children": [
                {
                    "name": "HttpClient",
                    "kind": "class",
                    "flags": ["exported"],
                    "children": [
                        {"name": "constructor", "kind": "constructor"},
                        {"name": "baseUrl", "kind": "property", "flags": ["private"]},
                        {"name": "send", "kind": "method"},
                        {"name": "create", "kind": "method", "flags": ["static"]},
                    ],
                },
                {
                    "name": "Method",
                    "kind": "enum",
                    "children": [{"name": "GET", "kind": "enum-member"}],
                },
                {
                    "name": "request",
                    "kind": "function",
                    "children": [{"name": "request", "kind": "call-signature"}],
                },
                {
                    "name": "defaults",
                    "kind": "object-literal",
                    "flags": ["const"],
                    "children": [{"name": "timeout", "kind": "property"}],
                },
            ],
        },
        {
            "name": "Util",
            "kind": "module",
            "children": [
                {
                    "name": "Options",
                    "kind": "interface",
                    "children": [{"name": "verbose", "kind": "property", "flags": ["optional"]}],
                },
                {
                    "name": "Inner",
                    "kind": "module",
                    "children": [{"name": "x", "kind": "variable"}],
                },
            ],
        },
        {"name": "main", "kind": "function"},
    ],
}


def find(root: Reflection, dotted: str) -> Reflection:
    """Look up a reflection by its dotted full name."""
    for reflection in root.walk():
        if reflection.full_name() == dotted:
            return reflection
    raise KeyError(dotted)


@pytest.fixture
def sample_project_data() -> dict:
    return SAMPLE_PROJECT


@pytest.fixture
def sample_project() -> ProjectReflection:
    return ProjectNode.model_validate(SAMPLE_PROJECT).to_project()


@pytest.fixture
def class_tree() -> ProjectReflection:
    """Project with one top-level class holding a plain and a static member."""
    project = ProjectReflection(name="demo")
    widget = project.add_child(Reflection("Widget", K.CLASS))
    widget.add_child(Reflection("foo", K.METHOD))
    widget.add_child(Reflection("bar", K.PROPERTY, flags=(F.STATIC,)))
    widget.add_child(Reflection("options", K.OBJECT_LITERAL))
    return project
