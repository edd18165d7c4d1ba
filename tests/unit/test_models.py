# tests/unit/test_models.py

import pytest

from blackduck_report.models import Component, Project, Vulnerabilities


def _component(name, critical=0, high=0, medium=0, low=0, match_type=""):
    total = critical + high + medium + low
    return Component(
        name=name,
        version="1.0",
        id=f"{name}:1.0",
        vulnerabilities=Vulnerabilities(critical=critical, high=high, medium=medium, low=low, total=total),
        match_type=match_type,
    )


def test_vulnerabilities_reject_negative_counts():
    with pytest.raises(ValueError, match="high"):
        Vulnerabilities(high=-1)


@pytest.mark.parametrize("counts, expected", [
    ({"critical": 1, "high": 5, "medium": 5, "low": 5}, "critical"),
    ({"high": 1, "medium": 5, "low": 5}, "high"),
    ({"medium": 1, "low": 5}, "medium"),
    ({"low": 1}, "low"),
    ({}, None),
])
def test_component_severity_precedence(counts, expected):
    assert _component("c", **counts).severity == expected


@pytest.mark.parametrize("match_type, expected", [
    ("FILE_DEPENDENCY_DIRECT", True),
    ("direct_dependency", True),
    ("FILE_DEPENDENCY_TRANSITIVE", False),
    ("", False),
    (None, False),
])
def test_component_is_direct_dependency(match_type, expected):
    assert _component("c", match_type=match_type).is_direct_dependency is expected


def test_project_buckets_are_mutually_exclusive():
    components = (
        _component("both", critical=1, high=3),
        _component("high-only", high=2),
        _component("medium-only", medium=1),
        _component("low-only", low=4),
        _component("clean"),
    )
    project = Project(name="Foo", version="1.0", components=components)

    assert [c.name for c in project.components_with_critical] == ["both"]
    assert [c.name for c in project.components_with_high] == ["high-only"]
    assert [c.name for c in project.components_with_medium] == ["medium-only"]
    assert [c.name for c in project.components_with_low] == ["low-only"]

    buckets = (project.components_with_critical + project.components_with_high
               + project.components_with_medium + project.components_with_low)
    assert len(buckets) == len(set(c.id for c in buckets)) == 4


def test_project_direct_dependencies_keep_order():
    project = Project(name="Foo", version="1.0", components=(
        _component("z", match_type="FILE_DEPENDENCY_DIRECT"),
        _component("t", match_type="FILE_DEPENDENCY_TRANSITIVE"),
        _component("a", match_type="FILE_DEPENDENCY_DIRECT"),
    ))
    assert [c.name for c in project.direct_dependencies] == ["z", "a"]


def test_project_is_immutable():
    project = Project(name="Foo", version="1.0")
    with pytest.raises(AttributeError):
        project.name = "Bar"
    assert str(project) == "Foo (1.0)"
