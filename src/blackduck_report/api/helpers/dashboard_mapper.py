from typing import Optional, Sequence

from ...models import Component, Project, Vulnerabilities
from .wire_records import ComponentRecord, ProjectVersionRecord, RiskCounts


def _count(value: Optional[int]) -> int:
    # Absent or negative counters are clamped to zero
    return max(value or 0, 0)


def to_vulnerabilities(counts: Optional[RiskCounts]) -> Vulnerabilities:
    """Build the domain counters from a raw risk profile."""
    if counts is None:
        return Vulnerabilities()
    critical = _count(counts.critical)
    high = _count(counts.high)
    medium = _count(counts.medium)
    low = _count(counts.low)
    return Vulnerabilities(
        critical=critical,
        high=high,
        medium=medium,
        low=low,
        total=critical + high + medium + low + _count(counts.unknown),
    )


def component_id(name: Optional[str], version: Optional[str]) -> str:
    """Stable component key: ``<name>:<version>``."""
    return f"{name or ''}:{version or ''}"


def to_component(record: ComponentRecord) -> Component:
    if record is None:
        raise ValueError("Component record must not be None")
    return Component(
        name=record.component_name,
        version=record.component_version_name,
        id=component_id(record.component_name, record.component_version_name),
        vulnerabilities=to_vulnerabilities(record.security_counts),
        match_type=record.match_types[0] if record.match_types else "",
    )


def to_project(project_record: ProjectVersionRecord, component_records: Sequence[ComponentRecord]) -> Project:
    """
    Map a raw project-version record and its component records into a Project.

    Pure function: no I/O. Component order follows the order of the records.
    """
    if project_record is None:
        raise ValueError("Project record must not be None")
    if component_records is None:
        raise ValueError("Component records must not be None")

    return Project(
        name=project_record.project_name,
        version=project_record.version_name,
        last_updated_at=project_record.last_updated_at,
        vulnerabilities=to_vulnerabilities(project_record.vulnerability_counts),
        components=tuple(to_component(record) for record in component_records if record is not None),
    )
