# blackduck_report/utilities/report_renderer.py

"""
Renders a Project dashboard as a console report and as a Markdown report.

Both renderings follow the same order: project identity, severity summary,
one detail block per severity tier with a non-zero project count, then the
direct dependencies with a pass/fail status. Both are pure functions of the
Project they are given.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple, Union

from ..models import Component, Project
from .markdown_builder import (
    Document,
    Header,
    InlineCode,
    Paragraph,
    Table,
    TableHeader,
    TableHeaderCell,
    TableRow,
    TableTextAlignment,
    Text,
)

logger = logging.getLogger("blackduck-report")

UNKNOWN = "Unknown"

# Emoji shortcodes understood by GitHub flavoured Markdown
CRITICAL_EMOJI = ":x:"
HIGH_EMOJI = ":red_circle:"
MEDIUM_EMOJI = ":large_orange_diamond:"
LOW_EMOJI = ""
OK_EMOJI = ":white_check_mark:"

LOGO_HTML = ('<img src="https://www.blackduck.com/content/dam/black-duck/en-us/images/BlackDuckLogo-OnDark.svg" '
             'alt="BlackDuck Logo" height="50" />')
REPORT_TITLE = "BlackDuck Scan Security Report"

# (label, counter attribute, emoji) in precedence order
SEVERITY_TIERS: Tuple[Tuple[str, str, str], ...] = (
    ("Critical", "critical", CRITICAL_EMOJI),
    ("High", "high", HIGH_EMOJI),
    ("Medium", "medium", MEDIUM_EMOJI),
    ("Low", "low", LOW_EMOJI),
)


def _or_unknown(value: Optional[str]) -> str:
    return value if value else UNKNOWN


def format_timestamp(value: Optional[datetime]) -> str:
    """Formats the last-updated timestamp, or returns the Unknown placeholder."""
    if value is None:
        return UNKNOWN
    return value.isoformat(sep=" ")


def _tier_components(project: Project, attribute: str) -> Tuple[Component, ...]:
    return getattr(project, f"components_with_{attribute}")


def _sorted_direct_dependencies(project: Project) -> List[Component]:
    return sorted(project.direct_dependencies, key=lambda c: c.id)


def _is_passing(component: Component) -> bool:
    return component.vulnerabilities.total == 0


def render_console(project: Project) -> str:
    """
    Renders the plain text report printed to the console.

    Args:
        project: The project dashboard to render

    Returns:
        str: The report, one item per line
    """
    if project is None:
        raise ValueError("Project must not be None")

    counts = project.vulnerabilities
    lines = [
        f"Project: {_or_unknown(project.name)} Version: {_or_unknown(project.version)} "
        f"LastUpdatedAt: {format_timestamp(project.last_updated_at)}",
        "\tVulnerabilities:",
    ]
    for label, attribute, _ in SEVERITY_TIERS:
        lines.append(f"\t\t{label}: {getattr(counts, attribute)}")
    lines.append("")

    for label, attribute, _ in SEVERITY_TIERS:
        tier_count = getattr(counts, attribute)
        if tier_count <= 0:
            continue
        lines.append(f"\t\t{label}: {tier_count}")
        for component in _tier_components(project, attribute):
            lines.append(
                f"\t\t  Component: [{_or_unknown(component.name)}] Version: [{_or_unknown(component.version)}] "
                f"Count={getattr(component.vulnerabilities, attribute)}"
            )

    lines.append("")
    lines.append("\tDirect Dependencies:")
    for component in _sorted_direct_dependencies(project):
        status = "PASS" if _is_passing(component) else "FAIL"
        lines.append(
            f"\t\t  Component: [{_or_unknown(component.name)}] Version: [{_or_unknown(component.version)}] "
            f"Count={component.vulnerabilities.total} Status={status}"
        )

    return "\n".join(lines) + "\n"


def _component_table(project: Project, attribute: str) -> Table:
    table = Table(TableHeader(
        TableHeaderCell("Component", TableTextAlignment.LEFT),
        TableHeaderCell("Version", TableTextAlignment.LEFT),
        TableHeaderCell("Count", TableTextAlignment.CENTER),
    ))
    for component in _tier_components(project, attribute):
        table.add_row(TableRow(
            _or_unknown(component.name),
            _or_unknown(component.version),
            str(getattr(component.vulnerabilities, attribute)),
        ))
    return table


def build_document(project: Project) -> Document:
    """Builds the Markdown document model of the report."""
    if project is None:
        raise ValueError("Project must not be None")

    counts = project.vulnerabilities
    document = Document()
    document.append(Paragraph(LOGO_HTML))
    document.append(Header(REPORT_TITLE, 1))

    document.append(Header("Project:", 3))
    document.append(Table(
        TableHeader(
            TableHeaderCell("Name", TableTextAlignment.LEFT),
            TableHeaderCell("Version", TableTextAlignment.LEFT),
            TableHeaderCell("Last Updated", TableTextAlignment.LEFT),
        ),
        [TableRow(
            InlineCode(_or_unknown(project.name)),
            InlineCode(_or_unknown(project.version)),
            InlineCode(format_timestamp(project.last_updated_at)),
        )],
    ))

    document.append(Header("Security vulnerabilities Summary:", 3))
    document.append(Table(
        TableHeader(*(TableHeaderCell(label, TableTextAlignment.CENTER) for label, _, _ in SEVERITY_TIERS)),
        [TableRow(*(f"{emoji}{getattr(counts, attribute)}" for _, attribute, emoji in SEVERITY_TIERS))],
    ))

    document.append(Header("Security vulnerabilities Details:", 3))
    for label, attribute, emoji in SEVERITY_TIERS:
        tier_count = getattr(counts, attribute)
        if tier_count <= 0:
            continue
        document.append(Header(Text(f"{label}: {emoji}").append(InlineCode(tier_count)), 4))
        document.append(_component_table(project, attribute))

    document.append(Header("Direct Dependencies:", 3))
    dependencies = Table(TableHeader(
        TableHeaderCell("Component", TableTextAlignment.LEFT),
        TableHeaderCell("Version", TableTextAlignment.LEFT),
        TableHeaderCell("Status", TableTextAlignment.CENTER),
    ))
    for component in _sorted_direct_dependencies(project):
        dependencies.add_row(TableRow(
            _or_unknown(component.name),
            _or_unknown(component.version),
            OK_EMOJI if _is_passing(component) else CRITICAL_EMOJI,
        ))
    document.append(dependencies)

    logger.debug(f"Built Markdown report for {project} with {len(document)} blocks")
    return document


def render_document(project: Project) -> str:
    """Renders the Markdown report published to the CI output channel."""
    return str(build_document(project))


def format_duration(duration_seconds: Optional[Union[int, float]]) -> str:
    """Formats a duration in seconds into a 'X minutes, Y seconds' string."""
    if duration_seconds is None: return "N/A"
    try:
        duration_seconds = round(float(duration_seconds))
    except (ValueError, TypeError):
        return "Invalid Duration"

    minutes, seconds = divmod(int(duration_seconds), 60)
    if minutes > 0 and seconds > 0: return f"{minutes} minutes, {seconds} seconds"
    elif minutes > 0: return f"{minutes} minutes"
    elif seconds == 1: return "1 second"
    else: return f"{seconds} seconds"
