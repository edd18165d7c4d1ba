# blackduck_report/handlers/generate_report.py

import logging
import argparse
import threading
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..exceptions import ProjectNotFoundError, ProjectVersionNotFoundError
from ..models import Project
from ..utilities.action_outputs import write_action_output
from ..utilities.error_handling import handler_error_wrapper
from ..utilities.report_renderer import render_console, render_document

if TYPE_CHECKING:
    from ..api import BlackDuckAPI

logger = logging.getLogger("blackduck-report")


def select_projects(projects: Sequence[Project], project_name: str,
                    project_version: Optional[str] = None) -> List[Project]:
    """
    Keeps the fetched projects matching the requested name and version.

    The name comparison ignores case, the version comparison is exact.

    Raises:
        ProjectNotFoundError: If no project carries the requested name
        ProjectVersionNotFoundError: If none of those has the requested version
    """
    wanted_name = project_name.casefold()
    named = [p for p in projects if (p.name or "").casefold() == wanted_name]
    if not named:
        raise ProjectNotFoundError(
            f"Project '{project_name}' was not found",
            details={"project_name": project_name, "fetched": len(projects)},
        )
    if project_version is None:
        return named

    versioned = [p for p in named if p.version == project_version]
    if not versioned:
        raise ProjectVersionNotFoundError(
            f"Version '{project_version}' of project '{project_name}' was not found",
            details={"project_name": project_name, "project_version": project_version,
                     "available_versions": [p.version for p in named]},
        )
    return versioned


@handler_error_wrapper
def handle_generate_report(blackduck: "BlackDuckAPI", params: argparse.Namespace,
                           cancel_event: Optional[threading.Event] = None) -> bool:
    """
    Handler for the report generation. Logs in, fetches the dashboard and
    publishes a console report and a Markdown report per selected project.

    Args:
        blackduck: The Black Duck API client
        params: Command line parameters
        cancel_event: Set to abort before the next network call

    Returns:
        bool: True if the operation was successful
    """
    print(f"\n--- Running {params.command.upper()} Command ---")

    print("\nLogging in to Black Duck...")
    blackduck.login(cancel_event=cancel_event)

    print(f"\nFetching dashboard for project '{params.project_name}'...")
    projects = blackduck.get_dashboard(params.project_name, cancel_event=cancel_event)
    selected = select_projects(projects, params.project_name, params.project_version)
    logger.info("Selected %d of %d fetched project versions", len(selected), len(projects))

    for project in selected:
        print()
        print(render_console(project))

    # All reports are rendered before anything is published
    markdown = "\n".join(render_document(project) for project in selected)
    if write_action_output(params.output_name, markdown):
        print(f"\nMarkdown report written to output '{params.output_name}'.")

    return True
