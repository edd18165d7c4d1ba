from typing import Any, List, Optional, Sequence, Tuple

import logging
import threading

from ..exceptions import MalformedResponseError
from ..models import Project
from .auth_api import HTTP_ACCEPT_JSON
from .helpers.api_base import APIBase
from .helpers.dashboard_mapper import to_project
from .helpers.rest_request import RestRequest
from .helpers.wire_records import (
    ComponentPage,
    ComponentRecord,
    ErrorRecord,
    PageRecord,
    ProjectVersionPage,
    ProjectVersionRecord,
)

logger = logging.getLogger("blackduck-report")

HTTP_SEARCH_PROJECT_VERSIONS_URL = "/api/search/project-versions"
HTTP_COMPONENTS_SUFFIX = "/components"

SEARCH_PAGE_SIZE = 100
COMPONENTS_PAGE_SIZE = 200
# Upper bound for servers that keep returning full pages without a totalCount
MAX_PAGES = 1000

# Only components that are in scope for the bill of materials and reviewed
COMPONENT_FILTERS: Tuple[Tuple[str, str], ...] = (
    ("filter", "bomInclusion:false"),
    ("filter", "bomMatchInclusion:false"),
    ("filter", "bomMatchReviewStatus:reviewed"),
)


class ProjectsAPI(APIBase):
    """
    Black Duck API Project and Dashboard Operations.
    """

    def _fetch_all_pages(
        self,
        path: str,
        page_schema: Any,
        page_size: int,
        leading_parameters: Sequence[Tuple[str, str]] = (),
        trailing_parameters: Sequence[Tuple[str, str]] = (),
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Any]:
        """
        Fetches every page of a paged list endpoint.

        The call is repeated with an increasing ``offset`` until a page comes
        back short, empty, or the cumulative count reaches ``totalCount``.

        Raises:
            MalformedResponseError: If paging has not ended after MAX_PAGES pages

        Returns:
            List of decoded items from all pages, in server order
        """
        all_items: List[Any] = []
        received = 0
        offset = 0
        page_number = 1

        while True:
            bearer_token = self._require_bearer_token()
            parameters = list(leading_parameters)
            parameters += [("limit", str(page_size)), ("offset", str(offset))]
            parameters += list(trailing_parameters)

            request = (RestRequest.get(path)
                       .with_query_parameters(parameters)
                       .accept_content(HTTP_ACCEPT_JSON)
                       .with_bearer_token(bearer_token))

            logger.debug(f"Fetching page {page_number} of '{path}' (offset={offset}, limit={page_size})")
            page: PageRecord = self._send_request(
                request, page_schema.from_json, ErrorRecord.from_json,
                require_json_content_type=False, cancel_event=cancel_event,
            )

            all_items.extend(page.items)
            received += page.received
            logger.debug(f"Added {len(page.items)} items from page {page_number} (total so far: {len(all_items)})")

            if page.received == 0 or page.received < page_size:
                break
            if page.total_count is not None and received >= page.total_count:
                break

            if page_number >= MAX_PAGES:
                raise MalformedResponseError(
                    f"Paging of '{path}' did not end after {MAX_PAGES} pages",
                    details={"path": path, "items_received": received, "total_count": page.total_count},
                )

            offset += page_size
            page_number += 1

        return all_items

    def search_project_versions(self, project_name: str,
                                cancel_event: Optional[threading.Event] = None) -> List[ProjectVersionRecord]:
        """
        Searches project versions whose project matches the given name.

        Args:
            project_name: Name (or name fragment) to search for
            cancel_event: Cancellation token checked before each call

        Returns:
            List[ProjectVersionRecord]: Matching project-version records

        Raises:
            NotLoggedInError: If login() has not succeeded
            ServerError, MalformedResponseError, AuthenticationError, NetworkError
        """
        logger.debug(f"Searching project versions for '{project_name}'...")
        records = self._fetch_all_pages(
            HTTP_SEARCH_PROJECT_VERSIONS_URL,
            ProjectVersionPage,
            SEARCH_PAGE_SIZE,
            trailing_parameters=[("q", project_name)],
            cancel_event=cancel_event,
        )
        logger.debug(f"Found {len(records)} project versions for '{project_name}'")
        return records

    def list_project_components(self, project_record: ProjectVersionRecord,
                                cancel_event: Optional[threading.Event] = None) -> List[ComponentRecord]:
        """
        Lists the in-scope, reviewed components of a project version.

        Args:
            project_record: Project version whose resource locator is used
            cancel_event: Cancellation token checked before each call

        Returns:
            List[ComponentRecord]: Component records in server order

        Raises:
            MalformedResponseError: If the record carries no resource locator
        """
        if not project_record.href:
            raise MalformedResponseError(
                f"Project version '{project_record.project_name}' ({project_record.version_name}) "
                f"has no resource locator",
            )
        url = project_record.href.rstrip("/") + HTTP_COMPONENTS_SUFFIX
        return self._fetch_all_pages(
            url,
            ComponentPage,
            COMPONENTS_PAGE_SIZE,
            leading_parameters=COMPONENT_FILTERS,
            cancel_event=cancel_event,
        )

    def get_dashboard(self, project_name: str, cancel_event: Optional[threading.Event] = None) -> List[Project]:
        """
        Retrieves the dashboard of every project version matching the name.

        Projects are fetched one at a time, each followed by its components.
        Any failed call aborts the whole operation; nothing partial is returned.

        Args:
            project_name: Project name to search for
            cancel_event: Cancellation token checked before each call

        Returns:
            List[Project]: One aggregate per project version, in discovery order

        Raises:
            NotLoggedInError: If login() has not succeeded (no call is made)
            OperationCancelledError: If cancel_event gets set
            ServerError, MalformedResponseError, AuthenticationError, NetworkError
        """
        self._require_bearer_token()

        logger.info("Requesting project information for %s", project_name)
        project_records = self.search_project_versions(project_name, cancel_event=cancel_event)

        projects: List[Project] = []
        for project_record in project_records:
            logger.info("Requesting project components for %s with version: %s",
                        project_record.project_name, project_record.version_name)
            component_records = self.list_project_components(project_record, cancel_event=cancel_event)
            projects.append(to_project(project_record, component_records))

        logger.debug(f"Built {len(projects)} project dashboards for '{project_name}'")
        return projects
