import logging

from .auth_api import AuthAPI
from .projects_api import ProjectsAPI

# Assume logger is configured in main.py
logger = logging.getLogger("blackduck-report")


class BlackDuckAPI(AuthAPI, ProjectsAPI):
    """
    Black Duck API client class for interacting with the Black Duck REST API.
    This class composes all the individual API parts into a single client.
    """
    pass
