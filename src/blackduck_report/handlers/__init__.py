# blackduck_report/handlers/__init__.py

import logging

# Common logger for all handlers
logger = logging.getLogger("blackduck-report")

from .generate_report import handle_generate_report, select_projects

__all__ = [
    'handle_generate_report',
    'select_projects',
]
