# blackduck_report/cli.py

import argparse
import os
import logging
from argparse import RawTextHelpFormatter
from urllib.parse import urlparse

from .api.helpers.api_base import DEFAULT_TIMEOUT
from .exceptions import ValidationError

logger = logging.getLogger(__name__)

COMMAND_NAME = "generate-report"
DEFAULT_OUTPUT_NAME = "blackduck-scan-security-report"


# --- Main Parsing Function ---
def parse_cmdline_args():
    """
    Parse command line arguments.

    Every connection option falls back to an environment variable so the tool
    can run unchanged as a CI step.

    Returns:
        argparse.Namespace: Parsed command line arguments

    Raises:
        ValidationError: If required arguments are missing or invalid
    """
    parser = argparse.ArgumentParser(
        description="Black Duck Report - Generates a security report for a Black Duck project.",
        formatter_class=RawTextHelpFormatter,
        epilog="""
Environment Variables:
  BLACKDUCK_URL              : Black Duck server URL (e.g., https://blackduck.example.com)
  BLACKDUCK_TOKEN            : Black Duck API Token
  BLACKDUCK_PROJECT_NAME     : Project to report on
  BLACKDUCK_PROJECT_VERSION  : Project version to report on (optional)
  BLACKDUCK_PROXY            : Proxy URL (optional)
  GITHUB_OUTPUT              : When set, the Markdown report is written to this file

Example Usage:
  # Report on every version of a project
  blackduck-report --blackduck-url <URL> --blackduck-token <TOKEN> --project-name MYPROJ

  # Report on a single version, through a proxy
  blackduck-report --blackduck-url <URL> --blackduck-token <TOKEN> \\
    --project-name MYPROJ --project-version 1.0 --proxy http://proxy.example.com:3128
"""
    )
    parser.set_defaults(command=COMMAND_NAME)

    # --- Connection Arguments ---
    connection_args = parser.add_argument_group("Connection Arguments")
    connection_args.add_argument(
        "--blackduck-url",
        help="Black Duck server URL. Overrides BLACKDUCK_URL env var.",
        default=os.getenv("BLACKDUCK_URL"),
        metavar="URL"
    )
    connection_args.add_argument(
        "--blackduck-token",
        help="Black Duck API Token. Overrides BLACKDUCK_TOKEN env var.",
        default=os.getenv("BLACKDUCK_TOKEN"),
        metavar="TOKEN"
    )
    connection_args.add_argument(
        "--proxy",
        help="Proxy URL used for every request. Overrides BLACKDUCK_PROXY env var.",
        default=os.getenv("BLACKDUCK_PROXY"),
        metavar="URL"
    )
    connection_args.add_argument(
        "--timeout",
        help=f"Request timeout in seconds (Default: {DEFAULT_TIMEOUT})",
        type=int,
        default=DEFAULT_TIMEOUT
    )

    # --- Report Arguments ---
    report_args = parser.add_argument_group("Report Arguments")
    report_args.add_argument(
        "--project-name",
        help="Project name. Overrides BLACKDUCK_PROJECT_NAME env var.",
        default=os.getenv("BLACKDUCK_PROJECT_NAME"),
        metavar="NAME"
    )
    report_args.add_argument(
        "--project-version",
        help="Project version (exact match). Overrides BLACKDUCK_PROJECT_VERSION env var.\n"
             "When omitted, every version of the project is reported.",
        default=os.getenv("BLACKDUCK_PROJECT_VERSION"),
        metavar="VERSION"
    )
    report_args.add_argument(
        "--output-name",
        help=f"Name of the CI output receiving the Markdown report (Default: {DEFAULT_OUTPUT_NAME})",
        default=DEFAULT_OUTPUT_NAME,
        metavar="NAME"
    )
    report_args.add_argument(
        "--log",
        help="Logging level (Default: INFO)",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO"
    )

    # --- Validate args after parsing ---
    args = parser.parse_args()

    if not args.blackduck_url or not args.blackduck_token or not args.project_name:
        raise ValidationError("Black Duck URL, token, and project name must be provided")

    parsed_url = urlparse(args.blackduck_url)
    if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
        raise ValidationError(f"Black Duck URL must be an http(s) URL: {args.blackduck_url}")

    if args.timeout <= 0:
        raise ValidationError(f"Timeout must be a positive number of seconds, got {args.timeout}")

    # An empty env var means "no version filter"
    if args.project_version is not None and not args.project_version.strip():
        args.project_version = None

    logger.debug(f"Parsed arguments for command '{args.command}'")
    return args
