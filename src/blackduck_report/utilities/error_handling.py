"""
Error handling utilities for the Black Duck report tool.

This module contains functions for standardized error handling and formatting
across all CLI handlers.
"""

import logging
import argparse
import functools
from typing import Callable

from ..exceptions import (
    BlackDuckReportError,
    ApiError,
    NetworkError,
    ConfigurationError,
    AuthenticationError,
    NotLoggedInError,
    OperationCancelledError,
    ServerError,
    ValidationError,
    ProjectNotFoundError,
    ProjectVersionNotFoundError,
)

logger = logging.getLogger("blackduck-report")


def format_and_print_error(error: Exception, handler_name: str, params: argparse.Namespace):
    """
    Formats and prints a standardized error message for CLI users.

    Args:
        error: The exception that occurred
        handler_name: Name of the handler where the error occurred
        params: Command line parameters
    """
    command = getattr(params, 'command', 'unknown')
    error_message = getattr(error, 'message', str(error))
    error_code = getattr(error, 'code', None)
    error_details = getattr(error, 'details', {})
    blackduck_url = getattr(params, 'blackduck_url', None) or '<not specified>'

    if isinstance(error, ProjectNotFoundError):
        print(f"\n❌ Cannot continue: The requested project does not exist")
        print(f"   Project '{getattr(params, 'project_name', 'unknown')}' was not found in Black Duck.")
        print(f"\n💡 Please check:")
        print(f"   • The project name is spelled correctly")
        print(f"   • The API token has access to the project")

    elif isinstance(error, ProjectVersionNotFoundError):
        print(f"\n❌ Cannot continue: The requested project version does not exist")
        print(f"   Version '{getattr(params, 'project_version', 'unknown')}' of project "
              f"'{getattr(params, 'project_name', 'unknown')}' was not found in Black Duck.")
        print(f"\n💡 Please check:")
        print(f"   • The version name matches exactly (comparison is case-sensitive)")
        print(f"   • Omit --project-version to report on every version")

    elif isinstance(error, NetworkError):
        print(f"\n❌ Network connectivity issue")
        print(f"   {error_message}")
        print(f"\n💡 Please check:")
        print(f"   • The Black Duck server is accessible")
        print(f"   • The server URL is correct: {blackduck_url}")
        if getattr(params, 'proxy', None):
            print(f"   • The proxy is reachable: {params.proxy}")

    elif isinstance(error, AuthenticationError):
        print(f"\n❌ Authentication failed")
        print(f"   {error_message}")
        print(f"\n💡 Please check:")
        print(f"   • Your API token is correct and not expired")
        print(f"   • The server URL is correct: {blackduck_url}")

    elif isinstance(error, NotLoggedInError):
        print(f"\n❌ Not logged in to Black Duck")
        print(f"   {error_message}")

    elif isinstance(error, ServerError):
        print(f"\n❌ Black Duck API error")
        print(f"   {error_message}")
        if error.status_code:
            print(f"   HTTP status: {error.status_code}")
        log_ref = getattr(error.payload, 'log_ref', None)
        if log_ref:
            print(f"   Server log reference: {log_ref}")
        if error_code:
            print(f"   Error code: {error_code}")

    elif isinstance(error, ApiError):
        print(f"\n❌ Unexpected response from Black Duck")
        print(f"   {error_message}")
        print(f"\n💡 The server URL may not point to a Black Duck instance: {blackduck_url}")

    elif isinstance(error, OperationCancelledError):
        print(f"\n❌ Operation cancelled")

    elif isinstance(error, ValidationError):
        print(f"\n❌ Invalid input or configuration")
        print(f"   {error_message}")
        print(f"\n💡 Please check your command-line arguments and environment variables")

    elif isinstance(error, ConfigurationError):
        print(f"\n❌ Configuration error")
        print(f"   {error_message}")
        print(f"\n💡 Please check your command-line arguments and configuration")

    else:
        print(f"\n❌ Error executing '{command}' command: {error_message}")

    if error_code and not isinstance(error, ServerError):
        print(f"\nError code: {error_code}")

    if getattr(params, 'log', 'INFO').upper() == 'DEBUG' and error_details:
        print("\nDetailed error information:")
        for key, value in error_details.items():
            print(f"  • {key}: {value}")
    else:
        print(f"\nFor more details, run with --log DEBUG for verbose output")


def handler_error_wrapper(handler_func: Callable) -> Callable:
    """
    A decorator that wraps handler functions with standardized error handling.

    Expected errors are printed in a user-friendly form and re-raised so that
    main() can pick the exit code. Anything else is logged and wrapped in a
    BlackDuckReportError.

    Example:
        @handler_error_wrapper
        def handle_generate_report(blackduck, params, cancel_event=None):
            ...
    """
    @functools.wraps(handler_func)
    def wrapper(blackduck, params, *args, **kwargs):
        try:
            handler_name = handler_func.__name__
            command_name = getattr(params, 'command', 'unknown')
            logger.debug(f"Starting {handler_name} for command '{command_name}'")

            return handler_func(blackduck, params, *args, **kwargs)

        except BlackDuckReportError as e:
            logger.debug(f"Expected error in {handler_func.__name__}: {type(e).__name__}: {e.message}")
            format_and_print_error(e, handler_func.__name__, params)
            raise

        except Exception as e:
            logger.error(f"Unexpected error in {handler_func.__name__}: {e}", exc_info=True)

            report_error = BlackDuckReportError(
                f"Failed to execute {getattr(params, 'command', 'command')}: {str(e)}",
                details={"error": str(e), "handler": handler_func.__name__}
            )
            format_and_print_error(report_error, handler_func.__name__, params)
            raise report_error from e

    return wrapper
