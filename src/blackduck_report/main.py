import sys
import time
import signal
import logging
import threading

# Import from other modules in the package
from .api import BlackDuckAPI, RestConfiguration
from .api.helpers.api_base import DEFAULT_USER_AGENT
from .cli import parse_cmdline_args
from .utilities.report_renderer import format_duration
from .exceptions import (
    BlackDuckReportError,
    ApiError,
    NetworkError,
    ConfigurationError,
    AuthenticationError,
    NotLoggedInError,
    OperationCancelledError,
    ValidationError,
    NotFoundError,
)
from .handlers import handle_generate_report

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2


def install_cancel_handler(cancel_event: threading.Event):
    """Sets cancel_event on Ctrl+C instead of interrupting a request mid-flight."""
    def _on_sigint(signum, frame):
        print("\nCancellation requested, stopping before the next request...")
        cancel_event.set()
    return signal.signal(signal.SIGINT, _on_sigint)


def main() -> int:
    """
    Main function to parse arguments, set up logging, initialize the API client,
    and dispatch to the report handler.
    Returns an exit code (0 success, 1 runtime failure, 2 invalid input).
    """
    start_time = time.monotonic()
    exit_code = EXIT_FAILURE # Default to failure
    logger = None # Initialize logger variable
    cancel_event = threading.Event()
    previous_sigint = None

    try:
        params = parse_cmdline_args()

        # Setup logging
        log_level = getattr(logging, params.log.upper(), logging.INFO)
        # Configure file handler (overwrite mode) and stream handler
        logging.basicConfig(level=log_level,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                            handlers=[logging.FileHandler("blackduck-report-log.txt", mode='w')],
                            force=True) # Use force=True to allow reconfiguration if run multiple times

        # Add console handler separately to control its level independently
        console_handler = logging.StreamHandler(sys.stdout)
        console_formatter = logging.Formatter('%(levelname)s: %(message)s') # Simpler format for console
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(log_level)
        logging.getLogger().addHandler(console_handler)

        logger = logging.getLogger("blackduck-report")

        # Print Configuration for this Run
        print("--- Black Duck Report Configuration ---")
        for k, v in sorted(params.__dict__.items()):
            display_val = v
            if k == 'blackduck_token' and params.log.upper() != 'DEBUG':
                display_val = "****" if v else "Not Set"
            print(f"  {k:<30} = {display_val}")
        print("---------------------------------------")

        configuration = RestConfiguration(
            base_url=params.blackduck_url,
            user_agent=DEFAULT_USER_AGENT,
            proxy=params.proxy,
            timeout=params.timeout,
        )
        blackduck = BlackDuckAPI(configuration, params.blackduck_token)
        logger.info("Black Duck client initialized.")

        previous_sigint = install_cancel_handler(cancel_event)
        handle_generate_report(blackduck, params, cancel_event=cancel_event)
        exit_code = EXIT_SUCCESS
        print("\nBlack Duck Report finished successfully.")

    # --- Unified Exception Handling ---
    except ValidationError as e:
        print(f"\nDetailed Error Information:")
        print(f"Invalid Input: {e.message}")
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=False)
        return EXIT_INVALID_INPUT
    except (AuthenticationError, ConfigurationError, NotLoggedInError) as e:
        # Errors typically due to user setup, less need for full traceback in log
        print(f"\nDetailed Error Information:")
        print(f"Runtime Error: {e.message}")
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=False)
        return EXIT_FAILURE
    except OperationCancelledError as e:
        print(f"\nOperation cancelled: {e.message}")
        if logger: logger.warning("Operation cancelled: %s", e.message)
        return EXIT_FAILURE
    except NotFoundError as e:
        # Already explained by the handler wrapper
        print(f"\nDetailed Error Information:")
        print(f"Runtime Error: {e.message}")
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=False)
        return EXIT_FAILURE
    except (ApiError, NetworkError) as e:
        # Errors during runtime interaction, traceback can be useful
        print(f"\nDetailed Error Information:")
        print(f"Runtime Error: {e.message}")
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=True)
        return EXIT_FAILURE
    except BlackDuckReportError as e:
        print(f"\nDetailed Error Information:")
        print(f"Black Duck Report Error: {e.message}")
        if logger: logger.error("Unhandled BlackDuckReportError: %s", e.message, exc_info=True)
        return EXIT_FAILURE
    except Exception as e:
        # Catch truly unexpected errors
        print(f"\nDetailed Error Information:")
        print(f"Unexpected Error: {e}")
        if logger: logger.critical("Unexpected error occurred", exc_info=True)
        return EXIT_FAILURE
    finally:
        if previous_sigint is not None:
            signal.signal(signal.SIGINT, previous_sigint)
        duration_str = format_duration(time.monotonic() - start_time)
        print(f"\nTotal Execution Time: {duration_str}")
        if logger: logger.info("Total execution time: %s", duration_str)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
