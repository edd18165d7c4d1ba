"""Test main() function orchestration and exception handling."""

import argparse
import logging
import signal

import pytest

from blackduck_report.main import main
from blackduck_report.exceptions import (
    ApiError,
    AuthenticationError,
    BlackDuckReportError,
    NetworkError,
    OperationCancelledError,
    ProjectNotFoundError,
    ProjectVersionNotFoundError,
    ServerError,
    ValidationError,
)


@pytest.fixture
def mock_args():
    return argparse.Namespace(
        command="generate-report",
        log="INFO",
        blackduck_url="https://blackduck.example.com",
        blackduck_token="secret-token",
        project_name="Foo",
        project_version=None,
        proxy=None,
        timeout=300,
        output_name="blackduck-scan-security-report",
    )


@pytest.fixture
def mock_main_dependencies(mocker, tmp_path, monkeypatch, mock_args):
    """Patch everything main() talks to and keep the log file out of the source tree."""
    monkeypatch.chdir(tmp_path)
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    saved_sigint = signal.getsignal(signal.SIGINT)

    dependencies = {
        'parse_cmdline_args': mocker.patch("blackduck_report.main.parse_cmdline_args", return_value=mock_args),
        'blackduck_api': mocker.patch("blackduck_report.main.BlackDuckAPI"),
        'handle_generate_report': mocker.patch("blackduck_report.main.handle_generate_report", return_value=True),
    }
    yield dependencies

    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)
    signal.signal(signal.SIGINT, saved_sigint)


class TestMainFunctionSuccess:
    """Test successful main() function execution."""

    def test_main_success(self, mock_main_dependencies, mock_args):
        result = main()

        assert result == 0
        configuration = mock_main_dependencies['blackduck_api'].call_args.args[0]
        assert configuration.base_url == "https://blackduck.example.com"
        assert configuration.timeout == 300
        assert mock_main_dependencies['blackduck_api'].call_args.args[1] == "secret-token"

        handler_call = mock_main_dependencies['handle_generate_report'].call_args
        assert handler_call.args[1] is mock_args
        assert handler_call.kwargs["cancel_event"].is_set() is False

    def test_main_masks_token_in_configuration(self, mock_main_dependencies, capsys):
        main()
        out = capsys.readouterr().out
        assert "secret-token" not in out
        assert "blackduck_token" in out
        assert "Total Execution Time" in out

    def test_main_writes_log_file(self, mock_main_dependencies, tmp_path):
        main()
        assert (tmp_path / "blackduck-report-log.txt").exists()

    def test_main_restores_sigint_handler(self, mock_main_dependencies):
        before = signal.getsignal(signal.SIGINT)
        main()
        assert signal.getsignal(signal.SIGINT) is before

    def test_sigint_sets_cancel_event(self, mock_main_dependencies):
        def _interrupted(blackduck, params, cancel_event=None):
            signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
            assert cancel_event.is_set()
            raise OperationCancelledError("Operation cancelled before the next API call")

        mock_main_dependencies['handle_generate_report'].side_effect = _interrupted
        assert main() == 1


class TestMainExitCodes:
    """Test exception to exit code mapping."""

    def test_validation_error_from_parser(self, mock_main_dependencies):
        mock_main_dependencies['parse_cmdline_args'].side_effect = ValidationError("Missing URL")
        assert main() == 2
        mock_main_dependencies['handle_generate_report'].assert_not_called()

    @pytest.mark.parametrize("error", [
        AuthenticationError("Invalid credentials or expired token"),
        ProjectNotFoundError("Project 'Foo' was not found"),
        ProjectVersionNotFoundError("Version '2.0' of project 'Foo' was not found"),
        NetworkError("Failed to connect to the API server"),
        ServerError("API request failed: HTTP 500", status_code=500),
        ApiError("Unexpected response"),
        OperationCancelledError("Cancelled"),
        BlackDuckReportError("Wrapped failure"),
        RuntimeError("Unexpected"),
    ])
    def test_runtime_errors_exit_with_one(self, mock_main_dependencies, error):
        mock_main_dependencies['handle_generate_report'].side_effect = error
        assert main() == 1

    def test_error_message_is_printed(self, mock_main_dependencies, capsys):
        mock_main_dependencies['handle_generate_report'].side_effect = NetworkError("Failed to connect to the API server")
        main()
        out = capsys.readouterr().out
        assert "Runtime Error: Failed to connect to the API server" in out
