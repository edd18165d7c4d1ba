import pytest
from unittest.mock import patch

ENV_VARS = (
    "BLACKDUCK_URL",
    "BLACKDUCK_TOKEN",
    "BLACKDUCK_PROJECT_NAME",
    "BLACKDUCK_PROJECT_VERSION",
    "BLACKDUCK_PROXY",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Make sure a developer's own Black Duck settings never leak into the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_args():
    """Base argument list with required connection settings."""
    return [
        'blackduck-report',
        '--blackduck-url', 'https://blackduck.example.com',
        '--blackduck-token', 'testtoken',
        '--project-name', 'MyProject',
    ]


@pytest.fixture
def arg_parser():
    """Parse a full argv list without affecting sys.argv."""
    def _parse(args_list):
        from blackduck_report.cli import parse_cmdline_args
        with patch('sys.argv', args_list):
            return parse_cmdline_args()
    return _parse
