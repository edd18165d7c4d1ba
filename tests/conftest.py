# tests/conftest.py

import pytest
import requests
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from blackduck_report.api import BlackDuckAPI, RestConfiguration
from blackduck_report.api.helpers.auth_token import AuthToken

from payloads import BASE_URL


@pytest.fixture
def make_response():
    """
    Factory for mocked requests.Response objects.

    ``payload`` is what ``response.json()`` returns; pass ``json_error=True`` to
    make ``json()`` raise like an undecodable body does.
    """
    def _make(status_code=200, payload=None, content_type="application/json", text=None, json_error=False):
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.headers = {"content-type": content_type} if content_type else {}
        response.text = text if text is not None else ("" if payload is None else str(payload))
        if json_error:
            response.json.side_effect = ValueError("Expecting value")
        else:
            response.json.return_value = payload
        return response
    return _make


@pytest.fixture
def mock_session(mocker):
    """A requests.Session stand-in; program responses via ``mock_session.request``."""
    return mocker.MagicMock(spec=requests.Session)


@pytest.fixture
def rest_configuration():
    return RestConfiguration(base_url=BASE_URL, user_agent="blackduck-report-tests", timeout=30)


@pytest.fixture
def blackduck_inst(rest_configuration, mock_session):
    """A BlackDuckAPI client with its session replaced by a mock."""
    api = BlackDuckAPI(rest_configuration, "static-api-token")
    api.session = mock_session
    return api


@pytest.fixture
def logged_in_blackduck(blackduck_inst):
    """A BlackDuckAPI client holding a bearer token valid for the next hour."""
    blackduck_inst.token = AuthToken(
        bearer_token="bearer-123",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )
    return blackduck_inst
