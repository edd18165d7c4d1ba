# tests/integration/conftest.py

import logging
import signal

import pytest
from urllib.parse import parse_qsl, urlsplit

from payloads import page_json, token_json


@pytest.fixture(autouse=True)
def isolated_run(tmp_path, monkeypatch):
    """Run main() in a scratch directory and undo its logging and signal setup afterwards."""
    monkeypatch.chdir(tmp_path)
    for name in ("BLACKDUCK_URL", "BLACKDUCK_TOKEN", "BLACKDUCK_PROJECT_NAME",
                 "BLACKDUCK_PROJECT_VERSION", "BLACKDUCK_PROXY", "GITHUB_OUTPUT"):
        monkeypatch.delenv(name, raising=False)

    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    saved_sigint = signal.getsignal(signal.SIGINT)
    yield
    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)
    signal.signal(signal.SIGINT, saved_sigint)


@pytest.fixture
def fake_blackduck(mocker, make_response):
    """
    Simulates a Black Duck server behind a mocked requests.Session.

    Fill ``state["projects"]`` with project-version bodies and
    ``state["components"][href]`` with the component bodies of each version.
    Every request is recorded in ``state["calls"]``.
    """
    state = {"projects": [], "components": {}, "calls": [], "login_status": 200}

    def _request(method, url, headers=None, json=None, timeout=None):
        state["calls"].append((method, url, dict(headers or {})))
        path = urlsplit(url).path
        query = dict(parse_qsl(urlsplit(url).query))

        if path == "/api/tokens/authenticate":
            if state["login_status"] != 200:
                return make_response(status_code=state["login_status"], payload=None)
            return make_response(payload=token_json(), content_type="application/json")

        if path == "/api/search/project-versions":
            offset, limit = int(query["offset"]), int(query["limit"])
            items = state["projects"][offset:offset + limit]
            return make_response(payload=page_json(items, total_count=len(state["projects"])),
                                 content_type="application/vnd.blackducksoftware.internal-1+json")

        if path.endswith("/components"):
            href = url.split("?", 1)[0][:-len("/components")]
            items = state["components"].get(href, [])
            return make_response(payload=page_json(items))

        return make_response(status_code=404, payload={"errorMessage": f"No route for {path}"})

    session = mocker.MagicMock()
    session.request.side_effect = _request
    mocker.patch("blackduck_report.api.helpers.api_base.requests.Session", return_value=session)
    state["session"] = session
    return state
