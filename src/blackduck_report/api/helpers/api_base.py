import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, TypeVar

import requests

from ...exceptions import (
    AuthenticationError,
    MalformedResponseError,
    NetworkError,
    NotLoggedInError,
    OperationCancelledError,
    ServerError,
)
from .auth_token import AuthToken
from .rest_request import RestRequest

# Assume logger is configured in main.py
logger = logging.getLogger("blackduck-report")

T = TypeVar("T")
# A schema turns decoded JSON into a typed record, or None when it cannot
Schema = Callable[[Any], Optional[T]]

DEFAULT_USER_AGENT = "blackduck-report"
DEFAULT_TIMEOUT = 300
_SENSITIVE_HEADERS = {"authorization", "proxy-authorization"}


@dataclass
class RestConfiguration:
    base_url: str
    user_agent: str = DEFAULT_USER_AGENT
    proxy: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT


# --- Response content classification ---

def get_media_type(response: requests.Response) -> str:
    content_type = response.headers.get("content-type", "") or ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_content(response: requests.Response) -> bool:
    media_type = get_media_type(response)
    return media_type == "application/json" or media_type.endswith("+json")


def is_text_content(response: requests.Response) -> bool:
    return get_media_type(response) == "text/plain"


def is_html_content(response: requests.Response) -> bool:
    return get_media_type(response) == "text/html"


def is_xml_content(response: requests.Response) -> bool:
    media_type = get_media_type(response)
    return media_type in ("application/xml", "text/xml") or media_type.endswith("+xml")


def is_readable_as_string(response: requests.Response) -> bool:
    return (is_json_content(response) or is_text_content(response)
            or is_html_content(response) or is_xml_content(response))


def _masked_headers(headers: Dict[str, str]) -> Dict[str, str]:
    masked = {}
    for key, value in headers.items():
        if key.lower() in _SENSITIVE_HEADERS and value:
            scheme = value.split(" ", 1)[0] if " " in value else ""
            masked[key] = f"{scheme} ****".strip()
        else:
            masked[key] = value
    return masked


def raise_if_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError("Operation cancelled before the next API call")


class APIBase:
    """
    Base class with helper methods for Black Duck REST API interactions.
    Handles the "how" of a call: building the HTTP request, sending it,
    classifying the response and decoding it into typed records.
    """

    def __init__(self, configuration: RestConfiguration, api_token: str):
        """
        Initialize the base Black Duck API client.

        Args:
            configuration: Base URL, user agent, proxy and timeout to use
            api_token: Static API token exchanged for a bearer token on login
        """
        self.configuration = configuration
        self.api_token = api_token
        self.token: Optional[AuthToken] = None
        self.base_url = configuration.base_url.rstrip("/")
        self.session = requests.Session()
        self.session.trust_env = False  # Do not trust .netrc file or proxy env vars
        if configuration.proxy:
            self.session.proxies = {"http": configuration.proxy, "https": configuration.proxy}

    def _send_request(
        self,
        request: RestRequest,
        success_schema: "Schema[T]",
        error_schema: Schema,
        require_json_content_type: bool = True,
        cancel_event: Optional[threading.Event] = None,
        log_response_body: bool = True,
    ) -> T:
        """
        Sends a request and decodes the response.

        Args:
            request: The request to send
            success_schema: Decoder for a successful response body
            error_schema: Decoder for an error response body
            require_json_content_type: Fail when the response is not JSON
            cancel_event: Cancellation token checked before sending
            log_response_body: Dump the response text at DEBUG; off for bodies carrying credentials

        Returns:
            The record produced by success_schema

        Raises:
            OperationCancelledError: If cancel_event is set
            NetworkError: For connection issues, timeouts, etc.
            AuthenticationError: On HTTP 401
            MalformedResponseError: On unexpected content type or undecodable success body
            ServerError: On any other non-success status
        """
        raise_if_cancelled(cancel_event)

        url = request.build_url(self.base_url)
        headers = {"User-Agent": self.configuration.user_agent}
        headers.update(request.headers)

        logger.debug("Contacting endpoint %s %s", request.method, url)
        logger.debug("Request Headers: %s", _masked_headers(headers))
        if request.body is not None:
            logger.debug("Request Body: %s", request.body)

        try:
            response = self.session.request(
                request.method,
                url,
                headers=headers,
                json=request.body,
                timeout=self.configuration.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            logger.error("API connection failed: %s", e, exc_info=True)
            raise NetworkError("Failed to connect to the API server", details={"error": str(e)})
        except requests.exceptions.Timeout as e:
            logger.error("API request timed out: %s", e, exc_info=True)
            raise NetworkError("Request to API server timed out", details={"error": str(e)})
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network error while calling API: {e}", details={"error": str(e)}) from e

        logger.debug("Response Status Code: %s", response.status_code)
        logger.debug("Response Headers: %s", response.headers)
        if not log_response_body:
            logger.debug("Response Text: <withheld>")
        elif is_readable_as_string(response):
            logger.debug(f"Response Text (first 500 chars): {response.text[:500]}")

        if response.status_code == 401:
            logger.error("Error=%s Message=%s", response.status_code, getattr(response, "reason", ""))
            raise AuthenticationError("Invalid credentials or expired token", details={"url": url})

        if require_json_content_type and not is_json_content(response):
            raise MalformedResponseError(
                f"Expected a JSON response but received '{get_media_type(response) or 'no content type'}'",
                details={"url": url, "status_code": response.status_code},
            )

        if 200 <= response.status_code < 300:
            result = success_schema(self._decode_json(response))
            if result is None:
                details = {"url": url}
                if log_response_body:
                    details["response_text"] = response.text[:500]
                raise MalformedResponseError("API returned an empty or undecodable response body", details=details)
            return result

        payload = error_schema(self._decode_json(response))
        error_message = getattr(payload, "error_message", None) or f"HTTP {response.status_code}"
        logger.debug(f"API returned error status {response.status_code}: {payload!r}")
        raise ServerError(
            f"API request failed: {error_message}",
            payload=payload,
            status_code=response.status_code,
            code=getattr(payload, "error_code", None),
            details={"url": url, "status_code": response.status_code},
        )

    @staticmethod
    def _decode_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            logger.debug("Response body is not valid JSON", exc_info=True)
            return None

## Bearer token state
    @property
    def is_logged(self) -> bool:
        return self.token is not None and self.token.is_logged

    @property
    def is_token_expired(self) -> bool:
        return self.token is not None and self.token.is_expired()

    def _require_bearer_token(self) -> str:
        """Return the current bearer token, failing fast when there is no usable one."""
        if not self.is_logged:
            raise NotLoggedInError("Not logged in to Black Duck: call login() first")
        if self.is_token_expired:
            raise NotLoggedInError(
                "Black Duck bearer token has expired: call login() again",
                details={"expires_at": self.token.expires_at.isoformat()},
            )
        return self.token.bearer_token
