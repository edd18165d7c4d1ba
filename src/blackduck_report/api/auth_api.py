import logging
import threading
from typing import Optional

from ..exceptions import ConfigurationError
from .helpers.api_base import APIBase
from .helpers.auth_token import AuthToken
from .helpers.rest_request import RestRequest
from .helpers.wire_records import ErrorRecord

logger = logging.getLogger("blackduck-report")

HTTP_ACCEPT_JSON = "application/vnd.blackducksoftware.internal-1+json, application/json, */*;q=0.8"
HTTP_AUTHORIZATION_TOKEN = "token "
HTTP_LOGIN_WITH_TOKEN_URL = "/api/tokens/authenticate"


class AuthAPI(APIBase):
    """
    Black Duck API Authentication Operations.
    """

    def login(self, api_token: Optional[str] = None, cancel_event: Optional[threading.Event] = None) -> AuthToken:
        """
        Exchanges the static API token for a bearer token.

        The new token replaces any previous one wholesale.

        Args:
            api_token: API token to use instead of the one given at construction
            cancel_event: Cancellation token checked before the call

        Returns:
            AuthToken: The bearer token and its absolute expiry

        Raises:
            AuthenticationError: If the API token is rejected
            ServerError: If the token endpoint answers with an error
            MalformedResponseError: If the token body cannot be decoded
            NetworkError: If there are network issues
        """
        key = api_token or self.api_token
        if not key:
            raise ConfigurationError("A Black Duck API token is required to log in")
        logger.debug("Authenticating with Black Duck at %s", self.base_url)

        request = (RestRequest.post(HTTP_LOGIN_WITH_TOKEN_URL)
                   .accept_content(HTTP_ACCEPT_JSON)
                   .with_authorization(HTTP_AUTHORIZATION_TOKEN + key))

        # Black Duck does not always label its JSON bodies as JSON; the body holds the bearer token
        self.token = self._send_request(
            request, AuthToken.from_json, ErrorRecord.from_json,
            require_json_content_type=False, cancel_event=cancel_event,
            log_response_body=False,
        )
        logger.debug("Authentication successful, token expires at %s", self.token.expires_at.isoformat())
        return self.token
