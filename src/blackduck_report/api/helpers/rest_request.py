import base64
from urllib.parse import urlencode, urlsplit
from typing import Dict, List, Optional, Sequence, Tuple, Any

JSON_MEDIA_TYPE = "application/json"


class RestRequest:
    """
    Description of a single outgoing HTTP call.

    Built with the ``get``/``post`` factories and then decorated with the
    chainable ``with_*``/``accept_*`` modifiers, e.g.::

        request = (RestRequest.get("/api/search/project-versions")
                   .with_query_parameters([("limit", "100"), ("q", "my-project")])
                   .with_bearer_token(token))

    Query parameters are kept as an ordered list of pairs so a key may appear
    more than once (the Black Duck ``filter`` parameter relies on that).
    """

    def __init__(self, method: str, path: str, body: Optional[Any] = None):
        if not path:
            raise ValueError("Request path must not be empty")
        self.method = method.upper()
        self.path = path
        self.body = body
        self.headers: Dict[str, str] = {}
        self.query_parameters: List[Tuple[str, str]] = []

    @classmethod
    def get(cls, path: str) -> "RestRequest":
        return cls("GET", path)

    @classmethod
    def post(cls, path: str, body: Optional[Any] = None) -> "RestRequest":
        return cls("POST", path, body=body)

    def __repr__(self) -> str:
        return f"RestRequest({self.method} {self.path})"

    # --- Header modifiers ---

    def accept_content(self, content_type: str) -> "RestRequest":
        if not content_type:
            raise ValueError("Accept content type must not be empty")
        existing = self.headers.get("Accept")
        self.headers["Accept"] = f"{existing}, {content_type}" if existing else content_type
        return self

    def accept_json_content(self) -> "RestRequest":
        return self.accept_content(JSON_MEDIA_TYPE)

    def with_authorization(self, authorization: Optional[str]) -> "RestRequest":
        if not authorization:
            raise ValueError("Authorization value must not be empty")
        self.headers["Authorization"] = authorization
        return self

    def with_bearer_token(self, bearer_token: Optional[str]) -> "RestRequest":
        if not bearer_token:
            raise ValueError("Bearer token must not be empty")
        return self.with_authorization(f"Bearer {bearer_token}")

    def with_basic_credentials(self, username: Optional[str], password: Optional[str]) -> "RestRequest":
        if not username or not password:
            raise ValueError("Username and password must not be empty")
        encoded = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
        return self.with_authorization(f"Basic {encoded}")

    def with_user_agent(self, user_agent: Optional[str]) -> "RestRequest":
        if not user_agent:
            raise ValueError("User agent must not be empty")
        self.headers["User-Agent"] = user_agent
        return self

    def with_referer(self, referer: Optional[str]) -> "RestRequest":
        if not referer:
            raise ValueError("Referer must not be empty")
        self.headers["Referer"] = referer
        return self

    # --- Query modifiers ---

    def with_query_parameters(self, parameters: Optional[Sequence[Tuple[str, Any]]]) -> "RestRequest":
        if parameters:
            self.query_parameters.extend((str(key), str(value)) for key, value in parameters)
        return self

    # --- URL building ---

    def is_absolute(self) -> bool:
        return bool(urlsplit(self.path).scheme)

    def build_url(self, base_url: Optional[str]) -> str:
        """Return the full request URL, query string included."""
        if self.is_absolute():
            url = self.path
        else:
            if not base_url:
                raise ValueError(f"Cannot resolve relative path '{self.path}' without a base URL")
            url = base_url.rstrip("/") + "/" + self.path.lstrip("/")

        if self.query_parameters:
            separator = "&" if urlsplit(url).query else "?"
            url = url + separator + urlencode(self.query_parameters)
        return url
