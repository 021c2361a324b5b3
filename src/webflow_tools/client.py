"""
HTTP transport for the Webflow Data API.

WebflowClient is the only place that talks to the network. Tools hand it an
API path plus optional JSON body and query parameters and get parsed JSON
back.

Behavior:
    - Query parameters whose value is None are left out of the URL
    - The bearer token is attached to every request; a missing token fails
      before any I/O
    - Content-Type is only sent when there is a body
    - Non-2xx responses raise UpstreamError with the raw response text
    - No retries: every failure is reported once
"""

from types import TracebackType
from typing import Any, Literal

import httpx

from webflow_tools.config import Settings
from webflow_tools.console import get_logger
from webflow_tools.errors import UpstreamError

logger = get_logger(__name__)

HttpMethod = Literal["GET", "POST", "PUT"]


def build_query(params: dict[str, Any] | None) -> dict[str, str]:
    """Drop None values and coerce the rest to strings."""
    if not params:
        return {}
    return {key: str(value) for key, value in params.items() if value is not None}


class WebflowClient:
    """
    Thin JSON client around httpx.Client.

    Usage:
        with WebflowClient(settings) as client:
            sites = client.call("/sites")

    Attributes:
        settings: Configuration providing base URL, token and timeout
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Process-wide configuration
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.settings = settings
        self._http = httpx.Client(
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    def call(
        self,
        path: str,
        *,
        method: HttpMethod = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Perform one API request and return the decoded JSON body.

        Args:
            path: API path starting with "/", appended to the base URL
            method: HTTP method
            body: JSON body to send, if any
            params: Query parameters; None values are omitted

        Returns:
            The parsed JSON response

        Raises:
            MissingApiKeyError: If no API token is configured
            UpstreamError: On a non-success HTTP status, or a body that is
                not a JSON object
            ValueError: If a success response is not valid JSON
            httpx.HTTPError: On transport-level failures (timeouts, DNS, ...)
        """
        headers = {"Authorization": f"Bearer {self.settings.require_api_key()}"}
        if body is not None:
            headers["Content-Type"] = "application/json"

        url = f"{self.settings.base_url.rstrip('/')}{path}"
        query = build_query(params)

        logger.debug("%s %s params=%s", method, path, query)
        response = self._http.request(
            method,
            url,
            params=query or None,
            headers=headers,
            json=body,
        )

        if not response.is_success:
            logger.warning("%s %s failed with status %s", method, path, response.status_code)
            raise UpstreamError(
                status_code=response.status_code,
                body=response.text,
                path=path,
            )

        data = response.json()
        if not isinstance(data, dict):
            raise UpstreamError(
                message=f"Webflow API returned a non-object JSON body for {path}",
                status_code=response.status_code,
                body=response.text,
                path=path,
            )
        return data

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http.close()

    def __enter__(self) -> "WebflowClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<WebflowClient: {self.settings.base_url}>"
