"""
HTTP transport for the HubSpot CRM API.

Issues authenticated requests with httpx and hands decoded JSON to the
response envelopes. Retries live here and nowhere else: the resource
services above make exactly one transport call per operation.
"""

import logging
import time
from typing import Any

import httpx

from ..core.envelope import RequestPayload
from ..core.models import (
    DEFAULT_API_BASE_URL,
    DEFAULT_OBJECT_PATH,
    APIError,
    ConfigError,
    PropertyDecodeError,
)
from ..core.options import RequestQueryOption, RequestSearchOption

logger = logging.getLogger(__name__)


def build_auth_headers(credentials: dict[str, Any]) -> dict[str, str]:
    """
    Build authentication headers for the HubSpot API.

    HubSpot uses Bearer token authentication with either:
    - Private app access tokens
    - OAuth 2.0 access tokens

    Legacy API keys are sent as the 'hapikey' query parameter instead, so
    they produce no header.

    Args:
        credentials: Dictionary with an 'access_token' or 'api_key' key

    Returns:
        Dictionary of authentication headers

    Raises:
        ConfigError: If neither credential is present
    """
    if credentials.get("access_token"):
        return {"Authorization": f"Bearer {credentials['access_token']}"}
    if credentials.get("api_key"):
        return {}
    raise ConfigError("HubSpot credentials must include 'access_token' or 'api_key'")


class HubSpotClient:
    """
    Transport for CRM object endpoints.

    Features:
    - Bearer token or legacy API key authentication
    - Built-in retries for transient failures (5xx, network errors)
    - Decoding of responses into ResponseResource-style targets
    """

    def __init__(
        self,
        credentials: dict[str, Any],
        api_base_url: str = DEFAULT_API_BASE_URL,
        object_path: str = DEFAULT_OBJECT_PATH,
        http_client: httpx.Client | None = None,
        timeout_seconds: float = 10.0,
        max_retries: int = 3,
    ):
        """
        Initialize the transport.

        Args:
            credentials: Auth credentials (e.g., {"access_token": "..."})
            api_base_url: API root (e.g., "https://api.hubapi.com")
            object_path: Path of the CRM objects API under the root
            http_client: Optional httpx client (created if None)
            timeout_seconds: Request timeout in seconds
            max_retries: Maximum attempts for failed requests
        """
        self.credentials = credentials
        self.api_base_url = api_base_url
        self.object_path = object_path
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries

        # Track if we own the HTTP client (for cleanup)
        self._owns_client = http_client is None

        if http_client is None:
            self.http_client = httpx.Client(timeout=timeout_seconds)
        else:
            self.http_client = http_client

    def close(self) -> None:
        """Close the HTTP client if we created it."""
        if self._owns_client and self.http_client:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _build_url(self, path: str) -> str:
        """
        Build full URL from base URL, object path and resource path.

        Args:
            path: Resource path (e.g., "companies/42")

        Returns:
            Full URL
        """
        parts = [self.api_base_url.rstrip("/"), self.object_path.strip("/"), path.lstrip("/")]
        return "/".join(part for part in parts if part)

    @staticmethod
    def _encode_body(body: Any) -> Any:
        if isinstance(body, RequestPayload):
            return body.to_dict()
        if isinstance(body, RequestSearchOption):
            return body.to_body()
        return body

    @staticmethod
    def _encode_params(params: Any) -> dict[str, Any]:
        if params is None:
            return {}
        if isinstance(params, RequestQueryOption):
            return params.to_query_params()
        return dict(params)

    @staticmethod
    def _error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _request(
        self,
        method: str,
        path: str,
        params: Any = None,
        json_body: Any = None,
    ) -> Any:
        """
        Make an authenticated HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Resource path relative to the object path
            params: Query parameters (dict or RequestQueryOption)
            json_body: JSON request body (dict, RequestPayload or RequestSearchOption)

        Returns:
            Decoded response JSON ({} for an empty body)

        Raises:
            APIError: On non-2xx response or network failure after retries
            PropertyDecodeError: If a 2xx response body is not valid JSON
        """
        url = self._build_url(path)

        headers = build_auth_headers(self.credentials)
        headers["Content-Type"] = "application/json"

        query = self._encode_params(params)
        if self.credentials.get("api_key") and not self.credentials.get("access_token"):
            query["hapikey"] = self.credentials["api_key"]

        body = self._encode_body(json_body)

        last_error = None
        for attempt in range(self.max_retries):
            logger.debug(f"{method} {url} (attempt {attempt + 1})")
            try:
                response = self.http_client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=query,
                    json=body,
                )
            except httpx.RequestError as e:
                # Network errors - retry
                last_error = APIError(f"Request failed: {e}")
            else:
                if 200 <= response.status_code < 300:
                    if not response.content:
                        return {}
                    try:
                        return response.json()
                    except ValueError as e:
                        raise PropertyDecodeError(f"Invalid JSON in response from {url}: {e}")

                # 4xx errors - don't retry, fail immediately
                if 400 <= response.status_code < 500:
                    raise APIError(
                        f"API request failed: {response.status_code} {response.text}",
                        status_code=response.status_code,
                        body=self._error_body(response),
                    )

                # 5xx errors - retry
                last_error = APIError(
                    f"Server error: {response.status_code} {response.text}",
                    status_code=response.status_code,
                    body=self._error_body(response),
                )

            # Wait before retry (exponential backoff)
            if attempt < self.max_retries - 1:
                logger.warning(f"{method} {url} failed ({last_error}), retrying")
                time.sleep(2 ** attempt)

        raise last_error or APIError("Request failed after retries")

    def get(self, path: str, resource: Any = None, params: Any = None) -> Any:
        """
        Issue a GET request.

        Args:
            path: Resource path (e.g., "companies/42")
            resource: Optional envelope with a load() method to populate
            params: Query parameters (dict or RequestQueryOption)

        Returns:
            The populated resource, or the decoded JSON when resource is None
        """
        data = self._request("GET", path, params=params)
        return resource.load(data) if resource is not None else data

    def post(self, path: str, body: Any, resource: Any = None) -> Any:
        """Issue a POST request; see get() for resource handling."""
        data = self._request("POST", path, json_body=body)
        return resource.load(data) if resource is not None else data

    def patch(self, path: str, body: Any, resource: Any = None) -> Any:
        """Issue a PATCH request; see get() for resource handling."""
        data = self._request("PATCH", path, json_body=body)
        return resource.load(data) if resource is not None else data

    def delete(self, path: str) -> None:
        """Issue a DELETE request. The response body is discarded."""
        self._request("DELETE", path)
