"""
Base HTTP Client

Shared base class for thin HTTP clients used by the lookup engine.
"""

from typing import Dict, Any, Optional
import httpx

from order_lookup.errors import UpstreamError


class BaseClient:
    """Base HTTP client with common error handling."""

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize base client.

        Args:
            base_url: API base URL
            headers: Headers sent with every request (auth, content type)
            timeout: Request timeout in seconds, applied to every call
            transport: Optional httpx transport (used by tests)
        """
        if not base_url:
            raise ValueError("Base URL is required")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Create a single httpx client instance for reuse
        self._client = httpx.Client(
            headers=headers or {},
            timeout=timeout,
            transport=transport
        )

    def _send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """
        Make HTTP request and return the raw response.

        Raises:
            UpstreamError: On network failures or non-2xx responses
        """
        url = f"{self.base_url}{path}"

        try:
            response = self._client.request(
                method=method,
                url=url,
                json=json,
                params=params
            )
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            error_text = e.response.text[:500] if e.response.text else ""
            raise UpstreamError(
                f"API returned error {status_code}: {error_text}"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(
                f"API request failed: {str(e)}"
            ) from e

    def _parse_json(self, response: httpx.Response) -> Dict[str, Any]:
        """
        Parse a JSON object body.

        Raises:
            UpstreamError: If the body is not a JSON object
        """
        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"API returned malformed JSON: {response.text[:200]}"
            ) from e
        if not isinstance(payload, dict):
            raise UpstreamError(
                f"API returned unexpected payload type: {type(payload).__name__}"
            )
        return payload

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Make HTTP request and return parsed JSON.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (will be appended to base_url)
            json: JSON payload for POST/PUT requests
            params: Query parameters for GET requests

        Returns:
            Parsed JSON response

        Raises:
            UpstreamError: On network failures, HTTP errors or malformed JSON
        """
        response = self._send(method, path, json=json, params=params)
        return self._parse_json(response)

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()
