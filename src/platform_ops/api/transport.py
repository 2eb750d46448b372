"""
HTTP transport for control plane operations.

Posts one operation document per call to the GraphQL endpoint and decodes
the response into a RemoteEnvelope. No retries and no caching: every
failure is surfaced to the caller as TransportError or RemoteError.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from .. import __version__
from ..errors import RemoteError, TransportError
from ..settings import Settings
from .envelope import RemoteEnvelope
from .request import OperationRequest

logger = logging.getLogger(__name__)

__all__ = ["TransportClient"]


class TransportClient:
    """
    Executes OperationRequests against the control plane.

    One blocking round trip per ``execute`` call. The timeout comes from
    settings and is enforced by httpx.
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        """
        Initialize transport.

        Args:
            settings: Client settings (endpoint, token, timeout)
            http_client: Pre-built httpx client (tests inject a MockTransport here)
        """
        self.settings = settings
        self.url = settings.graphql_url
        self._owns_client = http_client is None

        headers = {"User-Agent": f"platform-ops/{__version__}"}
        if settings.access_token:
            headers["Authorization"] = f"Bearer {settings.access_token}"

        if http_client is None:
            http_client = httpx.Client(
                timeout=httpx.Timeout(settings.http_timeout_s),
                follow_redirects=True,
            )
        self.client = http_client
        self._headers = headers

    def execute(self, request: OperationRequest) -> RemoteEnvelope:
        """
        Execute a request and decode the response envelope.

        Args:
            request: Operation to run

        Returns:
            RemoteEnvelope with data and an empty error list

        Raises:
            TransportError: Network failure, malformed body, or HTTP error status
            RemoteError: Response carried a non-empty error list
        """
        logger.debug(f"Executing {request.kind.value} {request.name} against {self.url}")

        try:
            response = self.client.post(self.url, json=request.payload(), headers=self._headers)
        except httpx.RequestError as e:
            raise TransportError(f"Network error running {request.name}: {e}") from e

        envelope = self._decode(request, response)

        if envelope.has_errors:
            logger.debug(f"{request.name} returned {len(envelope.errors)} remote error(s)")
            raise RemoteError(envelope.errors)

        if response.is_error:
            raise TransportError(
                f"Control plane returned HTTP {response.status_code} for {request.name}"
            )

        return envelope

    def _decode(self, request: OperationRequest, response: httpx.Response) -> RemoteEnvelope:
        """Decode the body; an error status with an unreadable body is a plain HTTP failure."""
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            if response.is_error:
                raise TransportError(
                    f"Control plane returned HTTP {response.status_code} for {request.name}"
                ) from e
            raise TransportError(f"Invalid JSON in response to {request.name}: {e}") from e

        if not isinstance(payload, dict):
            raise TransportError(
                f"Response to {request.name} is not a JSON object: {type(payload).__name__}"
            )

        try:
            return RemoteEnvelope.from_payload(payload)
        except ValueError as e:
            raise TransportError(f"Malformed response to {request.name}: {e}") from e

    def close(self):
        """Close HTTP client if this transport created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
