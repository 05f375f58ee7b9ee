"""
HTTP client for the inventory backend.
"""

import json
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from shared.logging import get_logger
from shared.errors import DecodeError, TransportError
from shared.metrics import MetricsCollector


# The backend refuses cross-origin POSTs declared as application/json, so the
# JSON payload travels as plain text.
POST_CONTENT_TYPE = "text/plain;charset=utf-8"


class BackendClient:
    """Client for the single-endpoint inventory backend.

    ``get`` and ``post`` both return the decoded JSON body. A non-2xx status
    raises ``TransportError``, as does a request that never got a response.
    A body that is not JSON raises ``DecodeError``. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        metrics: Optional[MetricsCollector] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.strip()
        self.timeout = timeout
        self.metrics = metrics
        self._transport = transport
        self.logger = get_logger("inventory.backend_client")

    async def get(self, params: Mapping[str, str]) -> Any:
        """GET the endpoint with ``params`` as the query string."""
        action = params.get("action", "unknown")

        async def _request(client: httpx.AsyncClient) -> httpx.Response:
            return await client.get(self.base_url, params=dict(params))

        return await self._send("GET", action, _request, log_context={"params": dict(params)})

    async def post(self, body: Dict[str, Any]) -> Any:
        """POST ``body`` serialized as JSON."""
        action = body.get("action", "unknown")
        payload = json.dumps(body)

        async def _request(client: httpx.AsyncClient) -> httpx.Response:
            return await client.post(
                self.base_url,
                content=payload,
                headers={"Content-Type": POST_CONTENT_TYPE},
            )

        return await self._send("POST", action, _request, log_context={"action": action})

    async def _send(self, method: str, action: str, request, log_context: Dict[str, Any]) -> Any:
        """Execute one request and decode the reply."""
        if not self.base_url:
            raise TransportError(None, "Backend URL is not configured", details={"action": action})

        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await request(client)
        except httpx.HTTPError as exc:
            self._record(method, action, "error", start)
            self.logger.error(
                "Backend request failed",
                method=method,
                error=str(exc) or exc.__class__.__name__,
                **log_context
            )
            raise TransportError(
                None,
                str(exc) or exc.__class__.__name__,
                details={"action": action, "method": method}
            ) from exc

        self._record(method, action, str(response.status_code), start)

        if not response.is_success:
            self.logger.error(
                "Backend returned error status",
                method=method,
                status_code=response.status_code,
                **log_context
            )
            raise TransportError(
                response.status_code,
                response.reason_phrase,
                details={"action": action, "method": method}
            )

        try:
            data = response.json()
        except ValueError as exc:
            self.logger.error("Backend response is not JSON", method=method, **log_context)
            raise DecodeError(
                f"Response to {action} is not valid JSON",
                details={"action": action, "body": response.text[:200]}
            ) from exc

        self.logger.debug("Backend request completed", method=method, status_code=response.status_code, **log_context)
        return data

    def _record(self, method: str, action: str, status: str, start: float) -> None:
        if self.metrics:
            self.metrics.record_backend_request(method, action, status, time.perf_counter() - start)
