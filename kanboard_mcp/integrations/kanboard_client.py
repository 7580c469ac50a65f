from __future__ import annotations

import logging
from typing import Any

import httpx

from kanboard_mcp.config import Settings, get_settings
from kanboard_mcp.mcp_server.schemas import BackendResult
from kanboard_mcp.utils.time import epoch_millis

logger = logging.getLogger(__name__)


class KanboardClient:
    """JSON-RPC client for the Kanboard API.

    ``call`` never raises: Kanboard errors, HTTP errors and transport failures
    all come back as a failed ``BackendResult``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.transport = transport

    @property
    def api_url(self) -> str:
        return self.settings.kanboard_api_url

    def _payload(self, method: str, params: dict | None) -> dict:
        return {
            "jsonrpc": "2.0",
            "method": method,
            "id": epoch_millis(),
            "params": params or {},
        }

    @staticmethod
    def _error_message(body: Any) -> str | None:
        if not isinstance(body, dict):
            return None
        error = body.get("error")
        if not error:
            return None
        if isinstance(error, dict):
            return error.get("message") or "Unknown Kanboard API error"
        return str(error)

    async def call(self, method: str, params: dict | None = None) -> BackendResult:
        payload = self._payload(method, params)
        try:
            async with httpx.AsyncClient(
                auth=(self.settings.kanboard_username, self.settings.kanboard_password),
                timeout=self.settings.request_timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as exc:
            message = str(exc) or exc.__class__.__name__
            logger.warning("Kanboard request failed: %s", message, extra={"method": method})
            return BackendResult.failure(message)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            message = self._error_message(body) or f"Request failed with status code {response.status_code}"
            logger.warning("Kanboard returned HTTP %s: %s", response.status_code, message, extra={"method": method})
            return BackendResult.failure(message)

        if not isinstance(body, dict):
            logger.warning("Kanboard returned a non JSON-RPC body", extra={"method": method})
            return BackendResult.failure("Invalid JSON response from Kanboard")

        message = self._error_message(body)
        if message is not None:
            logger.warning("Kanboard API error: %s", message, extra={"method": method})
            return BackendResult.failure(message)

        return BackendResult.ok(body.get("result"))

    async def get_version(self) -> BackendResult:
        return await self.call("getVersion")
