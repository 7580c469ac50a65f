from __future__ import annotations

import json
import logging
from typing import Any

from kanboard_mcp.config import Settings
from kanboard_mcp.mcp_server.dispatcher import ToolDispatcher
from kanboard_mcp.mcp_server.errors import INVALID_REQUEST, PARSE_ERROR, JsonRpcError, MethodNotFoundError

logger = logging.getLogger(__name__)

_MISSING = object()


def jsonrpc_response(request_id: Any = _MISSING, result: Any = None, error: dict | None = None) -> dict:
    response: dict[str, Any] = {"jsonrpc": "2.0"}
    if request_id is not _MISSING:
        response["id"] = request_id
    if error is not None:
        response["error"] = error
    else:
        response["result"] = result
    return response


def parse_error() -> dict:
    return jsonrpc_response(error={"code": PARSE_ERROR, "message": "Parse error"})


class MCPServer:
    """Routes MCP JSON-RPC methods and wraps every outcome in an envelope."""

    def __init__(self, settings: Settings, dispatcher: ToolDispatcher) -> None:
        self.settings = settings
        self.dispatcher = dispatcher
        self.handlers = {
            "initialize": self._initialize,
            "ping": self._empty,
            "notifications/initialized": self._empty,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "resources/list": self._list_resources,
            "prompts/list": self._list_prompts,
        }

    @property
    def tool_count(self) -> int:
        return len(self.dispatcher.registry)

    def tool_summaries(self) -> list[dict]:
        return [descriptor.as_summary() for descriptor in self.dispatcher.registry.descriptors()]

    async def handle(self, payload: Any) -> dict:
        if not isinstance(payload, dict):
            return jsonrpc_response(error={"code": INVALID_REQUEST, "message": "Invalid Request"})

        request_id = payload.get("id", _MISSING)
        method = payload.get("method")
        logger.info("MCP request %s", method, extra={"method": method})

        try:
            handler = self.handlers.get(method)
            if handler is None:
                raise MethodNotFoundError(method)
            result = await handler(payload.get("params") or {})
            return jsonrpc_response(request_id, result=result)
        except JsonRpcError as exc:
            return jsonrpc_response(request_id, error=exc.to_dict())
        except Exception as exc:
            logger.exception("MCP request failed", extra={"method": method})
            return jsonrpc_response(request_id, error=JsonRpcError(str(exc)).to_dict())

    async def _initialize(self, params: dict) -> dict:
        logger.info("Initializing server")
        return {
            "protocolVersion": self.settings.protocol_version,
            "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
            "serverInfo": {
                "name": self.settings.app_name,
                "version": self.settings.app_version,
                "description": self.settings.app_description,
            },
        }

    async def _empty(self, params: dict) -> dict:
        return {}

    async def _list_resources(self, params: dict) -> dict:
        return {"resources": []}

    async def _list_prompts(self, params: dict) -> dict:
        return {"prompts": []}

    async def _list_tools(self, params: dict) -> dict:
        return {"tools": [descriptor.as_listing() for descriptor in self.dispatcher.registry.descriptors()]}

    async def _call_tool(self, params: dict) -> dict:
        result = await self.dispatcher.dispatch(params.get("name"), params.get("arguments"))
        return {
            "content": [
                {
                    "type": "text",
                    "text": json.dumps(result, indent=2, ensure_ascii=False),
                }
            ]
        }
