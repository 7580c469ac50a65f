from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Protocol

from kanboard_mcp.config import Settings
from kanboard_mcp.mcp_server.errors import BackendCallError, ToolNotFoundError
from kanboard_mcp.mcp_server.schemas import BackendResult, ToolDescriptor, tool_failure
from kanboard_mcp.utils.formatting import KanboardLinks

logger = logging.getLogger(__name__)


class Backend(Protocol):
    async def call(self, method: str, params: dict | None = None) -> BackendResult: ...


@dataclass(frozen=True)
class ToolContext:
    backend: Backend
    links: KanboardLinks
    tz: tzinfo | None = None

    @classmethod
    def from_settings(cls, settings: Settings, backend: Backend) -> "ToolContext":
        return cls(
            backend=backend,
            links=KanboardLinks(settings.kanboard_url),
            tz=settings.display_tz(),
        )

    async def call(self, method: str, params: dict | None = None) -> BackendResult:
        return await self.backend.call(method, params)

    async def fetch(self, method: str, params: dict | None = None, missing_message: str | None = None) -> Any:
        result = await self.call(method, params)
        return result.unwrap(missing_message)


ToolHandler = Callable[[ToolContext, dict], Awaitable[dict]]


@dataclass(frozen=True)
class Tool:
    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool {tool.name} already registered")
        self._tools[tool.name] = tool

    def get(self, name: str | None) -> Tool:
        tool = self._tools.get(name) if name else None
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def descriptors(self) -> list[ToolDescriptor]:
        return [tool.descriptor for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


class ToolDispatcher:
    def __init__(self, registry: ToolRegistry, context: ToolContext) -> None:
        self.registry = registry
        self.context = context

    async def dispatch(self, tool_name: str | None, args: dict | None = None) -> dict:
        tool = self.registry.get(tool_name)
        logger.info("Executing tool %s", tool.name)
        try:
            return await tool.handler(self.context, args or {})
        except BackendCallError as exc:
            return tool_failure(str(exc))
        except Exception as exc:
            logger.exception("Tool %s failed", tool.name, extra={"tool": tool.name})
            return tool_failure(str(exc) or exc.__class__.__name__)
