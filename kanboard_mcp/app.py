from __future__ import annotations

import logging

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kanboard_mcp.api.routes import router
from kanboard_mcp.config import Settings, get_settings
from kanboard_mcp.integrations.kanboard_client import KanboardClient
from kanboard_mcp.mcp_server.catalog import build_registry
from kanboard_mcp.mcp_server.dispatcher import ToolContext, ToolDispatcher
from kanboard_mcp.mcp_server.server import MCPServer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    client = KanboardClient(settings, transport=transport)
    dispatcher = ToolDispatcher(build_registry(), ToolContext.from_settings(settings, client))
    mcp_server = MCPServer(settings, dispatcher)

    app = FastAPI(
        title=settings.app_name,
        description="MCP tools gateway for the Kanboard JSON-RPC API",
        version=settings.app_version,
        debug=settings.app_debug,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.kanboard_client = client
    app.state.mcp_server = mcp_server
    app.include_router(router)

    @app.on_event("startup")
    def startup_event() -> None:
        logger.info(
            "Kanboard MCP server started",
            extra={"port": settings.app_port, "kanboard_url": settings.kanboard_url},
        )
        logger.info("MCP endpoint: /mcp, health: /health, test: /test")
        logger.info("Kanboard: %s (%s tools available)", settings.kanboard_url, mcp_server.tool_count)
        if not settings.has_credentials:
            logger.warning("Kanboard credentials not properly set, check KANBOARD_USERNAME and KANBOARD_PASSWORD")

    @app.on_event("shutdown")
    def shutdown_event() -> None:
        logger.info("Server shutting down gracefully")

    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    main()
