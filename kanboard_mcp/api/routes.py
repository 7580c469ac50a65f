from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from kanboard_mcp.config import Settings
from kanboard_mcp.integrations.kanboard_client import KanboardClient
from kanboard_mcp.mcp_server.server import MCPServer, parse_error
from kanboard_mcp.utils.time import utc_timestamp

logger = logging.getLogger(__name__)
router = APIRouter(tags=["kanboard-mcp"])


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_mcp_server(request: Request) -> MCPServer:
    return request.app.state.mcp_server


def get_kanboard_client(request: Request) -> KanboardClient:
    return request.app.state.kanboard_client


@router.post("/mcp")
async def mcp_endpoint(request: Request, server: MCPServer = Depends(get_mcp_server)):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Rejected MCP request with an unparsable body")
        return parse_error()
    return await server.handle(payload)


@router.get("/mcp")
def mcp_info(
    settings: Settings = Depends(get_settings_dep),
    server: MCPServer = Depends(get_mcp_server),
) -> dict:
    return {
        "protocol": "mcp",
        "version": settings.protocol_version,
        "server": settings.app_name,
        "description": f"{settings.app_description} - manage projects, tasks, and boards",
        "capabilities": {"tools": True, "resources": False, "prompts": False},
        "tools": server.tool_summaries(),
        "kanboard": {
            "url": settings.kanboard_url,
            "api_endpoint": settings.kanboard_api_url,
        },
    }


@router.get("/health")
async def health(
    settings: Settings = Depends(get_settings_dep),
    server: MCPServer = Depends(get_mcp_server),
    client: KanboardClient = Depends(get_kanboard_client),
):
    base = {
        "server": settings.app_name,
        "version": settings.app_version,
        "tools": server.tool_count,
    }
    try:
        response = await client.get_version()
    except Exception as exc:
        logger.exception("Health check failed")
        return JSONResponse(
            status_code=500,
            content={
                "status": "unhealthy",
                **base,
                "kanboard": {"url": settings.kanboard_url, "connection": "failed", "error": str(exc)},
                "timestamp": utc_timestamp(),
            },
        )

    return {
        "status": "healthy",
        **base,
        "kanboard": {
            "url": settings.kanboard_url,
            "connection": "connected" if response.success else "failed",
            "version": response.data if response.success else None,
        },
        "timestamp": utc_timestamp(),
    }


@router.get("/test")
async def smoke_test(
    server: MCPServer = Depends(get_mcp_server),
    client: KanboardClient = Depends(get_kanboard_client),
):
    try:
        version = await client.get_version()
        projects = await client.call("getAllProjects")
        return {
            "test": "passed",
            "kanboard_connection": "working",
            "version": version.data if version.success else "failed",
            "projects_count": len(projects.data or []) if projects.success else "failed",
            "tools": server.tool_count,
        }
    except Exception as exc:
        logger.exception("Smoke test failed")
        return JSONResponse(
            status_code=500,
            content={"test": "failed", "kanboard_connection": "failed", "error": str(exc)},
        )
