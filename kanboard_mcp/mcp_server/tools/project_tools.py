from __future__ import annotations

from kanboard_mcp.mcp_server.dispatcher import ToolContext
from kanboard_mcp.mcp_server.schemas import tool_ok
from kanboard_mcp.utils.formatting import NO_DESCRIPTION, format_date, is_flag_set


async def get_all_projects(ctx: ToolContext, args: dict) -> dict:
    projects = await ctx.fetch("getAllProjects")
    return tool_ok(
        projects=[
            {
                "id": project.get("id"),
                "name": project.get("name"),
                "description": project.get("description") or NO_DESCRIPTION,
                "is_active": is_flag_set(project.get("is_active")),
                "is_public": is_flag_set(project.get("is_public")),
                "created": format_date(project.get("created"), ctx.tz),
                "modified": format_date(project.get("modified"), ctx.tz),
                "owner": project.get("owner_id"),
            }
            for project in projects
        ],
        total=len(projects),
    )


async def get_project(ctx: ToolContext, args: dict) -> dict:
    project = await ctx.fetch(
        "getProjectById",
        {"project_id": args.get("project_id")},
        missing_message="Project not found",
    )
    return tool_ok(
        project={
            "id": project.get("id"),
            "name": project.get("name"),
            "description": project.get("description") or NO_DESCRIPTION,
            "is_active": is_flag_set(project.get("is_active")),
            "is_public": is_flag_set(project.get("is_public")),
            "created": format_date(project.get("created"), ctx.tz),
            "modified": format_date(project.get("modified"), ctx.tz),
            "owner_id": project.get("owner_id"),
            "start_date": format_date(project.get("start_date"), ctx.tz),
            "end_date": format_date(project.get("end_date"), ctx.tz),
            "url": ctx.links.project(project.get("id")),
        }
    )


async def create_project(ctx: ToolContext, args: dict) -> dict:
    name = args.get("name")
    project_id = await ctx.fetch(
        "createProject",
        {"name": name, "description": args.get("description") or ""},
    )
    return tool_ok(
        project_id=project_id,
        message=f'Project "{name}" created successfully',
        url=ctx.links.project(project_id),
    )
