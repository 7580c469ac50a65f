from __future__ import annotations

from kanboard_mcp.mcp_server.dispatcher import ToolContext
from kanboard_mcp.mcp_server.schemas import tool_ok
from kanboard_mcp.utils.formatting import format_date, is_flag_set, priority_label

DASHBOARD_TASK_LIMIT = 10


async def get_users(ctx: ToolContext, args: dict) -> dict:
    users = await ctx.fetch("getAllUsers")
    return tool_ok(
        users=[
            {
                "id": user.get("id"),
                "username": user.get("username"),
                "name": user.get("name") or user.get("username"),
                "email": user.get("email"),
                "role": user.get("role"),
                "is_active": is_flag_set(user.get("is_active")),
                "created": format_date(user.get("created"), ctx.tz),
            }
            for user in users
        ],
        total=len(users),
    )


async def get_my_dashboard(ctx: ToolContext, args: dict) -> dict:
    """Project counts plus the caller's first tasks.

    Both Kanboard calls are always made and both must succeed; a failure in
    either one fails the whole dashboard with the first error.
    """
    projects_result = await ctx.call("getAllProjects")
    tasks_result = await ctx.call("getMyTasks")
    projects = projects_result.unwrap()
    tasks = tasks_result.unwrap()

    return tool_ok(
        dashboard={
            "projects": {
                "total": len(projects),
                "active": sum(1 for project in projects if is_flag_set(project.get("is_active"))),
            },
            "my_tasks": {
                "total": len(tasks),
                "tasks": [
                    {
                        "id": task.get("id"),
                        "title": task.get("title"),
                        "project": task.get("project_name"),
                        "column": task.get("column_title"),
                        "priority": priority_label(task.get("priority")),
                        "due_date": format_date(task.get("date_due"), ctx.tz),
                        "url": ctx.links.task(task.get("id"), task.get("project_id")),
                    }
                    for task in tasks[:DASHBOARD_TASK_LIMIT]
                ],
            },
        }
    )
