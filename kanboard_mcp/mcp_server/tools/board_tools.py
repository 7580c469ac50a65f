from __future__ import annotations

from kanboard_mcp.mcp_server.dispatcher import ToolContext
from kanboard_mcp.mcp_server.schemas import tool_ok
from kanboard_mcp.utils.formatting import (
    NO_DESCRIPTION,
    UNASSIGNED,
    format_date,
    priority_label,
    truncate,
)

BOARD_DESCRIPTION_LIMIT = 100


def _board_task(ctx: ToolContext, task: dict, project_id) -> dict:
    return {
        "id": task.get("id"),
        "title": task.get("title"),
        "description": truncate(task.get("description"), BOARD_DESCRIPTION_LIMIT),
        "priority": priority_label(task.get("priority")),
        "owner": task.get("assignee_name") or UNASSIGNED,
        "created": format_date(task.get("date_creation"), ctx.tz),
        "due_date": format_date(task.get("date_due"), ctx.tz),
        "color": task.get("color_id"),
        "position": task.get("position"),
        "url": ctx.links.task(task.get("id"), project_id),
    }


async def get_board(ctx: ToolContext, args: dict) -> dict:
    project_id = args.get("project_id")
    columns = await ctx.fetch("getBoard", {"project_id": project_id})

    board = []
    for column in columns:
        tasks = [_board_task(ctx, task, project_id) for task in column.get("tasks") or []]
        board.append(
            {
                "id": column.get("id"),
                "title": column.get("title"),
                "position": column.get("position"),
                "task_limit": column.get("task_limit"),
                "tasks": tasks,
                "task_count": len(tasks),
            }
        )

    return tool_ok(
        project_id=project_id,
        board=board,
        total_tasks=sum(column["task_count"] for column in board),
    )


async def get_columns(ctx: ToolContext, args: dict) -> dict:
    project_id = args.get("project_id")
    columns = await ctx.fetch("getColumns", {"project_id": project_id})
    return tool_ok(
        project_id=project_id,
        columns=[
            {
                "id": column.get("id"),
                "title": column.get("title"),
                "position": column.get("position"),
                "task_limit": column.get("task_limit"),
                "description": column.get("description") or NO_DESCRIPTION,
            }
            for column in columns
        ],
        total=len(columns),
    )
