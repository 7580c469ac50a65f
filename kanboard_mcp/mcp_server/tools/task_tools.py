from __future__ import annotations

from kanboard_mcp.mcp_server.dispatcher import ToolContext
from kanboard_mcp.mcp_server.schemas import tool_ok
from kanboard_mcp.utils.formatting import (
    DATE_NOT_SET,
    NO_DESCRIPTION,
    UNASSIGNED,
    days_overdue,
    format_date,
    hours,
    is_flag_set,
    priority_label,
    truncate,
)

TASK_LIST_DESCRIPTION_LIMIT = 150
SEARCH_DESCRIPTION_LIMIT = 100

STATUS_OPEN = 1

UPDATABLE_FIELDS = ("title", "description", "owner_id", "priority")


async def get_all_tasks(ctx: ToolContext, args: dict) -> dict:
    project_id = args.get("project_id")
    status_id = args["status_id"] if args.get("status_id") is not None else STATUS_OPEN
    tasks = await ctx.fetch("getAllTasks", {"project_id": project_id, "status_id": status_id})
    return tool_ok(
        project_id=project_id,
        status="Open" if str(status_id) == str(STATUS_OPEN) else "Closed",
        tasks=[
            {
                "id": task.get("id"),
                "title": task.get("title"),
                "description": truncate(task.get("description"), TASK_LIST_DESCRIPTION_LIMIT),
                "column": task.get("column_title"),
                "priority": priority_label(task.get("priority")),
                "owner": task.get("assignee_name") or UNASSIGNED,
                "creator": task.get("creator_name"),
                "created": format_date(task.get("date_creation"), ctx.tz),
                "modified": format_date(task.get("date_modification"), ctx.tz),
                "due_date": format_date(task.get("date_due"), ctx.tz),
                "completed": format_date(task.get("date_completed"), ctx.tz),
                "url": ctx.links.task(task.get("id"), project_id),
            }
            for task in tasks
        ],
        total=len(tasks),
    )


async def get_task(ctx: ToolContext, args: dict) -> dict:
    task = await ctx.fetch("getTask", {"task_id": args.get("task_id")}, missing_message="Task not found")
    return tool_ok(
        task={
            "id": task.get("id"),
            "title": task.get("title"),
            "description": task.get("description") or NO_DESCRIPTION,
            "project_id": task.get("project_id"),
            "project_name": task.get("project_name"),
            "column": task.get("column_title"),
            "column_id": task.get("column_id"),
            "priority": priority_label(task.get("priority")),
            "owner": task.get("assignee_name") or UNASSIGNED,
            "owner_id": task.get("owner_id"),
            "creator": task.get("creator_name"),
            "created": format_date(task.get("date_creation"), ctx.tz),
            "modified": format_date(task.get("date_modification"), ctx.tz),
            "started": format_date(task.get("date_started"), ctx.tz),
            "due_date": format_date(task.get("date_due"), ctx.tz),
            "completed": format_date(task.get("date_completed"), ctx.tz),
            "time_estimated": hours(task.get("time_estimated"), DATE_NOT_SET),
            "time_spent": hours(task.get("time_spent"), "0h"),
            "is_active": is_flag_set(task.get("is_active")),
            "position": task.get("position"),
            "score": task.get("score"),
            "url": ctx.links.task(task.get("id"), task.get("project_id")),
        }
    )


async def create_task(ctx: ToolContext, args: dict) -> dict:
    project_id = args.get("project_id")
    title = args.get("title")
    params = {
        "project_id": project_id,
        "title": title,
        "description": args.get("description") or "",
        "priority": args.get("priority") or 0,
    }
    # Kanboard picks the first column and no owner when these are omitted.
    if args.get("owner_id"):
        params["owner_id"] = args["owner_id"]
    if args.get("column_id"):
        params["column_id"] = args["column_id"]

    task_id = await ctx.fetch("createTask", params)
    return tool_ok(
        task_id=task_id,
        message=f'Task "{title}" created successfully',
        url=ctx.links.task(task_id, project_id),
    )


async def update_task(ctx: ToolContext, args: dict) -> dict:
    task_id = args.get("task_id")
    params = {"id": task_id}
    params.update({field: args[field] for field in UPDATABLE_FIELDS if field in args})

    await ctx.fetch("updateTask", params)
    return tool_ok(task_id=task_id, message="Task updated successfully")


async def move_task(ctx: ToolContext, args: dict) -> dict:
    task_id = args.get("task_id")
    column_id = args.get("column_id")
    params = {
        "project_id": args.get("project_id") or None,
        "task_id": task_id,
        "column_id": column_id,
        "position": args.get("position") or 1,
    }
    if args.get("swimlane_id"):
        params["swimlane_id"] = args["swimlane_id"]

    await ctx.fetch("moveTaskPosition", params)
    return tool_ok(task_id=task_id, new_column_id=column_id, message="Task moved successfully")


async def close_task(ctx: ToolContext, args: dict) -> dict:
    task_id = args.get("task_id")
    await ctx.fetch("closeTask", {"task_id": task_id})
    return tool_ok(task_id=task_id, message="Task closed successfully")


async def get_overdue_tasks(ctx: ToolContext, args: dict) -> dict:
    tasks = await ctx.fetch("getOverdueTasks")
    return tool_ok(
        overdue_tasks=[
            {
                "id": task.get("id"),
                "title": task.get("title"),
                "project": task.get("project_name"),
                "column": task.get("column_title"),
                "owner": task.get("assignee_name") or UNASSIGNED,
                "due_date": format_date(task.get("date_due"), ctx.tz),
                "days_overdue": days_overdue(task.get("date_due")),
                "priority": priority_label(task.get("priority")),
                "url": ctx.links.task(task.get("id"), task.get("project_id")),
            }
            for task in tasks
        ],
        total=len(tasks),
    )


async def search_tasks(ctx: ToolContext, args: dict) -> dict:
    query = args.get("query")
    params = {"query": query}
    if args.get("project_id"):
        params["project_id"] = args["project_id"]

    tasks = await ctx.fetch("searchTasks", params)
    return tool_ok(
        query=query,
        project_id=args.get("project_id") or "all",
        results=[
            {
                "id": task.get("id"),
                "title": task.get("title"),
                "description": truncate(task.get("description"), SEARCH_DESCRIPTION_LIMIT),
                "project": task.get("project_name"),
                "column": task.get("column_title"),
                "owner": task.get("assignee_name") or UNASSIGNED,
                "created": format_date(task.get("date_creation"), ctx.tz),
                "priority": priority_label(task.get("priority")),
                "url": ctx.links.task(task.get("id"), task.get("project_id")),
            }
            for task in tasks
        ],
        total=len(tasks),
    )
