"""Tool catalog advertised through ``tools/list``.

Descriptors are listed in the order clients see them. Input schemas are
advertised only; arguments are passed to Kanboard without local validation.
"""

from __future__ import annotations

from kanboard_mcp.mcp_server.dispatcher import Tool, ToolHandler, ToolRegistry
from kanboard_mcp.mcp_server.schemas import ToolDescriptor, number, object_schema, string
from kanboard_mcp.mcp_server.tools import board_tools, comment_tools, project_tools, task_tools, user_tools


def _tool(name: str, description: str, properties: dict | None = None, required: list[str] | None = None) -> ToolDescriptor:
    return ToolDescriptor(name=name, description=description, input_schema=object_schema(properties, required))


TOOL_DESCRIPTORS: tuple[ToolDescriptor, ...] = (
    _tool("get_all_projects", "Get all projects from Kanboard"),
    _tool(
        "get_project",
        "Get details of a specific project",
        {"project_id": number("Project ID")},
        ["project_id"],
    ),
    _tool(
        "create_project",
        "Create a new project",
        {"name": string("Project name"), "description": string("Project description")},
        ["name"],
    ),
    _tool(
        "get_board",
        "Get board view of a project with all columns and tasks",
        {"project_id": number("Project ID")},
        ["project_id"],
    ),
    _tool(
        "get_all_tasks",
        "Get all tasks for a project",
        {
            "project_id": number("Project ID"),
            "status_id": number("Task status (1=open, 0=closed)", default=1),
        },
        ["project_id"],
    ),
    _tool(
        "get_task",
        "Get detailed information about a specific task",
        {"task_id": number("Task ID")},
        ["task_id"],
    ),
    _tool(
        "create_task",
        "Create a new task",
        {
            "project_id": number("Project ID"),
            "title": string("Task title"),
            "description": string("Task description"),
            "owner_id": number("User ID of the task owner"),
            "column_id": number("Column ID where to place the task"),
            "priority": number("Priority (0=none, 1=low, 2=medium, 3=high, 4=urgent)", default=0),
        },
        ["project_id", "title"],
    ),
    _tool(
        "update_task",
        "Update an existing task",
        {
            "task_id": number("Task ID"),
            "title": string("New task title"),
            "description": string("New task description"),
            "owner_id": number("New owner user ID"),
            "priority": number("New priority (0-4)"),
        },
        ["task_id"],
    ),
    _tool(
        "move_task",
        "Move a task to a different column",
        {
            "task_id": number("Task ID"),
            "column_id": number("Target column ID"),
            "position": number("Position in the column (optional)", default=1),
            "project_id": number("Project ID the task belongs to (optional)"),
            "swimlane_id": number("Target swimlane ID (optional)"),
        },
        ["task_id", "column_id"],
    ),
    _tool(
        "close_task",
        "Close/complete a task",
        {"task_id": number("Task ID")},
        ["task_id"],
    ),
    _tool(
        "get_columns",
        "Get all columns for a project",
        {"project_id": number("Project ID")},
        ["project_id"],
    ),
    _tool("get_users", "Get all users in the system"),
    _tool("get_my_dashboard", "Get dashboard view with user's tasks and projects"),
    _tool("get_overdue_tasks", "Get all overdue tasks across projects"),
    _tool(
        "search_tasks",
        "Search for tasks by query",
        {
            "project_id": number("Project ID (optional, searches all projects if not specified)"),
            "query": string("Search query"),
        },
        ["query"],
    ),
    _tool(
        "add_comment",
        "Add a comment to a task",
        {
            "task_id": number("Task ID"),
            "comment": string("Comment text"),
            "user_id": number("Author user ID (optional)"),
        },
        ["task_id", "comment"],
    ),
    _tool(
        "get_task_comments",
        "Get all comments for a task",
        {"task_id": number("Task ID")},
        ["task_id"],
    ),
)

TOOL_HANDLERS: dict[str, ToolHandler] = {
    "get_all_projects": project_tools.get_all_projects,
    "get_project": project_tools.get_project,
    "create_project": project_tools.create_project,
    "get_board": board_tools.get_board,
    "get_all_tasks": task_tools.get_all_tasks,
    "get_task": task_tools.get_task,
    "create_task": task_tools.create_task,
    "update_task": task_tools.update_task,
    "move_task": task_tools.move_task,
    "close_task": task_tools.close_task,
    "get_columns": board_tools.get_columns,
    "get_users": user_tools.get_users,
    "get_my_dashboard": user_tools.get_my_dashboard,
    "get_overdue_tasks": task_tools.get_overdue_tasks,
    "search_tasks": task_tools.search_tasks,
    "add_comment": comment_tools.add_comment,
    "get_task_comments": comment_tools.get_task_comments,
}


def build_registry() -> ToolRegistry:
    missing = [descriptor.name for descriptor in TOOL_DESCRIPTORS if descriptor.name not in TOOL_HANDLERS]
    if missing:
        raise RuntimeError(f"Tools without handlers: {missing}")
    return ToolRegistry(Tool(descriptor, TOOL_HANDLERS[descriptor.name]) for descriptor in TOOL_DESCRIPTORS)
