from __future__ import annotations

from kanboard_mcp.mcp_server.dispatcher import ToolContext
from kanboard_mcp.mcp_server.schemas import tool_ok
from kanboard_mcp.utils.formatting import format_date


async def add_comment(ctx: ToolContext, args: dict) -> dict:
    task_id = args.get("task_id")
    params = {"task_id": task_id, "content": args.get("comment")}
    if args.get("user_id"):
        params["user_id"] = args["user_id"]

    comment_id = await ctx.fetch("createComment", params)
    return tool_ok(comment_id=comment_id, task_id=task_id, message="Comment added successfully")


async def get_task_comments(ctx: ToolContext, args: dict) -> dict:
    task_id = args.get("task_id")
    comments = await ctx.fetch("getAllComments", {"task_id": task_id})
    return tool_ok(
        task_id=task_id,
        comments=[
            {
                "id": comment.get("id"),
                "comment": comment.get("comment"),
                "author": comment.get("username"),
                "created": format_date(comment.get("date_creation"), ctx.tz),
                "updated": format_date(comment.get("date_modification"), ctx.tz),
            }
            for comment in comments
        ],
        total=len(comments),
    )
