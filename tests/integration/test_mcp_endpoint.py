from __future__ import annotations

import json


def _rpc(client, method: str, params: dict | None = None, request_id: int | None = 1) -> dict:
    body: dict = {"jsonrpc": "2.0", "method": method}
    if request_id is not None:
        body["id"] = request_id
    if params is not None:
        body["params"] = params
    response = client.post("/mcp", json=body)
    assert response.status_code == 200
    return response.json()


def test_initialize_advertises_tools_capability(test_ctx) -> None:
    payload = _rpc(test_ctx["client"], "initialize", {"protocolVersion": "2024-11-05"})

    assert payload["jsonrpc"] == "2.0"
    assert payload["id"] == 1
    result = payload["result"]
    assert result["protocolVersion"] == "2024-11-05"
    assert result["capabilities"] == {"tools": {}, "resources": {}, "prompts": {}}
    assert result["serverInfo"]["name"] == "kanboard-mcp-server"


def test_ping_and_initialized_notification(test_ctx) -> None:
    client = test_ctx["client"]

    assert _rpc(client, "ping", request_id=7) == {"jsonrpc": "2.0", "id": 7, "result": {}}
    assert _rpc(client, "notifications/initialized", request_id=None) == {"jsonrpc": "2.0", "result": {}}


def test_tools_list_returns_full_catalog(test_ctx) -> None:
    tools = _rpc(test_ctx["client"], "tools/list")["result"]["tools"]

    assert len(tools) == 17
    assert tools[0]["name"] == "get_all_projects"
    close_task = next(tool for tool in tools if tool["name"] == "close_task")
    assert close_task["inputSchema"]["required"] == ["task_id"]


def test_resources_and_prompts_are_empty(test_ctx) -> None:
    client = test_ctx["client"]

    assert _rpc(client, "resources/list")["result"] == {"resources": []}
    assert _rpc(client, "prompts/list")["result"] == {"prompts": []}


def test_close_task_end_to_end(test_ctx) -> None:
    kanboard = test_ctx["kanboard"]
    kanboard.results["closeTask"] = True

    payload = _rpc(
        test_ctx["client"],
        "tools/call",
        {"name": "close_task", "arguments": {"task_id": 42}},
    )

    content = payload["result"]["content"]
    assert len(content) == 1
    assert content[0]["type"] == "text"
    assert json.loads(content[0]["text"]) == {
        "success": True,
        "task_id": 42,
        "message": "Task closed successfully",
    }
    assert kanboard.calls[0]["method"] == "closeTask"
    assert kanboard.calls[0]["params"] == {"task_id": 42}


def test_backend_error_is_a_tool_result_not_a_protocol_error(test_ctx) -> None:
    test_ctx["kanboard"].errors["getAllUsers"] = "Access denied"

    payload = _rpc(test_ctx["client"], "tools/call", {"name": "get_users", "arguments": {}})

    assert "error" not in payload
    assert json.loads(payload["result"]["content"][0]["text"]) == {"success": False, "error": "Access denied"}


def test_unknown_tool_is_method_not_found(test_ctx) -> None:
    payload = _rpc(test_ctx["client"], "tools/call", {"name": "nonexistent_tool", "arguments": {}})

    assert payload["id"] == 1
    assert payload["error"]["code"] == -32601
    assert payload["error"]["message"] == "Tool 'nonexistent_tool' not found"
    assert test_ctx["kanboard"].requests == []


def test_unknown_method(test_ctx) -> None:
    payload = _rpc(test_ctx["client"], "sampling/createMessage")

    assert payload["error"] == {"code": -32601, "message": "Method 'sampling/createMessage' not found"}


def test_internal_error_for_malformed_params(test_ctx) -> None:
    payload = _rpc(test_ctx["client"], "tools/call", ["close_task"])

    assert payload["error"]["code"] == -32603


def test_unparsable_body(test_ctx) -> None:
    response = test_ctx["client"].post("/mcp", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    assert response.json() == {"jsonrpc": "2.0", "error": {"code": -32700, "message": "Parse error"}}


def test_non_object_body(test_ctx) -> None:
    response = test_ctx["client"].post("/mcp", json=[1, 2, 3])

    assert response.json()["error"]["code"] == -32600
