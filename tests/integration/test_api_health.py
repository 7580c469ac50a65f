from __future__ import annotations


def test_health_reports_kanboard_version(test_ctx) -> None:
    test_ctx["kanboard"].results["getVersion"] = "1.2.35"

    response = test_ctx["client"].get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert payload["tools"] == 17
    assert payload["kanboard"] == {"url": "http://kanboard.test", "connection": "connected", "version": "1.2.35"}
    assert payload["timestamp"].endswith("Z")


def test_health_stays_up_when_kanboard_is_down(test_ctx) -> None:
    test_ctx["kanboard"].errors["getVersion"] = "Unauthorized"

    payload = test_ctx["client"].get("/health").json()

    assert payload["status"] == "healthy"
    assert payload["kanboard"]["connection"] == "failed"
    assert payload["kanboard"]["version"] is None


def test_mcp_info_document(test_ctx) -> None:
    payload = test_ctx["client"].get("/mcp").json()

    assert payload["protocol"] == "mcp"
    assert payload["version"] == "2024-11-05"
    assert payload["capabilities"] == {"tools": True, "resources": False, "prompts": False}
    assert len(payload["tools"]) == 17
    assert set(payload["tools"][0]) == {"name", "description"}
    assert payload["kanboard"]["api_endpoint"] == "http://kanboard.test/jsonrpc.php"


def test_smoke_test_endpoint(test_ctx) -> None:
    kanboard = test_ctx["kanboard"]
    kanboard.results["getVersion"] = "1.2.35"
    kanboard.results["getAllProjects"] = [{"id": "1"}, {"id": "2"}]

    payload = test_ctx["client"].get("/test").json()

    assert payload == {
        "test": "passed",
        "kanboard_connection": "working",
        "version": "1.2.35",
        "projects_count": 2,
        "tools": 17,
    }


def test_smoke_test_reports_failed_calls(test_ctx) -> None:
    payload = test_ctx["client"].get("/test").json()

    assert payload["version"] == "failed"
    assert payload["projects_count"] == "failed"


def test_cors_headers(test_ctx) -> None:
    response = test_ctx["client"].get("/health", headers={"Origin": "http://librechat.local"})

    assert response.headers["access-control-allow-origin"] == "*"
