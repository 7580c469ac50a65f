from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kanboard_mcp.mcp_server.errors import BackendCallError


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))

    def as_listing(self) -> dict:
        return self.model_dump(by_alias=True)

    def as_summary(self) -> dict:
        return {"name": self.name, "description": self.description}


class BackendResult(BaseModel):
    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any) -> "BackendResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "BackendResult":
        return cls(success=False, error=error)

    def unwrap(self, missing_message: str | None = None) -> Any:
        if not self.success:
            raise BackendCallError(self.error or missing_message or "Unknown Kanboard API error")
        if missing_message is not None and not self.data:
            raise BackendCallError(missing_message)
        return self.data


def number(description: str, default: int | None = None) -> dict:
    prop: dict[str, Any] = {"type": "number", "description": description}
    if default is not None:
        prop["default"] = default
    return prop


def string(description: str) -> dict:
    return {"type": "string", "description": description}


def object_schema(properties: dict[str, dict] | None = None, required: list[str] | None = None) -> dict:
    return {
        "type": "object",
        "properties": properties or {},
        "required": required or [],
    }


def tool_ok(**fields: Any) -> dict:
    return {"success": True, **fields}


def tool_failure(error: str) -> dict:
    return {"success": False, "error": error}
