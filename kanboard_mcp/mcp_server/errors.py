from __future__ import annotations


PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class BackendCallError(Exception):
    """A Kanboard call failed; the message is what the caller should see."""


class JsonRpcError(Exception):
    code: int = INTERNAL_ERROR

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class MethodNotFoundError(JsonRpcError):
    code = METHOD_NOT_FOUND

    def __init__(self, method: str | None) -> None:
        super().__init__(f"Method '{method}' not found")


class ToolNotFoundError(JsonRpcError):
    code = METHOD_NOT_FOUND

    def __init__(self, tool_name: str | None) -> None:
        super().__init__(f"Tool '{tool_name}' not found")
        self.tool_name = tool_name
