from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def _get_first_set(*env_names: str) -> str:
    for env_name in env_names:
        value = os.getenv(env_name, "").strip()
        if value:
            return value
    return ""


def _normalize_base_url(raw_url: str) -> str:
    return raw_url.strip().rstrip("/")


@dataclass(frozen=True)
class Settings:
    app_name: str = os.getenv("APP_NAME", "kanboard-mcp-server")
    app_version: str = "1.0.0"
    app_description: str = "Kanboard integration for LibreChat"
    app_debug: bool = os.getenv("APP_DEBUG", "false").lower() == "true"
    app_host: str = os.getenv("APP_HOST", "0.0.0.0")
    app_port: int = int(_get_first_set("PORT", "APP_PORT") or "8006")

    protocol_version: str = "2024-11-05"

    kanboard_url: str = _normalize_base_url(os.getenv("KANBOARD_URL", "http://kanboard"))
    kanboard_username: str = os.getenv("KANBOARD_USERNAME", "admin")
    kanboard_password: str = os.getenv("KANBOARD_PASSWORD", "admin")
    request_timeout_seconds: float = float(os.getenv("KANBOARD_TIMEOUT_SECONDS", "15"))

    # Empty means the host's local time, like the server process.
    display_timezone: str = os.getenv("DISPLAY_TIMEZONE", "").strip()

    @property
    def kanboard_api_url(self) -> str:
        return f"{_normalize_base_url(self.kanboard_url)}/jsonrpc.php"

    @property
    def has_credentials(self) -> bool:
        return bool(self.kanboard_username and self.kanboard_password)

    def display_tz(self) -> tzinfo | None:
        if not self.display_timezone:
            return None
        if self.display_timezone.upper() == "UTC":
            return timezone.utc
        try:
            return ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Invalid DISPLAY_TIMEZONE: {self.display_timezone}") from exc


settings = Settings()


def get_settings() -> Settings:
    return settings
