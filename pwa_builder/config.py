from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .exceptions import ConfigError

CONFIG_FILE = "build-config.json"

DEFAULT_FILES = ["index.html", "manifest.json", "sw.js"]
DEFAULT_FOLDERS = ["js", "styles", "icons", "assets"]


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def _section(obj: dict[str, Any], key: str) -> dict[str, Any]:
    value = obj.get(key)
    return value if isinstance(value, dict) else {}


def _flag(obj: dict[str, Any], key: str, default: bool) -> bool:
    value = obj.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    # missing, null or anything else
    return default


def _str_list(obj: dict[str, Any], key: str, default: list[str]) -> list[str]:
    # An explicit empty list means "nothing", only a missing key takes the default.
    value = obj.get(key)
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


@dataclass
class NotificationsPlugin:
    enabled: bool = False
    small_icon: str = "ic_stat_notification"
    icon_color: str = "#4CAF50"
    sound: str = "notification_sound.wav"


@dataclass
class ProjectConfig:
    app_name: str = "My PWA App"
    app_id: str = "com.example.myapp"
    app_description: str = "A Progressive Web App"
    source_icon: str = "source-icon.png"
    web_dir: str = "www"
    files_to_copy: list[str] = field(default_factory=lambda: list(DEFAULT_FILES))
    folders_to_copy: list[str] = field(default_factory=lambda: list(DEFAULT_FOLDERS))
    theme_color: str = "#4CAF50"
    background_color: str = "#ffffff"
    allow_mixed_content: bool = True
    web_contents_debugging: bool = True
    java_home_candidates: list[str] = field(default_factory=list)
    sdk_candidates: list[str] = field(default_factory=list)
    notifications: NotificationsPlugin = field(default_factory=NotificationsPlugin)
    camera_enabled: bool = False

    @staticmethod
    def from_dict(obj: dict[str, Any]) -> "ProjectConfig":
        defaults = ProjectConfig()
        android = _section(obj, "android")
        plugins = _section(obj, "plugins")
        notif = _section(plugins, "notifications")
        camera = _section(plugins, "camera")

        return ProjectConfig(
            app_name=str(obj.get("appName") or defaults.app_name),
            app_id=str(obj.get("appId") or defaults.app_id),
            app_description=str(obj.get("appDescription") or defaults.app_description),
            source_icon=str(obj.get("sourceIcon") or defaults.source_icon),
            web_dir=str(obj.get("webDir") or defaults.web_dir),
            files_to_copy=_str_list(obj, "filesToCopy", DEFAULT_FILES),
            folders_to_copy=_str_list(obj, "foldersToCopy", DEFAULT_FOLDERS),
            theme_color=str(obj.get("themeColor") or defaults.theme_color),
            background_color=str(obj.get("backgroundColor") or defaults.background_color),
            allow_mixed_content=_flag(android, "allowMixedContent", True),
            web_contents_debugging=_flag(android, "webContentsDebuggingEnabled", True),
            java_home_candidates=_str_list(android, "javaHomeCandidates", []),
            sdk_candidates=_str_list(android, "sdkCandidates", []),
            notifications=NotificationsPlugin(
                enabled=_flag(notif, "enabled", False),
                small_icon=str(notif.get("smallIcon") or defaults.notifications.small_icon),
                icon_color=str(notif.get("iconColor") or defaults.notifications.icon_color),
                sound=str(notif.get("sound") or defaults.notifications.sound),
            ),
            camera_enabled=_flag(camera, "enabled", False),
        )


def load_config(project_dir: Optional[Path] = None) -> ProjectConfig:
    """Read build-config.json from the project directory."""
    path = (project_dir or Path.cwd()) / CONFIG_FILE
    try:
        data = read_json(path)
    except (OSError, ValueError) as e:
        raise ConfigError(path, e) from e

    if not isinstance(data, dict):
        raise ConfigError(path, ValueError("top-level value must be an object"))

    return ProjectConfig.from_dict(data)
