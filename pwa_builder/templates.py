"""Text templates for the files the build writes into the Android project."""

from __future__ import annotations

from typing import List

from .config import ProjectConfig
from .probes import escape_properties_path

JAVA_HOME_KEY = "org.gradle.java.home"


def _ts_bool(value: bool) -> str:
    return "true" if value else "false"


def _ts_str(value: str) -> str:
    """Quote a value as a single-quoted TypeScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def render_capacitor_config(config: ProjectConfig) -> str:
    plugins_block = ""
    if config.notifications.enabled:
        n = config.notifications
        plugins_block = f""",
  plugins: {{
    LocalNotifications: {{
      smallIcon: {_ts_str(n.small_icon)},
      iconColor: {_ts_str(n.icon_color)},
      sound: {_ts_str(n.sound)},
      requestPermissions: true,
      alwaysShowNotification: false,
      autoCancel: true
    }}
  }}"""

    return f"""import type {{ CapacitorConfig }} from '@capacitor/cli';

const config: CapacitorConfig = {{
  appId: {_ts_str(config.app_id)},
  appName: {_ts_str(config.app_name)},
  webDir: {_ts_str(config.web_dir)},
  server: {{
    androidScheme: 'https'
  }},
  android: {{
    allowMixedContent: {_ts_bool(config.allow_mixed_content)},
    backgroundColor: {_ts_str(config.background_color)},
    webContentsDebuggingEnabled: {_ts_bool(config.web_contents_debugging)}
  }}{plugins_block}
}};

export default config;
"""


def plugin_snippets(config: ProjectConfig) -> tuple[List[str], List[str]]:
    """Return (imports, registrations) for every enabled native plugin."""
    imports: List[str] = []
    registrations: List[str] = []

    if config.notifications.enabled:
        imports.append("import com.capacitorjs.plugins.localnotifications.LocalNotificationsPlugin;")
        registrations.append("        registerPlugin(LocalNotificationsPlugin.class);")

    if config.camera_enabled:
        imports.append("import com.capacitorjs.plugins.camera.CameraPlugin;")
        registrations.append("        registerPlugin(CameraPlugin.class);")

    return imports, registrations


def render_main_activity(config: ProjectConfig) -> str:
    imports, registrations = plugin_snippets(config)
    return f"""package {config.app_id};

import android.os.Bundle;
import com.getcapacitor.BridgeActivity;
{chr(10).join(imports)}

public class MainActivity extends BridgeActivity {{
    @Override
    public void onCreate(Bundle savedInstanceState) {{
        super.onCreate(savedInstanceState);

{chr(10).join(registrations)}
    }}
}}"""


def render_local_properties(sdk_path: str) -> str:
    return f"""# This file was automatically generated by pwa-build
# Do not modify this file -- YOUR CHANGES WILL BE ERASED!
# This file should *NOT* be checked into Version Control Systems,
# as it contains information specific to your local configuration.

# Location of the SDK. This is only used by Gradle.
sdk.dir={escape_properties_path(sdk_path)}
"""


def append_java_home(gradle_props: str, java_home: str) -> str:
    text = gradle_props
    text += "\n# Set correct Java home for Android Gradle Plugin compatibility\n"
    text += f"{JAVA_HOME_KEY}={escape_properties_path(java_home)}\n"
    return text
