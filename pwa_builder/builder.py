"""
PWA Builder - Build Orchestrator

Builds a debug APK from the web app in the current project:
clean -> stage web assets -> capacitor.config.ts -> cap add/sync ->
Gradle Java home -> Android SDK -> MainActivity -> launcher icons -> assembleDebug
"""

from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .config import ProjectConfig, load_config
from .exceptions import BuildError
from .icons import ANDROID_ICONS_DIR
from .log import BuildLog
from .probes import Probe, android_sdk_probe, java_home_probe
from .runner import CommandRunner, gradlew, npx
from .templates import (
    JAVA_HOME_KEY,
    append_java_home,
    render_capacitor_config,
    render_local_properties,
    render_main_activity,
)

ANDROID_DIR = "android"
APK_PATH = "android/app/build/outputs/apk/debug/app-debug.apk"
ANDROID_STUDIO_URL = "https://developer.android.com/studio"
BUILD_LOG_FILE = "pwa-build.log"


def copy_folder(src: Path, dest: Path) -> None:
    dest.mkdir(parents=True, exist_ok=True)
    for item in src.iterdir():
        target = dest / item.name
        if item.is_dir():
            copy_folder(item, target)
        else:
            shutil.copyfile(item, target)


class AppBuilder:
    """Run the APK build pipeline for one project directory."""

    def __init__(
        self,
        project_dir: Optional[Path] = None,
        log: Optional[BuildLog] = None,
        runner: Optional[CommandRunner] = None,
        java_probe: Optional[Probe] = None,
        sdk_probe: Optional[Probe] = None,
        strict_sdk: bool = False,
    ):
        self.project_dir = (project_dir or Path.cwd()).resolve()
        self.log = log or BuildLog()
        self.runner = runner or CommandRunner(self.log)
        self.java_probe = java_probe
        self.sdk_probe = sdk_probe
        self.strict_sdk = strict_sdk
        self.config: Optional[ProjectConfig] = None
        self.start_time = datetime.now()

    @property
    def android_dir(self) -> Path:
        return self.project_dir / ANDROID_DIR

    @property
    def web_dir(self) -> Path:
        return self.project_dir / self.config.web_dir

    def load(self) -> ProjectConfig:
        self.config = load_config(self.project_dir)
        self.log.log(f"📋 Configuration loaded for: {self.config.app_name}")
        if self.java_probe is None:
            self.java_probe = java_home_probe(self.config.java_home_candidates)
        if self.sdk_probe is None:
            self.sdk_probe = android_sdk_probe(self.config.sdk_candidates)
        return self.config

    # -- steps ------------------------------------------------------------

    def clean(self) -> bool:
        """Remove the staging directory and the generated Android project"""
        ok = True
        for folder in (self.web_dir, self.android_dir):
            if not folder.exists():
                continue
            try:
                shutil.rmtree(folder)
                self.log.success(f"✓ Removed {folder.name}/")
            except OSError as e:
                self.log.warn(f"Clean warning: {e}")
                ok = False
        return ok

    def stage_web_assets(self) -> bool:
        """Copy configured files and folders into the staging directory"""
        self.web_dir.mkdir(parents=True, exist_ok=True)
        ok = True

        for name in self.config.files_to_copy:
            src = self.project_dir / name
            if src.is_file():
                dest = self.web_dir / name
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(src, dest)
                self.log.success(f"✓ Copied {name}")
            else:
                self.log.warn(f"Missing {name} (skipping)")
                ok = False

        for name in self.config.folders_to_copy:
            src = self.project_dir / name
            if src.is_dir():
                copy_folder(src, self.web_dir / name)
                self.log.success(f"✓ Copied {name}/")
            else:
                self.log.warn(f"Missing {name}/ (skipping)")
                ok = False

        return ok

    def write_capacitor_config(self) -> bool:
        path = self.project_dir / "capacitor.config.ts"
        try:
            path.write_text(render_capacitor_config(self.config), encoding="utf-8")
        except OSError as e:
            raise BuildError("Capacitor config", f"Failed to generate Capacitor config: {e}") from e
        self.log.success("✓ capacitor.config.ts generated")
        return True

    def add_platform(self) -> bool:
        result = self.runner.run([npx(), "cap", "add", "android"], cwd=self.project_dir)
        if not result.ok:
            self.log.warn(f"Android platform already exists or error: {result.error}")
            return False
        self.log.success("✓ Android platform added")
        return True

    def sync(self) -> bool:
        result = self.runner.run([npx(), "cap", "sync", "android"], cwd=self.project_dir)
        if not result.ok:
            raise BuildError(
                "Capacitor sync",
                f"Sync failed: {result.error}",
                hint="Run 'npm install' so @capacitor/cli and @capacitor/android are available",
                exit_code=result.returncode,
            )
        self.log.success("✓ Capacitor sync complete")
        return True

    def configure_java_home(self) -> bool:
        """Point Gradle at a compatible JDK unless it is already set"""
        props_path = self.android_dir / "gradle.properties"
        try:
            props = props_path.read_text(encoding="utf-8")
        except OSError as e:
            self.log.warn(f"Could not configure gradle.properties: {e}")
            return False

        if JAVA_HOME_KEY in props:
            self.log.success("✓ Java home already configured")
            return True

        java_home = self.java_probe.find()
        if not java_home:
            self.log.warn("No JDK found; Gradle will use the default Java on PATH")
            return False

        try:
            props_path.write_text(append_java_home(props, java_home), encoding="utf-8")
        except OSError as e:
            self.log.warn(f"Could not configure gradle.properties: {e}")
            return False
        self.log.success(f"✓ Added Java home: {java_home}")
        return True

    def configure_sdk(self) -> bool:
        sdk_path = self.sdk_probe.find()
        if not sdk_path:
            self.log.error("✗ Android SDK not found. Please install Android Studio and SDK.")
            self.log.error("Common locations:")
            for candidate in self.sdk_probe.candidates:
                self.log.error(f"   - {candidate}")
            self.log.error(f"Install Android Studio from: {ANDROID_STUDIO_URL}")
            if self.strict_sdk:
                raise BuildError("Android SDK", "Android SDK not found", hint="Set ANDROID_SDK_ROOT")
            # Gradle fails later without local.properties; the exit code is left alone here.
            self.log.warn("Android SDK not configured; assembleDebug is expected to fail")
            return False

        local_props = self.android_dir / "local.properties"
        try:
            local_props.write_text(render_local_properties(sdk_path), encoding="utf-8")
        except OSError as e:
            self.log.warn(f"Could not configure Android SDK: {e}")
            return False
        self.log.success(f"✓ Android SDK configured: {sdk_path}")
        return True

    def main_activity_path(self) -> Path:
        package_path = Path(*self.config.app_id.split("."))
        return self.android_dir / "app" / "src" / "main" / "java" / package_path / "MainActivity.java"

    def configure_main_activity(self) -> bool:
        path = self.main_activity_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(render_main_activity(self.config), encoding="utf-8")
        except OSError as e:
            self.log.warn(f"Could not configure MainActivity: {e}")
            return False
        self.log.success("✓ MainActivity configured with plugins")
        return True

    def install_launcher_icons(self) -> bool:
        """Copy android-icons/<bucket>/ into the app resources"""
        icons_dir = self.project_dir / ANDROID_ICONS_DIR
        if not icons_dir.is_dir():
            self.log.log("No android-icons/ folder; keeping default launcher icons (run pwa-icons)")
            return True

        res_dir = self.android_dir / "app" / "src" / "main" / "res"
        try:
            for bucket in sorted(p for p in icons_dir.iterdir() if p.is_dir()):
                copy_folder(bucket, res_dir / bucket.name)
                self.log.success(f"✓ Installed {bucket.name} icons")
        except OSError as e:
            self.log.warn(f"Could not install launcher icons: {e}")
            return False
        return True

    def build_apk(self) -> bool:
        self.log.log("🛑 Stopping Gradle daemons...")
        stop = self.runner.run([gradlew(), "--stop"], cwd=self.android_dir, capture=True)
        if not stop.ok:
            self.log.warn(f"Could not stop Gradle daemons: {stop.error}")

        self.log.log("🏗️  Building debug APK...")
        result = self.runner.run([gradlew(), "assembleDebug"], cwd=self.android_dir)
        if not result.ok:
            raise BuildError(
                "Build APK",
                f"APK build failed: {result.error}",
                hint=f"Try running: cd android && {gradlew()} --stop && {gradlew()} assembleDebug",
                exit_code=result.returncode,
            )
        self.log.success("✓ APK build complete")
        return True

    # -- pipeline ---------------------------------------------------------

    def steps(self) -> List[Tuple[str, Callable[[], bool]]]:
        return [
            ("🗑️  Cleaning generated folders", self.clean),
            ("📦 Preparing web assets", self.stage_web_assets),
            ("⚙️  Generating Capacitor configuration", self.write_capacitor_config),
            ("📱 Setting up Android platform", self.add_platform),
            ("🔄 Syncing with Capacitor", self.sync),
            ("⚙️  Configuring Gradle for Java 11+", self.configure_java_home),
            ("🔧 Configuring Android SDK", self.configure_sdk),
            ("📱 Configuring MainActivity", self.configure_main_activity),
            ("🎨 Installing launcher icons", self.install_launcher_icons),
            ("🏗️  Building APK", self.build_apk),
        ]

    def build(self) -> int:
        """Execute the complete build pipeline"""
        self.log.log("🚀 PWA Builder - Starting build process...")
        try:
            self.load()
            for title, step in self.steps():
                self.log.section(title)
                step()
        except BuildError as e:
            self.log.error(f"✗ {e.message}")
            if e.exit_code is not None:
                self.log.error(f"   exit_code: {e.exit_code}")
            if e.hint:
                self.log.error(f"💡 {e.hint}")
            self.print_summary(failed=e.step)
            self.save_build_log()
            return 1

        self.print_summary()
        self.save_build_log()
        return 0

    def print_summary(self, failed: Optional[str] = None):
        self.log.section("BUILD SUMMARY")

        elapsed = datetime.now() - self.start_time
        minutes, seconds = divmod(elapsed.seconds, 60)
        self.log.log(f"Build finished in: {minutes}m {seconds}s")

        if self.log.warnings:
            self.log.log(f"Warnings: {len(self.log.warnings)}")
            for warning in list(self.log.warnings):
                self.log.log(f"  - {warning}")

        if failed:
            self.log.error(f"✗ Build stopped at: {failed}")
            return

        self.log.success("🎉 Build complete!")
        self.log.log(f"📱 APK location: {APK_PATH}")
        self.log.log("💡 To install on your device:")
        self.log.log(f"   adb install {APK_PATH}")

    def save_build_log(self):
        try:
            self.log.save(self.project_dir / BUILD_LOG_FILE)
        except OSError as e:
            self.log.warn(f"Could not save build log: {e}")
