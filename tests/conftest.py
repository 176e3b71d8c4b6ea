"""Pytest fixtures for PWA Builder tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import pytest

from pwa_builder.creator import default_template_dir
from pwa_builder.log import BuildLog
from pwa_builder.probes import Probe
from pwa_builder.runner import CommandResult


class FakeRunner:
    """Records commands instead of running them."""

    def __init__(self, failures: Optional[dict] = None):
        # maps a command word (e.g. "sync", "assembleDebug") to a return code
        self.failures = failures or {}
        self.calls: List[dict] = []

    def run(self, cmd, cwd=None, capture=False, timeout=None) -> CommandResult:
        self.calls.append({"cmd": list(cmd), "cwd": cwd, "capture": capture})
        for word, code in self.failures.items():
            if word in cmd:
                return CommandResult(False, code, f"{word} failed")
        if "sync" in cmd and cwd is not None:
            # The real sync leaves a Gradle project behind
            android = Path(cwd) / "android"
            android.mkdir(exist_ok=True)
            props = android / "gradle.properties"
            if not props.exists():
                props.write_text("org.gradle.jvmargs=-Xmx1536m\n", encoding="utf-8")
        return CommandResult(True, 0, "")

    def words(self) -> List[str]:
        return [" ".join(c["cmd"][1:]) for c in self.calls]


@pytest.fixture
def log() -> BuildLog:
    return BuildLog(color=False)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def template_dir() -> Path:
    return default_template_dir()


def make_probe(name: str, existing: List[str], candidates: List[str]) -> Probe:
    return Probe(name, candidates, exists=lambda p: p in existing)


@pytest.fixture
def jdk_probe() -> Probe:
    return make_probe("Java home", ["/opt/jdk-17"], ["/missing/jdk", "/opt/jdk-17", "/opt/jdk-11"])


@pytest.fixture
def sdk_probe() -> Probe:
    return make_probe("Android SDK", ["/opt/android-sdk"], ["/missing/sdk", "/opt/android-sdk"])


@pytest.fixture
def missing_sdk_probe() -> Probe:
    return make_probe("Android SDK", [], ["/missing/sdk", "/also/missing"])


def write_config(project: Path, **overrides) -> Path:
    config = {
        "appName": "Demo",
        "appId": "com.example.app",
        "appDescription": "Demo app",
        "webDir": "www",
    }
    config.update(overrides)
    path = project / "build-config.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small project with a config and a few web files."""
    root = tmp_path / "demo"
    root.mkdir()
    write_config(root)
    (root / "index.html").write_text("<title>Demo</title>", encoding="utf-8")
    (root / "manifest.json").write_text(json.dumps({"name": "Demo"}), encoding="utf-8")
    (root / "js").mkdir()
    (root / "js" / "app.js").write_text("console.log('hi');", encoding="utf-8")
    (root / "js" / "lib").mkdir()
    (root / "js" / "lib" / "util.js").write_text("// util", encoding="utf-8")
    return root
