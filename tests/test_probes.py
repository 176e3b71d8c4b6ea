from __future__ import annotations

from pwa_builder.probes import (
    JAVA_HOME_PATHS,
    Probe,
    android_sdk_probe,
    escape_properties_path,
    java_home_probe,
    sdk_paths,
)


def test_first_existing_candidate_wins():
    checked = []

    def exists(path):
        checked.append(path)
        return path in {"/b", "/c"}

    probe = Probe("test", ["/a", "/b", "/c"], exists=exists)
    assert probe.find() == "/b"
    # later candidates are never looked at
    assert checked == ["/a", "/b"]


def test_no_candidate_found():
    assert Probe("test", ["/a"], exists=lambda p: False).find() is None


def test_java_probe_order():
    probe = java_home_probe(extra=["/custom/jdk"], env={"JAVA_HOME": "/env/jdk"})
    assert probe.candidates[:2] == ["/env/jdk", "/custom/jdk"]
    assert probe.candidates[2:] == JAVA_HOME_PATHS


def test_java_probe_without_env():
    assert java_home_probe(env={}).candidates == JAVA_HOME_PATHS


def test_sdk_probe_uses_username():
    probe = android_sdk_probe(env={}, username="alice")
    assert probe.candidates == sdk_paths("alice")
    assert "C:\\Users\\alice\\AppData\\Local\\Android\\Sdk" in probe.candidates
    assert "/Users/alice/Library/Android/sdk" in probe.candidates
    assert probe.candidates[-1] == "/home/alice/Android/Sdk"


def test_sdk_probe_env_first_and_deduplicated():
    probe = android_sdk_probe(
        extra=["/sdk"],
        env={"ANDROID_SDK_ROOT": "/sdk", "ANDROID_HOME": "/home-sdk"},
        username="bob",
    )
    assert probe.candidates[:2] == ["/sdk", "/home-sdk"]
    assert probe.candidates.count("/sdk") == 1


def test_escape_properties_path():
    assert escape_properties_path("C:\\Android\\Sdk") == "C:\\\\Android\\\\Sdk"
    assert escape_properties_path("/opt/sdk") == "/opt/sdk"
