"""Locate JDK and Android SDK installs from ordered candidate lists.

Every probe is "first existing path wins": candidates are checked in order
and the remaining ones are never looked at. Environment variables come first,
then paths from build-config.json, then the well-known install locations for
Windows, macOS and Linux.
"""

from __future__ import annotations

import getpass
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Mapping, Optional

JAVA_HOME_PATHS = [
    "C:\\Program Files\\Android\\Android Studio\\jbr",
    "C:\\Program Files\\Java\\jdk-17",
    "C:\\Program Files\\Java\\jdk-11",
    "/usr/lib/jvm/java-17-openjdk-amd64",
    "/usr/lib/jvm/java-11-openjdk-amd64",
]


def sdk_paths(username: str) -> List[str]:
    return [
        f"C:\\Users\\{username}\\AppData\\Local\\Android\\Sdk",
        "C:\\Android\\Sdk",
        "C:\\Program Files\\Android\\Sdk",
        "C:\\Program Files (x86)\\Android\\Sdk",
        f"/Users/{username}/Library/Android/sdk",
        f"/home/{username}/Android/Sdk",
    ]


def current_username() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.environ.get("USERNAME") or os.environ.get("USER") or ""


def _dedupe(paths: Iterable[Optional[str]]) -> List[str]:
    seen: set[str] = set()
    out: List[str] = []
    for p in paths:
        if not p or p in seen:
            continue
        seen.add(p)
        out.append(p)
    return out


@dataclass
class Probe:
    """An ordered list of candidate install locations."""

    name: str
    candidates: List[str] = field(default_factory=list)
    exists: Callable[[str], bool] = os.path.isdir

    def find(self) -> Optional[str]:
        for candidate in self.candidates:
            if self.exists(candidate):
                return candidate
        return None


def java_home_probe(
    extra: Iterable[str] = (),
    env: Optional[Mapping[str, str]] = None,
    exists: Callable[[str], bool] = os.path.isdir,
) -> Probe:
    env = os.environ if env is None else env
    candidates = _dedupe([env.get("JAVA_HOME"), *extra, *JAVA_HOME_PATHS])
    return Probe("Java home", candidates, exists)


def android_sdk_probe(
    extra: Iterable[str] = (),
    env: Optional[Mapping[str, str]] = None,
    username: Optional[str] = None,
    exists: Callable[[str], bool] = os.path.isdir,
) -> Probe:
    env = os.environ if env is None else env
    user = username if username is not None else current_username()
    candidates = _dedupe(
        [env.get("ANDROID_SDK_ROOT"), env.get("ANDROID_HOME"), *extra, *sdk_paths(user)]
    )
    return Probe("Android SDK", candidates, exists)


def escape_properties_path(path: str) -> str:
    """Double backslashes so Windows paths survive .properties parsing."""
    return path.replace("\\", "\\\\")
