from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .log import BuildLog


def is_windows() -> bool:
    return os.name == "nt"


def npx() -> str:
    return "npx.cmd" if is_windows() else "npx"


def gradlew() -> str:
    return "gradlew.bat" if is_windows() else "./gradlew"


@dataclass
class CommandResult:
    ok: bool
    returncode: int
    output: str = ""

    @property
    def error(self) -> str:
        return self.output.strip() or f"exit code {self.returncode}"


class CommandRunner:
    """Run external tools and report the result instead of raising."""

    def __init__(self, log: BuildLog):
        self.log = log

    def run(
        self,
        cmd: List[str],
        cwd: Optional[Path] = None,
        capture: bool = False,
        timeout: Optional[int] = None,
    ) -> CommandResult:
        """Run a command; inherit the console unless capture is set."""
        display_cmd = " ".join(cmd)
        self.log.log(f"$ {display_cmd}" + (f"  (in {cwd})" if cwd else ""))

        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                capture_output=capture,
                text=True,
                timeout=timeout,
                # gradlew.bat and npx.cmd only resolve through the shell on Windows
                shell=is_windows(),
            )
        except FileNotFoundError as e:
            return CommandResult(False, 127, f"Command not found: {e}")
        except subprocess.TimeoutExpired:
            return CommandResult(False, -1, f"Command timed out ({timeout} seconds)")

        output = ""
        if capture:
            output = (result.stdout or "") + (result.stderr or "")
        return CommandResult(result.returncode == 0, result.returncode, output)
