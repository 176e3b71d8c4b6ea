from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO


class BuildLog:
    """Timestamped console log shared by the three tools."""

    COLORS = {
        "SUCCESS": "\033[92m",
        "INFO": "\033[94m",
        "WARN": "\033[93m",
        "ERROR": "\033[91m",
        "RESET": "\033[0m",
    }

    def __init__(self, color: Optional[bool] = None, stream: Optional[TextIO] = None):
        self.stream = stream
        if color is None:
            out = stream or sys.stdout
            color = hasattr(out, "isatty") and out.isatty()
        self.color = color
        self.entries: List[str] = []
        self.warnings: List[str] = []

    def log(self, message: str, level: str = "INFO"):
        """Log a message with timestamp"""
        timestamp = datetime.now().strftime("%H:%M:%S")
        prefix = f"[{timestamp}] [{level}]"
        self.entries.append(f"{prefix} {message}")
        if level == "WARN":
            self.warnings.append(message)

        if self.color:
            color = self.COLORS.get(level, self.COLORS["INFO"])
            line = f"{color}{prefix}{self.COLORS['RESET']} {message}"
        else:
            line = f"{prefix} {message}"

        self._emit(line)

    def echo(self, text: str = ""):
        """Print text as-is, without timestamp or level"""
        self._emit(text)

    def _emit(self, line: str):
        out = self.stream or sys.stdout
        try:
            print(line, file=out)
        except UnicodeEncodeError:
            # Windows consoles on legacy code pages
            safe = line.replace("✓", "[OK]").replace("✗", "[FAIL]").replace("⚠", "[!]")
            encoding = getattr(out, "encoding", None) or "ascii"
            print(safe.encode(encoding, "replace").decode(encoding), file=out)

    def success(self, message: str):
        self.log(message, level="SUCCESS")

    def warn(self, message: str):
        self.log(message, level="WARN")

    def error(self, message: str):
        self.log(message, level="ERROR")

    def section(self, title: str):
        """Log a major section header"""
        separator = "=" * 70
        self.log("")
        self.log(separator)
        self.log(f"  {title}")
        self.log(separator)

    def save(self, path: Path):
        """Write every entry logged so far to a file"""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(self.entries))
            f.write("\n")
