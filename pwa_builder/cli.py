#!/usr/bin/env python3
"""
PWA Builder command-line entry points.

Usage:
    create-pwa-app                 # Scaffold a new project (interactive)
    pwa-icons                      # Generate icons from build-config.json "sourceIcon"
    pwa-build                      # Build a debug APK from build-config.json

Each tool works on the current directory unless --project-dir is given.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .builder import AppBuilder
from .creator import ProjectCreator, ask_answers
from .exceptions import PwaBuilderError
from .icons import IconGenerator
from .log import BuildLog


def _color(args) -> Optional[bool]:
    return False if args.no_color else None


def _report(log: BuildLog, error: PwaBuilderError) -> int:
    log.error(f"✗ {error.message}")
    for key, value in (error.details or {}).items():
        if value is not None:
            log.error(f"   {key}: {value}")
    if error.hint:
        log.error(f"💡 {error.hint}")
    return 1


def _guarded(log: BuildLog, action: Callable[[], int]) -> int:
    try:
        return action()
    except PwaBuilderError as e:
        return _report(log, e)
    except KeyboardInterrupt:
        log.echo("\n\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"\nFatal error: {e}", file=sys.stderr)
        return 1


def create_main(argv: Optional[List[str]] = None, ask: Callable[[str], str] = input) -> int:
    parser = argparse.ArgumentParser(
        prog="create-pwa-app",
        description="Create a new PWA project from the bundled template",
    )
    parser.add_argument("--dest-parent", type=Path, default=None, help="Folder to create the project in (default: cwd)")
    parser.add_argument("--template", type=Path, default=None, help="Template directory to copy")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    args = parser.parse_args(argv)

    log = BuildLog(color=_color(args))

    def run() -> int:
        log.echo("\n🚀 PWA Builder - Create New Project\n")
        answers = ask_answers(ask)
        log.echo("\n📦 Creating project...\n")
        creator = ProjectCreator(template_dir=args.template, log=log)
        project_path = creator.create(answers, parent=args.dest_parent)
        creator.print_next_steps(project_path, answers)
        return 0

    return _guarded(log, run)


def build_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pwa-build",
        description="Build a standalone APK from the web app using build-config.json",
    )
    parser.add_argument("--project-dir", type=Path, default=None, help="Project root (default: cwd)")
    parser.add_argument(
        "--strict-sdk",
        action="store_true",
        help="Fail immediately when no Android SDK is found instead of continuing",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    args = parser.parse_args(argv)

    log = BuildLog(color=_color(args))
    builder = AppBuilder(project_dir=args.project_dir, log=log, strict_sdk=args.strict_sdk)
    return _guarded(log, builder.build)


def icons_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pwa-icons",
        description="Generate PWA and Android launcher icons from one source image",
    )
    parser.add_argument("--project-dir", type=Path, default=None, help="Project root (default: cwd)")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    args = parser.parse_args(argv)

    log = BuildLog(color=_color(args))
    generator = IconGenerator(project_dir=args.project_dir, log=log)
    return _guarded(log, generator.generate)


def main() -> int:
    """Dispatch `python -m pwa_builder <create|build|icons>`."""
    commands = {"create": create_main, "build": build_main, "icons": icons_main}
    if len(sys.argv) < 2 or sys.argv[1] not in commands:
        print(__doc__)
        print("python -m pwa_builder {create,build,icons} [options]")
        return 1
    return commands[sys.argv[1]](sys.argv[2:])


if __name__ == "__main__":
    sys.exit(main())
