"""
PWA Builder - Project Creator

Creates a new PWA project from the bundled template:
1. Ask for project name, display name, app ID and description
2. Validate the app ID
3. Copy the template (without build artifacts)
4. Patch build-config.json, package.json, manifest.json and index.html
"""

from __future__ import annotations

import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .config import CONFIG_FILE, read_json, write_json
from .exceptions import CreateError, InvalidAppIdError
from .log import BuildLog

APP_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)+$")

# Never copied out of the template
EXCLUDED_NAMES = {"node_modules", "www", "android", "ios"}

TEMPLATE_ENV = "PWA_BUILDER_TEMPLATE_DIR"


def default_template_dir() -> Path:
    override = os.environ.get(TEMPLATE_ENV)
    if override:
        return Path(override)
    return Path(__file__).parent / "template"


def validate_app_id(app_id: str) -> str:
    if not APP_ID_PATTERN.match(app_id):
        raise InvalidAppIdError(app_id)
    return app_id


def package_name(project_name: str) -> str:
    return re.sub(r"\s+", "-", project_name.lower())


def copy_template(src: Path, dest: Path) -> None:
    """Recursively copy src into dest, skipping build-artifact folders."""
    dest.mkdir(parents=True, exist_ok=True)
    for item in sorted(src.iterdir()):
        if item.name in EXCLUDED_NAMES:
            continue
        target = dest / item.name
        if item.is_dir():
            copy_template(item, target)
        else:
            shutil.copyfile(item, target)


@dataclass
class ProjectAnswers:
    project_name: str = "my-pwa-app"
    app_name: str = "My PWA App"
    app_id: str = "com.example.myapp"
    description: str = "A Progressive Web App"


def ask_answers(ask: Callable[[str], str] = input) -> ProjectAnswers:
    """Prompt for the four project fields; blank answers keep the default."""
    defaults = ProjectAnswers()

    def prompt(label: str, default: str) -> str:
        return ask(f"{label} ({default}): ").strip() or default

    return ProjectAnswers(
        project_name=prompt("Project name", defaults.project_name),
        app_name=prompt("App display name", defaults.app_name),
        app_id=prompt("App ID", defaults.app_id),
        description=prompt("Description", defaults.description),
    )


class ProjectCreator:
    """Scaffold a new project directory from the template."""

    def __init__(self, template_dir: Optional[Path] = None, log: Optional[BuildLog] = None):
        self.template_dir = template_dir or default_template_dir()
        self.log = log or BuildLog()

    def create(self, answers: ProjectAnswers, parent: Optional[Path] = None) -> Path:
        validate_app_id(answers.app_id)

        project_path = (parent or Path.cwd()) / answers.project_name
        if project_path.exists():
            raise CreateError(f'Directory "{answers.project_name}" already exists')

        if not self.template_dir.is_dir():
            raise CreateError(
                f"Template directory not found: {self.template_dir}",
                hint=f"Reinstall pwa-builder or point {TEMPLATE_ENV} at a template folder",
            )

        try:
            project_path.mkdir(parents=True)
            self.log.success(f"✓ Created directory: {answers.project_name}")

            copy_template(self.template_dir, project_path)
            self.log.success("✓ Copied template files")

            self._update_config(project_path, answers)
            self._update_package_json(project_path, answers)
            self._update_manifest(project_path, answers)
            self._update_index_html(project_path, answers)
        except (OSError, ValueError) as e:
            raise CreateError(f"Error creating project: {e}") from e

        return project_path

    def _update_config(self, project_path: Path, answers: ProjectAnswers):
        config_path = project_path / CONFIG_FILE
        config = read_json(config_path)
        config["appName"] = answers.app_name
        config["appId"] = answers.app_id
        config["appDescription"] = answers.description
        write_json(config_path, config)
        self.log.success("✓ Updated configuration")

    def _update_package_json(self, project_path: Path, answers: ProjectAnswers):
        package_path = project_path / "package.json"
        package = read_json(package_path)
        package["name"] = package_name(answers.project_name)
        package["description"] = answers.description
        write_json(package_path, package)
        self.log.success("✓ Updated package.json")

    def _update_manifest(self, project_path: Path, answers: ProjectAnswers):
        manifest_path = project_path / "manifest.json"
        manifest = read_json(manifest_path)
        manifest["name"] = answers.app_name
        manifest["short_name"] = answers.app_name
        manifest["description"] = answers.description
        write_json(manifest_path, manifest)
        self.log.success("✓ Updated manifest.json")

    def _update_index_html(self, project_path: Path, answers: ProjectAnswers):
        index_path = project_path / "index.html"
        html = index_path.read_text(encoding="utf-8")
        html = html.replace("<title>My PWA App</title>", f"<title>{answers.app_name}</title>", 1)
        html = html.replace(
            "<h1>Welcome to Your PWA</h1>", f"<h1>Welcome to {answers.app_name}</h1>", 1
        )
        index_path.write_text(html, encoding="utf-8")
        self.log.success("✓ Updated index.html")

    def print_next_steps(self, project_path: Path, answers: ProjectAnswers):
        self.log.echo("\n🎉 Project created successfully!\n")
        self.log.echo(f"📁 Project location: {project_path}")
        self.log.echo(f"""
Next steps:

   cd {answers.project_name}
   npm install
   pwa-icons              # Generate icons from source-icon.png
   pwa-build              # Build APK
""")
