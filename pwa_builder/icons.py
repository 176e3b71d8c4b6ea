"""
PWA Builder - Icon Generator

Generates every icon size the web manifest and the Android launcher need
from a single source image (recommended: 1024x1024 PNG or larger).
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import ProjectConfig, load_config, read_json, write_json
from .exceptions import IconError
from .log import BuildLog

PWA_SIZES = [72, 96, 128, 144, 152, 192, 384, 512]

ANDROID_SIZES = {
    "mipmap-mdpi": 48,
    "mipmap-hdpi": 72,
    "mipmap-xhdpi": 96,
    "mipmap-xxhdpi": 144,
    "mipmap-xxxhdpi": 192,
}

FOREGROUND_SCALE = 1.2
MASKABLE_MIN_SIZE = 192

ICONS_DIR = "icons"
ANDROID_ICONS_DIR = "android-icons"
MANIFEST_FILE = "manifest.json"


def _pillow():
    try:
        from PIL import Image, ImageOps
    except ImportError as e:
        raise IconError('"Pillow" package not installed', hint="Install it with: pip install Pillow") from e
    return Image, ImageOps


def manifest_icons() -> List[Dict[str, str]]:
    return [
        {
            "src": f"{ICONS_DIR}/icon-{size}x{size}.png",
            "sizes": f"{size}x{size}",
            "type": "image/png",
            "purpose": "any maskable" if size >= MASKABLE_MIN_SIZE else "any",
        }
        for size in PWA_SIZES
    ]


class IconGenerator:
    """Resize one source image into the web and Android icon sets."""

    def __init__(self, project_dir: Optional[Path] = None, log: Optional[BuildLog] = None):
        self.project_dir = project_dir or Path.cwd()
        self.log = log or BuildLog()
        self.config: Optional[ProjectConfig] = None

    def source_path(self) -> Path:
        return self.project_dir / self.config.source_icon

    def _cover(self, img, size: int):
        Image, ImageOps = _pillow()
        return ImageOps.fit(img, (size, size), method=Image.LANCZOS, centering=(0.5, 0.5))

    def _contain(self, img, size: int):
        Image, ImageOps = _pillow()
        return ImageOps.pad(img, (size, size), method=Image.LANCZOS, color=(0, 0, 0, 0))

    def generate_pwa_icons(self, img) -> List[Path]:
        out_dir = self.project_dir / ICONS_DIR
        out_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for size in PWA_SIZES:
            out_path = out_dir / f"icon-{size}x{size}.png"
            self._cover(img, size).save(out_path, format="PNG")
            written.append(out_path)
            self.log.success(f"✓ Generated {size}x{size} icon")
        return written

    def generate_android_icons(self, img) -> List[Path]:
        written = []
        for folder, size in ANDROID_SIZES.items():
            out_dir = self.project_dir / ANDROID_ICONS_DIR / folder
            out_dir.mkdir(parents=True, exist_ok=True)

            launcher = self._cover(img, size)
            for name in ("ic_launcher.png", "ic_launcher_round.png"):
                launcher.save(out_dir / name, format="PNG")
                written.append(out_dir / name)

            # Adaptive-icon foreground gets padding around the artwork
            foreground_size = math.floor(size * FOREGROUND_SCALE)
            foreground = out_dir / "ic_launcher_foreground.png"
            self._contain(img, foreground_size).save(foreground, format="PNG")
            written.append(foreground)

            self.log.success(f"✓ Generated {folder} icons")
        return written

    def update_manifest(self) -> Dict[str, Any]:
        manifest_path = self.project_dir / MANIFEST_FILE
        if manifest_path.exists():
            manifest = read_json(manifest_path)
        else:
            manifest = {
                "name": self.config.app_name,
                "short_name": self.config.app_name,
                "description": self.config.app_description,
                "start_url": "/",
                "display": "standalone",
                "theme_color": self.config.theme_color,
                "background_color": self.config.background_color,
            }

        manifest["icons"] = manifest_icons()
        write_json(manifest_path, manifest)
        self.log.success("✓ manifest.json updated with icon references")
        return manifest

    def generate(self) -> int:
        self.log.log("🎨 PWA Builder - Icon Generator")
        self.config = load_config(self.project_dir)

        source = self.source_path()
        if not source.is_file():
            raise IconError(
                f"Source icon not found: {self.config.source_icon}",
                hint=(
                    "Provide a PNG image (recommended: 1024x1024 or larger); update \"sourceIcon\" "
                    "in build-config.json or place source-icon.png in the project root"
                ),
            )
        self.log.log(f"📷 Source icon: {self.config.source_icon}")

        Image, _ = _pillow()
        try:
            with Image.open(source) as opened:
                img = opened.convert("RGBA")

            self.log.section("📱 Generating PWA icons")
            self.generate_pwa_icons(img)

            self.log.section("🤖 Generating Android launcher icons")
            self.log.log("These are copied into the Android project by pwa-build")
            self.generate_android_icons(img)

            self.log.section("📋 Updating manifest.json")
            self.update_manifest()
        except (OSError, ValueError) as e:
            raise IconError(f"Error generating icons: {e}") from e

        self.log.success("🎉 Icon generation complete!")
        self.log.log(f"📁 PWA icons: {ICONS_DIR}/")
        self.log.log(f"📁 Android icons: {ANDROID_ICONS_DIR}/ (copied during build)")
        return 0
