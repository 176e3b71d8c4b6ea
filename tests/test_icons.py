"""Tests for the icon generator (requires Pillow)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pwa_builder.exceptions import IconError
from pwa_builder.icons import ANDROID_SIZES, PWA_SIZES, IconGenerator, manifest_icons

from .conftest import write_config

Image = pytest.importorskip("PIL.Image")


@pytest.fixture
def icon_project(project: Path) -> Path:
    # Wide image so "cover" and "contain" give visibly different results
    img = Image.new("RGBA", (300, 200), (200, 30, 30, 255))
    img.save(project / "source-icon.png")
    return project


def test_manifest_icon_purposes():
    icons = manifest_icons()
    assert [i["sizes"] for i in icons] == [f"{s}x{s}" for s in PWA_SIZES]
    purposes = {i["sizes"]: i["purpose"] for i in icons}
    assert purposes["152x152"] == "any"
    assert purposes["192x192"] == "any maskable"
    assert purposes["512x512"] == "any maskable"
    assert all(i["type"] == "image/png" for i in icons)


def test_generates_every_icon(icon_project: Path, log):
    assert IconGenerator(icon_project, log).generate() == 0

    for size in PWA_SIZES:
        with Image.open(icon_project / "icons" / f"icon-{size}x{size}.png") as img:
            assert img.size == (size, size)

    for folder, size in ANDROID_SIZES.items():
        out = icon_project / "android-icons" / folder
        for name in ("ic_launcher.png", "ic_launcher_round.png"):
            with Image.open(out / name) as img:
                assert img.size == (size, size)
        with Image.open(out / "ic_launcher_foreground.png") as img:
            assert img.size == (int(size * 1.2), int(size * 1.2))
            # contain fit leaves transparent bands around the wide source
            assert img.getpixel((0, 0))[3] == 0


def test_cover_fit_fills_the_square(icon_project: Path, log):
    IconGenerator(icon_project, log).generate()
    with Image.open(icon_project / "icons" / "icon-72x72.png") as img:
        assert img.convert("RGBA").getpixel((0, 0))[3] == 255


def test_manifest_keeps_other_keys(icon_project: Path, log):
    manifest_path = icon_project / "manifest.json"
    manifest_path.write_text(
        json.dumps({"name": "Demo", "theme_color": "#123456", "icons": [{"src": "old.png"}]}),
        encoding="utf-8",
    )

    IconGenerator(icon_project, log).generate()

    manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    assert manifest["name"] == "Demo"
    assert manifest["theme_color"] == "#123456"
    assert manifest["icons"] == manifest_icons()


def test_manifest_created_from_config(icon_project: Path, log):
    (icon_project / "manifest.json").unlink()
    write_config(icon_project, themeColor="#000000")

    IconGenerator(icon_project, log).generate()

    manifest = json.loads((icon_project / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["name"] == manifest["short_name"] == "Demo"
    assert manifest["display"] == "standalone"
    assert manifest["theme_color"] == "#000000"
    assert len(manifest["icons"]) == 8


def test_rerun_is_idempotent(icon_project: Path, log):
    generator = IconGenerator(icon_project, log)
    generator.generate()
    first = (icon_project / "manifest.json").read_text(encoding="utf-8")
    files = sorted(p.relative_to(icon_project) for p in icon_project.rglob("*.png"))

    generator.generate()

    assert (icon_project / "manifest.json").read_text(encoding="utf-8") == first
    assert sorted(p.relative_to(icon_project) for p in icon_project.rglob("*.png")) == files


def test_missing_source_icon(project: Path, log):
    with pytest.raises(IconError, match="Source icon not found"):
        IconGenerator(project, log).generate()
    assert not (project / "icons").exists()


def test_unreadable_source_icon(project: Path, log):
    (project / "source-icon.png").write_bytes(b"not an image")
    with pytest.raises(IconError, match="Error generating icons"):
        IconGenerator(project, log).generate()
