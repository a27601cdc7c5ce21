"""
Tests for the icon export engine.

Tests cover:
- Exact pixel sizes and folder layout per platform
- Unified Apple export with one shared Contents.json
- Manifest parity with the files written
- Per-file failure collection
- Output folder creation and error classification
- Job validation and export order
"""

import errno
import json
from pathlib import Path

import pytest
from PIL import Image

from AIG_Libs.errors import (
    OutputDirectoryError,
    ValidationError,
    classify_filesystem_error,
    is_permission_error,
)
from AIG_Libs.ExportLib.icon_export import (
    ExportJob,
    IconExportEngine,
    PlatformSelection,
    create_output_folder,
    run_export_job,
)
from AIG_Libs.ExportLib.manifest_generator import ManifestOptions
from AIG_Libs.ExportLib.platform_tables import get_platform_specs


class FailingEngine(IconExportEngine):
    """Engine that refuses to write chosen file names."""

    def __init__(self, failing_names):
        super().__init__()
        self.failing_names = set(failing_names)

    def write_icon(self, icon, path):
        if path.name in self.failing_names:
            raise OSError(f"disk full writing {path.name}")
        return super().write_icon(icon, path)


def _png_files(folder: Path):
    return sorted(str(path.relative_to(folder)) for path in folder.rglob("*.png"))


class TestExportPlatform:
    def test_ios_files_have_exact_sizes(self, solid_image, output_root):
        engine = IconExportEngine()

        result = engine.export_platform(solid_image, "iOS", output_root)

        assert result.folder == output_root / "iOS"
        assert result.succeeded
        assert len(result.written) == 18
        for spec in get_platform_specs("iOS"):
            with Image.open(output_root / "iOS" / spec.filename) as icon:
                assert icon.size == (spec.pixel_size, spec.pixel_size)
                assert icon.format == "PNG"

    def test_contents_json_mirrors_written_files(self, solid_image, output_root):
        result = IconExportEngine().export_platform(solid_image, "macos", output_root)

        payload = json.loads(result.manifest_path.read_text(encoding="utf-8"))
        assert [image["filename"] for image in payload["images"]] == [path.name for path in result.written]

    def test_android_layout(self, solid_image, output_root):
        result = IconExportEngine().export_platform(solid_image, "Android", output_root)

        assert result.manifest_path is None
        assert _png_files(output_root / "Android") == sorted([
            "ic_launcher-playstore.png",
            "mipmap-hdpi/ic_launcher.png",
            "mipmap-mdpi/ic_launcher.png",
            "mipmap-xhdpi/ic_launcher.png",
            "mipmap-xxhdpi/ic_launcher.png",
            "mipmap-xxxhdpi/ic_launcher.png",
        ])
        with Image.open(output_root / "Android" / "mipmap-xxxhdpi" / "ic_launcher.png") as icon:
            assert icon.size == (192, 192)

    def test_web_manifest_written(self, solid_image, output_root):
        options = ManifestOptions(name="Demo App", short_name="Demo")

        result = IconExportEngine().export_platform(solid_image, "web", output_root, options)

        payload = json.loads((output_root / "Web" / "manifest.json").read_text(encoding="utf-8"))
        assert result.manifest_path == output_root / "Web" / "manifest.json"
        assert payload["name"] == "Demo App"
        assert [icon["src"] for icon in payload["icons"]] == ["icon-192x192.png", "icon-512x512.png"]

    def test_non_square_source_gives_square_icons(self, gradient_image, output_root):
        IconExportEngine().export_platform(gradient_image, "Web", output_root)

        with Image.open(output_root / "Web" / "apple-touch-icon.png") as icon:
            assert icon.size == (180, 180)

    def test_unknown_platform_rejected(self, solid_image, output_root):
        with pytest.raises(ValueError):
            IconExportEngine().export_platform(solid_image, "tvOS", output_root)

    def test_each_size_rendered_once(self, solid_image, monkeypatch, output_root):
        engine = IconExportEngine()
        rendered = []
        original = engine.render_size

        def counting_render(image, pixel_size):
            if pixel_size not in engine._cache:
                rendered.append(pixel_size)
            return original(image, pixel_size)

        monkeypatch.setattr(engine, "render_size", counting_render)

        engine.export_platform(solid_image, "macOS", output_root)

        assert sorted(rendered) == [16, 32, 64, 128, 256, 512, 1024]


class TestFailureCollection:
    def test_failed_file_is_skipped_and_reported(self, solid_image, output_root):
        engine = FailingEngine({"icon_32x32.png"})

        result = engine.export_platform(solid_image, "macOS", output_root)

        assert not result.succeeded
        assert len(result.written) == 9
        assert [failure.path.name for failure in result.failed] == ["icon_32x32.png"]
        assert "disk full" in result.failed[0].reason
        assert not (output_root / "macOS" / "icon_32x32.png").exists()

    def test_manifest_omits_failed_file(self, solid_image, output_root):
        engine = FailingEngine({"icon-512x512.png"})

        engine.export_platform(solid_image, "Web", output_root)

        payload = json.loads((output_root / "Web" / "manifest.json").read_text(encoding="utf-8"))
        assert [icon["src"] for icon in payload["icons"]] == ["icon-192x192.png"]

    def test_manifest_failure_recorded(self, solid_image, output_root, monkeypatch):
        def broken_write(*args, **kwargs):
            raise PermissionError("read-only")

        monkeypatch.setattr("AIG_Libs.ExportLib.icon_export.write_manifest", broken_write)

        result = IconExportEngine().export_platform(solid_image, "iOS", output_root)

        assert len(result.written) == 18
        assert result.manifest_path is None
        assert [failure.path.name for failure in result.failed] == ["Contents.json"]


class TestUnifiedApple:
    def test_unified_export_writes_38_files_and_one_manifest(self, solid_image, output_root):
        result = IconExportEngine().export_unified_apple(
            solid_image, ["iOS", "macOS", "watchOS"], output_root
        )

        apple = output_root / "Apple"
        assert result.platform == "Apple"
        assert len(result.written) == 38
        assert len(list(apple.glob("*.png"))) == 38
        assert sorted(path.name for path in apple.glob("*.json")) == ["Contents.json"]

        payload = json.loads((apple / "Contents.json").read_text(encoding="utf-8"))
        assert len(payload["images"]) == 38
        idioms = {image["idiom"] for image in payload["images"]}
        assert idioms == {"iphone", "ipad", "ios-marketing", "mac", "watch"}

    def test_unified_subset_follows_platform_order(self, solid_image, output_root):
        result = IconExportEngine().export_unified_apple(solid_image, ["watchos", "ios"], output_root)

        names = [path.name for path in result.written]
        assert len(names) == 28
        assert names[0] == "iPhone_20pt@2x.png"
        assert names[-1] == "AppIcon108x108@2x.png"

    def test_unified_rejects_non_apple(self, solid_image, output_root):
        with pytest.raises(ValueError):
            IconExportEngine().export_unified_apple(solid_image, ["iOS", "Android"], output_root)

    def test_unified_requires_a_platform(self, solid_image, output_root):
        with pytest.raises(ValueError):
            IconExportEngine().export_unified_apple(solid_image, [], output_root)


class TestOutputFolder:
    def test_folder_named_after_timestamp(self, output_root):
        folder = create_output_folder(output_root, timestamp=1700000000)

        assert folder == output_root / "AppIcons-1700000000"
        assert folder.is_dir()

    def test_existing_folder_gets_suffix(self, output_root):
        first = create_output_folder(output_root, timestamp=42)
        second = create_output_folder(output_root, timestamp=42)
        third = create_output_folder(output_root, timestamp=42)

        assert first.name == "AppIcons-42"
        assert second.name == "AppIcons-42-1"
        assert third.name == "AppIcons-42-2"

    def test_missing_root_is_created(self, tmp_path):
        folder = create_output_folder(tmp_path / "a" / "b", timestamp=1)

        assert folder.is_dir()

    def test_root_that_is_a_file_is_classified(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(OutputDirectoryError) as excinfo:
            create_output_folder(blocker, timestamp=1)

        assert not excinfo.value.permission_denied

    def test_permission_error_is_classified(self, output_root, monkeypatch):
        def denied(self, *args, **kwargs):
            raise PermissionError(errno.EACCES, "Permission denied")

        monkeypatch.setattr(Path, "mkdir", denied)

        with pytest.raises(OutputDirectoryError) as excinfo:
            create_output_folder(output_root, timestamp=1)

        assert excinfo.value.permission_denied
        assert "choose a different folder" in str(excinfo.value)


class TestErrorClassification:
    def test_read_only_volume_is_permission_problem(self):
        error = OSError(errno.EROFS, "Read-only file system")

        assert is_permission_error(error)
        assert classify_filesystem_error(error, "/mnt/ro").permission_denied

    def test_other_errors_keep_reason(self):
        error = OSError(errno.ENOSPC, "No space left on device")

        wrapped = classify_filesystem_error(error, "/tmp/x")

        assert not wrapped.permission_denied
        assert "No space left" in str(wrapped)
        assert isinstance(wrapped, OSError)


class TestRunExportJob:
    def test_full_job_layout(self, solid_image, output_root):
        job = ExportJob(image=solid_image, output_root=output_root, timestamp=1000)

        result = run_export_job(job)

        assert result.succeeded
        assert result.output_folder == output_root / "AppIcons-1000"
        assert [platform.platform for platform in result.platforms] == [
            "iOS", "macOS", "watchOS", "Android", "Web"
        ]
        assert len(result.all_written) == 18 + 10 + 10 + 6 + 7

    def test_unified_job(self, solid_image, output_root):
        selection = PlatformSelection(android=False, web=False, unified_apple=True)
        job = ExportJob(image=solid_image, output_root=output_root, selection=selection, timestamp=7)

        result = run_export_job(job)

        run_folder = output_root / "AppIcons-7"
        assert [child.name for child in run_folder.iterdir()] == ["Apple"]
        assert len(result.all_written) == 38

    def test_no_platform_selected_writes_nothing(self, solid_image, output_root):
        selection = PlatformSelection(ios=False, macos=False, watchos=False, android=False, web=False)
        job = ExportJob(image=solid_image, output_root=output_root, selection=selection)

        with pytest.raises(ValidationError):
            run_export_job(job)

        assert list(output_root.iterdir()) == []

    def test_missing_image_rejected(self, output_root):
        with pytest.raises(ValidationError):
            run_export_job(ExportJob(image=None, output_root=output_root))

    def test_partial_failure_keeps_going(self, solid_image, output_root):
        selection = PlatformSelection(ios=False, macos=False, watchos=False)
        job = ExportJob(image=solid_image, output_root=output_root, selection=selection, timestamp=5)

        result = run_export_job(job, FailingEngine({"ic_launcher.png"}))

        assert not result.succeeded
        assert len(result.all_failed) == 5
        assert len(result.all_written) == 1 + 7

    def test_source_image_not_modified(self, gradient_image, output_root):
        before = gradient_image.tobytes()

        run_export_job(ExportJob(image=gradient_image, output_root=output_root))

        assert gradient_image.tobytes() == before


class TestPlatformSelection:
    def test_from_names(self):
        selection = PlatformSelection.from_names(["IOS", "web"], unified_apple=True)

        assert selection.selected_platforms() == ["iOS", "Web"]
        assert selection.unified_apple

    def test_from_unknown_name(self):
        with pytest.raises(ValueError):
            PlatformSelection.from_names(["ios", "symbian"])

    def test_empty_selection(self):
        assert not PlatformSelection.from_names([]).any_selected()
