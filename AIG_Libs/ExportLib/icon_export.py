"""
Icon export engine for the App Icon Generator.

Renders one edited image at every size a platform table lists, writes the
PNG files into per-platform folders and writes each folder's manifest.

Output layout for one run:
    <root>/AppIcons-<timestamp>/<Platform>/<filename>
    <root>/AppIcons-<timestamp>/Apple/<filename>    (unified Apple mode)

A failure writing one file is logged and recorded in the result; the
remaining files of the run are still written. Only a failure creating the
run folder itself aborts the job.

Classes:
    ExportFailure: One file that could not be written
    PlatformExportResult: Files written and failed for one platform folder
    ExportJobResult: Outcome of a complete export job
    PlatformSelection: Which platforms to export
    ExportJob: Immutable request for one export run
    IconExportEngine: Renders and writes icon files

Functions:
    create_output_folder: Create a fresh AppIcons-<timestamp> folder
    run_export_job: Run a complete export job synchronously
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from AIG_Libs.constants import (
    DEFAULT_OUTPUT_FORMAT,
    OUTPUT_FOLDER_PREFIX,
    PLATFORM_ANDROID,
    PLATFORM_IOS,
    PLATFORM_MACOS,
    PLATFORM_WATCHOS,
    PLATFORM_WEB,
    UNIFIED_APPLE_FOLDER,
)
from AIG_Libs.errors import ValidationError, classify_filesystem_error
from AIG_Libs.ExportLib.manifest_generator import (
    ManifestOptions,
    manifest_filename,
    write_manifest,
)
from AIG_Libs.ExportLib.platform_tables import (
    APPLE_PLATFORMS,
    PlatformSizeSpec,
    get_platform_specs,
    normalize_platform,
)
from AIG_Libs.ImageEditingLib.pixel_renderer import ensure_rgba, render_exact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportFailure:
    """A file that could not be written, and why."""
    path: Path
    reason: str


@dataclass
class PlatformExportResult:
    """Outcome of exporting one platform folder.

    Attributes:
        platform: Platform name, or "Apple" for a unified Apple folder
        folder: Folder the files were written into
        written: Paths written, in table order
        failed: Files (icons or manifest) that could not be written
        manifest_path: Manifest written for this folder, if any
    """
    platform: str
    folder: Path
    written: List[Path] = field(default_factory=list)
    failed: List[ExportFailure] = field(default_factory=list)
    manifest_path: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return not self.failed


@dataclass
class ExportJobResult:
    """Outcome of one export job.

    `error` is set when the job was aborted (for example the run folder
    could not be created); per-file problems are listed in the platform
    results instead.
    """
    output_folder: Optional[Path] = None
    platforms: List[PlatformExportResult] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def all_written(self) -> List[Path]:
        return [path for result in self.platforms for path in result.written]

    @property
    def all_failed(self) -> List[ExportFailure]:
        return [failure for result in self.platforms for failure in result.failed]

    @property
    def succeeded(self) -> bool:
        return self.error is None and not self.all_failed


@dataclass(frozen=True)
class PlatformSelection:
    """Which platforms an export job covers.

    Attributes:
        ios, macos, watchos, android, web: Platform toggles
        unified_apple: Write all selected Apple platforms into one "Apple"
            folder with a single Contents.json
    """
    ios: bool = True
    macos: bool = True
    watchos: bool = True
    android: bool = True
    web: bool = True
    unified_apple: bool = False

    def apple_platforms(self) -> List[str]:
        flags = (
            (PLATFORM_IOS, self.ios),
            (PLATFORM_MACOS, self.macos),
            (PLATFORM_WATCHOS, self.watchos),
        )
        return [name for name, enabled in flags if enabled]

    def selected_platforms(self) -> List[str]:
        """Return selected platform names in export order."""
        names = self.apple_platforms()
        if self.android:
            names.append(PLATFORM_ANDROID)
        if self.web:
            names.append(PLATFORM_WEB)
        return names

    def any_selected(self) -> bool:
        return bool(self.selected_platforms())

    @classmethod
    def from_names(cls, names: Iterable[str], unified_apple: bool = False) -> "PlatformSelection":
        """
        Build a selection from platform names (case-insensitive).

        Raises:
            ValueError: If a name is not a known platform
        """
        chosen = {normalize_platform(name) for name in names}
        return cls(
            ios=PLATFORM_IOS in chosen,
            macos=PLATFORM_MACOS in chosen,
            watchos=PLATFORM_WATCHOS in chosen,
            android=PLATFORM_ANDROID in chosen,
            web=PLATFORM_WEB in chosen,
            unified_apple=unified_apple,
        )


@dataclass(frozen=True)
class ExportJob:
    """Immutable request for one export run.

    Attributes:
        image: Snapshot of the edited image; never modified by the export
        output_root: Folder the AppIcons-<timestamp> folder is created in
        selection: Platforms to export
        manifest_options: Metadata for the web manifest
        timestamp: Unix timestamp for the folder name (current time when None)
    """
    image: Any
    output_root: Path
    selection: PlatformSelection = field(default_factory=PlatformSelection)
    manifest_options: ManifestOptions = field(default_factory=ManifestOptions)
    timestamp: Optional[int] = None

    def validate(self) -> None:
        """
        Check the job can run.

        Raises:
            ValidationError: If there is no image or no platform is selected
        """
        if self.image is None:
            raise ValidationError("No image to export. Please load an image first.")
        if not self.selection.any_selected():
            raise ValidationError("Please select at least one platform to export.")


def create_output_folder(root: Union[str, Path], timestamp: Optional[int] = None) -> Path:
    """
    Create a fresh AppIcons-<timestamp> folder under root.

    When a folder of that name already exists a numeric suffix is added
    (AppIcons-<timestamp>-1, -2, ...) so a run never writes into an
    earlier run's folder.

    Args:
        root: Parent folder (created if missing)
        timestamp: Unix timestamp for the name (current time when None)

    Returns:
        Path to the new folder

    Raises:
        OutputDirectoryError: If the folder cannot be created
    """
    root = Path(root)
    if timestamp is None:
        timestamp = int(time.time())
    base_name = f"{OUTPUT_FOLDER_PREFIX}{int(timestamp)}"

    counter = 0
    while True:
        name = base_name if counter == 0 else f"{base_name}-{counter}"
        candidate = root / name
        try:
            candidate.mkdir(parents=True)
            logger.debug(f"Created output folder {candidate}")
            return candidate
        except FileExistsError as error:
            # Root itself may be a file rather than an earlier run folder
            if not candidate.exists():
                raise classify_filesystem_error(error, candidate) from error
            counter += 1
        except OSError as error:
            raise classify_filesystem_error(error, candidate) from error


class IconExportEngine:
    """
    Renders an image at every size of a platform table and writes the files.

    Each distinct pixel size is rendered once per source image and reused
    for every table entry that needs it (for example iOS 120px appears
    twice and macOS 32/256/512px appear twice).
    """

    def __init__(self, output_format: str = DEFAULT_OUTPUT_FORMAT):
        self.output_format = output_format
        self._cache: Dict[int, Any] = {}
        self._cache_source: Optional[Any] = None

    def clear_cache(self) -> None:
        self._cache.clear()
        self._cache_source = None

    def render_size(self, image: Any, pixel_size: int) -> Any:
        """Return the image rendered at pixel_size x pixel_size."""
        if image is not self._cache_source:
            self._cache.clear()
            self._cache_source = image

        icon = self._cache.get(pixel_size)
        if icon is None:
            icon = render_exact(image, pixel_size, pixel_size)
            self._cache[pixel_size] = icon
        return icon

    def write_icon(self, icon: Any, path: Path) -> Path:
        """
        Encode one icon to disk, creating parent folders as needed.

        Raises:
            OSError: If the file cannot be written
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            icon.save(path, format=self.output_format)
        except Exception as e:
            raise OSError(f"Failed to save icon to {path}: {str(e)}") from e
        return path

    def export_platform(
        self,
        image: Any,
        platform: str,
        output_folder: Union[str, Path],
        manifest_options: Optional[ManifestOptions] = None,
    ) -> PlatformExportResult:
        """
        Write every icon of one platform plus its manifest.

        Args:
            image: Edited image (any mode, converted to RGBA)
            platform: Platform name (case-insensitive)
            output_folder: Run folder; files go into <output_folder>/<Platform>/
            manifest_options: Metadata for the web manifest

        Returns:
            PlatformExportResult listing written and failed files

        Raises:
            ValueError: If the platform is unknown
        """
        name = normalize_platform(platform)
        folder = Path(output_folder) / name
        return self._export_specs(image, name, get_platform_specs(name), folder, manifest_options)

    def export_unified_apple(
        self,
        image: Any,
        platforms: Sequence[str],
        output_folder: Union[str, Path],
        manifest_options: Optional[ManifestOptions] = None,
    ) -> PlatformExportResult:
        """
        Write the selected Apple platforms into one "Apple" folder.

        The platform tables use distinct file name prefixes, so the files
        share the folder without collisions and one Contents.json lists
        all of them.

        Raises:
            ValueError: If no platform is given or one is not an Apple platform
        """
        names = {normalize_platform(platform) for platform in platforms}
        if not names:
            raise ValueError("At least one Apple platform is required")
        non_apple = sorted(names - set(APPLE_PLATFORMS))
        if non_apple:
            raise ValueError(f"Not Apple platforms: {', '.join(non_apple)}")

        specs: List[PlatformSizeSpec] = []
        for name in APPLE_PLATFORMS:
            if name in names:
                specs.extend(get_platform_specs(name))

        folder = Path(output_folder) / UNIFIED_APPLE_FOLDER
        return self._export_specs(image, UNIFIED_APPLE_FOLDER, specs, folder, manifest_options)

    def _export_specs(
        self,
        image: Any,
        platform: str,
        specs: Sequence[PlatformSizeSpec],
        folder: Path,
        manifest_options: Optional[ManifestOptions],
    ) -> PlatformExportResult:
        source = ensure_rgba(image)
        result = PlatformExportResult(platform=platform, folder=folder)
        written_specs: List[PlatformSizeSpec] = []

        for spec in specs:
            path = folder / spec.filename
            try:
                icon = self.render_size(source, spec.pixel_size)
                self.write_icon(icon, path)
            except (OSError, ValueError) as e:
                logger.warning(f"Skipping {path}: {e}")
                result.failed.append(ExportFailure(path=path, reason=str(e)))
                continue
            logger.debug(f"Wrote {spec.pixel_size}x{spec.pixel_size} icon to {path}")
            result.written.append(path)
            written_specs.append(spec)

        try:
            result.manifest_path = write_manifest(platform, written_specs, folder, manifest_options)
        except OSError as e:
            manifest_path = folder / (manifest_filename(platform) or "")
            logger.warning(f"Could not write manifest {manifest_path}: {e}")
            result.failed.append(ExportFailure(path=manifest_path, reason=str(e)))

        logger.info(
            f"{platform}: wrote {len(result.written)} icons to {folder}"
            + (f", {len(result.failed)} failed" if result.failed else "")
        )
        return result


def _platform_runs(selection: PlatformSelection) -> List[Tuple[str, List[str]]]:
    """Split a selection into (folder, platforms) runs in export order."""
    runs: List[Tuple[str, List[str]]] = []
    apple = selection.apple_platforms()
    if apple and selection.unified_apple:
        runs.append((UNIFIED_APPLE_FOLDER, apple))
    else:
        runs.extend((name, [name]) for name in apple)
    if selection.android:
        runs.append((PLATFORM_ANDROID, [PLATFORM_ANDROID]))
    if selection.web:
        runs.append((PLATFORM_WEB, [PLATFORM_WEB]))
    return runs


def run_export_job(job: ExportJob, engine: Optional[IconExportEngine] = None) -> ExportJobResult:
    """
    Run a complete export job synchronously.

    Args:
        job: The export request
        engine: Engine to use (a new one when None)

    Returns:
        ExportJobResult with per-platform written and failed files

    Raises:
        ValidationError: If the job is invalid; nothing is written
        OutputDirectoryError: If the run folder cannot be created
    """
    job.validate()
    output_folder = create_output_folder(job.output_root, job.timestamp)
    logger.info(
        f"Exporting {', '.join(job.selection.selected_platforms())} to {output_folder}"
    )

    engine = engine or IconExportEngine()
    result = ExportJobResult(output_folder=output_folder)
    try:
        for folder_name, platforms in _platform_runs(job.selection):
            if folder_name == UNIFIED_APPLE_FOLDER:
                platform_result = engine.export_unified_apple(
                    job.image, platforms, output_folder, job.manifest_options
                )
            else:
                platform_result = engine.export_platform(
                    job.image, folder_name, output_folder, job.manifest_options
                )
            result.platforms.append(platform_result)
    finally:
        engine.clear_cache()

    logger.info(
        f"Export finished: {len(result.all_written)} files written, "
        f"{len(result.all_failed)} failed"
    )
    return result
