"""
ExportLib - Platform icon tables, export engine and manifests

This module renders the edited image at every platform size, writes the
PNG files and their manifests, and runs export jobs in the background.
"""

from AIG_Libs.ExportLib.platform_tables import (
    PlatformSizeSpec,
    APPLE_PLATFORMS,
    get_platform_specs,
    platform_names,
)
from AIG_Libs.ExportLib.manifest_generator import (
    ManifestOptions,
    build_contents_json,
    build_web_manifest,
    write_manifest,
)
from AIG_Libs.ExportLib.icon_export import (
    ExportFailure,
    PlatformExportResult,
    ExportJobResult,
    PlatformSelection,
    ExportJob,
    IconExportEngine,
    create_output_folder,
    run_export_job,
)
from AIG_Libs.ExportLib.export_worker import ExportWorker

__all__ = [
    "PlatformSizeSpec",
    "APPLE_PLATFORMS",
    "get_platform_specs",
    "platform_names",
    "ManifestOptions",
    "build_contents_json",
    "build_web_manifest",
    "write_manifest",
    "ExportFailure",
    "PlatformExportResult",
    "ExportJobResult",
    "PlatformSelection",
    "ExportJob",
    "IconExportEngine",
    "create_output_folder",
    "run_export_job",
    "ExportWorker",
]
