"""
Persisted user preferences for the App Icon Generator.

Preferences are a plain JSON file holding the platform toggles, the
unified Apple switch, the last output folder and the web manifest names.
Loading never fails: a missing, unreadable or corrupt file (or a file
with wrongly typed fields) yields the defaults for the affected fields.

Functions:
    load_preferences: Read preferences from a JSON file
    save_preferences: Write preferences to a JSON file
    default_preferences_path: Preferences file inside a config directory
"""

import json
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from AIG_Libs.constants import (
    DEFAULT_APP_NAME,
    DEFAULT_APP_SHORT_NAME,
    FIELD_ANDROID,
    FIELD_IOS,
    FIELD_MACOS,
    FIELD_MANIFEST_NAME,
    FIELD_MANIFEST_SHORT_NAME,
    FIELD_OUTPUT_FOLDER,
    FIELD_UNIFIED_APPLE,
    FIELD_WATCHOS,
    FIELD_WEB,
    JSON_INDENT,
    PREFERENCES_FILENAME,
)
from AIG_Libs.ExportLib.icon_export import PlatformSelection
from AIG_Libs.ExportLib.manifest_generator import ManifestOptions

_BOOL_FIELDS = (FIELD_IOS, FIELD_MACOS, FIELD_WATCHOS, FIELD_ANDROID, FIELD_WEB, FIELD_UNIFIED_APPLE)
_STRING_FIELDS = (FIELD_MANIFEST_NAME, FIELD_MANIFEST_SHORT_NAME)


@dataclass(frozen=True)
class PersistedPreferences:
    """User choices remembered between sessions.

    Attributes:
        ios, macos, watchos, android, web: Platform toggles
        unified_apple: Export Apple platforms into one shared folder
        output_folder: Last chosen output root (None = system temp folder)
        manifest_name: App name for the web manifest
        manifest_short_name: Short app name for the web manifest
    """
    ios: bool = True
    macos: bool = True
    watchos: bool = True
    android: bool = True
    web: bool = True
    unified_apple: bool = False
    output_folder: Optional[str] = None
    manifest_name: str = DEFAULT_APP_NAME
    manifest_short_name: str = DEFAULT_APP_SHORT_NAME

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersistedPreferences":
        """Create from dictionary, keeping defaults for missing or invalid fields."""
        values: Dict[str, Any] = {}
        for key in _BOOL_FIELDS:
            if isinstance(data.get(key), bool):
                values[key] = data[key]
        for key in _STRING_FIELDS:
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                values[key] = value
        output_folder = data.get(FIELD_OUTPUT_FOLDER)
        if isinstance(output_folder, str) and output_folder.strip():
            values[FIELD_OUTPUT_FOLDER] = output_folder
        return cls(**values)

    def with_changes(self, **changes: Any) -> "PersistedPreferences":
        """
        Return a copy with some fields replaced.

        Raises:
            ValueError: If a field name is unknown
        """
        unknown = sorted(set(changes) - set(self.__dataclass_fields__))
        if unknown:
            raise ValueError(f"Unknown preference fields: {', '.join(unknown)}")
        return replace(self, **changes)

    def selection(self) -> PlatformSelection:
        return PlatformSelection(
            ios=self.ios,
            macos=self.macos,
            watchos=self.watchos,
            android=self.android,
            web=self.web,
            unified_apple=self.unified_apple,
        )

    def manifest_options(self) -> ManifestOptions:
        return ManifestOptions(name=self.manifest_name, short_name=self.manifest_short_name)


def default_preferences_path(config_dir: Path) -> Path:
    return Path(config_dir) / PREFERENCES_FILENAME


def load_preferences(path: Optional[Path]) -> PersistedPreferences:
    """
    Load preferences from a JSON file.

    Args:
        path: Preferences file, or None for defaults

    Returns:
        The stored preferences, or defaults if the file is missing or corrupt
    """
    if path is None:
        return PersistedPreferences()
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, UnicodeDecodeError, OSError):
        return PersistedPreferences()

    if not isinstance(payload, dict):
        return PersistedPreferences()
    return PersistedPreferences.from_dict(payload)


def save_preferences(path: Path, preferences: PersistedPreferences) -> None:
    """
    Write preferences to a JSON file, creating the parent folder.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(preferences.to_dict(), indent=JSON_INDENT), encoding="utf-8")
