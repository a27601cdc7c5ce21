"""
SessionLib - Preferences storage and the headless session facade
"""

from AIG_Libs.SessionLib.preferences import (
    PersistedPreferences,
    load_preferences,
    save_preferences,
)
from AIG_Libs.SessionLib.icon_session import IconSession, decode_image

__all__ = [
    "PersistedPreferences",
    "load_preferences",
    "save_preferences",
    "IconSession",
    "decode_image",
]
