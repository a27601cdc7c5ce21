"""
Headless session facade for the App Icon Generator.

IconSession ties the pieces together the way an editor window would:
it loads the source image, applies parameter edits (immediately or
debounced per control), keeps the user's preferences and launches
background exports.

Example:
    >>> session = IconSession(preferences_path=Path("prefs.json"))
    >>> session.load_image("logo.png")
    >>> session.update_parameters(EditParameters(brightness=0.1), control="brightness")
    >>> session.generate_icons("/tmp/out")
    >>> session.wait_for_generation()
    True
    >>> session.output_folder
    PosixPath('/tmp/out/AppIcons-1700000000')
"""

import io
import logging
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from AIG_Libs.constants import DEFAULT_DEBOUNCE_DELAY, RGBA_MODE
from AIG_Libs.errors import ExportInProgressError, ImageDecodeError, ValidationError
from AIG_Libs.ExportLib.export_worker import ExportWorker
from AIG_Libs.ExportLib.icon_export import ExportJob, ExportJobResult
from AIG_Libs.ImageEditingLib.debouncer import Debouncer
from AIG_Libs.ImageEditingLib.edit_pipeline import EditSession, EditState
from AIG_Libs.ImageEditingLib.image_models import EditParameters
from AIG_Libs.pillow_compat import Image
from AIG_Libs.SessionLib.preferences import (
    PersistedPreferences,
    load_preferences,
    save_preferences,
)

logger = logging.getLogger(__name__)


def decode_image(source: Union[str, Path, io.BytesIO]) -> Any:
    """
    Decode an image file (or in-memory file) into an RGBA PIL Image.

    Raises:
        ImageDecodeError: If the data cannot be read or decoded
    """
    try:
        with Image.open(source) as opened:
            opened.load()
            return opened.convert(RGBA_MODE)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Could not load image: {e}") from e


class IconSession:
    """
    Source image, edits, preferences and export state for one user session.

    Attributes:
        generation_complete: True after the last export finished successfully
        output_folder: Run folder of the last finished export
        last_result: ExportJobResult of the last finished export
        last_error: Error that aborted the last export, if any
    """

    def __init__(
        self,
        preferences: Optional[PersistedPreferences] = None,
        preferences_path: Optional[Path] = None,
        worker: Optional[ExportWorker] = None,
        debounce_delay: float = DEFAULT_DEBOUNCE_DELAY,
    ):
        self.preferences_path = Path(preferences_path) if preferences_path else None
        if preferences is None:
            preferences = load_preferences(self.preferences_path)
        self._preferences = preferences

        self._edit = EditSession()
        self._owns_worker = worker is None
        self._worker = worker or ExportWorker()

        self._debounce_delay = debounce_delay
        self._debouncers: Dict[str, Debouncer] = {}
        self._pending_params: Optional[EditParameters] = None
        self._pending_generation = 0
        self._lock = threading.Lock()
        # Serialises edits against resets; _generation counts resets and new sources
        self._edit_lock = threading.Lock()
        self._generation = 0

        self._generating = False
        self._finished = threading.Event()
        self._finished.set()
        self.generation_complete = False
        self.output_folder: Optional[Path] = None
        self.last_result: Optional[ExportJobResult] = None
        self.last_error: Optional[BaseException] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def preferences(self) -> PersistedPreferences:
        return self._preferences

    @property
    def source_image(self) -> Optional[Any]:
        return self._edit.source

    @property
    def edited_image(self) -> Optional[Any]:
        return self._edit.edited_image

    @property
    def parameters(self) -> EditParameters:
        return self._edit.parameters

    @property
    def edit_state(self) -> EditState:
        return self._edit.state

    @property
    def is_generating(self) -> bool:
        with self._lock:
            return self._generating

    # ------------------------------------------------------------------
    # Source image
    # ------------------------------------------------------------------

    def load_image(self, path: Union[str, Path]) -> Any:
        """
        Load a new source image from a file and reset all edits.

        Raises:
            ImageDecodeError: If the file cannot be decoded; the session is unchanged
        """
        image = decode_image(Path(path))
        self._set_source(image)
        logger.info(f"Loaded {path} ({image.width}x{image.height})")
        return image

    def load_image_bytes(self, data: bytes) -> Any:
        """Load a new source image from encoded bytes (e.g. a pasted file)."""
        image = decode_image(io.BytesIO(data))
        self._set_source(image)
        return image

    def _set_source(self, image: Any) -> None:
        with self._edit_lock:
            self._generation += 1
            self._cancel_pending()
            self._edit.load_new_source(image)
        self.generation_complete = False

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def update_parameters(self, params: EditParameters, control: Optional[str] = None) -> None:
        """
        Apply a new parameter set.

        Without a control name the change is applied immediately. With a
        control name (e.g. "brightness") it is debounced: a burst of
        changes from the same control only applies the last value, once
        the control has been quiet for the debounce delay.

        Raises:
            ValidationError: If no source image is loaded
            TypeError: If params is not an EditParameters
        """
        if not isinstance(params, EditParameters):
            raise TypeError(f"Expected EditParameters, got {type(params)}")
        if not self._edit.has_source:
            raise ValidationError("Please load an image first.")

        if control is None:
            with self._edit_lock:
                self._cancel_pending()
                self._edit.apply_changes(params)
            return

        with self._lock:
            self._pending_params = params
            self._pending_generation = self._generation
            debouncer = self._debouncers.get(control)
            if debouncer is None:
                debouncer = Debouncer(self._debounce_delay)
                self._debouncers[control] = debouncer
        debouncer.submit(self._apply_pending)

    def _apply_pending(self) -> None:
        with self._edit_lock:
            with self._lock:
                params = self._pending_params
                generation = self._pending_generation
                self._pending_params = None
            # Another control's timer already applied the latest parameters
            if params is None:
                return
            # Queued before a reset or a new source image
            if generation != self._generation:
                return
            self._edit.apply_changes(params)

    def flush_pending(self) -> bool:
        """Apply debounced changes now. Returns True if any were pending."""
        flushed = False
        for debouncer in list(self._debouncers.values()):
            flushed = debouncer.flush() or flushed
        return flushed

    def _cancel_pending(self) -> None:
        for debouncer in list(self._debouncers.values()):
            debouncer.cancel()
        with self._lock:
            self._pending_params = None

    def reset_edits(self) -> Any:
        """
        Drop all edits, returning the unedited image.

        Raises:
            ValidationError: If no source image is loaded
        """
        with self._edit_lock:
            self._generation += 1
            self._cancel_pending()
            return self._edit.reset()

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def update_preferences(self, **changes: Any) -> PersistedPreferences:
        """
        Change preference fields and store them when a preferences path is set.

        Raises:
            ValueError: If a field name is unknown
        """
        preferences = self._preferences.with_changes(**changes)
        self._preferences = preferences
        if self.preferences_path is not None:
            save_preferences(self.preferences_path, preferences)
        return preferences

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def generate_icons(self, output_root: Optional[Union[str, Path]] = None) -> None:
        """
        Validate and launch a background export of the edited image.

        The output root defaults to the preferences' output folder, then
        the system temp folder. Validation problems are raised here, before
        anything is written; problems during the export are reported
        through `last_error` and `last_result` once it finishes.

        Raises:
            ValidationError: If no image is loaded or no platform is selected
            ExportInProgressError: If an export is already running
        """
        self.flush_pending()
        if not self._edit.has_source:
            raise ValidationError("Please load an image first.")
        selection = self._preferences.selection()
        if not selection.any_selected():
            raise ValidationError("Please select at least one platform to export.")

        root = output_root or self._preferences.output_folder or tempfile.gettempdir()
        job = ExportJob(
            image=self._edit.snapshot(),
            output_root=Path(root),
            selection=selection,
            manifest_options=self._preferences.manifest_options(),
        )

        with self._lock:
            if self._generating:
                raise ExportInProgressError("An export is already in progress")
            self._generating = True
            self._finished.clear()
            self.generation_complete = False

        try:
            self._worker.start(job, self._on_export_complete)
        except Exception:
            with self._lock:
                self._generating = False
                self._finished.set()
            raise
        logger.info(f"Started export to {root}")

    def _on_export_complete(self, result: ExportJobResult) -> None:
        with self._lock:
            self.last_result = result
            self.last_error = result.error
            self.output_folder = result.output_folder
            self.generation_complete = result.error is None
            self._generating = False
        self._finished.set()

    def wait_for_generation(self, timeout: Optional[float] = None) -> bool:
        """Block until no export is running. Returns False on timeout."""
        return self._finished.wait(timeout)

    def close(self) -> None:
        """Cancel pending edits and stop the worker if the session created it."""
        self._cancel_pending()
        if self._owns_worker:
            self._worker.shutdown(wait=True)
