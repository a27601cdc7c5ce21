"""
Edit pipeline for the App Icon Generator.

`apply_edits` is the pure "apply changes" operation: colour filters
followed by compositing, computed from the original source image.
`EditSession` holds the source, the current parameters and the derived
edited image, and moves between the "unedited" and "dirty" states.

Edits are never applied on top of a previous result. Every change
recomputes the edited image from the untouched source, so applying the
same parameters twice gives the same image as applying them once.

Example:
    >>> session = EditSession()
    >>> session.load_new_source(Image.open("logo.png"))
    >>> session.apply_changes(EditParameters(brightness=0.2))
    >>> session.state
    'dirty'
    >>> session.reset()
    >>> session.state
    'unedited'
"""

import logging
import threading
from typing import Any, Literal, Optional

from AIG_Libs.errors import ValidationError
from AIG_Libs.ImageEditingLib.color_filters import apply_filter_chain
from AIG_Libs.ImageEditingLib.compositor import Compositor
from AIG_Libs.ImageEditingLib.image_models import EditParameters
from AIG_Libs.ImageEditingLib.pixel_renderer import ensure_rgba

logger = logging.getLogger(__name__)

EditState = Literal["unedited", "dirty"]

STATE_UNEDITED: EditState = "unedited"
STATE_DIRTY: EditState = "dirty"


def apply_edits(
    source: Any,
    params: EditParameters,
    compositor: Optional[Compositor] = None,
) -> Any:
    """
    Produce the edited image for a source image and a parameter set.

    Args:
        source: Original PIL Image (not modified)
        params: Parameter set to apply
        compositor: Optional Compositor (default settings when None)

    Returns:
        New RGBA PIL Image the same size as the source
    """
    compositor = compositor or Compositor()
    filtered = apply_filter_chain(source, params)
    return compositor.compose(filtered, params)


class EditSession:
    """
    Holds the source image, current parameters and the edited image.

    States:
        unedited: edited image equals the source, parameters at defaults
        dirty: a parameter change has been applied since the last reset
    """

    def __init__(self, source: Optional[Any] = None, compositor: Optional[Compositor] = None):
        self._lock = threading.Lock()
        self._compositor = compositor or Compositor()
        self._source: Optional[Any] = None
        self._edited: Optional[Any] = None
        self._parameters = EditParameters.defaults()
        self._state: EditState = STATE_UNEDITED
        if source is not None:
            self.load_new_source(source)

    @property
    def source(self) -> Optional[Any]:
        return self._source

    @property
    def edited_image(self) -> Optional[Any]:
        return self._edited

    @property
    def parameters(self) -> EditParameters:
        return self._parameters

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def has_source(self) -> bool:
        return self._source is not None

    def load_new_source(self, image: Any) -> None:
        """Replace the source image and reset every edit."""
        source = ensure_rgba(image).copy()
        with self._lock:
            self._source = source
            self._parameters = EditParameters.defaults()
            self._edited = source.copy()
            self._state = STATE_UNEDITED
        logger.debug(f"Loaded new source image {source.width}x{source.height}")

    def apply_changes(self, params: EditParameters) -> Any:
        """
        Recompute the edited image from the original source.

        Args:
            params: The complete new parameter set

        Returns:
            The new edited image

        Raises:
            ValidationError: If no source image is loaded
        """
        if not isinstance(params, EditParameters):
            raise TypeError(f"Expected EditParameters, got {type(params)}")

        with self._lock:
            if self._source is None:
                raise ValidationError("No source image loaded")
            edited = apply_edits(self._source, params, self._compositor)
            self._parameters = params
            self._edited = edited
            if self._state == STATE_UNEDITED and not params.is_default():
                self._state = STATE_DIRTY
        return edited

    def reset(self) -> Any:
        """
        Restore default parameters and the unedited image.

        Raises:
            ValidationError: If no source image is loaded
        """
        with self._lock:
            if self._source is None:
                raise ValidationError("No source image loaded")
            self._parameters = EditParameters.defaults()
            self._edited = self._source.copy()
            self._state = STATE_UNEDITED
            return self._edited

    def snapshot(self) -> Any:
        """Return an independent copy of the current edited image."""
        with self._lock:
            if self._edited is None:
                raise ValidationError("No source image loaded")
            return self._edited.copy()
