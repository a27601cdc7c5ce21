"""
Debouncing for rapid parameter changes.

A slider drag produces a burst of values; only the last one in a burst
should trigger a recompute. Each call to `submit` cancels whatever is
pending and restarts the delay, so intermediate values are dropped rather
than queued.
"""

import logging
import threading
from typing import Callable, Optional

from AIG_Libs.constants import DEFAULT_DEBOUNCE_DELAY

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs the most recently submitted action once input goes quiet.

    Example:
        >>> debouncer = Debouncer(delay=0.3)
        >>> for value in slider_values:
        ...     debouncer.submit(lambda v=value: apply(v))
        >>> # only apply(slider_values[-1]) runs, 0.3s after the last submit
    """

    def __init__(self, delay: float = DEFAULT_DEBOUNCE_DELAY):
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._action: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._action is not None

    def submit(self, action: Callable[[], None]) -> None:
        """Schedule action, replacing any action still waiting to run."""
        if not callable(action):
            raise ValueError(f"action must be callable, got {type(action)}")

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._action = action
            timer = threading.Timer(self.delay, self._fire, args=(action,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def flush(self) -> bool:
        """
        Run the pending action immediately.

        Returns:
            True if an action was pending and has run
        """
        with self._lock:
            action = self._take_pending()
        if action is None:
            return False
        action()
        return True

    def cancel(self) -> None:
        """Drop the pending action without running it."""
        with self._lock:
            self._take_pending()

    def _take_pending(self) -> Optional[Callable[[], None]]:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        action = self._action
        self._action = None
        return action

    def _fire(self, action: Callable[[], None]) -> None:
        with self._lock:
            # A newer submit, flush or cancel has superseded this timer
            if self._action is not action:
                return
            self._action = None
            self._timer = None
        try:
            action()
        except Exception:
            logger.exception("Debounced action failed")
