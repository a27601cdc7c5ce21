"""
Background export worker.

Runs one export job at a time on a dedicated thread so the caller (a UI
event loop or the session facade) never blocks on encoding and disk I/O.
The job carries its own snapshot of the edited image, so later edits do
not affect an export that is already running.

Example:
    >>> worker = ExportWorker()
    >>> worker.start(job, on_complete=lambda result: print(result.output_folder))
    >>> worker.wait()
"""

import concurrent.futures
import logging
import threading
from typing import Callable, Optional

from AIG_Libs.errors import ExportInProgressError
from AIG_Libs.ExportLib.icon_export import (
    ExportJob,
    ExportJobResult,
    IconExportEngine,
    run_export_job,
)

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[ExportJobResult], None]


class ExportWorker:
    """Single-flight background runner for export jobs."""

    def __init__(self, engine: Optional[IconExportEngine] = None):
        self._engine = engine
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="icon-export"
        )
        self._lock = threading.Lock()
        self._future: Optional[concurrent.futures.Future] = None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._future is not None and not self._future.done()

    def start(self, job: ExportJob, on_complete: Optional[CompletionCallback] = None) -> concurrent.futures.Future:
        """
        Start an export job in the background.

        `on_complete` is called exactly once on the worker thread with the
        ExportJobResult. A job that aborts (invalid job, run folder not
        creatable) still completes, with the exception in `result.error`.

        Raises:
            ExportInProgressError: If a job is already running
        """
        with self._lock:
            if self._future is not None and not self._future.done():
                raise ExportInProgressError("An export is already in progress")
            future = self._executor.submit(self._run, job, on_complete)
            self._future = future
        return future

    def wait(self, timeout: Optional[float] = None) -> Optional[ExportJobResult]:
        """Block until the current job finishes and return its result."""
        with self._lock:
            future = self._future
        if future is None:
            return None
        return future.result(timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(self, job: ExportJob, on_complete: Optional[CompletionCallback]) -> ExportJobResult:
        engine = self._engine or IconExportEngine()
        try:
            result = run_export_job(job, engine)
        except Exception as e:
            logger.error(f"Export aborted: {e}")
            result = ExportJobResult(error=e)

        if on_complete is not None:
            try:
                on_complete(result)
            except Exception:
                logger.exception("Export completion callback failed")
        return result
