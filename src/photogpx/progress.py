"""One-way channel carrying progress snapshots from the worker thread to the UI."""

import queue
from typing import List, Tuple, Any

from .models import ProcessingProgress, ProcessingResult

PROGRESS = "progress"
DONE = "done"
FAILED = "failed"


class ProgressChannel:
    """Thread-safe queue of ``(kind, payload)`` messages.

    The worker calls :meth:`report` (usable directly as a progress callback),
    then :meth:`finish` or :meth:`fail`. The interface calls :meth:`drain`
    from its own thread and applies what it gets.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[Tuple[str, Any]]" = queue.Queue()

    def report(self, progress: ProcessingProgress) -> None:
        self._queue.put((PROGRESS, progress))

    def finish(self, result: ProcessingResult) -> None:
        self._queue.put((DONE, result))

    def fail(self, error: BaseException) -> None:
        self._queue.put((FAILED, error))

    def drain(self) -> List[Tuple[str, Any]]:
        messages = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except queue.Empty:
                return messages
