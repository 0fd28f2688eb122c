from __future__ import annotations

import queue
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class CompletionBus(Generic[T]):
    """
    Thread-safe handoff from worker thread -> UI thread.
    Worker pushes finished translations. UI polls (non-blocking).
    """
    def __init__(self, maxsize: int = 32):
        self.q: "queue.Queue[T]" = queue.Queue(maxsize=maxsize)

    def push(self, item: T) -> bool:
        """Returns True when the oldest pending item had to be dropped."""
        try:
            self.q.put_nowait(item)
            return False
        except queue.Full:
            # drop oldest to keep UI responsive
            try:
                _ = self.q.get_nowait()
            except queue.Empty:
                return False
            try:
                self.q.put_nowait(item)
            except queue.Full:
                pass
            return True

    def pop(self) -> Optional[T]:
        try:
            return self.q.get_nowait()
        except queue.Empty:
            return None

    def __len__(self) -> int:
        return self.q.qsize()
