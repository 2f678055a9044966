"""
Lazy per-strategy buffers. A buffer is (re)allocated exactly when its length differs
from the field's, and is always seeded from the live field, never from stale contents.
"""

import logging

import numpy as np

from thermal.grid import round_half_away

logger = logging.getLogger(__name__)


def ensure_buffer(buf: np.ndarray | None, field: np.ndarray, dtype) -> tuple[np.ndarray, bool]:
    """Return (buffer, reallocated). A new buffer is a seeded copy of field."""
    if buf is not None and buf.size == field.size:
        return buf, False
    logger.debug("Allocating %s buffer of %d cells", np.dtype(dtype).name, field.size)
    return field.astype(dtype), True


class SnapshotBuffer:
    """Frame-start copy of the field; read-only while a step computes."""

    __slots__ = ("data",)

    def __init__(self) -> None:
        self.data: np.ndarray | None = None

    def capture(self, field: np.ndarray) -> np.ndarray:
        self.data, fresh = ensure_buffer(self.data, field, np.int32)
        if not fresh:
            np.copyto(self.data, field)
        return self.data

    def clear(self) -> None:
        self.data = None


class AccumulatorPair:
    """Float state behind the integer field. `current` is read, `next` written; swap exchanges roles."""

    __slots__ = ("current", "next")

    def __init__(self) -> None:
        self.current: np.ndarray | None = None
        self.next: np.ndarray | None = None

    def ensure(self, field: np.ndarray) -> bool:
        """Allocate both arrays from field if missing or mis-sized. Returns True on (re)allocation."""
        self.current, fresh = ensure_buffer(self.current, field, np.float64)
        if fresh or self.next is None or self.next.size != field.size:
            self.next = self.current.copy()
            return True
        return False

    def reconcile(self, field: np.ndarray) -> int:
        """Adopt field values wherever they differ from round(current). Returns edited cell count."""
        edited = field != round_half_away(self.current)
        count = int(np.count_nonzero(edited))
        if count:
            self.current[edited] = field[edited]
        return count

    def swap(self) -> None:
        self.current, self.next = self.next, self.current

    def clear(self) -> None:
        self.current = None
        self.next = None
