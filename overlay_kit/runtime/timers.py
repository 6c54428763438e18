"""Manual-clock deadline queue for keyed auto-dismiss timers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from heapq import heapify, heappop, heappush

TimerCallback = Callable[[str], None]
_COMPACT_MIN_STALE = 16


@dataclass(slots=True)
class _Deadline:
    key: str
    due_seconds: float
    sequence: int
    cancelled: bool = False


class DismissTimers:
    """Keyed one-shot deadlines driven by an externally advanced clock.

    The host advances the clock from its event loop; nothing here sleeps or
    spawns threads. Re-arming a key replaces its previous deadline.

    Cancelled deadlines stay in the heap until they come due. A cancel that
    leaves more stale entries than both 16 and the live count rebuilds the
    heap, so add/remove churn without advancing stays bounded.
    """

    def __init__(self, on_expire: TimerCallback) -> None:
        self._on_expire = on_expire
        self._now_seconds = 0.0
        self._sequence = 0
        self._deadlines: dict[str, _Deadline] = {}
        self._queue: list[tuple[float, int, str]] = []
        self._stale = 0

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def armed_count(self) -> int:
        """Return count of live deadlines."""
        return len(self._deadlines)

    @property
    def queue_size(self) -> int:
        """Return heap length, stale entries included."""
        return len(self._queue)

    def arm(self, key: str, delay_seconds: float) -> None:
        """Schedule expiry of `key` after delay."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        self.cancel(key)
        self._sequence += 1
        deadline = _Deadline(key=key, due_seconds=self._now_seconds + delay_seconds, sequence=self._sequence)
        self._deadlines[key] = deadline
        heappush(self._queue, (deadline.due_seconds, deadline.sequence, key))

    def cancel(self, key: str) -> bool:
        """Cancel a deadline if armed."""
        deadline = self._deadlines.pop(key, None)
        if deadline is None:
            return False
        deadline.cancelled = True
        self._stale += 1
        if self._stale > _COMPACT_MIN_STALE and self._stale > len(self._deadlines):
            self._compact()
        return True

    def cancel_all(self) -> None:
        for deadline in self._deadlines.values():
            deadline.cancelled = True
        self._deadlines.clear()
        self._queue.clear()
        self._stale = 0

    def advance(self, delta_seconds: float) -> int:
        """Advance the clock and expire due keys in deadline order."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        self._now_seconds += delta_seconds
        expired = 0
        while self._queue and self._queue[0][0] <= self._now_seconds:
            _, sequence, key = heappop(self._queue)
            deadline = self._deadlines.get(key)
            if deadline is None or deadline.cancelled or deadline.sequence != sequence:
                self._stale -= 1
                continue
            del self._deadlines[key]
            self._on_expire(key)
            expired += 1
        return expired

    def _compact(self) -> None:
        self._queue = [(d.due_seconds, d.sequence, d.key) for d in self._deadlines.values()]
        heapify(self._queue)
        self._stale = 0
