import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, List

from .sampler import Sample


DEFAULT_CADENCE = 10
DEFAULT_MAX_POINTS = 100


@dataclass(frozen=True)
class SimulationStats:
    total_in_circle: int = 0
    total_in_square: int = 0
    estimated_pi: float = 0.0
    error: float = 0.0


@dataclass(frozen=True)
class HistoryPoint:
    index: int
    value: float


def estimate_pi(total_in_circle: int, total_in_square: int) -> float:
    """
    pi ~= 2 * circle hits / square hits, since the circle has area pi*R^2
    and the inscribed square 2*R^2. Zero square hits is a normal early
    state and yields 0.0.
    """
    if total_in_square <= 0:
        return 0.0
    return 2.0 * total_in_circle / total_in_square


def relative_error(estimate: float) -> float:
    return abs(math.pi - estimate) / math.pi


class ConvergenceTracker:
    """
    Running statistics over landed samples.

    Counts are updated incrementally, one landing at a time. The update loop
    hands each falling -> landed transition to `record_landing` exactly once,
    so nothing needs to be remembered per sample. `observe` is for callers
    that only have the whole collection: it remembers which sample objects
    it has already counted (by identity, not by the opaque id), so observing
    the same collection twice never double-counts.

    History policy: after the n-th landing, a point (n, estimate) is
    appended when n == 1 or n is a multiple of `cadence`. Only the latest
    `max_points` points are retained, oldest evicted first.
    """

    def __init__(
        self,
        cadence: int = DEFAULT_CADENCE,
        max_points: int = DEFAULT_MAX_POINTS,
    ):
        if cadence <= 0:
            raise ValueError("cadence must be > 0")
        if max_points <= 0:
            raise ValueError("max_points must be > 0")

        self.cadence = cadence
        self.max_points = max_points

        self.total_in_circle: int = 0
        self.total_in_square: int = 0
        self._history: Deque[HistoryPoint] = deque(maxlen=max_points)

        # id(sample) -> sample for everything counted through observe();
        # holding the object keeps its id() from being reused
        self._observed: Dict[int, Sample] = {}

    # ------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------

    def record_landing(self, sample: Sample) -> bool:
        """
        Count one falling -> landed transition. Returns False (and changes
        nothing) if the sample has not landed. The caller passes each
        transition once, as Simulation.tick does with the animator's output.
        """
        if not sample.landed:
            return False

        self.total_in_circle += 1
        if sample.in_square:
            self.total_in_square += 1

        self._maybe_record_history()
        return True

    def observe(self, samples: Iterable[Sample]) -> int:
        """
        Count every landed sample object not observed before.
        Returns how many were new.
        """
        added = 0
        for s in samples:
            key = id(s)
            if key in self._observed or not s.landed:
                continue
            self._observed[key] = s
            self.record_landing(s)
            added += 1
        return added

    def reset(self) -> None:
        self.total_in_circle = 0
        self.total_in_square = 0
        self._history.clear()
        self._observed.clear()

    # ------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------

    @property
    def estimated_pi(self) -> float:
        return estimate_pi(self.total_in_circle, self.total_in_square)

    @property
    def error(self) -> float:
        if self.total_in_circle == 0:
            return 0.0
        return relative_error(self.estimated_pi)

    def snapshot(self) -> SimulationStats:
        return SimulationStats(
            total_in_circle=self.total_in_circle,
            total_in_square=self.total_in_square,
            estimated_pi=self.estimated_pi,
            error=self.error,
        )

    def history(self) -> List[HistoryPoint]:
        return list(self._history)

    # ------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------

    def _maybe_record_history(self) -> None:
        n = self.total_in_circle
        if n != 1 and n % self.cadence != 0:
            return
        if self._history and self._history[-1].index == n:
            return
        self._history.append(HistoryPoint(index=n, value=self.estimated_pi))
