"""
CALCULATION CACHE - Memoized GPA results owned by the caller

The GPA engine is pure and never caches. Callers that recompute on every
keystroke keep one of these next to their records, key it on the current
grade snapshot, and clear it whenever the records change.
"""

import json
import logging
import time
from typing import Callable, Dict, Iterable, Optional, Tuple

from .data_models import GPACalculation, YearlyRecord

logger = logging.getLogger(__name__)


def make_cache_key(yearly_records: Iterable[YearlyRecord]) -> str:
    """
    Build a deterministic key from everything that affects the GPA figures

    Args:
        yearly_records: Current records

    Returns:
        JSON string of year, subject id, type, level, credits and final grade
    """
    snapshot = []
    for record in yearly_records:
        subjects = []
        for subject_grade in record.subjects:
            subject = subject_grade.subject
            subjects.append(
                {
                    "id": subject.id,
                    "type": getattr(subject.type, "value", subject.type),
                    "level": getattr(subject.level, "value", subject.level),
                    "credits": subject.credits,
                    "final_grade": subject_grade.final_grade,
                }
            )
        snapshot.append({"year": record.year, "subjects": subjects})
    return json.dumps(snapshot, sort_keys=True)


class CalculationCache:
    """Keyed table of GPA results with explicit invalidation

    Results are copied in and out, so every hit is a fresh object.
    """

    def __init__(
        self,
        enabled: bool = True,
        ttl_minutes: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            enabled: When False nothing is stored and every lookup misses
            ttl_minutes: Entry lifetime; None or 0 keeps entries until cleared
            clock: Seconds source, injectable for tests
        """
        self.enabled = enabled
        self.ttl_seconds = ttl_minutes * 60 if ttl_minutes else None
        self._clock = clock
        self._entries: Dict[str, Tuple[float, GPACalculation]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[GPACalculation]:
        """Cached result for key, or None if missing or expired"""
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        stored_at, calculation = entry
        if self.ttl_seconds is not None and self._clock() - stored_at > self.ttl_seconds:
            logger.debug("Cache entry expired")
            del self._entries[key]
            self.misses += 1
            return None

        self.hits += 1
        return calculation.model_copy(deep=True)

    def set(self, key: str, calculation: GPACalculation) -> None:
        """Store a private copy of the result"""
        if not self.enabled:
            return
        self._entries[key] = (self._clock(), calculation.model_copy(deep=True))

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        if self._entries:
            logger.debug(f"Clearing {len(self._entries)} cached GPA calculations")
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
