from __future__ import annotations

import threading
from typing import Iterable

from resume_studio.ai.types import ModelCandidate


class ActiveModel:
    """Process-wide record of the model that most recently answered.

    Writes are last-writer-wins; the lock only keeps reads and writes whole
    when request handlers run on worker threads.
    """

    def __init__(self, default: ModelCandidate):
        self._lock = threading.Lock()
        self._current = default

    @property
    def current(self) -> ModelCandidate:
        with self._lock:
            return self._current

    def record_success(self, candidate: ModelCandidate) -> None:
        with self._lock:
            self._current = candidate


def build_candidate_order(
    static_priority_list: Iterable[ModelCandidate],
    active: ActiveModel | None = None,
) -> list[ModelCandidate]:
    ordered: list[ModelCandidate] = []
    seen: set[ModelCandidate] = set()
    for candidate in static_priority_list:
        if candidate in seen:
            continue
        seen.add(candidate)
        ordered.append(candidate)

    if not ordered:
        raise ValueError("At least one model candidate must be configured.")

    if active is not None:
        current = active.current
        if current in seen and ordered[0] != current:
            ordered.remove(current)
            ordered.insert(0, current)
    return ordered
