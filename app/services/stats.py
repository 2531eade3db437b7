"""Derived statistics over a user's PR records and WOD results.

Everything here is a pure function of the rows it is given. Rows only need the
attributes named in ``app.repositories.base`` (``date``, ``created_at`` and the
value columns), so ORM entries and plain test objects both work. Input order is
irrelevant: chronology is always ``(date, created_at)``.
"""
from dataclasses import dataclass
import re
from typing import Iterable, NamedTuple, Optional, Sequence

from app.services.errors import NoMaxAvailable

FOR_TIME = "For Time"
AMRAP = "AMRAP"

PERCENT_STEPS = tuple(range(10, 100, 5))

_REP_MAX_LABEL = re.compile(r"(\d+)\s*RM", re.IGNORECASE)


def epley(weight: float, reps: int) -> float:
    return round(weight * (1 + reps / 30), 2)


def estimate_one_rep_max(
    weight: Optional[float], reps: Optional[int], rep_scheme: Optional[str]
) -> Optional[float]:
    """Estimate a one-rep max with the Epley formula.

    A single rep (explicit ``reps=1`` or a ``"1RM"`` label) is taken as exact.
    Without explicit reps, a label such as ``"5RM"`` supplies the rep count.
    Returns ``None`` when there is no load: a missing or zero weight (bodyweight
    max-rep sets) has nothing to extrapolate, so 0 kg is not reported as a 0 kg max.
    """
    if not weight or weight <= 0:
        return None
    weight = float(weight)
    if reps is not None and reps > 0:
        return weight if reps == 1 else epley(weight, reps)
    if rep_scheme:
        match = _REP_MAX_LABEL.search(rep_scheme)
        if match:
            label_reps = int(match.group(1))
            if label_reps == 1:
                return weight
            if label_reps > 1:
                return epley(weight, label_reps)
    return None


def _chronological(rows: Iterable) -> list:
    return sorted(rows, key=lambda row: (row.date, row.created_at))


@dataclass(frozen=True)
class MovementStats:
    best: float
    first: float
    last: float
    delta_percent: float
    total_records: int


def movement_stats(records: Sequence) -> MovementStats:
    estimated = _chronological(r for r in records if r.est_1rm is not None)
    if not estimated:
        return MovementStats(0.0, 0.0, 0.0, 0.0, len(records))
    best = max(r.est_1rm for r in estimated)
    first = estimated[0].est_1rm
    last = estimated[-1].est_1rm
    return MovementStats(
        best=best,
        first=first,
        last=last,
        delta_percent=percent_change(first, last),
        total_records=len(records),
    )


def percent_change(first: float, last: float) -> float:
    if not first or first <= 0:
        return 0.0
    return round((last - first) / first * 100, 1)


class AmrapScore(NamedTuple):
    """Rounds plus extra reps, ordered lexicographically."""

    rounds: int
    extra_reps: int

    @property
    def composite(self) -> int:
        # Legacy single-number encoding; only meaningful while extra_reps < 1000.
        return self.rounds * 1000 + self.extra_reps

    @classmethod
    def from_result(cls, result) -> "AmrapScore":
        return cls(result.rounds or 0, result.extra_reps or 0)


@dataclass(frozen=True)
class WodStats:
    format: str
    total_attempts: int
    best_time: Optional[int] = None
    first_time: Optional[int] = None
    last_time: Optional[int] = None
    best_score: Optional[AmrapScore] = None
    first_score: Optional[AmrapScore] = None
    last_score: Optional[AmrapScore] = None


def wod_stats(results: Sequence, wod_format: str) -> WodStats:
    if wod_format == FOR_TIME:
        timed = _chronological(r for r in results if r.time_sec is not None)
        if not timed:
            return WodStats(format=wod_format, total_attempts=0)
        return WodStats(
            format=wod_format,
            total_attempts=len(timed),
            best_time=min(r.time_sec for r in timed),
            first_time=timed[0].time_sec,
            last_time=timed[-1].time_sec,
        )
    if wod_format == AMRAP:
        ordered = _chronological(results)
        if not ordered:
            return WodStats(format=wod_format, total_attempts=0)
        scores = [AmrapScore.from_result(r) for r in ordered]
        return WodStats(
            format=wod_format,
            total_attempts=len(scores),
            best_score=max(scores),
            first_score=scores[0],
            last_score=scores[-1],
        )
    return WodStats(format=wod_format, total_attempts=len(results))


@dataclass(frozen=True)
class PercentOfMax:
    percent: int
    weight: float


def percent_of_max_table(one_rep_max: Optional[float]) -> list[PercentOfMax]:
    if one_rep_max is None or one_rep_max <= 0:
        raise NoMaxAvailable()
    return [
        PercentOfMax(percent=percent, weight=round(one_rep_max * percent / 100, 1))
        for percent in PERCENT_STEPS
    ]


def resolve_one_rep_max(override: Optional[float], records: Sequence) -> Optional[float]:
    """An explicit positive override wins over the best historical estimate."""
    if override is not None and override > 0:
        return float(override)
    estimates = [r.est_1rm for r in records if r.est_1rm is not None]
    return max(estimates) if estimates else None
