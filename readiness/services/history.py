"""
Trend history for the readiness chart.

Points are ordered oldest-first (left to right on the chart), the reverse
of the store's newest-first order.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from readiness.services import readiness_calculator as calculator
from readiness.services.checkin_store import DEFAULT_RECENT_COUNT, CheckInStore


@dataclass
class HistoryPoint:
    date: datetime
    score: int
    zone: calculator.ReadinessZone
    recommendation: str


@dataclass
class ReadinessHistory:
    points: list[HistoryPoint]
    average_score: Optional[Decimal]   # one decimal place, None when empty

    @property
    def latest(self) -> Optional[HistoryPoint]:
        return self.points[-1] if self.points else None


def build_history(store: CheckInStore, count: int = DEFAULT_RECENT_COUNT) -> ReadinessHistory:
    points = []
    for record in reversed(store.recent_check_ins(count)):
        assessment = calculator.assess(record)
        points.append(HistoryPoint(
            date=record.date,
            score=assessment.score,
            zone=assessment.zone,
            recommendation=assessment.recommendation,
        ))

    average: Optional[Decimal] = None
    if points:
        average = (Decimal(sum(p.score for p in points)) / Decimal(len(points))).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )
    return ReadinessHistory(points=points, average_score=average)
