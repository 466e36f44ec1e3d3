"""
Readiness calculator - pure functions, no state, no I/O.

Score
-----
  score = 100
        - 10 * stress_level
        - 10 * muscle_soreness
        + 10 * sleep_quality
        + 10 * motivation
  clamped to [0, 100]. time_available is collected but not scored.

Zones
-----
  [80, 100] → TRAIN_HARD
  [50, 80)  → TRAIN_MODERATE
  [0, 50)   → RECOVERY
"""
from __future__ import annotations

import enum
from dataclasses import dataclass

from readiness.schemas.checkin import CheckInRecord


_BASE_SCORE = 100
_WEIGHT = 10
_MIN_SCORE = 0
_MAX_SCORE = 100

_TRAIN_HARD_THRESHOLD = 80
_TRAIN_MODERATE_THRESHOLD = 50


class ReadinessZone(str, enum.Enum):
    TRAIN_HARD = "train_hard"
    TRAIN_MODERATE = "train_moderate"
    RECOVERY = "recovery"


_RECOMMENDATIONS = {
    ReadinessZone.TRAIN_HARD: "Train hard",
    ReadinessZone.TRAIN_MODERATE: "Train moderate",
    ReadinessZone.RECOVERY: "Focus on recovery",
}

_COLORS = {
    ReadinessZone.TRAIN_HARD: "green",
    ReadinessZone.TRAIN_MODERATE: "orange",
    ReadinessZone.RECOVERY: "red",
}

_EXPLANATIONS = {
    ReadinessZone.TRAIN_HARD: (
        "You're feeling great! This is an ideal day for intense training "
        "or challenging workouts."
    ),
    ReadinessZone.TRAIN_MODERATE: (
        "You're in good shape. A moderate workout would be appropriate today "
        "- listen to your body."
    ),
    ReadinessZone.RECOVERY: (
        "Your body is signaling that recovery is needed. Consider rest, "
        "light stretching, or a gentle walk."
    ),
}


@dataclass(frozen=True)
class ReadinessAssessment:
    score: int
    zone: ReadinessZone
    recommendation: str
    color: str
    explanation: str


def calculate_score(record: CheckInRecord) -> int:
    score = _BASE_SCORE
    score -= record.stress_level * _WEIGHT
    score -= record.muscle_soreness * _WEIGHT
    score += record.sleep_quality * _WEIGHT
    score += record.motivation * _WEIGHT
    return max(_MIN_SCORE, min(_MAX_SCORE, score))


def zone(score: int) -> ReadinessZone:
    if score >= _TRAIN_HARD_THRESHOLD:
        return ReadinessZone.TRAIN_HARD
    if score >= _TRAIN_MODERATE_THRESHOLD:
        return ReadinessZone.TRAIN_MODERATE
    return ReadinessZone.RECOVERY


def recommendation(z: ReadinessZone) -> str:
    return _RECOMMENDATIONS[z]


def color(z: ReadinessZone) -> str:
    """Semantic colour token for presentation layers."""
    return _COLORS[z]


def explanation(z: ReadinessZone) -> str:
    return _EXPLANATIONS[z]


def assess(record: CheckInRecord) -> ReadinessAssessment:
    """Score, zone and display strings for one check-in."""
    score = calculate_score(record)
    z = zone(score)
    return ReadinessAssessment(
        score=score,
        zone=z,
        recommendation=recommendation(z),
        color=color(z),
        explanation=explanation(z),
    )
