"""
Check-ins router.

POST   /checkins                : submit today's (or a dated) check-in
GET    /checkins/recent         : newest-first check-ins with readiness
GET    /checkins/today          : today's check-in (404 if none)
GET    /checkins/today/status   : whether today is already checked in
GET    /checkins/history        : oldest-first trend points + average
DELETE /checkins                : clear all history
"""
from __future__ import annotations

import threading

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from starlette import status

from readiness.core.clock import Clock, SystemClock
from readiness.core.config import settings
from readiness.core.errors import NoCheckInTodayError
from readiness.db.base import get_db
from readiness.schemas.checkin import (
    CheckInCreate,
    CheckInListResponse,
    CheckInRecord,
    CheckInResponse,
    ReadinessOut,
    TodayStatusResponse,
)
from readiness.schemas.history import HistoryPointOut, HistoryResponse
from readiness.services import readiness_calculator as calculator
from readiness.services.blob_store import SqlBlobStore
from readiness.services.checkin_store import CheckInStore
from readiness.services.history import HistoryPoint, build_history

router = APIRouter(prefix="/checkins", tags=["checkins"])

# Writers load the whole collection, mutate it and write it back, so two
# overlapping requests would each drop the other's record. Held from store
# construction through the write.
_write_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_clock() -> Clock:
    return SystemClock()


def _open_store(db: Session, clock: Clock) -> CheckInStore:
    return CheckInStore(
        SqlBlobStore(db, namespace=settings.CHECKIN_NAMESPACE),
        key=settings.CHECKIN_STORAGE_KEY,
        clock=clock,
    )


def get_checkin_store(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> CheckInStore:
    return _open_store(db, clock)


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _record_to_response(record: CheckInRecord) -> CheckInResponse:
    a = calculator.assess(record)
    return CheckInResponse(
        id=record.id,
        date=record.date.isoformat(),
        formatted_date=record.formatted_date,
        sleep_quality=record.sleep_quality,
        stress_level=record.stress_level,
        muscle_soreness=record.muscle_soreness,
        motivation=record.motivation,
        time_available=record.time_available,
        readiness=ReadinessOut(
            score=a.score,
            zone=a.zone.value,
            recommendation=a.recommendation,
            color=a.color,
            explanation=a.explanation,
        ),
    )


def _point_to_response(p: HistoryPoint) -> HistoryPointOut:
    return HistoryPointOut(
        date=p.date.isoformat(),
        score=p.score,
        zone=p.zone.value,
        recommendation=p.recommendation,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=CheckInResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a daily check-in",
    responses={
        201: {"description": "Check-in stored; any earlier check-in on the same day is replaced."},
        422: {"description": "A metric is outside its slider range."},
    },
)
def create_checkin(
    payload: CheckInCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Store a check-in and return it with its readiness score.

    One check-in per calendar day: submitting again on the same day
    replaces the earlier one (last write wins, no field merge).
    """
    record = CheckInRecord(
        date=payload.date or clock.now(),
        sleep_quality=payload.sleep_quality,
        stress_level=payload.stress_level,
        muscle_soreness=payload.muscle_soreness,
        motivation=payload.motivation,
        time_available=payload.time_available,
    )
    with _write_lock:
        _open_store(db, clock).add_check_in(record)
    return _record_to_response(record)


@router.get(
    "/recent",
    response_model=CheckInListResponse,
    summary="Most recent check-ins (newest first)",
)
def list_recent_checkins(
    count: int = Query(
        default=settings.RECENT_DEFAULT_COUNT, ge=0, le=365, description="Maximum items."
    ),
    store: CheckInStore = Depends(get_checkin_store),
):
    items = store.recent_check_ins(count)
    return CheckInListResponse(
        total=len(store),
        items=[_record_to_response(r) for r in items],
    )


@router.get(
    "/today",
    response_model=CheckInResponse,
    summary="Today's check-in",
    responses={404: {"description": "No check-in recorded today."}},
)
def get_today_checkin(
    store: CheckInStore = Depends(get_checkin_store),
    clock: Clock = Depends(get_clock),
):
    record = store.today_check_in()
    if record is None:
        raise NoCheckInTodayError(day=clock.now().date())
    return _record_to_response(record)


@router.get(
    "/today/status",
    response_model=TodayStatusResponse,
    summary="Whether today already has a check-in",
)
def get_today_status(
    store: CheckInStore = Depends(get_checkin_store),
    clock: Clock = Depends(get_clock),
):
    return TodayStatusResponse(
        day=str(clock.now().date()),
        has_check_in=store.has_check_in_for_today(),
    )


@router.get(
    "/history",
    response_model=HistoryResponse,
    summary="Readiness trend (oldest first)",
)
def get_history(
    count: int = Query(
        default=settings.RECENT_DEFAULT_COUNT, ge=1, le=365, description="Number of points."
    ),
    store: CheckInStore = Depends(get_checkin_store),
):
    history = build_history(store, count)
    return HistoryResponse(
        count=len(history.points),
        average_score=float(history.average_score) if history.average_score is not None else None,
        latest=_point_to_response(history.latest) if history.latest else None,
        points=[_point_to_response(p) for p in history.points],
    )


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete all check-in history",
)
def clear_checkins(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    with _write_lock:
        _open_store(db, clock).clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
