"""
Analytics service.

Read-only aggregates over the caller's ENDED sessions and tasks. Nothing
is cached or stored; every call recomputes from current rows.

Dependencies: lockedin.boundary.db.CRUD, lockedin.core
System role: Derived statistics (totals, daily summaries, streak, completion rate)
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.boundary.db.CRUD.study_session_crud import study_session_crud
from lockedin.boundary.db.CRUD.task_crud import task_crud
from lockedin.boundary.db.errors import translate_store_errors
from lockedin.core.authorization import AuthorizationGuard
from lockedin.core.clock import Clock, SystemClock, ensure_aware_utc, start_of_day, utc_date
from lockedin.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def _as_float(value: Any) -> float | None:
    return float(value) if value is not None else None


def _mean(values: list[int]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def completion_rate(completed: int, total: int) -> float:
    """
    Percentage of completed tasks, rounded half-up to two decimals.

    Zero tasks yields 0.0.
    """
    if total == 0:
        return 0.0
    rate = (Decimal(completed) * 100 / Decimal(total)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return float(rate)


def streak_from_dates(study_dates: set[date], today: date) -> int:
    """
    Count consecutive days with a session, walking back from today.

    The walk stops at the first day without a session, so a day that has
    no session yet today gives 0.
    """
    streak = 0
    check_date = today
    while check_date in study_dates:
        streak += 1
        check_date -= timedelta(days=1)
    return streak


class AnalyticsService:
    """Analytics over one principal's sessions and tasks."""

    def __init__(
        self,
        db: AsyncSession,
        guard: AuthorizationGuard,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize analytics service.

        Args:
            db: Async SQLAlchemy session
            guard: Authorization guard for the caller
            clock: Time source for the rolling windows and "today"
        """
        self.db = db
        self.guard = guard
        self.clock = clock or SystemClock()

    @translate_store_errors("analytics.user_stats")
    async def user_stats(self) -> dict:
        """
        Totals and averages over ENDED sessions.

        Returns:
            dict: total_sessions, total_minutes, avg_duration, avg_productivity,
            avg_mood, last_session_at, sessions_last_7d, sessions_last_30d.
            Averages and last_session_at are None when there are no sessions.
        """
        now = self.clock.now()
        row = await study_session_crud.aggregate_ended(
            self.db,
            self.guard,
            week_start=now - timedelta(days=7),
            month_start=now - timedelta(days=30),
        )
        return {
            "total_sessions": int(row["total_sessions"] or 0),
            "total_minutes": int(row["total_minutes"] or 0),
            "avg_duration": _as_float(row["avg_duration"]),
            "avg_productivity": _as_float(row["avg_productivity"]),
            "avg_mood": _as_float(row["avg_mood"]),
            "last_session_at": ensure_aware_utc(row["last_session_at"]),
            "sessions_last_7d": int(row["sessions_last_7d"] or 0),
            "sessions_last_30d": int(row["sessions_last_30d"] or 0),
        }

    @translate_store_errors("analytics.daily_summary")
    async def daily_summary(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[dict]:
        """
        Per-day summaries of ENDED sessions, newest day first.

        Days are UTC calendar dates of start_time; the range is inclusive.

        Returns:
            list[dict]: date, sessions_count, total_minutes, avg_productivity,
            avg_mood, session_types (distinct, sorted)
        """
        if start_date is not None and end_date is not None and end_date < start_date:
            raise ValidationError("end_date must not be before start_date", field="end_date")

        sessions = await study_session_crud.list_ended(
            self.db,
            self.guard,
            start_from=start_of_day(start_date) if start_date is not None else None,
            start_before=start_of_day(end_date + timedelta(days=1)) if end_date is not None else None,
        )

        by_day: dict[date, list] = defaultdict(list)
        for session in sessions:
            by_day[utc_date(session.start_time)].append(session)

        summaries = []
        for day in sorted(by_day, reverse=True):
            day_sessions = by_day[day]
            summaries.append({
                "date": day,
                "sessions_count": len(day_sessions),
                "total_minutes": sum(s.duration_minutes or 0 for s in day_sessions),
                "avg_productivity": _mean(
                    [s.productivity_rating for s in day_sessions if s.productivity_rating is not None]
                ),
                "avg_mood": _mean([s.mood_rating for s in day_sessions if s.mood_rating is not None]),
                "session_types": sorted({s.session_type for s in day_sessions}),
            })
        return summaries

    @translate_store_errors("analytics.study_streak")
    async def study_streak(self) -> int:
        """Consecutive study days ending today (0 when today has no ENDED session)."""
        today = utc_date(self.clock.now())
        sessions = await study_session_crud.list_ended(
            self.db,
            self.guard,
            start_before=start_of_day(today + timedelta(days=1)),
        )
        streak = streak_from_dates({utc_date(s.start_time) for s in sessions}, today)
        logger.debug(
            "Study streak computed",
            extra={"principal_id": str(self.guard.principal_id), "streak": streak},
        )
        return streak

    @translate_store_errors("analytics.task_completion_rate")
    async def task_completion_rate(self) -> float:
        """Completed tasks as a percentage of all tasks."""
        completed, total = await task_crud.completion_counts(self.db, self.guard)
        return completion_rate(completed, total)
