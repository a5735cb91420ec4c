"""
Integration tests for AnalyticsService.

System role: Verification of user stats, daily summaries, streak, and
completion rate against stored rows
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from lockedin.core.exceptions import ValidationError


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


async def record(service, start: datetime, minutes: int, **kwargs) -> dict:
    return await service.record(
        kwargs.pop("session_type", "pomodoro"),
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        **kwargs,
    )


class TestUserStats:

    @pytest.mark.asyncio
    async def test_no_sessions(self, analytics_service) -> None:
        stats = await analytics_service.user_stats()

        assert stats == {
            "total_sessions": 0,
            "total_minutes": 0,
            "avg_duration": None,
            "avg_productivity": None,
            "avg_mood": None,
            "last_session_at": None,
            "sessions_last_7d": 0,
            "sessions_last_30d": 0,
        }

    @pytest.mark.asyncio
    async def test_counts_only_ended_sessions(self, analytics_service, session_service, clock) -> None:
        # clock: 2025-01-01T10:00Z
        await record(session_service, utc(2024, 12, 31, 9, 0), 30, productivity_rating=4, mood_rating=3)
        await record(session_service, utc(2024, 12, 20, 9, 0), 60, productivity_rating=2)
        await record(session_service, utc(2024, 11, 1, 9, 0), 90, mood_rating=5)
        await session_service.start("stopwatch")

        stats = await analytics_service.user_stats()

        assert stats["total_sessions"] == 3
        assert stats["total_minutes"] == 180
        assert stats["avg_duration"] == pytest.approx(60.0)
        assert stats["avg_productivity"] == pytest.approx(3.0)
        assert stats["avg_mood"] == pytest.approx(4.0)
        assert stats["last_session_at"] == utc(2024, 12, 31, 9, 0)
        assert stats["sessions_last_7d"] == 1
        assert stats["sessions_last_30d"] == 2

    @pytest.mark.asyncio
    async def test_ignores_other_owners(self, analytics_service, other_session_service) -> None:
        await record(other_session_service, utc(2024, 12, 31, 9, 0), 30)

        stats = await analytics_service.user_stats()

        assert stats["total_sessions"] == 0


class TestDailySummary:

    @pytest.mark.asyncio
    async def test_groups_by_utc_date(self, analytics_service, session_service) -> None:
        await record(session_service, utc(2024, 12, 30, 8, 0), 25, session_type="pomodoro", mood_rating=4)
        await record(session_service, utc(2024, 12, 30, 23, 30), 20, session_type="custom", mood_rating=2)
        await record(session_service, utc(2024, 12, 30, 12, 0), 25, session_type="pomodoro")
        await record(session_service, utc(2024, 12, 28, 9, 0), 45, session_type="stopwatch", productivity_rating=5)

        summary = await analytics_service.daily_summary()

        assert [row["date"] for row in summary] == [date(2024, 12, 30), date(2024, 12, 28)]
        first = summary[0]
        assert first["sessions_count"] == 3
        assert first["total_minutes"] == 70
        assert first["avg_mood"] == pytest.approx(3.0)
        assert first["avg_productivity"] is None
        assert first["session_types"] == ["custom", "pomodoro"]
        assert summary[1]["avg_productivity"] == pytest.approx(5.0)

    @pytest.mark.asyncio
    async def test_date_range_is_inclusive(self, analytics_service, session_service) -> None:
        for day in (26, 27, 28, 29):
            await record(session_service, utc(2024, 12, day, 9, 0), 30)

        summary = await analytics_service.daily_summary(date(2024, 12, 27), date(2024, 12, 28))

        assert [row["date"] for row in summary] == [date(2024, 12, 28), date(2024, 12, 27)]

    @pytest.mark.asyncio
    async def test_excludes_active_sessions(self, analytics_service, session_service) -> None:
        await session_service.start("pomodoro")

        assert await analytics_service.daily_summary() == []

    @pytest.mark.asyncio
    async def test_rejects_reversed_range(self, analytics_service) -> None:
        with pytest.raises(ValidationError):
            await analytics_service.daily_summary(date(2024, 12, 28), date(2024, 12, 27))


class TestStudyStreak:

    @pytest.mark.asyncio
    async def test_three_consecutive_days(self, analytics_service, session_service, clock) -> None:
        clock.set(utc(2025, 1, 10, 18, 0))
        await record(session_service, utc(2025, 1, 10, 8, 0), 30)
        await record(session_service, utc(2025, 1, 9, 8, 0), 30)
        await record(session_service, utc(2025, 1, 9, 20, 0), 30)
        await record(session_service, utc(2025, 1, 8, 8, 0), 30)
        await record(session_service, utc(2025, 1, 6, 8, 0), 30)

        assert await analytics_service.study_streak() == 3

    @pytest.mark.asyncio
    async def test_no_session_today_is_zero(self, analytics_service, session_service, clock) -> None:
        clock.set(utc(2025, 1, 10, 18, 0))
        for days_back in range(1, 6):
            await record(session_service, utc(2025, 1, 10 - days_back, 8, 0), 30)

        assert await analytics_service.study_streak() == 0

    @pytest.mark.asyncio
    async def test_active_session_today_does_not_count(
        self, analytics_service, session_service, clock
    ) -> None:
        clock.set(utc(2025, 1, 10, 8, 0))
        await session_service.start("pomodoro")

        assert await analytics_service.study_streak() == 0


class TestTaskCompletionRate:

    @pytest.mark.asyncio
    async def test_no_tasks_is_zero(self, analytics_service) -> None:
        assert await analytics_service.task_completion_rate() == 0.0

    @pytest.mark.asyncio
    async def test_one_of_three(self, analytics_service, task_service) -> None:
        first = await task_service.create("Read")
        await task_service.create("Write")
        await task_service.create("Review")
        await task_service.toggle_completion(first["id"])

        assert await analytics_service.task_completion_rate() == 33.33

    @pytest.mark.asyncio
    async def test_two_of_three_rounds_half_up(self, analytics_service, task_service) -> None:
        tasks = [await task_service.create(f"Task {i}") for i in range(3)]
        for task in tasks[:2]:
            await task_service.toggle_completion(task["id"])

        assert await analytics_service.task_completion_rate() == 66.67

    @pytest.mark.asyncio
    async def test_other_owner_tasks_ignored(self, analytics_service, other_task_service) -> None:
        created = await other_task_service.create("Theirs")
        await other_task_service.toggle_completion(created["id"])

        assert await analytics_service.task_completion_rate() == 0.0
