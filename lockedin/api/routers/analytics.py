"""
Analytics API endpoints.

Routes:
- GET /analytics/stats - Totals and averages
- GET /analytics/daily-summary - Per-day summaries
- GET /analytics/streak - Consecutive study days
- GET /analytics/task-completion-rate - Completed task percentage

Dependencies: lockedin.application.services, lockedin.models
System role: Analytics HTTP API
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from lockedin.api.deps.dependencies import get_analytics_service
from lockedin.application.services.analytics_service import AnalyticsService
from lockedin.models.analytics import (
    CompletionRateResponse,
    DailySummaryResponse,
    StudyStreakResponse,
    UserStatsResponse,
)

from .error_handling import handle_service_errors
from .responses import map_daily_summaries_to_response, map_user_stats_to_response

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/stats", response_model=UserStatsResponse)
@handle_service_errors
async def user_stats(
    service: AnalyticsService = Depends(get_analytics_service),
) -> UserStatsResponse:
    return map_user_stats_to_response(await service.user_stats())


@router.get("/daily-summary", response_model=list[DailySummaryResponse])
@handle_service_errors
async def daily_summary(
    start_date: date | None = Query(None, description="Inclusive, UTC"),
    end_date: date | None = Query(None, description="Inclusive, UTC"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[DailySummaryResponse]:
    rows = await service.daily_summary(start_date=start_date, end_date=end_date)
    return map_daily_summaries_to_response(rows)


@router.get("/streak", response_model=StudyStreakResponse)
@handle_service_errors
async def study_streak(
    service: AnalyticsService = Depends(get_analytics_service),
) -> StudyStreakResponse:
    return StudyStreakResponse(streak=await service.study_streak())


@router.get("/task-completion-rate", response_model=CompletionRateResponse)
@handle_service_errors
async def task_completion_rate(
    service: AnalyticsService = Depends(get_analytics_service),
) -> CompletionRateResponse:
    return CompletionRateResponse(completion_rate=await service.task_completion_rate())
