# app/routers/quiz_statistics.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import (
    get_current_admin_id,
    get_leaderboard_ranker,
    get_statistics_aggregator,
)
from app.core.exceptions import ValidationError
from app.schemas.attempt import QuizAttemptResponse
from app.schemas.envelope import ApiResponse
from app.services.leaderboard import LeaderboardRanker
from app.services.statistics import StatisticsAggregator

router = APIRouter(
    prefix="/quiz-statistics",
    tags=["Quiz Statistics"],
    responses={403: {"description": "Admin access required"}},
)

VIEWS = ("global", "user", "quiz", "leaderboard")


@router.get("", response_model=ApiResponse)
def get_quiz_statistics(
    view: str = Query("global"),
    quiz_id: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
    admin_id: str = Depends(get_current_admin_id),
    aggregator: StatisticsAggregator = Depends(get_statistics_aggregator),
    ranker: LeaderboardRanker = Depends(get_leaderboard_ranker),
):
    """
    Quiz statistics for administrators.

    - ``global``: per-quiz aggregates (one quiz when ``quiz_id`` is given)
    - ``user``: per-(user, quiz) aggregates, filterable by user and quiz
    - ``quiz``: raw attempts of ``quiz_id``, newest first
    - ``leaderboard``: ranked best attempts of ``quiz_id``
    """
    if view == "global":
        if quiz_id:
            data = [aggregator.compute_quiz_statistics(quiz_id)]
        else:
            data = aggregator.compute_all_quiz_statistics()
    elif view == "user":
        data = aggregator.compute_user_quiz_statistics(user_id=user_id, quiz_id=quiz_id)
    elif view == "quiz" and quiz_id:
        attempts = aggregator.list_attempts_for_quiz(quiz_id, user_id=user_id)
        data = [QuizAttemptResponse.model_validate(a) for a in attempts]
    elif view == "leaderboard" and quiz_id:
        data = ranker.get_leaderboard(quiz_id)
    else:
        raise ValidationError(
            f"Invalid query parameters: view must be one of {', '.join(VIEWS)}, "
            "and quiz_id is required for the quiz and leaderboard views"
        )

    return ApiResponse(data=data, message="Statistics retrieved")
