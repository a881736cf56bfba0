"""
Learning API Endpoints
Quiz submission, lesson completion, simulations, dashboard and leaderboard
"""
from dataclasses import asdict
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from studyquest.core.config import settings
from studyquest.core.database import get_db
from studyquest.core.exceptions import InvalidInputError, NotFoundError
from studyquest.schemas import SimulationType
from studyquest.services import LearningService
from studyquest.stores import SqlCourseStore, SqlUserStore

router = APIRouter()


def get_learning_service(db: AsyncSession = Depends(get_db)) -> LearningService:
    return LearningService(SqlUserStore(db), SqlCourseStore(db))


class QuizSubmissionRequest(BaseModel):
    """Quiz answers for one lesson"""
    course_id: str
    module_id: str
    lesson_id: str
    # Entries are validated one by one by the scorer; bad ones earn no credit
    answers: List[Any] = []


class LessonCompletionRequest(BaseModel):
    course_id: str
    module_id: str
    lesson_id: str


class SimulationRunRequest(BaseModel):
    simulation_id: str
    simulation_type: SimulationType


@router.post("/quizzes/submit")
async def submit_quiz(
    request: QuizSubmissionRequest,
    user_id: str,
    service: LearningService = Depends(get_learning_service)
):
    """
    Submit quiz answers

    Scores the attempt, completes the lesson on a pass and awards points
    """
    try:
        return await service.submit_quiz(
            user_id,
            request.course_id,
            request.module_id,
            request.lesson_id,
            request.answers,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/lessons/complete")
async def complete_lesson(
    request: LessonCompletionRequest,
    user_id: str,
    service: LearningService = Depends(get_learning_service)
):
    """Mark a lesson complete (idempotent)"""
    try:
        return await service.mark_lesson_completed(
            user_id, request.course_id, request.module_id, request.lesson_id
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/simulations/track")
async def track_simulation(
    request: SimulationRunRequest,
    user_id: str,
    service: LearningService = Depends(get_learning_service)
):
    """Record a simulation run; points are granted once per simulation"""
    try:
        award = await service.track_simulation_run(
            user_id, request.simulation_id, request.simulation_type
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "awarded": award is not None,
        "points_awarded": award.points_awarded if award else 0,
        "new_badges": award.new_badges if award else [],
    }


@router.get("/progress")
async def get_progress(
    user_id: str,
    course_id: str,
    service: LearningService = Depends(get_learning_service)
):
    """Course progress for one enrollment"""
    try:
        return await service.get_course_progress(user_id, course_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/dashboard")
async def get_dashboard(
    user_id: str,
    service: LearningService = Depends(get_learning_service)
):
    """Points, streaks, progress and badges for the student dashboard"""
    try:
        return await service.get_dashboard_data(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/leaderboard")
async def get_leaderboard(
    limit: Optional[int] = Query(None, ge=1, le=settings.LEADERBOARD_MAX_LIMIT),
    service: LearningService = Depends(get_learning_service)
):
    """Top students by points"""
    entries = await service.get_leaderboard(limit)
    return {
        "total_users": len(entries),
        "leaderboard": [asdict(entry) for entry in entries],
    }
