"""
Learning routes: daily study plans, quiz generation and quiz grading.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import Field

from career_guide.api.deps import get_generation_service
from career_guide.api.responses import success_response
from career_guide.models import (
    CamelModel,
    DailyPlanRequest,
    Difficulty,
    GradeQuizRequest,
    QuizQuestion,
    QuizRequest,
)
from career_guide.services.generation_service import GenerationService

router = APIRouter()
logger = logging.getLogger(__name__)


class DailyPlanBody(CamelModel):
    career_goal: str = Field(..., min_length=2, max_length=200)
    completed_topics: list[str] = Field(default_factory=list, max_length=100)
    skill_level: str = "beginner"
    language: str = "en"


class QuizBody(CamelModel):
    topic: str = Field(..., min_length=2, max_length=200)
    difficulty: Difficulty = "medium"
    count: int = Field(5, ge=1, le=20)
    language: str = "en"


class GradeQuizBody(CamelModel):
    questions: list[QuizQuestion] = Field(..., min_length=1, max_length=20)
    answers: dict[str, str] = Field(default_factory=dict, description="questionId -> answer")
    language: str = "en"


@router.post("/daily-plan")
async def generate_daily_plan(
    body: DailyPlanBody,
    service: GenerationService = Depends(get_generation_service),
):
    """Generate today's tasks and review questions; task minutes always add up to the daily budget."""
    logger.info(f"📅 Daily plan request: goal='{body.career_goal}', level={body.skill_level}")
    result = await service.generate(
        DailyPlanRequest(
            career_goal=body.career_goal,
            completed_topics=tuple(body.completed_topics),
            skill_level=body.skill_level,
            language=body.language,
        )
    )
    return success_response(result)


@router.post("/quiz")
async def generate_quiz(
    body: QuizBody,
    service: GenerationService = Depends(get_generation_service),
):
    logger.info(f"📝 Quiz request: topic='{body.topic}', {body.count} {body.difficulty} questions")
    result = await service.generate(QuizRequest(**body.model_dump()))
    return success_response(result)


@router.post("/quiz/grade")
async def grade_quiz(
    body: GradeQuizBody,
    service: GenerationService = Depends(get_generation_service),
):
    """Grade quiz answers; unanswered questions are graded as 'No answer provided'."""
    result = await service.generate(
        GradeQuizRequest(
            questions=tuple(body.questions),
            answers=body.answers,
            language=body.language,
        )
    )
    return success_response(result)
