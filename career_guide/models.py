"""
Pydantic models for generation requests, results and recorded history.

Provider JSON uses camelCase keys (estimatedTime, quizQuestions, ...). Every
model accepts both camelCase and snake_case input and serializes with
camelCase aliases so API responses match what the frontend expects.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

LanguageCode = Literal["en", "am", "om", "tg", "so"]
Difficulty = Literal["easy", "medium", "hard"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ===== Domain models =====


class RoadmapStage(CamelModel):
    title: str
    description: str
    resources: list[str] = Field(default_factory=list)
    duration: str | None = None
    skills: list[str] | None = None


class Opportunity(CamelModel):
    title: str
    provider: str
    url: str
    category: str
    skill_level: str
    description: str | None = None
    deadline: str | None = None


class DailyTask(CamelModel):
    id: str
    title: str
    description: str
    estimated_time: int = Field(ge=0, description="Minutes")
    # Usually learn|practice|review and high|medium|low; other labels are kept as-is
    type: str = "learn"
    priority: str = "medium"
    resources: list[str] = Field(default_factory=list)
    completed: bool = False

    @field_validator("completed", mode="before")
    @classmethod
    def default_completed(cls, v):
        return False if v is None else v


class QuizQuestion(CamelModel):
    id: str
    question: str
    type: Literal["multiple_choice", "short_answer"] = "multiple_choice"
    options: list[str] | None = None
    correct_answer: str
    explanation: str = ""
    difficulty: str | None = None
    category: str | None = None


class QuestionFeedback(CamelModel):
    question_id: str
    is_correct: bool
    feedback: str = ""


# ===== Provider response shapes =====


class RoadmapPayload(CamelModel):
    stages: list[RoadmapStage] = Field(min_length=1)


class OpportunitiesPayload(CamelModel):
    opportunities: list[Opportunity] = Field(min_length=1)


class SkillsEvaluationPayload(CamelModel):
    assessment: str
    skill_gaps: list[str]
    recommendations: list[str]


class VisualExplanationPayload(CamelModel):
    explanation: str
    short_explanation: str
    image_description: str


class DailyPlanPayload(CamelModel):
    tasks: list[DailyTask] = Field(min_length=1)
    quiz_questions: list[QuizQuestion] = Field(default_factory=list)


QuizPayload = Annotated[list[QuizQuestion], Field(min_length=1)]


class QuizGradePayload(CamelModel):
    score: int
    total_questions: int
    percentage: float
    feedback: list[QuestionFeedback] = Field(default_factory=list)
    overall_feedback: str = ""
    areas_to_improve: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


# ===== Generation requests =====


class RoadmapRequest(FrozenCamelModel):
    operation: Literal["roadmap"] = "roadmap"
    career_goal: str
    skill_level: str | None = None
    age: int | None = None
    gender: str | None = None
    language: str = "en"


class ExplainRequest(FrozenCamelModel):
    operation: Literal["explain"] = "explain"
    concept: str
    context: str | None = None
    language: str = "en"


class ExplainVisualRequest(FrozenCamelModel):
    operation: Literal["explain_visual"] = "explain_visual"
    concept: str
    language: str = "en"


class OpportunitiesRequest(FrozenCamelModel):
    operation: Literal["opportunities"] = "opportunities"
    career_goal: str
    skill_level: str | None = None
    category: str | None = None
    language: str = "en"


class SkillsEvalRequest(FrozenCamelModel):
    operation: Literal["skills_eval"] = "skills_eval"
    career_goal: str
    current_skills: tuple[str, ...] = Field(min_length=1)
    experience: str | None = None
    language: str = "en"


class ChatRequest(FrozenCamelModel):
    operation: Literal["chat"] = "chat"
    message: str = Field(min_length=1)
    language: str = "en"


class DailyPlanRequest(FrozenCamelModel):
    operation: Literal["daily_plan"] = "daily_plan"
    career_goal: str
    completed_topics: tuple[str, ...] = ()
    skill_level: str = "beginner"
    language: str = "en"


class QuizRequest(FrozenCamelModel):
    operation: Literal["quiz"] = "quiz"
    topic: str
    difficulty: Difficulty = "medium"
    count: int = Field(default=5, ge=1, le=20)
    language: str = "en"


class GradeQuizRequest(FrozenCamelModel):
    operation: Literal["grade_quiz"] = "grade_quiz"
    questions: tuple[QuizQuestion, ...] = Field(min_length=1)
    answers: dict[str, str] = Field(default_factory=dict)
    language: str = "en"


GenerationRequest = Annotated[
    Union[
        RoadmapRequest,
        ExplainRequest,
        ExplainVisualRequest,
        OpportunitiesRequest,
        SkillsEvalRequest,
        ChatRequest,
        DailyPlanRequest,
        QuizRequest,
        GradeQuizRequest,
    ],
    Field(discriminator="operation"),
]


# ===== Generation results =====


class RoadmapResult(CamelModel):
    operation: Literal["roadmap"] = "roadmap"
    stages: list[RoadmapStage]


class ExplanationResult(CamelModel):
    operation: Literal["explain"] = "explain"
    explanation: str
    language: str


class VisualExplanationResult(CamelModel):
    operation: Literal["explain_visual"] = "explain_visual"
    explanation: str
    short_explanation: str
    image_description: str


class OpportunitiesResult(CamelModel):
    operation: Literal["opportunities"] = "opportunities"
    opportunities: list[Opportunity]


class SkillsEvaluationResult(CamelModel):
    operation: Literal["skills_eval"] = "skills_eval"
    assessment: str
    skill_gaps: list[str]
    recommendations: list[str]


class ChatResult(CamelModel):
    operation: Literal["chat"] = "chat"
    response: str


class DailyPlanResult(CamelModel):
    operation: Literal["daily_plan"] = "daily_plan"
    tasks: list[DailyTask]
    quiz_questions: list[QuizQuestion]
    estimated_minutes_per_day: int


class QuizResult(CamelModel):
    operation: Literal["quiz"] = "quiz"
    questions: list[QuizQuestion]


class QuizGradeResult(CamelModel):
    operation: Literal["grade_quiz"] = "grade_quiz"
    score: int
    total_questions: int
    percentage: float
    feedback: list[QuestionFeedback]
    overall_feedback: str
    areas_to_improve: list[str]
    strengths: list[str]


GenerationResult = Annotated[
    Union[
        RoadmapResult,
        ExplanationResult,
        VisualExplanationResult,
        OpportunitiesResult,
        SkillsEvaluationResult,
        ChatResult,
        DailyPlanResult,
        QuizResult,
        QuizGradeResult,
    ],
    Field(discriminator="operation"),
]


# ===== Recorded history =====


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ChatMessage(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: Literal["user", "assistant"]
    content: str
    language: str = "en"
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Records written elsewhere may carry no offset
        return v.replace(tzinfo=UTC) if v.tzinfo is None else v


class ChatHistory(CamelModel):
    id: str
    user_id: str
    messages: list[ChatMessage] = Field(default_factory=list)
    topic: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SavedRoadmap(CamelModel):
    id: str
    user_id: str
    career_goal: str
    language: str = "en"
    stages: list[RoadmapStage]
    created_at: datetime | None = None
    updated_at: datetime | None = None
