"""
Generation service: composes prompt building, resilient invocation,
response extraction and normalization into typed results.
"""

import logging

from career_guide.config import settings
from career_guide.models import (
    ChatRequest,
    ChatResult,
    DailyPlanPayload,
    DailyPlanRequest,
    DailyPlanResult,
    ExplainRequest,
    ExplainVisualRequest,
    ExplanationResult,
    GenerationRequest,
    GenerationResult,
    GradeQuizRequest,
    OpportunitiesPayload,
    OpportunitiesRequest,
    OpportunitiesResult,
    QuizGradePayload,
    QuizGradeResult,
    QuizPayload,
    QuizRequest,
    QuizResult,
    RoadmapPayload,
    RoadmapRequest,
    RoadmapResult,
    SkillsEvalRequest,
    SkillsEvaluationPayload,
    SkillsEvaluationResult,
    VisualExplanationPayload,
    VisualExplanationResult,
)
from career_guide.prompts import (
    build_daily_plan_prompt,
    build_language_detection_prompt,
    build_prompt,
)
from career_guide.services.ai_errors import AIError, AIErrorKind
from career_guide.services.provider import TextGenerationProvider
from career_guide.services.resilient_invoker import ResilientInvoker
from career_guide.utils.json_parser import parse_llm_json_response
from career_guide.utils.time_normalizer import normalize_minutes

logger = logging.getLogger(__name__)

DETECTABLE_LANGUAGES = {
    "en": "en",
    "english": "en",
    "am": "am",
    "amharic": "am",
    "om": "om",
    "oromo": "om",
    "afan oromo": "om",
}


class GenerationService:
    """
    Single entry point for every generation operation.

    The provider is injected once at startup and shared read-only; no state
    is kept between requests.
    """

    def __init__(
        self,
        provider: TextGenerationProvider,
        invoker: ResilientInvoker | None = None,
        daily_plan_minutes: int | None = None,
    ):
        self.provider = provider
        self.invoker = invoker or ResilientInvoker.from_settings(provider.has_credential)
        self.daily_plan_minutes = daily_plan_minutes or settings.daily_plan_minutes
        self._handlers = {
            "roadmap": self._generate_roadmap,
            "explain": self._explain,
            "explain_visual": self._explain_visual,
            "opportunities": self._generate_opportunities,
            "skills_eval": self._evaluate_skills,
            "chat": self._chat,
            "daily_plan": self._generate_daily_plan,
            "quiz": self._generate_quiz,
            "grade_quiz": self._grade_quiz,
        }

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Run one generation operation.

        Args:
            request: Any GenerationRequest variant

        Returns:
            The matching GenerationResult variant

        Raises:
            AIError: Classified failure (see AIErrorKind)
        """
        logger.info(f"🤖 Generating {request.operation} (language={request.language})")
        return await self._handlers[request.operation](request)

    async def _complete(self, operation_name: str, prompt: str) -> str:
        return await self.invoker.invoke(
            operation_name, lambda: self.provider.generate_content(prompt)
        )

    async def _generate_roadmap(self, request: RoadmapRequest) -> RoadmapResult:
        text = await self._complete("generateRoadmap", build_prompt(request))
        payload = parse_llm_json_response(text, RoadmapPayload)
        logger.info(f"✅ Roadmap generated with {len(payload.stages)} stages")
        return RoadmapResult(stages=payload.stages)

    async def _explain(self, request: ExplainRequest) -> ExplanationResult:
        text = await self._complete("explainConcept", build_prompt(request))
        return ExplanationResult(explanation=text, language=request.language)

    async def _explain_visual(self, request: ExplainVisualRequest) -> VisualExplanationResult:
        text = await self._complete("explainWithImage", build_prompt(request))
        payload = parse_llm_json_response(text, VisualExplanationPayload)
        return VisualExplanationResult(**payload.model_dump())

    async def _generate_opportunities(self, request: OpportunitiesRequest) -> OpportunitiesResult:
        text = await self._complete("generateOpportunities", build_prompt(request))
        payload = parse_llm_json_response(text, OpportunitiesPayload)
        return OpportunitiesResult(opportunities=payload.opportunities)

    async def _evaluate_skills(self, request: SkillsEvalRequest) -> SkillsEvaluationResult:
        text = await self._complete("evaluateSkills", build_prompt(request))
        payload = parse_llm_json_response(text, SkillsEvaluationPayload)
        return SkillsEvaluationResult(**payload.model_dump())

    async def _chat(self, request: ChatRequest) -> ChatResult:
        if not request.message.strip():
            raise AIError(AIErrorKind.EMPTY_RESPONSE, "Message cannot be empty")
        text = await self._complete("chat", build_prompt(request))
        return ChatResult(response=text)

    async def _generate_daily_plan(self, request: DailyPlanRequest) -> DailyPlanResult:
        prompt = build_daily_plan_prompt(request, total_minutes=self.daily_plan_minutes)
        text = await self._complete("generateDailyPlan", prompt)
        payload = parse_llm_json_response(text, DailyPlanPayload)

        try:
            minutes = normalize_minutes(
                [task.estimated_time for task in payload.tasks],
                target=self.daily_plan_minutes,
            )
        except ValueError as e:
            # A plan with no usable estimates has to be regenerated
            logger.warning(f"⚠️  Daily plan time estimates unusable: {e}")
            raise AIError(
                AIErrorKind.MALFORMED_RESPONSE,
                "AI returned an unusable daily plan",
                raw_text=text,
            ) from e

        tasks = [
            task.model_copy(update={"estimated_time": estimated_time})
            for task, estimated_time in zip(payload.tasks, minutes)
        ]
        logger.info(f"✅ Daily plan generated: {len(tasks)} tasks, {sum(minutes)} minutes")

        return DailyPlanResult(
            tasks=tasks,
            quiz_questions=payload.quiz_questions,
            estimated_minutes_per_day=self.daily_plan_minutes,
        )

    async def _generate_quiz(self, request: QuizRequest) -> QuizResult:
        text = await self._complete("generateQuiz", build_prompt(request))
        questions = parse_llm_json_response(text, QuizPayload)
        return QuizResult(questions=questions)

    async def _grade_quiz(self, request: GradeQuizRequest) -> QuizGradeResult:
        text = await self._complete("gradeQuiz", build_prompt(request))
        payload = parse_llm_json_response(text, QuizGradePayload)
        return QuizGradeResult(**payload.model_dump())

    async def detect_language(self, text: str) -> str:
        """
        Detect whether text is English, Amharic or Afan Oromo.
        Falls back to English when the provider cannot answer.
        """
        try:
            answer = await self._complete("detectLanguage", build_language_detection_prompt(text))
        except AIError as e:
            logger.warning(f"⚠️  Language detection failed ({e.kind.value}), defaulting to 'en'")
            return "en"

        return DETECTABLE_LANGUAGES.get(answer.strip().strip('"').lower(), "en")
