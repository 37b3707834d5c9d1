"""
Prompt builder: maps a generation request to the instruction text sent to
the provider. Pure and deterministic; every request variant has a template.
"""

import json

from career_guide.models import (
    ChatRequest,
    DailyPlanRequest,
    ExplainRequest,
    ExplainVisualRequest,
    GenerationRequest,
    GradeQuizRequest,
    OpportunitiesRequest,
    QuizRequest,
    RoadmapRequest,
    SkillsEvalRequest,
)
from career_guide.prompts.daily_plan import DAILY_PLAN_PROMPT
from career_guide.prompts.explain import (
    EXPLAIN_PROMPT,
    EXPLAIN_VISUAL_PROMPT,
    LANGUAGE_DETECTION_PROMPT,
)
from career_guide.prompts.languages import language_instruction, language_name
from career_guide.prompts.opportunities import OPPORTUNITIES_PROMPT
from career_guide.prompts.quiz import QUIZ_GENERATION_PROMPT, QUIZ_GRADING_PROMPT
from career_guide.prompts.roadmap import ROADMAP_CONTEXT_SUFFIX, ROADMAP_PROMPT
from career_guide.prompts.skills import SKILLS_EVALUATION_PROMPT
from career_guide.prompts.tutor import TUTOR_CHAT_PROMPT
from career_guide.utils.time_normalizer import DAILY_PLAN_MINUTES

NO_ANSWER = "No answer provided"


def build_roadmap_prompt(request: RoadmapRequest) -> str:
    if request.skill_level:
        skill_level_line = f"The learner's current skill level is: {request.skill_level}"
    else:
        skill_level_line = "Assume the learner is a complete beginner."

    prompt = ROADMAP_PROMPT.format(
        career_goal=request.career_goal,
        skill_level_line=skill_level_line,
    )

    context_lines = []
    if request.age:
        context_lines.append(f"- User age: {request.age}")
    if request.gender:
        context_lines.append(f"- User gender: {request.gender}")

    return prompt + ROADMAP_CONTEXT_SUFFIX.format(
        context_lines="\n".join(context_lines),
        language_name=language_name(request.language),
    )


def build_explain_prompt(request: ExplainRequest) -> str:
    return EXPLAIN_PROMPT.format(
        language_name=language_name(request.language),
        language_instruction=language_instruction(request.language),
        concept=request.concept,
        context_line=f"Additional context: {request.context}" if request.context else "",
    )


def build_explain_visual_prompt(request: ExplainVisualRequest) -> str:
    return EXPLAIN_VISUAL_PROMPT.format(
        concept=request.concept,
        language_name=language_name(request.language),
        language_instruction=language_instruction(request.language),
    )


def build_opportunities_prompt(request: OpportunitiesRequest) -> str:
    if request.category:
        category_line = f"Focus on: {request.category}"
    else:
        category_line = "Include a mix of internships, scholarships, and online programs."

    return OPPORTUNITIES_PROMPT.format(
        career_goal=request.career_goal,
        skill_level_line=f"Skill level: {request.skill_level}" if request.skill_level else "",
        category_line=category_line,
        language_name=language_name(request.language),
    )


def build_skills_prompt(request: SkillsEvalRequest) -> str:
    return SKILLS_EVALUATION_PROMPT.format(
        career_goal=request.career_goal,
        current_skills=", ".join(request.current_skills),
        experience_line=f"Experience: {request.experience}" if request.experience else "",
        language_name=language_name(request.language),
    )


def build_chat_prompt(request: ChatRequest) -> str:
    return TUTOR_CHAT_PROMPT.format(
        language_name=language_name(request.language),
        language_instruction=language_instruction(request.language),
        message=request.message,
    )


def build_daily_plan_prompt(
    request: DailyPlanRequest, total_minutes: int = DAILY_PLAN_MINUTES
) -> str:
    return DAILY_PLAN_PROMPT.format(
        career_goal=request.career_goal,
        skill_level=request.skill_level,
        completed_topics=", ".join(request.completed_topics) or "None yet",
        total_minutes=total_minutes,
        language_name=language_name(request.language),
    )


def build_quiz_prompt(request: QuizRequest) -> str:
    return QUIZ_GENERATION_PROMPT.format(
        count=request.count,
        difficulty=request.difficulty,
        topic=request.topic,
        language_name=language_name(request.language),
    )


def build_grading_prompt(request: GradeQuizRequest) -> str:
    questions_with_answers = [
        {
            "questionId": question.id,
            "question": question.question,
            "correctAnswer": question.correct_answer,
            "userAnswer": request.answers.get(question.id) or NO_ANSWER,
            "type": question.type,
        }
        for question in request.questions
    ]
    return QUIZ_GRADING_PROMPT.format(
        language_name=language_name(request.language),
        questions_with_answers=json.dumps(questions_with_answers, indent=2, ensure_ascii=False),
        total_questions=len(request.questions),
    )


def build_language_detection_prompt(text: str) -> str:
    return LANGUAGE_DETECTION_PROMPT.format(text=text)


_BUILDERS = {
    "roadmap": build_roadmap_prompt,
    "explain": build_explain_prompt,
    "explain_visual": build_explain_visual_prompt,
    "opportunities": build_opportunities_prompt,
    "skills_eval": build_skills_prompt,
    "chat": build_chat_prompt,
    "daily_plan": build_daily_plan_prompt,
    "quiz": build_quiz_prompt,
    "grade_quiz": build_grading_prompt,
}


def build_prompt(request: GenerationRequest) -> str:
    """
    Build the provider instruction for a generation request.

    Args:
        request: Any GenerationRequest variant

    Returns:
        Prompt text; structured operations include the expected JSON shape
    """
    return _BUILDERS[request.operation](request)
