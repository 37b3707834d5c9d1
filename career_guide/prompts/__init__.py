"""
Prompt templates for career guidance generation.
Structured prompts describe the JSON shape the response extractor expects.

Individual prompts are organized in separate files; build_prompt() picks the
right one for a generation request.
"""

from career_guide.prompts.builder import (
    build_daily_plan_prompt,
    build_language_detection_prompt,
    build_prompt,
)
from career_guide.prompts.daily_plan import DAILY_PLAN_PROMPT
from career_guide.prompts.explain import (
    EXPLAIN_PROMPT,
    EXPLAIN_VISUAL_PROMPT,
    LANGUAGE_DETECTION_PROMPT,
)
from career_guide.prompts.languages import (
    DEFAULT_LANGUAGE,
    LANGUAGE_NAMES,
    language_name,
    resolve_language,
)
from career_guide.prompts.opportunities import OPPORTUNITIES_PROMPT
from career_guide.prompts.quiz import QUIZ_GENERATION_PROMPT, QUIZ_GRADING_PROMPT
from career_guide.prompts.roadmap import ROADMAP_PROMPT
from career_guide.prompts.skills import SKILLS_EVALUATION_PROMPT
from career_guide.prompts.tutor import TUTOR_CHAT_PROMPT

__all__ = [
    "build_prompt",
    "build_daily_plan_prompt",
    "build_language_detection_prompt",
    "DEFAULT_LANGUAGE",
    "LANGUAGE_NAMES",
    "language_name",
    "resolve_language",
    "ROADMAP_PROMPT",
    "EXPLAIN_PROMPT",
    "EXPLAIN_VISUAL_PROMPT",
    "LANGUAGE_DETECTION_PROMPT",
    "OPPORTUNITIES_PROMPT",
    "SKILLS_EVALUATION_PROMPT",
    "TUTOR_CHAT_PROMPT",
    "DAILY_PLAN_PROMPT",
    "QUIZ_GENERATION_PROMPT",
    "QUIZ_GRADING_PROMPT",
]
