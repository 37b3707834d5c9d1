"""
Skills evaluation route.
Signed-in users get the evaluation saved alongside their roadmaps.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import Field

from career_guide.api.deps import get_generation_service, get_history_recorder
from career_guide.api.responses import success_response, to_jsonable
from career_guide.models import CamelModel, SkillsEvalRequest
from career_guide.services.generation_service import GenerationService
from career_guide.services.history_service import HistoryRecorder
from career_guide.utils.clerk_auth import optional_clerk_user

router = APIRouter()
logger = logging.getLogger(__name__)


class SkillsEvalBody(CamelModel):
    career_goal: str = Field(..., min_length=2, max_length=200)
    current_skills: List[str] = Field(..., min_length=1, max_length=20)
    experience: Optional[str] = Field(None, max_length=1000)
    language: str = "en"


@router.post("")
async def evaluate_skills(
    body: SkillsEvalBody,
    user_info: Optional[dict] = Depends(optional_clerk_user),
    service: GenerationService = Depends(get_generation_service),
    recorder: HistoryRecorder = Depends(get_history_recorder),
):
    """Assess current skills against a career goal and list the gaps."""
    logger.info(
        f"📊 Skills evaluation: goal='{body.career_goal}', {len(body.current_skills)} skills"
    )
    request = SkillsEvalRequest(
        career_goal=body.career_goal,
        current_skills=tuple(body.current_skills),
        experience=body.experience,
        language=body.language,
    )
    result = await service.generate(request)

    evaluation_id = None
    if user_info:
        try:
            evaluation_id = recorder.save_skills_evaluation(user_info["clerk_user_id"], request, result)
        except Exception as e:
            logger.error(f"❌ Failed to save skills evaluation: {e}", exc_info=True)

    data = to_jsonable(result)
    data["evaluationId"] = evaluation_id
    return success_response(data)
