"""
API routes for career roadmaps.
Anyone can generate a roadmap; signed-in users also get it saved.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import Field

from career_guide.api.deps import get_generation_service, get_history_recorder
from career_guide.api.responses import success_response
from career_guide.models import CamelModel, RoadmapRequest
from career_guide.services.generation_service import GenerationService
from career_guide.services.history_service import HistoryRecorder
from career_guide.utils.clerk_auth import optional_clerk_user, verify_clerk_token

router = APIRouter()
logger = logging.getLogger(__name__)


class RoadmapBody(CamelModel):
    career_goal: str = Field(..., description="Target career", min_length=2, max_length=200)
    skill_level: Optional[str] = Field(None, max_length=50)
    age: Optional[int] = Field(None, ge=5, le=120)
    gender: Optional[str] = Field(None, max_length=50)
    language: str = Field("en", description="Response language code")


@router.post("")
async def generate_roadmap(
    body: RoadmapBody,
    user_info: Optional[dict] = Depends(optional_clerk_user),
    service: GenerationService = Depends(get_generation_service),
    recorder: HistoryRecorder = Depends(get_history_recorder),
):
    """
    Generate a staged learning roadmap for a career goal.

    Authenticated requests also save the roadmap and return its id.
    """
    logger.info(f"🗺️  Roadmap request: goal='{body.career_goal}', language={body.language}")
    result = await service.generate(RoadmapRequest(**body.model_dump()))

    roadmap_id = None
    if user_info:
        try:
            saved = recorder.save_roadmap(
                user_info["clerk_user_id"], body.career_goal, result.stages, body.language
            )
            roadmap_id = saved.id
        except Exception as e:
            logger.error(f"❌ Failed to save roadmap: {e}", exc_info=True)

    return success_response({"roadmap": result.stages, "roadmapId": roadmap_id})


@router.get("")
async def list_roadmaps(
    user_info: dict = Depends(verify_clerk_token),
    recorder: HistoryRecorder = Depends(get_history_recorder),
):
    """List the signed-in user's saved roadmaps, newest first."""
    roadmaps = recorder.list_roadmaps(user_info["clerk_user_id"])
    return success_response(roadmaps)
