import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import Field

from career_guide.api.deps import get_generation_service
from career_guide.api.responses import success_response
from career_guide.models import CamelModel, OpportunitiesRequest
from career_guide.services.generation_service import GenerationService

router = APIRouter()
logger = logging.getLogger(__name__)


class OpportunitiesBody(CamelModel):
    career_goal: str = Field(..., min_length=2, max_length=200)
    skill_level: Optional[str] = Field(None, max_length=50)
    category: Optional[str] = Field(None, description="e.g. course, internship, scholarship")
    language: str = "en"


@router.post("")
async def find_opportunities(
    body: OpportunitiesBody,
    service: GenerationService = Depends(get_generation_service),
):
    """Suggest courses, internships and scholarships for a career goal."""
    logger.info(f"🎯 Opportunities request: goal='{body.career_goal}', category={body.category}")
    result = await service.generate(OpportunitiesRequest(**body.model_dump()))
    return success_response({"opportunities": result.opportunities})
