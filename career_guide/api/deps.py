"""
FastAPI dependencies shared by the routers.
"""

from fastapi import Request

from career_guide.services.generation_service import GenerationService
from career_guide.services.history_service import HistoryRecorder


def get_generation_service(request: Request) -> GenerationService:
    """The GenerationService built at startup."""
    return request.app.state.generation_service


def get_history_recorder() -> HistoryRecorder:
    return HistoryRecorder()
