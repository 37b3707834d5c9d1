from fastapi import APIRouter

from career_guide.config import settings

router = APIRouter()


@router.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "message": "🚀 Backend is running smoothly!"
    }
