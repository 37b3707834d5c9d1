"""
Application startup initialization.
Builds the shared generation service once and stores it on app.state.
"""

import logging

from fastapi import FastAPI

from career_guide.services.gemini_service import GeminiService
from career_guide.services.generation_service import GenerationService
from career_guide.services.resilient_invoker import ResilientInvoker

logger = logging.getLogger(__name__)


async def startup_services(app: FastAPI):
    """
    Initialize all services on application startup.
    Call this from the FastAPI lifespan.
    """
    logger.info("🚀 Initializing application services...")

    # The credential is read here once and never changes afterwards
    provider = GeminiService()
    invoker = ResilientInvoker.from_settings(provider.has_credential)
    app.state.generation_service = GenerationService(provider, invoker)

    if not provider.has_credential:
        logger.warning("⚠️  AI generation disabled until GEMINI_API_KEY is set")
        logger.info("   Application will continue; AI routes will return 503")

    logger.info("✅ Startup services initialized")


async def shutdown_services(app: FastAPI):
    """
    Cleanup services on application shutdown.
    Call this from the FastAPI lifespan.
    """
    logger.info("🛑 Shutting down application services...")
    app.state.generation_service = None
    logger.info("✅ Services shut down")
