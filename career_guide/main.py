import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from career_guide.api.errors import register_exception_handlers
from career_guide.api.learning import router as learning_router
from career_guide.api.opportunities import router as opportunities_router
from career_guide.api.roadmap import router as roadmap_router
from career_guide.api.routes import router
from career_guide.api.skills import router as skills_router
from career_guide.api.tutor import router as tutor_router
from career_guide.config import settings
from career_guide.core.startup import shutdown_services, startup_services

# Configure logging from settings
logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Code that runs when the app starts
    logging.info("=" * 60)
    logging.info(f"🚀 {settings.app_name} starting up...")
    logging.info("=" * 60)

    # App Settings
    logging.info("📋 App Configuration:")
    logging.info(f"  Environment: {settings.environment}")
    logging.info(f"  Debug mode: {settings.debug}")
    logging.info(f"  Log level: {settings.log_level}")

    # Server Settings
    logging.info("🌐 Server Configuration:")
    logging.info(f"  Host: {settings.host}")
    logging.info(f"  Port: {settings.port}")
    logging.info(f"  CORS Origins: {settings.cors_origins}")

    # Database Settings
    logging.info("💾 Database Configuration:")
    logging.info(f"  Supabase URL: {'✓ Configured' if settings.supabase_url else '✗ Not set'}")
    logging.info(
        f"  Supabase Service Key: {'✓ Configured' if settings.supabase_service_key else '✗ Not set'}"
    )

    # LLM Settings
    logging.info("🤖 LLM Configuration:")
    logging.info(f"  Gemini Model: {settings.gemini_model}")
    logging.info(f"  Gemini API Key: {'✓ Configured' if settings.gemini_api_key else '✗ Not set'}")
    logging.info(f"  Request Timeout: {settings.ai_request_timeout}s")
    logging.info(
        f"  Retries: {settings.ai_max_attempts} attempts, {settings.ai_backoff_base}s base backoff"
    )
    logging.info(f"  Daily plan budget: {settings.daily_plan_minutes} minutes")

    # Auth Settings
    logging.info("🔐 Authentication Configuration:")
    logging.info(
        f"  Clerk Secret Key: {'✓ Configured' if settings.clerk_secret_key else '✗ Not set'}"
    )

    await startup_services(app)

    logging.info("=" * 60)
    logging.info("✅ Startup complete - Ready to accept requests")
    logging.info("=" * 60)

    yield  # App runs here

    # Shutdown: Code that runs when the app shuts down
    logging.info("=" * 60)
    logging.info("🛑 App is shutting down...")
    logging.info("=" * 60)

    await shutdown_services(app)


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

# Add CORS middleware - configured from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(router, prefix="/api")
app.include_router(roadmap_router, prefix="/api/roadmap", tags=["roadmap"])
app.include_router(tutor_router, prefix="/api/explain", tags=["tutor"])
app.include_router(opportunities_router, prefix="/api/opportunities", tags=["opportunities"])
app.include_router(skills_router, prefix="/api/skills-eval", tags=["skills"])
app.include_router(learning_router, prefix="/api/learning", tags=["learning"])
