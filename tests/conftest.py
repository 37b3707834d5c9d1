"""
Pytest configuration and shared fixtures
"""
import pytest
from unittest.mock import Mock
from fastapi import FastAPI
from fastapi.testclient import TestClient

from career_guide.services.generation_service import GenerationService
from career_guide.services.history_service import HistoryRecorder
from career_guide.services.resilient_invoker import ResilientInvoker
from tests.fakes import FakeProvider, InMemoryDocumentStore, RecordingSleep


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset singleton clients before each test"""
    import career_guide.core.supabase_client
    monkeypatch.setattr(career_guide.core.supabase_client, "_supabase_client", None)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def make_invoker(recording_sleep):
    def _make(has_credential=True, timeout=20.0):
        return ResilientInvoker(
            has_credential=has_credential,
            timeout=timeout,
            max_attempts=3,
            backoff_base=2.0,
            sleep=recording_sleep,
        )
    return _make


@pytest.fixture
def make_service(make_invoker):
    """Build a GenerationService around a FakeProvider scripted with `responses`."""
    def _make(responses=None, has_credential=True):
        provider = FakeProvider(responses, has_credential=has_credential)
        service = GenerationService(
            provider, invoker=make_invoker(has_credential), daily_plan_minutes=60
        )
        return service, provider
    return _make


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore()


@pytest.fixture
def recorder(memory_store):
    return HistoryRecorder(memory_store)


@pytest.fixture
def mock_supabase_client(monkeypatch):
    """Mock Supabase client"""
    mock_client = Mock()

    # Create a helper function to build query chains
    def create_query_chain():
        chain = Mock()
        chain.select = Mock(return_value=chain)
        chain.eq = Mock(return_value=chain)
        chain.order = Mock(return_value=chain)
        chain.limit = Mock(return_value=chain)
        chain.upsert = Mock(return_value=chain)
        chain.execute = Mock(return_value=Mock(data=[]))
        return chain

    chain = create_query_chain()
    mock_client.table = Mock(return_value=chain)
    mock_client.chain = chain

    def get_mock_client():
        return mock_client

    monkeypatch.setattr("career_guide.core.supabase_client.get_supabase_client", get_mock_client)
    monkeypatch.setattr("career_guide.core.supabase_client._supabase_client", mock_client)

    return mock_client


@pytest.fixture
def mock_clerk_user():
    """Mock Clerk user info"""
    return {
        "clerk_user_id": "user_123",
        "email": "test@example.com",
        "name": "Test User"
    }


@pytest.fixture
def build_client(make_service, recorder):
    """
    FastAPI test client factory.

    Returns (client, provider). Pass `user` to simulate a signed-in Clerk user.
    """
    from career_guide.api.deps import get_history_recorder
    from career_guide.api.errors import register_exception_handlers
    from career_guide.api.learning import router as learning_router
    from career_guide.api.opportunities import router as opportunities_router
    from career_guide.api.roadmap import router as roadmap_router
    from career_guide.api.routes import router
    from career_guide.api.skills import router as skills_router
    from career_guide.api.tutor import router as tutor_router
    from career_guide.config import settings
    from career_guide.utils.clerk_auth import optional_clerk_user, verify_clerk_token

    def _build(responses=None, has_credential=True, user=None):
        service, provider = make_service(responses, has_credential=has_credential)

        test_app = FastAPI(title=settings.app_name, debug=False)
        register_exception_handlers(test_app)
        test_app.include_router(router, prefix="/api")
        test_app.include_router(roadmap_router, prefix="/api/roadmap")
        test_app.include_router(tutor_router, prefix="/api/explain")
        test_app.include_router(opportunities_router, prefix="/api/opportunities")
        test_app.include_router(skills_router, prefix="/api/skills-eval")
        test_app.include_router(learning_router, prefix="/api/learning")
        test_app.state.generation_service = service

        test_app.dependency_overrides[get_history_recorder] = lambda: recorder
        test_app.dependency_overrides[optional_clerk_user] = lambda: user
        if user is not None:
            test_app.dependency_overrides[verify_clerk_token] = lambda: user

        return TestClient(test_app), provider

    return _build
