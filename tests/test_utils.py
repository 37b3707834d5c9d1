"""
Tests for utility functions
"""

from unittest.mock import AsyncMock, Mock, patch

import jwt
import pytest


def _patched_clerk_client(user_payload, status_code=200):
    async def mock_get(url, **kwargs):
        mock_response = Mock()
        mock_response.status_code = status_code
        mock_response.json.return_value = user_payload
        mock_response.text = ""
        return mock_response

    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    mock_client.__aexit__.return_value = None
    mock_client.get = AsyncMock(side_effect=mock_get)
    return mock_client


class TestClerkAuth:
    """Test cases for clerk_auth utility"""

    @pytest.mark.asyncio
    async def test_verify_clerk_token_success(self):
        """Test verify_clerk_token - successful verification"""
        from career_guide.utils.clerk_auth import verify_clerk_token

        token = jwt.encode({"sub": "user_123"}, "secret", algorithm="HS256")

        mock_clerk_response = {
            "id": "user_123",
            "email_addresses": [{"id": "email_1", "email_address": "test@example.com"}],
            "primary_email_address_id": "email_1",
            "first_name": "Test",
            "last_name": "User",
        }

        with patch("career_guide.utils.clerk_auth.httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _patched_clerk_client(mock_clerk_response)

            with patch("career_guide.config.settings.clerk_secret_key", "test_secret"):
                user_info = await verify_clerk_token(f"Bearer {token}")

        assert user_info["clerk_user_id"] == "user_123"
        assert user_info["email"] == "test@example.com"
        assert user_info["name"] == "Test User"

    @pytest.mark.asyncio
    async def test_verify_clerk_token_missing_header(self):
        """Test verify_clerk_token - missing authorization header"""
        from fastapi import HTTPException

        from career_guide.utils.clerk_auth import verify_clerk_token

        with pytest.raises(HTTPException) as exc_info:
            await verify_clerk_token(None)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_verify_clerk_token_invalid_format(self):
        """Test verify_clerk_token - invalid header format"""
        from fastapi import HTTPException

        from career_guide.utils.clerk_auth import verify_clerk_token

        with pytest.raises(HTTPException) as exc_info:
            await verify_clerk_token("Invalid token")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_verify_clerk_token_garbage_jwt(self):
        from fastapi import HTTPException

        from career_guide.utils.clerk_auth import verify_clerk_token

        with patch("career_guide.config.settings.clerk_secret_key", "test_secret"):
            with pytest.raises(HTTPException) as exc_info:
                await verify_clerk_token("Bearer not-a-jwt")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_verify_clerk_token_unknown_user(self):
        from fastapi import HTTPException

        from career_guide.utils.clerk_auth import verify_clerk_token

        token = jwt.encode({"sub": "user_404"}, "secret", algorithm="HS256")

        with patch("career_guide.utils.clerk_auth.httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _patched_clerk_client({}, status_code=404)
            with patch("career_guide.config.settings.clerk_secret_key", "test_secret"):
                with pytest.raises(HTTPException) as exc_info:
                    await verify_clerk_token(f"Bearer {token}")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_optional_clerk_user_anonymous(self):
        from career_guide.utils.clerk_auth import optional_clerk_user

        assert await optional_clerk_user(None) is None

    @pytest.mark.asyncio
    async def test_optional_clerk_user_rejects_bad_header(self):
        """A header that is present but invalid is still an error"""
        from fastapi import HTTPException

        from career_guide.utils.clerk_auth import optional_clerk_user

        with pytest.raises(HTTPException) as exc_info:
            await optional_clerk_user("Invalid token")

        assert exc_info.value.status_code == 401


class TestSettings:
    """Test cases for configuration parsing"""

    def test_cors_origins_from_comma_separated_string(self):
        from career_guide.config import Settings

        settings = Settings(cors_origins="http://localhost:3000, https://tena.example")
        assert settings.cors_origins == ["http://localhost:3000", "https://tena.example"]

    def test_ai_defaults(self):
        from career_guide.config import Settings

        settings = Settings(_env_file=None)
        assert settings.ai_request_timeout == 20.0
        assert settings.ai_max_attempts == 3
        assert settings.ai_backoff_base == 2.0
        assert settings.daily_plan_minutes == 60
