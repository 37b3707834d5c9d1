"""
Career Guide API
Application package initialization
"""

from career_guide.config import settings, get_settings, Settings

__all__ = ["settings", "get_settings", "Settings"]
