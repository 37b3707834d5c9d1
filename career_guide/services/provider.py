"""
Provider interface consumed by the generation service.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextGenerationProvider(Protocol):
    """Turns a prompt into free text. No retries or deadlines of its own."""

    @property
    def has_credential(self) -> bool: ...

    async def generate_content(self, prompt: str) -> str: ...
