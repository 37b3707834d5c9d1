"""
Target languages for multilingual prompts.
Unknown or missing language codes fall back to English.
"""

DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES = {
    "en": "English",
    "am": "Amharic (አማርኛ)",
    "om": "Afan Oromo (Oromiffa)",
    "tg": "Tigrigna (ትግርኛ)",
    "so": "Somali (Af-Soomaali)",
}

LANGUAGE_INSTRUCTIONS = {
    "en": "Use simple, clear English suitable for non-native speakers.",
    "am": "Use Amharic script (ፊደል) for your response. Make sure the explanation is culturally relevant to Ethiopian students.",
    "om": "Use Latin script (Qubee) for Afan Oromo. Make the explanation relatable to Oromo-speaking students in Ethiopia.",
    "tg": "Use Ge'ez script (ፊደል) for Tigrigna. Use examples familiar to Tigrigna-speaking students.",
    "so": "Use Latin script for Somali. Use examples familiar to Somali-speaking students in the Horn of Africa.",
}


def resolve_language(code: str | None) -> str:
    """Return a supported language code, defaulting to English."""
    if not code:
        return DEFAULT_LANGUAGE
    normalized = code.strip().lower()
    return normalized if normalized in LANGUAGE_NAMES else DEFAULT_LANGUAGE


def language_name(code: str | None) -> str:
    return LANGUAGE_NAMES[resolve_language(code)]


def language_instruction(code: str | None) -> str:
    return LANGUAGE_INSTRUCTIONS[resolve_language(code)]
