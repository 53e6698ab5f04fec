"""
Language registry.

Problem documents (starter code, reference solutions) name languages with the
editor vocabulary ("cpp", "java", "javascript"), while submission records use
the normalized vocabulary ("c++", "java", "javascript"). normalize_language is
the single place where the two are bridged; resolve always normalizes first.
"""
from typing import Dict

from grading.exceptions import UnsupportedLanguage

# Judge0 CE language ids
LANGUAGE_IDS: Dict[str, int] = {
    "c++": 54,         # C++ (GCC 9.2.0)
    "java": 62,        # Java (OpenJDK 13.0.1)
    "javascript": 63,  # JavaScript (Node.js 12.14.0)
}

LANGUAGE_ALIASES: Dict[str, str] = {
    "cpp": "c++",
}


def normalize_language(name: str) -> str:
    return LANGUAGE_ALIASES.get(name, name)


def is_supported(name: str) -> bool:
    return normalize_language(name) in LANGUAGE_IDS


def resolve(name: str) -> int:
    """Map a language name to the engine's language id (exact, case-sensitive)."""
    language_id = LANGUAGE_IDS.get(normalize_language(name))
    if language_id is None:
        raise UnsupportedLanguage(name)
    return language_id
