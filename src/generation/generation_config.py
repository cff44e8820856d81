"""
Text Generation Configuration

Centralized configuration for the LLM providers used by the Career Coach.
Values can be overridden through environment variables (or a .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

# ============================================================================
# Gemini Configuration
# ============================================================================

GEMINI_CONFIG = {
    # API key (GEMINI_API_KEY preferred, GOOGLE_API_KEY accepted)
    "api_key": os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),

    # Options: "gemini-2.0-flash", "gemini-2.5-flash"
    "model": os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
}

# ============================================================================
# OpenAI Configuration
# ============================================================================

OPENAI_CONFIG = {
    "api_key": os.getenv("OPENAI_API_KEY"),

    # Options: "gpt-3.5-turbo", "gpt-4o-mini"
    "model": os.getenv("OPENAI_MODEL", "gpt-3.5-turbo"),
}

# ============================================================================
# Generation Behaviour
# ============================================================================

GENERATION_CONFIG = {
    # Upper bound for a single upstream call, in seconds
    "timeout_seconds": float(os.getenv("GENERATION_TIMEOUT_SECONDS", "30")),

    # Provider used for interview questions and feedback
    "interview_provider": os.getenv("INTERVIEW_PROVIDER", "gemini"),

    # Provider used for /suggest and /career-ai
    "suggestion_provider": os.getenv("SUGGESTION_PROVIDER", "gemini"),

    # Provider used for /api/career
    "career_provider": os.getenv("CAREER_PROVIDER", "openai"),
}

# ============================================================================
# Token Budgets
# ============================================================================

TOKEN_BUDGETS = {
    "question": 300,
    "clarify": 300,
    "feedback": 600,
    "finish": 800,
    "suggest": 300,
    "career_ai": 500,
    "career": 500,
}

# ============================================================================
# Helper Functions
# ============================================================================

def get_config(section: str) -> dict:
    """
    Get configuration for a specific section.

    Args:
        section: Configuration section name

    Returns:
        Configuration dictionary
    """
    configs = {
        "gemini": GEMINI_CONFIG,
        "openai": OPENAI_CONFIG,
        "generation": GENERATION_CONFIG,
        "tokens": TOKEN_BUDGETS,
    }

    return configs.get(section, {})
