"""
Career Coach Configuration

Server, session and logging settings. Environment variables (or a .env file)
override the defaults.
"""

import os

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

# ============================================================================
# Server Configuration
# ============================================================================

SERVER_CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "3001")),
    "reload": os.getenv("RELOAD", "false").lower() == "true",
    "version": "1.0.0",
}

# ============================================================================
# CORS Configuration
# ============================================================================

CORS_CONFIG = {
    # Configure appropriately for production
    "allow_origins": os.getenv("CORS_ALLOW_ORIGINS", "*").split(","),
}

# ============================================================================
# Session Management
# ============================================================================

SESSION_CONFIG = {
    # Drop sessions idle for more than N seconds (0 = never)
    "idle_ttl_seconds": int(os.getenv("SESSION_IDLE_TTL_SECONDS", "0")),
}

# ============================================================================
# Logging Configuration
# ============================================================================

LOGGING_CONFIG = {
    # Log level: "DEBUG", "INFO", "WARNING", "ERROR"
    "log_level": os.getenv("LOG_LEVEL", "INFO"),

    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def get_config(section: str) -> dict:
    """
    Get configuration for a specific section.

    Args:
        section: Configuration section name

    Returns:
        Configuration dictionary
    """
    configs = {
        "server": SERVER_CONFIG,
        "cors": CORS_CONFIG,
        "session": SESSION_CONFIG,
        "logging": LOGGING_CONFIG,
    }

    return configs.get(section, {})
