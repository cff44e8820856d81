# Career Coach API Package
"""
FastAPI backend for the Career Coach.

Provides REST API endpoints for:
- Running scripted mock interviews (start, answer, clarify, finish)
- Resume suggestions for a role
- Career information and career advisor answers
"""

from .main import app, create_app
from .session_manager import InterviewSessionManager, SessionStore
from .career_service import CareerService

__all__ = [
    "app",
    "create_app",
    "InterviewSessionManager",
    "SessionStore",
    "CareerService",
]
