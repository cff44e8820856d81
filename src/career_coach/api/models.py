# API Request/Response Models
"""
Pydantic models for API request and response schemas.

JSON keys are camelCase on the wire (jobRole, sessionId, ...); snake_case
names are accepted as well.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from career_coach.prompts import Stage


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# ============================================================================
# Interview Request Models
# ============================================================================

class StartInterviewRequest(ApiModel):
    """Request to start a new mock interview."""
    job_role: Optional[str] = Field(None, description="Role the candidate is interviewing for")
    resume_text: Optional[str] = Field(None, description="Plain-text resume of the candidate")

    model_config = {
        "json_schema_extra": {
            "example": {
                "jobRole": "Data Analyst",
                "resumeText": "5 years SQL experience"
            }
        }
    }


class SubmitAnswerRequest(ApiModel):
    """Request to answer the current interview question."""
    session_id: Optional[str] = None
    answer: Optional[str] = None


class SessionRequest(ApiModel):
    """Request that only identifies a session."""
    session_id: Optional[str] = None


# ============================================================================
# Interview Response Models
# ============================================================================

class StartInterviewResponse(ApiModel):
    """Response after starting a new interview."""
    session_id: str
    question: str
    stage: Stage
    question_count: int

    model_config = {
        "json_schema_extra": {
            "example": {
                "sessionId": "3f1c2a9e8b7d4c6f9a0e1b2c3d4e5f60",
                "question": "Can you walk me through your background?",
                "stage": "basic",
                "questionCount": 1
            }
        }
    }


class QuestionResponse(ApiModel):
    """Next question after an answer was recorded."""
    question: str
    stage: Stage
    question_count: int


class FeedbackResponse(ApiModel):
    """Final feedback once the interview has ended."""
    feedback: str


class ClarifyResponse(ApiModel):
    """Rephrased version of the pending question."""
    question: str


class TranscriptEntry(ApiModel):
    """Single question/answer pair from the transcript."""
    question: str
    answer: str


class SessionStatusResponse(ApiModel):
    """Current state of a live interview session."""
    session_id: str
    job_role: str
    stage: Stage
    question_count: int
    last_question: str
    history: List[TranscriptEntry]
    created_at: datetime
    last_activity: datetime


# ============================================================================
# Career Models
# ============================================================================

class SuggestRequest(ApiModel):
    """Request for resume suggestions for a role."""
    role: Optional[str] = None


class RoleSuggestion(ApiModel):
    """Resume skills, summary and job description for a role."""
    skills: List[str] = Field(default_factory=list)
    summary: str = ""
    description: str = ""

    @field_validator("skills", mode="before")
    @classmethod
    def split_skill_string(cls, value):
        if isinstance(value, str):
            return [s.strip() for s in value.split(",") if s.strip()]
        return value

    @classmethod
    def fallback(cls, role: str) -> "RoleSuggestion":
        """Generic suggestion used when the model output cannot be parsed."""
        return cls(
            skills=["Communication", "Problem Solving", "Teamwork"],
            summary=f"Experienced {role} professional.",
            description=f"Worked on responsibilities related to {role}.",
        )


class CareerInfoRequest(ApiModel):
    """Free-form career question."""
    input: Optional[str] = None


class CareerRequest(ApiModel):
    """Career advisor request."""
    type: Optional[str] = Field(
        None, description="Either 'skills-to-career' or 'career-to-skills'"
    )
    user_input: Optional[str] = None
    skills: Optional[List[str]] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "skills-to-career",
                "skills": ["Python", "SQL", "Statistics"]
            }
        }
    }


class CareerResponse(ApiModel):
    """Career advisor answer."""
    result: str


# ============================================================================
# System Models
# ============================================================================

class ErrorResponse(ApiModel):
    """Standard error response."""
    error: str
    detail: str
    session_id: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "UnknownSession",
                "detail": "Invalid session: session_invalid",
                "sessionId": "session_invalid"
            }
        }
    }


class HealthResponse(ApiModel):
    """Health check response."""
    status: str
    version: str
    timestamp: datetime
    active_sessions: int
