# API Routes
"""
FastAPI route handlers for the Career Coach API.

Errors raised by the services (MissingField, UnknownSession, ...) are turned
into responses by the exception handlers registered in main.py.
"""

import logging
from typing import Any, Dict, Union

from fastapi import APIRouter, Depends, Request

from .career_service import CareerService
from .models import (
    CareerInfoRequest,
    CareerRequest,
    CareerResponse,
    ClarifyResponse,
    ErrorResponse,
    FeedbackResponse,
    QuestionResponse,
    RoleSuggestion,
    SessionRequest,
    SessionStatusResponse,
    StartInterviewRequest,
    StartInterviewResponse,
    SubmitAnswerRequest,
    SuggestRequest,
    TranscriptEntry,
)
from .session_manager import FeedbackTurn, InterviewSessionManager

logger = logging.getLogger(__name__)

interview_router = APIRouter(prefix="/interview", tags=["interview"])
career_router = APIRouter(tags=["career"])


def get_session_manager(request: Request) -> InterviewSessionManager:
    """Dependency returning the app's session manager."""
    return request.app.state.session_manager


def get_career_service(request: Request) -> CareerService:
    """Dependency returning the app's career service."""
    return request.app.state.career_service


# ============================================================================
# Interview Flow Endpoints
# ============================================================================

@interview_router.post(
    "/start",
    response_model=StartInterviewResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Start a new interview session",
    description="Create a session for a job role and resume and get the first question."
)
async def start_interview(
    request: StartInterviewRequest,
    manager: InterviewSessionManager = Depends(get_session_manager)
) -> StartInterviewResponse:
    session = await manager.start_session(request.job_role, request.resume_text)

    return StartInterviewResponse(
        session_id=session.session_id,
        question=session.last_question,
        stage=session.current_stage,
        question_count=session.question_count
    )


@interview_router.post(
    "/answer",
    response_model=Union[QuestionResponse, FeedbackResponse],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse}
    },
    summary="Submit an answer",
    description=(
        "Record the answer to the current question. Returns the next question, "
        "or the interview feedback once the last stage has been answered."
    )
)
async def submit_answer(
    request: SubmitAnswerRequest,
    manager: InterviewSessionManager = Depends(get_session_manager)
) -> Union[QuestionResponse, FeedbackResponse]:
    turn = await manager.submit_answer(request.session_id, request.answer)

    if isinstance(turn, FeedbackTurn):
        return FeedbackResponse(feedback=turn.feedback)

    return QuestionResponse(
        question=turn.question,
        stage=turn.stage,
        question_count=turn.question_count
    )


@interview_router.post(
    "/clarify",
    response_model=ClarifyResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Rephrase the current question",
    description="Get a simpler wording of the pending question without advancing the interview."
)
async def clarify_question(
    request: SessionRequest,
    manager: InterviewSessionManager = Depends(get_session_manager)
) -> ClarifyResponse:
    question = await manager.clarify_last_question(request.session_id)
    return ClarifyResponse(question=question)


@interview_router.post(
    "/finish",
    response_model=FeedbackResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Finish the interview early",
    description="End the session at any stage and get feedback on the answers so far."
)
async def finish_interview(
    request: SessionRequest,
    manager: InterviewSessionManager = Depends(get_session_manager)
) -> FeedbackResponse:
    feedback = await manager.finish_session(request.session_id)
    return FeedbackResponse(feedback=feedback)


@interview_router.get(
    "/{session_id}",
    response_model=SessionStatusResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get session status",
    description="Retrieve the current stage, question count and transcript of a live session."
)
async def get_session_status(
    session_id: str,
    manager: InterviewSessionManager = Depends(get_session_manager)
) -> SessionStatusResponse:
    session = manager.get_session(session_id)

    return SessionStatusResponse(
        session_id=session.session_id,
        job_role=session.job_role,
        stage=session.current_stage,
        question_count=session.question_count,
        last_question=session.last_question,
        history=[
            TranscriptEntry(question=qa.question, answer=qa.answer)
            for qa in session.history
        ],
        created_at=session.created_at,
        last_activity=session.last_activity
    )


# ============================================================================
# Career Endpoints
# ============================================================================

@career_router.post(
    "/suggest",
    response_model=RoleSuggestion,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Resume suggestions for a role",
    description="Suggest skills, a resume summary and a job description for a role."
)
async def suggest(
    request: SuggestRequest,
    service: CareerService = Depends(get_career_service)
) -> RoleSuggestion:
    return await service.suggest(request.role)


@career_router.post(
    "/career-ai",
    response_model=Dict[str, Any],
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Career information",
    description="Structured career information for a free-form query; empty object when none."
)
async def career_ai(
    request: CareerInfoRequest,
    service: CareerService = Depends(get_career_service)
) -> Dict[str, Any]:
    return await service.career_info(request.input)


@career_router.post(
    "/api/career",
    response_model=CareerResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Career advisor",
    description="Career paths for a skill set, or requirements for a career."
)
async def career_advice(
    request: CareerRequest,
    service: CareerService = Depends(get_career_service)
) -> CareerResponse:
    result = await service.career_advice(request.type, request.user_input, request.skills)
    return CareerResponse(result=result)
