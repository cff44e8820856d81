# FastAPI Application
"""
Main FastAPI application for the Career Coach API.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from career_coach.config import CORS_CONFIG, LOGGING_CONFIG, SERVER_CONFIG
from career_coach.errors import (
    CareerCoachError,
    GenerationFailed,
    InvalidRequest,
    InvalidStage,
    MissingField,
    UnknownSession,
)
from generation import LazyTextGenerator
from generation.generation_config import GEMINI_CONFIG, GENERATION_CONFIG, OPENAI_CONFIG

from .career_service import CareerService
from .models import ErrorResponse, HealthResponse
from .routes import career_router, interview_router
from .session_manager import InterviewSessionManager

# Configure logging
logging.basicConfig(
    level=LOGGING_CONFIG["log_level"],
    format=LOGGING_CONFIG["format"],
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    MissingField: 400,
    InvalidRequest: 400,
    UnknownSession: 404,
    InvalidStage: 500,
    GenerationFailed: 502,
}


def _check_api_keys() -> None:
    providers = {
        GENERATION_CONFIG["interview_provider"],
        GENERATION_CONFIG["suggestion_provider"],
        GENERATION_CONFIG["career_provider"],
    }
    if "gemini" in providers and not GEMINI_CONFIG["api_key"]:
        logger.error("❌ GEMINI_API_KEY missing in environment variables")
    if "openai" in providers and not OPENAI_CONFIG["api_key"]:
        logger.error("❌ OPENAI_API_KEY missing in environment variables")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("🚀 Career Coach API starting up...")
    _check_api_keys()
    yield
    logger.info("👋 Career Coach API shutting down...")


def create_app(
    session_manager: Optional[InterviewSessionManager] = None,
    career_service: Optional[CareerService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Services default to lazily-initialized provider backends chosen by
    GENERATION_CONFIG; pass instances to use other generators.
    """
    app = FastAPI(
        title="Career Coach API",
        description="""
        AI-powered career advice and mock interviews.

        ## Mock Interview Workflow

        1. **POST /interview/start** - Start a session with a job role and resume
        2. **POST /interview/answer** - Answer the current question, get the next one
        3. **POST /interview/clarify** - Get the current question reworded (optional)
        4. Repeat step 2 through all six stages, or **POST /interview/finish** to stop early
        5. The final answer (or finish) returns the interview feedback

        ## Career Endpoints

        - **POST /suggest** - Resume skills, summary and description for a role
        - **POST /career-ai** - Structured career information
        - **POST /api/career** - Career advisor
        """,
        version=SERVER_CONFIG["version"],
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    app.state.session_manager = session_manager or InterviewSessionManager(
        generator=LazyTextGenerator(GENERATION_CONFIG["interview_provider"])
    )
    app.state.career_service = career_service or CareerService(
        suggestion_generator=LazyTextGenerator(GENERATION_CONFIG["suggestion_provider"]),
        career_generator=LazyTextGenerator(GENERATION_CONFIG["career_provider"]),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_CONFIG["allow_origins"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(interview_router)
    app.include_router(career_router)

    _register_system_routes(app)
    _register_exception_handlers(app)
    return app


# ============================================================================
# Root Endpoints
# ============================================================================

def _register_system_routes(app: FastAPI) -> None:

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Career Coach API",
            "version": SERVER_CONFIG["version"],
            "docs": "/docs",
            "health": "/health"
        }

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["system"],
        summary="Health check",
        description="Check if the API is running and healthy."
    )
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=SERVER_CONFIG["version"],
            timestamp=datetime.now(),
            active_sessions=request.app.state.session_manager.active_session_count
        )


# ============================================================================
# Exception Handlers
# ============================================================================

def _register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(CareerCoachError)
    async def career_coach_error_handler(request: Request, exc: CareerCoachError):
        """Handler for errors raised by the services."""
        status_code = ERROR_STATUS.get(type(exc), 500)
        if status_code >= 500:
            logger.error(f"{exc.error_code}: {exc.message}")

        body = ErrorResponse(
            error=exc.error_code,
            detail=exc.message,
            session_id=exc.details.get("session_id")
        )
        return JSONResponse(
            status_code=status_code,
            content=body.model_dump(by_alias=True, exclude_none=True)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "InternalServerError",
                "detail": "An unexpected error occurred. Please try again later."
            }
        )


app = create_app()


# ============================================================================
# Entry point for running directly
# ============================================================================

def run_server(
    host: str = SERVER_CONFIG["host"],
    port: int = SERVER_CONFIG["port"],
    reload: bool = SERVER_CONFIG["reload"]
):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(
        "career_coach.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


if __name__ == "__main__":
    run_server()
