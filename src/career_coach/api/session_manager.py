# Session Manager
"""
Manages mock interview sessions.

Each session walks the fixed stage script (basic -> role -> technical ->
resume -> behavioral -> salary), records every question/answer pair and ends
with AI-generated feedback. Operations on one session are serialized with a
per-session lock; different sessions run independently.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from threading import Lock
from typing import Dict, List, Optional, Union

from career_coach.config import SESSION_CONFIG
from career_coach.errors import MissingField, UnknownSession
from career_coach.llm import run_generation
from career_coach.prompts import (
    QuestionAnswer,
    Stage,
    clarify_prompt,
    feedback_prompt,
    next_stage,
    stage_prompt,
)
from generation import TextGenerator
from generation.generation_config import GENERATION_CONFIG, TOKEN_BUDGETS

logger = logging.getLogger(__name__)


@dataclass
class InterviewSession:
    """Complete state of an interview session."""
    session_id: str
    job_role: str
    resume_text: str
    current_stage: Stage
    last_question: str
    created_at: datetime
    last_activity: datetime

    history: List[QuestionAnswer] = field(default_factory=list)
    question_count: int = 1

    # Serializes mutating operations on this session
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)


@dataclass(frozen=True)
class QuestionTurn:
    """Result of an answer that moved the interview to its next stage."""
    question: str
    stage: Stage
    question_count: int


@dataclass(frozen=True)
class FeedbackTurn:
    """Result of an answer that ended the interview."""
    feedback: str


class SessionStore:
    """
    Thread-safe in-memory collection of live sessions.

    Provides:
    - Session insertion and retrieval
    - Session removal
    - Listing and counting
    """

    def __init__(self):
        self._sessions: Dict[str, InterviewSession] = {}
        self._lock = Lock()

    def add(self, session: InterviewSession) -> None:
        with self._lock:
            if session.session_id in self._sessions:
                raise ValueError(f"Session {session.session_id} already exists")
            self._sessions[session.session_id] = session

    def get(self, session_id: str) -> Optional[InterviewSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def get_or_raise(self, session_id: Optional[str]) -> InterviewSession:
        """Retrieve a session or raise UnknownSession if it is not live."""
        session = self.get(session_id) if session_id else None
        if session is None:
            raise UnknownSession(session_id)
        return session

    def remove(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list_sessions(self) -> List[InterviewSession]:
        with self._lock:
            return list(self._sessions.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class InterviewSessionManager:
    """
    Drives interview sessions through the stage script.

    Every generation happens before any state is committed, so a failed
    upstream call leaves the session exactly as it was.
    """

    def __init__(
        self,
        generator: TextGenerator,
        store: Optional[SessionStore] = None,
        timeout: Optional[float] = None,
        idle_ttl_seconds: Optional[int] = None,
    ):
        self.generator = generator
        self.store = store if store is not None else SessionStore()
        self.timeout = timeout if timeout is not None else GENERATION_CONFIG["timeout_seconds"]
        self.idle_ttl_seconds = (
            idle_ttl_seconds if idle_ttl_seconds is not None
            else SESSION_CONFIG["idle_ttl_seconds"]
        )
        logger.info("InterviewSessionManager initialized")

    @property
    def active_session_count(self) -> int:
        return len(self.store)

    async def _generate(self, prompt: str, budget: str, session_id: str, name: str) -> str:
        return await run_generation(
            self.generator,
            prompt,
            TOKEN_BUDGETS[budget],
            name=name,
            session_id=session_id,
            timeout=self.timeout,
        )

    def _require_live(self, session: InterviewSession) -> None:
        # A concurrent finish may have removed the session while we waited
        if self.store.get(session.session_id) is not session:
            raise UnknownSession(session.session_id)

    # ========================================================================
    # Operations
    # ========================================================================

    async def start_session(self, job_role: str, resume_text: str) -> InterviewSession:
        """
        Create a session and ask the first (basic) question.

        Raises:
            MissingField: If the job role or resume text is empty
            GenerationFailed: If the first question could not be generated
        """
        job_role = (job_role or "").strip()
        resume_text = (resume_text or "").strip()
        missing = [
            name for name, value in (("job_role", job_role), ("resume_text", resume_text))
            if not value
        ]
        if missing:
            raise MissingField(*missing)

        self.purge_expired()

        session_id = uuid.uuid4().hex
        question = await self._generate(
            stage_prompt(Stage.BASIC, job_role, resume_text),
            "question",
            session_id,
            "start_session",
        )

        now = datetime.now()
        session = InterviewSession(
            session_id=session_id,
            job_role=job_role,
            resume_text=resume_text,
            current_stage=Stage.BASIC,
            last_question=question,
            created_at=now,
            last_activity=now,
        )
        self.store.add(session)
        logger.info(f"📋 Created session {session_id} for role '{job_role}'")
        return session

    async def submit_answer(
        self, session_id: str, answer: str
    ) -> Union[QuestionTurn, FeedbackTurn]:
        """
        Record an answer and move to the next stage, or finish the interview.

        The interview ends when the answered question belonged to the last
        stage; the feedback covers the full transcript and the session is
        deleted.

        Raises:
            UnknownSession: If the session is not live
            MissingField: If the answer is empty
            GenerationFailed: If the next question or feedback failed
        """
        session = self.store.get_or_raise(session_id)
        answer = (answer or "").strip()
        if not answer:
            raise MissingField("answer")

        async with session.lock:
            self._require_live(session)

            history = [*session.history, QuestionAnswer(session.last_question, answer)]
            question_count = session.question_count + 1
            upcoming = next_stage(session.current_stage)

            if upcoming is None:
                feedback = await self._generate(
                    feedback_prompt(session.job_role, history),
                    "feedback",
                    session_id,
                    "interview_feedback",
                )
                self.store.remove(session_id)
                logger.info(f"✅ Session {session_id} completed after {len(history)} answers")
                return FeedbackTurn(feedback=feedback)

            question = await self._generate(
                stage_prompt(upcoming, session.job_role, session.resume_text),
                "question",
                session_id,
                f"question_{upcoming.value}",
            )

            session.history = history
            session.question_count = question_count
            session.current_stage = upcoming
            session.last_question = question
            session.last_activity = datetime.now()

        logger.info(f"➡️ Session {session_id}: stage '{upcoming.value}', question {question_count}")
        return QuestionTurn(question=question, stage=upcoming, question_count=question_count)

    async def clarify_last_question(self, session_id: str) -> str:
        """
        Rephrase the pending question without advancing the interview.

        Raises:
            UnknownSession: If the session is not live or has no question
            GenerationFailed: If the rephrasing failed
        """
        session = self.store.get_or_raise(session_id)

        async with session.lock:
            self._require_live(session)
            if not session.last_question:
                raise UnknownSession(session_id, reason="No question to clarify for session")

            question = await self._generate(
                clarify_prompt(session.last_question),
                "clarify",
                session_id,
                "clarify_question",
            )
            session.last_question = question
            session.last_activity = datetime.now()

        logger.info(f"🔁 Session {session_id}: question rephrased")
        return question

    async def finish_session(self, session_id: str) -> str:
        """
        End the interview early and return feedback on the answers so far.

        Raises:
            UnknownSession: If the session is not live
            GenerationFailed: If the feedback could not be generated
        """
        session = self.store.get_or_raise(session_id)

        async with session.lock:
            self._require_live(session)
            feedback = await self._generate(
                feedback_prompt(session.job_role, session.history, complete=False),
                "finish",
                session_id,
                "finish_feedback",
            )
            self.store.remove(session_id)

        logger.info(
            f"🏁 Session {session_id} finished at stage '{session.current_stage.value}' "
            f"with {len(session.history)} answers"
        )
        return feedback

    def get_session(self, session_id: str) -> InterviewSession:
        """Return a copy of a live session for read-only use."""
        session = self.store.get_or_raise(session_id)
        return replace(session, history=list(session.history))

    def purge_expired(self) -> int:
        """Drop sessions idle longer than the configured TTL. Returns the count."""
        if self.idle_ttl_seconds <= 0:
            return 0

        cutoff = datetime.now() - timedelta(seconds=self.idle_ttl_seconds)
        expired = [
            s.session_id for s in self.store.list_sessions()
            if s.last_activity < cutoff and not s.lock.locked()
        ]
        for session_id in expired:
            self.store.remove(session_id)

        if expired:
            logger.info(f"🧹 Purged {len(expired)} idle session(s)")
        return len(expired)
