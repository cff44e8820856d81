# Prompt Generator
"""
Prompt templates for the mock interview and the career endpoints.

Everything here is a pure mapping from inputs to instruction text: no I/O
and no shared state, so it is safe to call from any request.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from career_coach.errors import InvalidStage


# ============================================================================
# Interview Stages
# ============================================================================

class Stage(str, Enum):
    """Steps of the scripted interview, in the order they are asked."""
    BASIC = "basic"
    ROLE = "role"
    TECHNICAL = "technical"
    RESUME = "resume"
    BEHAVIORAL = "behavioral"
    SALARY = "salary"


STAGES = tuple(Stage)


@dataclass(frozen=True)
class QuestionAnswer:
    """One question asked and the candidate's answer to it."""
    question: str
    answer: str


def _coerce_stage(stage: Union[Stage, str]) -> Stage:
    try:
        return Stage(stage)
    except ValueError:
        raise InvalidStage(stage) from None


_STAGE_TEMPLATES = {
    Stage.BASIC: "Ask ONE HR interview question for a {job_role} candidate.",
    Stage.ROLE: "Ask ONE role-specific question for a {job_role} candidate.",
    Stage.TECHNICAL: "Ask ONE technical question for a {job_role} candidate.",
    Stage.RESUME: (
        "Resume:\n{resume_text}\n\n"
        "Ask ONE question about this resume for a {job_role} candidate."
    ),
    Stage.BEHAVIORAL: "Ask ONE behavioral interview question for a {job_role} candidate.",
    Stage.SALARY: "Ask ONE salary expectation or notice-period question for a {job_role} candidate.",
}

_QUESTION_ONLY = "Reply with the question text only."


def stage_prompt(stage: Union[Stage, str], job_role: str, resume_text: str = "") -> str:
    """
    Build the instruction that yields one interview question for a stage.

    Args:
        stage: Interview stage (enum member or its value)
        job_role: Role the candidate is interviewing for
        resume_text: Candidate resume, used by the resume stage

    Returns:
        Instruction text for the text generator

    Raises:
        InvalidStage: If the stage is not part of the interview script
    """
    template = _STAGE_TEMPLATES[_coerce_stage(stage)]
    body = template.format(job_role=job_role, resume_text=resume_text)
    return f"{body} {_QUESTION_ONLY}"


def next_stage(stage: Union[Stage, str]) -> Optional[Stage]:
    """Return the stage after `stage`, or None once the script is exhausted."""
    index = STAGES.index(_coerce_stage(stage))
    if index + 1 < len(STAGES):
        return STAGES[index + 1]
    return None


# ============================================================================
# Clarification & Feedback
# ============================================================================

def clarify_prompt(question: str) -> str:
    return (
        "Rephrase the following interview question in simpler, clearer words "
        "while keeping its original intent. "
        f"{_QUESTION_ONLY}\n\nQuestion: {question}"
    )


def format_transcript(history: Iterable[QuestionAnswer]) -> str:
    """Format question/answer pairs into a readable transcript."""
    lines: List[str] = []
    for i, qa in enumerate(history, 1):
        lines.append(f"[QUESTION {i}]")
        lines.append(f"Interviewer: {qa.question}")
        lines.append(f"Candidate: {qa.answer}")
    return "\n".join(lines)


def feedback_prompt(job_role: str, history: Iterable[QuestionAnswer], complete: bool = True) -> str:
    """
    Build the feedback request for a finished (or abandoned) interview.

    Args:
        job_role: Role the candidate interviewed for
        history: Every question/answer pair recorded so far
        complete: False when the candidate ended the interview early
    """
    transcript = format_transcript(history) or "(no answers were given)"

    if complete:
        intro = f"Give interview feedback for a {job_role} candidate based on this mock interview."
        asks = (
            "Cover strengths, weaknesses and concrete suggestions for improvement."
        )
    else:
        intro = (
            f"The {job_role} candidate ended this mock interview early. "
            "Give a comprehensive evaluation of the answers given so far."
        )
        asks = (
            "Rate each answer, point out strengths and weaknesses, "
            "note which topics were not covered and give an overall hiring recommendation."
        )

    return f"{intro}\n\nTranscript:\n{transcript}\n\n{asks}"


# ============================================================================
# Career Advice
# ============================================================================

CAREER_ADVISOR_SYSTEM_PROMPT = (
    "You are a career advisor. Suggest jobs, skills, degrees, industries, "
    "and salary based on user input."
)


def role_suggestion_prompt(role: str) -> str:
    return (
        f'Generate ONLY JSON for role "{role}":\n'
        "{\n"
        '  "skills": ["skill1","skill2","skill3","skill4","skill5"],\n'
        '  "summary": "5 line resume summary",\n'
        '  "description": "4 line job description"\n'
        "}"
    )


def career_info_prompt(query: str) -> str:
    return f"Give career info for {query}. Respond with a single JSON object."


def skills_to_career_prompt(skills: List[str]) -> str:
    return f"Suggest 5 career paths for someone with these skills: {', '.join(skills)}"


def career_to_skills_prompt(career: str) -> str:
    return (
        "List required skills, education, certifications, experience, "
        f"and average salary for a {career}"
    )
