# Career Service
"""
Single-prompt career endpoints.

Each method forwards one prompt to a text generator and shapes the answer:
- Resume suggestions for a role (structured, with a fallback)
- Free-form career info (structured, empty when unparseable)
- Career advisor answers (plain text)
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from career_coach.errors import InvalidRequest, MissingField
from career_coach.llm import run_generation
from career_coach.prompts import (
    CAREER_ADVISOR_SYSTEM_PROMPT,
    career_info_prompt,
    career_to_skills_prompt,
    role_suggestion_prompt,
    skills_to_career_prompt,
)
from generation import TextGenerator, extract_json_object
from generation.generation_config import TOKEN_BUDGETS

from .models import RoleSuggestion

logger = logging.getLogger(__name__)

SKILLS_TO_CAREER = "skills-to-career"
CAREER_TO_SKILLS = "career-to-skills"


class CareerService:
    """
    Service class for the career pass-through endpoints.

    This service is stateless; the generators are injected so that the
    suggestion and advisor endpoints can use different providers.
    """

    def __init__(
        self,
        suggestion_generator: TextGenerator,
        career_generator: TextGenerator,
        timeout: Optional[float] = None,
    ):
        self.suggestion_generator = suggestion_generator
        self.career_generator = career_generator
        self.timeout = timeout
        logger.info("CareerService initialized")

    async def suggest(self, role: Optional[str]) -> RoleSuggestion:
        """
        Suggest resume skills, summary and description for a role.

        Falls back to a generic suggestion when the model output has no
        valid JSON object.
        """
        role = (role or "").strip()
        if not role:
            raise MissingField("role")

        text = await run_generation(
            self.suggestion_generator,
            role_suggestion_prompt(role),
            TOKEN_BUDGETS["suggest"],
            name="suggest",
            timeout=self.timeout,
        )

        data = extract_json_object(text)
        if data is None:
            logger.warning(f"⚠️ No JSON in suggestion for '{role}', using fallback")
            return RoleSuggestion.fallback(role)

        try:
            return RoleSuggestion.model_validate(data)
        except ValidationError as e:
            logger.warning(f"⚠️ Invalid suggestion shape for '{role}': {e.error_count()} error(s), using fallback")
            return RoleSuggestion.fallback(role)

    async def career_info(self, query: Optional[str]) -> Dict[str, Any]:
        """Return the JSON object the model produced for a career query, or {}."""
        query = (query or "").strip()
        if not query:
            raise MissingField("input")

        text = await run_generation(
            self.suggestion_generator,
            career_info_prompt(query),
            TOKEN_BUDGETS["career_ai"],
            name="career_info",
            timeout=self.timeout,
        )

        data = extract_json_object(text)
        if data is None:
            logger.warning(f"⚠️ No JSON in career info for '{query}'")
            return {}
        return data

    async def career_advice(
        self,
        request_type: Optional[str],
        user_input: Optional[str] = None,
        skills: Optional[List[str]] = None,
    ) -> str:
        """
        Answer a career advisor request.

        Args:
            request_type: "skills-to-career" or "career-to-skills"
            user_input: Career name (career-to-skills)
            skills: Skill list (skills-to-career)

        Raises:
            MissingField: If the input required by the type is empty
            InvalidRequest: If the type is unknown
        """
        if request_type == SKILLS_TO_CAREER:
            cleaned = [s.strip() for s in skills or [] if s and s.strip()]
            if not cleaned:
                raise MissingField("skills")
            prompt = skills_to_career_prompt(cleaned)
        elif request_type == CAREER_TO_SKILLS:
            career = (user_input or "").strip()
            if not career:
                raise MissingField("user_input")
            prompt = career_to_skills_prompt(career)
        else:
            raise InvalidRequest(f"Invalid type: {request_type}")

        return await run_generation(
            self.career_generator,
            prompt,
            TOKEN_BUDGETS["career"],
            name="career_advice",
            system=CAREER_ADVISOR_SYSTEM_PROMPT,
            timeout=self.timeout,
        )
