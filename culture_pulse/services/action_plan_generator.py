"""Action plan generation from employee feedback.

Updates:
    v0.1.0 - 2026-10-19 - Structured 3-point plan requested through the LLM gateway.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Protocol, Sequence

from ..core.feedback_records import (
    ACTION_PLAN_FIELDS,
    ActionPlanRecord,
    FeedbackRecord,
    InvalidRecordError,
)
from .prompt_service import PromptService

logger = logging.getLogger(__name__)

WORKFLOW_NAME = "generate_action_plan"
PROMPT_NAME = "action_plan"
NO_COMMENTS_PLACEHOLDER = "(No written comments were submitted.)"

_FIELD_DESCRIPTIONS = {
    "point1": "First specific action item",
    "point2": "Second specific action item",
    "point3": "Third specific action item",
    "summary": "A brief summary of the overall sentiment",
}

ACTION_PLAN_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        name: {"type": "string", "description": _FIELD_DESCRIPTIONS[name]}
        for name in ACTION_PLAN_FIELDS
    },
    "required": list(ACTION_PLAN_FIELDS),
    "additionalProperties": False,
}

RESPONSE_FORMAT: Dict[str, Any] = {
    "type": "json_schema",
    "json_schema": {
        "name": "action_plan",
        "schema": ACTION_PLAN_SCHEMA,
        "strict": True,
    },
}


class CompletionGateway(Protocol):
    async def ainvoke(self, workflow: str, prompt: str, **kwargs: Any) -> str:
        ...


class ActionPlanGenerationError(RuntimeError):
    """Raised when no valid action plan could be produced."""

    def __init__(self, message: str = "Could not generate a valid action plan.") -> None:
        super().__init__(message)


def format_feedback_lines(records: Sequence[FeedbackRecord]) -> str:
    """Render commented records as ``[Mood: m/5] Comment: text`` lines."""

    return "\n".join(
        f"[Mood: {record.mood}/5] Comment: {record.comment}"
        for record in records
        if record.has_comment
    )


class ActionPlanGenerator:
    """Turns raw feedback into a prioritized 3-point action plan."""

    def __init__(self, llm_gateway: CompletionGateway, prompt_service: PromptService) -> None:
        self._llm = llm_gateway
        self._prompts = prompt_service

    def build_prompt(self, records: Sequence[FeedbackRecord]) -> str:
        """Embed every commented record into the action plan template."""

        feedback_lines = format_feedback_lines(records) or NO_COMMENTS_PLACEHOLDER
        return self._prompts.render(PROMPT_NAME, feedback_data=feedback_lines).strip()

    async def generate(self, records: Sequence[FeedbackRecord]) -> ActionPlanRecord:
        """Request a fresh plan for ``records``.

        Every call performs a new completion; nothing is cached or retried here.

        Raises:
            ActionPlanGenerationError: If the completion fails or its reply is not
                a complete action plan. The underlying cause is logged and chained.
        """

        eligible = sum(1 for record in records if record.has_comment)
        logger.info(
            "action_plan_requested",
            extra={"records": len(records), "commented_records": eligible},
        )
        try:
            prompt = self.build_prompt(records)
            response = await self._llm.ainvoke(
                WORKFLOW_NAME, prompt, response_format=RESPONSE_FORMAT
            )
        except Exception as exc:
            logger.error("action_plan_request_failed", extra={"error": str(exc)})
            raise ActionPlanGenerationError() from exc

        try:
            plan = self.parse_response(response)
        except InvalidRecordError as exc:
            logger.error(
                "action_plan_parse_failed",
                extra={"error": str(exc), "response_preview": response[:200]},
            )
            raise ActionPlanGenerationError() from exc
        return plan

    @staticmethod
    def parse_response(response: str) -> ActionPlanRecord:
        """Parse the completion text into a validated plan.

        A Markdown code fence around the JSON body is tolerated.

        Raises:
            InvalidRecordError: If the text is not JSON or lacks a required field.
        """

        cleaned = response.strip()
        if cleaned.startswith("```"):
            parts = cleaned.split("\n", 1)
            cleaned = parts[1] if len(parts) > 1 else ""
            if cleaned.rstrip().endswith("```"):
                cleaned = cleaned.rstrip().rsplit("```", 1)[0].strip()
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise InvalidRecordError(f"Response is not valid JSON: {exc.msg}") from exc
        return ActionPlanRecord.from_dict(parsed)
