"""AI assist endpoints: subtask suggestions and task summaries."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from kanbanhub.ai.exceptions import AIError, AIFeatureDisabledError
from kanbanhub.ai.service import AIAssistService, get_ai_service
from kanbanhub.api.contracts import api, route
from kanbanhub.api.schemas import SubtasksRequest, SummarizeRequest, SummaryResponse
from kanbanhub.api.v1.auth import CurrentUser

router = APIRouter()
logger = structlog.get_logger()

AIService = Annotated[AIAssistService, Depends(get_ai_service)]


def handle_ai_error(error: AIError, fallback_message: str) -> HTTPException:
    """Convert AI errors to HTTP exceptions without leaking provider detail."""
    if isinstance(error, AIFeatureDisabledError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error.message,
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=fallback_message,
    )


@route(router, api.ai["subtasks"])
async def generate_subtasks(
    request: SubtasksRequest,
    current_user: CurrentUser,
    ai_service: AIService,
) -> list[str]:
    """Suggest subtasks for a task description."""
    try:
        return await ai_service.generate_subtasks(request.task_description)
    except AIError as e:
        logger.error("AI subtask generation failed", error=e.message, code=e.code)
        raise handle_ai_error(e, "Failed to generate subtasks")


@route(router, api.ai["summarize"])
async def summarize_task(
    request: SummarizeRequest,
    current_user: CurrentUser,
    ai_service: AIService,
) -> SummaryResponse:
    """Summarize task content in one or two sentences."""
    try:
        summary = await ai_service.summarize_task(request.content)
    except AIError as e:
        logger.error("AI summary failed", error=e.message, code=e.code)
        raise handle_ai_error(e, "Failed to summarize task")
    return SummaryResponse(summary=summary)
