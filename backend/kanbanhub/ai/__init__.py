"""AI assist module: subtask generation and task summaries."""

from kanbanhub.ai.service import AIAssistService, get_ai_service, parse_subtasks

__all__ = ["AIAssistService", "get_ai_service", "parse_subtasks"]
