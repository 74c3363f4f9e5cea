"""Prompt templates for the task assist features."""

from typing import Any

from jinja2 import BaseLoader, Environment

# Jinja2 environment for template rendering
_jinja_env = Environment(loader=BaseLoader())


def render_template(template_str: str, variables: dict[str, Any]) -> str:
    """Render a Jinja2 template string with variables."""
    template = _jinja_env.from_string(template_str)
    return template.render(**variables)


TASK_SUBTASKS = {
    "template_key": "task_subtasks",
    "display_name": "Generate Subtasks",
    "json_mode": True,
    "system_prompt": """You are a helpful project manager. Break the task the user describes into concrete, actionable subtasks.

Respond with a JSON object of the form {"subtasks": ["...", "..."]} and nothing else. Each subtask is a short imperative sentence.""",
    "user_prompt_template": "{{ task_description }}",
}

TASK_SUMMARY = {
    "template_key": "task_summary",
    "display_name": "Summarize Task",
    "json_mode": False,
    "system_prompt": "Summarize the following task description concisely in 1-2 sentences.",
    "user_prompt_template": "{{ content }}",
}

DEFAULT_TEMPLATES: dict[str, dict[str, Any]] = {
    t["template_key"]: t for t in (TASK_SUBTASKS, TASK_SUMMARY)
}
