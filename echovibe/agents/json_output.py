"""Helpers for turning chat model replies into validated pydantic models."""

import json
import logging
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from echovibe.utils.exceptions import LLMResponseError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def message_text(response: Any) -> str:
    """Flatten a langchain message's content; Gemini may return a list of parts."""
    content = getattr(response, "content", response)
    if isinstance(content, list):
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    if content is None:
        return ""
    return content if isinstance(content, str) else str(content)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one."""
    text = text.strip()
    if not text.startswith("```"):
        return text
    lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
    return "\n".join(lines).strip()


def schema_text(model_cls: Type[BaseModel]) -> str:
    """JSON schema of a response model, as embedded in prompts."""
    return json.dumps(model_cls.model_json_schema(by_alias=True), indent=2)


def parse_json_response(response: Any, model_cls: Type[M]) -> M:
    """
    Decode a model reply and validate it against the declared shape.

    Args:
        response: Chat model reply (message object or raw string)
        model_cls: Pydantic model describing the expected JSON

    Returns:
        Validated model instance

    Raises:
        LLMResponseError: If the reply is not JSON or does not match the shape
    """
    raw = message_text(response)
    content = strip_code_fences(raw)
    logger.debug(f"LLM response: {content}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise LLMResponseError(
            f"Failed to parse LLM response as JSON: {e}",
            raw_response=raw
        ) from e

    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise LLMResponseError(
            f"LLM response does not match {model_cls.__name__}",
            raw_response=raw,
            validation_errors=e.errors(include_url=False)
        ) from e
