from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from .config import PromptConfig, Settings
from .errors import SummaryGenerationError

INPUT_PLACEHOLDER = "{{input}}"
FALLBACK_SUMMARY = "No summary generated."
_TOP_P = 1.0
_MAX_TOKENS = 200

logger = logging.getLogger(__name__)


def build_messages(activity: str, prompt: PromptConfig) -> List[Dict[str, str]]:
    return [
        {"role": message.role, "content": message.content.replace(INPUT_PLACEHOLDER, activity, 1)}
        for message in prompt.messages
    ]


def generate_summary(
    activity: str,
    prompt: PromptConfig,
    settings: Settings,
    client: Optional[Any] = None,
) -> str:
    """Ask the configured chat model for a short summary of ``activity``.

    ``client`` defaults to an OpenAI client pointed at the GitHub Models
    endpoint and authenticated with the GitHub token.
    """
    messages = build_messages(activity, prompt)
    logger.info("Requesting summary from %s (temperature=%s)", prompt.model, prompt.temperature)
    try:
        if client is None:
            client = OpenAI(base_url=settings.models_endpoint, api_key=settings.token)
        response = client.chat.completions.create(
            model=prompt.model,
            messages=messages,
            temperature=prompt.temperature,
            top_p=_TOP_P,
            max_tokens=_MAX_TOKENS,
        )
    except OpenAIError as exc:
        raise SummaryGenerationError(f"Chat completion with {prompt.model} failed: {exc}") from exc

    if not response.choices:
        logger.warning("Model %s returned no choices", prompt.model)
        return FALLBACK_SUMMARY
    content = response.choices[0].message.content
    text = (content or "").strip()
    return text or FALLBACK_SUMMARY
