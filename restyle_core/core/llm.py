"""Language-model collaborator that turns a prompt into a map style."""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from openai import OpenAI

from config.schemas import StyleObject
from restyle_core.core.normalize import normalize

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 300

SYSTEM_PROMPT = """
You are a helpful assistant that outputs ONLY valid JSON (no explanation).
Given a text prompt describing a map visual style (e.g. "navy blue water, bright red roads, muted land"),
return a JSON object with keys: name (string), water, land, roads, buildings, labels.
Each color should be a 7-character hex string like "#123ABC".
If an overrides object is provided, respect those values (do not change them).
Keep names short.
"""


class MissingCredentialError(ValueError):
    """Raised when the language-model API key is not configured."""


class StyleGenerationError(RuntimeError):
    """Raised when the language model could not be reached or returned nothing."""


def build_user_message(prompt: str, overrides: Optional[Mapping[str, Any]] = None) -> str:
    return f"Prompt: {prompt}\nOverrides: {json.dumps(dict(overrides or {}))}\nReturn the JSON only."


class StyleGenerator:
    """Requests style colors from an OpenAI chat model.

    The API key is injected at construction; ``client`` may be supplied to
    reuse an existing OpenAI client (or a stand-in exposing
    ``chat.completions.create``).
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: Any = None,
    ):
        if not api_key:
            raise MissingCredentialError("Missing OPENAI_API_KEY in env")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = client if client is not None else OpenAI(api_key=api_key)
        logger.info("StyleGenerator using model %s", self.model)

    def generate_raw(self, prompt: str, overrides: Optional[Mapping[str, Any]] = None) -> Any:
        """Return the model's message content, which may be a string or an object.

        Raises:
            StyleGenerationError: If the request fails or yields no choices.
        """
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_message(prompt, overrides)},
                ],
                response_format={"type": "json_object"},
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error("generate-style request failed: %s", e)
            raise StyleGenerationError(str(e) or e.__class__.__name__) from e

        choices = getattr(completion, "choices", None) or []
        if not choices:
            logger.error("generate-style returned no choices")
            raise StyleGenerationError("Language model returned no choices")
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None)

    def generate(self, prompt: str, overrides: Optional[Mapping[str, Any]] = None) -> StyleObject:
        """Ask the model for a style and normalize whatever comes back."""
        content = self.generate_raw(prompt, overrides)
        return normalize(content, overrides)
