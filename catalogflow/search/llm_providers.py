"""
LLM provider abstractions.

This module defines a common interface for the large language model
(LLM) providers used by the course search to expand a user's phrase
into related terms.  Concrete implementations are provided for the
Gemini (Google Generative AI) and OpenAI APIs.  A placeholder
implementation is used when no API keys are configured; it refuses
to complete so that callers fall back to their offline behaviour.
Applications can select the provider via environment variables or
pass an instance of ``LLMProvider`` directly.

The default Gemini model is ``gemini-1.5-flash``.  Set ``GEMINI_MODEL``
or ``GOOGLE_MODEL`` (and ``OPENAI_MODEL`` for OpenAI) to use another
model.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Send a single prompt and return the model's text reply.

        Args:
            prompt: Free‑text prompt.

        Returns:
            The raw completion text.  Errors from the underlying API
            propagate to the caller.
        """
        raise NotImplementedError


class PlaceholderProvider(LLMProvider):
    """Fallback provider that does not call any external API."""

    def complete(self, prompt: str) -> str:
        raise RuntimeError("No LLM provider configured")


class OpenAIProvider(LLMProvider):
    """Provider that uses the OpenAI chat completions API."""

    def __init__(self, api_key: str | None = None, model: str = "gpt-4o-mini") -> None:
        try:
            from openai import OpenAI  # type: ignore
        except ImportError as exc:
            raise RuntimeError(
                "openai package is required for OpenAIProvider. Install it via pip."
            ) from exc
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = os.getenv("OPENAI_MODEL") or model
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not provided")
        self.client = OpenAI(api_key=self.api_key)

    def complete(self, prompt: str) -> str:
        logger.debug("Sending prompt to OpenAI: %s", prompt[:200])
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.0,
        )
        return response.choices[0].message.content or ""


class GeminiProvider(LLMProvider):
    """Provider that uses Google Generative AI (Gemini) via google‑generativeai."""

    def __init__(self, api_key: str | None = None, model: str = "gemini-1.5-flash") -> None:
        try:
            import google.generativeai as genai  # type: ignore
        except ImportError as exc:
            raise RuntimeError(
                "google-generativeai package is required for GeminiProvider. Install it via pip."
            ) from exc
        self.genai = genai
        # API key resolution: explicit argument > env variables
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        # Model resolution: environment variable GEMINI_MODEL or GOOGLE_MODEL overrides default
        env_model = os.getenv("GEMINI_MODEL") or os.getenv("GOOGLE_MODEL")
        self.model_name = env_model or model
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY/GOOGLE_API_KEY not provided")
        self.genai.configure(api_key=self.api_key)
        try:
            self.model = self.genai.GenerativeModel(self.model_name)
        except Exception as exc:
            raise RuntimeError(f"Failed to load Gemini model {self.model_name}: {exc}") from exc

    def complete(self, prompt: str) -> str:
        logger.debug("Sending prompt to Gemini: %s", prompt[:200])
        response = self.model.generate_content(prompt)
        return response.text


def get_default_provider() -> LLMProvider:
    """Return an LLMProvider instance based on configuration and API keys.

    The resolution order is:

    1. If the ``LLM_PROVIDER`` environment variable is set to
       ``"gemini"``, ``"openai"`` or ``"placeholder"``, the
       corresponding provider is selected.  If the specified provider
       cannot be initialised (e.g. missing API key or package), a
       warning is logged and the automatic detection logic is used.
    2. If ``GEMINI_API_KEY`` or ``GOOGLE_API_KEY`` is present, return
       :class:`GeminiProvider`.
    3. If ``OPENAI_API_KEY`` is present, return :class:`OpenAIProvider`.
    4. Otherwise, return :class:`PlaceholderProvider`.

    Returns:
        An instance of :class:`LLMProvider`.
    """
    preferred = os.getenv("LLM_PROVIDER")
    if preferred:
        pref = preferred.lower()
        if pref == "gemini":
            try:
                return GeminiProvider()
            except Exception as exc:  # noqa: BLE001
                logger.warning("LLM_PROVIDER=gemini but failed to initialise GeminiProvider: %s", exc)
        elif pref == "openai":
            try:
                return OpenAIProvider()
            except Exception as exc:  # noqa: BLE001
                logger.warning("LLM_PROVIDER=openai but failed to initialise OpenAIProvider: %s", exc)
        elif pref == "placeholder":
            logger.info("LLM_PROVIDER=placeholder; using placeholder provider")
            return PlaceholderProvider()
        else:
            logger.warning("Unknown LLM_PROVIDER value '%s'; falling back to automatic detection", preferred)
    if os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"):
        try:
            return GeminiProvider()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to initialise GeminiProvider: %s", exc)
    if os.getenv("OPENAI_API_KEY"):
        try:
            return OpenAIProvider()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to initialise OpenAIProvider: %s", exc)
    logger.info("No LLM API keys found; using placeholder provider")
    return PlaceholderProvider()
