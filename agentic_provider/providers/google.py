"""Google Gemini adapter: OpenAI-compatible endpoint with Gemini defaults."""

from __future__ import annotations

from . import register_provider
from .openai_compat import OpenAICompatAdapter


@register_provider("google")
class GoogleAdapter(OpenAICompatAdapter):
    """Provider adapter for Google's Gemini models via the OpenAI-compatible endpoint."""

    PROVIDER_ID = "google"
    NAME = "Google"
    DESCRIPTION = "Google's Gemini models"
    VERSION = "1.0.0"
    MODELS = ("gemini-2.0-flash",)
    DEFAULT_MODEL = "gemini-2.0-flash"

    API_ENV_VAR = "GEMINI_API_KEY"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
