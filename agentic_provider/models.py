"""Catalog of models reachable through the registered providers.

Usage::

    from agentic_provider import get_model_info, list_models

    for m in list_models("google"):
        print(m.model_id, m.capabilities)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

_PROVIDER_PREFIXES: dict[str, str] = {
    "google": "google/",
}


class ModelInfo(BaseModel):
    """Metadata for a supported model.

    Attributes:
        model_id: Fully-qualified ``provider/model`` identifier.
        provider: Provider key (``"google"``).
        display_name: Human-friendly label.
        capabilities: Feature tags, e.g. ``"tools"``, ``"structured_output"``.
    """

    model_id: str
    provider: str
    display_name: str
    capabilities: list[str]

    @property
    def bare_name(self) -> str:
        """Model name as sent on the wire, without the provider prefix."""
        return self.model_id.split("/", 1)[-1]


MODEL_CATALOG: dict[str, ModelInfo] = {
    "google/gemini-2.0-flash": ModelInfo(
        model_id="google/gemini-2.0-flash",
        provider="google",
        display_name="Gemini 2.0 Flash",
        capabilities=["tools", "structured_output", "vision"],
    ),
}


def list_models(provider: Optional[str] = None) -> list[ModelInfo]:
    """Return catalog entries, optionally restricted to one provider."""
    if provider is None:
        return list(MODEL_CATALOG.values())
    return [m for m in MODEL_CATALOG.values() if m.provider == provider]


def get_model_info(model: str) -> Optional[ModelInfo]:
    """Look up a model by prefixed (``google/...``) or bare name."""
    if model in MODEL_CATALOG:
        return MODEL_CATALOG[model]
    for prefix in _PROVIDER_PREFIXES.values():
        info = MODEL_CATALOG.get(prefix + model)
        if info is not None:
            return info
    return None
