"""Chat Completions adapter for OpenAI-compatible endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..exceptions import ConfigurationError, ProviderError
from ..tools.tool_factory import ToolExecutor
from ._base import BaseProvider, ChatPayload, ProviderResponse, ProviderToolCall

logger = logging.getLogger(__name__)


class OpenAICompatAdapter(BaseProvider):
    """Provider adapter speaking the OpenAI Chat Completions wire protocol.

    Subclasses point it at a specific endpoint via ``DEFAULT_BASE_URL``.
    """

    DEFAULT_BASE_URL: Optional[str] = None

    def __init__(
        self,
        *,
        tool_executor: Optional[ToolExecutor] = None,
        timeout: float = 180.0,
        base_url: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(tool_executor=tool_executor, timeout=timeout, **kwargs)
        self._base_url = base_url or self.DEFAULT_BASE_URL

    def _get_client(self, api_key: str) -> Any:
        """Lazily import and create an ``AsyncOpenAI`` client for *api_key*.

        The caller owns the client and closes it after a single round trip.
        """
        try:
            from openai import AsyncOpenAI
        except ImportError:
            raise ConfigurationError(
                "OpenAI-compatible providers require the 'openai' package. "
                "Install it with: pip install openai"
            )

        client_kwargs: Dict[str, Any] = {
            "api_key": api_key,
            "timeout": self.timeout,
            # Failed round trips surface to the caller; no transparent retries.
            "max_retries": 0,
        }
        if self._base_url:
            client_kwargs["base_url"] = self._base_url

        return AsyncOpenAI(**client_kwargs)

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_completion(completion: Any) -> ProviderResponse:
        """Normalise a Chat Completions response object."""
        usage: Optional[Dict[str, int]] = None
        comp_usage = getattr(completion, "usage", None)
        if comp_usage:
            usage = {
                "prompt_tokens": getattr(comp_usage, "prompt_tokens", 0) or 0,
                "completion_tokens": getattr(comp_usage, "completion_tokens", 0) or 0,
                "total_tokens": getattr(comp_usage, "total_tokens", 0) or 0,
            }

        choices = getattr(completion, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        if message is None:
            return ProviderResponse(content="", usage=usage)

        tool_calls: List[ProviderToolCall] = []
        for tc in getattr(message, "tool_calls", None) or []:
            func = getattr(tc, "function", None)
            tool_calls.append(
                ProviderToolCall(
                    call_id=getattr(tc, "id", None) or "",
                    name=getattr(func, "name", None) or "",
                    arguments=getattr(func, "arguments", None) or "",
                )
            )

        return ProviderResponse(
            content=getattr(message, "content", None) or "",
            tool_calls=tool_calls,
            usage=usage,
        )

    # ------------------------------------------------------------------
    # _call_api
    # ------------------------------------------------------------------

    async def _call_api(self, api_key: str, payload: ChatPayload) -> ProviderResponse:
        """Make a single call via ``chat.completions.create``."""
        client = self._get_client(api_key)
        request = payload.to_kwargs()
        logger.debug(
            "Calling %s with %d messages (model=%s)",
            self._base_url or "OpenAI",
            len(payload.messages),
            payload.model,
        )

        try:
            completion = await client.chat.completions.create(**request)
        except Exception as e:
            raise ProviderError(
                f"{self.NAME or 'Chat Completions'} API error: {e}"
            ) from e
        finally:
            await client.close()

        return self._parse_completion(completion)

    async def list_remote_models(self, api_key: str) -> List[str]:
        """Return the model IDs the endpoint advertises via ``models.list``."""
        client = self._get_client(api_key)
        try:
            page = await client.models.list()
        except Exception as e:
            raise ProviderError(f"Failed to list models: {e}") from e
        finally:
            await client.close()
        return [
            getattr(m, "id", "").removeprefix("models/")
            for m in getattr(page, "data", None) or []
        ]
