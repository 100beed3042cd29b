"""E2E tests for the Google provider with real API calls."""

from __future__ import annotations

import pytest

from agentic_provider import ProviderClient
from agentic_provider.tools.tool_factory import ToolFactory

from .conftest import SECRET, skip_google

pytestmark = [pytest.mark.asyncio, pytest.mark.integration, skip_google]


async def test_simple_generation(gemini_model: str, gemini_base_url: str) -> None:
    client = ProviderClient("google", base_url=gemini_base_url)
    result = await client.generate(
        [{"role": "user", "content": "What is 2+2? Reply with just the number."}],
        model=gemini_model,
        temperature=0.0,
    )
    assert "4" in result.content
    assert result.tokens.total > 0
    assert result.tool_calls is None


async def test_single_tool_call(
    gemini_model: str, gemini_base_url: str, tool_factory: ToolFactory
) -> None:
    client = ProviderClient(
        "google", tool_factory=tool_factory, base_url=gemini_base_url
    )
    result = await client.generate(
        [{"role": "user", "content": "Get the secret code from vault 'main-vault'."}],
        model=gemini_model,
        temperature=0.0,
    )
    assert SECRET.lower() in result.content.lower()
    assert result.tool_calls is not None
    assert result.tool_calls[0].name == "get_secret_code"
    assert result.tool_results is not None
    assert result.tool_results[0]["region"] == "eu-west"


async def test_multiply_tool(
    gemini_model: str, gemini_base_url: str, tool_factory: ToolFactory
) -> None:
    client = ProviderClient(
        "google", tool_factory=tool_factory, base_url=gemini_base_url
    )
    result = await client.generate(
        [{"role": "user", "content": "What is 7 * 8? Use the multiply tool."}],
        model=gemini_model,
        temperature=0.0,
    )
    assert "56" in result.content

