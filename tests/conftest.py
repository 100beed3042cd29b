"""Shared pytest setup: asyncio plugin, .env secrets and Gemini endpoint options."""

from __future__ import annotations

import os

import pytest
from dotenv import load_dotenv

from agentic_provider.providers.google import GoogleAdapter

pytest_plugins = ("pytest_asyncio",)

# GEMINI_API_KEY for the integration suite usually lives in a local .env.
load_dotenv()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("gemini", "Gemini integration settings")
    group.addoption(
        "--gemini-model",
        action="store",
        default=os.environ.get("GEMINI_TEST_MODEL", GoogleAdapter.DEFAULT_MODEL),
        dest="gemini_model",
        help="Model the integration tests send requests to (env: GEMINI_TEST_MODEL).",
    )
    group.addoption(
        "--gemini-base-url",
        action="store",
        default=os.environ.get("GEMINI_BASE_URL", GoogleAdapter.DEFAULT_BASE_URL),
        dest="gemini_base_url",
        help="OpenAI-compatible endpoint to target (env: GEMINI_BASE_URL).",
    )


@pytest.fixture(scope="session")
def gemini_model(pytestconfig: pytest.Config) -> str:
    return pytestconfig.getoption("gemini_model")


@pytest.fixture(scope="session")
def gemini_base_url(pytestconfig: pytest.Config) -> str:
    return pytestconfig.getoption("gemini_base_url")
