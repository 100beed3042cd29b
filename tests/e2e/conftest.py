"""Shared fixtures for e2e provider tests."""

from __future__ import annotations

import os

import pytest

from agentic_provider.tools.tool_factory import ToolFactory

# --- Skip helpers ---

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")

skip_google = pytest.mark.skipif(not GEMINI_API_KEY, reason="GEMINI_API_KEY not set")


# --- Tool definitions ---

SECRET = "alpha-bravo-charlie-42"


def get_secret_code(vault_id: str, region: str) -> dict:
    """Return a secret code for the given vault."""
    return {"code": SECRET, "vault": vault_id, "region": region}


def multiply(a: int, b: int) -> int:
    """Multiply two numbers."""
    return a * b


TOOL_DEFS = {
    "get_secret_code": {
        "function": get_secret_code,
        "description": "Retrieve a secret code from a vault by its ID.",
        "parameters": {
            "type": "object",
            "properties": {
                "vault_id": {"type": "string", "description": "The vault identifier."},
            },
            "required": ["vault_id"],
        },
        "params": {"region": "eu-west"},
    },
    "multiply": {
        "function": multiply,
        "description": "Multiply two integers and return the product.",
        "parameters": {
            "type": "object",
            "properties": {
                "a": {"type": "integer", "description": "First number."},
                "b": {"type": "integer", "description": "Second number."},
            },
            "required": ["a", "b"],
        },
    },
}


@pytest.fixture()
def tool_factory() -> ToolFactory:
    """Factory with get_secret_code and multiply tools."""
    factory = ToolFactory()
    for name, spec in TOOL_DEFS.items():
        factory.register_tool(
            function=spec["function"],
            name=name,
            description=spec["description"],
            parameters=spec["parameters"],
            params=spec.get("params"),
        )
    return factory
