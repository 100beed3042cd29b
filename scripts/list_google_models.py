#!/usr/bin/env python3
"""
Script to list the models Google exposes on its OpenAI-compatible endpoint.
"""

import asyncio
import os
import sys
from pathlib import Path

# Add the project root to Python path so we can import agentic_provider
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load environment variables from .env file
from dotenv import load_dotenv

load_dotenv(project_root / ".env")

from agentic_provider.exceptions import AgenticProviderError
from agentic_provider.providers.google import GoogleAdapter


async def main():
    """List available Gemini models."""
    api_key = os.environ.get(GoogleAdapter.API_ENV_VAR)
    if not api_key:
        print(f"Error: {GoogleAdapter.API_ENV_VAR} is not set.")
        sys.exit(1)

    try:
        print("Fetching available Gemini models...")
        models = await GoogleAdapter().list_remote_models(api_key)
    except AgenticProviderError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if models:
        print(f"\nFound {len(models)} models:")
        for model in sorted(models):
            print(f"  - {model}")
    else:
        print("No models found.")


if __name__ == "__main__":
    asyncio.run(main())
