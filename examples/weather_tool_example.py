# agentic_provider/examples/weather_tool_example.py
"""
Runs a Gemini request that can call a local weather tool.

Requires GEMINI_API_KEY in the environment or a .env file in the CWD.
"""
import asyncio
import logging
from typing import Any, Dict

from agentic_provider import ProviderClient

module_logger = logging.getLogger(__name__)

WEATHER_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "city": {
            "type": "string",
            "description": "City to look up, e.g. 'Lisbon'.",
        }
    },
    "required": ["city"],
}

_FAKE_FORECASTS = {
    "lisbon": {"temp": 24, "condition": "sunny"},
    "oslo": {"temp": 3, "condition": "snow"},
}


def get_weather(city: str, units: str) -> Dict[str, Any]:
    """Returns the current weather for a city."""
    forecast = _FAKE_FORECASTS.get(city.lower(), {"temp": 15, "condition": "cloudy"})
    module_logger.info("[get_weather] %s -> %s", city, forecast)
    return {"city": city, "units": units, **forecast}


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    client = ProviderClient("google")
    # "units" is fixed server-side; the model only supplies the city.
    client.register_tool(
        get_weather, parameters=WEATHER_PARAMETERS, params={"units": "celsius"}
    )

    result = await client.generate(
        [{"role": "user", "content": "Should I pack a coat for Oslo or Lisbon?"}],
        system_prompt="You are a concise travel assistant.",
        temperature=0.2,
    )

    print(result.content)
    print(f"Tokens: {result.tokens.model_dump()}")
    for call in result.tool_calls or []:
        print(f"  {call.name}({call.arguments}) -> {call.result}")


if __name__ == "__main__":
    asyncio.run(main())
