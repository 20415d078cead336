"""Tools the model may call while streaming.

Only one example tool is declared: a mocked weather lookup. It generates a
reading locally and never touches the network.
"""

import json
import logging
import random

from agno.tools import tool

from src.models.schemas import WeatherReading

logger = logging.getLogger(__name__)

WEATHER_CONDITIONS = ("Sunny", "Cloudy", "Thunderstorm", "Rain")


def get_weather(city: str) -> WeatherReading:
    """Generate a synthetic weather reading for a city.

    Args:
        city: City name.

    Returns:
        WeatherReading with a random temperature and condition.

    Raises:
        ValueError: If the city name is empty.
    """
    city = city.strip()
    if not city:
        raise ValueError("city must not be empty")

    return WeatherReading(
        city=city,
        temp_c=30 + random.randint(0, 5),
        condition=random.choice(WEATHER_CONDITIONS),
        humidity=70,
        wind_kph=8,
    )


@tool(name="getWeather", description="Get current weather for a city")
def get_weather_tool(city: str) -> str:
    """Get current weather for a city.

    Args:
        city: Name of the city.
    """
    reading = get_weather(city)
    logger.info(f"getWeather({city!r}) -> {reading.condition}, {reading.temp_c}C")
    return json.dumps(reading.model_dump(by_alias=True))


RELAY_TOOLS = [get_weather_tool]
