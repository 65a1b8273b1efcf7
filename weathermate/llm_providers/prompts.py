"""
Prompt templates for the recommendation tiers.

Every builder is a pure function of the snapshot so the same conditions
always produce byte-identical requests.
"""

from weathermate.models.weather import WeatherSnapshot, format_number

WEATHER_AGENT_SYSTEM_PROMPT = """You are a helpful weather assistant that provides personalized recommendations based on weather conditions.
Analyze the following weather parameters and provide specific advice:

1. Temperature Analysis:
- What to wear based on temperature and feels-like conditions
- How to stay comfortable in the current temperature

2. Weather Conditions:
- Specific precautions based on current conditions (rain, clouds, sun, etc.)
- Recommended activities suitable for these conditions

3. Health & Safety:
- Health precautions based on temperature, humidity, and conditions
- UV protection needs if applicable
- Air quality considerations

4. Daily Planning:
- Best times for outdoor activities
- Indoor alternatives if needed
- Travel recommendations

5. Additional Tips:
- Energy efficiency suggestions
- Weather-specific life hacks

Format your response in clear sections with emoji indicators.
Keep recommendations practical, specific, and easy to follow."""

RECOMMENDATION_SECTIONS: tuple[str, ...] = (
    "👕 Clothing & Accessories",
    "🏃‍♂️ Outdoor Activities",
    "🏥 Health Precautions",
    "🚗 Travel Considerations",
    "💡 Energy Efficiency Tips",
)


def build_agent_chat_message(weather: WeatherSnapshot) -> str:
    """Digest sent to the Lyzr agent."""
    return (
        f"Analyze the current weather in {weather.name} and provide recommendations:\n"
        f"Temperature: {weather.rounded_temp}°C\n"
        f"Feels like: {weather.rounded_feels_like}°C\n"
        f"Conditions: {weather.condition.description}\n"
        f"Humidity: {format_number(weather.main.humidity)}%\n"
        f"Wind: {format_number(weather.wind.speed)} m/s"
    )


def build_recommendation_prompt(weather: WeatherSnapshot) -> str:
    """Single prompt for the stateless Gemini tier."""
    sections = "\n".join(
        f"{index}. {section}" for index, section in enumerate(RECOMMENDATION_SECTIONS, start=1)
    )
    return (
        "As a weather expert, provide detailed recommendations based on the following "
        f"weather conditions in {weather.name}:\n"
        "\n"
        f"Temperature: {weather.rounded_temp}°C\n"
        f"Feels like: {weather.rounded_feels_like}°C\n"
        f"Conditions: {weather.condition.description}\n"
        f"Humidity: {format_number(weather.main.humidity)}%\n"
        f"Wind Speed: {format_number(weather.wind.speed)} m/s\n"
        f"Pressure: {format_number(weather.main.pressure)} hPa\n"
        "\n"
        "Please provide specific recommendations for:\n"
        f"{sections}\n"
        "\n"
        "Format the response in clear sections with emojis and keep it concise but informative."
    )


def build_briefing_prompt(city: str, weather: WeatherSnapshot) -> str:
    return (
        f"Generate a friendly weather briefing for {city}. "
        f"Current conditions: {weather.condition.description}, "
        f"temperature: {format_number(weather.main.temp)}°C. Include tips for the day."
    )
