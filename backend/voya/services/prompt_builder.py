"""Itinerary prompt rendering. The requested sections are what the LLM is asked to produce."""

SYSTEM_PROMPT = (
    "You are a helpful travel planner assistant. "
    "Create detailed, practical, and engaging travel itineraries."
)

ITINERARY_SECTIONS = (
    "Day-by-day breakdown",
    "Must-visit attractions",
    "Local food recommendations",
    "Transportation tips",
    "Estimated costs",
)


def build_itinerary_prompt(destination: str, duration: int, preferences: str | None = None) -> str:
    prompt = f"Create a detailed {duration}-day travel itinerary for {destination}. "
    if preferences and preferences.strip():
        prompt += f"Focus on: {preferences.strip()}. "
    prompt += "\n\nPlease provide:\n" + "\n".join(f"- {s}" for s in ITINERARY_SECTIONS)
    return prompt
