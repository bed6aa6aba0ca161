"""Prompt template for the place proposal model."""

from __future__ import annotations

TOUR_PROMPT_TEMPLATE = """You are a travel expert creating walking itineraries.

USER REQUEST: "{user_input}"

Recommend 5-7 walkable places matching their interests. Focus on:
- Actually walkable distances
- Real, public places that exist
- Mix of attractions based on user preferences

RULES:
1. Extract city from input
2. If "avoiding crowds" mentioned, suggest lesser-known places
3. Only real places (we will verify addresses separately)
4. CRITICAL: Return ONLY valid JSON, no markdown blocks
5. If the user specifies the starting point, include it as the first place in the JSON
6. If the user specifies the ending point, include it as the last place in the JSON
7. If the user specifies the number of places or stops, include exactly that many places
8. If the user specifies a stop they definitely want to make, include it in the JSON
9. If the user asks for more than {max_places} places, include only {max_places} and mention in "notes" that routes are limited to {max_places} stops

REQUIRED JSON FORMAT:
{{
  "city": "city name",
  "places": [
    {{
      "name": "exact place name",
      "type": "restaurant/museum/park/etc",
      "description": "brief description",
      "reasoning": "why it fits request"
    }}
  ],
  "total_estimated_walking_time": "estimated time",
  "notes": "route considerations"
}}

Return only the JSON:"""


def build_tour_prompt(user_input: str, max_places: int = 13) -> str:
    """Build the prompt asking the model for strict-JSON place proposals."""
    return TOUR_PROMPT_TEMPLATE.format(
        user_input=user_input.replace('"', "'"),
        max_places=max_places,
    )
