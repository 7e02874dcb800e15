"""AI sommelier: tasting notes, pairings and recommendations.

Prompts go to Claude when an Anthropic API key is configured and AI is
enabled. Otherwise, or when the API call fails, canned answers keyed on the
prompt subject are returned so the endpoints always respond.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

import anthropic

from winejournal.config import settings
from winejournal.constants import DEFAULT_FOOD_PAIRINGS
from winejournal.schemas.ai import AIRecommendation, WineAnalysis
from winejournal.services.analytics import get_field, parse_rating

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional sommelier and wine expert with deep knowledge of wine "
    "tasting, food pairing, and wine recommendations. Provide detailed, accurate, "
    "and helpful insights about wines."
)

MOCK_TASTING_NOTES = """Based on this wine's characteristics, here are detailed tasting notes:

**Appearance**: Deep ruby red with purple hues, clear and bright
**Nose**: Intense aromas of black cherry, plum, and dark chocolate with hints of vanilla and oak
**Palate**: Full-bodied with rich tannins, flavors of blackberry, cassis, and tobacco
**Finish**: Long and complex with notes of leather and spice

This wine shows excellent balance and structure, typical of its region and grape variety."""

MOCK_FOOD_PAIRINGS = """Perfect food pairings for this wine:

• Grilled red meats (beef, lamb, venison)
• Aged cheeses (Parmigiano-Reggiano, aged cheddar)
• Rich pasta dishes with tomato-based sauces
• Dark chocolate desserts
• Mushroom-based dishes

The wine's tannins and acidity complement rich, fatty foods beautifully."""

MOCK_RECOMMENDATIONS = """Based on your preferences, I recommend:

1. **Similar Style**: Try a Malbec from Argentina or a Shiraz from Australia
2. **Upgrade Option**: Consider a premium Cabernet Sauvignon from Napa Valley
3. **Discovery**: Explore a Tempranillo from Spain's Ribera del Duero
4. **Value Pick**: Look for a Chilean Carmenère or South African Pinotage

These wines share similar characteristics while offering new experiences."""

MOCK_GENERIC = (
    "AI analysis would provide detailed insights about this wine, including tasting "
    "notes, food pairings, and recommendations based on your preferences."
)

TRANSCRIPTION_PLACEHOLDER = "Voice note transcription is not available on this server."

DEFAULT_RECOMMENDATIONS = [
    AIRecommendation(
        wine_name="Château Margaux 2015",
        reason="Premium Bordeaux that matches your taste for full-bodied reds",
        confidence=0.9,
        category="upgrade",
    ),
    AIRecommendation(
        wine_name="Barolo Riserva 2016",
        reason="Italian Nebbiolo with similar structure to your favorites",
        confidence=0.8,
        category="similar",
    ),
]

RECOMMENDATION_CATEGORIES = ["similar", "upgrade", "discovery", "value"]

_BULLET_LINE = re.compile(r"^\s*(?:[•\-*]|\d+\.)\s*")


def mock_response(prompt: str) -> str:
    """Canned answer chosen by the subject of the prompt."""
    if "tasting notes" in prompt:
        return MOCK_TASTING_NOTES
    if "food pairing" in prompt:
        return MOCK_FOOD_PAIRINGS
    if "recommendation" in prompt:
        return MOCK_RECOMMENDATIONS
    return MOCK_GENERIC


def parse_list(text: str) -> list[str]:
    """Items from bullet (•, -, *) or numbered lines of a response."""
    items = []
    for line in text.splitlines():
        if not _BULLET_LINE.match(line):
            continue
        item = _BULLET_LINE.sub("", line).strip()
        if item:
            items.append(item)
    return items


def parse_recommendations(text: str) -> list[AIRecommendation]:
    """Parse ``1. **Name**: reason`` style lines into recommendations."""
    recommendations = []
    for line in text.splitlines():
        if not _BULLET_LINE.match(line) or ":" not in line:
            continue
        name, _, reason = _BULLET_LINE.sub("", line).partition(":")
        name = name.strip().strip("*").strip()
        if not name:
            continue
        index = len(recommendations)
        recommendations.append(AIRecommendation(
            wine_name=name,
            reason=reason.strip() or "Recommended based on your preferences",
            confidence=round(max(0.1, 0.8 - index * 0.1), 2),
            category=RECOMMENDATION_CATEGORIES[min(index, len(RECOMMENDATION_CATEGORIES) - 1)],
        ))
    return recommendations


def _describe(wine: Any, *fields: str) -> str:
    labels = {
        "name": "Wine",
        "grape": "Grape",
        "region": "Region",
        "vintage": "Vintage",
        "rating": "Rating",
    }
    lines = []
    for field in fields:
        value = get_field(wine, field)
        if field == "rating":
            lines.append(f"Rating: {parse_rating(value) or 0:g}/5")
        else:
            lines.append(f"{labels[field]}: {value if value is not None else 'Unknown'}")
    return "\n".join(lines)


class SommelierService:
    """Wine advice backed by Claude, with canned fallbacks."""

    def __init__(self) -> None:
        self._client: anthropic.AsyncAnthropic | None = None

    def is_available(self) -> bool:
        return settings.ai_enabled and bool(settings.anthropic_api_key)

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
        return self._client

    async def complete(self, prompt: str, max_tokens: int = 500) -> str:
        """Send a prompt to the model, falling back to a canned answer."""
        if not self.is_available():
            return mock_response(prompt)

        try:
            message = await self._get_client().messages.create(
                model=settings.ai_model,
                max_tokens=max_tokens,
                temperature=settings.ai_temperature,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
            text = "".join(
                block.text for block in message.content if getattr(block, "type", None) == "text"
            )
            return text or "Unable to generate response"
        except anthropic.APIError as e:
            logger.error("AI request failed: %s", e)
            return mock_response(prompt)

    async def generate_tasting_notes(self, wine: Any) -> str:
        prompt = (
            "Generate professional tasting notes for this wine:\n\n"
            f"{_describe(wine, 'name', 'grape', 'region', 'vintage', 'rating')}\n\n"
            "Please provide detailed tasting notes covering appearance, nose, palate, and finish."
        )
        return await self.complete(prompt, 400)

    async def generate_description(self, wine: Any) -> str:
        prompt = (
            "Write a compelling, professional description for this wine:\n\n"
            f"{_describe(wine, 'name', 'grape', 'region', 'vintage')}\n\n"
            "Make it engaging and informative for wine enthusiasts."
        )
        return await self.complete(prompt, 300)

    async def generate_food_pairings(self, wine: Any) -> list[str]:
        prompt = (
            "Suggest 5-7 specific food pairings for this wine:\n\n"
            f"{_describe(wine, 'name', 'grape', 'region')}\n\n"
            "Provide specific dishes, not just general categories."
        )
        return parse_list(await self.complete(prompt, 300)) or list(DEFAULT_FOOD_PAIRINGS)

    async def suggest_food_pairings(self, grape: str, region: str) -> list[str]:
        prompt = (
            f"Suggest 5-7 specific food pairings for a {grape} wine from {region}.\n\n"
            "Provide specific dishes, not just general categories."
        )
        return parse_list(await self.complete(prompt, 300)) or list(DEFAULT_FOOD_PAIRINGS)

    async def suggest_improvements(self, wine: Any) -> list[str]:
        prompt = (
            "Suggest 3-5 specific improvements or variations for this wine:\n\n"
            f"{_describe(wine, 'name', 'grape', 'region', 'rating')}\n\n"
            "Consider different regions, producers, vintages, or styles."
        )
        return parse_list(await self.complete(prompt, 300))

    async def analyze_wine(self, wine: Any) -> WineAnalysis:
        """Full analysis; sections missing from the answer get default text."""
        prompt = (
            "Provide a comprehensive analysis of this wine:\n\n"
            f"{_describe(wine, 'name', 'grape', 'region', 'vintage', 'rating')}\n\n"
            "Please provide:\n"
            "1. Detailed tasting notes\n"
            "2. 5-7 specific food pairings\n"
            "3. Serving recommendations (temperature, decanting, glassware)\n"
            "4. Aging potential assessment\n"
            "5. Price range estimation\n"
            "6. 3-4 similar wines to try\n"
            "7. Expert insights and tips"
        )
        response = await self.complete(prompt, 800)
        sections = [s.strip() for s in re.split(r"^\s*\d+\.", response, flags=re.MULTILINE) if s.strip()]

        def section(index: int) -> str | None:
            return sections[index] if index < len(sections) else None

        def lines(index: int) -> list[str]:
            text = section(index)
            if text is None:
                return []
            return [line.strip().lstrip("•-* ").strip() for line in text.splitlines() if line.strip()]

        return WineAnalysis(
            tasting_notes=section(0) or "Detailed tasting notes are not available.",
            food_pairings=lines(1) or list(DEFAULT_FOOD_PAIRINGS),
            serving_recommendations=section(2) or "Serve at 16-18°C, decant for 1 hour if young.",
            aging_potential=section(3) or "Can age 5-10 years under proper conditions.",
            price_range=section(4) or "$20-40 range typical for this style.",
            similar_wines=lines(5) or ["Similar wines are not available."],
            expert_insights=section(6) or "Expert insights are not available.",
        )

    async def get_personalized_recommendations(
        self,
        wines: Iterable[Any],
        regions: list[str] | None = None,
        grapes: list[str] | None = None,
    ) -> list[AIRecommendation]:
        wines = list(wines)
        ratings = [parse_rating(get_field(w, "rating")) or 0.0 for w in wines]
        average = sum(ratings) / len(ratings) if ratings else 0.0
        listing = ", ".join(
            f"{get_field(w, 'name')} ({get_field(w, 'grape') or 'Unknown'}, "
            f"{get_field(w, 'region') or 'Unknown'})"
            for w in wines
        )
        prompt = (
            "Based on this user's wine collection and preferences, suggest 5 personalized "
            "wine recommendations:\n\n"
            f"User's wines: {listing or 'None yet'}\n"
            f"Average rating: {average:.1f}/5\n"
            f"Preferred regions: {', '.join(regions or []) or 'Various'}\n"
            f"Preferred grapes: {', '.join(grapes or []) or 'Various'}\n\n"
            "Provide recommendations in these categories:\n"
            "1. Similar style wines they might enjoy\n"
            "2. Upgrade options to try\n"
            "3. Discovery wines outside their comfort zone\n"
            "4. Value picks under $30"
        )
        response = await self.complete(prompt, 600)
        return parse_recommendations(response) or list(DEFAULT_RECOMMENDATIONS)

    async def generate_session_insights(self, session: Any, wines: Iterable[Any]) -> str:
        wines = list(wines)
        ratings = [parse_rating(get_field(w, "rating")) or 0.0 for w in wines]
        average = sum(ratings) / len(ratings) if ratings else 0.0
        prompt = (
            "Analyze this tasting session and provide insights:\n\n"
            f"Session: {get_field(session, 'name')}\n"
            f"Date: {get_field(session, 'date')}\n"
            f"Wines tasted: {len(wines)}\n"
            f"Average rating: {average:.1f}/5\n\n"
            "Provide insights about:\n"
            "1. Overall session quality\n"
            "2. Wine variety and diversity\n"
            "3. Rating patterns\n"
            "4. Suggestions for future sessions"
        )
        return await self.complete(prompt, 400)

    async def transcribe_voice_note(self, audio: bytes) -> str:
        # No speech-to-text backend is wired up
        logger.debug("Transcription requested for %d bytes of audio", len(audio))
        return TRANSCRIPTION_PLACEHOLDER


sommelier_service = SommelierService()
