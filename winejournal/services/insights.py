"""Heuristic insights about a user's tasting habits."""

import math
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from winejournal.schemas.analytics import (
    Insight,
    PriceRange,
    TastePreferences,
    WineAnalytics,
)
from winejournal.services.analytics import (
    calculate_analytics,
    get_field,
    parse_rating,
    parse_timestamp,
)


def _distinct(values: Iterable[Any]) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        if isinstance(value, str) and value.strip():
            seen.setdefault(value.strip(), None)
    return list(seen)


def _price(value: Any) -> float | None:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


def derive_preferences(
    wines: Iterable[Any],
    analytics: WineAnalytics | None = None,
) -> TastePreferences:
    """Summarise what a user's logged wines say about their taste.

    Args:
        wines: Wine records (mappings or objects).
        analytics: Precomputed summary for the same wines; computed if omitted.
    """
    wines = list(wines)
    if analytics is None:
        analytics = calculate_analytics(wines)

    prices = [p for p in (_price(get_field(w, "price")) for w in wines) if p is not None]
    rating_total = sum(parse_rating(get_field(w, "rating")) or 0.0 for w in wines)

    return TastePreferences(
        regions=_distinct(get_field(w, "region") for w in wines),
        grapes=_distinct(get_field(w, "grape") for w in wines),
        average_rating=rating_total / len(wines) if wines else 0.0,
        price_range=PriceRange(
            min=min(prices) if prices else 0.0,
            max=max(prices) if prices else 0.0,
        ),
        total_wines=len(wines),
        favorite_regions=analytics.favorite_regions,
        favorite_grapes=analytics.favorite_grapes,
    )


def generate_insights(
    wines: Iterable[Any],
    preferences: TastePreferences | None = None,
    now: datetime | None = None,
) -> list[Insight]:
    """Apply the insight rules, in order, to a user's wines.

    An empty collection yields no insights.
    """
    wines = list(wines)
    if not wines:
        return []
    if preferences is None:
        preferences = derive_preferences(wines)
    now = now or datetime.now(timezone.utc)

    insights: list[Insight] = []

    if preferences.average_rating > 4.0:
        insights.append(Insight(
            type="pattern",
            title="High Standards",
            description=(
                f"You consistently rate wines highly ({preferences.average_rating:.1f}/5 average), "
                "indicating refined taste preferences."
            ),
            confidence=0.9,
        ))

    if len(preferences.regions) < 5:
        insights.append(Insight(
            type="discovery",
            title="Regional Explorer",
            description=(
                f"You've tasted wines from {len(preferences.regions)} regions. "
                "Consider exploring new wine regions to expand your palate."
            ),
            confidence=0.8,
        ))

    price_range = preferences.price_range
    mid_price = (price_range.min + price_range.max) / 2 if price_range.max > 0 else 0.0
    if mid_price > 50:
        insights.append(Insight(
            type="trend",
            title="Premium Preferences",
            description=(
                f"You tend to prefer premium wines (${mid_price:.0f} average). "
                "Consider exploring value wines in similar styles."
            ),
            confidence=0.85,
        ))

    if preferences.total_wines > 20:
        insights.append(Insight(
            type="pattern",
            title="Dedicated Collector",
            description=(
                f"With {preferences.total_wines} wines, you're building an impressive collection. "
                "Consider organizing by region or style."
            ),
            confidence=0.9,
        ))

    if len(preferences.grapes) < 8:
        insights.append(Insight(
            type="recommendation",
            title="Grape Variety Explorer",
            description=(
                f"You've tried {len(preferences.grapes)} grape varieties. "
                "Explore lesser-known grapes for new experiences."
            ),
            confidence=0.75,
        ))

    this_month = 0
    for wine in wines:
        tasted = parse_timestamp(get_field(wine, "timestamp"))
        if tasted is not None and (tasted.year, tasted.month) == (now.year, now.month):
            this_month += 1
    if this_month:
        insights.append(Insight(
            type="trend",
            title="Seasonal Tasting",
            description=(
                f"You've tasted {this_month} wines this month. "
                "Consider seasonal wine and food pairings."
            ),
            confidence=0.7,
        ))

    return insights
