"""Inventory statistics and drink-or-keep advice for a cellar."""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from winejournal.schemas.analytics import (
    BottleValue,
    CellarAnalytics,
    CellarRecommendation,
)
from winejournal.services.analytics import get_field, parse_timestamp

SECONDS_PER_YEAR = 365 * 24 * 60 * 60

# Years past aging potential during which a wine is still at its best
READY_WINDOW_YEARS = 2

CELLAR_PRICE_RANGES = [
    ("Under $50", 0.0, 50.0),
    ("$50 - $100", 50.0, 100.0),
    ("$100 - $200", 100.0, 200.0),
    ("Over $200", 200.0, float("inf")),
]


def _number(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def wine_age_years(wine: Any, now: datetime) -> float:
    """Years since the bottles were purchased (0 when unknown)."""
    purchased = parse_timestamp(get_field(wine, "purchase_date"))
    if purchased is None:
        return 0.0
    return (now - purchased).total_seconds() / SECONDS_PER_YEAR


def classify_wine(wine: Any, now: datetime) -> str:
    """Return ``aging``, ``ready`` or ``overdue`` for a cellar wine."""
    age = wine_age_years(wine, now)
    potential = _number(get_field(wine, "aging_potential"))
    if age < potential:
        return "aging"
    if age <= potential + READY_WINDOW_YEARS:
        return "ready"
    return "overdue"


def _add(groups: dict[str, BottleValue], key: Any, bottles: int, value: float) -> None:
    name = key.strip() if isinstance(key, str) and key.strip() else "Unknown"
    group = groups.setdefault(name, BottleValue())
    group.bottles += bottles
    group.value += value


def calculate_cellar_analytics(
    wines: Iterable[Any],
    now: datetime | None = None,
) -> CellarAnalytics:
    """Compute bottle counts, value, age and readiness for a cellar's wines."""
    wines = list(wines)
    if not wines:
        return CellarAnalytics()
    now = now or datetime.now(timezone.utc)

    analytics = CellarAnalytics(
        price_ranges={label: BottleValue() for label, _, _ in CELLAR_PRICE_RANGES},
    )
    total_age = 0.0

    for wine in wines:
        quantity = int(_number(get_field(wine, "quantity")))
        price = _number(get_field(wine, "purchase_price"))
        value = price * quantity

        analytics.total_bottles += quantity
        analytics.total_value += value
        total_age += wine_age_years(wine, now)

        _add(analytics.by_region, get_field(wine, "region"), quantity, value)
        _add(analytics.by_grape, get_field(wine, "grape"), quantity, value)

        status = classify_wine(wine, now)
        if status == "aging":
            analytics.aging_wines += 1
        elif status == "ready":
            analytics.ready_to_drink += 1
        else:
            analytics.overdue += 1

        for label, low, high in CELLAR_PRICE_RANGES:
            if low <= price < high:
                bucket = analytics.price_ranges[label]
                bucket.bottles += quantity
                bucket.value += value
                break

    analytics.average_age = total_age / len(wines)
    return analytics


def generate_recommendations(
    wines: Iterable[Any],
    now: datetime | None = None,
) -> list[CellarRecommendation]:
    """Every overdue wine, then up to three ready wines and two aging ones."""
    now = now or datetime.now(timezone.utc)
    overdue, ready, aging = [], [], []
    for wine in wines:
        {"overdue": overdue, "ready": ready, "aging": aging}[classify_wine(wine, now)].append(wine)

    def _rec(wine: Any, type_: str, priority: str, message: str, action: str) -> CellarRecommendation:
        wine_id = get_field(wine, "id")
        return CellarRecommendation(
            wine_id=str(wine_id) if wine_id is not None else None,
            wine_name=str(get_field(wine, "name") or "Unknown wine"),
            type=type_,
            priority=priority,
            message=message.format(name=get_field(wine, "name") or "Unknown wine"),
            action=action,
        )

    recommendations = [
        _rec(w, "drink", "high", "{name} is overdue for drinking",
             "Consider drinking soon to avoid spoilage")
        for w in overdue
    ]
    recommendations += [
        _rec(w, "drink", "medium", "{name} is ready to drink", "Perfect time to enjoy this wine")
        for w in ready[:3]
    ]
    recommendations += [
        _rec(w, "aging", "low", "{name} is still aging", "Continue storing under proper conditions")
        for w in aging[:2]
    ]
    return recommendations
