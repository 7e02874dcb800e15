"""Drink-window alerts for cellar wines nearing their drink-by date."""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from winejournal.config import NotificationsConfig, settings
from winejournal.schemas.analytics import DrinkWindowAlert, DrinkWindowSummary
from winejournal.services.analytics import get_field, parse_timestamp

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

RECOMMENDATIONS = {
    "expired": "Past its drink-by date. Check the condition before serving",
    "high": "Open within the week, ideally at a dinner worth the bottle",
    "medium": "Feature it at an upcoming tasting session",
    "low": "Include it in everyday drinking over the coming weeks",
}


def days_until(drink_by: datetime, now: datetime) -> int:
    """Whole days until the drink-by date, rounded up."""
    return math.ceil((drink_by - now).total_seconds() / SECONDS_PER_DAY)


def alert_priority(days: int, thresholds: NotificationsConfig) -> str | None:
    """Map days remaining to a priority, or None when no alert is due."""
    if days <= thresholds.high_priority_days:
        return "high"
    if days <= thresholds.medium_priority_days:
        return "medium"
    if days <= thresholds.low_priority_days:
        return "low"
    return None


def _estimated_value(wine: Any, quantity: int) -> float:
    value = get_field(wine, "current_value")
    if value is None:
        value = get_field(wine, "purchase_price")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value) * quantity


def build_alerts(
    wines: Iterable[Any],
    thresholds: NotificationsConfig | None = None,
    now: datetime | None = None,
) -> list[DrinkWindowAlert]:
    """Build alerts for unopened wines inside the notification window.

    Args:
        wines: Cellar wine records (mappings or objects).
        thresholds: Priority thresholds in days; defaults to configured values.
        now: Reference time; defaults to the current UTC time.

    Returns:
        Alerts sorted by days until expiry, soonest first.
    """
    thresholds = thresholds or settings.notifications
    now = now or datetime.now(timezone.utc)

    alerts: list[DrinkWindowAlert] = []
    for wine in wines:
        if get_field(wine, "is_opened"):
            continue
        drink_by = parse_timestamp(get_field(wine, "drink_by_date"))
        if drink_by is None:
            continue

        days = days_until(drink_by, now)
        priority = alert_priority(days, thresholds)
        if priority is None:
            continue

        if days < 0:
            status = "expired"
        elif get_field(wine, "drink_alert_dismissed"):
            status = "dismissed"
        else:
            status = "active"

        quantity = get_field(wine, "quantity")
        quantity = quantity if isinstance(quantity, int) and not isinstance(quantity, bool) else 0
        wine_id = get_field(wine, "id")
        cellar_id = get_field(wine, "cellar_id")

        alerts.append(DrinkWindowAlert(
            wine_id=str(wine_id) if wine_id is not None else None,
            cellar_id=str(cellar_id) if cellar_id is not None else None,
            wine_name=str(get_field(wine, "name") or "Unknown wine"),
            vintage=get_field(wine, "vintage"),
            drink_by_date=drink_by,
            days_until_expiry=days,
            priority=priority,
            status=status,
            quantity=quantity,
            storage_location=get_field(wine, "storage_location") or "",
            estimated_value=_estimated_value(wine, quantity),
            recommendation=RECOMMENDATIONS["expired" if status == "expired" else priority],
        ))

    alerts.sort(key=lambda alert: alert.days_until_expiry)
    return alerts


def summarize_alerts(alerts: list[DrinkWindowAlert]) -> DrinkWindowSummary:
    active = [alert for alert in alerts if alert.status == "active"]
    return DrinkWindowSummary(
        alerts=alerts,
        active_count=len(active),
        high_priority_count=sum(1 for alert in active if alert.priority == "high"),
        total_value_at_risk=sum(alert.estimated_value for alert in active),
    )


async def check_expiring_wines() -> dict[str, int]:
    """Count active high-priority alerts per owner across all cellars.

    Used by the periodic background check in the application lifespan.
    """
    from winejournal.models import CellarWine

    thresholds = settings.notifications
    now = datetime.now(timezone.utc)
    wines = await CellarWine.find(
        CellarWine.is_opened == False,  # noqa: E712
        CellarWine.drink_by_date != None,  # noqa: E711
    ).to_list()

    by_owner: dict[str, list[CellarWine]] = {}
    for wine in wines:
        by_owner.setdefault(str(wine.owner_id), []).append(wine)

    counts: dict[str, int] = {}
    for owner_id, owner_wines in by_owner.items():
        summary = summarize_alerts(build_alerts(owner_wines, thresholds, now))
        if summary.high_priority_count:
            counts[owner_id] = summary.high_priority_count
            logger.info(
                "User %s has %d wine(s) to drink within %d days",
                owner_id,
                summary.high_priority_count,
                thresholds.high_priority_days,
            )
    return counts
