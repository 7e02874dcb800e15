"""Analytics aggregation over a user's wine records.

The aggregator accepts wine records as mappings or attribute objects (Beanie
documents, schemas) and is total: malformed fields are skipped one by one and
no input makes it raise.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from typing import Any, Literal

from winejournal.schemas.analytics import (
    GrapeStat,
    MonthlyStat,
    RegionStat,
    WineAnalytics,
)

logger = logging.getLogger(__name__)

TOP_N = 10
MONTHS_IN_SERIES = 12

TimeRange = Literal["all", "month", "quarter", "year"]


def get_field(record: Any, name: str) -> Any:
    """Read a field from a mapping or an object, returning None when absent."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def parse_rating(value: Any) -> float | None:
    """Return the rating as a float, or None if it is not a usable number.

    Numbers and numeric strings are accepted. Booleans, NaN and infinities
    are not ratings.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            rating = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            rating = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(rating):
        return None
    return rating


def rating_bucket(rating: float) -> int:
    """Nearest whole star (halves round up), clamped into 1..5."""
    return min(5, max(1, math.floor(rating + 0.5)))


def parse_timestamp(value: Any) -> datetime | None:
    """Return an aware UTC datetime for a timestamp, or None if unparseable.

    Accepts epoch milliseconds, datetime/date objects (naive values are taken
    as UTC) and ISO-8601 strings.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            if not math.isfinite(value):
                return None
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    try:
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # Offsets can push dates at the edge of the range out of it
        return None


def _group_key(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


class _Group:
    """Running count and rating sum for one group."""

    __slots__ = ("count", "rated", "rating_sum")

    def __init__(self) -> None:
        self.count = 0
        self.rated = 0
        self.rating_sum = 0.0

    def add(self, rating: float | None) -> None:
        self.count += 1
        if rating is not None:
            self.rated += 1
            self.rating_sum += rating

    @property
    def average(self) -> float:
        return self.rating_sum / self.rated if self.rated else 0.0


def _top(groups: dict[str, _Group]) -> list[tuple[str, _Group]]:
    # sorted() is stable and dicts keep insertion order, so ties stay in input order
    return sorted(groups.items(), key=lambda item: item[1].count, reverse=True)[:TOP_N]


def calculate_analytics(wines: Iterable[Any]) -> WineAnalytics:
    """Build the analytics summary for a collection of wine records.

    Args:
        wines: Wine records as mappings or objects exposing ``rating``,
            ``region``, ``grape`` and ``timestamp``.

    Returns:
        WineAnalytics with totals, top-10 regions and grapes, the rating
        histogram and the monthly series for the 12 most recent months.
    """
    wines = list(wines)
    regions: dict[str, _Group] = {}
    grapes: dict[str, _Group] = {}
    months: dict[str, _Group] = {}
    distribution = {str(bucket): 0 for bucket in range(1, 6)}
    overall = _Group()

    for wine in wines:
        rating = parse_rating(get_field(wine, "rating"))
        if rating is not None:
            overall.add(rating)
            distribution[str(rating_bucket(rating))] += 1

        region = _group_key(get_field(wine, "region"))
        if region is not None:
            regions.setdefault(region, _Group()).add(rating)

        grape = _group_key(get_field(wine, "grape"))
        if grape is not None:
            grapes.setdefault(grape, _Group()).add(rating)

        tasted = parse_timestamp(get_field(wine, "timestamp"))
        if tasted is not None:
            months.setdefault(f"{tasted.year:04d}-{tasted.month:02d}", _Group()).add(rating)

    recent_months = sorted(months)[-MONTHS_IN_SERIES:]

    return WineAnalytics(
        total_wines=len(wines),
        average_rating=overall.average,
        favorite_regions=[
            RegionStat(region=name, count=group.count, average_rating=group.average)
            for name, group in _top(regions)
        ],
        favorite_grapes=[
            GrapeStat(grape=name, count=group.count, average_rating=group.average)
            for name, group in _top(grapes)
        ],
        rating_distribution=distribution,
        monthly_trends=[
            MonthlyStat(month=key, count=months[key].count, average_rating=months[key].average)
            for key in recent_months
        ],
    )


def _range_bounds(time_range: str, now: datetime) -> tuple[datetime, datetime | None]:
    """Inclusive start and exclusive end of a range; quarters are open-ended."""
    if time_range == "month":
        start = datetime(now.year, now.month, 1, tzinfo=timezone.utc)
        if now.month == 12:
            return start, datetime(now.year + 1, 1, 1, tzinfo=timezone.utc)
        return start, datetime(now.year, now.month + 1, 1, tzinfo=timezone.utc)
    if time_range == "quarter":
        first_month = 3 * ((now.month - 1) // 3) + 1
        return datetime(now.year, first_month, 1, tzinfo=timezone.utc), None
    if time_range == "year":
        return (
            datetime(now.year, 1, 1, tzinfo=timezone.utc),
            datetime(now.year + 1, 1, 1, tzinfo=timezone.utc),
        )
    raise ValueError(f"Unknown time range: {time_range}")


def filter_wines_by_time_range(
    wines: Iterable[Any],
    time_range: str = "all",
    now: datetime | None = None,
) -> list[Any]:
    """Keep the wines tasted in the current month, quarter or year.

    ``month`` and ``year`` are calendar periods, so wines dated later in the
    period are kept. ``quarter`` keeps everything from the start of the
    current quarter onwards. ``all`` keeps everything; for the other ranges,
    wines without a parseable timestamp are dropped.

    Raises:
        ValueError: If time_range is not a TimeRange.
    """
    if time_range == "all":
        return list(wines)

    now = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    start, end = _range_bounds(time_range, now)

    kept = []
    for wine in wines:
        tasted = parse_timestamp(get_field(wine, "timestamp"))
        if tasted is None or tasted < start:
            continue
        if end is None or tasted < end:
            kept.append(wine)
    return kept
