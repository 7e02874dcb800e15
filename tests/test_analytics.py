"""Tests for the analytics aggregator and time range filtering."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from winejournal.services.analytics import (
    calculate_analytics,
    filter_wines_by_time_range,
    parse_rating,
    parse_timestamp,
    rating_bucket,
)


def ms(year: int, month: int, day: int = 15) -> int:
    """Epoch milliseconds for a UTC date."""
    return int(datetime(year, month, day, tzinfo=timezone.utc).timestamp() * 1000)


class TestParsing:
    """Tests for rating and timestamp parsing."""

    @pytest.mark.parametrize("value,expected", [
        (4, 4.0),
        (3.5, 3.5),
        ("4.5", 4.5),
        (" 2 ", 2.0),
        (0, 0.0),
    ])
    def test_parse_rating_accepts_numbers(self, value, expected) -> None:
        assert parse_rating(value) == expected

    @pytest.mark.parametrize("value", [
        None, True, False, "abc", "", float("nan"), float("inf"), [4], 10**400, "1e400",
    ])
    def test_parse_rating_rejects_non_ratings(self, value) -> None:
        assert parse_rating(value) is None

    @pytest.mark.parametrize("rating,bucket", [
        (0, 1),
        (1.49, 1),
        (1.5, 2),
        (2.5, 3),
        (4.4, 4),
        (4.5, 5),
        (7, 5),
        (-3, 1),
    ])
    def test_rating_bucket_rounds_half_up_and_clamps(self, rating, bucket) -> None:
        assert rating_bucket(rating) == bucket

    def test_parse_timestamp_epoch_millis(self) -> None:
        parsed = parse_timestamp(ms(2024, 3, 1))
        assert parsed == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_parse_timestamp_naive_datetime_is_utc(self) -> None:
        parsed = parse_timestamp(datetime(2024, 3, 1, 12, 0))
        assert parsed.tzinfo == timezone.utc
        assert parsed.hour == 12

    def test_parse_timestamp_iso_string_with_offset(self) -> None:
        parsed = parse_timestamp("2024-03-01T01:00:00+02:00")
        assert parsed == datetime(2024, 2, 29, 23, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [
        None, "not a date", True, float("nan"), {},
        10**400, float("inf"), 10**20, "0001-01-01T00:00:00+05:00", "9999-12-31T23:00:00-05:00",
    ])
    def test_parse_timestamp_rejects_garbage(self, value) -> None:
        assert parse_timestamp(value) is None


class TestCalculateAnalytics:
    """Tests for the analytics summary."""

    def test_empty_input_gives_zeroed_summary(self) -> None:
        summary = calculate_analytics([])
        assert summary.total_wines == 0
        assert summary.average_rating == 0
        assert summary.favorite_regions == []
        assert summary.favorite_grapes == []
        assert summary.monthly_trends == []
        assert summary.rating_distribution == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}

    def test_single_region_example(self) -> None:
        wines = [
            {"rating": 5, "region": "Bordeaux"},
            {"rating": 4, "region": "Bordeaux"},
            {"rating": 3, "region": "Bordeaux"},
        ]
        summary = calculate_analytics(wines)

        assert summary.total_wines == 3
        assert summary.average_rating == pytest.approx(4.0)
        assert [r.model_dump() for r in summary.favorite_regions] == [
            {"region": "Bordeaux", "count": 3, "average_rating": 4.0}
        ]
        assert summary.rating_distribution == {"1": 0, "2": 0, "3": 1, "4": 1, "5": 1}

    def test_malformed_fields_are_skipped_individually(self) -> None:
        wines = [
            {"rating": "bad", "region": "Rioja", "grape": 42, "timestamp": "yesterday"},
            {"rating": 4, "region": None, "grape": "Tempranillo"},
            {},
            None,
        ]
        summary = calculate_analytics(wines)

        assert summary.total_wines == 4
        assert summary.average_rating == pytest.approx(4.0)
        assert [r.region for r in summary.favorite_regions] == ["Rioja"]
        # Rioja's only wine has no usable rating
        assert summary.favorite_regions[0].average_rating == 0
        assert [g.grape for g in summary.favorite_grapes] == ["Tempranillo"]
        assert summary.monthly_trends == []
        assert sum(summary.rating_distribution.values()) == 1

    def test_accepts_attribute_objects(self) -> None:
        wines = [
            SimpleNamespace(rating=4.0, region="Napa Valley", grape="Cabernet Sauvignon",
                            timestamp=datetime(2024, 5, 2, tzinfo=timezone.utc)),
            SimpleNamespace(rating=2.0, region="Napa Valley", grape="Merlot", timestamp=None),
        ]
        summary = calculate_analytics(wines)

        assert summary.favorite_regions[0].count == 2
        assert summary.favorite_regions[0].average_rating == pytest.approx(3.0)
        assert [m.month for m in summary.monthly_trends] == ["2024-05"]

    def test_top_lists_sorted_by_count_with_ties_in_input_order(self) -> None:
        wines = (
            [{"region": "Barossa Valley"}]
            + [{"region": "Tuscany"}] * 3
            + [{"region": "Mosel"}]
            + [{"region": "Piedmont"}] * 3
        )
        summary = calculate_analytics(wines)

        assert [r.region for r in summary.favorite_regions] == [
            "Tuscany", "Piedmont", "Barossa Valley", "Mosel",
        ]

    def test_top_lists_are_capped_at_ten(self) -> None:
        wines = [{"grape": f"Grape {i}", "rating": 3} for i in range(15)]
        summary = calculate_analytics(wines)

        assert len(summary.favorite_grapes) == 10
        assert summary.favorite_grapes[0].grape == "Grape 0"

    def test_monthly_series_keeps_twelve_most_recent_months_ascending(self) -> None:
        wines = [{"timestamp": ms(2023, month), "rating": 3} for month in range(1, 13)]
        wines += [{"timestamp": ms(2024, month), "rating": 5} for month in range(1, 4)]
        summary = calculate_analytics(wines)

        months = [m.month for m in summary.monthly_trends]
        assert len(months) == 12
        assert months == sorted(months)
        assert months[0] == "2023-04"
        assert months[-1] == "2024-03"
        assert summary.monthly_trends[-1].average_rating == 5

    def test_monthly_keys_use_utc(self) -> None:
        wines = [{"timestamp": "2024-01-31T23:30:00-05:00"}]
        summary = calculate_analytics(wines)

        assert summary.monthly_trends[0].month == "2024-02"
        assert summary.monthly_trends[0].count == 1

    def test_average_is_mean_of_present_ratings(self) -> None:
        wines = [{"rating": 5}, {"rating": "3"}, {"rating": None}, {"rating": float("nan")}]
        summary = calculate_analytics(wines)

        assert summary.total_wines == 4
        assert summary.average_rating == pytest.approx(4.0)
        assert sum(summary.rating_distribution.values()) == 2

    def test_out_of_range_values_are_skipped(self) -> None:
        wines = [
            {"rating": 10**400, "region": "Swartland"},
            {"timestamp": 10**400, "rating": 4},
            {"timestamp": "0001-01-01T00:00:00+05:00", "rating": 2},
        ]
        summary = calculate_analytics(wines)

        assert summary.total_wines == 3
        assert summary.average_rating == pytest.approx(3.0)
        assert summary.favorite_regions[0].average_rating == 0
        assert summary.monthly_trends == []

    def test_input_iterator_is_consumed_once(self) -> None:
        summary = calculate_analytics(iter([{"rating": 2}, {"rating": 4}]))
        assert summary.total_wines == 2


class TestTimeRangeFilter:
    """Tests for filtering wines by the current month, quarter or year."""

    NOW = datetime(2024, 8, 20, 12, 0, tzinfo=timezone.utc)

    def wines(self) -> list[dict]:
        return [
            {"name": "this month", "timestamp": datetime(2024, 8, 2, tzinfo=timezone.utc)},
            {"name": "last month", "timestamp": datetime(2024, 7, 10, tzinfo=timezone.utc)},
            {"name": "last quarter", "timestamp": datetime(2024, 5, 10, tzinfo=timezone.utc)},
            {"name": "last year", "timestamp": datetime(2023, 12, 31, tzinfo=timezone.utc)},
            {"name": "undated", "timestamp": None},
        ]

    def names(self, time_range: str) -> list[str]:
        return [w["name"] for w in filter_wines_by_time_range(self.wines(), time_range, now=self.NOW)]

    def test_all_keeps_everything(self) -> None:
        assert len(self.names("all")) == 5

    def test_month(self) -> None:
        assert self.names("month") == ["this month"]

    def test_quarter(self) -> None:
        assert self.names("quarter") == ["this month", "last month"]

    def test_year(self) -> None:
        assert self.names("year") == ["this month", "last month", "last quarter"]

    def test_later_dates_in_the_current_period(self) -> None:
        wines = [
            {"name": "later this month", "timestamp": datetime(2024, 8, 25, tzinfo=timezone.utc)},
            {"name": "next month", "timestamp": datetime(2024, 9, 3, tzinfo=timezone.utc)},
            {"name": "next year", "timestamp": datetime(2025, 1, 2, tzinfo=timezone.utc)},
        ]

        def names(time_range: str) -> list[str]:
            return [w["name"] for w in filter_wines_by_time_range(wines, time_range, now=self.NOW)]

        assert names("month") == ["later this month"]
        assert names("year") == ["later this month", "next month"]
        # Quarters have no upper bound
        assert names("quarter") == ["later this month", "next month", "next year"]

    def test_december_month_range(self) -> None:
        now = datetime(2024, 12, 10, tzinfo=timezone.utc)
        wines = [
            {"timestamp": datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc)},
            {"timestamp": datetime(2025, 1, 1, tzinfo=timezone.utc)},
        ]
        assert filter_wines_by_time_range(wines, "month", now=now) == wines[:1]

    def test_unknown_range_raises(self) -> None:
        with pytest.raises(ValueError):
            filter_wines_by_time_range([], "decade", now=self.NOW)


class TestAnalyticsEndpoints:
    """Tests for /api/analytics."""

    @pytest.mark.asyncio
    async def test_empty_collection(self, client):
        response = await client.get("/api/analytics")
        assert response.status_code == 200
        data = response.json()
        assert data["total_wines"] == 0
        assert data["rating_distribution"] == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}

    @pytest.mark.asyncio
    async def test_summary_over_logged_wines(self, client, other_user_headers):
        for name, region, rating in [
            ("Château Margaux", "Bordeaux", 5),
            ("Pontet-Canet", "Bordeaux", 4),
            ("Barolo Riserva", "Piedmont", 3),
        ]:
            await client.post("/api/wines", json={"name": name, "region": region, "rating": rating})
        await client.post(
            "/api/wines", json={"name": "Someone else's", "region": "Mosel", "rating": 1},
            headers=other_user_headers,
        )

        data = (await client.get("/api/analytics")).json()

        assert data["total_wines"] == 3
        assert data["average_rating"] == 4.0
        assert data["favorite_regions"][0] == {"region": "Bordeaux", "count": 2, "average_rating": 4.5}
        assert data["rating_distribution"]["1"] == 0

    @pytest.mark.asyncio
    async def test_range_filter(self, client):
        await client.post("/api/wines", json={"name": "Last night", "rating": 4})
        await client.post(
            "/api/wines", json={"name": "Years ago", "rating": 2, "timestamp": "2015-05-01T12:00:00Z"},
        )

        month = (await client.get("/api/analytics", params={"range": "month"})).json()
        assert month["total_wines"] == 1
        assert month["average_rating"] == 4.0

        everything = (await client.get("/api/analytics", params={"range": "all"})).json()
        assert everything["total_wines"] == 2

    @pytest.mark.asyncio
    async def test_invalid_range(self, client):
        response = await client.get("/api/analytics", params={"range": "decade"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_insights(self, client):
        await client.post(
            "/api/wines",
            json={"name": "Rubicon", "region": "Stellenbosch", "grape": "Cabernet Sauvignon", "rating": 5},
        )

        response = await client.get("/api/analytics/insights")
        assert response.status_code == 200
        data = response.json()

        assert data["preferences"]["regions"] == ["Stellenbosch"]
        assert data["preferences"]["total_wines"] == 1
        titles = [insight["title"] for insight in data["insights"]]
        assert titles[:2] == ["High Standards", "Regional Explorer"]

    @pytest.mark.asyncio
    async def test_requires_auth(self, unauthenticated_client):
        response = await unauthenticated_client.get("/api/analytics/insights")
        assert response.status_code == 401
