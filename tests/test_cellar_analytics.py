"""Tests for cellar inventory statistics and drink-or-keep advice."""

from datetime import datetime, timedelta, timezone

import pytest

from winejournal.services.cellar_analytics import (
    calculate_cellar_analytics,
    classify_wine,
    generate_recommendations,
)

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def bought(years_ago: float) -> datetime:
    return NOW - timedelta(days=365 * years_ago)


class TestClassifyWine:
    """Tests for aging / ready / overdue classification."""

    @pytest.mark.parametrize("age,potential,expected", [
        (1, 5, "aging"),
        (5, 5, "ready"),
        (6.5, 5, "ready"),
        (7.5, 5, "overdue"),
        (0, 0, "ready"),
    ])
    def test_classification(self, age, potential, expected):
        wine = {"purchase_date": bought(age), "aging_potential": potential}
        assert classify_wine(wine, NOW) == expected

    def test_unknown_purchase_date_counts_as_new(self):
        assert classify_wine({"aging_potential": 3}, NOW) == "aging"


class TestCellarAnalytics:
    """Tests for calculate_cellar_analytics."""

    def test_empty_cellar(self):
        analytics = calculate_cellar_analytics([], now=NOW)
        assert analytics.total_bottles == 0
        assert analytics.total_value == 0
        assert analytics.by_region == {}
        assert analytics.price_ranges == {}

    def test_totals_and_groups(self):
        wines = [
            {"quantity": 6, "purchase_price": 30, "region": "Stellenbosch", "grape": "Pinotage",
             "purchase_date": bought(1), "aging_potential": 5},
            {"quantity": 2, "purchase_price": 150, "region": "Stellenbosch", "grape": "Cabernet Sauvignon",
             "purchase_date": bought(3), "aging_potential": 2},
            {"quantity": 1, "purchase_price": 250, "region": None, "grape": "Syrah",
             "purchase_date": bought(10), "aging_potential": 4},
        ]
        analytics = calculate_cellar_analytics(wines, now=NOW)

        assert analytics.total_bottles == 9
        assert analytics.total_value == pytest.approx(6 * 30 + 2 * 150 + 250)
        assert analytics.average_age == pytest.approx(14 / 3)
        assert analytics.by_region["Stellenbosch"].bottles == 8
        assert analytics.by_region["Unknown"].value == pytest.approx(250)
        assert analytics.by_grape["Pinotage"].bottles == 6
        assert (analytics.aging_wines, analytics.ready_to_drink, analytics.overdue) == (1, 1, 1)

    def test_price_ranges_are_half_open(self):
        wines = [
            {"quantity": 1, "purchase_price": 49.99},
            {"quantity": 2, "purchase_price": 50},
            {"quantity": 1, "purchase_price": 200},
        ]
        ranges = calculate_cellar_analytics(wines, now=NOW).price_ranges

        assert list(ranges) == ["Under $50", "$50 - $100", "$100 - $200", "Over $200"]
        assert ranges["Under $50"].bottles == 1
        assert ranges["$50 - $100"].bottles == 2
        assert ranges["$100 - $200"].bottles == 0
        assert ranges["Over $200"].value == pytest.approx(200)


class TestRecommendations:
    """Tests for generate_recommendations."""

    def test_empty(self):
        assert generate_recommendations([], now=NOW) == []

    def test_all_overdue_then_capped_ready_and_aging(self):
        wines = (
            [{"name": f"Aging {i}", "purchase_date": bought(0), "aging_potential": 5} for i in range(3)]
            + [{"name": f"Ready {i}", "purchase_date": bought(5), "aging_potential": 5} for i in range(4)]
            + [{"name": f"Old {i}", "purchase_date": bought(20), "aging_potential": 5} for i in range(4)]
        )
        recs = generate_recommendations(wines, now=NOW)

        assert [r.wine_name for r in recs] == [
            "Old 0", "Old 1", "Old 2", "Old 3",
            "Ready 0", "Ready 1", "Ready 2",
            "Aging 0", "Aging 1",
        ]
        assert {r.priority for r in recs[:4]} == {"high"}
        assert recs[4].type == "drink"
        assert recs[4].priority == "medium"
        assert recs[-1].type == "aging"
        assert recs[-1].priority == "low"

    def test_message_names_the_wine(self):
        recs = generate_recommendations(
            [{"id": "abc", "name": "Kanonkop Paul Sauer", "purchase_date": bought(20)}],
            now=NOW,
        )
        assert recs[0].wine_id == "abc"
        assert recs[0].message == "Kanonkop Paul Sauer is overdue for drinking"
