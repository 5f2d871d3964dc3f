from datetime import timedelta

import pytest

from wardrobe_cpw.services.analytics import metrics
from wardrobe_cpw.services.analytics.types import WearLog

from fixtures.wardrobe_fixtures import NOW, TODAY, days_ago, logs_for, make_item


class TestCostPerWear:
    """Price divided by wears, with unworn items costing full price."""

    @pytest.mark.parametrize("price", [0.0, 0.99, 100.0, 2500.0])
    def test_unworn_item_costs_full_price(self, price):
        assert metrics.cost_per_wear(make_item(price=price, wears=0)) == price

    def test_worn_item_divides_price(self):
        assert metrics.cost_per_wear(make_item(price=90.0, wears=30)) == pytest.approx(3.0)

    def test_unworn_scenario(self):
        item = make_item(price=100.0, wears=0)
        score = metrics.efficiency_score(item)
        assert metrics.cost_per_wear(item) == pytest.approx(100.0)
        assert score == 0
        assert metrics.efficiency_grade(score) == "D"

    def test_thirty_wears_scenario(self):
        item = make_item(price=90.0, wears=30)
        score = metrics.efficiency_score(item)
        assert metrics.cost_per_wear(item) == pytest.approx(3.0)
        assert score == pytest.approx(100.0)
        assert metrics.efficiency_grade(score) == "A+"


class TestEfficiency:
    """Wear-count ramp, grade bands and item messages."""

    def test_monotonic_then_flat(self):
        scores = [metrics.efficiency_score(make_item(price=50.0, wears=w)) for w in range(0, 45)]
        assert all(a <= b for a, b in zip(scores, scores[1:]))
        assert all(s == 100.0 for s in scores[30:])
        assert scores[15] == pytest.approx(50.0)

    def test_free_item_scores_zero(self):
        assert metrics.efficiency_score(make_item(price=0.0, wears=12)) == 0.0

    @pytest.mark.parametrize("score,grade", [
        (100, "A+"), (80, "A+"), (79.9, "A"), (60, "A"),
        (59, "B"), (40, "B"), (39.99, "C"), (20, "C"), (19, "D"), (0, "D"),
    ])
    def test_grade_bands(self, score, grade):
        assert metrics.efficiency_grade(score) == grade

    def test_is_efficient_threshold(self):
        assert not metrics.is_efficient(make_item(wears=0))
        assert not metrics.is_efficient(make_item(wears=11))  # 36.7
        assert metrics.is_efficient(make_item(wears=12))  # 40

    def test_messages_follow_score(self):
        assert "start building" in metrics.efficiency_message(make_item(wears=0))
        assert "best investments" in metrics.efficiency_message(make_item(wears=30))
        assert "more love" in metrics.efficiency_message(make_item(wears=1))


class TestOwnershipRates:

    def test_days_since_purchase(self):
        assert metrics.days_since_purchase(make_item(purchased=TODAY - timedelta(days=90)), NOW) == 90

    def test_future_purchase_floors_at_zero(self):
        item = make_item(purchased=TODAY + timedelta(days=5))
        assert metrics.days_since_purchase(item, NOW) == 0

    def test_missing_purchase_date(self):
        item = make_item()
        item.purchase_date = None
        assert metrics.days_since_purchase(item, NOW) == 0

    def test_rates_for_item_bought_today_use_one_period(self):
        item = make_item(wears=5, purchased=TODAY)
        assert metrics.wears_per_month(item, NOW) == pytest.approx(5.0)
        assert metrics.wears_per_week(item, NOW) == pytest.approx(5.0)

    def test_rates_scale_with_ownership(self):
        item = make_item(wears=10, purchased=TODAY - timedelta(days=60))
        assert metrics.wears_per_month(item, NOW) == pytest.approx(5.0)
        assert metrics.wears_per_week(item, NOW) == pytest.approx(10 / (60 / 7))


class TestCpwOverTime:
    """Running CPW series after each logged wear."""

    def test_points_start_at_price_and_fall(self):
        item = make_item(price=100.0)
        logs = logs_for(item, [days_ago(3), days_ago(1), days_ago(2)])
        points = metrics.cpw_over_time(item, logs)

        assert len(points) == item.wear_count + 1
        assert points[0].date == item.purchase_date
        assert points[0].cpw == 100.0
        assert [p.cpw for p in points[1:]] == pytest.approx([100.0, 50.0, 100.0 / 3])
        assert [p.date for p in points[1:]] == [
            (NOW - timedelta(days=3)).date(),
            (NOW - timedelta(days=2)).date(),
            (NOW - timedelta(days=1)).date(),
        ]
        cpws = [p.cpw for p in points]
        assert all(a >= b for a, b in zip(cpws, cpws[1:]))

    def test_never_worn_has_only_purchase_point(self):
        item = make_item(price=40.0)
        points = metrics.cpw_over_time(item, [])
        assert len(points) == 1
        assert points[0].cpw == 40.0

    def test_without_purchase_date_skips_first_point(self):
        item = make_item(price=40.0)
        item.purchase_date = None
        logs = logs_for(item, [days_ago(1), days_ago(0)])
        assert [p.cpw for p in metrics.cpw_over_time(item, logs)] == [40.0, 20.0]

    def test_restartable(self):
        item = make_item(price=10.0)
        logs = logs_for(item, [days_ago(4), days_ago(2)])
        assert metrics.cpw_over_time(item, logs) == metrics.cpw_over_time(item, logs)


class TestLastWornAndProjection:

    def test_days_since_last_worn(self):
        item = make_item()
        logs = logs_for(item, [days_ago(5), days_ago(2)])
        assert metrics.days_since_last_worn(logs, NOW) == 2

    def test_days_since_last_worn_never_worn(self):
        assert metrics.days_since_last_worn([], NOW) is None

    def test_projection(self):
        item = make_item(price=120.0, wears=10, purchased=TODAY - timedelta(days=60))
        assert metrics.projected_yearly_wears(item, NOW) == 60
        assert metrics.projected_yearly_cpw(item, NOW) == pytest.approx(120.0 / 70)

    def test_projection_without_wears_falls_back_to_price(self):
        item = make_item(price=75.0, wears=0, purchased=TODAY)
        assert metrics.projected_yearly_wears(item, NOW) == 0
        assert metrics.projected_yearly_cpw(item, NOW) == 75.0

    def test_item_metrics_bundle(self):
        item = make_item(price=90.0, purchased=TODAY - timedelta(days=30))
        logs = [WearLog(item_id=item.id, date=days_ago(n)) for n in range(30)]
        item.wear_count = len(logs)

        m = metrics.item_metrics(item, logs, NOW)
        assert m.item_id == item.id
        assert m.cost_per_wear == pytest.approx(3.0)
        assert m.grade == "A+"
        assert m.is_efficient
        assert m.days_since_last_worn == 0
        assert "best investments" in m.efficiency_message
        assert len(m.cpw_over_time) == 31
