"""
SqlWardrobeStore against an in-memory SQLite database.
"""
import logging
from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wardrobe_cpw.core.db import Base
from wardrobe_cpw.models import models
from wardrobe_cpw.services.analytics import AnalyticsEngine, SqlWardrobeStore

from fixtures.wardrobe_fixtures import NOW, TODAY, days_ago


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def session_factory():
    engine = _memory_engine()
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def seeded(session_factory):
    with session_factory() as session:
        coat = models.WardrobeItem(
            name="Coat", category="Outerwear", purchase_price=200.0,
            purchase_date=TODAY - timedelta(days=100), wear_count=2,
            created_at=NOW - timedelta(days=100),
        )
        tee = models.WardrobeItem(
            name="Tee", category="Tops", purchase_price=20.0,
            purchase_date=TODAY - timedelta(days=10), wear_count=1,
            created_at=NOW - timedelta(days=10),
        )
        old = models.WardrobeItem(
            name="Old", category="Shoes", purchase_price=80.0, archived=True,
            created_at=NOW - timedelta(days=300),
        )
        session.add_all([coat, tee, old])
        session.flush()
        session.add_all([
            models.WearLog(item_id=coat.id, date=days_ago(3)),
            models.WearLog(item_id=coat.id, date=days_ago(0)),
            models.WearLog(item_id=tee.id, date=days_ago(0, hour=19)),
        ])
        session.add(models.SustainabilityGoal(
            title="Lower CPW", goal_type="AverageCPW", target_value=50.0, created_at=NOW,
        ))
        session.commit()
        ids = {"coat": coat.id, "tee": tee.id, "old": old.id}
    return SqlWardrobeStore(session_factory), ids


class TestSqlFetches:
    """Row mapping, ordering and filters."""

    def test_items(self, seeded):
        store, ids = seeded
        assert [i.id for i in store.fetch_all_items()] == [ids["tee"], ids["coat"], ids["old"]]
        assert [i.name for i in store.fetch_active_items()] == ["Tee", "Coat"]

    def test_logs(self, seeded):
        store, ids = seeded
        logs = store.fetch_all_wear_logs()
        assert len(logs) == 3
        assert logs[0].item_id == ids["coat"]
        assert len(store.fetch_wear_logs_for_item(ids["coat"])) == 2

    def test_date_lookups(self, seeded):
        store, _ = seeded
        assert store.count_wear_logs_for_date(TODAY) == 2
        assert len(store.fetch_wear_logs_for_date(TODAY)) == 2
        assert store.count_wear_logs_for_date(TODAY - timedelta(days=1)) == 0

    def test_goals(self, seeded):
        store, _ = seeded
        goals = store.fetch_goals()
        assert [(g.title, g.goal_type, g.target_value) for g in goals] == [("Lower CPW", "AverageCPW", 50.0)]

    def test_engine_over_sql(self, seeded):
        store, _ = seeded
        engine = AnalyticsEngine(store, clock=lambda: NOW)
        assert engine.average_cpw == pytest.approx((100.0 + 20.0) / 2)
        assert engine.total_wears == 3
        assert engine.current_streak == 1
        assert engine.categories_worn_on_date(TODAY) == ["Outerwear", "Tops"]
        assert engine.goals()[0].percent == pytest.approx(50.0 / 60.0)


class TestSqlFailures:
    """A broken database reads as an empty wardrobe."""

    def test_missing_tables_return_empty(self, caplog):
        store = SqlWardrobeStore(sessionmaker(bind=_memory_engine()))
        with caplog.at_level(logging.WARNING):
            assert store.fetch_all_items() == []
            assert store.fetch_all_wear_logs() == []
            assert store.count_wear_logs_for_date(TODAY) == 0
            assert store.fetch_goals() == []
        assert "fetch_all_items failed" in caplog.text

    def test_engine_survives(self):
        store = SqlWardrobeStore(sessionmaker(bind=_memory_engine()))
        summary = AnalyticsEngine(store, clock=lambda: NOW).summary()
        assert summary.items_count == 0
        assert summary.average_cpw == 0.0
