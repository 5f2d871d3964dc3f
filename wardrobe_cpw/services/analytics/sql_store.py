import logging
import uuid
from datetime import date, datetime, time, timedelta
from typing import Callable, List, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wardrobe_cpw.core.db import SessionLocal
from wardrobe_cpw.models import models
from .dates import get_timezone, local_date
from .types import SustainabilityGoal, WardrobeItem, WearLog

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _item_from_row(row: models.WardrobeItem) -> WardrobeItem:
    return WardrobeItem(
        id=row.id,
        name=row.name,
        category=row.category,
        brand=row.brand,
        purchase_price=row.purchase_price or 0.0,
        purchase_date=row.purchase_date,
        photo_ref=row.photo_ref,
        wear_count=row.wear_count or 0,
        archived=bool(row.archived),
        created_at=row.created_at,
    )


def _log_from_row(row: models.WearLog) -> WearLog:
    return WearLog(id=row.id, item_id=row.item_id, date=row.date)


def _goal_from_row(row: models.SustainabilityGoal) -> SustainabilityGoal:
    return SustainabilityGoal(
        id=row.id,
        title=row.title,
        goal_type=row.goal_type,
        target_value=row.target_value,
        linked_item_id=row.linked_item_id,
        created_at=row.created_at,
    )


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(local_date(day), time.min, tzinfo=get_timezone())
    return start, start + timedelta(days=1)


class SqlWardrobeStore:
    """Read-only ``WardrobeStore`` over the SQLAlchemy models.

    A failing query is logged and answered with an empty result; the
    analytics layer treats that like an empty wardrobe.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    def _run(self, what: str, query: Callable[[Session], T], empty: T) -> T:
        try:
            with self._session_factory() as session:
                return query(session)
        except SQLAlchemyError as e:
            logger.warning("store:sql %s failed reason=%s", what, e)
            return empty

    def fetch_active_items(self) -> List[WardrobeItem]:
        stmt = (
            select(models.WardrobeItem)
            .where(models.WardrobeItem.archived.is_(False))
            .order_by(models.WardrobeItem.created_at.desc())
        )
        return self._run(
            "fetch_active_items",
            lambda s: [_item_from_row(r) for r in s.scalars(stmt).all()],
            [],
        )

    def fetch_all_items(self) -> List[WardrobeItem]:
        stmt = select(models.WardrobeItem).order_by(models.WardrobeItem.created_at.desc())
        return self._run(
            "fetch_all_items",
            lambda s: [_item_from_row(r) for r in s.scalars(stmt).all()],
            [],
        )

    def fetch_all_wear_logs(self) -> List[WearLog]:
        stmt = select(models.WearLog).order_by(models.WearLog.date.asc())
        return self._run(
            "fetch_all_wear_logs",
            lambda s: [_log_from_row(r) for r in s.scalars(stmt).all()],
            [],
        )

    def fetch_wear_logs_for_date(self, day: date) -> List[WearLog]:
        start, end = _day_bounds(day)
        stmt = (
            select(models.WearLog)
            .where(models.WearLog.date >= start, models.WearLog.date < end)
            .order_by(models.WearLog.date.asc())
        )
        return self._run(
            "fetch_wear_logs_for_date",
            lambda s: [_log_from_row(r) for r in s.scalars(stmt).all()],
            [],
        )

    def fetch_wear_logs_for_item(self, item_id: uuid.UUID) -> List[WearLog]:
        stmt = (
            select(models.WearLog)
            .where(models.WearLog.item_id == item_id)
            .order_by(models.WearLog.date.asc())
        )
        return self._run(
            "fetch_wear_logs_for_item",
            lambda s: [_log_from_row(r) for r in s.scalars(stmt).all()],
            [],
        )

    def count_wear_logs_for_date(self, day: date) -> int:
        start, end = _day_bounds(day)
        stmt = (
            select(func.count())
            .select_from(models.WearLog)
            .where(models.WearLog.date >= start, models.WearLog.date < end)
        )
        return self._run("count_wear_logs_for_date", lambda s: s.scalar(stmt) or 0, 0)

    def fetch_goals(self) -> List[SustainabilityGoal]:
        stmt = select(models.SustainabilityGoal).order_by(models.SustainabilityGoal.created_at.desc())
        return self._run(
            "fetch_goals",
            lambda s: [_goal_from_row(r) for r in s.scalars(stmt).all()],
            [],
        )
