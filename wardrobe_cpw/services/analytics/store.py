import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Protocol

from wardrobe_cpw.schemas.goals import GoalCreate
from wardrobe_cpw.schemas.items import ItemCreate, ItemUpdate
from .dates import local_date, now_local, to_local
from .types import SustainabilityGoal, WardrobeItem, WearLog

logger = logging.getLogger(__name__)


class WardrobeStore(Protocol):
    """Query surface the analytics engine reads from.

    Implementations return empty collections instead of raising when the
    backing store is unavailable.
    """

    def fetch_active_items(self) -> List[WardrobeItem]: ...

    def fetch_all_items(self) -> List[WardrobeItem]: ...

    def fetch_all_wear_logs(self) -> List[WearLog]: ...

    def fetch_wear_logs_for_date(self, day: date) -> List[WearLog]: ...

    def fetch_wear_logs_for_item(self, item_id: uuid.UUID) -> List[WearLog]: ...

    def count_wear_logs_for_date(self, day: date) -> int: ...

    def fetch_goals(self) -> List[SustainabilityGoal]: ...


class InMemoryWardrobeStore:
    """Process-local store, also carrying the app's write helpers.

    Fetches hand out copies so a caller's snapshot does not change under it
    when the store is written to afterwards.
    """

    def __init__(
        self,
        items: Optional[Iterable[WardrobeItem]] = None,
        wear_logs: Optional[Iterable[WearLog]] = None,
        goals: Optional[Iterable[SustainabilityGoal]] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._clock = clock
        self._items: List[WardrobeItem] = list(items or [])
        self._logs: List[WearLog] = list(wear_logs or [])
        self._goals: List[SustainabilityGoal] = list(goals or [])

    # Queries

    def _newest_first(self, items: Iterable[WardrobeItem]) -> List[WardrobeItem]:
        indexed = list(enumerate(items))
        indexed.sort(
            key=lambda pair: (to_local(pair[1].created_at) if pair[1].created_at else datetime.min, pair[0]),
            reverse=True,
        )
        return [replace(item) for _, item in indexed]

    def fetch_active_items(self) -> List[WardrobeItem]:
        return self._newest_first(i for i in self._items if not i.archived)

    def fetch_all_items(self) -> List[WardrobeItem]:
        return self._newest_first(self._items)

    def fetch_all_wear_logs(self) -> List[WearLog]:
        return [replace(log) for log in sorted(self._logs, key=lambda log: to_local(log.date))]

    def fetch_wear_logs_for_date(self, day: date) -> List[WearLog]:
        target = local_date(day)
        return [log for log in self.fetch_all_wear_logs() if local_date(log.date) == target]

    def fetch_wear_logs_for_item(self, item_id: uuid.UUID) -> List[WearLog]:
        return [log for log in self.fetch_all_wear_logs() if log.item_id == item_id]

    def count_wear_logs_for_date(self, day: date) -> int:
        target = local_date(day)
        return sum(1 for log in self._logs if local_date(log.date) == target)

    def fetch_goals(self) -> List[SustainabilityGoal]:
        return [replace(goal) for goal in self._goals]

    # Items

    def _get_item(self, item_id: uuid.UUID) -> WardrobeItem:
        for item in self._items:
            if item.id == item_id:
                return item
        raise ValueError("item_not_found")

    def add_item(self, data: ItemCreate) -> WardrobeItem:
        item = WardrobeItem(
            name=data.name,
            category=data.category,
            brand=data.brand,
            purchase_price=data.purchase_price,
            purchase_date=data.purchase_date,
            photo_ref=data.photo_ref,
            created_at=self._clock(),
        )
        self._items.append(item)
        return replace(item)

    def update_item(self, item_id: uuid.UUID, data: ItemUpdate) -> WardrobeItem:
        item = self._get_item(item_id)
        item.name = data.name
        item.category = data.category
        item.brand = data.brand
        item.purchase_price = data.purchase_price
        item.purchase_date = data.purchase_date
        item.photo_ref = data.photo_ref
        return replace(item)

    def archive_item(self, item_id: uuid.UUID) -> None:
        self._get_item(item_id).archived = True

    def unarchive_item(self, item_id: uuid.UUID) -> None:
        self._get_item(item_id).archived = False

    def delete_item(self, item_id: uuid.UUID) -> None:
        """Hard delete; the item's wear logs go with it, goals are left dangling."""
        item = self._get_item(item_id)
        self._items.remove(item)
        before = len(self._logs)
        self._logs = [log for log in self._logs if log.item_id != item_id]
        logger.info("store:memory delete_item item_id=%s logs_removed=%s", item_id, before - len(self._logs))

    # Wear logging

    def log_wear(self, item_id: uuid.UUID, when: Optional[datetime] = None) -> WearLog:
        item = self._get_item(item_id)
        log = WearLog(item_id=item_id, date=when or self._clock())
        self._logs.append(log)
        item.wear_count += 1
        return replace(log)

    def has_logged_wear_today(self, item_id: uuid.UUID) -> bool:
        today = local_date(self._clock())
        return any(
            log.item_id == item_id and local_date(log.date) == today for log in self._logs
        )

    # Goals

    def add_goal(self, data: GoalCreate) -> SustainabilityGoal:
        goal = SustainabilityGoal(
            title=data.title,
            goal_type=data.goal_type,
            target_value=data.target_value,
            linked_item_id=data.linked_item_id,
            created_at=self._clock(),
        )
        self._goals.append(goal)
        return replace(goal)

    def delete_goal(self, goal_id: uuid.UUID) -> None:
        for goal in self._goals:
            if goal.id == goal_id:
                self._goals.remove(goal)
                return
        raise ValueError("goal_not_found")

    def clear_all_data(self) -> None:
        logger.info(
            "store:memory clear_all items=%s logs=%s goals=%s",
            len(self._items), len(self._logs), len(self._goals),
        )
        self._items.clear()
        self._logs.clear()
        self._goals.clear()
