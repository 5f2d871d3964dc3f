import math
from datetime import datetime
from typing import Iterable, List, Optional

from wardrobe_cpw.core.config import settings
from .dates import days_between, local_date, to_local
from .types import CPWPoint, ItemMetrics, WardrobeItem, WearLog

# Wear count at which the efficiency ramp saturates.
SATURATION_WEARS = 30

GRADE_BANDS = [(80.0, "A+"), (60.0, "A"), (40.0, "B"), (20.0, "C")]


def cost_per_wear(item: WardrobeItem) -> float:
    if item.wear_count <= 0:
        return item.purchase_price
    return item.purchase_price / item.wear_count


def efficiency_score(item: WardrobeItem) -> float:
    """0-100 ramp on wear count, independent of price."""
    if item.wear_count <= 0 or item.purchase_price <= 0:
        return 0.0
    return min(item.wear_count / SATURATION_WEARS, 1.0) * 100.0


def efficiency_grade(score: float) -> str:
    for floor, grade in GRADE_BANDS:
        if score >= floor:
            return grade
    return "D"


def is_efficient(item: WardrobeItem) -> bool:
    return item.wear_count > 0 and efficiency_score(item) >= settings.EFFICIENT_SCORE_THRESHOLD


def efficiency_message(item: WardrobeItem) -> str:
    if item.wear_count == 0:
        return "Wear this item to start building its efficiency score."
    score = efficiency_score(item)
    if score >= 80:
        return "Incredible value, one of your best investments!"
    if score >= 60:
        return "Great efficiency. Keep wearing it!"
    if score >= 40:
        return "Building momentum. More wears will lower CPW."
    if score >= 20:
        return "Getting there. A few more wears and it'll be efficient."
    return "This item needs more love. Wear it more often!"


def days_since_purchase(item: WardrobeItem, now: datetime) -> int:
    if item.purchase_date is None:
        return 0
    return max(days_between(item.purchase_date, now), 0)


def wears_per_month(item: WardrobeItem, now: datetime) -> float:
    months = max(days_since_purchase(item, now) / 30.0, 1.0)
    return item.wear_count / months


def wears_per_week(item: WardrobeItem, now: datetime) -> float:
    weeks = max(days_since_purchase(item, now) / 7.0, 1.0)
    return item.wear_count / weeks


def sorted_logs(logs: Iterable[WearLog]) -> List[WearLog]:
    return sorted(logs, key=lambda log: to_local(log.date))


def cpw_over_time(item: WardrobeItem, logs: Iterable[WearLog]) -> List[CPWPoint]:
    """Purchase point followed by the running CPW after each wear."""
    points: List[CPWPoint] = []
    if item.purchase_date is not None:
        points.append(CPWPoint(date=local_date(item.purchase_date), cpw=item.purchase_price))
    for wear_number, log in enumerate(sorted_logs(logs), start=1):
        points.append(CPWPoint(date=local_date(log.date), cpw=item.purchase_price / wear_number))
    return points


def days_since_last_worn(logs: Iterable[WearLog], now: datetime) -> Optional[int]:
    logs = list(logs)
    if not logs:
        return None
    last = max(to_local(log.date) for log in logs)
    return days_between(last, now)


def projected_yearly_wears(item: WardrobeItem, now: datetime) -> int:
    return math.floor(wears_per_month(item, now) * 12)


def projected_yearly_cpw(item: WardrobeItem, now: datetime) -> float:
    projected = item.wear_count + wears_per_month(item, now) * 12
    if projected <= 0:
        return item.purchase_price
    return item.purchase_price / projected


def item_metrics(item: WardrobeItem, logs: Iterable[WearLog], now: datetime) -> ItemMetrics:
    logs = list(logs)
    score = efficiency_score(item)
    return ItemMetrics(
        item_id=item.id,
        cost_per_wear=cost_per_wear(item),
        efficiency_score=score,
        grade=efficiency_grade(score),
        is_efficient=is_efficient(item),
        efficiency_message=efficiency_message(item),
        days_since_purchase=days_since_purchase(item, now),
        wears_per_month=wears_per_month(item, now),
        wears_per_week=wears_per_week(item, now),
        days_since_last_worn=days_since_last_worn(logs, now),
        projected_yearly_wears=projected_yearly_wears(item, now),
        projected_yearly_cpw=projected_yearly_cpw(item, now),
        cpw_over_time=cpw_over_time(item, logs),
    )
