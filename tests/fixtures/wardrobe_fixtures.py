"""
Builders and canned wardrobes for analytics tests.
All dates are relative to NOW so expectations stay stable.
"""
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from wardrobe_cpw.services.analytics.types import WardrobeItem, WardrobeSnapshot, WearLog

# A Sunday, mid-month, mid-day.
NOW = datetime(2025, 6, 15, 12, 0)
TODAY = NOW.date()


def days_ago(n: int, hour: int = 9) -> datetime:
    return datetime.combine(TODAY - timedelta(days=n), datetime.min.time()).replace(hour=hour)


def make_item(
    price: float = 100.0,
    wears: int = 0,
    category: Optional[str] = "Tops",
    name: Optional[str] = "Item",
    purchased: Optional[date] = None,
    archived: bool = False,
    created_at: Optional[datetime] = None,
    brand: Optional[str] = None,
) -> WardrobeItem:
    return WardrobeItem(
        name=name,
        category=category,
        brand=brand,
        purchase_price=price,
        purchase_date=purchased if purchased is not None else TODAY - timedelta(days=90),
        wear_count=wears,
        archived=archived,
        created_at=created_at or NOW,
    )


def logs_for(item: WardrobeItem, when: Iterable[datetime]) -> List[WearLog]:
    """Wear logs for ``item``; also sets its wear_count to match."""
    logs = [WearLog(item_id=item.id, date=w) for w in when]
    item.wear_count = len(logs)
    return logs


def snapshot_of(
    items: Iterable[WardrobeItem],
    logs: Iterable[WearLog] = (),
    now: datetime = NOW,
) -> WardrobeSnapshot:
    items = list(items)
    return WardrobeSnapshot(
        active_items=[i for i in items if not i.archived],
        all_items=items,
        wear_logs=sorted(logs, key=lambda log: log.date),
        now=now,
    )


def empty_wardrobe_fixture() -> Dict[str, Any]:
    """Nothing catalogued yet."""
    return {
        "items": [],
        "logs": [],
        "expected": {
            "average_cpw": 0.0,
            "total_wardrobe_value": 0.0,
            "total_wears": 0,
            "utilization_rate": 0.0,
            "wardrobe_efficiency_score": 0.0,
            "current_streak": 0,
            "best_streak": 0,
        },
    }


def mixed_wardrobe_fixture() -> Dict[str, Any]:
    """Two worn items, one idle item, one archived item."""
    jacket = make_item(price=120.0, category="Outerwear", name="Jacket")
    jeans = make_item(price=60.0, category="Bottoms", name="Jeans")
    scarf = make_item(price=40.0, category="Accessories", name="Scarf", purchased=TODAY - timedelta(days=60))
    old = make_item(price=300.0, wears=10, category="Shoes", name="Old Boots", archived=True)

    logs = logs_for(jacket, [days_ago(n) for n in (0, 1, 5, 12)])  # CPW 30
    logs += logs_for(jeans, [days_ago(n, hour=18) for n in (0, 2, 3)])  # CPW 20
    return {
        "items": [jacket, jeans, scarf, old],
        "logs": logs,
        "expected": {
            "average_cpw": 25.0,
            "total_wardrobe_value": 220.0,
            "total_wears": 7,
            "idle_value": 40.0,
            "utilization_rate": 2 / 3 * 100,
        },
    }


ALL_FIXTURES = {
    "empty": empty_wardrobe_fixture,
    "mixed": mixed_wardrobe_fixture,
}
