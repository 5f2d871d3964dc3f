"""
Cross-item aggregates over a ``WardrobeSnapshot``.

Every function here is pure: same snapshot in, same value out. Simple
totals trust each item's denormalised ``wear_count``; anything bucketed by
day, week or month recounts from the raw wear logs.
"""
import calendar
from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from wardrobe_cpw.core.config import settings
from .dates import add_months, iter_days, local_date, start_of_day, to_local
from .metrics import cost_per_wear, days_since_purchase, efficiency_score
from .types import (
    CategoryCount,
    CategoryCPW,
    DailyWearCount,
    MonthlyCPW,
    MonthlySpending,
    MonthSummary,
    WardrobeItem,
    WardrobeSnapshot,
    WearLog,
    WeekdayActivity,
    WeeklyWearCount,
)

DAILY_WINDOW_DAYS = 30
TREND_WEEKS = 12
TREND_MONTHS = 6


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _daily_counts(logs: Iterable[WearLog]) -> Counter:
    return Counter(local_date(log.date) for log in logs)


# Core metrics

def average_cpw(snapshot: WardrobeSnapshot) -> float:
    return _mean([cost_per_wear(item) for item in snapshot.worn_items])


def total_wardrobe_value(snapshot: WardrobeSnapshot) -> float:
    return sum(item.purchase_price for item in snapshot.active_items)


def total_wears(snapshot: WardrobeSnapshot) -> int:
    return sum(item.wear_count for item in snapshot.active_items)


def average_item_price(snapshot: WardrobeSnapshot) -> float:
    if not snapshot.active_items:
        return 0.0
    return total_wardrobe_value(snapshot) / len(snapshot.active_items)


def unused_items(snapshot: WardrobeSnapshot) -> List[WardrobeItem]:
    return [
        item for item in snapshot.active_items
        if item.wear_count == 0
        and days_since_purchase(item, snapshot.now) > settings.UNUSED_ITEM_DAYS
    ]


def top_efficient(snapshot: WardrobeSnapshot, limit: Optional[int] = None) -> List[WardrobeItem]:
    limit = settings.TOP_EFFICIENT_LIMIT if limit is None else limit
    return sorted(snapshot.worn_items, key=cost_per_wear)[:limit]


def worst_investments(snapshot: WardrobeSnapshot, limit: Optional[int] = None) -> List[WardrobeItem]:
    limit = settings.WORST_INVESTMENTS_LIMIT if limit is None else limit
    return sorted(snapshot.worn_items, key=cost_per_wear, reverse=True)[:limit]


# Wardrobe health

def wardrobe_efficiency_score(snapshot: WardrobeSnapshot) -> float:
    return _mean([efficiency_score(item) for item in snapshot.worn_items])


def utilization_rate(snapshot: WardrobeSnapshot) -> float:
    """Percentage of active items worn at least once."""
    if not snapshot.active_items:
        return 0.0
    return len(snapshot.worn_items) / len(snapshot.active_items) * 100


def idle_value(snapshot: WardrobeSnapshot) -> float:
    return sum(item.purchase_price for item in snapshot.active_items if item.wear_count == 0)


def health_message(score: float) -> str:
    if score >= 80:
        return "Exceptional wardrobe efficiency!"
    if score >= 60:
        return "Great habits, keep it up!"
    if score >= 40:
        return "Room for improvement."
    if score >= 20:
        return "Wear your clothes more often."
    return "Start logging outfits to build your score."


# Categories

def cpw_by_category(snapshot: WardrobeSnapshot) -> List[CategoryCPW]:
    grouped: Dict[str, List[WardrobeItem]] = defaultdict(list)
    for item in snapshot.worn_items:
        grouped[item.safe_category].append(item)
    rows = [
        CategoryCPW(category=cat, cpw=_mean([cost_per_wear(i) for i in items]), count=len(items))
        for cat, items in grouped.items()
    ]
    return sorted(rows, key=lambda r: r.cpw)


def items_by_category(snapshot: WardrobeSnapshot) -> List[CategoryCount]:
    grouped: Dict[str, List[WardrobeItem]] = defaultdict(list)
    for item in snapshot.active_items:
        grouped[item.safe_category].append(item)
    rows = [
        CategoryCount(category=cat, count=len(items), value=sum(i.purchase_price for i in items))
        for cat, items in grouped.items()
    ]
    return sorted(rows, key=lambda r: r.count, reverse=True)


# Time series

def wear_count_for_date(snapshot: WardrobeSnapshot, day) -> int:
    target = local_date(day)
    return sum(1 for log in snapshot.wear_logs if local_date(log.date) == target)


def wears_per_day(snapshot: WardrobeSnapshot, days: int) -> List[DailyWearCount]:
    """Wear counts for the ``days`` calendar days ending today, oldest first."""
    counts = _daily_counts(snapshot.wear_logs)
    today = local_date(snapshot.now)
    out = []
    for offset in reversed(range(days)):
        day = today - timedelta(days=offset)
        out.append(DailyWearCount(date=day, count=counts.get(day, 0)))
    return out


def wears_per_day_last_30(snapshot: WardrobeSnapshot) -> List[DailyWearCount]:
    return wears_per_day(snapshot, DAILY_WINDOW_DAYS)


def weekly_wear_trend(snapshot: WardrobeSnapshot) -> List[WeeklyWearCount]:
    log_times = [to_local(log.date) for log in snapshot.wear_logs]
    now = to_local(snapshot.now)
    out = []
    for week_offset in reversed(range(TREND_WEEKS)):
        week_start = start_of_day(now - timedelta(weeks=week_offset))
        week_end = week_start + timedelta(days=7)
        count = sum(1 for t in log_times if week_start <= t < week_end)
        out.append(WeeklyWearCount(week_start=week_start, count=count))
    return out


def monthly_spending(snapshot: WardrobeSnapshot) -> List[MonthlySpending]:
    """Purchases per calendar month, archived items included, zero-filled."""
    out = []
    for month_offset in reversed(range(TREND_MONTHS)):
        first = add_months(snapshot.now, -month_offset)
        nxt = add_months(first, 1)
        bought = [
            item for item in snapshot.all_items
            if item.purchase_date is not None
            and first <= local_date(item.purchase_date) < nxt
        ]
        out.append(MonthlySpending(
            month=first,
            amount=sum(item.purchase_price for item in bought),
            item_count=len(bought),
        ))
    return out


def average_monthly_spending(rows: List[MonthlySpending]) -> float:
    total = sum(r.amount for r in rows)
    months_with_spend = sum(1 for r in rows if r.amount > 0)
    return total / max(months_with_spend, 1)


def cpw_trend_monthly(snapshot: WardrobeSnapshot) -> List[MonthlyCPW]:
    """Average CPW of worn items as it stood at each month end.

    Months where no item had been worn yet are left out, not zero-filled.
    """
    worn = snapshot.worn_items
    if not worn:
        return []
    logs_by_item: Dict[object, List[date]] = defaultdict(list)
    for log in snapshot.wear_logs:
        logs_by_item[log.item_id].append(local_date(log.date))

    out = []
    for month_offset in reversed(range(TREND_MONTHS)):
        first = add_months(snapshot.now, -month_offset)
        nxt = add_months(first, 1)
        values = []
        for item in worn:
            wears_so_far = sum(1 for d in logs_by_item.get(item.id, []) if d < nxt)
            if wears_so_far > 0:
                values.append(item.purchase_price / wears_so_far)
        if values:
            out.append(MonthlyCPW(month=first, avg_cpw=_mean(values)))
    return out


# Streaks and habits

def current_streak(snapshot: WardrobeSnapshot) -> int:
    worn_days = set(_daily_counts(snapshot.wear_logs))
    day = local_date(snapshot.now)
    streak = 0
    for _ in range(settings.STREAK_LOOKBACK_DAYS):
        if day not in worn_days:
            break
        streak += 1
        day -= timedelta(days=1)
    return streak


def best_streak(snapshot: WardrobeSnapshot) -> int:
    worn_days = set(_daily_counts(snapshot.wear_logs))
    if not worn_days:
        return 0
    best = current = 0
    for day in iter_days(min(worn_days), max(worn_days)):
        if day in worn_days:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def most_active_day_of_week(snapshot: WardrobeSnapshot) -> Optional[WeekdayActivity]:
    counts = Counter(local_date(log.date).weekday() for log in snapshot.wear_logs)
    if not counts:
        return None
    # max() keeps the first weekday seen among equal counts
    weekday = max(counts, key=counts.get)
    return WeekdayActivity(weekday=weekday, name=calendar.day_name[weekday], count=counts[weekday])


# Calendar lookups

def categories_of_logs(logs: Iterable[WearLog], items: Iterable[WardrobeItem]) -> List[str]:
    """Distinct categories of the items behind ``logs``, first-seen order."""
    by_id = {item.id: item for item in items}
    seen: List[str] = []
    for log in logs:
        item = by_id.get(log.item_id)
        if item is None or item.category is None:
            continue
        if item.category not in seen:
            seen.append(item.category)
    return seen


def month_summary(snapshot: WardrobeSnapshot, year: int, month: int) -> MonthSummary:
    first = date(year, month, 1)
    last = add_months(first, 1) - timedelta(days=1)
    counts = _daily_counts(snapshot.wear_logs)
    per_day = [counts.get(day, 0) for day in iter_days(first, last)]
    return MonthSummary(
        year=year,
        month=month,
        total_wears=sum(per_day),
        active_days=sum(1 for c in per_day if c > 0),
    )


def categories_worn_on_date(snapshot: WardrobeSnapshot, day) -> List[str]:
    target = local_date(day)
    logs = [log for log in snapshot.wear_logs if local_date(log.date) == target]
    return categories_of_logs(logs, snapshot.all_items)
