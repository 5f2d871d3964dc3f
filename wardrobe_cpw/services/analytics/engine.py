import logging
import uuid
from datetime import date, datetime
from typing import Callable, List, Optional

from wardrobe_cpw.core.currency import CurrencyFormatter, Formatter
from wardrobe_cpw.schemas.analytics import AnalyticsSummaryOut, WardrobeReportOut
from wardrobe_cpw.schemas.goals import AchievementOut, GoalProgressOut
from . import aggregator, metrics
from .achievements import evaluate_achievements
from .browse import SortMode, active_categories, filter_items, sort_items
from .dates import local_date, now_local
from .goals import evaluate_goal
from .report import build_report
from .store import WardrobeStore
from .types import (
    CategoryCount,
    CategoryCPW,
    DailyWearCount,
    ItemMetrics,
    MonthlyCPW,
    MonthlySpending,
    MonthSummary,
    SustainabilityGoal,
    WardrobeItem,
    WardrobeSnapshot,
    WearLog,
    WeekdayActivity,
    WeeklyWearCount,
)

logger = logging.getLogger(__name__)


class AnalyticsEngine:
    """Analytics over one wardrobe store.

    Active items, all items and all wear logs are fetched lazily and kept
    until ``refresh()``. Callers write to the store, call ``refresh()``, then
    read; without the refresh the engine keeps answering from what it
    fetched first. One engine per thread.
    """

    def __init__(
        self,
        store: WardrobeStore,
        formatter: Optional[Formatter] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self.store = store
        self.formatter = formatter or CurrencyFormatter()
        self.clock = clock
        self._active_items: Optional[List[WardrobeItem]] = None
        self._all_items: Optional[List[WardrobeItem]] = None
        self._all_logs: Optional[List[WearLog]] = None

    def refresh(self) -> None:
        """Drop cached store data; the next read fetches again."""
        self._active_items = None
        self._all_items = None
        self._all_logs = None
        logger.debug("analytics:refresh")

    @property
    def active_items(self) -> List[WardrobeItem]:
        if self._active_items is None:
            self._active_items = self.store.fetch_active_items()
        return self._active_items

    @property
    def all_items(self) -> List[WardrobeItem]:
        if self._all_items is None:
            self._all_items = self.store.fetch_all_items()
        return self._all_items

    @property
    def all_logs(self) -> List[WearLog]:
        if self._all_logs is None:
            self._all_logs = self.store.fetch_all_wear_logs()
        return self._all_logs

    def snapshot(self, now: Optional[datetime] = None) -> WardrobeSnapshot:
        snap = WardrobeSnapshot(
            active_items=self.active_items,
            all_items=self.all_items,
            wear_logs=self.all_logs,
            now=now or self.clock(),
        )
        logger.debug(
            "analytics:snapshot active_items=%s all_items=%s logs=%s",
            len(snap.active_items), len(snap.all_items), len(snap.wear_logs),
        )
        return snap

    # Per-item

    def item_logs(self, item: WardrobeItem) -> List[WearLog]:
        return self.store.fetch_wear_logs_for_item(item.id)

    def item_metrics(self, item: WardrobeItem) -> ItemMetrics:
        return metrics.item_metrics(item, self.item_logs(item), self.clock())

    def days_since_last_worn(self, item: WardrobeItem) -> Optional[int]:
        return metrics.days_since_last_worn(self.item_logs(item), self.clock())

    def find_item(self, item_id: uuid.UUID) -> Optional[WardrobeItem]:
        return next((item for item in self.all_items if item.id == item_id), None)

    # Core metrics

    @property
    def average_cpw(self) -> float:
        return aggregator.average_cpw(self.snapshot())

    @property
    def total_wardrobe_value(self) -> float:
        return aggregator.total_wardrobe_value(self.snapshot())

    @property
    def total_wears(self) -> int:
        return aggregator.total_wears(self.snapshot())

    @property
    def average_item_price(self) -> float:
        return aggregator.average_item_price(self.snapshot())

    @property
    def unused_items(self) -> List[WardrobeItem]:
        return aggregator.unused_items(self.snapshot())

    @property
    def top_efficient(self) -> List[WardrobeItem]:
        return aggregator.top_efficient(self.snapshot())

    @property
    def worst_investments(self) -> List[WardrobeItem]:
        return aggregator.worst_investments(self.snapshot())

    @property
    def wardrobe_efficiency_score(self) -> float:
        return aggregator.wardrobe_efficiency_score(self.snapshot())

    @property
    def utilization_rate(self) -> float:
        return aggregator.utilization_rate(self.snapshot())

    @property
    def idle_value(self) -> float:
        return aggregator.idle_value(self.snapshot())

    @property
    def cpw_by_category(self) -> List[CategoryCPW]:
        return aggregator.cpw_by_category(self.snapshot())

    @property
    def items_by_category(self) -> List[CategoryCount]:
        return aggregator.items_by_category(self.snapshot())

    # Time series

    @property
    def wears_per_day_last_30(self) -> List[DailyWearCount]:
        return aggregator.wears_per_day_last_30(self.snapshot())

    def recent_days(self, days: int = 7) -> List[DailyWearCount]:
        return aggregator.wears_per_day(self.snapshot(), days)

    @property
    def weekly_wear_trend(self) -> List[WeeklyWearCount]:
        return aggregator.weekly_wear_trend(self.snapshot())

    @property
    def monthly_spending(self) -> List[MonthlySpending]:
        return aggregator.monthly_spending(self.snapshot())

    @property
    def average_monthly_spending(self) -> float:
        return aggregator.average_monthly_spending(self.monthly_spending)

    @property
    def cpw_trend_monthly(self) -> List[MonthlyCPW]:
        return aggregator.cpw_trend_monthly(self.snapshot())

    @property
    def current_streak(self) -> int:
        return aggregator.current_streak(self.snapshot())

    @property
    def best_streak(self) -> int:
        return aggregator.best_streak(self.snapshot())

    @property
    def most_active_day_of_week(self) -> Optional[WeekdayActivity]:
        return aggregator.most_active_day_of_week(self.snapshot())

    # Calendar lookups go to the store so the calendar never shows stale days

    def wear_count_for_date(self, day: date) -> int:
        return self.store.count_wear_logs_for_date(local_date(day))

    def categories_worn_on_date(self, day: date) -> List[str]:
        logs = self.store.fetch_wear_logs_for_date(local_date(day))
        return aggregator.categories_of_logs(logs, self.store.fetch_all_items())

    def month_summary(self, year: int, month: int) -> MonthSummary:
        return aggregator.month_summary(self.snapshot(), year, month)

    # Browsing

    def browse(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: SortMode = "newest",
    ) -> List[WardrobeItem]:
        return sort_items(filter_items(self.active_items, search, category), sort)

    def categories(self) -> List[str]:
        """Known categories that have at least one active item, for the filter chips."""
        return active_categories(self.active_items)

    # Goals and achievements

    def goal_progress(self, goal: SustainabilityGoal) -> GoalProgressOut:
        result = evaluate_goal(goal, self.active_items, self.formatter)
        return GoalProgressOut(
            goal_id=str(goal.id),
            title=goal.title,
            goal_type=getattr(goal.goal_type, "value", goal.goal_type),
            target_value=goal.target_value,
            percent=result.percent,
            current_value_display=result.current_value_display,
            is_completed=result.is_completed,
            message=result.message,
        )

    def goals(self) -> List[GoalProgressOut]:
        return [self.goal_progress(goal) for goal in self.store.fetch_goals()]

    def achievements(self) -> List[AchievementOut]:
        return [
            AchievementOut(
                id=a.id,
                title=a.title,
                description=a.description,
                icon=a.icon,
                is_unlocked=a.is_unlocked,
            )
            for a in evaluate_achievements(self.all_items, self.formatter)
        ]

    # Outputs

    def summary(self) -> AnalyticsSummaryOut:
        snap = self.snapshot()
        score = aggregator.wardrobe_efficiency_score(snap)
        avg_cpw = aggregator.average_cpw(snap)
        total_value = aggregator.total_wardrobe_value(snap)
        idle = aggregator.idle_value(snap)
        busiest = aggregator.most_active_day_of_week(snap)
        return AnalyticsSummaryOut(
            items_count=len(snap.active_items),
            total_wardrobe_value=total_value,
            total_wears=aggregator.total_wears(snap),
            average_cpw=avg_cpw,
            average_item_price=aggregator.average_item_price(snap),
            average_monthly_spending=aggregator.average_monthly_spending(aggregator.monthly_spending(snap)),
            wardrobe_efficiency_score=score,
            efficiency_grade=metrics.efficiency_grade(score),
            health_message=aggregator.health_message(score),
            utilization_rate=aggregator.utilization_rate(snap),
            idle_value=idle,
            unused_items_count=len(aggregator.unused_items(snap)),
            current_streak=aggregator.current_streak(snap),
            best_streak=aggregator.best_streak(snap),
            most_active_weekday=busiest.name if busiest else None,
            total_value_display=self.formatter.format(total_value),
            average_cpw_display=self.formatter.format(avg_cpw),
            idle_value_display=self.formatter.format(idle),
            computed_at=str(snap.now),
        )

    def report(self) -> WardrobeReportOut:
        return build_report(self.all_items, self.formatter, self.clock())
