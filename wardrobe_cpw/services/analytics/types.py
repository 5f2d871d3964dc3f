import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Callable, List, Optional

DEFAULT_ITEM_NAME = "Unnamed Item"
DEFAULT_CATEGORY = "Other"


class GoalType(str, Enum):
    AVERAGE_CPW = "AverageCPW"
    WEAR_COUNT = "WearCount"


@dataclass
class WardrobeItem:
    """A catalogued clothing item as handed over by the data-access layer."""
    purchase_price: float = 0.0
    name: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    purchase_date: Optional[date] = None
    photo_ref: Optional[str] = None
    wear_count: int = 0  # denormalised, maintained by the write path
    archived: bool = False
    created_at: Optional[datetime] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def safe_name(self) -> str:
        return self.name or DEFAULT_ITEM_NAME

    @property
    def safe_category(self) -> str:
        return self.category or DEFAULT_CATEGORY


@dataclass
class WearLog:
    item_id: uuid.UUID
    date: datetime
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class SustainabilityGoal:
    title: str
    goal_type: str
    target_value: float
    linked_item_id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class WardrobeSnapshot:
    """Everything the aggregates need, fetched once from the store."""
    active_items: List[WardrobeItem]
    all_items: List[WardrobeItem]
    wear_logs: List[WearLog]  # ascending by date
    now: datetime

    @property
    def worn_items(self) -> List[WardrobeItem]:
        return [item for item in self.active_items if item.wear_count > 0]


@dataclass
class CPWPoint:
    date: date
    cpw: float


@dataclass
class ItemMetrics:
    """Per-item figures shown on the detail screen."""
    item_id: uuid.UUID
    cost_per_wear: float
    efficiency_score: float
    grade: str
    is_efficient: bool
    efficiency_message: str
    days_since_purchase: int
    wears_per_month: float
    wears_per_week: float
    days_since_last_worn: Optional[int]
    projected_yearly_wears: int
    projected_yearly_cpw: float
    cpw_over_time: List[CPWPoint] = field(default_factory=list)


@dataclass
class CategoryCPW:
    category: str
    cpw: float
    count: int


@dataclass
class CategoryCount:
    category: str
    count: int
    value: float


@dataclass
class DailyWearCount:
    date: date
    count: int


@dataclass
class WeeklyWearCount:
    week_start: datetime
    count: int


@dataclass
class MonthlySpending:
    month: date
    amount: float
    item_count: int


@dataclass
class MonthlyCPW:
    month: date
    avg_cpw: float


@dataclass
class WeekdayActivity:
    weekday: int  # 0 = Monday, as date.weekday()
    name: str
    count: int


@dataclass
class MonthSummary:
    year: int
    month: int
    total_wears: int
    active_days: int


@dataclass
class GoalProgress:
    percent: float  # 0-1
    current_value_display: str
    is_completed: bool
    message: str


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    icon: str
    is_unlocked: bool


@dataclass
class AchievementRule:
    """Catalog row: metadata plus the predicate that unlocks it."""
    id: str
    title: str
    description: str  # may contain {symbol}
    icon: str
    predicate: Callable[["AchievementFacts"], bool]


@dataclass
class AchievementFacts:
    """Figures derived once per evaluation and shared by every rule."""
    items_count: int
    total_wears: int
    worn_count: int
    average_cpw: float
    has_sub_unit_cpw: bool
    has_century_item: bool
    category_count: int
