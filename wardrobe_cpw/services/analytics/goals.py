from typing import Iterable, List, Optional

from wardrobe_cpw.core.currency import Formatter
from .metrics import cost_per_wear
from .types import GoalProgress, GoalType, SustainabilityGoal, WardrobeItem

# Average CPW below this is treated as this, so progress stays finite.
MIN_AVERAGE_CPW = 0.01


def _worn_average_cpw(items: List[WardrobeItem]) -> Optional[float]:
    worn = [item for item in items if item.wear_count > 0]
    if not worn:
        return None
    return sum(cost_per_wear(item) for item in worn) / len(worn)


def _linked_item(goal: SustainabilityGoal, items: List[WardrobeItem]) -> Optional[WardrobeItem]:
    if goal.linked_item_id is None:
        return None
    return next((item for item in items if item.id == goal.linked_item_id), None)


def goal_progress(goal: SustainabilityGoal, items: Iterable[WardrobeItem]) -> float:
    """Fraction 0-1 of the way to ``goal`` given the active items.

    Average-CPW goals progress as the average drops toward the target;
    wear-count goals follow the linked item and sit at 0 if it is gone.
    """
    items = list(items)
    if goal.target_value <= 0:
        return 0.0
    if goal.goal_type == GoalType.AVERAGE_CPW.value:
        avg = _worn_average_cpw(items)
        if avg is None:
            return 0.0
        return min(goal.target_value / max(avg, MIN_AVERAGE_CPW), 1.0)
    if goal.goal_type == GoalType.WEAR_COUNT.value:
        item = _linked_item(goal, items)
        if item is None:
            return 0.0
        return min(item.wear_count / goal.target_value, 1.0)
    return 0.0


def goal_current_value(goal: SustainabilityGoal, items: Iterable[WardrobeItem], formatter: Formatter) -> str:
    items = list(items)
    if goal.goal_type == GoalType.AVERAGE_CPW.value:
        return formatter.format(_worn_average_cpw(items) or 0.0)
    if goal.goal_type == GoalType.WEAR_COUNT.value:
        item = _linked_item(goal, items)
        return str(item.wear_count) if item else "0"
    return "—"


def motivational_message(progress: float) -> str:
    if progress >= 1.0:
        return "Goal achieved! Keep going!"
    if progress > 0.75:
        return "Almost there, you're doing great!"
    if progress > 0.5:
        return "Over halfway! Stay consistent."
    if progress > 0.25:
        return "Good progress, keep wearing mindfully."
    return "Every wear counts toward your goal."


def evaluate_goal(goal: SustainabilityGoal, items: Iterable[WardrobeItem], formatter: Formatter) -> GoalProgress:
    items = list(items)
    progress = goal_progress(goal, items)
    return GoalProgress(
        percent=progress,
        current_value_display=goal_current_value(goal, items, formatter),
        is_completed=progress >= 1.0,
        message=motivational_message(progress),
    )
