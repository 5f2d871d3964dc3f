from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1)
    goal_type: Literal["AverageCPW", "WearCount"] = "AverageCPW"
    target_value: float = Field(..., gt=0)
    linked_item_id: Optional[UUID] = None

    @model_validator(mode="after")
    def wear_count_needs_item(self) -> "GoalCreate":
        if self.goal_type == "WearCount" and self.linked_item_id is None:
            raise ValueError("linked_item_required")
        if self.goal_type == "AverageCPW":
            self.linked_item_id = None
        return self


class GoalProgressOut(BaseModel):
    goal_id: str
    title: str
    goal_type: str
    target_value: float
    percent: float = Field(..., ge=0, le=1, description="Progress toward the target, 0-1")
    current_value_display: str
    is_completed: bool
    message: str


class AchievementOut(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    is_unlocked: bool
