from pydantic import BaseModel, Field
from typing import List, Optional


class AnalyticsSummaryOut(BaseModel):
    """Headline figures for the analytics dashboard."""
    items_count: int
    total_wardrobe_value: float = Field(..., ge=0)
    total_wears: int = Field(..., ge=0)
    average_cpw: float = Field(..., ge=0)
    average_item_price: float = Field(..., ge=0)
    average_monthly_spending: float = Field(..., ge=0)
    wardrobe_efficiency_score: float = Field(..., ge=0, le=100)
    efficiency_grade: str
    health_message: str
    utilization_rate: float = Field(..., ge=0, le=100, description="Percent of active items worn at least once")
    idle_value: float = Field(..., ge=0)
    unused_items_count: int
    current_streak: int
    best_streak: int
    most_active_weekday: Optional[str] = None

    # Display strings from the injected formatter
    total_value_display: str
    average_cpw_display: str
    idle_value_display: str

    computed_at: str


class ReportRowOut(BaseModel):
    name: str
    category: str
    price: str
    wears: str
    cpw: str


class WardrobeReportOut(BaseModel):
    """Everything a report renderer needs; layout is up to the renderer."""
    title: str = "Wardrobe Report"
    generated_at: str
    summary_lines: List[str]
    headers: List[str] = Field(default_factory=lambda: ["Item", "Category", "Price", "Wears", "CPW"])
    rows: List[ReportRowOut] = Field(default_factory=list)
    footer: str = "Cost Per Wear: Smart Wardrobe, Personal Tracking Report"
