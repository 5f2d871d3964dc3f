from datetime import datetime
from typing import Iterable

from wardrobe_cpw.core.currency import Formatter
from wardrobe_cpw.schemas.analytics import ReportRowOut, WardrobeReportOut
from .metrics import cost_per_wear
from .types import WardrobeItem

NAME_WIDTH = 25
CATEGORY_WIDTH = 15


def build_report(items: Iterable[WardrobeItem], formatter: Formatter, now: datetime) -> WardrobeReportOut:
    """Summary lines and a CPW-ascending item table for non-archived items."""
    active = [item for item in items if not item.archived]
    worn = [item for item in active if item.wear_count > 0]
    total_value = sum(item.purchase_price for item in active)
    avg_cpw = sum(cost_per_wear(i) for i in worn) / len(worn) if worn else 0.0
    total_wears = sum(item.wear_count for item in active)

    rows = [
        ReportRowOut(
            name=item.safe_name[:NAME_WIDTH],
            category=item.safe_category[:CATEGORY_WIDTH],
            price=formatter.format(item.purchase_price),
            wears=str(item.wear_count),
            cpw=formatter.format(cost_per_wear(item)),
        )
        for item in sorted(active, key=cost_per_wear)
    ]
    return WardrobeReportOut(
        generated_at=f"Generated on {now:%B} {now.day}, {now:%Y}",
        summary_lines=[
            f"Total Items: {len(active)}",
            f"Total Wardrobe Value: {formatter.format(total_value)}",
            f"Total Wears Logged: {total_wears}",
            f"Average Cost Per Wear: {formatter.format(avg_cpw)}",
        ],
        rows=rows,
    )
