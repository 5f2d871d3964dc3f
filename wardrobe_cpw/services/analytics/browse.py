from typing import Iterable, List, Literal, Optional

from .metrics import cost_per_wear
from .types import WardrobeItem

CATEGORIES: List[str] = [
    "Tops", "Bottoms", "Dresses", "Outerwear",
    "Shoes", "Accessories", "Bags", "Activewear",
    "Formal", "Underwear", "Swimwear", "Other",
]

SortMode = Literal["newest", "lowest_cpw", "highest_cpw", "most_worn"]


def filter_items(
    items: Iterable[WardrobeItem],
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> List[WardrobeItem]:
    result = list(items)
    if search:
        needle = search.casefold()
        result = [
            item for item in result
            if needle in (item.name or "").casefold()
            or needle in (item.brand or "").casefold()
            or needle in (item.category or "").casefold()
        ]
    if category:
        result = [item for item in result if item.category == category]
    return result


def sort_items(items: Iterable[WardrobeItem], mode: SortMode = "newest") -> List[WardrobeItem]:
    """Order for the wardrobe grid; ``newest`` keeps the store's order."""
    result = list(items)
    if mode == "lowest_cpw":
        result.sort(key=cost_per_wear)
    elif mode == "highest_cpw":
        result.sort(key=cost_per_wear, reverse=True)
    elif mode == "most_worn":
        result.sort(key=lambda item: item.wear_count, reverse=True)
    elif mode != "newest":
        raise ValueError("invalid_sort_mode")
    return result


def active_categories(items: Iterable[WardrobeItem]) -> List[str]:
    present = {item.category for item in items}
    return [c for c in CATEGORIES if c in present]
