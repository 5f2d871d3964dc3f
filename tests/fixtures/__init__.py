from .wardrobe_fixtures import (
    NOW,
    TODAY,
    days_ago,
    make_item,
    logs_for,
    snapshot_of,
    empty_wardrobe_fixture,
    mixed_wardrobe_fixture,
    ALL_FIXTURES,
)

__all__ = [
    "NOW",
    "TODAY",
    "days_ago",
    "make_item",
    "logs_for",
    "snapshot_of",
    "empty_wardrobe_fixture",
    "mixed_wardrobe_fixture",
    "ALL_FIXTURES",
]
