from typing import Iterable, List

from wardrobe_cpw.core.currency import Formatter
from .metrics import cost_per_wear
from .types import Achievement, AchievementFacts, AchievementRule, WardrobeItem

CATALOG: List[AchievementRule] = [
    AchievementRule(
        id="first_item",
        title="Getting Started",
        description="Add your first wardrobe item",
        icon="star.fill",
        predicate=lambda f: f.items_count > 0,
    ),
    AchievementRule(
        id="first_wear",
        title="Outfit Logger",
        description="Log your first outfit",
        icon="checkmark.circle.fill",
        predicate=lambda f: f.total_wears > 0,
    ),
    AchievementRule(
        id="ten_items",
        title="Wardrobe Builder",
        description="Track 10 or more items",
        icon="square.grid.3x3.fill",
        predicate=lambda f: f.items_count >= 10,
    ),
    AchievementRule(
        id="smart_shopper",
        title="Smart Shopper",
        description="Achieve a CPW under {symbol}1 on any item",
        icon="dollarsign.circle.fill",
        predicate=lambda f: f.has_sub_unit_cpw,
    ),
    AchievementRule(
        id="century_club",
        title="Century Club",
        description="Wear a single item 100 times",
        icon="trophy.fill",
        predicate=lambda f: f.has_century_item,
    ),
    AchievementRule(
        id="sustainability_star",
        title="Sustainability Star",
        description="Keep average CPW below {symbol}5",
        icon="leaf.fill",
        predicate=lambda f: f.worn_count > 0 and f.average_cpw < 5.0,
    ),
    AchievementRule(
        id="fifty_wears",
        title="Dedicated Dresser",
        description="Log 50 total outfit entries",
        icon="flame.fill",
        predicate=lambda f: f.total_wears >= 50,
    ),
    AchievementRule(
        id="diverse_wardrobe",
        title="Style Variety",
        description="Have items in 5+ categories",
        icon="paintpalette.fill",
        predicate=lambda f: f.category_count >= 5,
    ),
    AchievementRule(
        id="twenty_five_items",
        title="Wardrobe Master",
        description="Track 25 or more items",
        icon="crown.fill",
        predicate=lambda f: f.items_count >= 25,
    ),
]


def collect_facts(items: Iterable[WardrobeItem]) -> AchievementFacts:
    items = list(items)
    worn = [item for item in items if item.wear_count > 0]
    avg = sum(cost_per_wear(i) for i in worn) / len(worn) if worn else 0.0
    return AchievementFacts(
        items_count=len(items),
        total_wears=sum(item.wear_count for item in items),
        worn_count=len(worn),
        average_cpw=avg,
        has_sub_unit_cpw=any(cost_per_wear(i) < 1.0 for i in worn),
        has_century_item=any(item.wear_count >= 100 for item in items),
        # absent categories do not count toward variety
        category_count=len({item.category for item in items if item.category is not None}),
    )


def evaluate_achievements(
    items: Iterable[WardrobeItem],
    formatter: Formatter,
    catalog: List[AchievementRule] = CATALOG,
) -> List[Achievement]:
    """Unlock state for every catalog entry, recomputed from ``items``.

    ``items`` should include archived ones; nothing is remembered between calls.
    """
    facts = collect_facts(items)
    symbol = formatter.currency_symbol
    return [
        Achievement(
            id=rule.id,
            title=rule.title,
            description=rule.description.format(symbol=symbol),
            icon=rule.icon,
            is_unlocked=bool(rule.predicate(facts)),
        )
        for rule in catalog
    ]
