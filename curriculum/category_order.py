"""Category ordering and module discovery.

Categories are not a fixed enumeration: they are whatever strings the
stored videos carry. This module resolves the ordered videos of one
category, applying an optional saved custom order, and builds the list
of modules shown to learners.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .models import ContentItem

# Sorts ids missing from a custom order after every real position.
UNORDERED = float("inf")


@dataclass(frozen=True)
class ModuleInfo:
    """A discovered category with its learner-facing label."""

    category: str
    display_name: str
    slug: str

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "category": self.category,
            "displayName": self.display_name,
            "slug": self.slug,
        }


# =============================================================================
# ORDERING
# =============================================================================

def apply_custom_order(
    items: Sequence[ContentItem],
    order: Sequence[str] | None,
) -> list[ContentItem]:
    """Sort items by their position in a saved custom order.

    Ids absent from ``order`` go last, keeping their relative sequence.
    Ids in ``order`` that match no item are ignored.

    Args:
        items: Items to sort (already filtered to one category).
        order: Saved sequence of item ids, or None.

    Returns:
        New list; the input is never mutated.
    """
    if not order:
        return list(items)

    positions: dict[str, int] = {}
    for index, item_id in enumerate(order):
        # First occurrence wins if an id was saved twice
        positions.setdefault(item_id, index)

    # sorted() is stable, so unordered items keep their original sequence
    return sorted(items, key=lambda item: positions.get(item.id, UNORDERED))


def resolve_category(
    items: Iterable[ContentItem],
    category: str,
    order: Sequence[str] | None = None,
) -> list[ContentItem]:
    """Return the items of one category in viewing order.

    Matching is exact and case-sensitive. Without a custom order the
    items keep the sequence they arrived in, which callers fetch by
    creation time ascending.
    """
    in_category = [item for item in items if item.category == category]
    return apply_custom_order(in_category, order)


def resolve_categories(
    items: Iterable[ContentItem],
    categories: Iterable[str],
    order: Sequence[str] | None = None,
) -> list[ContentItem]:
    """Like ``resolve_category`` but matching any of several names."""
    names = frozenset(categories)
    in_category = [item for item in items if item.category in names]
    return apply_custom_order(in_category, order)


# =============================================================================
# MODULE DISCOVERY
# =============================================================================

def module_slug(category: str) -> str:
    """URL-safe module id, e.g. 'Finance and Accounting' -> 'finance-and-accounting'."""
    return re.sub(r"[^a-z0-9]+", "-", category.lower()).strip("-")


def display_name_for(category: str, display_names: Mapping[str, str] | None = None) -> str:
    """Learner-facing name for a category.

    An explicit override wins; otherwise 'Module' is appended unless the
    category already says it.
    """
    override = (display_names or {}).get(category)
    if override:
        return override.strip()
    if "Module" in category:
        return category.strip()
    return f"{category} Module".strip()


def discover_categories(items: Iterable[ContentItem]) -> list[str]:
    """Distinct non-blank categories in first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        name = item.category.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)


def build_module_index(
    items: Iterable[ContentItem],
    display_names: Mapping[str, str] | None = None,
) -> list[ModuleInfo]:
    """List every discovered module, sorted by display name."""
    modules = [
        ModuleInfo(
            category=category,
            display_name=display_name_for(category, display_names),
            slug=module_slug(category),
        )
        for category in discover_categories(items)
    ]
    modules.sort(key=lambda m: m.display_name.lower())
    return modules
