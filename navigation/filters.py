# navigation/filters.py
from typing import Iterable

from accounts.grants import get_user_tools

from .models import NavigationItem


def is_visible(item: NavigationItem, grants: set[str]) -> bool:
    """
    An item is visible when it is not tool-gated, or when the caller holds a
    grant for its tool.

    Each item is judged on its own: hiding a parent does not hide its
    children. ``requires_role`` is not consulted here.
    """
    if item.tool_id is None:
        return True
    return item.tool_identifier in grants


def filter_visible(items: Iterable[NavigationItem], grants: set[str]) -> list[NavigationItem]:
    return [item for item in items if is_visible(item, grants)]


def visible_items_for(user) -> list[NavigationItem]:
    """Active items the user may see, in store order."""
    qs = NavigationItem.objects.filter(is_active=True).select_related("tool")
    return filter_visible(qs, get_user_tools(user))
