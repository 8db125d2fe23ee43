# navigation/tree.py
"""
Build a nested tree out of flat navigation rows, and flatten it back.

Rows are grouped by parent id once, so each node only keeps the ids of its
group; the rows themselves are never copied or mutated. The accessors make
the same code work for model instances (``parent_id``) and for API payload
dicts (``parentId``).
"""
from collections import defaultdict
from dataclasses import dataclass, field
from operator import attrgetter, itemgetter
from typing import Any, Callable, Iterable, Optional


@dataclass
class TreeNode:
    id: Any
    item: Any
    level: int
    children: list["TreeNode"] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return bool(self.children)


model_accessors = {
    "id_of": attrgetter("id"),
    "parent_of": attrgetter("parent_id"),
    "position_of": attrgetter("position"),
}

payload_accessors = {
    "id_of": itemgetter("id"),
    "parent_of": lambda row: row.get("parentId"),
    "position_of": lambda row: row.get("position"),
}


def group_by_parent(
    items: Iterable[Any],
    parent_of: Callable[[Any], Any] = model_accessors["parent_of"],
    position_of: Callable[[Any], Any] = model_accessors["position_of"],
) -> dict:
    """
    Map parent id -> children, each group ordered by position.
    Missing positions count as 0 and ties keep input order.
    """
    groups = defaultdict(list)
    for item in items:
        groups[parent_of(item)].append(item)
    for siblings in groups.values():
        siblings.sort(key=lambda item: position_of(item) or 0)
    return groups


def build_tree(
    items: Iterable[Any],
    parent_id: Optional[Any] = None,
    level: int = 0,
    id_of: Callable[[Any], Any] = model_accessors["id_of"],
    parent_of: Callable[[Any], Any] = model_accessors["parent_of"],
    position_of: Callable[[Any], Any] = model_accessors["position_of"],
) -> list[TreeNode]:
    """
    Nest ``items`` starting from the rows whose parent is ``parent_id``.

    Only rows reachable from ``parent_id`` are returned; a row whose parent is
    not in ``items`` is left out.
    """
    groups = group_by_parent(items, parent_of=parent_of, position_of=position_of)

    def _build(current_parent, current_level):
        return [
            TreeNode(
                id=id_of(item),
                item=item,
                level=current_level,
                children=_build(id_of(item), current_level + 1),
            )
            for item in groups.get(current_parent, [])
        ]

    return _build(parent_id, level)


def flatten_tree(nodes: Iterable[TreeNode]) -> list[TreeNode]:
    """Pre-order: each node, then its flattened children."""
    flat = []
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.children))
    return flat


def outline(items: Iterable[Any], **accessors) -> list[TreeNode]:
    """Shortcut for ``flatten_tree(build_tree(items))``."""
    return flatten_tree(build_tree(items, **accessors))
