# navigation/reorder.py
"""
Drag-and-drop reordering for the admin editor.

    IDLE -> DRAGGING -> OPTIMISTIC -> SUCCESS | FAILED -> IDLE

A drop only reorders inside the dragged item's sibling group; dropping onto
an item with a different parent does nothing. The new order is shown at
once, then every sibling gets a position PATCH (``index * step``) sent
concurrently. Once all of them have settled the full list is fetched again.

The PATCHes are independent requests, so a failure can leave the server
with only some siblings renumbered. On failure the session adopts a fresh
server listing; the pre-drag list is used only when that fetch fails too.
"""
import asyncio
import enum
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from .client import NavigationAdminClient, NavigationClientError
from .tree import build_tree, flatten_tree, group_by_parent, payload_accessors

logger = logging.getLogger(__name__)

# same variable as the NAVIGATION_POSITION_STEP setting
DEFAULT_POSITION_STEP = int(os.getenv("NAVIGATION_POSITION_STEP", "10"))
POSITIONS_FAILED_MESSAGE = "Failed to update item positions"
FETCH_FAILED_MESSAGE = "Failed to fetch navigation items"


class ReorderState(str, enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    OPTIMISTIC = "optimistic"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ReorderPlan:
    parent_id: Optional[int]
    ordered_ids: list[int]
    positions: dict[int, int] = field(default_factory=dict)


@dataclass
class ReorderResult:
    outcome: ReorderState
    patched: int = 0
    error: Optional[str] = None

    @property
    def is_noop(self) -> bool:
        return self.outcome == ReorderState.IDLE


def array_move(seq: list, old_index: int, new_index: int) -> list:
    moved = list(seq)
    moved.insert(new_index, moved.pop(old_index))
    return moved


def plan_reorder(
    items: list[dict],
    dragged_id: int,
    target_id: int,
    step: int = DEFAULT_POSITION_STEP,
) -> Optional[ReorderPlan]:
    """
    Returns None when the move is not allowed (different parents, unknown
    ids, or dropping an item onto itself).
    """
    by_id = {item["id"]: item for item in items}
    dragged = by_id.get(dragged_id)
    target = by_id.get(target_id)
    if dragged is None or target is None or dragged_id == target_id:
        return None

    parent_id = dragged.get("parentId")
    if parent_id != target.get("parentId"):
        return None

    groups = group_by_parent(
        items,
        parent_of=payload_accessors["parent_of"],
        position_of=payload_accessors["position_of"],
    )
    sibling_ids = [item["id"] for item in groups[parent_id]]
    ordered_ids = array_move(
        sibling_ids, sibling_ids.index(dragged_id), sibling_ids.index(target_id)
    )
    return ReorderPlan(
        parent_id=parent_id,
        ordered_ids=ordered_ids,
        positions={item_id: index * step for index, item_id in enumerate(ordered_ids)},
    )


def apply_plan(items: list[dict], plan: ReorderPlan) -> list[dict]:
    """Copy of ``items`` with the planned positions applied."""
    return [
        {**item, "position": plan.positions[item["id"]]} if item["id"] in plan.positions else item
        for item in items
    ]


class ReorderSession:
    """
    Client-side state for one admin editor.

    ``items`` is what the editor shows; ``confirmed_items`` is the last list
    the server returned.
    """

    def __init__(self, client: NavigationAdminClient, step: int = DEFAULT_POSITION_STEP):
        self.client = client
        self.step = step
        self.state = ReorderState.IDLE
        self.items: list[dict] = []
        self.confirmed_items: list[dict] = []
        self.active_id: Optional[int] = None
        self.error: Optional[str] = None
        self._closed = False

    def _adopt(self, items: list[dict]) -> None:
        if self._closed:
            return
        self.items = list(items)
        self.confirmed_items = list(items)

    def outline(self):
        """The current items as a pre-order list of ``tree.TreeNode``."""
        return flatten_tree(build_tree(self.items, **payload_accessors))

    async def refresh(self) -> list[dict]:
        """
        Fetch the full admin listing. Cancelling the awaiting task leaves
        the session untouched.
        """
        try:
            items = await self.client.list_items()
        except NavigationClientError as exc:
            if not self._closed:
                self.error = exc.message or FETCH_FAILED_MESSAGE
            raise
        self._adopt(items or [])
        if not self._closed:
            self.error = None
        return self.items

    def close(self) -> None:
        """Stop applying late responses, e.g. once the editor is torn down."""
        self._closed = True

    def drag_start(self, item_id: int) -> None:
        if self.state != ReorderState.IDLE:
            raise RuntimeError(f"Cannot start a drag while {self.state.value}")
        self.active_id = item_id
        self.state = ReorderState.DRAGGING

    def cancel_drag(self) -> None:
        if self.state == ReorderState.DRAGGING:
            self.active_id = None
            self.state = ReorderState.IDLE

    async def drop(self, target_id: Optional[int]) -> ReorderResult:
        if self.state != ReorderState.DRAGGING:
            raise RuntimeError(f"Cannot drop while {self.state.value}")

        dragged_id = self.active_id
        plan = None
        if target_id is not None:
            plan = plan_reorder(self.items, dragged_id, target_id, step=self.step)

        if plan is None:
            logger.debug("Drop of %s onto %s ignored", dragged_id, target_id)
            self.active_id = None
            self.state = ReorderState.IDLE
            return ReorderResult(outcome=ReorderState.IDLE)

        pre_drag = self.items
        self.items = apply_plan(self.items, plan)
        self.state = ReorderState.OPTIMISTIC

        try:
            return await self._persist(plan, pre_drag)
        finally:
            self.active_id = None
            self.state = ReorderState.IDLE

    async def _persist(self, plan: ReorderPlan, pre_drag: list[dict]) -> ReorderResult:
        results = await asyncio.gather(
            *(
                self.client.patch_position(item_id, plan.positions[item_id])
                for item_id in plan.ordered_ids
            ),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]

        if failures:
            logger.warning(
                "%s of %s position updates failed for parent %s",
                len(failures),
                len(results),
                plan.parent_id,
            )
            self.state = ReorderState.FAILED
            try:
                await self.refresh()
            except NavigationClientError:
                if not self._closed:
                    self.items = pre_drag
            if not self._closed:
                self.error = POSITIONS_FAILED_MESSAGE
            return ReorderResult(
                outcome=ReorderState.FAILED,
                patched=len(results) - len(failures),
                error=POSITIONS_FAILED_MESSAGE,
            )

        self.state = ReorderState.SUCCESS
        try:
            await self.refresh()
        except NavigationClientError:
            # every PATCH was acknowledged, so the optimistic list stands
            logger.warning("Reconcile fetch failed after reordering parent %s", plan.parent_id)
        return ReorderResult(outcome=ReorderState.SUCCESS, patched=len(results))


async def load_session(client: NavigationAdminClient, step: int = DEFAULT_POSITION_STEP) -> ReorderSession:
    session = ReorderSession(client, step=step)
    await session.refresh()
    return session
