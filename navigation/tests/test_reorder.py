"""Tests for drag-and-drop reordering against a fake admin API."""

import json

import httpx
import pytest

from navigation.client import NavigationAdminClient
from navigation.reorder import (
    POSITIONS_FAILED_MESSAGE,
    ReorderSession,
    ReorderState,
    apply_plan,
    array_move,
    load_session,
    plan_reorder,
)


def row(id, parent_id=None, position=0, type="link"):
    return {"id": id, "label": f"Item {id}", "type": type, "parentId": parent_id, "position": position}


def sample_rows():
    return [
        row(7, type="section"),
        row(1, parent_id=7, position=0),
        row(2, parent_id=7, position=10),
        row(3, parent_id=7, position=20),
        row(8, type="section", position=10),
        row(4, parent_id=8, position=0),
    ]


class FakeServer:
    """In-memory stand-in for /api/admin/navigation/."""

    def __init__(self, rows, fail_patch_ids=(), fail_list=False):
        self.rows = {r["id"]: dict(r) for r in rows}
        self.fail_patch_ids = set(fail_patch_ids)
        self.fail_list = fail_list
        self.patches = []
        self.list_calls = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            self.list_calls += 1
            if self.fail_list:
                return httpx.Response(500, json={"isSuccess": False, "message": "Failed to fetch navigation items"})
            return httpx.Response(200, json={"isSuccess": True, "data": list(self.rows.values())})

        if request.method == "PATCH":
            body = json.loads(request.content)
            self.patches.append((body["id"], body["position"]))
            if body["id"] in self.fail_patch_ids:
                return httpx.Response(500, json={"isSuccess": False, "message": "Failed to update position"})
            self.rows[body["id"]]["position"] = body["position"]
            return httpx.Response(200, json={"isSuccess": True, "data": self.rows[body["id"]]})

        return httpx.Response(405)


def make_client(server):
    return NavigationAdminClient(base_url="http://testserver", transport=httpx.MockTransport(server.handler))


def positions(items, ids):
    by_id = {item["id"]: item for item in items}
    return {item_id: by_id[item_id]["position"] for item_id in ids}


# --- planning -----------------------------------------------------------------


def test_array_move():
    assert array_move(["a", "b", "c"], 2, 0) == ["c", "a", "b"]
    assert array_move(["a", "b", "c"], 0, 2) == ["b", "c", "a"]


def test_plan_moves_within_sibling_group():
    plan = plan_reorder(sample_rows(), dragged_id=3, target_id=1)

    assert plan.parent_id == 7
    assert plan.ordered_ids == [3, 1, 2]
    assert plan.positions == {3: 0, 1: 10, 2: 20}


def test_plan_uses_configured_step():
    plan = plan_reorder(sample_rows(), dragged_id=1, target_id=3, step=100)

    assert plan.positions == {2: 0, 3: 100, 1: 200}


def test_plan_top_level_group():
    plan = plan_reorder(sample_rows(), dragged_id=8, target_id=7)

    assert plan.parent_id is None
    assert plan.ordered_ids == [8, 7]


@pytest.mark.parametrize("dragged, target", [(3, 4), (1, 1), (1, 999), (999, 1)])
def test_plan_rejects_invalid_drops(dragged, target):
    assert plan_reorder(sample_rows(), dragged_id=dragged, target_id=target) is None


def test_apply_plan_copies_rows():
    rows = sample_rows()
    plan = plan_reorder(rows, dragged_id=3, target_id=1)

    moved = apply_plan(rows, plan)

    assert positions(moved, [1, 2, 3]) == {1: 10, 2: 20, 3: 0}
    assert positions(rows, [1, 2, 3]) == {1: 0, 2: 10, 3: 20}


# --- session --------------------------------------------------------------------


@pytest.mark.asyncio
async def test_drop_patches_every_sibling_then_refetches():
    server = FakeServer(sample_rows())
    async with make_client(server) as client:
        session = await load_session(client)
        session.drag_start(3)
        result = await session.drop(1)

    assert result.outcome == ReorderState.SUCCESS
    assert result.patched == 3
    assert sorted(server.patches) == [(1, 10), (2, 20), (3, 0)]
    assert server.list_calls == 2
    assert positions(session.items, [1, 2, 3]) == {3: 0, 1: 10, 2: 20}
    assert session.state == ReorderState.IDLE
    assert session.error is None


@pytest.mark.asyncio
async def test_outline_follows_new_order():
    server = FakeServer(sample_rows())
    async with make_client(server) as client:
        session = await load_session(client)
        session.drag_start(3)
        await session.drop(1)

    assert [node.id for node in session.outline()] == [7, 3, 1, 2, 8, 4]


@pytest.mark.asyncio
async def test_cross_group_drop_is_a_noop():
    server = FakeServer(sample_rows())
    async with make_client(server) as client:
        session = await load_session(client)
        before = session.items
        session.drag_start(3)
        result = await session.drop(4)

    assert result.is_noop
    assert server.patches == []
    assert server.list_calls == 1
    assert session.items == before
    assert session.state == ReorderState.IDLE


@pytest.mark.asyncio
async def test_drop_outside_any_item_is_a_noop():
    server = FakeServer(sample_rows())
    async with make_client(server) as client:
        session = await load_session(client)
        session.drag_start(3)
        result = await session.drop(None)

    assert result.is_noop
    assert server.patches == []


@pytest.mark.asyncio
async def test_partial_failure_adopts_server_state():
    server = FakeServer(sample_rows(), fail_patch_ids={2})
    async with make_client(server) as client:
        session = await load_session(client)
        session.drag_start(3)
        result = await session.drop(1)

    assert result.outcome == ReorderState.FAILED
    assert result.patched == 2
    assert result.error == POSITIONS_FAILED_MESSAGE
    assert session.error == POSITIONS_FAILED_MESSAGE
    # the list now matches what the server really holds
    assert session.items == list(server.rows.values())
    assert positions(session.items, [1, 2, 3]) == {1: 10, 2: 10, 3: 0}
    assert session.state == ReorderState.IDLE


@pytest.mark.asyncio
async def test_failure_with_failed_refetch_reverts_to_pre_drag():
    server = FakeServer(sample_rows(), fail_patch_ids={1, 2, 3})
    async with make_client(server) as client:
        session = await load_session(client)
        before = session.items
        server.fail_list = True
        session.drag_start(3)
        result = await session.drop(1)

    assert result.outcome == ReorderState.FAILED
    assert result.patched == 0
    assert session.items == before
    assert session.error == POSITIONS_FAILED_MESSAGE


@pytest.mark.asyncio
async def test_success_with_failed_refetch_keeps_optimistic_order():
    server = FakeServer(sample_rows())
    async with make_client(server) as client:
        session = await load_session(client)
        server.fail_list = True
        session.drag_start(3)
        result = await session.drop(1)

    assert result.outcome == ReorderState.SUCCESS
    assert positions(session.items, [1, 2, 3]) == {3: 0, 1: 10, 2: 20}


@pytest.mark.asyncio
async def test_closed_session_ignores_late_results():
    server = FakeServer(sample_rows())
    async with make_client(server) as client:
        session = await load_session(client)
        session.drag_start(3)
        session.close()
        await session.drop(1)

    # the optimistic list was set before the session closed; the refetch is discarded
    assert session.confirmed_items == sample_rows()


def test_drag_state_errors():
    session = ReorderSession(client=None)

    session.drag_start(1)
    with pytest.raises(RuntimeError):
        session.drag_start(2)

    session.cancel_drag()
    assert session.state == ReorderState.IDLE
    assert session.active_id is None


@pytest.mark.asyncio
async def test_drop_without_drag_is_an_error():
    session = ReorderSession(client=None)

    with pytest.raises(RuntimeError):
        await session.drop(1)


def test_default_step_matches_position_step_setting(settings):
    session = ReorderSession(client=None)

    assert session.step == settings.NAVIGATION_POSITION_STEP
    assert plan_reorder(sample_rows(), dragged_id=3, target_id=1, step=session.step).positions[1] == session.step
