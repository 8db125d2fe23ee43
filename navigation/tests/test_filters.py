import pytest

from navigation.filters import filter_visible, is_visible, visible_items_for
from navigation.policy import NavigationType

pytestmark = pytest.mark.django_db


def test_ungated_item_is_always_visible(make_item):
    assert is_visible(make_item("Home"), set())


def test_gated_item_needs_matching_grant(make_item, make_tool):
    item = make_item("Reports", tool=make_tool("reports"))

    assert is_visible(item, {"reports"})
    assert not is_visible(item, {"billing"})
    assert not is_visible(item, set())


def test_filtering_is_per_node(make_item, make_tool):
    section = make_item("Finance", type=NavigationType.SECTION, tool=make_tool("finance"))
    child = make_item("Invoices", parent=section)

    # the section is hidden but its ungated child still passes
    assert filter_visible([section, child], set()) == [child]


def test_visible_items_for_user(member_user, make_item, make_tool, grant_tools):
    x = make_tool("x")
    y = make_tool("y")
    a = make_item("A", position=0, tool=x)
    make_item("B", position=10, tool=y)
    c = make_item("C", position=20)
    make_item("D", position=30, is_active=False)
    grant_tools(member_user, x)

    assert visible_items_for(member_user) == [a, c]


def test_grants_from_several_roles_are_combined(member_user, make_item, make_tool, grant_tools):
    x = make_tool("x")
    y = make_tool("y")
    a = make_item("A", position=0, tool=x)
    b = make_item("B", position=10, tool=y)
    grant_tools(member_user, x, role_name="first")
    grant_tools(member_user, y, role_name="second")

    assert visible_items_for(member_user) == [a, b]
