"""Tests for the end-user navigation listing."""

import pytest
from django.urls import reverse

from navigation.policy import NavigationType

pytestmark = pytest.mark.django_db

URL = reverse("navigation:navigation_list")


def labels(response):
    return [row["label"] for row in response.json()["data"]]


def test_requires_authentication(api_client):
    response = api_client.get(URL)

    assert response.status_code == 401
    assert response.json()["isSuccess"] is False


def test_any_authenticated_user_may_read(member_client, make_item):
    make_item("Home")

    response = member_client.get(URL)

    assert response.status_code == 200
    assert response.json()["isSuccess"] is True
    assert labels(response) == ["Home"]


def test_tool_gated_items_follow_grants(member_client, member_user, make_item, make_tool, grant_tools):
    reports = make_tool("reports")
    billing = make_tool("billing")
    make_item("Open", position=0)
    make_item("Reports", position=10, tool=reports)
    make_item("Billing", position=20, tool=billing)
    grant_tools(member_user, reports)

    assert labels(member_client.get(URL)) == ["Open", "Reports"]


def test_inactive_items_are_hidden(member_client, make_item):
    make_item("Shown")
    make_item("Retired", is_active=False)

    assert labels(member_client.get(URL)) == ["Shown"]


def test_admin_role_does_not_bypass_tool_gating(admin_client, make_item, make_tool):
    make_item("Gated", tool=make_tool("reports"))

    assert labels(admin_client.get(URL)) == []


def test_page_without_link_falls_back_to_id(member_client, make_item):
    page = make_item("Landing", type=NavigationType.PAGE)
    make_item("Named", type=NavigationType.PAGE, link="/page/named", position=10)

    data = {row["label"]: row["link"] for row in member_client.get(URL).json()["data"]}

    assert data == {"Landing": f"/page/{page.pk}", "Named": "/page/named"}
