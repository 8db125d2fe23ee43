import pytest
from django.contrib.auth.models import AnonymousUser

from accounts.grants import get_user_roles, get_user_tools, has_role, has_tool_access
from accounts.permissions import HasRole

pytestmark = pytest.mark.django_db


def test_tools_are_collected_across_roles(member_user, make_tool, grant_tools):
    grant_tools(member_user, make_tool("reports"), role_name="analyst")
    grant_tools(member_user, make_tool("billing"), make_tool("reports-2"), role_name="finance")

    assert get_user_tools(member_user) == {"reports", "billing", "reports-2"}
    assert has_tool_access(member_user, "billing")
    assert not has_tool_access(member_user, "payroll")


def test_user_without_roles_has_no_grants(member_user):
    assert get_user_tools(member_user) == set()
    assert get_user_roles(member_user) == []


def test_anonymous_user_has_nothing():
    anonymous = AnonymousUser()

    assert get_user_tools(anonymous) == set()
    assert get_user_roles(anonymous) == []
    assert not has_role(anonymous, "administrator")
    assert not has_tool_access(anonymous, "reports")


def test_has_role(admin_user, member_user, admin_role):
    assert has_role(admin_user, admin_role.name)
    assert not has_role(member_user, admin_role.name)
    assert admin_user.is_navigation_admin
    assert not member_user.is_navigation_admin


def test_with_role_builds_a_specific_check(rf, member_user, grant_tools):
    grant_tools(member_user, role_name="editor")
    request = rf.get("/")
    request.user = member_user

    assert HasRole.with_role("editor")().has_permission(request, view=None)
    assert not HasRole.with_role("publisher")().has_permission(request, view=None)
    assert not HasRole().has_permission(request, view=None)
