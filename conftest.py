import pytest
from rest_framework.test import APIClient

from accounts.models import Role, Tool, User
from navigation.models import NavigationItem
from navigation.policy import NavigationIcon, NavigationType


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_role(settings):
    role, _ = Role.objects.get_or_create(name=settings.NAVIGATION_ADMIN_ROLE, defaults={"is_system": True})
    return role


@pytest.fixture
def admin_user(admin_role):
    user = User.objects.create_user(email="admin@example.com", password="pw-admin-123")
    user.roles.add(admin_role)
    return user


@pytest.fixture
def member_user():
    return User.objects.create_user(email="member@example.com", password="pw-member-123")


@pytest.fixture
def admin_client(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def member_client(api_client, member_user):
    api_client.force_authenticate(user=member_user)
    return api_client


@pytest.fixture
def make_tool():
    def _make(identifier, name=None):
        return Tool.objects.create(identifier=identifier, name=name or identifier.title())
    return _make


@pytest.fixture
def grant_tools():
    """Give ``user`` a fresh role holding ``tools``."""
    def _grant(user, *tools, role_name="members"):
        role, _ = Role.objects.get_or_create(name=role_name)
        role.tools.add(*tools)
        user.roles.add(role)
        return role
    return _grant


@pytest.fixture
def make_item():
    def _make(label="Item", type=NavigationType.LINK, parent=None, position=0, **extra):
        extra.setdefault("icon", NavigationIcon.HOME)
        if type == NavigationType.LINK:
            extra.setdefault("link", f"/{label.lower().replace(' ', '-')}")
        return NavigationItem.objects.create(
            label=label, type=type, parent=parent, position=position, **extra
        )
    return _make
