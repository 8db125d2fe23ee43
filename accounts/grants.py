# accounts/grants.py
"""
Role and tool-grant lookups.

A user's tool grants are the identifiers of every tool assigned to any of
their roles. Anonymous users have no roles and therefore no grants.
"""
from .models import Tool


def _is_authenticated(user) -> bool:
    return user is not None and getattr(user, "is_authenticated", False)


def get_user_tools(user) -> set[str]:
    if not _is_authenticated(user):
        return set()

    identifiers = (
        Tool.objects.filter(roles__users=user)
        .values_list("identifier", flat=True)
        .distinct()
    )
    return set(identifiers)


def has_tool_access(user, tool_identifier: str) -> bool:
    if not _is_authenticated(user) or not tool_identifier:
        return False
    return Tool.objects.filter(roles__users=user, identifier=tool_identifier).exists()


def get_user_roles(user) -> list[str]:
    if not _is_authenticated(user):
        return []
    return list(user.roles.values_list("name", flat=True))


def has_role(user, role_name: str) -> bool:
    if not _is_authenticated(user) or not role_name:
        return False
    return user.roles.filter(name=role_name).exists()
