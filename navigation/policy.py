# navigation/policy.py
"""
Type and slug rules for navigation entries.

Parentage:
    section -> top level only
    page    -> top level, or under a section
    link    -> top level, or under a section or page; needs a non-empty link

Pages never keep a caller-supplied link: it is always derived from the
label as ``/page/<slug>``.
"""
import re

from django.db import models


class NavigationType(models.TextChoices):
    LINK = "link", "Link"
    SECTION = "section", "Section"
    PAGE = "page", "Page"


class NavigationIcon(models.TextChoices):
    HOME = "IconHome", "Home"
    CHALKBOARD = "IconChalkboard", "Chalkboard"
    BUILDING_BANK = "IconBuildingBank", "Building Bank"
    BRIEFCASE = "IconBriefcase", "Briefcase"
    SHIELD = "IconShield", "Shield"
    BULB = "IconBulb", "Bulb"
    FLASK = "IconFlask", "Flask"
    CHART_BAR = "IconChartBar", "Chart Bar"
    BRACES = "IconBraces", "Braces"
    FILE_ANALYTICS = "IconFileAnalytics", "File Analytics"
    MESSAGE_CIRCLE = "IconMessageCircle", "Message Circle"
    USERS_GROUP = "IconUsersGroup", "Users Group"
    USER = "IconUser", "User"
    ROBOT = "IconRobot", "Robot"
    TOOLS = "IconTools", "Tools"


# child type -> parent types it may hang under
ALLOWED_PARENT_TYPES = {
    NavigationType.SECTION: frozenset(),
    NavigationType.PAGE: frozenset({NavigationType.SECTION}),
    NavigationType.LINK: frozenset({NavigationType.SECTION, NavigationType.PAGE}),
}

# parent type -> child types it may hold
ALLOWED_CHILD_TYPES = {
    parent_type: frozenset(
        child for child, parents in ALLOWED_PARENT_TYPES.items() if parent_type in parents
    )
    for parent_type in NavigationType
}

PAGE_LINK_PREFIX = "/page/"

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


class PolicyError(ValueError):
    """Raised when a node would break the type, parent or link rules."""


def slugify_label(label: str) -> str:
    """
    Lowercase, collapse every run of non [a-z0-9] characters into a single
    hyphen, strip hyphens from both ends.

    >>> slugify_label("My Cool Page!")
    'my-cool-page'
    """
    return _NON_ALNUM_RUN.sub("-", (label or "").lower()).strip("-")


def page_link(label: str) -> str:
    return f"{PAGE_LINK_PREFIX}{slugify_label(label)}"


def allowed_parent_types(node_type) -> frozenset:
    return ALLOWED_PARENT_TYPES[NavigationType(node_type)]


def check_parent(node_type, parent_type) -> None:
    """
    ``parent_type`` is None for a top-level node. Every type may be top level.
    """
    if parent_type is None:
        return

    node_type = NavigationType(node_type)
    parent_type = NavigationType(parent_type)

    if node_type == NavigationType.SECTION:
        raise PolicyError("Sections are top-level only and cannot have a parent.")
    if parent_type not in ALLOWED_PARENT_TYPES[node_type]:
        allowed = " or ".join(sorted(t.value for t in ALLOWED_PARENT_TYPES[node_type]))
        raise PolicyError(
            f"A {node_type.value} can only be placed under a {allowed}, not a {parent_type.value}."
        )


def check_children(node_type, child_types) -> None:
    """Ensure a node of ``node_type`` can still hold its existing children."""
    node_type = NavigationType(node_type)
    allowed = ALLOWED_CHILD_TYPES[node_type]
    bad = sorted({NavigationType(t).value for t in child_types} - {t.value for t in allowed})
    if bad:
        raise PolicyError(
            f"A {node_type.value} cannot contain {', '.join(bad)} items; move them first."
        )


def resolve_link(node_type, label: str, link):
    """Return the link to store for a node of the given type."""
    node_type = NavigationType(node_type)
    if node_type == NavigationType.PAGE:
        return page_link(label)
    if node_type == NavigationType.LINK:
        link = (link or "").strip()
        if not link:
            raise PolicyError("Link is required for link items.")
        return link
    return link or None
