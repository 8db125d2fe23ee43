# navigation/services.py
"""
Store-side navigation operations used by the admin views and the seeding
command. Every function here may raise ``django.db.DatabaseError``; the
views wrap calls in ``store_operation``.
"""
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from .models import NavigationItem
from .policy import allowed_parent_types
from .serializers import NavigationItemWriteSerializer
from .tree import outline

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("label", "icon", "type")


def list_items():
    """Every item, active or not, in store order."""
    return list(NavigationItem.objects.all())


def list_outline():
    return outline(list_items())


def missing_required_fields(payload) -> list[str]:
    return [field for field in REQUIRED_FIELDS if not payload.get(field)]


def _probe_id(payload):
    raw = payload.get("id")
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError({"id": ["A valid integer is required."]})


def upsert_item(payload):
    """
    Create-or-update by probe.

    When ``payload["id"]`` names an existing row, the payload is merged over
    it. Otherwise a new row is created and any supplied id is discarded.
    Returns ``(item, created)``.
    """
    missing = missing_required_fields(payload)
    if missing:
        logger.warning("Missing required fields %s (provided: %s)", missing, sorted(payload))
        raise ValidationError({field: ["This field is required."] for field in missing})

    probe_id = _probe_id(payload)
    existing = None
    if probe_id is not None:
        logger.info("Checking if navigation item %s exists for update", probe_id)
        existing = NavigationItem.objects.filter(pk=probe_id).first()

    data = {key: value for key, value in payload.items() if key != "id"}
    serializer = NavigationItemWriteSerializer(instance=existing, data=data)
    serializer.is_valid(raise_exception=True)

    with transaction.atomic():
        item = serializer.save()

    if existing is not None:
        logger.info("Updated navigation item %s", item.pk)
        # re-read so the response reflects what the store holds
        return NavigationItem.objects.select_related("tool").get(pk=item.pk), False

    if probe_id is not None:
        logger.info("Navigation item %s not found; created %s instead", probe_id, item.pk)
    else:
        logger.info("Created navigation item %s (%s, %s)", item.pk, item.label, item.type)
    return item, True


def set_position(item_id: int, position: int) -> NavigationItem:
    updated = NavigationItem.objects.filter(pk=item_id).update(position=position)
    if not updated:
        logger.warning("Navigation item %s not found for position update", item_id)
        raise NotFound("Item not found")
    logger.info("Navigation item %s moved to position %s", item_id, position)
    return NavigationItem.objects.get(pk=item_id)


def delete_item(item_id: int) -> int:
    """
    Delete an item and, through the cascading parent key, its subtree.
    Deleting a missing id is not an error. Returns the number of rows removed.
    """
    deleted, _ = NavigationItem.objects.filter(pk=item_id).delete()
    logger.info("Deleted navigation item %s (%s rows)", item_id, deleted)
    return deleted


def candidate_parents(node_type, exclude_id=None) -> list[NavigationItem]:
    """Items a node of ``node_type`` may be placed under."""
    parent_types = [t.value for t in allowed_parent_types(node_type)]
    if not parent_types:
        return []
    qs = NavigationItem.objects.filter(type__in=parent_types)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    return list(qs)
