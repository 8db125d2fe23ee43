# navigation/serializers.py
from rest_framework import serializers

from accounts.models import Tool

from .models import NavigationItem
from .policy import (
    NavigationIcon,
    NavigationType,
    PolicyError,
    check_children,
    check_parent,
    resolve_link,
)

# bounds of the 32-bit integer position column
POSITION_MIN = -2_147_483_648
POSITION_MAX = 2_147_483_647


class NavigationItemSerializer(serializers.ModelSerializer):
    parentId = serializers.IntegerField(source="parent_id", allow_null=True, read_only=True)
    toolId = serializers.IntegerField(source="tool_id", allow_null=True, read_only=True)
    requiresRole = serializers.CharField(source="requires_role", allow_null=True, read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = NavigationItem
        fields = [
            "id",
            "label",
            "icon",
            "link",
            "description",
            "type",
            "parentId",
            "toolId",
            "requiresRole",
            "position",
            "isActive",
            "createdAt",
        ]


class OutlineItemSerializer(NavigationItemSerializer):
    """
    Serializes a ``tree.TreeNode`` wrapping a NavigationItem, adding its
    depth and whether it has children.
    """

    def to_representation(self, node):
        data = super().to_representation(node.item)
        data["level"] = node.level
        data["hasChildren"] = node.has_children
        return data


class PublicNavigationItemSerializer(NavigationItemSerializer):
    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.type == NavigationType.PAGE and not data.get("link"):
            data["link"] = f"/page/{instance.pk}"
        return data


class OptionalIdField(serializers.IntegerField):
    """Treats '', 0 and null as "no reference"."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data in ("", 0, "0"):
            return (True, None)
        return super().validate_empty_values(data)


class JSONNumberField(serializers.IntegerField):
    """Accepts JSON numbers with an integral value only; no strings or booleans."""

    default_error_messages = {
        "not_a_number": "Must be a number.",
    }

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("not_a_number")
        if isinstance(data, float) and not data.is_integer():
            self.fail("invalid")
        return super().to_internal_value(int(data))


class NavigationItemWriteSerializer(serializers.Serializer):
    """
    Create-or-update payload. On update only the supplied fields are merged
    over the stored row; label, icon and type are required either way.
    """

    label = serializers.CharField(max_length=255)
    icon = serializers.ChoiceField(
        choices=NavigationIcon.choices,
        error_messages={"invalid_choice": "Invalid icon"},
    )
    type = serializers.ChoiceField(choices=NavigationType.choices)
    link = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=512)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    parentId = OptionalIdField(source="parent_id")
    toolId = OptionalIdField(source="tool_id")
    requiresRole = serializers.CharField(
        source="requires_role", required=False, allow_null=True, allow_blank=True, max_length=100
    )
    position = serializers.IntegerField(
        required=False, allow_null=True, min_value=POSITION_MIN, max_value=POSITION_MAX
    )
    isActive = serializers.BooleanField(source="is_active", required=False)

    def _effective(self, attrs, field, default=None):
        if field in attrs:
            return attrs[field]
        if self.instance is not None:
            return getattr(self.instance, field)
        return default

    def validate_requiresRole(self, value):
        return value or None

    def validate(self, attrs):
        node_type = attrs["type"]
        parent_id = self._effective(attrs, "parent_id")
        tool_id = self._effective(attrs, "tool_id")

        parent = None
        if parent_id is not None:
            if self.instance is not None and parent_id == self.instance.pk:
                raise serializers.ValidationError({"parentId": ["An item cannot be its own parent."]})
            parent = NavigationItem.objects.filter(pk=parent_id).only("id", "type").first()
            if parent is None:
                raise serializers.ValidationError({"parentId": ["Parent item does not exist."]})

        try:
            check_parent(node_type, parent.type if parent else None)
        except PolicyError as exc:
            raise serializers.ValidationError({"parentId": [str(exc)]})

        if self.instance is not None:
            child_types = self.instance.children.values_list("type", flat=True).distinct()
            try:
                check_children(node_type, child_types)
            except PolicyError as exc:
                raise serializers.ValidationError({"type": [str(exc)]})

        if tool_id is not None and not Tool.objects.filter(pk=tool_id).exists():
            raise serializers.ValidationError({"toolId": ["Tool does not exist."]})

        try:
            attrs["link"] = resolve_link(node_type, attrs["label"], self._effective(attrs, "link"))
        except PolicyError as exc:
            raise serializers.ValidationError({"link": [str(exc)]})

        if "position" in attrs and attrs["position"] is None:
            attrs["position"] = 0
        return attrs

    def create(self, validated_data):
        return NavigationItem.objects.create(**validated_data)

    def update(self, instance, validated_data):
        for field, value in validated_data.items():
            setattr(instance, field, value)
        instance.save(update_fields=list(validated_data))
        return instance


class PositionSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    position = JSONNumberField(min_value=POSITION_MIN, max_value=POSITION_MAX)
