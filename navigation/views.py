# navigation/views.py
import logging

from rest_framework import permissions, status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import HasRole

from . import services
from .exceptions import store_operation
from .filters import visible_items_for
from .policy import NavigationType
from .serializers import (
    NavigationItemSerializer,
    OutlineItemSerializer,
    PositionSerializer,
    PublicNavigationItemSerializer,
)

logger = logging.getLogger(__name__)


def envelope(data=None, message=None, status_code=status.HTTP_200_OK):
    body = {"isSuccess": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return Response(body, status=status_code)


class NavigationView(APIView):
    """
    Returns the active navigation items the current user may see.
    An item gated by a tool is only returned when one of the user's roles
    grants that tool.

    Frontend usage:
      GET /api/navigation/
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        with store_operation("fetch navigation items", user=str(request.user)):
            items = visible_items_for(request.user)

        serializer = PublicNavigationItemSerializer(items, many=True)
        return envelope(serializer.data)


class AdminNavigationView(APIView):
    """
    GET   /api/admin/navigation/[?layout=outline]  every item, active or not
    POST  /api/admin/navigation/                   create-or-update by probe
    PATCH /api/admin/navigation/                   {id, position} only
    """

    permission_classes = [permissions.IsAuthenticated, HasRole]

    def get(self, request):
        layout = request.query_params.get("layout", "flat")
        if layout not in ("flat", "outline"):
            raise ValidationError({"layout": ["Must be 'flat' or 'outline'."]})

        logger.info("Fetching navigation items for admin (%s)", layout)
        with store_operation("fetch navigation items", layout=layout):
            if layout == "outline":
                nodes = services.list_outline()
                data = OutlineItemSerializer(nodes, many=True).data
            else:
                data = NavigationItemSerializer(services.list_items(), many=True).data

        logger.info("Navigation items retrieved successfully (%s items)", len(data))
        return envelope(data)

    def post(self, request):
        logger.info("Processing navigation item create/update request")
        if not isinstance(request.data, dict):
            raise ValidationError({"non_field_errors": ["Expected a JSON object."]})
        with store_operation("save navigation item", label=request.data.get("label")):
            item, created = services.upsert_item(request.data)

        message = (
            "Navigation item created successfully"
            if created
            else "Navigation item updated successfully"
        )
        return envelope(
            NavigationItemSerializer(item).data,
            message=message,
            status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def patch(self, request):
        serializer = PositionSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Invalid position update %s", request.data)
            raise ValidationError(serializer.errors)

        item_id = serializer.validated_data["id"]
        position = serializer.validated_data["position"]
        with store_operation("update position", id=item_id, position=position):
            item = services.set_position(item_id, position)

        return envelope(NavigationItemSerializer(item).data, message="Position updated successfully")


class AdminNavigationDetailView(APIView):
    """
    DELETE /api/admin/navigation/<id>/
    Removes the item and everything nested under it.
    """

    permission_classes = [permissions.IsAuthenticated, HasRole]

    def delete(self, request, pk: int):
        logger.info("Deleting navigation item %s", pk)
        with store_operation("delete navigation item", id=pk):
            removed = services.delete_item(pk)

        return envelope(
            message=f"Navigation item deleted successfully ({removed} removed)",
        )


class CandidateParentListView(APIView):
    """
    GET /api/admin/navigation/parents/?type=page&exclude=12

    Items the editor may offer as parents for a node of the given type.
    """

    permission_classes = [permissions.IsAuthenticated, HasRole]

    def get(self, request):
        node_type = request.query_params.get("type")
        if node_type not in NavigationType.values:
            raise ValidationError({"type": [f"Must be one of: {', '.join(NavigationType.values)}."]})

        exclude = request.query_params.get("exclude")
        try:
            exclude_id = int(exclude) if exclude else None
        except ValueError:
            raise ValidationError({"exclude": ["A valid integer is required."]})

        with store_operation("fetch candidate parents", type=node_type):
            parents = services.candidate_parents(node_type, exclude_id=exclude_id)

        return envelope(NavigationItemSerializer(parents, many=True).data)
