# accounts/views.py
import logging

from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from .models import Role, Tool
from .permissions import HasRole
from .serializers import (
    EmailTokenObtainPairSerializer,
    RoleSerializer,
    ToolSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class EmailLoginView(TokenObtainPairView):
    serializer_class = EmailTokenObtainPairSerializer
    permission_classes = [permissions.AllowAny]


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        serializer = UserSerializer(request.user, context={"request": request})
        return Response({"isSuccess": True, "data": serializer.data})


class ToolListView(APIView):
    """
    GET /api/admin/tools/

    Active tools, used to populate the navigation editor's tool picker.
    """

    permission_classes = [permissions.IsAuthenticated, HasRole]

    def get(self, request):
        tools = Tool.objects.filter(is_active=True).order_by("name")
        logger.info("Listing %s tools for %s", tools.count(), request.user)
        return Response({"isSuccess": True, "data": ToolSerializer(tools, many=True).data})


class RoleListView(APIView):
    """
    GET /api/admin/roles/
    """

    permission_classes = [permissions.IsAuthenticated, HasRole]

    def get(self, request):
        roles = Role.objects.prefetch_related("tools").order_by("name")
        return Response({"isSuccess": True, "data": RoleSerializer(roles, many=True).data})
