# accounts/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .grants import get_user_roles, get_user_tools
from .models import Role, Tool

User = get_user_model()


# SimpleJWT login via email
class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    username_field = User.EMAIL_FIELD
    default_error_messages = {
        "no_active_account": "Unable to log in with that email and password.",
    }


class UserSerializer(serializers.ModelSerializer):
    roles = serializers.SerializerMethodField()
    tools = serializers.SerializerMethodField()
    isNavigationAdmin = serializers.BooleanField(source="is_navigation_admin", read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "email", "roles", "tools", "isNavigationAdmin"]

    def get_roles(self, obj):
        return sorted(get_user_roles(obj))

    def get_tools(self, obj):
        return sorted(get_user_tools(obj))


class ToolSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tool
        fields = ["id", "identifier", "name", "description"]


class RoleSerializer(serializers.ModelSerializer):
    tools = serializers.SlugRelatedField(slug_field="identifier", many=True, read_only=True)

    class Meta:
        model = Role
        fields = ["id", "name", "description", "tools"]
