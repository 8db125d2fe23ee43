# accounts/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import Role, Tool, User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    Custom admin for our custom User model.
    Adds role assignment to the standard Django user admin.
    """

    fieldsets = DjangoUserAdmin.fieldsets + (
        ("Navigation Access", {"fields": ("roles",)}),
    )

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "username", "password1", "password2", "roles"),
        }),
    )

    list_display = ("email", "username", "is_staff", "is_superuser")
    list_filter = ("roles", "is_staff", "is_superuser")
    filter_horizontal = ("roles", "groups", "user_permissions")
    ordering = ("email",)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "is_system", "created_at")
    list_filter = ("is_system",)
    search_fields = ("name",)
    filter_horizontal = ("tools",)


@admin.register(Tool)
class ToolAdmin(admin.ModelAdmin):
    list_display = ("name", "identifier", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "identifier")
