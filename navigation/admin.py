# navigation/admin.py
from django.contrib import admin

from .models import NavigationItem


@admin.register(NavigationItem)
class NavigationItemAdmin(admin.ModelAdmin):
    list_display = ("id", "label", "type", "parent", "position", "tool", "is_active")
    list_filter = ("type", "is_active", "tool")
    search_fields = ("label", "link", "description")
    ordering = ("parent__id", "position", "id")
    list_select_related = ("parent", "tool")
