# navigation/models.py
from django.db import models

from accounts.models import Tool

from .policy import NavigationIcon, NavigationType


class NavigationItem(models.Model):
    label = models.CharField(max_length=255)
    icon = models.CharField(
        max_length=64,
        choices=NavigationIcon.choices,
        default=NavigationIcon.HOME,
    )
    link = models.CharField(
        max_length=512,
        blank=True,
        null=True,
        help_text="Route or external URL. Required for links, derived from the label for pages.",
    )
    description = models.TextField(blank=True, null=True)
    type = models.CharField(
        max_length=16,
        choices=NavigationType.choices,
        default=NavigationType.LINK,
    )

    # Deleting an item removes its whole subtree.
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children",
    )

    tool = models.ForeignKey(
        Tool,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="navigation_items",
        help_text="If empty: visible to every signed-in user. Else: needs a grant for this tool.",
    )
    requires_role = models.CharField(max_length=100, blank=True, null=True)

    # Sibling order only; not unique.
    position = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["position", "id"]
        verbose_name = "Navigation Item"
        verbose_name_plural = "Navigation Items"

    def __str__(self) -> str:
        return f"{self.label} ({self.type})"

    @property
    def tool_identifier(self):
        return self.tool.identifier if self.tool_id else None
