# accounts/urls.py
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import EmailLoginView, MeView, RoleListView, ToolListView

app_name = "accounts"

urlpatterns = [
    # Auth / JWT
    path("login/", EmailLoginView.as_view(), name="token_obtain_pair"),
    path("refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    # Current user
    path("me/", MeView.as_view(), name="me"),
]

# mounted under /api/admin/
admin_urlpatterns = [
    path("tools/", ToolListView.as_view(), name="tool_list"),
    path("roles/", RoleListView.as_view(), name="role_list"),
]
