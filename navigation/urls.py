# navigation/urls.py
from django.urls import path

from .views import (
    AdminNavigationDetailView,
    AdminNavigationView,
    CandidateParentListView,
    NavigationView,
)

app_name = "navigation"

urlpatterns = [
    path("", NavigationView.as_view(), name="navigation_list"),
]

# mounted under /api/admin/
admin_urlpatterns = [
    path("navigation/", AdminNavigationView.as_view(), name="admin_navigation"),
    path("navigation/parents/", CandidateParentListView.as_view(), name="admin_navigation_parents"),
    path("navigation/<int:pk>/", AdminNavigationDetailView.as_view(), name="admin_navigation_detail"),
]
