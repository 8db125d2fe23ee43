# config/urls.py
from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path

from accounts.urls import admin_urlpatterns as accounts_admin_urlpatterns
from navigation.urls import admin_urlpatterns as navigation_admin_urlpatterns

urlpatterns = [
    path("", lambda r: HttpResponse("API is running")),
    path("admin/", admin.site.urls),

    # Auth endpoints
    path("accounts/", include("accounts.urls", namespace="accounts")),

    # End-user navigation
    path("api/navigation/", include("navigation.urls", namespace="navigation")),

    # Administrator endpoints
    path("api/admin/", include((navigation_admin_urlpatterns, "navigation-admin"))),
    path("api/admin/", include((accounts_admin_urlpatterns, "accounts-admin"))),
]
