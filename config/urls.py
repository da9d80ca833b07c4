from django.contrib import admin
from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.views import TokenRefreshView

from .health import health as health_view

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", health_view, name="health"),
    # JWT endpoints; the access token authenticates Socket.IO connections.
    path("api/v1/auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path(
        "api/v1/auth/jwt/refresh/",
        TokenRefreshView.as_view(),
        name="jwt-refresh",
    ),
]
