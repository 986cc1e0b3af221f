"""URL routing for the billboards domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import BillboardViewSet, ProfileRequestListView

router = DefaultRouter()
router.register(r"", BillboardViewSet, basename="billboard")

urlpatterns = [
    # Must come before the router so "requests" is not read as a billboard id
    path("requests/", ProfileRequestListView.as_view(), name="billboard-profile-requests"),
    path("", include(router.urls)),
]
