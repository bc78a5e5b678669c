"""
Pyramid Books Root URL Configuration
Thin adapter routes only.
"""

from django.urls import include, path


urlpatterns = [
    path("api/", include("adapters.django_api.urls")),
]
