"""
Catalog — URL Configuration

@file catalog/urls.py
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import PartViewSet

app_name = 'catalog'

router = SimpleRouter()
router.register('', PartViewSet, basename='part')

urlpatterns = [
    path('', include(router.urls)),
]
