"""
Stock — URL Configuration

@file stock/urls.py
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import StockInViewSet, StockOutViewSet

app_name = 'stock'

router = SimpleRouter()
router.register('stock-in', StockInViewSet, basename='stock-in')
router.register('stock-out', StockOutViewSet, basename='stock-out')

urlpatterns = [
    path('', include(router.urls)),
]
