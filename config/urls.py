"""
SIMS — Root URL Configuration

All API endpoints are namespaced under /api/v1/. The health check lives
outside the versioned API and requires no authentication.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.views import health_check

admin.site.site_header = 'SIMS Administration'
admin.site.site_title = 'SIMS'
admin.site.index_title = 'Spare Part Inventory'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """SIMS API v1 — endpoint directory."""
    return Response({
        'auth': {
            'login': reverse('api-v1:login', request=request, format=format),
            'refresh': reverse('api-v1:token-refresh', request=request, format=format),
        },
        'spare_parts': reverse('api-v1:catalog:part-list', request=request, format=format),
        'stock_in': reverse('api-v1:stock:stock-in-list', request=request, format=format),
        'stock_out': reverse('api-v1:stock:stock-out-list', request=request, format=format),
        'reports': {
            'daily_stock_out': reverse('api-v1:reports:daily-stock-out', request=request, format=format),
            'stock_status': reverse('api-v1:reports:stock-status', request=request, format=format),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/login/', TokenObtainPairView.as_view(), name='login'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('spare-parts/', include('catalog.urls', namespace='catalog')),
    path('reports/', include('reports.urls', namespace='reports')),
    path('', include('stock.urls', namespace='stock')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/health/', health_check, name='health'),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
