"""
Stockroom — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

admin.site.site_header = 'Stockroom Administration'
admin.site.site_title = 'Stockroom'
admin.site.index_title = 'Inventory ledger'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """Stockroom API v1 — endpoint directory."""
    return Response({
        'auth': {
            'token': reverse('api-v1:token-obtain', request=request, format=format),
            'refresh': reverse('api-v1:token-refresh', request=request, format=format),
        },
        'products': {
            'list': reverse('api-v1:products:product-list', request=request, format=format),
            'low_stock': reverse('api-v1:products:product-low-stock', request=request, format=format),
        },
        'stock': {
            'add': reverse('api-v1:stock:stock-add', request=request, format=format),
            'remove': reverse('api-v1:stock:stock-remove', request=request, format=format),
            'history': reverse('api-v1:stock:stock-history', request=request, format=format),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('products/', include('products.urls', namespace='products')),
    path('stock/', include('stock.urls', namespace='stock')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
