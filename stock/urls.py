"""
Stock — URL Configuration

@file stock/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import StockViewSet

app_name = 'stock'

router = DefaultRouter()
router.register('', StockViewSet, basename='stock')

urlpatterns = [
    path('', include(router.urls)),
]
