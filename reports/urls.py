"""
Reports — URL Configuration

@file reports/urls.py
"""

from django.urls import path

from .views import DailyStockOutReportView, StockStatusReportView

app_name = 'reports'

urlpatterns = [
    path('daily-stock-out/', DailyStockOutReportView.as_view(), name='daily-stock-out'),
    path('stock-status/', StockStatusReportView.as_view(), name='stock-status'),
]
