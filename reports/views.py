"""
Reports — Views

@file reports/views.py
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import DailyStockOutReportSerializer, StockStatusReportSerializer
from .services import ReportService


class DailyStockOutReportView(APIView):
    """GET ?date=YYYY-MM-DD (defaults to today)."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        report = ReportService.daily_stock_out(report_date=request.query_params.get('date'))
        return Response(DailyStockOutReportSerializer(report).data)


class StockStatusReportView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        report = ReportService.stock_status()
        return Response(StockStatusReportSerializer(report).data)
