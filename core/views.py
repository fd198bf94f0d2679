"""
Core — Views

Unauthenticated liveness endpoint.

@file core/views.py
"""

import logging

from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger('sims')


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Reports service status and whether the database answers."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        database = 'ok'
    except DatabaseError as exc:
        logger.warning('Health check: database unavailable: %s', exc)
        database = 'unavailable'

    healthy = database == 'ok'
    return Response(
        {
            'status': 'OK' if healthy else 'DEGRADED',
            'database': database,
            'timestamp': timezone.now().isoformat(),
        },
        status=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
