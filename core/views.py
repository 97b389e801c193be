import logging
import time

from django.conf import settings
from django.db import DatabaseError, connection
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework import status

logger = logging.getLogger("showcase")


def database_reachable() -> bool:
    try:
        connection.ensure_connection()
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as e:
        logger.warning(f"Health check could not reach the database: {e}")
        return False
    return True


class HealthCheckView(APIView):
    """
    GET /api/health/ for uptime monitors and container probes.
    Answers 503 while the database is unreachable.
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = []

    def get(self, request):
        started = time.perf_counter()
        db_ok = database_reachable()
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        payload = {
            "status": "ok" if db_ok else "degraded",
            "db": db_ok,
            "env": settings.ENV,
            "latency_ms": elapsed_ms,
        }
        code = status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE
        return Response(payload, status=code)
