# core/views.py
from django.db import DatabaseError, connection
from django.http import JsonResponse


def health(request):
    """Liveness check cho load balancer."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError:
        return JsonResponse({"status": "error", "database": False}, status=503)
    return JsonResponse({"status": "ok", "database": True})
