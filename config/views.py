import logging

from django.db import connection, DatabaseError
from django.http import JsonResponse

logger = logging.getLogger('apps.health')


def health_check(request):
    """Liveness probe that also touches the database."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        return JsonResponse({'status': 'degraded', 'database': 'unavailable'}, status=503)
    return JsonResponse({'status': 'ok', 'database': 'ok'})


def error_404(request, exception):
    """JSON 404 for unknown routes."""
    return JsonResponse({'error': 'Not found', 'status': 404}, status=404)


def error_500(request):
    """JSON 500; persistence errors end up here."""
    return JsonResponse({'error': 'Internal server error', 'status': 500}, status=500)
