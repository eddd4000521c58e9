import logging

from django.db import DatabaseError, connections
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError:
        logger.exception('health check: database unreachable')
        return JsonResponse({'ok': False, 'db': False}, status=500)
    return JsonResponse({'ok': True, 'db': bool(row and row[0] == 1)})
