"""
Health check views.

Readiness covers the database and cache, which every request path needs,
and the search daemon, which is optional: without it search falls back to
the database and readiness reports "degraded" instead of failing.
"""
from django.core.cache import cache
from django.db import connection
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


class HealthCheckView(APIView):
    """Basic health check endpoint."""
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'healthy'}, status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe over the order store, the cache and the search daemon."""
    permission_classes = [AllowAny]

    def get(self, request):
        checks = {
            'database': self._check_database(),
            'cache': self._check_cache(),
            'search': self._check_search(),
        }

        if not all(check['healthy'] for check in checks.values()):
            state, status_code = 'not_ready', status.HTTP_503_SERVICE_UNAVAILABLE
        elif any(check.get('degraded') for check in checks.values()):
            state, status_code = 'degraded', status.HTTP_200_OK
        else:
            state, status_code = 'ready', status.HTTP_200_OK

        return Response({'status': state, 'checks': checks}, status=status_code)

    def _check_database(self):
        try:
            with connection.cursor() as cursor:
                cursor.execute('SELECT 1')
            return {'healthy': True}
        except Exception as e:
            return {'healthy': False, 'error': str(e)}

    def _check_cache(self):
        try:
            cache.set('health_check', 'ok', 10)
            return {'healthy': cache.get('health_check') == 'ok'}
        except Exception as e:
            return {'healthy': False, 'error': str(e)}

    def _check_search(self):
        from modules.search.manticore import ManticoreClient

        client = ManticoreClient()
        if client.ping():
            return {'healthy': True}
        return {'healthy': True, 'degraded': True, 'error': f"{client.host}:{client.port} unreachable"}


class LivenessCheckView(APIView):
    """Liveness probe - basic application check."""
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'alive'}, status=status.HTTP_200_OK)
