"""
Health Check Views

Endpoints for monitoring:
- Database connectivity
- Presence of the application tables
- Liveness of the process
"""

import logging

from django.apps import apps
from django.db import connection
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)

APP_LABELS = ('accounts', 'competencies', 'projects', 'assessments', 'curriculum', 'reports')


class HealthCheckService:
    """Service for performing health checks on system components."""

    @staticmethod
    def check_database():
        """
        Check database connectivity.

        Returns:
            dict: Health status with details
        """
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            return {
                'status': 'healthy',
                'database': 'connected',
                'vendor': connection.vendor,
            }
        except Exception as e:
            logger.error("Database health check failed: %s", e)
            return {
                'status': 'unhealthy',
                'database': 'disconnected',
                'error': str(e),
            }

    @staticmethod
    def check_tables():
        """
        Verify that every application model has its table.

        Returns:
            dict: Table status with the missing table names
        """
        try:
            required = {
                model._meta.db_table
                for label in APP_LABELS
                for model in apps.get_app_config(label).get_models()
            }
            existing = set(connection.introspection.table_names())
            missing = sorted(required - existing)
            return {
                'status': 'healthy' if not missing else 'degraded',
                'total_required': len(required),
                'missing': missing,
            }
        except Exception as e:
            logger.error("Table health check failed: %s", e)
            return {
                'status': 'unhealthy',
                'error': str(e),
            }

    @staticmethod
    def get_system_status():
        """Overall status is the worst status among the checks."""
        database_status = HealthCheckService.check_database()
        table_status = HealthCheckService.check_tables()

        statuses = [database_status.get('status'), table_status.get('status')]
        if 'unhealthy' in statuses:
            overall = 'unhealthy'
        elif 'degraded' in statuses:
            overall = 'degraded'
        else:
            overall = 'healthy'

        return {
            'status': overall,
            'timestamp': timezone.now().isoformat(),
            'checks': {
                'database': database_status,
                'tables': table_status,
            },
        }


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """Simple health check endpoint: 200 when the database answers, 503 otherwise."""
    health = HealthCheckService.check_database()
    if health['status'] == 'healthy':
        return Response(health, status=status.HTTP_200_OK)
    return Response(health, status=status.HTTP_503_SERVICE_UNAVAILABLE)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def readiness_check(request):
    """Ready when the database is reachable and no table is missing."""
    system_status = HealthCheckService.get_system_status()
    is_ready = (
        system_status['checks']['database']['status'] == 'healthy'
        and not system_status['checks']['tables'].get('missing')
    )
    if is_ready:
        return Response({'ready': True, 'message': 'System is ready'}, status=status.HTTP_200_OK)
    return Response(
        {'ready': False, 'message': 'System is not ready', 'status': system_status},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def liveness_check(request):
    return Response({'alive': True, 'message': 'Service is running'}, status=status.HTTP_200_OK)
