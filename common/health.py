"""
Health endpoints for load balancers and uptime monitors.

/health/        process is up
/health/ready/  database and cache answer (503 otherwise)
/health/deep/   as ready, with latencies and row counts per table
"""
import logging
import time

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.urls import path
from django.views.decorators.http import require_GET

from assets.models import Asset
from audit.models import AuditLog
from categories.models import Category
from directory.models import DirectoryUser
from users.models import User

logger = logging.getLogger(__name__)

VERSION = '1.0.0'
CACHE_PROBE_KEY = 'health:probe'


def _ping_database():
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
        cursor.fetchone()
    return True


def _ping_cache():
    cache.set(CACHE_PROBE_KEY, 'ok', 10)
    ok = cache.get(CACHE_PROBE_KEY) == 'ok'
    cache.delete(CACHE_PROBE_KEY)
    return ok


def _timed(name, probe, errors):
    """Run a probe; returns {'status', 'latency_ms'} and collects the error message"""
    start = time.monotonic()
    try:
        ok = probe()
    except DatabaseError as e:
        logger.error(f"Health check: {name} unavailable: {e}")
        errors.append(f"{name}: {e}")
        ok = False
    else:
        if not ok:
            errors.append(f"{name}: read/write failed")
    latency = round((time.monotonic() - start) * 1000, 2)
    return {'status': ok, 'latency_ms': latency if ok else None}


def _run_checks():
    errors = []
    checks = {
        'database': _timed('database', _ping_database, errors),
        'cache': _timed('cache', _ping_cache, errors),
    }
    return checks, errors


@require_GET
def health_check(request):
    return JsonResponse({'status': 'healthy', 'timestamp': time.time()})


@require_GET
def readiness_check(request):
    checks, errors = _run_checks()
    ready = all(check['status'] for check in checks.values())
    return JsonResponse({
        'status': 'ready' if ready else 'not_ready',
        'timestamp': time.time(),
        'checks': {name: check['status'] for name, check in checks.items()},
        'errors': errors or None,
    }, status=200 if ready else 503)


@require_GET
def deep_health_check(request):
    """Readiness plus table counts; hits every table, keep it off tight polling loops"""
    checks, errors = _run_checks()
    healthy = all(check['status'] for check in checks.values())

    if checks['database']['status']:
        try:
            checks['tables'] = {
                'users': User.objects.count(),
                'assets': Asset.objects.count(),
                'categories': Category.objects.count(),
                'directory_users': DirectoryUser.objects.count(),
                'audit_logs': AuditLog.objects.count(),
            }
        except DatabaseError as e:
            # Connected but the schema is missing, usually pending migrations
            logger.error(f"Deep health check: table count failed: {e}")
            errors.append(f"tables: {e}")
            healthy = False

    return JsonResponse({
        'status': 'healthy' if healthy else 'unhealthy',
        'timestamp': time.time(),
        'version': VERSION,
        'checks': checks,
        'errors': errors or None,
    }, status=200 if healthy else 503)


def get_health_urls():
    return [
        path('health/', health_check, name='health_check'),
        path('health/ready/', readiness_check, name='readiness_check'),
        path('health/deep/', deep_health_check, name='deep_health_check'),
    ]
