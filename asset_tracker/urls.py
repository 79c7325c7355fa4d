"""
URL configuration for asset_tracker project.
"""
from django.contrib import admin
from django.urls import path, include

# Import admin customization (just to apply it, not to use)
from asset_tracker import admin as admin_customization  # noqa: F401

# Import health check URLs
from common.health import get_health_urls

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('api.urls')),  # API routes
    path('accounts/', include('accounts.urls')),
    path('', include('portal.urls')),  # Server-rendered pages
]

# Add health check endpoints (for load balancers, monitoring)
urlpatterns += get_health_urls()
