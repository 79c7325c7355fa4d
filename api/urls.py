"""
API URLs for Asset Tracker
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from accounts import views as account_views
from assets.views import AssetViewSet
from audit.views import AuditLogViewSet
from categories.views import CategoryViewSet
from dashboard.views import stats
from directory.views import DirectoryUserViewSet, ldap_status
from imports import views as import_views

# Create router
router = DefaultRouter()
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'assets', AssetViewSet, basename='asset')
router.register(r'ad-users', DirectoryUserViewSet, basename='ad-user')
router.register(r'audit-logs', AuditLogViewSet, basename='audit-log')
router.register(r'import-templates', import_views.ImportTemplateViewSet, basename='import-template')

urlpatterns = [
    # Session authentication
    path('auth/register/', account_views.api_register, name='api_register'),
    path('auth/login/', account_views.api_login, name='api_login'),
    path('auth/logout/', account_views.api_logout, name='api_logout'),
    path('auth/user/', account_views.api_current_user, name='api_current_user'),

    # JWT Authentication (scripts and integrations)
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Directory
    path('ldap/status/', ldap_status, name='ldap_status'),

    # Dashboard
    path('stats/', stats, name='stats'),

    # Bulk import
    path('import/', import_views.import_assets, name='import_assets'),
    path('import/preview/', import_views.import_preview, name='import_preview'),
    path('import/suggest-mapping/', import_views.suggest_mapping, name='suggest_mapping'),

    # API routes
    path('', include(router.urls)),
]
