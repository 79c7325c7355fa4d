from django.urls import path
from . import views

app_name = 'portal'

urlpatterns = [
    path('', views.landing, name='landing'),
    path('dashboard/', views.dashboard, name='dashboard'),
    path('assets/', views.asset_list, name='asset_list'),
    path('assets/add/', views.asset_add, name='asset_add'),
    path('assets/<uuid:asset_id>/', views.asset_detail, name='asset_detail'),
    path('assets/<uuid:asset_id>/edit/', views.asset_edit, name='asset_edit'),
    path('assets/<uuid:asset_id>/delete/', views.asset_delete, name='asset_delete'),
    path('categories/', views.category_list, name='category_list'),
    path('categories/add/', views.category_add, name='category_add'),
    path('categories/<uuid:category_id>/edit/', views.category_edit, name='category_edit'),
    path('categories/<uuid:category_id>/delete/', views.category_delete, name='category_delete'),
    path('users/', views.directory_user_list, name='directory_user_list'),
    path('users/add/', views.directory_user_add, name='directory_user_add'),
    path('users/sync/', views.directory_sync, name='directory_sync'),
    path('users/<uuid:user_id>/edit/', views.directory_user_edit, name='directory_user_edit'),
    path('users/<uuid:user_id>/delete/', views.directory_user_delete, name='directory_user_delete'),
    path('audit/', views.audit_list, name='audit_list'),
    path('import/', views.import_upload, name='import_upload'),
    path('import/mapping/', views.import_mapping, name='import_mapping'),
    path('import/preview/', views.import_preview, name='import_preview'),
    path('import/run/', views.import_run, name='import_run'),
    path('import/cancel/', views.import_cancel, name='import_cancel'),
    path('settings/', views.settings_view, name='settings'),
]
