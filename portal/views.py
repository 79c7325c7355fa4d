from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator, EmptyPage, PageNotAnInteger
from django.views.decorators.http import require_POST
from django.contrib import messages
import logging

from assets.services import AssetService
from audit.repositories import AuditLogRepository
from categories.services import CategoryService
from common.decorators import admin_required, handle_errors, write_access_required
from common.utils import get_site_settings
from core.constants import AssetStatus, Pagination
from core.exceptions import BaseApplicationException, DirectoryError
from dashboard.services import StatsService
from directory.services import DirectorySyncService, DirectoryUserService
from imports.mapping import ASSET_FIELDS, apply_mappings, parse_csv
from imports.services import ImportService, summarize_preview
from .forms import (
    AssetForm, AuditFilterForm, CategoryForm, ColumnMappingForm,
    CSVUploadForm, DirectoryUserForm, SiteSettingsForm,
)

logger = logging.getLogger(__name__)

IMPORT_SESSION_KEY = 'asset_import'
PREVIEW_ROWS = 10


def _querystring(request):
    """Current filters without the page number, for pagination links"""
    params = request.GET.copy()
    params.pop('page', None)
    return params.urlencode()


def _paginate(request, queryset, per_page=Pagination.DEFAULT_PAGE_SIZE):
    paginator = Paginator(queryset, per_page)
    page = request.GET.get('page', 1)
    try:
        return paginator.page(page)
    except PageNotAnInteger:
        return paginator.page(1)
    except EmptyPage:
        return paginator.page(paginator.num_pages)


def landing(request):
    """Public landing page; signed-in users go straight to the dashboard"""
    if request.user.is_authenticated:
        return redirect('portal:dashboard')
    return render(request, 'portal/landing.html')


@login_required
@handle_errors
def dashboard(request):
    """Stat cards, recent activity and assets by category"""
    stats = StatsService().get_stats()
    recent_logs = AuditLogRepository().get_audit_logs(limit=5)

    context = {
        'stats': stats,
        'recent_logs': recent_logs,
        'status_choices': AssetStatus.CHOICES,
    }
    return render(request, 'portal/dashboard.html', context)


# ----------------------------------------------------------------------
# Assets
# ----------------------------------------------------------------------

@login_required
@handle_errors
def asset_list(request):
    search = request.GET.get('search', '').strip()
    status_filter = request.GET.get('status', '')
    category_filter = request.GET.get('category', '')

    assets = AssetService().list_assets(
        search=search,
        status=status_filter if status_filter in AssetStatus.VALUES else None,
        category_id=category_filter or None,
    )

    context = {
        'assets': _paginate(request, assets),
        'search': search,
        'status_filter': status_filter,
        'category_filter': category_filter,
        'status_choices': AssetStatus.CHOICES,
        'categories': CategoryService().list_categories(),
        'query': _querystring(request),
    }
    return render(request, 'portal/asset_list.html', context)


@login_required
@handle_errors
def asset_detail(request, asset_id):
    """One asset with its audit trail"""
    service = AssetService()
    asset = service.get(asset_id)
    return render(request, 'portal/asset_detail.html', {
        'asset': asset,
        'history': service.history(asset.pk),
    })


@login_required
@write_access_required
@handle_errors
def asset_add(request):
    form = AssetForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        try:
            asset = AssetService().create(form.cleaned_data, request=request)
        except BaseApplicationException as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f'Asset "{asset.asset_tag}" created.')
            return redirect('portal:asset_detail', asset_id=asset.pk)

    return render(request, 'portal/asset_form.html', {'form': form, 'is_edit': False})


@login_required
@write_access_required
@handle_errors
def asset_edit(request, asset_id):
    service = AssetService()
    asset = service.get(asset_id)
    form = AssetForm(request.POST or None, instance=asset)
    if request.method == 'POST' and form.is_valid():
        try:
            asset = service.update(asset_id, form.cleaned_data, request=request)
        except BaseApplicationException as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f'Asset "{asset.asset_tag}" updated.')
            return redirect('portal:asset_detail', asset_id=asset.pk)

    return render(request, 'portal/asset_form.html', {'form': form, 'asset': asset, 'is_edit': True})


@login_required
@write_access_required
@handle_errors
def asset_delete(request, asset_id):
    """Confirmation page on GET, delete on POST"""
    service = AssetService()
    asset = service.get(asset_id)

    if request.method == 'POST':
        service.delete(asset_id, request=request)
        messages.success(request, f'Asset "{asset.asset_tag}" deleted.')
        return redirect('portal:asset_list')

    return render(request, 'portal/asset_confirm_delete.html', {'asset': asset})


# ----------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------

@login_required
@handle_errors
def category_list(request):
    categories = CategoryService().repository.get_with_asset_counts()
    return render(request, 'portal/category_list.html', {'categories': categories})


@login_required
@write_access_required
@handle_errors
def category_add(request):
    form = CategoryForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        try:
            category = CategoryService().create(form.cleaned_data, request=request)
        except BaseApplicationException as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f'Category "{category.name}" created.')
            return redirect('portal:category_list')

    return render(request, 'portal/category_form.html', {'form': form, 'is_edit': False})


@login_required
@write_access_required
@handle_errors
def category_edit(request, category_id):
    service = CategoryService()
    category = service.get(category_id)
    form = CategoryForm(request.POST or None, instance=category)
    if request.method == 'POST' and form.is_valid():
        try:
            category = service.update(category_id, form.cleaned_data, request=request)
        except BaseApplicationException as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f'Category "{category.name}" updated.')
            return redirect('portal:category_list')

    return render(request, 'portal/category_form.html', {'form': form, 'category': category, 'is_edit': True})


@login_required
@write_access_required
@require_POST
@handle_errors
def category_delete(request, category_id):
    """Assets and child categories are kept, with the category cleared"""
    service = CategoryService()
    category = service.get(category_id)
    service.delete(category_id, request=request)
    messages.success(request, f'Category "{category.name}" deleted.')
    return redirect('portal:category_list')


# ----------------------------------------------------------------------
# Directory users
# ----------------------------------------------------------------------

@login_required
@handle_errors
def directory_user_list(request):
    search = request.GET.get('search', '').strip()
    users = DirectoryUserService().list_users(search=search or None)
    return render(request, 'portal/directory_user_list.html', {
        'directory_users': _paginate(request, users),
        'search': search,
        'query': _querystring(request),
    })


@login_required
@write_access_required
@handle_errors
def directory_user_add(request):
    form = DirectoryUserForm(request.POST or None, initial={'is_active': True})
    if request.method == 'POST' and form.is_valid():
        try:
            user = DirectoryUserService().create(form.cleaned_data, request=request)
        except BaseApplicationException as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f'User "{user.display_name}" created.')
            return redirect('portal:directory_user_list')

    return render(request, 'portal/directory_user_form.html', {'form': form, 'is_edit': False})


@login_required
@write_access_required
@handle_errors
def directory_user_edit(request, user_id):
    service = DirectoryUserService()
    directory_user = service.get(user_id)
    form = DirectoryUserForm(request.POST or None, instance=directory_user)
    if request.method == 'POST' and form.is_valid():
        try:
            directory_user = service.update(user_id, form.cleaned_data, request=request)
        except BaseApplicationException as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f'User "{directory_user.display_name}" updated.')
            return redirect('portal:directory_user_list')

    return render(request, 'portal/directory_user_form.html', {
        'form': form,
        'directory_user': directory_user,
        'is_edit': True,
    })


@login_required
@write_access_required
@require_POST
@handle_errors
def directory_user_delete(request, user_id):
    """Assets assigned to the user become unassigned"""
    service = DirectoryUserService()
    directory_user = service.get(user_id)
    service.delete(user_id, request=request)
    messages.success(request, f'User "{directory_user.display_name}" deleted.')
    return redirect('portal:directory_user_list')


@login_required
@admin_required
@require_POST
@handle_errors
def directory_sync(request):
    try:
        result = DirectorySyncService().sync(request=request)
    except DirectoryError as e:
        messages.error(request, f'Failed to sync AD: {e.message}')
    else:
        messages.success(request, result.message)
    return redirect('portal:directory_user_list')


# ----------------------------------------------------------------------
# Audit
# ----------------------------------------------------------------------

@login_required
@handle_errors
def audit_list(request):
    """Filterable audit log, newest first"""
    repository = AuditLogRepository()
    logs = repository.get_audit_logs()

    form = AuditFilterForm(request.GET or None)
    if form.is_valid():
        if form.cleaned_data['entity_type']:
            logs = logs.filter(entity_type=form.cleaned_data['entity_type'])
        if form.cleaned_data['action']:
            logs = logs.filter(action=form.cleaned_data['action'])
        if form.cleaned_data['search']:
            logs = repository.search(logs, form.cleaned_data['search'].strip())

    return render(request, 'portal/audit_list.html', {
        'logs': _paginate(request, logs, per_page=Pagination.MAX_PAGE_SIZE // 2),
        'filter_form': form,
        'query': _querystring(request),
    })


# ----------------------------------------------------------------------
# Import wizard: upload -> mapping -> preview -> import -> result
# ----------------------------------------------------------------------

def _import_state(request):
    return request.session.get(IMPORT_SESSION_KEY)


@login_required
@write_access_required
@handle_errors
def import_upload(request):
    service = ImportService()
    templates = service.list_templates()
    form = CSVUploadForm(request.POST or None, request.FILES or None, templates=templates)

    if request.method == 'POST' and form.is_valid():
        upload = form.cleaned_data['file']
        try:
            text = upload.read().decode('utf-8-sig')
        except UnicodeDecodeError:
            form.add_error('file', 'File must be UTF-8 encoded.')
        else:
            headers, rows = parse_csv(text)
            if not headers:
                form.add_error('file', 'The file is empty.')
            else:
                preview = summarize_preview(headers, rows)
                mappings = preview['mappings']
                template_id = form.cleaned_data.get('template')
                if template_id:
                    template = service.get_template(template_id)
                    if template is not None:
                        mappings = {
                            header: field for header, field in template.mappings.items()
                            if header in headers
                        }

                request.session[IMPORT_SESSION_KEY] = {
                    'file_name': upload.name,
                    'headers': headers,
                    'rows': rows,
                    'mappings': mappings,
                    'suggestions': preview['suggestions'],
                    'category_id': None,
                }
                logger.info(f"Import upload: {upload.name}, {len(headers)} columns, {len(rows)} rows")
                return redirect('portal:import_mapping')

    return render(request, 'portal/import_upload.html', {
        'form': form,
        'fields': ASSET_FIELDS,
        'templates': templates,
    })


@login_required
@write_access_required
@handle_errors
def import_mapping(request):
    state = _import_state(request)
    if not state:
        messages.info(request, 'Upload a CSV file to start an import.')
        return redirect('portal:import_upload')

    form = ColumnMappingForm(
        request.POST or None,
        headers=state['headers'],
        initial_mappings=state['mappings'],
        initial={'category': state.get('category_id')},
    )
    if request.method == 'POST' and form.is_valid():
        mappings = form.mappings()
        category = form.cleaned_data.get('category')
        state['mappings'] = mappings
        state['category_id'] = str(category.pk) if category else None
        request.session[IMPORT_SESSION_KEY] = state

        template_name = form.cleaned_data.get('template_name', '').strip()
        if template_name:
            try:
                ImportService().save_template(template_name, mappings, user=request.user)
            except BaseApplicationException as e:
                messages.warning(request, f'Mapping not saved: {e.message}')
            else:
                messages.success(request, f'Mapping saved as "{template_name}".')

        return redirect('portal:import_preview')

    columns = [
        (field, state['suggestions'].get(field.label, {}))
        for field in form.column_fields()
    ]
    return render(request, 'portal/import_mapping.html', {
        'form': form,
        'columns': columns,
        'file_name': state['file_name'],
        'total_rows': len(state['rows']),
    })


@login_required
@write_access_required
@handle_errors
def import_preview(request):
    state = _import_state(request)
    if not state or not state.get('mappings'):
        return redirect('portal:import_upload')

    mapped_rows = apply_mappings(state['headers'], state['rows'], state['mappings'])
    mapped_fields = [field for field in ASSET_FIELDS if field.key in state['mappings'].values()]
    preview_rows = [
        [row.get(field.key, '') for field in mapped_fields]
        for row in mapped_rows[:PREVIEW_ROWS]
    ]

    category = None
    if state.get('category_id'):
        category = CategoryService().repository.get_category(state['category_id'])

    return render(request, 'portal/import_preview.html', {
        'fields': mapped_fields,
        'preview_rows': preview_rows,
        'total_rows': len(mapped_rows),
        'file_name': state['file_name'],
        'category': category,
    })


@login_required
@write_access_required
@require_POST
@handle_errors
def import_run(request):
    state = _import_state(request)
    if not state or not state.get('mappings'):
        return redirect('portal:import_upload')

    rows = apply_mappings(state['headers'], state['rows'], state['mappings'])
    result = ImportService().import_rows(rows, category_id=state.get('category_id'), request=request)
    del request.session[IMPORT_SESSION_KEY]

    if result.success:
        messages.success(request, f'Imported {result.success} of {result.total} assets.')
    if result.failed:
        messages.warning(request, f'{result.failed} rows could not be imported.')

    return render(request, 'portal/import_result.html', {
        'result': result,
        'file_name': state['file_name'],
    })


@login_required
@write_access_required
@require_POST
def import_cancel(request):
    request.session.pop(IMPORT_SESSION_KEY, None)
    return redirect('portal:import_upload')


# ----------------------------------------------------------------------
# Settings
# ----------------------------------------------------------------------

@login_required
@handle_errors
def settings_view(request):
    """Site preferences (admins may edit) and directory status"""
    site_settings = get_site_settings()
    can_edit = request.user.has_admin_access
    form = SiteSettingsForm(request.POST or None, instance=site_settings)

    if request.method == 'POST':
        if not can_edit:
            messages.error(request, 'Access denied. Only administrators can do this.')
            return redirect('portal:settings')
        if form.is_valid():
            form.save()
            logger.info(f"Site settings updated by {request.user.email}")
            messages.success(request, 'Settings saved.')
            return redirect('portal:settings')

    return render(request, 'portal/settings.html', {
        'form': form,
        'can_edit': can_edit,
        'directory': DirectorySyncService().status(),
    })
