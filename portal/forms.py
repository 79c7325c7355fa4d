from django import forms

from assets.models import Asset
from categories.models import Category
from common.models import SiteSettings
from core.constants import AssetStatus, AuditAction, EntityType
from directory.models import DirectoryUser
from imports.mapping import ASSET_FIELDS


class AssetForm(forms.ModelForm):
    """Form for adding/editing assets"""
    class Meta:
        model = Asset
        fields = [
            'asset_tag', 'name', 'description', 'category', 'assigned_user', 'status',
            'manufacturer', 'model', 'serial_number', 'purchase_date', 'purchase_cost',
            'warranty_expiry', 'location', 'notes',
        ]
        widgets = {
            'asset_tag': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., IT-00042'}),
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., Dell Latitude 7440'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'category': forms.Select(attrs={'class': 'form-select'}),
            'assigned_user': forms.Select(attrs={'class': 'form-select'}),
            'status': forms.Select(attrs={'class': 'form-select'}),
            'manufacturer': forms.TextInput(attrs={'class': 'form-control'}),
            'model': forms.TextInput(attrs={'class': 'form-control'}),
            'serial_number': forms.TextInput(attrs={'class': 'form-control'}),
            'purchase_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'purchase_cost': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., 1,299.00'}),
            'warranty_expiry': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'location': forms.TextInput(attrs={'class': 'form-control'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['category'].queryset = Category.objects.order_by('name')
        self.fields['category'].empty_label = 'Uncategorized'
        self.fields['assigned_user'].queryset = DirectoryUser.objects.filter(is_active=True).order_by('display_name')
        self.fields['assigned_user'].empty_label = 'Unassigned'

    def validate_unique(self):
        # Tag uniqueness is checked by AssetService so both the API and pages report it the same way
        pass


class CategoryForm(forms.ModelForm):
    """Form for adding/editing categories"""
    class Meta:
        model = Category
        fields = ['name', 'description', 'parent', 'icon', 'color']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., Laptops'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'parent': forms.Select(attrs={'class': 'form-select'}),
            'icon': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'folder'}),
            'color': forms.TextInput(attrs={'class': 'form-control form-control-color', 'type': 'color'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        parents = Category.objects.order_by('name')
        if self.instance.pk:
            parents = parents.exclude(pk=self.instance.pk)
        self.fields['parent'].queryset = parents
        self.fields['parent'].empty_label = 'None (top level)'


class DirectoryUserForm(forms.ModelForm):
    """Form for adding/editing directory users by hand"""
    class Meta:
        model = DirectoryUser
        fields = [
            'display_name', 'email', 'employee_id', 'department', 'title',
            'manager', 'office_location', 'phone', 'is_active',
        ]
        widgets = {
            'display_name': forms.TextInput(attrs={'class': 'form-control'}),
            'email': forms.EmailInput(attrs={'class': 'form-control'}),
            'employee_id': forms.TextInput(attrs={'class': 'form-control'}),
            'department': forms.TextInput(attrs={'class': 'form-control'}),
            'title': forms.TextInput(attrs={'class': 'form-control'}),
            'manager': forms.TextInput(attrs={'class': 'form-control'}),
            'office_location': forms.TextInput(attrs={'class': 'form-control'}),
            'phone': forms.TextInput(attrs={'class': 'form-control'}),
            'is_active': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
        }

    def validate_unique(self):
        # Duplicate email / employee id are reported by DirectoryUserService
        pass


class SiteSettingsForm(forms.ModelForm):
    """Site preferences"""
    class Meta:
        model = SiteSettings
        fields = [
            'site_name', 'company_name', 'support_email', 'default_theme',
            'enable_email_notifications', 'notify_on_asset_changes',
            'notify_on_directory_sync', 'warranty_alert_days',
        ]
        widgets = {
            'site_name': forms.TextInput(attrs={'class': 'form-control'}),
            'company_name': forms.TextInput(attrs={'class': 'form-control'}),
            'support_email': forms.EmailInput(attrs={'class': 'form-control'}),
            'default_theme': forms.Select(attrs={'class': 'form-select'}),
            'enable_email_notifications': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
            'notify_on_asset_changes': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
            'notify_on_directory_sync': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
            'warranty_alert_days': forms.NumberInput(attrs={'class': 'form-control', 'min': 0}),
        }


class AuditFilterForm(forms.Form):
    entity_type = forms.ChoiceField(
        choices=[('', 'All entities')] + EntityType.CHOICES,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    action = forms.ChoiceField(
        choices=[('', 'All actions')] + AuditAction.CHOICES,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'User or record id'})
    )


class CSVUploadForm(forms.Form):
    """Step 1 of the import wizard"""
    file = forms.FileField(widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': '.csv'}))
    template = forms.ChoiceField(required=False, widget=forms.Select(attrs={'class': 'form-select'}))

    def __init__(self, *args, templates=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['template'].choices = [('', 'Suggest mappings automatically')] + [
            (str(template.pk), template.name) for template in templates
        ]

    def clean_file(self):
        upload = self.cleaned_data['file']
        if not upload.name.lower().endswith('.csv'):
            raise forms.ValidationError('Please upload a .csv file.')
        return upload


class ColumnMappingForm(forms.Form):
    """
    Step 2 of the import wizard: one select per spreadsheet column.

    Field names are ``column_<index>`` so any header text is safe.
    """
    category = forms.ModelChoiceField(
        queryset=Category.objects.none(),
        required=False,
        empty_label='No category',
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    template_name = forms.CharField(
        required=False,
        max_length=255,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Save this mapping as...'})
    )

    FIELD_CHOICES = [('', "Don't import")] + [
        (field.key, f"{field.label} *" if field.required else field.label) for field in ASSET_FIELDS
    ]

    def __init__(self, *args, headers=(), initial_mappings=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.headers = list(headers)
        initial_mappings = initial_mappings or {}
        self.fields['category'].queryset = Category.objects.order_by('name')
        for index, header in enumerate(self.headers):
            self.fields[f'column_{index}'] = forms.ChoiceField(
                label=header,
                choices=self.FIELD_CHOICES,
                required=False,
                initial=initial_mappings.get(header, ''),
                widget=forms.Select(attrs={'class': 'form-select'})
            )

    def column_fields(self):
        return [self[f'column_{index}'] for index in range(len(self.headers))]

    def clean(self):
        cleaned_data = super().clean()
        chosen = [cleaned_data.get(f'column_{index}') for index in range(len(self.headers))]
        picked = [field for field in chosen if field]

        duplicates = sorted({field for field in picked if picked.count(field) > 1})
        if duplicates:
            raise forms.ValidationError(f"Each asset field can be mapped once: {', '.join(duplicates)}")

        missing = [field.label for field in ASSET_FIELDS if field.required and field.key not in picked]
        if missing:
            raise forms.ValidationError(f"Map a column to: {', '.join(missing)}")
        return cleaned_data

    def mappings(self):
        """header -> asset field for mapped columns"""
        return {
            header: self.cleaned_data[f'column_{index}']
            for index, header in enumerate(self.headers)
            if self.cleaned_data.get(f'column_{index}')
        }
