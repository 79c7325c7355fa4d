from django import forms

from core.validators import PasswordValidator


class LoginForm(forms.Form):
    email = forms.CharField(
        label="Email",
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'you@company.com', 'autofocus': True})
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={'class': 'form-control'})
    )


class RegistrationForm(forms.Form):
    first_name = forms.CharField(max_length=150, widget=forms.TextInput(attrs={'class': 'form-control'}))
    last_name = forms.CharField(max_length=150, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    email = forms.EmailField(widget=forms.EmailInput(attrs={'class': 'form-control'}))
    password = forms.CharField(
        min_length=PasswordValidator.MIN_LENGTH,
        widget=forms.PasswordInput(attrs={'class': 'form-control'}),
        help_text=f"At least {PasswordValidator.MIN_LENGTH} characters"
    )
    password_confirm = forms.CharField(
        label="Confirm password",
        widget=forms.PasswordInput(attrs={'class': 'form-control'})
    )

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('password') and cleaned_data.get('password') != cleaned_data.get('password_confirm'):
            self.add_error('password_confirm', "Passwords do not match")
        return cleaned_data
