"""
Authentication Service Layer
Handles registration, login and logout of local accounts.
Login and logout audit rows are written by the audit app's auth signals.
"""
from django.contrib.auth import authenticate, get_user_model, login, logout
from django.db import transaction

from core.exceptions import AuthenticationFailedError, DuplicateError
from core.services import BaseService
from core.validators import PasswordValidator

MODEL_BACKEND = 'django.contrib.auth.backends.ModelBackend'


class AuthService(BaseService):
    """Session authentication for local and directory accounts"""

    def __init__(self):
        super().__init__()
        self.user_model = get_user_model()

    @transaction.atomic
    def register(self, request, email: str, password: str, first_name: str, last_name: str = ''):
        """
        Create a local account and start a session for it.

        Raises:
            DuplicateError: Email already registered
            ValidationError: Password too short
        """
        email = (email or '').strip().lower()
        PasswordValidator.validate_password(password)

        if self.user_model.objects.filter(email__iexact=email).exists():
            raise DuplicateError(message="Email already registered", code="EMAIL_TAKEN")

        user = self.user_model.objects.create_user(
            email=email,
            password=password,
            first_name=(first_name or '').strip(),
            last_name=(last_name or '').strip(),
        )
        login(request, user, backend=MODEL_BACKEND)

        self.log_info("User registered", user_id=user.pk, email=email)
        return user

    def login(self, request, email: str, password: str):
        """
        Verify credentials and start a session.

        Raises:
            AuthenticationFailedError: bad credentials or disabled account
        """
        email = (email or '').strip()
        user = authenticate(request, username=email, password=password)

        if user is None:
            existing = self.user_model.objects.filter(email__iexact=email).first()
            if existing is not None and not existing.is_active and existing.check_password(password):
                self.log_info("Login refused for disabled account", email=email)
                raise AuthenticationFailedError(message="Account is disabled", code="ACCOUNT_DISABLED")
            self.log_info("Login failed", email=email)
            raise AuthenticationFailedError(message="Invalid email or password", code="INVALID_CREDENTIALS")

        login(request, user)
        self.log_info("User logged in", user_id=user.pk)
        return user

    def logout(self, request):
        logout(request)
