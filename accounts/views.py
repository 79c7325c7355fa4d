import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import render, redirect
from django.views.decorators.csrf import csrf_protect
from django.views.decorators.http import require_POST
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from core.exceptions import BaseApplicationException
from .forms import LoginForm, RegistrationForm
from .serializers import LoginSerializer, RegisterSerializer, UserSerializer
from .services import AuthService

logger = logging.getLogger(__name__)

HOME_URL = 'portal:dashboard'


# API views

@api_view(['POST'])
@permission_classes([AllowAny])
def api_register(request):
    """Register a local account and log it in"""
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = AuthService().register(request, **serializer.validated_data)
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def api_login(request):
    """Start a session from email and password"""
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = AuthService().login(
        request,
        serializer.validated_data['email'],
        serializer.validated_data['password'],
    )
    return Response(UserSerializer(user).data)


@api_view(['POST'])
@permission_classes([AllowAny])
def api_logout(request):
    AuthService().logout(request)
    return Response({'success': True})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def api_current_user(request):
    return Response(UserSerializer(request.user).data)


# Template views (for frontend)

@csrf_protect
def login_view(request):
    """Login view"""
    if request.user.is_authenticated:
        return redirect(HOME_URL)

    form = LoginForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        try:
            AuthService().login(request, form.cleaned_data['email'], form.cleaned_data['password'])
        except BaseApplicationException as e:
            messages.error(request, e.message)
        else:
            return redirect(request.GET.get('next') or HOME_URL)

    return render(request, 'accounts/login.html', {'form': form})


@csrf_protect
def register(request):
    """User self-registration"""
    if request.user.is_authenticated:
        return redirect(HOME_URL)

    form = RegistrationForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        try:
            user = AuthService().register(
                request,
                email=form.cleaned_data['email'],
                password=form.cleaned_data['password'],
                first_name=form.cleaned_data['first_name'],
                last_name=form.cleaned_data['last_name'],
            )
        except BaseApplicationException as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f'Welcome {user.display_name}! Your account has been created.')
            return redirect(HOME_URL)

    return render(request, 'accounts/register.html', {'form': form})


@require_POST
def logout_view(request):
    AuthService().logout(request)
    messages.info(request, 'You have been logged out.')
    return redirect('accounts:login')


@login_required
def profile(request):
    """User profile page"""
    return render(request, 'accounts/profile.html', {'profile_user': request.user})
