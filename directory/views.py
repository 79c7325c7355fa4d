"""
Directory user API views
"""
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.permissions import CanWrite, IsAdminRole
from core.exceptions import DirectoryError
from .serializers import DirectoryUserSerializer
from .services import DirectoryUserService, DirectorySyncService


class DirectoryUserViewSet(viewsets.ModelViewSet):
    """
    ViewSet for directory users (``/api/ad-users/``).

    - ?search= matches display name, email and department
    - POST sync/ pulls users from Active Directory (admins only)
    """
    serializer_class = DirectoryUserSerializer
    permission_classes = [CanWrite]
    filter_backends = [filters.SearchFilter]
    search_fields = ['display_name', 'email', 'department']
    service = DirectoryUserService()

    def get_queryset(self):
        return self.service.list_users()

    def get_object(self):
        return self.service.get(self.kwargs['pk'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.service.create(serializer.validated_data, request=request)
        return Response(self.get_serializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        user = self.service.update(instance.pk, serializer.validated_data, request=request)
        return Response(self.get_serializer(user).data)

    def destroy(self, request, *args, **kwargs):
        self.service.delete(self.kwargs['pk'], request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['post'], permission_classes=[IsAdminRole])
    def sync(self, request):
        """
        Sync users from Active Directory.

        Example: POST /api/ad-users/sync/
        """
        try:
            result = DirectorySyncService().sync(request=request)
        except DirectoryError as e:
            return Response(
                {'message': f"Failed to sync AD: {e.message}"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(result.as_dict())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ldap_status(request):
    """
    Directory connection status.

    Example: GET /api/ldap/status/
    """
    return Response(DirectorySyncService().status())
