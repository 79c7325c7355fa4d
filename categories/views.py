"""
Category API views
"""
from rest_framework import viewsets, status
from rest_framework.response import Response

from api.permissions import CanWrite
from .serializers import CategorySerializer
from .services import CategoryService


class CategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for asset categories.
    Writes go through CategoryService so every change is audited.
    """
    serializer_class = CategorySerializer
    permission_classes = [CanWrite]
    service = CategoryService()

    def get_queryset(self):
        return self.service.list_categories()

    def get_object(self):
        return self.service.get(self.kwargs['pk'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = self.service.create(serializer.validated_data, request=request)
        return Response(self.get_serializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        category = self.service.update(instance.pk, serializer.validated_data, request=request)
        return Response(self.get_serializer(category).data)

    def destroy(self, request, *args, **kwargs):
        self.service.delete(self.kwargs['pk'], request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)
