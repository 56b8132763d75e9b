from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .models import Notification
from .serializers import (
    NotificationCounterSerializer,
    NotificationIdsSerializer,
    NotificationSerializer,
)

User = get_user_model()


def _is_admin(user) -> bool:
    return user.is_superuser or user.type == User.ADMIN


class NotificationCounterView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, user_id, *args, **kwargs):
        if request.user.pk != user_id and not _is_admin(request.user):
            return Response(
                {"detail": "Not allowed to read another user's counter."},
                status=status.HTTP_403_FORBIDDEN,
            )
        user = get_object_or_404(User, pk=user_id)
        counter = services.get_counter(user)
        return Response(NotificationCounterSerializer(counter).data)


class NotificationListView(generics.ListAPIView):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Notification.objects.filter(user=self.request.user)


class NotificationMarkView(APIView):
    """Flip the read flag on a batch of the caller's notifications."""

    permission_classes = [IsAuthenticated]
    mark = None

    def post(self, request, *args, **kwargs):
        serializer = NotificationIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated = self.mark(request.user, serializer.validated_data["ids"])
        counter = services.get_counter(request.user)
        return Response({"updated": updated, "count": counter.count})


class MarkAsReadView(NotificationMarkView):
    mark = staticmethod(services.mark_read)


class MarkAsUnreadView(NotificationMarkView):
    mark = staticmethod(services.mark_unread)
