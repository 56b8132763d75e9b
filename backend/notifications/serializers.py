from rest_framework import serializers

from .models import Notification, NotificationCounter


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ["id", "message", "booking", "is_read", "created_at"]
        read_only_fields = fields


class NotificationCounterSerializer(serializers.ModelSerializer):
    class Meta:
        model = NotificationCounter
        fields = ["user", "count", "updated_at"]
        read_only_fields = fields


class NotificationIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
