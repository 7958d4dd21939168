from rest_framework import serializers

from .models import Notification


class ActorSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()


class NotificationSerializer(serializers.ModelSerializer):
    actor = ActorSerializer(allow_null=True, read_only=True)

    class Meta:
        model = Notification
        fields = [
            'id',
            'type',
            'actor',
            'resource_id',
            'resource_type',
            'message',
            'is_read',
            'created_at',
        ]
        read_only_fields = fields
