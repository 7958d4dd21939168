"""
API Views cho notifications app.
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .serializers import NotificationSerializer


class NotificationListView(APIView):
    """
    GET /api/notifications/?page=1

    {
        "notifications": [...],
        "has_more": false,
        "total": 3,
        "unread": 1
    }
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            page = int(request.query_params.get('page', 1))
        except ValueError:
            page = 1

        result = services.get_notifications(request.user, page=page)
        return Response({
            'notifications': NotificationSerializer(result['notifications'], many=True).data,
            'has_more': result['has_more'],
            'total': result['total'],
            'unread': services.get_unread_count(request.user),
        })


class MarkReadView(APIView):
    """POST /api/notifications/<id>/read/"""
    permission_classes = [IsAuthenticated]

    def post(self, request, notification_id):
        if not services.mark_as_read(request.user, notification_id):
            return Response({'error': 'Không tìm thấy thông báo'}, status=status.HTTP_404_NOT_FOUND)
        return Response({'success': True})


class MarkAllReadView(APIView):
    """POST /api/notifications/read-all/"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        count = services.mark_all_as_read(request.user)
        return Response({'success': True, 'updated': count})
