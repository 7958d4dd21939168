import logging

from django.db import DatabaseError, transaction

from .models import Notification

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 15


def create_notification(user, type, resource_id, resource_type, message, actor=None):
    """
    Tạo thông báo kiểu fire-and-forget.
    Lỗi DB chỉ được log lại, trả về None để không làm hỏng luồng chính.
    """
    try:
        with transaction.atomic():
            return Notification.objects.create(
                user=user,
                actor=actor,
                type=type,
                resource_id=resource_id,
                resource_type=resource_type,
                message=message,
            )
    except DatabaseError:
        logger.exception("Error creating notification for user %s", getattr(user, 'pk', user))
        return None


def get_notifications(user, page=1, limit=DEFAULT_PAGE_SIZE):
    page = max(1, page)
    skip = (page - 1) * limit

    qs = Notification.objects.filter(user=user).select_related('actor')
    total = qs.count()
    notifications = list(qs.order_by('-created_at', '-id')[skip:skip + limit])

    return {
        'notifications': notifications,
        'has_more': skip + limit < total,
        'total': total,
    }


def get_unread_count(user):
    return Notification.objects.filter(user=user, is_read=False).count()


def mark_as_read(user, notification_id):
    """Returns: True nếu thông báo thuộc về user và đã được đánh dấu."""
    updated = Notification.objects.filter(pk=notification_id, user=user).update(is_read=True)
    return updated > 0


def mark_all_as_read(user):
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
