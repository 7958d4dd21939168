"""
Context processors for common app
"""

import logging

from django.db import DatabaseError

logger = logging.getLogger(__name__)


def sidebar_data(request):
    """
    Context processor cho sidebar: số vé hiện có và số thông báo chưa đọc.
    """
    context = {
        'user_tickets': 0,
        'unread_notifications': 0,
    }

    if getattr(request, 'user', None) is not None and request.user.is_authenticated:
        from notifications.services import get_unread_count
        from wallet.services import WalletLedger

        try:
            context['user_tickets'] = WalletLedger().get_balance(request.user)
            context['unread_notifications'] = get_unread_count(request.user)
        except DatabaseError:
            # Sidebar lỗi không được làm hỏng cả trang
            logger.warning("Cannot load sidebar data for user %s", request.user.pk, exc_info=True)

    return context
