"""
PurchaseStore - các chương user đã mở khóa (UserPurchase).
"""

from django.db import IntegrityError, transaction

from .exceptions import PurchaseAlreadyExistsError
from .models import UserPurchase

PURCHASE_HISTORY_LIMIT = 50


class PurchaseStore:

    def __init__(self, using='default'):
        self.using = using

    def _purchases(self):
        return UserPurchase.objects.using(self.using)

    def has_purchased(self, user, chapter_id):
        return self._purchases().filter(user=user, chapter_id=chapter_id).exists()

    def record_purchase(self, user, chapter, price):
        """
        Ghi nhận user đã mua chương.

        Insert trong savepoint riêng để lỗi unique không làm hỏng transaction
        bên ngoài trước khi orchestrator kịp rollback.

        Raises:
            PurchaseAlreadyExistsError: cặp (user, chapter) đã tồn tại
        """
        try:
            with transaction.atomic(using=self.using):
                return self._purchases().create(user=user, chapter=chapter, price=price)
        except IntegrityError as e:
            if self.has_purchased(user, chapter.pk):
                raise PurchaseAlreadyExistsError(user.pk, chapter.pk) from e
            raise

    def get_purchase_history(self, user, limit=PURCHASE_HISTORY_LIMIT):
        """Tối đa 50 chương đã mua gần nhất, mới nhất trước."""
        limit = min(limit, PURCHASE_HISTORY_LIMIT)
        return list(
            self._purchases()
            .filter(user=user)
            .select_related('chapter', 'chapter__volume', 'chapter__volume__novel')
            .order_by('-created_at', '-id')[:limit]
        )
