"""
UnlockOrchestrator - mở khóa chương trả phí bằng vé.

Luồng unlock_chapter(user, chapter_id):

    1. Chưa đăng nhập            -> UNAUTHENTICATED
    2. Đã mua chương rồi          -> ALREADY_UNLOCKED
    3. Không tìm thấy chương      -> CHAPTER_NOT_FOUND
    4. Chương miễn phí            -> NOT_PREMIUM
    5. Không đủ vé                -> INSUFFICIENT_FUNDS
    6. Trừ vé + ghi UserPurchase trong CÙNG 1 transaction -> UNLOCKED

Các bước 1-5 không ghi gì vào DB. Bước 6 hoặc thành công cả 2 việc,
hoặc rollback cả 2: không bao giờ có chuyện đã trừ vé mà chưa có UserPurchase
(hoặc ngược lại).

Giá luôn đọc từ DB (chapter.price), không bao giờ nhận từ client.

Hai request mở khóa cùng lúc cho cùng user/chương: cả 2 có thể qua bước 2,
nhưng unique (user, chapter) làm request thứ 2 fail ở bước 6 -> rollback
toàn bộ (không trừ vé) -> ALREADY_UNLOCKED.
"""

import logging
from dataclasses import dataclass

from django.db import DatabaseError, models

from novels.cache import revalidate_chapter
from novels.models import Chapter

from .exceptions import InsufficientTicketsError, PurchaseAlreadyExistsError
from .models import WalletTransaction
from .purchases import PurchaseStore
from .services import WalletLedger
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


class UnlockOutcome(models.TextChoices):
    UNLOCKED = 'UNLOCKED', 'Mở khóa thành công'
    ALREADY_UNLOCKED = 'ALREADY_UNLOCKED', 'Đã mở khóa'
    UNAUTHENTICATED = 'UNAUTHENTICATED', 'Chưa đăng nhập'
    CHAPTER_NOT_FOUND = 'CHAPTER_NOT_FOUND', 'Không tìm thấy chương'
    NOT_PREMIUM = 'NOT_PREMIUM', 'Chương miễn phí'
    INSUFFICIENT_FUNDS = 'INSUFFICIENT_FUNDS', 'Không đủ vé'
    INTERNAL_ERROR = 'INTERNAL_ERROR', 'Lỗi hệ thống'


@dataclass(frozen=True)
class UnlockResult:
    outcome: str
    message: str
    chapter_title: str = ''
    required: int | None = None
    available: int | None = None

    @property
    def ok(self):
        return self.outcome == UnlockOutcome.UNLOCKED

    @property
    def is_retryable(self):
        # Chỉ lỗi hạ tầng mới nên thử lại, các outcome khác là kết quả cuối
        return self.outcome == UnlockOutcome.INTERNAL_ERROR

    def to_payload(self):
        if self.ok:
            return {'success': self.message}
        return {'error': self.message, 'code': str(self.outcome)}

    @classmethod
    def unlocked(cls, chapter_title):
        return cls(UnlockOutcome.UNLOCKED, f'Đã mở khóa chương "{chapter_title}"', chapter_title)

    @classmethod
    def already_unlocked(cls):
        return cls(UnlockOutcome.ALREADY_UNLOCKED, "Bạn đã mở khóa chương này rồi")

    @classmethod
    def unauthenticated(cls):
        return cls(UnlockOutcome.UNAUTHENTICATED, "Chưa đăng nhập")

    @classmethod
    def chapter_not_found(cls):
        return cls(UnlockOutcome.CHAPTER_NOT_FOUND, "Không tìm thấy chương")

    @classmethod
    def not_premium(cls):
        return cls(UnlockOutcome.NOT_PREMIUM, "Chương này miễn phí, không cần mở khóa")

    @classmethod
    def insufficient_funds(cls, required, available):
        return cls(
            UnlockOutcome.INSUFFICIENT_FUNDS,
            f"Không đủ vé. Cần {required} vé, hiện có {available} vé",
            required=required,
            available=available,
        )

    @classmethod
    def internal_error(cls):
        return cls(UnlockOutcome.INTERNAL_ERROR, "Có lỗi xảy ra, vui lòng thử lại")


class UnlockOrchestrator:
    """
    Args:
        ledger: WalletLedger (mặc định tạo mới với cùng `using`)
        purchases: PurchaseStore (mặc định tạo mới với cùng `using`)
        using: database alias
        on_unlocked: callback(chapter) sau khi mở khóa thành công,
            chạy ngoài transaction, lỗi chỉ được log lại
    """

    def __init__(self, ledger=None, purchases=None, using='default', on_unlocked=revalidate_chapter):
        self.using = using
        self.ledger = ledger or WalletLedger(using=using)
        self.purchases = purchases or PurchaseStore(using=using)
        self.on_unlocked = on_unlocked

    def _load_chapter(self, chapter_id):
        return (
            Chapter.objects.using(self.using)
            .select_related('volume__novel')
            .filter(pk=chapter_id)
            .first()
        )

    def unlock_chapter(self, user, chapter_id):
        if user is None or not user.is_authenticated:
            return UnlockResult.unauthenticated()

        try:
            result, chapter = self._unlock(user, chapter_id)
        except DatabaseError:
            logger.exception("Unlock chapter %s for user %s failed", chapter_id, user.pk)
            return self._recheck_after_failure(user, chapter_id)

        if result.ok:
            self._notify_unlocked(chapter)
        return result

    def _unlock(self, user, chapter_id):
        if self.purchases.has_purchased(user, chapter_id):
            return UnlockResult.already_unlocked(), None

        chapter = self._load_chapter(chapter_id)
        if chapter is None:
            return UnlockResult.chapter_not_found(), None

        if not chapter.is_premium:
            return UnlockResult.not_premium(), chapter

        balance = self.ledger.get_balance(user)
        if balance < chapter.price:
            return UnlockResult.insufficient_funds(chapter.price, balance), chapter

        try:
            unit_of_work(
                self.using,
                lambda: self.ledger.debit(
                    user,
                    chapter.price,
                    WalletTransaction.TransactionType.UNLOCK,
                    description=chapter.title,
                    reference_id=f"chapter:{chapter.pk}",
                ),
                lambda: self.purchases.record_purchase(user, chapter, chapter.price),
            )
        except PurchaseAlreadyExistsError:
            logger.info("Concurrent unlock of chapter %s by user %s rolled back", chapter.pk, user.pk)
            return UnlockResult.already_unlocked(), chapter
        except InsufficientTicketsError as e:
            # Số dư bị request khác trừ mất giữa lúc kiểm tra và lúc trừ
            return UnlockResult.insufficient_funds(e.required_amount, e.current_balance), chapter

        logger.info("User %s unlocked chapter %s for %s tickets", user.pk, chapter.pk, chapter.price)
        return UnlockResult.unlocked(chapter.title), chapter

    def _recheck_after_failure(self, user, chapter_id):
        # Transaction đã rollback. Nếu request khác đã mua thành công thì báo đã mở khóa.
        try:
            if self.purchases.has_purchased(user, chapter_id):
                return UnlockResult.already_unlocked()
        except DatabaseError:
            logger.exception("Re-check purchase of chapter %s for user %s failed", chapter_id, user.pk)
        return UnlockResult.internal_error()

    def _notify_unlocked(self, chapter):
        if self.on_unlocked is None:
            return
        try:
            self.on_unlocked(chapter)
        except Exception:
            logger.warning("Revalidate chapter %s after unlock failed", chapter.pk, exc_info=True)


# =====================================================
# Các hàm tiện ích cho views / templates
# =====================================================

def get_wallet_balance(user):
    return WalletLedger().get_balance(user)


def has_user_purchased_chapter(user, chapter_id):
    if not user.is_authenticated:
        return False
    return PurchaseStore().has_purchased(user, chapter_id)


def unlock_chapter(user, chapter_id):
    return UnlockOrchestrator().unlock_chapter(user, chapter_id)


def get_purchase_history(user):
    return PurchaseStore().get_purchase_history(user)


def add_mock_balance(user):
    return WalletLedger().add_mock_balance(user)
