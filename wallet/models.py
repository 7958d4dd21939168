# wallet/models.py
"""
Models cho hệ thống vé (ticket) - tiền ảo nội bộ để mở khóa chương trả phí.

Bao gồm:
- UserWallet: Ví vé của user (1-1 relationship, tạo lazy khi được cộng vé lần đầu)
- WalletTransaction: Sổ cái giao dịch (Immutable - không thể sửa/xóa)
- UserPurchase: Chương user đã mở khóa (mỗi cặp user/chương chỉ 1 lần)
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone


class UserWallet(models.Model):
    """
    Ví vé của user.
    Mỗi user chỉ có 1 ví duy nhất (OneToOne relationship).

    KHÔNG cập nhật balance trực tiếp, mọi thay đổi phải đi qua WalletLedger.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='wallet'
    )

    # Số vé hiện có
    balance = models.PositiveIntegerField(
        default=0,
        help_text="Số vé hiện có"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Ví vé"
        verbose_name_plural = "Ví vé"
        constraints = [
            models.CheckConstraint(condition=Q(balance__gte=0), name='wallet_balance_non_negative'),
        ]

    def __str__(self):
        return f"{self.user} - {self.balance} vé"


class WalletTransaction(models.Model):
    """
    Sổ cái giao dịch vé.

    QUAN TRỌNG: Model này là IMMUTABLE (bất biến).
    - Không được phép UPDATE sau khi tạo
    - Không được phép DELETE

    Cộng dồn amount của tất cả giao dịch phải bằng balance của ví.
    """

    class TransactionType(models.TextChoices):
        DEPOSIT = 'DEPOSIT', 'Nạp vé'
        UNLOCK = 'UNLOCK', 'Mở khóa chương'
        REFUND = 'REFUND', 'Hoàn vé'
        ADMIN_ADJUST = 'ADMIN_ADJUST', 'Admin điều chỉnh'

    wallet = models.ForeignKey(
        UserWallet,
        on_delete=models.CASCADE,
        related_name='transactions'
    )

    # Dương = nhận, Âm = trừ
    amount = models.IntegerField()

    # Số dư SAU giao dịch (để đối soát)
    balance_after = models.PositiveIntegerField()

    transaction_type = models.CharField(
        max_length=20,
        choices=TransactionType.choices,
        db_index=True
    )
    description = models.TextField(blank=True)

    # Reference ID (vd: "chapter:42")
    reference_id = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        db_index=True
    )

    # Không dùng auto_now để tránh bị update
    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False
    )

    class Meta:
        verbose_name = "Giao dịch vé"
        verbose_name_plural = "Giao dịch vé"
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['wallet', '-created_at'], name='wallet_tx_wallet_created_idx'),
        ]

    def __str__(self):
        sign = '+' if self.amount > 0 else ''
        return f"{self.wallet.user}: {sign}{self.amount} ({self.get_transaction_type_display()})"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise ValidationError(
                "WalletTransaction là bất biến. Không được phép sửa đổi sau khi tạo."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "WalletTransaction là bất biến. Không được phép xóa. "
            "Hãy tạo giao dịch đảo ngược nếu cần hoàn vé."
        )


class UserPurchase(models.Model):
    """
    Ghi nhận user đã mở khóa một chương.

    Unique (user, chapter) là chốt chặn cuối cùng chống trừ vé 2 lần
    khi 2 request mở khóa đến cùng lúc.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='purchases'
    )
    chapter = models.ForeignKey(
        'novels.Chapter',
        on_delete=models.PROTECT,
        related_name='purchases'
    )

    # Giá tại thời điểm mua, đổi giá chương sau này không ảnh hưởng lịch sử
    price = models.PositiveIntegerField()

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        verbose_name = "Chương đã mua"
        verbose_name_plural = "Chương đã mua"
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'chapter'], name='unique_user_chapter_purchase'),
        ]
        indexes = [
            models.Index(fields=['user', '-created_at'], name='purchase_user_created_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.chapter} ({self.price} vé)"

    def delete(self, *args, **kwargs):
        raise ValidationError("Lịch sử mua chương là vĩnh viễn, không được xóa.")
