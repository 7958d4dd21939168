"""
WalletLedger - Core business logic cho ví vé.

QUAN TRỌNG về tính toàn vẹn:
1. Tất cả thay đổi số dư PHẢI đi qua WalletLedger.credit() / WalletLedger.debit().
2. KHÔNG BAO GIỜ cập nhật trực tiếp wallet.balance ở ngoài service này.
3. Mỗi lần đổi số dư luôn đi kèm đúng 1 WalletTransaction, trong cùng 1 transaction.atomic().
4. Trừ vé dùng select_for_update() + compare-and-swap (balance >= amount)
   để 2 request trừ vé cùng lúc không thể làm số dư âm.
"""

import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import transaction
from django.db.models import F

from .exceptions import (
    InsufficientTicketsError,
    InvalidAmountError,
    MockDepositDisabledError,
)
from .models import UserWallet, WalletTransaction

logger = logging.getLogger(__name__)


# =====================================================
# CONFIGURATION
# =====================================================
MOCK_DEPOSIT_AMOUNT = 1000


@dataclass(frozen=True)
class LedgerEntry:
    transaction_id: int
    amount: int
    new_balance: int


def _validate_amount(amount):
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(amount)


class WalletLedger:
    """
    Sổ cái ví vé.

    Args:
        using: database alias (mặc định 'default'). Truyền vào để test
            hoặc chạy trên DB khác, không dùng handle global.
    """

    def __init__(self, using='default'):
        self.using = using

    def _wallets(self):
        return UserWallet.objects.using(self.using)

    def get_balance(self, user):
        """
        Lấy số dư vé hiện tại của user.
        Trả về 0 nếu user chưa có ví (KHÔNG tạo ví).
        """
        balance = (
            self._wallets()
            .filter(user=user)
            .values_list('balance', flat=True)
            .first()
        )
        return balance or 0

    def credit(self, user, amount, transaction_type=WalletTransaction.TransactionType.DEPOSIT,
               description='', reference_id=None):
        """
        Cộng vé vào ví. Ví được tạo nếu chưa có.

        Returns:
            LedgerEntry

        Raises:
            InvalidAmountError: amount không phải số nguyên dương
        """
        _validate_amount(amount)

        with transaction.atomic(using=self.using):
            # get_or_create tự xử lý race khi 2 request cùng tạo ví (unique user)
            wallet, created = self._wallets().select_for_update().get_or_create(
                user=user,
                defaults={'balance': 0}
            )
            self._wallets().filter(pk=wallet.pk).update(balance=F('balance') + amount)
            wallet.refresh_from_db(using=self.using, fields=['balance'])

            tx = self._append(wallet, amount, transaction_type, description, reference_id)

        logger.info(
            "Credited %s tickets to user %s (%s), balance=%s",
            amount, user.pk, transaction_type, wallet.balance
        )
        return LedgerEntry(transaction_id=tx.pk, amount=amount, new_balance=wallet.balance)

    def debit(self, user, amount, transaction_type, description='', reference_id=None):
        """
        Trừ vé khỏi ví.

        Raises:
            InvalidAmountError: amount không phải số nguyên dương
            InsufficientTicketsError: số dư < amount (không thay đổi gì)
        """
        _validate_amount(amount)

        with transaction.atomic(using=self.using):
            # Khóa row ví, request khác phải chờ transaction này xong
            wallet = self._wallets().select_for_update().filter(user=user).first()
            if wallet is None:
                raise InsufficientTicketsError(current_balance=0, required_amount=amount)

            if wallet.balance < amount:
                raise InsufficientTicketsError(
                    current_balance=wallet.balance,
                    required_amount=amount
                )

            # Compare-and-swap: chỉ trừ khi số dư vẫn đủ
            updated = (
                self._wallets()
                .filter(pk=wallet.pk, balance__gte=amount)
                .update(balance=F('balance') - amount)
            )
            if not updated:
                wallet.refresh_from_db(using=self.using, fields=['balance'])
                raise InsufficientTicketsError(
                    current_balance=wallet.balance,
                    required_amount=amount
                )
            wallet.refresh_from_db(using=self.using, fields=['balance'])

            tx = self._append(wallet, -amount, transaction_type, description, reference_id)

        logger.info(
            "Debited %s tickets from user %s (%s), balance=%s",
            amount, user.pk, transaction_type, wallet.balance
        )
        return LedgerEntry(transaction_id=tx.pk, amount=-amount, new_balance=wallet.balance)

    def _append(self, wallet, amount, transaction_type, description, reference_id):
        tx = WalletTransaction(
            wallet=wallet,
            amount=amount,
            balance_after=wallet.balance,
            transaction_type=transaction_type,
            description=description,
            reference_id=reference_id,
        )
        tx.save(using=self.using)
        return tx

    def transactions_queryset(self, user, transaction_type=None):
        """
        QuerySet lịch sử giao dịch của user (chưa cắt trang), mới nhất trước.
        """
        qs = WalletTransaction.objects.using(self.using).filter(wallet__user=user)
        if transaction_type:
            qs = qs.filter(transaction_type=transaction_type)
        return qs.order_by('-created_at', '-id')

    def get_transactions(self, user, limit=20, offset=0, transaction_type=None):
        return self.transactions_queryset(user, transaction_type)[offset:offset + limit]

    def admin_adjust(self, user, amount, reason, admin_user=None):
        """
        Admin điều chỉnh số dư (amount dương = cộng, âm = trừ).
        """
        description = f"Admin điều chỉnh: {reason}"
        if admin_user:
            description += f" (bởi {admin_user.email or admin_user.username})"

        tx_type = WalletTransaction.TransactionType.ADMIN_ADJUST
        if amount < 0:
            return self.debit(user, -amount, tx_type, description=description)
        return self.credit(user, amount, tx_type, description=description)

    def add_mock_balance(self, user):
        """
        Nạp 1000 vé thử nghiệm. Chỉ dùng cho dev/test,
        bật bằng settings.WALLET_MOCK_DEPOSIT_ENABLED.
        """
        if not getattr(settings, 'WALLET_MOCK_DEPOSIT_ENABLED', settings.DEBUG):
            raise MockDepositDisabledError()
        return self.credit(
            user,
            MOCK_DEPOSIT_AMOUNT,
            WalletTransaction.TransactionType.DEPOSIT,
            description="Mock Deposit",
        )
