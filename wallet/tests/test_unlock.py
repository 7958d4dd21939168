from unittest import mock

from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase

from novels.tests.factories import make_chapter, make_user
from wallet.models import UserPurchase, WalletTransaction
from wallet.purchases import PurchaseStore
from wallet.services import WalletLedger
from wallet.unlock import (
    UnlockOrchestrator,
    UnlockOutcome,
    UnlockResult,
    has_user_purchased_chapter,
    unlock_chapter,
)


class UnlockChapterTests(TestCase):

    def setUp(self):
        self.user = make_user()
        self.ledger = WalletLedger()
        self.chapter = make_chapter(title="Chương 1", words=1000, price=150)
        self.orchestrator = UnlockOrchestrator(on_unlocked=None)

    def test_unlock_then_already_unlocked(self):
        self.ledger.credit(self.user, 1000)

        result = self.orchestrator.unlock_chapter(self.user, self.chapter.pk)

        self.assertEqual(result.outcome, UnlockOutcome.UNLOCKED)
        self.assertTrue(result.ok)
        self.assertEqual(result.message, 'Đã mở khóa chương "Chương 1"')
        self.assertEqual(self.ledger.get_balance(self.user), 850)

        purchase = UserPurchase.objects.get(user=self.user, chapter=self.chapter)
        self.assertEqual(purchase.price, 150)

        tx = WalletTransaction.objects.get(transaction_type=WalletTransaction.TransactionType.UNLOCK)
        self.assertEqual(tx.amount, -150)
        self.assertEqual(tx.balance_after, 850)
        self.assertEqual(tx.description, "Chương 1")
        self.assertEqual(tx.reference_id, f"chapter:{self.chapter.pk}")

        again = self.orchestrator.unlock_chapter(self.user, self.chapter.pk)

        self.assertEqual(again.outcome, UnlockOutcome.ALREADY_UNLOCKED)
        self.assertEqual(self.ledger.get_balance(self.user), 850)
        self.assertEqual(UserPurchase.objects.count(), 1)

    def test_insufficient_funds(self):
        self.ledger.credit(self.user, 100)

        result = self.orchestrator.unlock_chapter(self.user, self.chapter.pk)

        self.assertEqual(result.outcome, UnlockOutcome.INSUFFICIENT_FUNDS)
        self.assertIn("150", result.message)
        self.assertIn("100", result.message)
        self.assertEqual((result.required, result.available), (150, 100))
        self.assertEqual(self.ledger.get_balance(self.user), 100)
        self.assertFalse(UserPurchase.objects.exists())

    def test_no_wallet(self):
        result = self.orchestrator.unlock_chapter(self.user, self.chapter.pk)

        self.assertEqual(result.outcome, UnlockOutcome.INSUFFICIENT_FUNDS)
        self.assertEqual(result.available, 0)

    def test_free_chapters_are_not_premium(self):
        self.ledger.credit(self.user, 1000)
        locked_zero = make_chapter(price=0, is_locked=True)
        unlocked_priced = make_chapter(price=100, is_locked=False)

        for chapter in (locked_zero, unlocked_priced):
            with self.subTest(chapter=chapter.pk):
                result = self.orchestrator.unlock_chapter(self.user, chapter.pk)
                self.assertEqual(result.outcome, UnlockOutcome.NOT_PREMIUM)

        self.assertEqual(self.ledger.get_balance(self.user), 1000)
        self.assertFalse(UserPurchase.objects.exists())

    def test_chapter_not_found(self):
        result = self.orchestrator.unlock_chapter(self.user, 999_999)
        self.assertEqual(result.outcome, UnlockOutcome.CHAPTER_NOT_FOUND)

    def test_unauthenticated(self):
        result = self.orchestrator.unlock_chapter(AnonymousUser(), self.chapter.pk)
        self.assertEqual(result.outcome, UnlockOutcome.UNAUTHENTICATED)

        result = self.orchestrator.unlock_chapter(None, self.chapter.pk)
        self.assertEqual(result.outcome, UnlockOutcome.UNAUTHENTICATED)

    def test_price_read_from_database(self):
        self.ledger.credit(self.user, 1000)
        self.chapter.price = 1
        # Giá trong bộ nhớ bị sửa nhưng DB vẫn là 150

        self.orchestrator.unlock_chapter(self.user, self.chapter.pk)

        self.assertEqual(self.ledger.get_balance(self.user), 850)


class FailingPurchaseStore(PurchaseStore):

    def record_purchase(self, user, chapter, price):
        raise DatabaseError("connection lost")


class LatePurchaseStore(PurchaseStore):
    """Lần kiểm tra đầu tiên thấy chưa mua, như khi 2 request đến cùng lúc."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.checks = 0

    def has_purchased(self, user, chapter_id):
        self.checks += 1
        if self.checks == 1:
            return False
        return super().has_purchased(user, chapter_id)


class UnlockAtomicityTests(TestCase):

    def setUp(self):
        self.user = make_user()
        self.ledger = WalletLedger()
        self.ledger.credit(self.user, 1000)
        self.chapter = make_chapter(words=1000, price=150)

    def test_failed_purchase_rolls_back_debit(self):
        orchestrator = UnlockOrchestrator(purchases=FailingPurchaseStore(), on_unlocked=None)

        result = orchestrator.unlock_chapter(self.user, self.chapter.pk)

        self.assertEqual(result.outcome, UnlockOutcome.INTERNAL_ERROR)
        self.assertTrue(result.is_retryable)
        self.assertEqual(self.ledger.get_balance(self.user), 1000)
        self.assertFalse(
            WalletTransaction.objects.filter(transaction_type=WalletTransaction.TransactionType.UNLOCK).exists()
        )

    def test_concurrent_unlock_charges_once(self):
        PurchaseStore().record_purchase(self.user, self.chapter, 150)
        orchestrator = UnlockOrchestrator(purchases=LatePurchaseStore(), on_unlocked=None)

        result = orchestrator.unlock_chapter(self.user, self.chapter.pk)

        self.assertEqual(result.outcome, UnlockOutcome.ALREADY_UNLOCKED)
        self.assertEqual(self.ledger.get_balance(self.user), 1000)
        self.assertEqual(UserPurchase.objects.count(), 1)

    def test_callback_failure_does_not_change_outcome(self):
        callback = mock.Mock(side_effect=RuntimeError("cache down"))
        orchestrator = UnlockOrchestrator(on_unlocked=callback)

        result = orchestrator.unlock_chapter(self.user, self.chapter.pk)

        self.assertEqual(result.outcome, UnlockOutcome.UNLOCKED)
        callback.assert_called_once()
        self.assertEqual(callback.call_args.args[0].pk, self.chapter.pk)


class UnlockResultTests(TestCase):

    def test_payloads(self):
        self.assertEqual(UnlockResult.unlocked("Chương 1").to_payload(), {'success': 'Đã mở khóa chương "Chương 1"'})
        self.assertEqual(
            UnlockResult.insufficient_funds(150, 100).to_payload(),
            {'error': 'Không đủ vé. Cần 150 vé, hiện có 100 vé', 'code': 'INSUFFICIENT_FUNDS'},
        )

    def test_amounts_only_set_for_insufficient_funds(self):
        result = UnlockResult.already_unlocked()
        self.assertIsNone(result.required)
        self.assertIsNone(result.available)

        result = UnlockResult.insufficient_funds(150, 100)
        self.assertEqual((result.required, result.available), (150, 100))

    def test_only_internal_error_is_retryable(self):
        self.assertTrue(UnlockResult.internal_error().is_retryable)
        self.assertFalse(UnlockResult.not_premium().is_retryable)
        self.assertFalse(UnlockResult.already_unlocked().is_retryable)


class ConvenienceFunctionTests(TestCase):

    def test_module_functions(self):
        user = make_user()
        chapter = make_chapter(words=1000, price=150)
        WalletLedger().credit(user, 200)

        self.assertFalse(has_user_purchased_chapter(AnonymousUser(), chapter.pk))
        self.assertFalse(has_user_purchased_chapter(user, chapter.pk))

        result = unlock_chapter(user, chapter.pk)

        self.assertTrue(result.ok)
        self.assertTrue(has_user_purchased_chapter(user, chapter.pk))
