from django.core.exceptions import ValidationError
from django.test import TestCase

from novels.tests.factories import make_chapter, make_novel, make_user
from wallet.exceptions import PurchaseAlreadyExistsError
from wallet.models import UserPurchase
from wallet.purchases import PURCHASE_HISTORY_LIMIT, PurchaseStore


class PurchaseStoreTests(TestCase):

    def setUp(self):
        self.user = make_user()
        self.chapter = make_chapter(words=1000, price=150)
        self.store = PurchaseStore()

    def test_record_and_check(self):
        self.assertFalse(self.store.has_purchased(self.user, self.chapter.pk))

        purchase = self.store.record_purchase(self.user, self.chapter, 150)

        self.assertEqual(purchase.price, 150)
        self.assertTrue(self.store.has_purchased(self.user, self.chapter.pk))
        self.assertFalse(self.store.has_purchased(make_user(), self.chapter.pk))

    def test_duplicate_purchase(self):
        self.store.record_purchase(self.user, self.chapter, 150)

        with self.assertRaises(PurchaseAlreadyExistsError):
            self.store.record_purchase(self.user, self.chapter, 150)

        self.assertEqual(UserPurchase.objects.count(), 1)

    def test_purchase_cannot_be_deleted(self):
        purchase = self.store.record_purchase(self.user, self.chapter, 150)
        with self.assertRaises(ValidationError):
            purchase.delete()

    def test_history_capped_and_newest_first(self):
        novel = make_novel()
        chapters = [make_chapter(novel, price=10) for _ in range(PURCHASE_HISTORY_LIMIT + 2)]
        for chapter in chapters:
            self.store.record_purchase(self.user, chapter, 10)

        history = self.store.get_purchase_history(self.user)

        self.assertEqual(len(history), PURCHASE_HISTORY_LIMIT)
        self.assertEqual(history[0].chapter_id, chapters[-1].pk)

    def test_history_limit_cannot_exceed_cap(self):
        history = self.store.get_purchase_history(self.user, limit=500)
        self.assertEqual(history, [])
