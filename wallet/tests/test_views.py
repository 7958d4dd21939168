from django.test import TestCase, override_settings
from django.urls import reverse

from novels.tests.factories import make_chapter, make_user
from wallet.models import UserPurchase
from wallet.services import WalletLedger


class WalletApiTests(TestCase):

    def setUp(self):
        self.user = make_user()
        self.ledger = WalletLedger()
        self.chapter = make_chapter(title="Chương 1", words=1000, price=150)
        self.client.force_login(self.user)

    def test_balance(self):
        response = self.client.get(reverse('wallet:balance'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'balance': 0})

    def test_balance_requires_login(self):
        self.client.logout()
        response = self.client.get(reverse('wallet:balance'))
        self.assertEqual(response.status_code, 403)

    def test_unlock_ignores_client_price(self):
        self.ledger.credit(self.user, 1000)
        url = reverse('wallet:unlock-chapter', args=[self.chapter.pk])

        response = self.client.post(url, {'price': 1}, content_type='application/json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'success': 'Đã mở khóa chương "Chương 1"'})
        self.assertEqual(self.ledger.get_balance(self.user), 850)

        response = self.client.post(url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.ledger.get_balance(self.user), 850)

    def test_unlock_insufficient(self):
        self.ledger.credit(self.user, 100)

        response = self.client.post(reverse('wallet:unlock-chapter', args=[self.chapter.pk]))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'INSUFFICIENT_FUNDS')

    def test_unlock_not_found(self):
        response = self.client.post(reverse('wallet:unlock-chapter', args=[999_999]))
        self.assertEqual(response.status_code, 404)

    def test_unlock_free_chapter(self):
        chapter = make_chapter(price=0)
        response = self.client.post(reverse('wallet:unlock-chapter', args=[chapter.pk]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'NOT_PREMIUM')

    def test_unlock_unauthenticated(self):
        self.client.logout()
        response = self.client.post(reverse('wallet:unlock-chapter', args=[self.chapter.pk]))
        self.assertEqual(response.status_code, 401)

    def test_chapter_purchased(self):
        url = reverse('wallet:chapter-purchased', args=[self.chapter.pk])
        self.assertFalse(self.client.get(url).json()['purchased'])

        UserPurchase.objects.create(user=self.user, chapter=self.chapter, price=150)
        self.assertTrue(self.client.get(url).json()['purchased'])

    def test_transactions_paginated(self):
        for _ in range(3):
            self.ledger.credit(self.user, 10)

        response = self.client.get(reverse('wallet:transactions'), {'page_size': 2})

        data = response.json()
        self.assertEqual(data['count'], 3)
        self.assertEqual(len(data['results']), 2)
        self.assertEqual(data['results'][0]['balance_after'], 30)

    def test_transactions_filtered_by_type(self):
        self.ledger.credit(self.user, 1000)
        self.client.post(reverse('wallet:unlock-chapter', args=[self.chapter.pk]))

        response = self.client.get(reverse('wallet:transactions'), {'type': 'UNLOCK'})

        data = response.json()
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['results'][0]['amount'], -150)
        self.assertEqual(data['results'][0]['reference_id'], f"chapter:{self.chapter.pk}")

    def test_transactions_only_own(self):
        self.ledger.credit(make_user(), 500)
        self.ledger.credit(self.user, 10)

        data = self.client.get(reverse('wallet:transactions')).json()

        self.assertEqual(data['count'], 1)
        self.assertEqual(data['results'][0]['amount'], 10)

    def test_purchase_history(self):
        self.ledger.credit(self.user, 1000)
        self.client.post(reverse('wallet:unlock-chapter', args=[self.chapter.pk]))

        response = self.client.get(reverse('wallet:purchases'))

        data = response.json()
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['chapter']['title'], "Chương 1")
        self.assertEqual(data[0]['price'], 150)
        self.assertIsNone(data[0]['novel']['cover_image'])

    def test_mock_deposit(self):
        response = self.client.post(reverse('wallet:mock-deposit'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['new_balance'], 1000)

    @override_settings(WALLET_MOCK_DEPOSIT_ENABLED=False)
    def test_mock_deposit_disabled(self):
        response = self.client.post(reverse('wallet:mock-deposit'))
        self.assertEqual(response.status_code, 404)
