from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory, TestCase

from common.context_processors import sidebar_data
from core.models import Profile, is_staff_role
from novels.tests.factories import make_user
from wallet.services import WalletLedger


class ProfileTests(TestCase):

    def test_profile_created_lazily(self):
        user = make_user()
        self.assertFalse(Profile.objects.filter(user=user).exists())

        profile = Profile.for_user(user)

        self.assertEqual(profile.role, Profile.Role.READER)
        self.assertEqual(Profile.for_user(user).pk, profile.pk)

    def test_is_staff_role(self):
        reader = make_user()
        moderator = make_user()
        Profile.objects.create(user=moderator, role=Profile.Role.MODERATOR)
        superuser = make_user(is_superuser=True)

        self.assertFalse(is_staff_role(reader))
        self.assertTrue(is_staff_role(moderator))
        self.assertTrue(is_staff_role(superuser))
        self.assertFalse(is_staff_role(AnonymousUser()))
        self.assertFalse(is_staff_role(None))

    def test_is_staff_role_does_not_create_profile(self):
        reader = make_user()

        self.assertFalse(is_staff_role(reader))
        self.assertFalse(Profile.objects.filter(user=reader).exists())

    def test_translator_is_not_staff(self):
        translator = make_user()
        Profile.objects.create(user=translator, role=Profile.Role.TRANSLATOR)

        self.assertFalse(is_staff_role(translator))


class HealthTests(TestCase):

    def test_health(self):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "database": True})


class SidebarContextTests(TestCase):

    def test_anonymous(self):
        request = RequestFactory().get('/')
        request.user = AnonymousUser()

        self.assertEqual(sidebar_data(request), {'user_tickets': 0, 'unread_notifications': 0})

    def test_authenticated(self):
        user = make_user()
        WalletLedger().credit(user, 250)
        request = RequestFactory().get('/')
        request.user = user

        self.assertEqual(sidebar_data(request)['user_tickets'], 250)
