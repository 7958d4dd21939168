from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse

from notifications import services
from notifications.models import Notification
from novels.tests.factories import make_user


def _notify(user, message="Xin chào"):
    return services.create_notification(
        user=user,
        type=Notification.Type.SYSTEM,
        resource_id="",
        resource_type="",
        message=message,
    )


class NotificationServiceTests(TestCase):

    def setUp(self):
        self.user = make_user()

    def test_create(self):
        notification = _notify(self.user)

        self.assertIsNotNone(notification)
        self.assertFalse(notification.is_read)
        self.assertEqual(services.get_unread_count(self.user), 1)

    def test_create_swallows_database_error(self):
        with mock.patch.object(Notification.objects, 'create', side_effect=DatabaseError("down")):
            self.assertIsNone(_notify(self.user))

    def test_pagination(self):
        for i in range(20):
            _notify(self.user, message=f"#{i}")

        first = services.get_notifications(self.user, page=1)
        second = services.get_notifications(self.user, page=2)

        self.assertEqual(first['total'], 20)
        self.assertEqual(len(first['notifications']), 15)
        self.assertTrue(first['has_more'])
        self.assertEqual(first['notifications'][0].message, "#19")
        self.assertEqual(len(second['notifications']), 5)
        self.assertFalse(second['has_more'])

    def test_mark_as_read_only_own(self):
        notification = _notify(self.user)

        self.assertFalse(services.mark_as_read(make_user(), notification.pk))
        self.assertTrue(services.mark_as_read(self.user, notification.pk))
        self.assertEqual(services.get_unread_count(self.user), 0)

    def test_mark_all(self):
        _notify(self.user)
        _notify(self.user)

        self.assertEqual(services.mark_all_as_read(self.user), 2)
        self.assertEqual(services.get_unread_count(self.user), 0)


class NotificationApiTests(TestCase):

    def setUp(self):
        self.user = make_user()
        self.client.force_login(self.user)

    def test_list(self):
        _notify(self.user)

        data = self.client.get(reverse('notifications:list')).json()

        self.assertEqual(data['total'], 1)
        self.assertEqual(data['unread'], 1)
        self.assertFalse(data['has_more'])
        self.assertIsNone(data['notifications'][0]['actor'])

    def test_mark_read(self):
        notification = _notify(self.user)

        response = self.client.post(reverse('notifications:mark-read', args=[notification.pk]))
        self.assertEqual(response.status_code, 200)

        response = self.client.post(reverse('notifications:mark-read', args=[999_999]))
        self.assertEqual(response.status_code, 404)

    def test_mark_all_read(self):
        _notify(self.user)

        response = self.client.post(reverse('notifications:mark-all-read'))

        self.assertEqual(response.json(), {'success': True, 'updated': 1})
