from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from notifications.models import Notification
from novels.models import Chapter, Library
from novels.publishing import publish_scheduled_chapters

from .factories import make_chapter, make_novel, make_user


class PublishScheduledChaptersTests(TestCase):

    def setUp(self):
        self.novel = make_novel(title="Đấu Phá Thương Khung")
        self.follower = make_user("follower")
        Library.objects.create(user=self.follower, novel=self.novel)

        now = timezone.now()
        self.due = make_chapter(
            self.novel, title="Chương 10", is_draft=True, publish_at=now - timedelta(minutes=1)
        )
        self.future = make_chapter(
            self.novel, title="Chương 11", is_draft=True, publish_at=now + timedelta(days=1)
        )
        self.unscheduled = make_chapter(self.novel, title="Chương nháp", is_draft=True)

    def test_publishes_due_chapters_only(self):
        report = publish_scheduled_chapters()

        self.assertEqual(report.published, 1)
        self.assertEqual(report.chapter_ids, [self.due.pk])

        self.due.refresh_from_db()
        self.future.refresh_from_db()
        self.unscheduled.refresh_from_db()
        self.assertFalse(self.due.is_draft)
        self.assertIsNone(self.due.publish_at)
        self.assertTrue(self.future.is_draft)
        self.assertTrue(self.unscheduled.is_draft)

    def test_notifies_followers(self):
        report = publish_scheduled_chapters()

        self.assertEqual(report.notified, 1)
        notification = Notification.objects.get(user=self.follower)
        self.assertEqual(notification.type, Notification.Type.NEW_CHAPTER)
        self.assertEqual(notification.resource_id, "/truyen/dau-pha-thuong-khung/chuong-10")
        self.assertIn("Đấu Phá Thương Khung - Chương 10", notification.message)

    def test_second_run_is_noop(self):
        publish_scheduled_chapters()
        report = publish_scheduled_chapters()

        self.assertEqual(report.published, 0)
        self.assertEqual(Notification.objects.count(), 1)

    def test_explicit_now(self):
        report = publish_scheduled_chapters(now=timezone.now() + timedelta(days=2))

        self.assertEqual(sorted(report.chapter_ids), sorted([self.due.pk, self.future.pk]))

    def test_report_dict(self):
        data = publish_scheduled_chapters().as_dict()

        self.assertTrue(data['success'])
        self.assertEqual(data['published'], 1)
        self.assertEqual(data['failed_ids'], [])


class PublishCommandTests(TestCase):

    def test_no_chapters(self):
        out = StringIO()
        call_command('publish_scheduled_chapters', stdout=out)
        self.assertIn('No chapters to publish', out.getvalue())

    def test_publishes(self):
        make_chapter(is_draft=True, publish_at=timezone.now() - timedelta(hours=1))

        out = StringIO()
        call_command('publish_scheduled_chapters', stdout=out)

        self.assertIn('Published 1 chapters', out.getvalue())
        self.assertFalse(Chapter.objects.filter(is_draft=True).exists())


class CronPublishViewTests(TestCase):

    def setUp(self):
        self.url = reverse('cron-publish')
        make_chapter(is_draft=True, publish_at=timezone.now() - timedelta(hours=1))

    @override_settings(CRON_SECRET='s3cret')
    def test_missing_token(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertTrue(Chapter.objects.filter(is_draft=True).exists())

    @override_settings(CRON_SECRET='s3cret')
    def test_wrong_token(self):
        response = self.client.get(self.url, HTTP_AUTHORIZATION='Bearer nope')
        self.assertEqual(response.status_code, 401)

    @override_settings(CRON_SECRET='s3cret')
    def test_valid_token(self):
        response = self.client.post(self.url, HTTP_AUTHORIZATION='Bearer s3cret')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['published'], 1)

    @override_settings(CRON_SECRET='')
    def test_no_secret_configured(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
