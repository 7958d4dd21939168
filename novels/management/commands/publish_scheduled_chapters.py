"""
Đăng các chương đã đến giờ lên lịch.
Run with: python manage.py publish_scheduled_chapters
(cron mỗi phút)
"""

from django.core.management.base import BaseCommand

from novels.publishing import publish_scheduled_chapters


class Command(BaseCommand):
    help = 'Publish draft chapters whose scheduled time has passed'

    def handle(self, *args, **options):
        report = publish_scheduled_chapters()

        if not report.published and not report.failed_ids:
            self.stdout.write('No chapters to publish')
            return

        self.stdout.write(self.style.SUCCESS(
            f'Published {report.published} chapters, sent {report.notified} notifications'
        ))
        if report.failed_ids:
            self.stdout.write(self.style.ERROR(
                f'Failed: {", ".join(str(pk) for pk in report.failed_ids)}'
            ))
