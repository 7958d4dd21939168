"""
Đăng các chương đã lên lịch (is_draft=True, publish_at <= now).

Được gọi bởi cron:
- python manage.py publish_scheduled_chapters
- GET/POST /api/cron/publish/ (Bearer CRON_SECRET)
"""

import logging
from dataclasses import dataclass, field

from django.db import DatabaseError, transaction
from django.utils import timezone

from notifications.models import Notification
from notifications.services import create_notification

from .cache import revalidate_chapter
from .models import Chapter, Library

logger = logging.getLogger(__name__)


@dataclass
class PublishReport:
    published: int = 0
    chapter_ids: list = field(default_factory=list)
    failed_ids: list = field(default_factory=list)
    notified: int = 0

    def as_dict(self):
        return {
            'success': True,
            'published': self.published,
            'chapter_ids': self.chapter_ids,
            'failed_ids': self.failed_ids,
            'notified': self.notified,
        }


def _publish_one(chapter, now):
    """
    Đăng 1 chương. Trả về False nếu chương đã được worker khác đăng trước.
    """
    with transaction.atomic():
        updated = Chapter.objects.filter(
            pk=chapter.pk,
            is_draft=True,
            publish_at__lte=now,
        ).update(is_draft=False, publish_at=None)
    return updated > 0


def _notify_followers(chapter):
    novel = chapter.volume.novel
    message = (
        f"Truyện bạn thích vừa cập nhật chương "
        f"[{novel.title} - {chapter.title}] mới toanh luôn nè"
    )
    sent = 0
    followers = Library.objects.filter(novel=novel).select_related('user')
    for entry in followers.iterator():
        notification = create_notification(
            user=entry.user,
            type=Notification.Type.NEW_CHAPTER,
            resource_id=f"/truyen/{novel.slug}/{chapter.slug}",
            resource_type="chapter",
            message=message,
        )
        if notification is not None:
            sent += 1
    return sent


def publish_scheduled_chapters(now=None):
    """
    Returns:
        PublishReport
    """
    now = now or timezone.now()
    report = PublishReport()

    due = (
        Chapter.objects.filter(is_draft=True, publish_at__isnull=False, publish_at__lte=now)
        .select_related('volume__novel')
        .order_by('publish_at', 'pk')
    )

    for chapter in due:
        try:
            if not _publish_one(chapter, now):
                continue
        except DatabaseError:
            logger.exception("[Cron] Error publishing chapter %s", chapter.pk)
            report.failed_ids.append(chapter.pk)
            continue

        report.published += 1
        report.chapter_ids.append(chapter.pk)
        report.notified += _notify_followers(chapter)

        try:
            revalidate_chapter(chapter)
        except Exception:
            logger.warning("[Cron] Revalidate chapter %s failed", chapter.pk, exc_info=True)

    if report.published:
        logger.info(
            "[Cron] Published %s scheduled chapters: %s",
            report.published, ", ".join(str(pk) for pk in report.chapter_ids)
        )
    return report
