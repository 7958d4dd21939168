"""
Cache trang đọc chương / trang truyện.

Sau khi mở khóa hoặc đổi giá chương thì xóa cache để lần render sau lấy dữ liệu mới.
Best-effort: cache lỗi không ảnh hưởng kết quả nghiệp vụ.
"""

import logging

from django.core.cache import cache

logger = logging.getLogger(__name__)


def chapter_cache_key(chapter_id):
    return f"novels:chapter:{chapter_id}"


def novel_cache_key(novel_slug):
    return f"novels:novel:{novel_slug}"


def revalidate_chapter(chapter):
    keys = [chapter_cache_key(chapter.pk)]
    volume = getattr(chapter, 'volume', None)
    if volume is not None:
        keys.append(novel_cache_key(volume.novel.slug))
    cache.delete_many(keys)
    logger.debug("Revalidated cache keys %s", keys)


def revalidate_novel(novel):
    chapter_ids = list(
        novel.volumes.values_list('chapters__id', flat=True)
    )
    keys = [novel_cache_key(novel.slug)]
    keys.extend(chapter_cache_key(chapter_id) for chapter_id in chapter_ids if chapter_id)
    cache.delete_many(keys)
