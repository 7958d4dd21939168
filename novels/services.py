"""
Quản lý chương trả phí (premium) cho tác giả / dịch giả.

Pricing Engine (novels.pricing) được dùng Ở ĐÂY, khi tác giả đặt giá,
không dùng lúc độc giả mở khóa.

Quyền: người đăng truyện (uploader) hoặc MODERATOR / ADMIN.
"""

import logging

from django.db import transaction
from django.db.models import Sum

from core.models import is_staff_role

from . import pricing
from .cache import revalidate_chapter, revalidate_novel
from .exceptions import (
    ChapterNotFoundError,
    NovelNotFoundError,
    PermissionDeniedError,
    PremiumNotAllowedError,
    PriceOutOfRangeError,
)
from .models import Chapter, Novel

logger = logging.getLogger(__name__)

MIN_DISCOUNT_PERCENT = 10
MAX_DISCOUNT_PERCENT = 100


def _format_number(value):
    # 50000 -> "50.000"
    return f"{value:,}".replace(",", ".")


def _check_permission(user, novel):
    if not user or not user.is_authenticated:
        raise PermissionDeniedError()
    if novel.uploader_id == user.pk or is_staff_role(user):
        return
    raise PermissionDeniedError()


def _get_chapter(chapter_id):
    chapter = Chapter.objects.select_related('volume__novel').filter(pk=chapter_id).first()
    if chapter is None:
        raise ChapterNotFoundError()
    return chapter


def _get_novel(novel_id):
    novel = Novel.objects.filter(pk=novel_id).first()
    if novel is None:
        raise NovelNotFoundError()
    return novel


def novel_published_word_count(novel):
    total = Chapter.objects.filter(volume__novel=novel, is_draft=False).aggregate(
        total=Sum('word_count')
    )['total']
    return total or 0


def get_chapter_pricing_info(chapter_id):
    """
    Thông tin giá của 1 chương cho màn hình studio.

    Returns:
        dict: {
            'chapter': {...},
            'novel': {... 'discount_percent' chỉ khác 0 khi truyện hoàn thành},
            'pricing': {'can_be_premium', 'suggested_range', 'min_words_for_premium'}
        }
    """
    chapter = _get_chapter(chapter_id)
    novel = chapter.volume.novel
    total_words = novel_published_word_count(novel)

    can_be_premium = (
        pricing.can_have_premium_chapters(total_words)
        and pricing.can_chapter_be_premium(chapter.word_count)
    )

    return {
        'chapter': {
            'id': chapter.pk,
            'title': chapter.title,
            'word_count': chapter.word_count,
            'is_locked': chapter.is_locked,
            'price': chapter.price,
        },
        'novel': {
            'id': novel.pk,
            'title': novel.title,
            'novel_format': novel.novel_format,
            'discount_percent': novel.effective_discount_percent,
            'status': novel.status,
            'total_word_count': total_words,
            'uploader_id': novel.uploader_id,
        },
        'pricing': {
            'can_be_premium': can_be_premium,
            'suggested_range': pricing.get_suggested_price_range(chapter.word_count, novel.novel_format),
            'min_words_for_premium': pricing.MIN_WORDS_FOR_PREMIUM,
        },
    }


def set_chapter_premium(user, chapter_id, price):
    """
    Đặt chương thành premium với giá do tác giả chọn.

    Raises:
        ChapterNotFoundError, PermissionDeniedError,
        PremiumNotAllowedError, PriceOutOfRangeError
    """
    chapter = _get_chapter(chapter_id)
    novel = chapter.volume.novel
    _check_permission(user, novel)

    if novel.is_licensed_drop:
        raise PremiumNotAllowedError("Không thể đặt chương trả phí cho truyện bản quyền đã drop")

    if not pricing.can_chapter_be_premium(chapter.word_count):
        raise PremiumNotAllowedError(
            f"Chương phải có ít nhất {_format_number(pricing.MIN_CHAPTER_WORDS_FOR_PREMIUM)} từ để đặt premium"
        )

    if not pricing.can_have_premium_chapters(novel_published_word_count(novel)):
        raise PremiumNotAllowedError(
            f"Truyện cần tối thiểu {_format_number(pricing.MIN_WORDS_FOR_PREMIUM)} từ để có chương premium"
        )

    suggested = pricing.get_suggested_price_range(chapter.word_count, novel.novel_format)
    if not isinstance(price, int) or price < suggested['min'] or price > suggested['max']:
        raise PriceOutOfRangeError(suggested['min'], suggested['max'])

    Chapter.objects.filter(pk=chapter.pk).update(is_locked=True, price=price)
    chapter.is_locked, chapter.price = True, price

    logger.info("Chapter %s set premium at %s tickets by user %s", chapter.pk, price, user.pk)
    revalidate_chapter(chapter)
    return chapter


def remove_chapter_premium(user, chapter_id):
    chapter = _get_chapter(chapter_id)
    _check_permission(user, chapter.volume.novel)

    Chapter.objects.filter(pk=chapter.pk).update(is_locked=False, price=0)
    chapter.is_locked, chapter.price = False, 0

    logger.info("Chapter %s made free by user %s", chapter.pk, user.pk)
    revalidate_chapter(chapter)
    return chapter


def auto_calculate_prices(user, novel_id):
    """
    Tính lại giá cho tất cả chương premium đã đăng của truyện.

    Returns:
        int: số chương đã cập nhật
    """
    novel = _get_novel(novel_id)
    _check_permission(user, novel)

    discount = novel.effective_discount_percent
    chapters = Chapter.objects.filter(volume__novel=novel, is_draft=False, is_locked=True)

    updated_count = 0
    with transaction.atomic():
        for chapter in chapters.select_for_update():
            new_price = pricing.calculate_chapter_price(chapter.word_count, novel.novel_format, discount)
            Chapter.objects.filter(pk=chapter.pk).update(price=new_price)
            updated_count += 1

    logger.info("Recalculated prices of %s chapters in novel %s", updated_count, novel.pk)
    revalidate_novel(novel)
    return updated_count


def update_novel_discount(user, novel_id, discount_percent):
    """
    Đặt % giảm giá cho truyện đã hoàn thành (kẹp vào khoảng 10-100).

    Returns:
        int: % giảm giá thực tế đã lưu
    """
    novel = _get_novel(novel_id)
    _check_permission(user, novel)

    if novel.status != Novel.Status.COMPLETED:
        raise PremiumNotAllowedError("Chỉ truyện đã hoàn thành mới có thể đặt giảm giá")

    valid_discount = max(MIN_DISCOUNT_PERCENT, min(MAX_DISCOUNT_PERCENT, pricing.round_half_up(discount_percent)))
    Novel.objects.filter(pk=novel.pk).update(discount_percent=valid_discount)

    revalidate_novel(novel)
    return valid_discount
