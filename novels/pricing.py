"""
Pricing Engine cho chương trả phí (premium).

Công thức:
- Giá cơ bản: 150 vé / 1000 từ
- Hệ số định dạng: WN x1.0, LN x1.2
- Giảm giá truyện đã hoàn thành: 0-100% (tác giả tự đặt)
- Truyện cần tối thiểu 50.000 từ mới được có chương premium

Tất cả hàm trong module này là pure function (không đụng database).
Giá được tính khi tác giả đặt giá chương, KHÔNG tính lại lúc mở khóa.
"""

import math

BASE_PRICE_PER_1000_WORDS = 150
MIN_WORDS_FOR_APPROVAL = 5_000
MIN_WORDS_FOR_PREMIUM = 50_000
MIN_CHAPTER_WORDS_FOR_PREMIUM = 1_000

FORMAT_MULTIPLIERS = {
    "WN": 1.0,  # Web Novel
    "LN": 1.2,  # Light Novel
}


def round_half_up(value: float) -> int:
    # round() của Python làm tròn kiểu banker (2.5 -> 2), giá phải là 2.5 -> 3
    return int(math.floor(value + 0.5))


def clamp_discount(discount_percent) -> float:
    return max(0, min(100, discount_percent))


def calculate_chapter_price(word_count: int, novel_format: str = "WN", discount_percent: float = 0) -> int:
    """
    Tính giá (vé) cho một chương.

    Args:
        word_count: Số từ của chương
        novel_format: 'WN' hoặc 'LN' (định dạng lạ -> hệ số 1.0)
        discount_percent: % giảm giá, ngoài khoảng [0, 100] sẽ bị kẹp lại

    Returns:
        int: Giá >= 1. Chương premium không bao giờ có giá 0,
        chương miễn phí phải dùng is_locked=False.
    """
    base_price = (word_count / 1000) * BASE_PRICE_PER_1000_WORDS
    multiplier = FORMAT_MULTIPLIERS.get(novel_format, 1.0)
    price_with_format = base_price * multiplier

    discounted = price_with_format * (1 - clamp_discount(discount_percent) / 100)

    return max(1, round_half_up(discounted))


def can_have_premium_chapters(total_word_count: int) -> bool:
    return total_word_count >= MIN_WORDS_FOR_PREMIUM


def can_chapter_be_premium(chapter_word_count: int) -> bool:
    return chapter_word_count >= MIN_CHAPTER_WORDS_FOR_PREMIUM


def get_suggested_price_range(word_count: int, novel_format: str = "WN") -> dict:
    """
    Khoảng giá gợi ý cho tác giả (50% - 150% giá đề xuất).
    Chỉ để hiển thị, set_chapter_premium dùng khoảng này để validate.
    """
    suggested = calculate_chapter_price(word_count, novel_format)
    return {
        "min": max(1, math.floor(suggested * 0.5)),
        "suggested": suggested,
        "max": math.ceil(suggested * 1.5),
    }


def format_price(price: int) -> str:
    if price == 0:
        return "Miễn phí"
    return f"{price} vé"


def calculate_bulk_unlock_cost(chapters) -> int:
    """Tổng giá của nhiều chương (chỉ hiển thị, không có bulk unlock)."""
    return sum(chapter["price"] if isinstance(chapter, dict) else chapter.price for chapter in chapters)


def can_afford_chapters(user_balance: int, chapters) -> bool:
    return user_balance >= calculate_bulk_unlock_cost(chapters)


def get_discount_tier(discount_percent) -> dict:
    if discount_percent >= 50:
        return {"name": "Đại giảm giá", "color": "text-red-400"}
    if discount_percent >= 30:
        return {"name": "Giảm giá lớn", "color": "text-orange-400"}
    if discount_percent >= 10:
        return {"name": "Giảm giá", "color": "text-amber-400"}
    return {"name": "", "color": ""}


def calculate_savings(original_price: int, discounted_price: int) -> int:
    return max(0, original_price - discounted_price)
