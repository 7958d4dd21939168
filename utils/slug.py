# utils/slug.py
import re

from django.utils.text import slugify

_HTML_TAGS = re.compile(r"<[^>]*>")


def to_slug(text: str) -> str:
    """
    Tạo slug tiếng Việt (không dấu) cho URL.
    Ví dụ: "Đấu Phá Thương Khung" -> "dau-pha-thuong-khung"
    """
    if not text:
        return ""
    # "đ" không có dạng tách dấu nên slugify sẽ bỏ mất, đổi trước
    text = text.replace("đ", "d").replace("Đ", "D")
    # slugify của Django: bỏ dấu, lowercase, space -> "-", bỏ ký tự thừa
    return slugify(text)


def generate_search_index(title: str, author: str, alternative_titles: str = "") -> str:
    # Giữ khoảng trắng để tìm kiếm bằng icontains
    combined = f"{title} {author} {alternative_titles}"
    return to_slug(combined).replace("-", " ")


def calculate_word_count(content: str) -> int:
    """Đếm số từ trong nội dung HTML của chương."""
    if not content:
        return 0
    text = _HTML_TAGS.sub(" ", content)
    text = text.replace("&nbsp;", " ")
    return len(text.split())


def to_title_case(text: str) -> str:
    if not text:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))
