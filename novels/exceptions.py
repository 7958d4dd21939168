"""
Exceptions cho các thao tác đặt giá chương (premium).
"""


class PremiumError(Exception):
    """Base exception cho premium management"""
    pass


class PermissionDeniedError(PremiumError):
    def __init__(self):
        super().__init__("Không có quyền thực hiện")


class ChapterNotFoundError(PremiumError):
    def __init__(self):
        super().__init__("Không tìm thấy chương")


class NovelNotFoundError(PremiumError):
    def __init__(self):
        super().__init__("Không tìm thấy truyện")


class PremiumNotAllowedError(PremiumError):
    """Chương/truyện chưa đủ điều kiện, hoặc truyện không được phép có chương trả phí."""
    pass


class PriceOutOfRangeError(PremiumError):
    def __init__(self, min_price, max_price):
        self.min_price = min_price
        self.max_price = max_price
        super().__init__(f"Giá phải trong khoảng {min_price} - {max_price} vé")
