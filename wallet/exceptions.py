"""
Custom exceptions cho wallet app.
"""


class WalletException(Exception):
    """Base exception cho wallet"""
    pass


class InvalidAmountError(WalletException):
    """Số vé cộng/trừ phải là số nguyên dương."""
    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Số vé không hợp lệ: {amount!r}")


class InsufficientTicketsError(WalletException):
    """
    Không đủ vé để thực hiện giao dịch.
    Raise khi user cố trừ nhiều hơn số dư hiện có.
    """
    def __init__(self, current_balance, required_amount):
        self.current_balance = current_balance
        self.required_amount = required_amount
        super().__init__(
            f"Không đủ vé. Cần {required_amount} vé, hiện có {current_balance} vé"
        )


class PurchaseAlreadyExistsError(WalletException):
    """
    User đã mua chương này rồi (vi phạm unique user/chapter).
    """
    def __init__(self, user_id, chapter_id):
        self.user_id = user_id
        self.chapter_id = chapter_id
        super().__init__("Bạn đã mở khóa chương này rồi")


class MockDepositDisabledError(WalletException):
    def __init__(self):
        super().__init__("Nạp vé thử nghiệm đã bị tắt.")
