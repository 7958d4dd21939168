"""
Django Admin configuration cho wallet app.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import UserWallet, WalletTransaction, UserPurchase


class ReadOnlyAdminMixin:
    """Không cho phép tạo / sửa / xóa từ admin, chỉ xem."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(UserWallet)
class UserWalletAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """
    Admin cho UserWallet.

    Số dư chỉ được đổi qua WalletLedger (vd: WalletLedger.admin_adjust),
    không sửa trực tiếp ở đây để sổ cái luôn khớp.
    """

    list_display = [
        'user',
        'balance_display',
        'created_at',
        'updated_at',
    ]
    search_fields = ['user__email', 'user__username']
    readonly_fields = ['user', 'balance', 'created_at', 'updated_at']

    def balance_display(self, obj):
        """Hiển thị số vé với màu sắc."""
        if obj.balance >= 1000:
            color = 'green'
        elif obj.balance >= 100:
            color = 'blue'
        else:
            color = 'gray'
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, f"{obj.balance:,}"
        )
    balance_display.short_description = 'Số vé'
    balance_display.admin_order_field = 'balance'


@admin.register(WalletTransaction)
class WalletTransactionAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """
    Admin cho WalletTransaction.

    LƯU Ý: Model này là IMMUTABLE nên chỉ view only.
    """

    list_display = [
        'id',
        'wallet',
        'amount_display',
        'balance_after',
        'transaction_type',
        'description_short',
        'created_at',
    ]
    list_filter = ['transaction_type', 'created_at']
    search_fields = ['wallet__user__email', 'wallet__user__username', 'description', 'reference_id']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    readonly_fields = [
        'wallet', 'amount', 'balance_after', 'transaction_type',
        'description', 'reference_id', 'created_at'
    ]

    def amount_display(self, obj):
        """Hiển thị amount với màu sắc (xanh cho +, đỏ cho -)."""
        if obj.amount > 0:
            return format_html(
                '<span style="color: green; font-weight: bold;">+{}</span>',
                f"{obj.amount:,}"
            )
        return format_html(
            '<span style="color: red; font-weight: bold;">{}</span>',
            f"{obj.amount:,}"
        )
    amount_display.short_description = 'Số vé'
    amount_display.admin_order_field = 'amount'

    def description_short(self, obj):
        if len(obj.description) > 50:
            return obj.description[:50] + '...'
        return obj.description
    description_short.short_description = 'Mô tả'


@admin.register(UserPurchase)
class UserPurchaseAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ['id', 'user', 'chapter', 'price', 'created_at']
    search_fields = ['user__email', 'user__username', 'chapter__title']
    date_hierarchy = 'created_at'
    readonly_fields = ['user', 'chapter', 'price', 'created_at']
