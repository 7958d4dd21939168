from django.contrib import admin
from django.utils import timezone

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "nickname", "role", "is_banned", "created_at")
    list_filter = ("role", "is_banned")
    search_fields = ("user__email", "user__username", "nickname")
    readonly_fields = ("banned_at", "created_at", "updated_at")
    actions = ["ban_users", "unban_users"]

    @admin.action(description="Cấm các user đã chọn")
    def ban_users(self, request, queryset):
        queryset.update(is_banned=True, banned_at=timezone.now())

    @admin.action(description="Bỏ cấm các user đã chọn")
    def unban_users(self, request, queryset):
        queryset.update(is_banned=False, banned_at=None, ban_reason="")
