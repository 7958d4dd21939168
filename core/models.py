from django.conf import settings
from django.db import models


class Profile(models.Model):
    """
    Thông tin mở rộng của user: vai trò và trạng thái bị cấm.
    Tạo lazy qua Profile.for_user().
    """

    class Role(models.TextChoices):
        READER = 'READER', 'Độc giả'
        TRANSLATOR = 'TRANSLATOR', 'Dịch giả'
        MODERATOR = 'MODERATOR', 'Điều hành viên'
        ADMIN = 'ADMIN', 'Quản trị viên'

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile'
    )
    nickname = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.READER, db_index=True)

    is_banned = models.BooleanField(default=False)
    ban_reason = models.TextField(blank=True)
    banned_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Hồ sơ"
        verbose_name_plural = "Hồ sơ"

    def __str__(self):
        return f"{self.user} ({self.get_role_display()})"

    @classmethod
    def for_user(cls, user):
        profile, _ = cls.objects.get_or_create(user=user)
        return profile

    @property
    def is_staff_role(self):
        return self.role in (self.Role.MODERATOR, self.Role.ADMIN)


def is_staff_role(user):
    """ADMIN / MODERATOR (hoặc superuser) được quản lý mọi truyện."""
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    # Chỉ đọc, không tạo Profile cho user chưa có
    return Profile.objects.filter(
        user=user,
        role__in=(Profile.Role.MODERATOR, Profile.Role.ADMIN),
    ).exists()
