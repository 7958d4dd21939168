from django.conf import settings
from django.db import models


class Notification(models.Model):
    """
    Thông báo gửi tới user (chương mới, hệ thống, ...).
    """

    class Type(models.TextChoices):
        NEW_CHAPTER = 'NEW_CHAPTER', 'Chương mới'
        SYSTEM = 'SYSTEM', 'Hệ thống'
        TICKET_UPDATE = 'TICKET_UPDATE', 'Cập nhật yêu cầu hỗ trợ'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    # Người gây ra thông báo (null = hệ thống)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    type = models.CharField(max_length=30, choices=Type.choices, db_index=True)

    # Đường dẫn/ID của tài nguyên liên quan, vd: "/truyen/<novel>/<chapter>"
    resource_id = models.CharField(max_length=255, blank=True)
    resource_type = models.CharField(max_length=50, blank=True)

    message = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Thông báo"
        verbose_name_plural = "Thông báo"
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notif_user_read_idx'),
            models.Index(fields=['user', '-created_at'], name='notif_user_created_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.get_type_display()}"
