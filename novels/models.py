"""
Models nội dung: Truyện (Novel), Tập (Volume), Chương (Chapter), Tủ truyện (Library).

Hệ thống ví chỉ đọc các trường price / is_locked của Chapter.
Giá chương do tác giả đặt (xem novels.services), không bao giờ lấy từ client.
"""

from django.conf import settings
from django.db import models

from utils.slug import calculate_word_count, generate_search_index, to_slug


class Novel(models.Model):
    """Một bộ truyện (Web Novel hoặc Light Novel)."""

    class Format(models.TextChoices):
        WN = 'WN', 'Web Novel'
        LN = 'LN', 'Light Novel'

    class Status(models.TextChoices):
        ONGOING = 'ONGOING', 'Đang ra'
        COMPLETED = 'COMPLETED', 'Hoàn thành'
        HIATUS = 'HIATUS', 'Tạm dừng'
        DROPPED = 'DROPPED', 'Ngưng dịch'

    class ApprovalStatus(models.TextChoices):
        PENDING = 'PENDING', 'Chờ duyệt'
        APPROVED = 'APPROVED', 'Đã duyệt'
        REJECTED = 'REJECTED', 'Từ chối'

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    author = models.CharField(max_length=255, blank=True)
    alternative_titles = models.TextField(blank=True)
    description = models.TextField(blank=True)

    # Chuỗi không dấu để tìm kiếm (icontains)
    search_index = models.TextField(blank=True, editable=False)

    cover_image = models.ImageField(upload_to="novels/covers/", blank=True, null=True)

    uploader = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='uploaded_novels'
    )

    novel_format = models.CharField(max_length=2, choices=Format.choices, default=Format.WN)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ONGOING, db_index=True)
    approval_status = models.CharField(
        max_length=20,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING,
        db_index=True
    )

    # Chỉ áp dụng khi truyện đã hoàn thành
    discount_percent = models.PositiveSmallIntegerField(default=0)

    # Truyện bản quyền đã drop thì không được đặt chương trả phí
    is_licensed_drop = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Truyện"
        verbose_name_plural = "Truyện"
        ordering = ['-updated_at']

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = to_slug(self.title)
        self.search_index = generate_search_index(self.title, self.author, self.alternative_titles)
        super().save(*args, **kwargs)

    @property
    def effective_discount_percent(self):
        """Giảm giá chỉ có hiệu lực khi truyện đã hoàn thành."""
        if self.status == self.Status.COMPLETED:
            return self.discount_percent
        return 0


class Volume(models.Model):
    novel = models.ForeignKey(Novel, on_delete=models.CASCADE, related_name='volumes')
    title = models.CharField(max_length=255)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = "Tập"
        verbose_name_plural = "Tập"
        ordering = ['order']

    def __str__(self):
        return f"{self.novel.title} - {self.title}"


class Chapter(models.Model):
    """
    Một chương truyện.

    Chương trả phí khi is_locked=True VÀ price > 0.
    Nếu is_locked=False hoặc price=0 thì chương miễn phí, không bao giờ bị trừ vé.
    """
    volume = models.ForeignKey(Volume, on_delete=models.CASCADE, related_name='chapters')
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, blank=True)
    order = models.PositiveIntegerField(default=0)
    content = models.TextField(blank=True)
    word_count = models.PositiveIntegerField(default=0)

    # Lên lịch đăng: is_draft=True + publish_at trong tương lai
    is_draft = models.BooleanField(default=False, db_index=True)
    publish_at = models.DateTimeField(null=True, blank=True, db_index=True)

    is_locked = models.BooleanField(default=False)
    price = models.PositiveIntegerField(default=0, help_text="Giá mở khóa (vé)")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Chương"
        verbose_name_plural = "Chương"
        ordering = ['volume__order', 'order']
        indexes = [
            models.Index(fields=['is_draft', 'publish_at'], name='chapter_draft_publish_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = to_slug(self.title)
        self.word_count = calculate_word_count(self.content)
        super().save(*args, **kwargs)

    @property
    def is_premium(self):
        return self.is_locked and self.price > 0

    @property
    def novel(self):
        return self.volume.novel


class Library(models.Model):
    """Truyện user đã thêm vào tủ (nhận thông báo khi có chương mới)."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='library')
    novel = models.ForeignKey(Novel, on_delete=models.CASCADE, related_name='followers')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Tủ truyện"
        verbose_name_plural = "Tủ truyện"
        unique_together = ('user', 'novel')

    def __str__(self):
        return f"{self.user} - {self.novel.title}"
