from django.contrib import admin
from import_export import resources
from import_export.admin import ImportExportModelAdmin

from .models import Chapter, Library, Novel, Volume


# Resource định nghĩa các field sẽ import/export
class NovelResource(resources.ModelResource):
    class Meta:
        model = Novel
        fields = (
            'id',
            'title',
            'slug',
            'author',
            'alternative_titles',
            'novel_format',
            'status',
            'approval_status',
            'discount_percent',
            'is_licensed_drop',
            'created_at',
            'updated_at',
        )


class VolumeInline(admin.TabularInline):
    model = Volume
    extra = 0
    fields = ("order", "title")


@admin.register(Novel)
class NovelAdmin(ImportExportModelAdmin):
    resource_class = NovelResource
    list_display = ("title", "uploader", "novel_format", "status", "approval_status", "discount_percent")
    list_filter = ("novel_format", "status", "approval_status", "is_licensed_drop")
    search_fields = ("title", "author", "search_index")
    readonly_fields = ("search_index", "created_at", "updated_at")
    raw_id_fields = ("uploader",)
    inlines = [VolumeInline]


@admin.register(Volume)
class VolumeAdmin(admin.ModelAdmin):
    list_display = ("title", "novel", "order")
    search_fields = ("title", "novel__title")
    raw_id_fields = ("novel",)


@admin.register(Chapter)
class ChapterAdmin(admin.ModelAdmin):
    list_display = ("title", "volume", "order", "word_count", "is_draft", "publish_at", "is_locked", "price")
    list_filter = ("is_draft", "is_locked")
    search_fields = ("title", "volume__novel__title")
    readonly_fields = ("word_count", "created_at", "updated_at")
    raw_id_fields = ("volume",)


@admin.register(Library)
class LibraryAdmin(admin.ModelAdmin):
    list_display = ("user", "novel", "created_at")
    search_fields = ("user__email", "novel__title")
    raw_id_fields = ("user", "novel")
