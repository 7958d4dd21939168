from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from novels.admin import NovelResource

from .factories import make_chapter, make_novel


class NovelAdminTests(TestCase):

    def setUp(self):
        self.admin = get_user_model().objects.create_superuser(
            username="root", email="root@example.com", password="TestPassword123!"
        )
        self.client.force_login(self.admin)
        self.novel = make_novel(title="Đấu Phá Thương Khung", author="Thiên Tằm Thổ Đậu")

    def test_export_resource(self):
        dataset = NovelResource().export()

        self.assertEqual(dataset.dict[0]['slug'], "dau-pha-thuong-khung")
        self.assertEqual(dataset.dict[0]['novel_format'], "WN")

    def test_changelist_search(self):
        # Tìm không dấu nhờ search_index
        response = self.client.get(reverse('admin:novels_novel_changelist'), {'q': 'thien tam'})

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Đấu Phá Thương Khung")

    def test_chapter_changelist(self):
        make_chapter(self.novel, words=10)
        response = self.client.get(reverse('admin:novels_chapter_changelist'))
        self.assertEqual(response.status_code, 200)
