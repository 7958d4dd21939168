from django.urls import path

from . import views

app_name = 'novels'

urlpatterns = [
    # GET - Thông tin giá + khoảng giá gợi ý
    path('chapters/<int:chapter_id>/pricing/', views.ChapterPricingView.as_view(), name='chapter-pricing'),

    # POST - Đặt premium / DELETE - Bỏ premium
    path('chapters/<int:chapter_id>/premium/', views.ChapterPremiumView.as_view(), name='chapter-premium'),

    # POST - Tính lại giá tất cả chương premium
    path('<int:novel_id>/auto-price/', views.NovelAutoPriceView.as_view(), name='auto-price'),

    # POST - Đặt giảm giá truyện đã hoàn thành
    path('<int:novel_id>/discount/', views.NovelDiscountView.as_view(), name='discount'),
]
