"""
URL patterns cho wallet API.
"""

from django.urls import path
from . import views

app_name = 'wallet'

urlpatterns = [
    # GET - Lấy số dư vé
    path('balance/', views.WalletBalanceView.as_view(), name='balance'),

    # GET - Lịch sử giao dịch (paginated)
    path('transactions/', views.TransactionHistoryView.as_view(), name='transactions'),

    # GET - Lịch sử mua chương (tối đa 50)
    path('purchases/', views.PurchaseHistoryView.as_view(), name='purchases'),

    # GET - Đã mua chương chưa
    path('chapters/<int:chapter_id>/purchased/', views.ChapterPurchasedView.as_view(), name='chapter-purchased'),

    # POST - Mở khóa chương
    path('chapters/<int:chapter_id>/unlock/', views.UnlockChapterView.as_view(), name='unlock-chapter'),

    # POST - Nạp vé thử nghiệm (dev only)
    path('mock-deposit/', views.MockDepositView.as_view(), name='mock-deposit'),
]
