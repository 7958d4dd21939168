"""
API Views cho wallet app.
Sử dụng Django Rest Framework.
"""

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.pagination import PageNumberPagination

from .exceptions import MockDepositDisabledError
from .services import WalletLedger
from .serializers import (
    WalletBalanceSerializer,
    WalletTransactionSerializer,
    PurchaseHistorySerializer,
)
from .unlock import (
    UnlockOutcome,
    add_mock_balance,
    get_purchase_history,
    get_wallet_balance,
    has_user_purchased_chapter,
    unlock_chapter,
)

UNLOCK_STATUS_CODES = {
    UnlockOutcome.UNLOCKED: status.HTTP_200_OK,
    UnlockOutcome.ALREADY_UNLOCKED: status.HTTP_200_OK,
    UnlockOutcome.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    UnlockOutcome.CHAPTER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    UnlockOutcome.NOT_PREMIUM: status.HTTP_400_BAD_REQUEST,
    UnlockOutcome.INSUFFICIENT_FUNDS: status.HTTP_400_BAD_REQUEST,
    UnlockOutcome.INTERNAL_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


class WalletBalanceView(APIView):
    """
    GET /api/wallet/balance/

    Trả về số vé hiện có của user.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = WalletBalanceSerializer({'balance': get_wallet_balance(request.user)})
        return Response(serializer.data)


class TransactionPagination(PageNumberPagination):
    """Pagination cho transaction list."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class TransactionHistoryView(APIView):
    """
    GET /api/wallet/transactions/

    Lấy lịch sử giao dịch (phân trang).

    Query params:
    - page: Trang số (default: 1)
    - page_size: Số items mỗi trang (default: 20, max: 100)
    - type: Filter theo loại giao dịch (optional)
    """
    permission_classes = [IsAuthenticated]
    pagination_class = TransactionPagination

    def get(self, request):
        queryset = WalletLedger().transactions_queryset(
            request.user,
            transaction_type=request.query_params.get('type'),
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(queryset, request)

        if page is not None:
            serializer = WalletTransactionSerializer(page, many=True)
            return paginator.get_paginated_response(serializer.data)

        serializer = WalletTransactionSerializer(queryset, many=True)
        return Response(serializer.data)


class PurchaseHistoryView(APIView):
    """
    GET /api/wallet/purchases/

    50 chương đã mở khóa gần nhất, mới nhất trước.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        purchases = get_purchase_history(request.user)
        serializer = PurchaseHistorySerializer(purchases, many=True)
        return Response(serializer.data)


class ChapterPurchasedView(APIView):
    """
    GET /api/wallet/chapters/<id>/purchased/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, chapter_id):
        return Response({
            'chapter_id': chapter_id,
            'purchased': has_user_purchased_chapter(request.user, chapter_id),
        })


class UnlockChapterView(APIView):
    """
    POST /api/wallet/chapters/<id>/unlock/

    Giá chương luôn đọc từ DB, body của request bị bỏ qua.

    Success Response (200):
    {
        "success": "Đã mở khóa chương \"Chương 1\""
    }

    Error Response (400):
    {
        "error": "Không đủ vé. Cần 150 vé, hiện có 100 vé",
        "code": "INSUFFICIENT_FUNDS"
    }
    """
    # Orchestrator tự trả UNAUTHENTICATED (401)
    permission_classes = [AllowAny]

    def post(self, request, chapter_id):
        result = unlock_chapter(request.user, chapter_id)
        return Response(result.to_payload(), status=UNLOCK_STATUS_CODES[result.outcome])


class MockDepositView(APIView):
    """
    POST /api/wallet/mock-deposit/

    Chỉ dùng cho dev/test. Trả về 404 khi WALLET_MOCK_DEPOSIT_ENABLED=False.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        try:
            entry = add_mock_balance(request.user)
        except MockDepositDisabledError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({
            'success': True,
            'amount': entry.amount,
            'new_balance': entry.new_balance,
        })
