"""
API Views cho novels app: đặt giá chương premium (studio) và cron đăng chương.
"""

import hmac
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .exceptions import (
    ChapterNotFoundError,
    NovelNotFoundError,
    PermissionDeniedError,
    PremiumError,
)
from .publishing import publish_scheduled_chapters
from .serializers import NovelDiscountSerializer, PricingInfoSerializer, SetPremiumSerializer

logger = logging.getLogger(__name__)


def _error_response(exc):
    if isinstance(exc, PermissionDeniedError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, (ChapterNotFoundError, NovelNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(exc)}, status=code)


class ChapterPricingView(APIView):
    """
    GET /api/novels/chapters/<id>/pricing/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, chapter_id):
        try:
            info = services.get_chapter_pricing_info(chapter_id)
        except PremiumError as e:
            return _error_response(e)
        return Response(PricingInfoSerializer(info).data)


class ChapterPremiumView(APIView):
    """
    POST   /api/novels/chapters/<id>/premium/   {"price": 150}  -> đặt premium
    DELETE /api/novels/chapters/<id>/premium/                   -> bỏ premium
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, chapter_id):
        serializer = SetPremiumSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': 'Giá không hợp lệ'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            chapter = services.set_chapter_premium(request.user, chapter_id, serializer.validated_data['price'])
        except PremiumError as e:
            return _error_response(e)

        return Response({
            'success': 'Đã đặt chương premium',
            'chapter_id': chapter.pk,
            'price': chapter.price,
        })

    def delete(self, request, chapter_id):
        try:
            services.remove_chapter_premium(request.user, chapter_id)
        except PremiumError as e:
            return _error_response(e)
        return Response({'success': 'Đã bỏ premium chương'})


class NovelAutoPriceView(APIView):
    """POST /api/novels/<id>/auto-price/"""
    permission_classes = [IsAuthenticated]

    def post(self, request, novel_id):
        try:
            count = services.auto_calculate_prices(request.user, novel_id)
        except PremiumError as e:
            return _error_response(e)
        return Response({'success': f'Đã cập nhật giá cho {count} chương', 'updated': count})


class NovelDiscountView(APIView):
    """POST /api/novels/<id>/discount/  {"discount_percent": 30}"""
    permission_classes = [IsAuthenticated]

    def post(self, request, novel_id):
        serializer = NovelDiscountSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': 'Giảm giá không hợp lệ'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            discount = services.update_novel_discount(
                request.user, novel_id, serializer.validated_data['discount_percent']
            )
        except PremiumError as e:
            return _error_response(e)
        return Response({'success': f'Đã đặt giảm giá {discount}%', 'discount_percent': discount})


class CronPublishView(APIView):
    """
    GET/POST /api/cron/publish/

    Nếu settings.CRON_SECRET được cấu hình thì bắt buộc header
    Authorization: Bearer <CRON_SECRET>
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def _authorized(self, request):
        secret = getattr(settings, 'CRON_SECRET', '')
        if not secret:
            return True
        header = request.headers.get('Authorization', '')
        return hmac.compare_digest(header, f'Bearer {secret}')

    def get(self, request):
        if not self._authorized(request):
            return Response({'error': 'Unauthorized'}, status=status.HTTP_401_UNAUTHORIZED)

        report = publish_scheduled_chapters()
        return Response(report.as_dict())

    def post(self, request):
        return self.get(request)
