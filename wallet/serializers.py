"""
DRF Serializers cho wallet app.
"""

from rest_framework import serializers
from .models import WalletTransaction, UserPurchase


class WalletBalanceSerializer(serializers.Serializer):
    """
    Serializer cho response balance API.
    """
    balance = serializers.IntegerField()


class WalletTransactionSerializer(serializers.ModelSerializer):
    """
    Serializer cho lịch sử giao dịch.
    """
    transaction_type_display = serializers.CharField(
        source='get_transaction_type_display',
        read_only=True
    )

    class Meta:
        model = WalletTransaction
        fields = [
            'id',
            'amount',
            'balance_after',
            'transaction_type',
            'transaction_type_display',
            'description',
            'reference_id',
            'created_at',
        ]
        read_only_fields = fields  # Tất cả đều readonly


class PurchaseHistorySerializer(serializers.ModelSerializer):
    """
    Một dòng lịch sử mua chương: {chapter, novel, price, purchased_at}
    """
    chapter = serializers.SerializerMethodField()
    novel = serializers.SerializerMethodField()
    purchased_at = serializers.DateTimeField(source='created_at')

    class Meta:
        model = UserPurchase
        fields = ['chapter', 'novel', 'price', 'purchased_at']
        read_only_fields = fields

    def get_chapter(self, obj):
        return {
            'id': obj.chapter.pk,
            'title': obj.chapter.title,
            'slug': obj.chapter.slug,
        }

    def get_novel(self, obj):
        novel = obj.chapter.volume.novel
        return {
            'id': novel.pk,
            'title': novel.title,
            'slug': novel.slug,
            'cover_image': novel.cover_image.url if novel.cover_image else None,
        }
