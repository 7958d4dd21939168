"""
DRF Serializers cho novels app.
"""

from rest_framework import serializers


class SetPremiumSerializer(serializers.Serializer):
    price = serializers.IntegerField(min_value=1)


class NovelDiscountSerializer(serializers.Serializer):
    discount_percent = serializers.FloatField()


class PriceRangeSerializer(serializers.Serializer):
    min = serializers.IntegerField()
    suggested = serializers.IntegerField()
    max = serializers.IntegerField()


class PricingInfoSerializer(serializers.Serializer):
    """
    Serializer cho response GET /api/novels/chapters/<id>/pricing/.
    """
    chapter = serializers.DictField()
    novel = serializers.DictField()
    pricing = serializers.SerializerMethodField()

    def get_pricing(self, obj):
        pricing = obj['pricing']
        return {
            'can_be_premium': pricing['can_be_premium'],
            'suggested_range': PriceRangeSerializer(pricing['suggested_range']).data,
            'min_words_for_premium': pricing['min_words_for_premium'],
        }
