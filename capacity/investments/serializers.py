"""
Investment dashboard serializers (validation only, data lives in JSON files)
"""
from rest_framework import serializers

from .prioritization import WEIGHT_KEYS

LEVEL_CHOICES = ['Low', 'Medium', 'High', 'Critical']


class EquipmentSerializer(serializers.Serializer):
    id = serializers.JSONField(required=False)
    name = serializers.CharField(max_length=255)
    investment = serializers.FloatField(min_value=0)
    impact_score = serializers.IntegerField(min_value=0, max_value=100)
    complexity = serializers.IntegerField(min_value=0, max_value=100, default=50)
    risk_level = serializers.ChoiceField(choices=LEVEL_CHOICES, default='Medium')
    priority = serializers.ChoiceField(choices=LEVEL_CHOICES, default='Medium')
    gmp_compliance = serializers.IntegerField(min_value=0, max_value=100, default=70)
    revenue_impact = serializers.FloatField(default=0)
    strategic_importance = serializers.ChoiceField(choices=LEVEL_CHOICES, default='Medium')
    roi_timeline = serializers.FloatField(min_value=0, default=4.0)
    category = serializers.CharField(max_length=100, default='General')
    description = serializers.CharField(allow_blank=True, default='')


class WeightsSerializer(serializers.Serializer):
    """Criterion weights for product ranking, each 0..100"""

    def get_fields(self):
        return {
            key: serializers.FloatField(min_value=0, max_value=100, required=False)
            for key in WEIGHT_KEYS
        }


class WeightChangeSerializer(serializers.Serializer):
    weights = WeightsSerializer(required=False)
    changed = serializers.ChoiceField(choices=WEIGHT_KEYS, required=False)
    reset = serializers.BooleanField(default=False)

    def validate(self, attrs):
        if not attrs['reset'] and 'weights' not in attrs:
            raise serializers.ValidationError('weights is required unless reset is true')
        if 'weights' in attrs and 'changed' not in attrs and not attrs['reset']:
            raise serializers.ValidationError({'changed': 'Name the weight that was changed'})
        return attrs


class ImportSerializer(serializers.Serializer):
    file = serializers.FileField()
