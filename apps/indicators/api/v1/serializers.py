"""
Serializers for the indicators bounded context.
Validates query parameters and shapes DTOs for the API.
"""

from rest_framework import serializers

from apps.indicators.domain.models import IndicatorCode


class DateQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False, input_formats=["%Y-%m-%d"])


class ConversionQuerySerializer(DateQuerySerializer):
    indicator = serializers.CharField()
    amount = serializers.DecimalField(max_digits=20, decimal_places=6)

    def validate_indicator(self, value: str) -> IndicatorCode:
        try:
            code = IndicatorCode.from_name(value)
        except ValueError as e:
            raise serializers.ValidationError(str(e))

        if code is IndicatorCode.IPC:
            raise serializers.ValidationError("IPC cannot be converted to pesos")

        return code

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be positive")
        return value


class IndicatorSerializer(serializers.Serializer):
    name = serializers.CharField(source="path")
    code = serializers.IntegerField(source="value")
    daily = serializers.BooleanField(source="is_daily")


class IndicatorValueSerializer(serializers.Serializer):
    indicator = serializers.CharField()
    date = serializers.DateField(source="query_date")
    value = serializers.FloatField()


class InstitutionProfileSerializer(serializers.Serializer):
    institution_code = serializers.CharField()
    date = serializers.DateField(source="query_date")
    profile = serializers.DictField()


class ConversionResultSerializer(serializers.Serializer):
    indicator = serializers.CharField()
    amount = serializers.DecimalField(max_digits=20, decimal_places=6)
    rate = serializers.DecimalField(max_digits=20, decimal_places=6)
    converted_amount = serializers.DecimalField(max_digits=24, decimal_places=2)
    date = serializers.DateField(source="query_date")
