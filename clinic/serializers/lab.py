from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from rest_framework import serializers

from clinic.models import LabTest, Patient


class RoundedDecimalField(serializers.DecimalField):
    """Rounds extra fractional digits half up instead of rejecting them."""

    def validate_precision(self, value):
        try:
            value = value.quantize(Decimal(1).scaleb(-self.decimal_places), rounding=ROUND_HALF_UP)
        except InvalidOperation:
            # too many digits to quantize; max_digits reports it
            pass
        return super().validate_precision(value)


def _decimal(source=None, **kwargs):
    if source:
        kwargs['source'] = source
    return RoundedDecimalField(
        max_digits=12, decimal_places=4, rounding=ROUND_HALF_UP,
        required=False, allow_null=True, normalize_output=True, **kwargs
    )


class LabTestSerializer(serializers.ModelSerializer):
    patientId = serializers.PrimaryKeyRelatedField(
        queryset=Patient.objects.all(), source='patient', pk_field=serializers.UUIDField()
    )
    testName = serializers.CharField(source='test_name', max_length=255)
    testDate = serializers.DateField(source='test_date')
    value = _decimal()
    referenceRangeMin = _decimal('reference_range_min')
    referenceRangeMax = _decimal('reference_range_max')
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = LabTest
        fields = [
            'id', 'patientId', 'testName', 'testDate', 'value', 'unit',
            'referenceRangeMin', 'referenceRangeMax', 'status', 'notes', 'createdAt',
        ]
        read_only_fields = ['id']

    def validate(self, attrs):
        low = attrs.get('reference_range_min', getattr(self.instance, 'reference_range_min', None))
        high = attrs.get('reference_range_max', getattr(self.instance, 'reference_range_max', None))
        if low is not None and high is not None and high < low:
            raise serializers.ValidationError(
                {'referenceRangeMax': ['Upper reference bound cannot be below the lower bound']}
            )
        return attrs


class LabListQuerySerializer(serializers.Serializer):
    patientId = serializers.UUIDField(required=False)
