import bleach
from rest_framework import serializers

from clinic.models import Patient


def clean_text(value):
    if value is None:
        return value
    return bleach.clean(value.strip(), tags=[], strip=True)


class PatientSerializer(serializers.ModelSerializer):
    dateOfBirth = serializers.DateField(source='date_of_birth')
    height = serializers.DecimalField(
        max_digits=5, decimal_places=2, required=False, allow_null=True, normalize_output=True
    )
    weight = serializers.DecimalField(
        max_digits=5, decimal_places=2, required=False, allow_null=True, normalize_output=True
    )
    cancerType = serializers.CharField(source='cancer_type', max_length=255)
    cancerStage = serializers.CharField(source='cancer_stage', max_length=64)
    diagnosisDate = serializers.DateField(source='diagnosis_date')
    metastasisLocations = serializers.ListField(
        source='metastasis_locations',
        child=serializers.CharField(max_length=255),
        required=False,
        default=list,
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id', 'name', 'email', 'phone', 'dateOfBirth', 'sex', 'height', 'weight',
            'cancerType', 'cancerStage', 'diagnosisDate', 'metastasisLocations', 'notes', 'createdAt',
        ]
        read_only_fields = ['id']

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v

    def validate_notes(self, v):
        return clean_text(v)

    def validate(self, attrs):
        born = attrs.get('date_of_birth') or getattr(self.instance, 'date_of_birth', None)
        diagnosed = attrs.get('diagnosis_date') or getattr(self.instance, 'diagnosis_date', None)
        if born and diagnosed and diagnosed < born:
            raise serializers.ValidationError({'diagnosisDate': ['Diagnosis date cannot precede date of birth']})
        return attrs


class PatientSearchQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=255)
