from rest_framework import serializers

from clinic.models import (
    Patient,
    PatientProtocol,
    PatientProtocolItem,
    ProtocolItem,
    ProtocolStatus,
    ProtocolTemplate,
)

REGIMEN_ITEM_FIELDS = [
    'name', 'type', 'category', 'priority', 'dosage', 'frequency', 'timing', 'duration',
    'rationale', 'cautions', 'instructions', 'foodRequirement', 'order',
]


def _uuid_ref(queryset, source, **kwargs):
    return serializers.PrimaryKeyRelatedField(
        queryset=queryset, source=source, pk_field=serializers.UUIDField(), **kwargs
    )


class ProtocolTemplateSerializer(serializers.ModelSerializer):
    cancerType = serializers.CharField(
        source='cancer_type', max_length=255, required=False, allow_null=True, allow_blank=True
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = ProtocolTemplate
        fields = ['id', 'name', 'description', 'cancerType', 'createdAt']
        read_only_fields = ['id']


class RegimenItemSerializer(serializers.ModelSerializer):
    """camelCase names for the fields template items and patient items share."""
    foodRequirement = serializers.CharField(
        source='food_requirement', required=False, allow_null=True, allow_blank=True
    )


class ProtocolItemSerializer(RegimenItemSerializer):
    templateId = _uuid_ref(ProtocolTemplate.objects.all(), 'template', required=False, allow_null=True)

    class Meta:
        model = ProtocolItem
        fields = ['id', 'templateId'] + REGIMEN_ITEM_FIELDS
        read_only_fields = ['id']


class PatientProtocolItemSerializer(RegimenItemSerializer):
    patientProtocolId = _uuid_ref(PatientProtocol.objects.all(), 'patient_protocol')
    isActive = serializers.BooleanField(source='is_active', required=False, default=True)

    class Meta:
        model = PatientProtocolItem
        fields = ['id', 'patientProtocolId'] + REGIMEN_ITEM_FIELDS + ['isActive']
        read_only_fields = ['id']


class InlineProtocolItemSerializer(PatientProtocolItemSerializer):
    """An item posted together with its custom protocol (no parent id yet)."""
    patientProtocolId = None

    class Meta(PatientProtocolItemSerializer.Meta):
        fields = ['id'] + REGIMEN_ITEM_FIELDS + ['isActive']


class PatientProtocolSerializer(serializers.ModelSerializer):
    patientId = _uuid_ref(Patient.objects.all(), 'patient')
    templateId = _uuid_ref(ProtocolTemplate.objects.all(), 'template', required=False, allow_null=True)
    startDate = serializers.DateField(source='start_date')
    endDate = serializers.DateField(source='end_date', required=False, allow_null=True)
    assignedAt = serializers.DateTimeField(source='assigned_at', read_only=True)

    class Meta:
        model = PatientProtocol
        fields = ['id', 'patientId', 'templateId', 'name', 'status', 'startDate', 'endDate', 'assignedAt']
        read_only_fields = ['id']

    def validate(self, attrs):
        start = attrs.get('start_date') or getattr(self.instance, 'start_date', None)
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': ['End date cannot precede start date']})
        return attrs


class CustomProtocolSerializer(PatientProtocolSerializer):
    """A full protocol payload with optional inline ``items``."""
    items = InlineProtocolItemSerializer(many=True, required=False)

    class Meta(PatientProtocolSerializer.Meta):
        fields = PatientProtocolSerializer.Meta.fields + ['items']


class TemplateAssignmentSerializer(serializers.Serializer):
    """Assignment of an existing template; everything but the ids has a default."""
    templateId = serializers.UUIDField()
    patientId = _uuid_ref(Patient.objects.all(), 'patient')
    name = serializers.CharField(max_length=255, required=False, allow_blank=False)
    status = serializers.ChoiceField(choices=ProtocolStatus.choices, required=False)
    startDate = serializers.DateField(source='start_date', required=False)
    endDate = serializers.DateField(source='end_date', required=False, allow_null=True)


class PatientProtocolWithItemsSerializer(PatientProtocolSerializer):
    items = PatientProtocolItemSerializer(many=True, read_only=True)

    class Meta(PatientProtocolSerializer.Meta):
        fields = PatientProtocolSerializer.Meta.fields + ['items']
