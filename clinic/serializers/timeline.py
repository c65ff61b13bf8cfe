from rest_framework import serializers

from clinic.models import Patient, TimelineEntry
from clinic.serializers.patient import clean_text


class TimelineEntrySerializer(serializers.ModelSerializer):
    patientId = serializers.PrimaryKeyRelatedField(
        queryset=Patient.objects.all(), source='patient', pk_field=serializers.UUIDField()
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = TimelineEntry
        fields = ['id', 'patientId', 'type', 'title', 'description', 'date', 'createdAt']
        read_only_fields = ['id']

    def validate_description(self, v):
        return clean_text(v)
