from rest_framework import serializers

from clinic.models import AdherenceRecord, PatientProtocolItem


class AdherenceRecordSerializer(serializers.ModelSerializer):
    patientProtocolItemId = serializers.PrimaryKeyRelatedField(
        queryset=PatientProtocolItem.objects.all(),
        source='patient_protocol_item',
        pk_field=serializers.UUIDField(),
    )
    recordedAt = serializers.DateTimeField(source='recorded_at', read_only=True)

    class Meta:
        model = AdherenceRecord
        fields = ['id', 'patientProtocolItemId', 'date', 'status', 'notes', 'recordedAt']
        read_only_fields = ['id']
        # duplicate (item, date) posts are upserted by the service layer; updates are checked in validate()
        validators = []

    def validate(self, attrs):
        if self.instance is not None:
            item = attrs.get('patient_protocol_item', self.instance.patient_protocol_item)
            day = attrs.get('date', self.instance.date)
            clash = AdherenceRecord.objects.filter(patient_protocol_item=item, date=day).exclude(pk=self.instance.pk)
            if clash.exists():
                raise serializers.ValidationError(
                    {'date': ['This item already has an adherence record for that date']}
                )
        return attrs


class AdherenceRangeQuerySerializer(serializers.Serializer):
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)

    def validate(self, attrs):
        start, end = attrs.get('startDate'), attrs.get('endDate')
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': ['End date cannot precede start date']})
        return attrs


class AdherenceSearchQuerySerializer(AdherenceRangeQuerySerializer):
    date = serializers.DateField(required=False)
    patientProtocolId = serializers.UUIDField(required=False)
    patientId = serializers.UUIDField(required=False)


class AdherenceStatsQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(required=False, default=30, min_value=0, max_value=3650)
